"""
Base schema configuration and common schemas.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


class PaginationParams(BaseSchema):
    """Pagination parameters."""

    page: int = 1
    per_page: int = 20

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @staticmethod
    def pages_for(total: int, per_page: int) -> int:
        return (total + per_page - 1) // per_page if per_page > 0 else 0


class MessageResponse(BaseSchema):
    """Simple message response."""

    message: str
    success: bool = True


class RemovalResponse(MessageResponse):
    """Deletion result with cascaded counts."""

    removed_clients: int = 0
    removed_devices: int = 0
    removed_repairs: int = 0
    removed_expenses: int = 0

    @classmethod
    def from_removal(cls, message: str, removal) -> "RemovalResponse":
        return cls(
            message=message,
            removed_clients=removal.clients,
            removed_devices=removal.devices,
            removed_repairs=removal.repairs,
            removed_expenses=removal.expenses,
        )
