"""
Base class for records held in the snapshot.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Record(BaseModel):
    """
    Snapshot record.

    Fields are snake_case in Python and camelCase in the persisted JSON,
    so backups from earlier versions of the shop software still load.
    Unknown keys are dropped.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_json_dict(self) -> dict:
        """Exchange-format representation (camelCase, JSON types)."""
        return self.model_dump(mode="json", by_alias=True)
