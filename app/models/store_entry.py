"""
Key/value row holding a serialized value of the persistence medium.
The whole snapshot lives in one row; side channels (last backup date)
live in their own rows.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base
from app.models.base import TimestampMixin


class StoreEntry(Base, TimestampMixin):
    """
    Stored value.

    Attributes:
        key: Well-known key (e.g. the snapshot key)
        value: Serialized content, usually JSON
    """

    __tablename__ = "store_entries"

    key: Mapped[str] = mapped_column(
        String(100),
        primary_key=True,
    )
    value: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<StoreEntry(key='{self.key}', size={len(self.value or '')})>"
