"""
StorageSlot Entity

Durable key-value slot holding an opaque text blob.
"""

from datetime import datetime, UTC

from sqlalchemy import Text
from sqlmodel import Column, DateTime, Field, SQLModel


class StorageSlot(SQLModel, table=True):
    """
    StorageSlot entity - one named blob of persisted state.

    Business Rules:
    - One row per key, overwritten on every write
    - Content is opaque to the storage layer (obfuscated text)
    """

    __tablename__ = "storage_slots"

    key: str = Field(primary_key=True, max_length=128)
    value: str = Field(sa_column=Column(Text, nullable=False))

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), sa_column=Column(DateTime)
    )
