"""
Key-value row backing the record store
"""
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime
from journal.database import Base


class StoredValue(Base):
    """One opaque value per key, e.g. dayData_2024-03-01 -> serialized DayRecord"""
    __tablename__ = "key_value_store"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
