"""Database models for headit using SQLAlchemy."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import declarative_base


def _utc_now() -> datetime:
    return datetime.now(UTC)


Base = declarative_base()


class StorageItem(Base):
    """One key of the local key/value storage (rules, endpoint, flags)."""

    __tablename__ = "storage_items"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False, default="")
    updated_at = Column(DateTime(timezone=True), default=_utc_now, onupdate=_utc_now)
