from sqlalchemy import Column, Integer, String, DateTime, Text
from datetime import datetime, timezone

from pricecompare.data.database import Base


class DocumentModel(Base):
    """One JSON-serialised collection (a session cart or the order history)."""

    __tablename__ = "documents"

    key = Column(String(255), primary_key=True)
    schema_version = Column(Integer, nullable=False)
    payload = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
