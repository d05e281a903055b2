"""
SQLAlchemy ORM models.

Two tables:
- waste_items: one row per classified upload. image_path points into the
  upload directory and may dangle if the file is removed out-of-band.
- categories: reference data describing each waste type and how to recycle it.
  waste_items.category matches categories.name by convention only (no FK).
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Integer, String, Text

from ..db.sqlalchemy import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class WasteItem(Base):
    """ORM model for a persisted classification record."""
    __tablename__ = "waste_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    image_path = Column(Text)
    classification_result = Column(Text)
    confidence = Column(Float)
    category = Column(Text)
    # Set once on insert; updates never touch it.
    timestamp = Column(DateTime, nullable=False, default=_utcnow)


class Category(Base):
    """ORM model for a waste category."""
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), unique=True, nullable=False)
    description = Column(Text)
    recycling_guidelines = Column(Text)
