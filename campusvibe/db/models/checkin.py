"""Checkin model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from campusvibe.db.base import Base


class Checkin(Base):
    __tablename__ = "checkins"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(64), nullable=False)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)
    sentiment = Column(String(16), nullable=True)  # campusvibe.core.constants.Sentiment value
    message = Column(String(280), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    event = relationship("Event", back_populates="checkins")

    __table_args__ = (
        Index("idx_checkins_event", "event_id"),
        UniqueConstraint("event_id", "user_id", name="uq_checkin_event_user"),
    )
