"""RSVP model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from campusvibe.core.constants import RsvpStatus
from campusvibe.db.base import Base


class Rsvp(Base):
    __tablename__ = "rsvps"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(64), nullable=False)
    status = Column(String(16), nullable=False, default=RsvpStatus.GOING.value)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    event = relationship("Event", back_populates="rsvps")

    __table_args__ = (
        Index("idx_rsvps_event", "event_id"),
        UniqueConstraint("event_id", "user_id", name="uq_rsvp_event_user"),
    )
