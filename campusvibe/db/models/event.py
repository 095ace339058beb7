"""Event model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Boolean, Column, DateTime, Float, Index, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from campusvibe.core.constants import EventStatus
from campusvibe.core.geo import GeoPoint
from campusvibe.db.base import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=True)
    venue_name = Column(String(120), nullable=True)
    venue_lat = Column(Float, nullable=True)
    venue_lng = Column(Float, nullable=True)
    registration_url = Column(String(500), nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    is_official = Column(Boolean, nullable=False, default=False)
    external_id = Column(String(200), unique=True, nullable=True)
    source = Column(String(50), nullable=True)
    status = Column(String(16), nullable=False, default=EventStatus.PENDING.value)
    created_by = Column(String(64), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    checkins = relationship("Checkin", back_populates="event", cascade="all, delete-orphan")
    rsvps = relationship("Rsvp", back_populates="event", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_events_status_start", "status", "start_time"),
    )

    @property
    def venue(self):
        """Venue coordinate, or None when the event was posted without one."""
        if self.venue_lat is None or self.venue_lng is None:
            return None
        return GeoPoint(self.venue_lat, self.venue_lng)
