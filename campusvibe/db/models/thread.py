"""Topic room model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from campusvibe.core.constants import DEFAULT_THREAD_COLOR, DEFAULT_THREAD_EMOJI
from campusvibe.db.base import Base


class Thread(Base):
    __tablename__ = "threads"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(60), nullable=False)
    description = Column(String(300), nullable=True)
    emoji = Column(String(16), nullable=False, default=DEFAULT_THREAD_EMOJI)
    color_theme = Column(String(32), nullable=False, default=DEFAULT_THREAD_COLOR)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    messages = relationship("Message", back_populates="thread", cascade="all, delete-orphan")
