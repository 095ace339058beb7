"""Topic room request model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, DateTime, Index, Integer, String, Text

from campusvibe.core.constants import TopicRequestStatus
from campusvibe.db.base import Base


class TopicRequest(Base):
    __tablename__ = "topic_requests"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False)
    topic_title = Column(String(60), nullable=False)
    reason = Column(Text, nullable=True)
    status = Column(String(16), nullable=False, default=TopicRequestStatus.PENDING.value)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    __table_args__ = (
        Index("idx_topic_requests_status", "status"),
    )
