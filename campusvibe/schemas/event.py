"""Event schemas."""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from campusvibe.core.constants import MAX_EVENT_TITLE_LENGTH, EventStatus
from campusvibe.core.sanitization import sanitize_event_title, sanitize_text, sanitize_venue_name


class EventCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=MAX_EVENT_TITLE_LENGTH)
    description: Optional[str] = Field(None, max_length=5000)
    start_time: datetime
    end_time: Optional[datetime] = None
    venue_name: Optional[str] = None
    venue_lat: Optional[float] = Field(None, ge=-90, le=90)
    venue_lng: Optional[float] = Field(None, ge=-180, le=180)
    tags: List[str] = Field(default_factory=list, max_length=10)
    registration_url: Optional[str] = Field(None, max_length=500)

    @field_validator('title')
    @classmethod
    def sanitize_title_field(cls, v: str) -> str:
        return sanitize_event_title(v)

    @field_validator('venue_name')
    @classmethod
    def sanitize_venue_field(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_venue_name(v)

    @field_validator('description')
    @classmethod
    def sanitize_description_field(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return sanitize_text(v, max_length=5000) or None

    @field_validator('tags')
    @classmethod
    def normalize_tags(cls, v: List[str]) -> List[str]:
        """Lowercase, strip and drop empty or repeated tags."""
        tags = []
        for tag in v:
            cleaned = sanitize_text(tag, max_length=30).lower()
            if cleaned and cleaned not in tags:
                tags.append(cleaned)
        return tags


class EventIngest(EventCreate):
    """Event pushed by an external automation (scraper, society feed)."""
    external_id: Optional[str] = Field(None, max_length=128)
    source: Optional[str] = Field(None, max_length=64)
    is_official: bool = False


class EventResponse(BaseModel):
    event_id: int
    status: EventStatus


class IngestResponse(BaseModel):
    success: bool = True
    event_id: int
    status: EventStatus
    duplicate: bool = False


class EventDetail(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    start_time: str
    end_time: Optional[str] = None
    venue_name: Optional[str] = None
    venue_lat: Optional[float] = None
    venue_lng: Optional[float] = None
    tags: List[str]
    is_official: bool
    registration_url: Optional[str] = None
    status: EventStatus
    rsvp_count: int
    checkin_count: int
    sentiment: Optional[str] = None


class AdminEventDetail(EventDetail):
    created_by: Optional[str] = None
    source: Optional[str] = None


class EventStatusUpdate(BaseModel):
    status: EventStatus


class BulkStatusUpdate(BaseModel):
    event_ids: List[int] = Field(..., min_length=1, max_length=200)
    status: EventStatus


class StatsResponse(BaseModel):
    total_events: int
    pending_events: int
    approved_events: int
    total_rsvps: int
    total_checkins: int
    events_this_week: int
    rsvps_this_week: int
    checkins_this_week: int
