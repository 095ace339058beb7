"""Pydantic schemas for request/response validation."""
from campusvibe.schemas.auth import AdminLoginRequest
from campusvibe.schemas.chat import (
    MessageCreate,
    MessageResponse,
    ThreadCreate,
    ThreadResponse,
    ThreadVisibilityUpdate,
    TopicRequestCreate,
    TopicRequestResponse,
)
from campusvibe.schemas.event import (
    AdminEventDetail,
    BulkStatusUpdate,
    EventCreate,
    EventDetail,
    EventIngest,
    EventResponse,
    EventStatusUpdate,
    IngestResponse,
    StatsResponse,
)
from campusvibe.schemas.checkin import (
    CheckinRequest,
    CheckinResponse,
    CheckinStatus,
    GeofenceRequest,
    GeofenceResponse,
    PositionIn,
)
from campusvibe.schemas.vibe import Hotspot, VenueSuggestion, VibeResponse
from campusvibe.schemas.rsvp import RsvpRequest, RsvpResponse
from campusvibe.schemas.tone import ToneRequest, ToneResponse
from campusvibe.schemas.common import SuccessResponse, ErrorResponse, ErrorDetail

__all__ = [
    "AdminLoginRequest",
    "MessageCreate",
    "MessageResponse",
    "ThreadCreate",
    "ThreadResponse",
    "ThreadVisibilityUpdate",
    "TopicRequestCreate",
    "TopicRequestResponse",
    "AdminEventDetail",
    "BulkStatusUpdate",
    "EventCreate",
    "EventDetail",
    "EventIngest",
    "EventResponse",
    "EventStatusUpdate",
    "IngestResponse",
    "StatsResponse",
    "CheckinRequest",
    "CheckinResponse",
    "CheckinStatus",
    "GeofenceRequest",
    "GeofenceResponse",
    "PositionIn",
    "Hotspot",
    "VenueSuggestion",
    "VibeResponse",
    "RsvpRequest",
    "RsvpResponse",
    "ToneRequest",
    "ToneResponse",
    "SuccessResponse",
    "ErrorResponse",
    "ErrorDetail",
]
