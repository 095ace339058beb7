"""Geofence and check-in schemas."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from campusvibe.core.constants import MAX_CHECKIN_MESSAGE_LENGTH
from campusvibe.core.sanitization import sanitize_checkin_message
from campusvibe.services.geofence import Position, PositionError
from campusvibe.services.vibe import normalize_sentiment


class PositionIn(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    accuracy: Optional[float] = Field(None, ge=0)
    timestamp: Optional[datetime] = None

    def to_position(self) -> Position:
        return Position(self.lat, self.lng, self.accuracy, self.timestamp)


class GeofenceRequest(BaseModel):
    """Either a position fix or the error the device reported instead."""
    position: Optional[PositionIn] = None
    error: Optional[PositionError] = None

    @model_validator(mode='after')
    def position_or_error(self):
        if self.position is not None and self.error is not None:
            raise ValueError("Send either a position or an error, not both")
        return self

    @property
    def device_position(self) -> Optional[Position]:
        return self.position.to_position() if self.position else None


class GeofenceResponse(BaseModel):
    accepted: bool
    distance_m: float
    rounded_distance: int
    radius_m: float
    message: str


class CheckinRequest(GeofenceRequest):
    sentiment: str = Field(..., min_length=1, max_length=16)
    message: Optional[str] = Field(None, max_length=MAX_CHECKIN_MESSAGE_LENGTH)

    @field_validator('sentiment')
    @classmethod
    def validate_sentiment(cls, v: str) -> str:
        """Accept lit/vibing/chill/meh/dead or pos/neu/neg."""
        return normalize_sentiment(v).value

    @field_validator('message')
    @classmethod
    def sanitize_message_field(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_checkin_message(v)


class CheckinResponse(BaseModel):
    status: str
    checkin_id: int
    sentiment: Optional[str] = None
    checkin_count: int
    distance_m: Optional[float] = None
    message: str


class CheckinStatus(BaseModel):
    event_id: int
    checked_in: bool
    sentiment: Optional[str] = None
    checkin_count: int
