"""Crowd vibe schemas."""
from typing import Dict, Optional
from pydantic import BaseModel


class VibeResponse(BaseModel):
    label: str
    source: str
    coarse: Optional[str] = None
    emoji: Optional[str] = None
    checkin_count: int
    rsvp_count: int
    sentiment_counts: Dict[str, int]


class Hotspot(BaseModel):
    event_id: int
    title: str
    venue_name: Optional[str] = None
    lat: float
    lng: float
    label: str
    source: str
    coarse: Optional[str] = None
    checkin_count: int
    rsvp_count: int


class VenueSuggestion(BaseModel):
    id: str
    name: str
    lat: float
    lng: float
    category: str
