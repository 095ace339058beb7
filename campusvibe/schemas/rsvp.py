"""RSVP schemas."""
from typing import Optional
from pydantic import BaseModel


class RsvpRequest(BaseModel):
    """Desired state; omit ``going`` to toggle."""
    going: Optional[bool] = None


class RsvpResponse(BaseModel):
    event_id: int
    going: bool
    rsvp_count: int
