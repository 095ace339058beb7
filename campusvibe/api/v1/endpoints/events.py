"""Event endpoints: catalogue, geofence, check-in, crowd vibe and RSVP."""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from campusvibe.api.deps import get_db, get_optional_user_id, require_user_id, TIMEZONE
from campusvibe.schemas import (
    CheckinRequest,
    CheckinResponse,
    CheckinStatus,
    EventCreate,
    EventDetail,
    EventResponse,
    GeofenceRequest,
    GeofenceResponse,
    RsvpRequest,
    RsvpResponse,
    VibeResponse,
)
from campusvibe.core.constants import SENTIMENT_EMOJI, EventStatus, Sentiment
from campusvibe.core.rate_limit import limiter, RATE_LIMITS
from campusvibe.core.logging_config import get_logger
from campusvibe.services.checkin import check_in, get_checkin_status
from campusvibe.services.event import create_event, get_event, list_events
from campusvibe.services.geofence import check_event_geofence
from campusvibe.services.rsvp import get_rsvp_status, set_rsvp, toggle_rsvp
from campusvibe.services.vibe import SOURCE_SENTIMENT, VibeAggregate, aggregate_event

logger = get_logger(__name__)
router = APIRouter()


def vibe_payload(vibe: VibeAggregate) -> dict:
    emoji = SENTIMENT_EMOJI[Sentiment(vibe.label)] if vibe.source == SOURCE_SENTIMENT else None
    return {
        "label": vibe.label,
        "source": vibe.source,
        "coarse": vibe.coarse,
        "emoji": emoji,
        "checkin_count": vibe.checkin_count,
        "rsvp_count": vibe.rsvp_count,
        "sentiment_counts": vibe.sentiment_counts,
    }


@router.get("", response_model=List[EventDetail])
@limiter.limit(RATE_LIMITS["vibe"])
async def list_events_endpoint(
    request: Request,
    upcoming: bool = True,
    tag: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """
    Approved events with RSVP/check-in counts and their coarse sentiment.

    Query params:
        upcoming: Hide events that already ended (default true)
        tag: Only events carrying this tag
    """
    return list_events(db, TIMEZONE, upcoming_only=upcoming, tag=tag.lower() if tag else None)


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_LIMITS["submit_event"])
async def submit_event_endpoint(
    request: Request,
    event: EventCreate,
    user_id: str = Depends(require_user_id),
    db: Session = Depends(get_db)
):
    """
    Submit an event for moderation.

    Student submissions start as pending and only appear in the catalogue
    once a moderator approves them.

    Raises:
        HTTPException: 400 if the times or coordinates are inconsistent
    """
    try:
        created = create_event(db, created_by=user_id, status=EventStatus.PENDING, **event.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return EventResponse(event_id=created.id, status=created.status)


@router.get("/{event_id}", response_model=EventDetail)
async def get_event_endpoint(event_id: int, db: Session = Depends(get_db)):
    return get_event(db, event_id, TIMEZONE)


@router.post("/{event_id}/geofence", response_model=GeofenceResponse)
@limiter.limit(RATE_LIMITS["geofence"])
async def geofence_endpoint(
    request: Request,
    event_id: int,
    body: GeofenceRequest,
    user_id: Optional[str] = Depends(get_optional_user_id),
    db: Session = Depends(get_db)
):
    """
    Check whether the device position is inside the event's geofence.

    Accepted and rejected checks both answer 200 with the distance, so the
    client can show "Distance: 65m" or "Too far! (5421m away)". A missing
    venue location, a missing login or a device error answer with the
    standard error body instead.
    """
    result = check_event_geofence(db, event_id, user_id, body.device_position, body.error)
    return GeofenceResponse(
        accepted=result.accepted,
        distance_m=result.distance_m,
        rounded_distance=result.rounded_distance,
        radius_m=result.radius_m,
        message=result.message,
    )


@router.post("/{event_id}/checkins", response_model=CheckinResponse)
@limiter.limit(RATE_LIMITS["check_in"])
async def check_in_endpoint(
    request: Request,
    event_id: int,
    body: CheckinRequest,
    user_id: Optional[str] = Depends(get_optional_user_id),
    db: Session = Depends(get_db)
):
    """
    Check in to an event with a crowd vibe.

    The geofence is verified again on the server. Checking in twice is not
    an error: the second call answers ``already_checked_in`` with the
    sentiment recorded the first time.

    Example:
        Request:
            POST /api/v1/events/7/checkins
            Authorization: Bearer eyJhbGc...
            {"position": {"lat": 33.6425, "lng": 72.9905}, "sentiment": "lit"}

        Response (200):
            {"status": "checked_in", "checkin_id": 12, "sentiment": "lit",
             "checkin_count": 31, "distance_m": 0.0, "message": "Checked in!"}

        Response (403):
            {"success": false, "error": {"code": "too_far", "message": "Too far! (5421m away)"}}
    """
    outcome = check_in(
        db,
        event_id,
        user_id,
        body.device_position,
        body.sentiment,
        message=body.message,
        position_error=body.error,
    )
    return CheckinResponse(
        status=outcome.status,
        checkin_id=outcome.checkin_id,
        sentiment=outcome.sentiment,
        checkin_count=outcome.checkin_count,
        distance_m=outcome.distance_m,
        message="Already checked in" if outcome.already_checked_in else "Checked in!",
    )


@router.get("/{event_id}/checkins/me", response_model=CheckinStatus)
async def my_checkin_endpoint(
    event_id: int,
    user_id: Optional[str] = Depends(get_optional_user_id),
    db: Session = Depends(get_db)
):
    """Whether the current user is checked in; anonymous callers get false."""
    return get_checkin_status(db, event_id, user_id)


@router.get("/{event_id}/vibe", response_model=VibeResponse)
@limiter.limit(RATE_LIMITS["vibe"])
async def event_vibe_endpoint(request: Request, event_id: int, db: Session = Depends(get_db)):
    """Current crowd vibe, recomputed from the stored check-ins."""
    return vibe_payload(aggregate_event(db, event_id))


@router.get("/{event_id}/rsvp", response_model=RsvpResponse)
async def rsvp_status_endpoint(
    event_id: int,
    user_id: Optional[str] = Depends(get_optional_user_id),
    db: Session = Depends(get_db)
):
    return get_rsvp_status(db, event_id, user_id)


@router.post("/{event_id}/rsvp", response_model=RsvpResponse)
@limiter.limit(RATE_LIMITS["rsvp"])
async def rsvp_endpoint(
    request: Request,
    event_id: int,
    body: Optional[RsvpRequest] = None,
    user_id: Optional[str] = Depends(get_optional_user_id),
    db: Session = Depends(get_db)
):
    """Set (``{"going": true|false}``) or toggle (no body) the user's RSVP."""
    if body is None or body.going is None:
        return toggle_rsvp(db, event_id, user_id)
    return set_rsvp(db, event_id, user_id, body.going)
