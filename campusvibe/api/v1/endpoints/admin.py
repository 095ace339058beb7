"""Admin endpoints for event and topic room moderation."""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Request, status as http_status
from sqlalchemy.orm import Session

from campusvibe.api.deps import get_db, verify_admin_token, TIMEZONE
from campusvibe.schemas import (
    AdminEventDetail,
    BulkStatusUpdate,
    EventStatusUpdate,
    StatsResponse,
    SuccessResponse,
    ThreadCreate,
    ThreadResponse,
    ThreadVisibilityUpdate,
    TopicRequestResponse,
)
from campusvibe.core.constants import EventStatus, TopicRequestStatus
from campusvibe.core.rate_limit import limiter, RATE_LIMITS
from campusvibe.services.chat import (
    TopicRequestDecided,
    approve_topic_request,
    create_thread,
    delete_message,
    list_threads,
    list_topic_requests,
    reject_topic_request,
    serialize_thread,
    set_thread_active,
)
from campusvibe.services.event import delete_event, get_stats, list_events_for_moderation, set_event_status

router = APIRouter(dependencies=[Depends(verify_admin_token)])


@router.get("/events", response_model=List[AdminEventDetail])
@limiter.limit(RATE_LIMITS["admin_read"])
async def list_events_endpoint(
    request: Request,
    status: Optional[EventStatus] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """
    All events for the moderation queue, newest first.

    Query params:
        status: pending, approved or rejected
        search: Case-insensitive title filter
    """
    return list_events_for_moderation(db, TIMEZONE, status=status, search=search)


@router.post("/events/{event_id}/status", response_model=SuccessResponse)
@limiter.limit(RATE_LIMITS["admin_write"])
async def set_status_endpoint(
    request: Request,
    event_id: int,
    update: EventStatusUpdate,
    db: Session = Depends(get_db)
):
    """Approve, reject or re-queue a single event."""
    try:
        set_event_status(db, [event_id], update.status)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return SuccessResponse(message=f"Event {update.status.value}")


@router.post("/events/status", response_model=SuccessResponse)
@limiter.limit(RATE_LIMITS["admin_write"])
async def bulk_status_endpoint(
    request: Request,
    update: BulkStatusUpdate,
    db: Session = Depends(get_db)
):
    """Apply one status to several events; unknown ids are skipped."""
    try:
        updated = set_event_status(db, update.event_ids, update.status)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return SuccessResponse(message=f"{updated} event(s) {update.status.value}")


@router.delete("/events/{event_id}", response_model=SuccessResponse)
@limiter.limit(RATE_LIMITS["admin_write"])
async def delete_event_endpoint(request: Request, event_id: int, db: Session = Depends(get_db)):
    """Delete an event along with its RSVPs and check-ins."""
    if not delete_event(db, event_id):
        raise HTTPException(status_code=404, detail="Event not found")
    return SuccessResponse(message="Event deleted")


@router.get("/stats", response_model=StatsResponse)
@limiter.limit(RATE_LIMITS["admin_read"])
async def stats_endpoint(request: Request, db: Session = Depends(get_db)):
    return get_stats(db)


@router.get("/threads", response_model=List[ThreadResponse])
@limiter.limit(RATE_LIMITS["admin_read"])
async def list_threads_endpoint(request: Request, db: Session = Depends(get_db)):
    """All topic rooms, hidden ones included."""
    return list_threads(db, include_hidden=True)


@router.post("/threads", response_model=ThreadResponse, status_code=http_status.HTTP_201_CREATED)
@limiter.limit(RATE_LIMITS["admin_write"])
async def create_thread_endpoint(request: Request, thread: ThreadCreate, db: Session = Depends(get_db)):
    return serialize_thread(create_thread(db, **thread.model_dump()))


@router.post("/threads/{thread_id}/visibility", response_model=ThreadResponse)
@limiter.limit(RATE_LIMITS["admin_write"])
async def thread_visibility_endpoint(
    request: Request,
    thread_id: int,
    update: ThreadVisibilityUpdate,
    db: Session = Depends(get_db)
):
    """Show or hide a topic room."""
    try:
        thread = set_thread_active(db, thread_id, update.is_active)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return serialize_thread(thread)


@router.delete("/messages/{message_id}", response_model=SuccessResponse)
@limiter.limit(RATE_LIMITS["admin_write"])
async def delete_message_endpoint(request: Request, message_id: int, db: Session = Depends(get_db)):
    if not delete_message(db, message_id):
        raise HTTPException(status_code=404, detail="Message not found")
    return SuccessResponse(message="Message deleted")


@router.get("/topic-requests", response_model=List[TopicRequestResponse])
@limiter.limit(RATE_LIMITS["admin_read"])
async def list_topic_requests_endpoint(
    request: Request,
    status: Optional[TopicRequestStatus] = None,
    db: Session = Depends(get_db)
):
    """Topic requests, newest first, optionally filtered by status."""
    return list_topic_requests(db, TIMEZONE, status=status)


@router.post("/topic-requests/{request_id}/approve", response_model=ThreadResponse)
@limiter.limit(RATE_LIMITS["admin_write"])
async def approve_topic_request_endpoint(request: Request, request_id: int, db: Session = Depends(get_db)):
    """
    Open a room for a pending request.

    Raises:
        HTTPException: 404 for an unknown request, 409 if it was already decided
    """
    try:
        thread = approve_topic_request(db, request_id)
    except TopicRequestDecided as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return serialize_thread(thread)


@router.post("/topic-requests/{request_id}/reject", response_model=SuccessResponse)
@limiter.limit(RATE_LIMITS["admin_write"])
async def reject_topic_request_endpoint(request: Request, request_id: int, db: Session = Depends(get_db)):
    try:
        reject_topic_request(db, request_id)
    except TopicRequestDecided as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return SuccessResponse(message="Topic request rejected")
