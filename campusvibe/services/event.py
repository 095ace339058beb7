"""Event business logic: submission, ingest, listing and moderation."""
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple
from zoneinfo import ZoneInfo
from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session

from campusvibe.core.constants import EventStatus
from campusvibe.core.logging_config import get_logger
from campusvibe.core.utils import to_timezone, to_utc
from campusvibe.db.models import Checkin, Event, Rsvp
from campusvibe.services.utils import count_checkins, count_rsvps, get_approved_event
from campusvibe.services.venues import find_venue
from campusvibe.services.vibe import aggregate_stored, get_sentiment_counts_bulk

logger = get_logger(__name__)


def create_event(
    db: Session,
    title: str,
    start_time: datetime,
    end_time: Optional[datetime] = None,
    description: Optional[str] = None,
    venue_name: Optional[str] = None,
    venue_lat: Optional[float] = None,
    venue_lng: Optional[float] = None,
    tags: Optional[List[str]] = None,
    registration_url: Optional[str] = None,
    is_official: bool = False,
    created_by: Optional[str] = None,
    status: EventStatus = EventStatus.PENDING,
    external_id: Optional[str] = None,
    source: Optional[str] = None,
) -> Event:
    """
    Create an event.

    When no coordinates are given but the venue name matches the campus
    directory, the directory's coordinates are used (and its canonical name).

    Raises:
        ValueError: If the times or coordinates are inconsistent
    """
    start_utc = to_utc(start_time)
    end_utc = to_utc(end_time) if end_time else None
    if end_utc is not None and end_utc <= start_utc:
        raise ValueError("End time must be after start time")

    if (venue_lat is None) != (venue_lng is None):
        raise ValueError("Both venue_lat and venue_lng are required for a venue location")

    if venue_lat is None:
        venue = find_venue(venue_name)
        if venue is not None:
            venue_name, venue_lat, venue_lng = venue.name, venue.lat, venue.lng

    event = Event(
        title=title,
        description=description,
        start_time=start_utc,
        end_time=end_utc,
        venue_name=venue_name,
        venue_lat=venue_lat,
        venue_lng=venue_lng,
        tags=tags or [],
        registration_url=registration_url,
        is_official=is_official,
        created_by=created_by,
        status=EventStatus(status).value,
        external_id=external_id,
        source=source,
    )
    db.add(event)
    db.commit()
    db.refresh(event)

    logger.info("event_created", event_id=event.id, status=event.status, has_location=event.venue is not None)
    return event


def ingest_event(db: Session, **fields) -> Tuple[Event, bool]:
    """
    Create an event pushed by an automation, deduplicated by external_id.

    Official sources are trusted and approved straight away; everything
    else waits for moderation.

    Returns:
        (event, duplicate) where duplicate is True when the external_id was
        already known and nothing was created
    """
    external_id = fields.get("external_id")
    if external_id:
        existing = db.query(Event).filter(Event.external_id == external_id).first()
        if existing:
            logger.info("event_ingest_duplicate", event_id=existing.id, external_id=external_id)
            return existing, True

    status = EventStatus.APPROVED if fields.get("is_official") else EventStatus.PENDING
    return create_event(db, status=status, created_by=None, **fields), False


def serialize_event(event: Event, tz: ZoneInfo, rsvp_count: int, checkin_count: int, vibe=None) -> Dict:
    return {
        "id": event.id,
        "title": event.title,
        "description": event.description,
        "start_time": to_timezone(event.start_time, tz).isoformat(),
        "end_time": to_timezone(event.end_time, tz).isoformat() if event.end_time else None,
        "venue_name": event.venue_name,
        "venue_lat": event.venue_lat,
        "venue_lng": event.venue_lng,
        "tags": event.tags or [],
        "is_official": event.is_official,
        "registration_url": event.registration_url,
        "status": event.status,
        "rsvp_count": rsvp_count,
        "checkin_count": checkin_count,
        "sentiment": vibe.coarse if vibe is not None else None,
    }


def get_event(db: Session, event_id: int, tz: ZoneInfo) -> Dict:
    """
    Get an approved event with counts and its coarse sentiment.

    Raises:
        EventNotFound: If the event does not exist or is not approved
    """
    event = get_approved_event(db, event_id)
    counts = get_sentiment_counts_bulk(db, [event.id]).get(event.id)
    rsvp_count = count_rsvps(db, event.id)
    checkin_count = count_checkins(db, event.id)
    vibe = aggregate_stored(counts, rsvp_count) if counts else None
    return serialize_event(event, tz, rsvp_count, checkin_count, vibe)


def list_events(db: Session, tz: ZoneInfo, upcoming_only: bool = True, tag: Optional[str] = None) -> List[Dict]:
    """
    List approved events with RSVP/check-in counts (bulk computed).

    Args:
        db: Database session
        tz: Timezone for date formatting
        upcoming_only: Hide events that already ended
        tag: Only include events carrying this tag
    """
    query = db.query(Event).filter(Event.status == EventStatus.APPROVED.value)
    if upcoming_only:
        # Events without an end time stay listed for the day they start
        now = datetime.now(timezone.utc)
        query = query.filter(or_(
            Event.end_time >= now,
            and_(Event.end_time.is_(None), Event.start_time >= now - timedelta(days=1)),
        ))
    events = query.order_by(Event.start_time).all()
    if tag:
        events = [e for e in events if tag in (e.tags or [])]
    if not events:
        return []

    event_ids = [e.id for e in events]
    rsvp_counts = dict(
        db.query(Rsvp.event_id, func.count()).filter(Rsvp.event_id.in_(event_ids)).group_by(Rsvp.event_id).all()
    )
    sentiment_counts = get_sentiment_counts_bulk(db, event_ids)

    result = []
    for event in events:
        counts = sentiment_counts.get(event.id)
        checkin_count = sum(counts.values()) if counts else 0
        rsvp_count = rsvp_counts.get(event.id, 0)
        vibe = aggregate_stored(counts, rsvp_count) if counts else None
        result.append(serialize_event(event, tz, rsvp_count, checkin_count, vibe))
    return result


def list_events_for_moderation(
    db: Session,
    tz: ZoneInfo,
    status: Optional[EventStatus] = None,
    search: Optional[str] = None,
) -> List[Dict]:
    """All events, newest first, optionally filtered by status and title."""
    query = db.query(Event)
    if status is not None:
        query = query.filter(Event.status == EventStatus(status).value)
    if search:
        query = query.filter(func.lower(Event.title).contains(search.strip().lower()))
    events = query.order_by(Event.created_at.desc()).all()

    event_ids = [e.id for e in events]
    rsvp_counts = dict(
        db.query(Rsvp.event_id, func.count()).filter(Rsvp.event_id.in_(event_ids)).group_by(Rsvp.event_id).all()
    ) if event_ids else {}
    checkin_counts = dict(
        db.query(Checkin.event_id, func.count()).filter(Checkin.event_id.in_(event_ids)).group_by(Checkin.event_id).all()
    ) if event_ids else {}

    result = []
    for event in events:
        item = serialize_event(event, tz, rsvp_counts.get(event.id, 0), checkin_counts.get(event.id, 0))
        item["created_by"] = event.created_by
        item["source"] = event.source
        result.append(item)
    return result


def set_event_status(db: Session, event_ids: List[int], status: EventStatus) -> int:
    """
    Approve, reject or re-queue events.

    Returns:
        Number of events updated

    Raises:
        ValueError: If none of the ids exist
    """
    status = EventStatus(status)
    events = db.query(Event).filter(Event.id.in_(event_ids)).all()
    if not events:
        raise ValueError("Event not found")

    for event in events:
        event.status = status.value
    db.commit()

    logger.info("event_status_changed", event_ids=[e.id for e in events], status=status.value)
    return len(events)


def delete_event(db: Session, event_id: int) -> bool:
    """Delete an event together with its RSVPs and check-ins."""
    event = db.query(Event).filter(Event.id == event_id).first()
    if not event:
        return False

    db.delete(event)
    db.commit()
    logger.info("event_deleted", event_id=event_id)
    return True


def get_stats(db: Session) -> Dict:
    """Totals for the admin dashboard, plus activity over the last seven days."""
    week_ago = datetime.now(timezone.utc) - timedelta(days=7)
    return {
        "total_events": db.query(Event).count(),
        "pending_events": db.query(Event).filter(Event.status == EventStatus.PENDING.value).count(),
        "approved_events": db.query(Event).filter(Event.status == EventStatus.APPROVED.value).count(),
        "total_rsvps": db.query(Rsvp).count(),
        "total_checkins": db.query(Checkin).count(),
        "events_this_week": db.query(Event).filter(Event.created_at >= week_ago).count(),
        "rsvps_this_week": db.query(Rsvp).filter(Rsvp.created_at >= week_ago).count(),
        "checkins_this_week": db.query(Checkin).filter(Checkin.created_at >= week_ago).count(),
    }
