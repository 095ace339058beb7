"""Shared queries for the service layer."""
from typing import Optional
from sqlalchemy.orm import Session

from campusvibe.core.constants import EventStatus
from campusvibe.core.exceptions import EventNotFound
from campusvibe.db.models import Checkin, Event, Rsvp


def get_approved_event(db: Session, event_id: int) -> Event:
    """
    Get an event students can see.

    Pending and rejected submissions are hidden from students, so they are
    reported exactly like a missing event.

    Raises:
        EventNotFound: If the event does not exist or is not approved
    """
    event = db.query(Event).filter(
        Event.id == event_id,
        Event.status == EventStatus.APPROVED.value
    ).first()
    if event is None:
        raise EventNotFound()
    return event


def get_user_checkin(db: Session, event_id: int, user_id: str) -> Optional[Checkin]:
    """Get the user's check-in for an event (indexed by the unique constraint)."""
    return db.query(Checkin).filter(
        Checkin.event_id == event_id,
        Checkin.user_id == user_id
    ).first()


def count_checkins(db: Session, event_id: int) -> int:
    return db.query(Checkin).filter(Checkin.event_id == event_id).count()


def count_rsvps(db: Session, event_id: int) -> int:
    return db.query(Rsvp).filter(Rsvp.event_id == event_id).count()
