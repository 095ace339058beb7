"""RSVP business logic."""
from typing import Dict, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from campusvibe.core.constants import RsvpStatus
from campusvibe.core.exceptions import AuthenticationRequired
from campusvibe.core.logging_config import get_logger
from campusvibe.db.models import Rsvp
from campusvibe.services.utils import count_rsvps, get_approved_event

logger = get_logger(__name__)


def _user_rsvp(db: Session, event_id: int, user_id: str) -> Optional[Rsvp]:
    return db.query(Rsvp).filter(Rsvp.event_id == event_id, Rsvp.user_id == user_id).first()


def get_rsvp_status(db: Session, event_id: int, user_id: Optional[str]) -> Dict:
    get_approved_event(db, event_id)
    record = _user_rsvp(db, event_id, user_id) if user_id else None
    return {
        "event_id": event_id,
        "going": record is not None,
        "rsvp_count": count_rsvps(db, event_id),
    }


def set_rsvp(db: Session, event_id: int, user_id: Optional[str], going: bool) -> Dict:
    """
    Mark or unmark the user as going.

    Setting the state it is already in is a no-op, so a repeated request
    (double tap, retry after a dropped response) cannot double count.

    Raises:
        AuthenticationRequired: If user_id is None
        EventNotFound: If the event does not exist or is not approved
    """
    if user_id is None:
        raise AuthenticationRequired("Please login to RSVP!")
    get_approved_event(db, event_id)

    record = _user_rsvp(db, event_id, user_id)
    if going and record is None:
        try:
            db.add(Rsvp(event_id=event_id, user_id=user_id, status=RsvpStatus.GOING.value))
            db.commit()
            logger.info("rsvp_added", event_id=event_id, user_id=user_id)
        except IntegrityError:
            # Same user raced us; the row we wanted exists
            db.rollback()
    elif not going and record is not None:
        db.delete(record)
        db.commit()
        logger.info("rsvp_removed", event_id=event_id, user_id=user_id)

    return {
        "event_id": event_id,
        "going": going,
        "rsvp_count": count_rsvps(db, event_id),
    }


def toggle_rsvp(db: Session, event_id: int, user_id: Optional[str]) -> Dict:
    """Flip the user's RSVP for an event."""
    if user_id is None:
        raise AuthenticationRequired("Please login to RSVP!")
    get_approved_event(db, event_id)
    return set_rsvp(db, event_id, user_id, going=_user_rsvp(db, event_id, user_id) is None)
