"""Check-in business logic."""
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional, Union
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from campusvibe.core.constants import CoarseSentiment, Sentiment
from campusvibe.core.exceptions import AuthenticationRequired, CheckInFailure
from campusvibe.core.logging_config import get_logger
from campusvibe.db.models import Checkin
from campusvibe.services.geofence import Position, PositionError, validate_geofence
from campusvibe.services.utils import count_checkins, get_approved_event, get_user_checkin
from campusvibe.services.vibe import normalize_sentiment

logger = get_logger(__name__)

CHECKED_IN = "checked_in"
ALREADY_CHECKED_IN = "already_checked_in"

SentimentInput = Union[Sentiment, CoarseSentiment, str]


@dataclass
class CheckinOutcome:
    """Result of a check-in attempt that did not fail."""

    status: str
    checkin_id: int
    sentiment: Optional[str]
    checkin_count: int
    created_at: datetime
    distance_m: Optional[float] = None

    @property
    def already_checked_in(self) -> bool:
        return self.status == ALREADY_CHECKED_IN


def _outcome(db: Session, record: Checkin, status: str) -> CheckinOutcome:
    return CheckinOutcome(
        status=status,
        checkin_id=record.id,
        sentiment=record.sentiment,
        checkin_count=count_checkins(db, record.event_id),
        created_at=record.created_at,
    )


def record_checkin(
    db: Session,
    event_id: int,
    user_id: Optional[str],
    sentiment: SentimentInput,
    position: Optional[Position] = None,
    message: Optional[str] = None,
) -> CheckinOutcome:
    """
    Persist a user's check-in, at most once per (event, user).

    The caller is expected to have passed the geofence for this event.
    A second call for the same pair does not write anything and reports
    the sentiment recorded the first time.

    Args:
        db: Database session
        event_id: Event being checked in to
        user_id: Signed-in user, or None when anonymous
        sentiment: Crowd vibe in either vocabulary (lit/.../dead or pos/neu/neg)
        position: Where the user was when the geofence passed
        message: Optional note, already sanitized

    Returns:
        CheckinOutcome with status CHECKED_IN or ALREADY_CHECKED_IN

    Raises:
        AuthenticationRequired: If user_id is None
        ValueError: If the sentiment is not recognised
        EventNotFound: If the event does not exist or is not approved
        CheckInFailure: If the write fails for any other reason
    """
    if user_id is None:
        raise AuthenticationRequired()
    sentiment = normalize_sentiment(sentiment)

    get_approved_event(db, event_id)

    existing = get_user_checkin(db, event_id, user_id)
    if existing:
        logger.info("checkin_duplicate", event_id=event_id, user_id=user_id)
        return _outcome(db, existing, ALREADY_CHECKED_IN)

    record = Checkin(
        event_id=event_id,
        user_id=user_id,
        lat=position.lat if position else None,
        lng=position.lng if position else None,
        sentiment=sentiment.value,
        message=message,
    )

    try:
        db.add(record)
        db.commit()
        db.refresh(record)
    except IntegrityError:
        # A concurrent request from the same user won the insert
        db.rollback()
        existing = get_user_checkin(db, event_id, user_id)
        if existing is None:
            logger.error("checkin_integrity_error", event_id=event_id, user_id=user_id)
            raise CheckInFailure()
        logger.info("checkin_duplicate_race", event_id=event_id, user_id=user_id)
        return _outcome(db, existing, ALREADY_CHECKED_IN)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("checkin_write_failed", event_id=event_id, user_id=user_id, error=str(e))
        raise CheckInFailure() from e

    logger.info("checkin_recorded", event_id=event_id, user_id=user_id, sentiment=sentiment.value)
    return _outcome(db, record, CHECKED_IN)


def check_in(
    db: Session,
    event_id: int,
    user_id: Optional[str],
    position: Optional[Position],
    sentiment: SentimentInput,
    message: Optional[str] = None,
    position_error: Optional[Union[PositionError, str]] = None,
) -> CheckinOutcome:
    """
    Full server-side check-in: re-verify the geofence, then record.

    Users who already checked in get the existing record back without
    their position being looked at again.

    Raises:
        AuthenticationRequired, EventNotFound, VenueLocationUnavailable,
        LocationUnavailable, LocationTimeout, TooFar, CheckInFailure, ValueError
    """
    if user_id is None:
        raise AuthenticationRequired()
    sentiment = normalize_sentiment(sentiment)

    event = get_approved_event(db, event_id)

    existing = get_user_checkin(db, event_id, user_id)
    if existing:
        logger.info("checkin_duplicate", event_id=event_id, user_id=user_id)
        return _outcome(db, existing, ALREADY_CHECKED_IN)

    result = validate_geofence(position, event.venue, position_error=position_error)
    if not result.accepted:
        logger.warning(
            "checkin_too_far",
            event_id=event_id,
            user_id=user_id,
            distance_m=round(result.distance_m, 1),
        )
    result.raise_for_status()

    outcome = record_checkin(db, event_id, user_id, sentiment, position, message)
    outcome.distance_m = result.distance_m
    return outcome


def get_checkin_status(db: Session, event_id: int, user_id: Optional[str]) -> Dict:
    """Whether the user is checked in to an event, and the event's check-in count."""
    get_approved_event(db, event_id)
    record = get_user_checkin(db, event_id, user_id) if user_id else None
    return {
        "event_id": event_id,
        "checked_in": record is not None,
        "sentiment": record.sentiment if record else None,
        "checkin_count": count_checkins(db, event_id),
    }
