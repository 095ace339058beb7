"""Geofence verification for check-ins.

A check-in is only offered when the device reports a position within the
configured radius of the venue. Positions are client-reported and trusted as
such; nothing here tries to detect spoofed coordinates.
"""
import asyncio
import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Awaitable, Callable, Optional, Union
from sqlalchemy.orm import Session

from campusvibe.core.config import settings
from campusvibe.core.exceptions import (
    AuthenticationRequired,
    LocationTimeout,
    LocationUnavailable,
    TooFar,
    VenueLocationUnavailable,
)
from campusvibe.core.geo import GeoPoint, distance_m, round_meters
from campusvibe.core.logging_config import get_logger
from campusvibe.services.utils import get_approved_event

logger = get_logger(__name__)


class PositionError(str, enum.Enum):
    """Failure codes a browser geolocation request can end with."""

    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"
    UNSUPPORTED = "unsupported"


POSITION_ERROR_MESSAGES = {
    PositionError.PERMISSION_DENIED: "Location access denied.",
    PositionError.POSITION_UNAVAILABLE: "Your location could not be determined.",
    PositionError.UNSUPPORTED: "Geolocation not supported.",
}


@dataclass(frozen=True)
class Position:
    """A device position fix."""

    lat: float
    lng: float
    accuracy: Optional[float] = None
    timestamp: Optional[datetime] = None

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.lat, self.lng)


class GeolocationError(Exception):
    """Raised by position providers when the device cannot supply a fix."""

    def __init__(self, error: Union[PositionError, str]):
        self.error = PositionError(error)
        super().__init__(self.error.value)


PositionProvider = Callable[[], Awaitable[Position]]


@dataclass(frozen=True)
class GeofenceResult:
    """Verdict of a geofence check; both outcomes carry the distance."""

    accepted: bool
    distance_m: float
    radius_m: float

    @property
    def rounded_distance(self) -> int:
        return round_meters(self.distance_m)

    @property
    def message(self) -> str:
        if self.accepted:
            return f"Distance: {self.rounded_distance}m"
        return f"Too far! ({self.rounded_distance}m away)"

    def raise_for_status(self) -> None:
        """Raise TooFar for a rejected check."""
        if not self.accepted:
            raise TooFar(self.distance_m)


def location_error(error: Union[PositionError, str]) -> LocationUnavailable:
    """Map a device position error to the exception shown to the user."""
    error = PositionError(error)
    if error is PositionError.TIMEOUT:
        return LocationTimeout()
    return LocationUnavailable(POSITION_ERROR_MESSAGES[error])


def validate_geofence(
    user_position: Optional[Union[Position, GeoPoint]],
    venue: Optional[GeoPoint],
    radius_m: Optional[float] = None,
    position_error: Optional[Union[PositionError, str]] = None,
) -> GeofenceResult:
    """
    Decide whether a position is close enough to the venue to check in.

    Args:
        user_position: Device position, or None when the device gave none
        venue: Venue coordinate, or None when the event has no location
        radius_m: Geofence radius (defaults to GEOFENCE_RADIUS_METERS)
        position_error: Error reported by the device instead of a position

    Returns:
        GeofenceResult accepted when distance <= radius

    Raises:
        VenueLocationUnavailable: The venue has no coordinate
        LocationTimeout: The device timed out acquiring a fix
        LocationUnavailable: The device denied or failed to give a position
    """
    if venue is None:
        raise VenueLocationUnavailable()

    if position_error is not None:
        raise location_error(position_error)
    if user_position is None:
        raise LocationUnavailable()

    if radius_m is None:
        radius_m = settings.GEOFENCE_RADIUS_METERS

    point = user_position.point if isinstance(user_position, Position) else user_position
    distance = distance_m(point, venue)
    return GeofenceResult(accepted=distance <= radius_m, distance_m=distance, radius_m=radius_m)


async def acquire_position(provider: PositionProvider, timeout: Optional[float] = None) -> Position:
    """
    Wait for a position fix, giving up after ``timeout`` seconds.

    Raises:
        LocationTimeout: No fix arrived in time
        LocationUnavailable: The provider reported a device error
    """
    if timeout is None:
        timeout = settings.GEOLOCATION_TIMEOUT_SECONDS

    try:
        return await asyncio.wait_for(provider(), timeout=timeout)
    except asyncio.TimeoutError:
        raise LocationTimeout()
    except GeolocationError as e:
        raise location_error(e.error)


def check_event_geofence(
    db: Session,
    event_id: int,
    user_id: Optional[str],
    position: Optional[Position],
    position_error: Optional[Union[PositionError, str]] = None,
) -> GeofenceResult:
    """
    Geofence check for an event, before the user picks a sentiment.

    Checks run in the order the check-in button performs them: the venue
    must have a location, the user must be signed in, then the device
    position is compared against GEOFENCE_RADIUS_METERS.
    """
    event = get_approved_event(db, event_id)
    if event.venue is None:
        raise VenueLocationUnavailable()
    if user_id is None:
        raise AuthenticationRequired()

    result = validate_geofence(position, event.venue, position_error=position_error)
    log = logger.info if result.accepted else logger.warning
    log(
        "geofence_accepted" if result.accepted else "geofence_rejected",
        event_id=event_id,
        user_id=user_id,
        distance_m=round(result.distance_m, 1),
        radius_m=result.radius_m,
    )
    return result
