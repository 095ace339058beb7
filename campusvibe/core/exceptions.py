"""Domain errors for the check-in flow.

Each error carries a machine-readable ``code`` and the HTTP status the API
answers with. The API renders them through a single exception handler as
the standard ``ErrorResponse`` body.
"""
from typing import Optional

from campusvibe.core.geo import round_meters


class CampusVibeError(Exception):
    """Base class for errors shown to the user as inline feedback."""

    code = "error"
    status_code = 400
    message = "Something went wrong"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)

    @property
    def detail(self) -> str:
        return str(self)


class EventNotFound(CampusVibeError):
    code = "event_not_found"
    status_code = 404
    message = "Event not found"


class ThreadNotFound(CampusVibeError):
    code = "thread_not_found"
    status_code = 404
    message = "Thread not found"


class VenueLocationUnavailable(CampusVibeError):
    """The venue has no coordinates, so check-in is disabled for the event."""

    code = "venue_location_unavailable"
    status_code = 409
    message = "Check-in unavailable for this venue."


class LocationUnavailable(CampusVibeError):
    """The device denied or failed to provide a position."""

    code = "location_unavailable"
    status_code = 422
    message = "Location access denied."


class LocationTimeout(LocationUnavailable):
    code = "location_timeout"
    message = "Timed out waiting for your location."


class TooFar(CampusVibeError):
    """The user is outside the geofence radius."""

    code = "too_far"
    status_code = 403

    def __init__(self, distance_m: float):
        self.distance_m = distance_m
        super().__init__(f"Too far! ({round_meters(distance_m)}m away)")


class AuthenticationRequired(CampusVibeError):
    code = "authentication_required"
    status_code = 401
    message = "Please login to Check In!"


class CheckInFailure(CampusVibeError):
    """Storage or network failure while writing a check-in."""

    code = "checkin_failed"
    status_code = 503
    message = "Check-in failed."


class ToneRewriteFailed(CampusVibeError):
    """The language model behind the student-tone rewrite failed or is not configured."""

    code = "tone_rewrite_failed"
    status_code = 500
    message = "Gemini API key not configured"
