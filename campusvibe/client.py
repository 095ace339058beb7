"""Async client for the check-in flow.

Drives the same sequence as the check-in button: acquire a position fix
(bounded by the geolocation timeout), ask the server for a geofence
verdict, then post the check-in while the displayed count moves
optimistically. Any failure after the optimistic step rolls the count
back, cancellation included.
"""
from typing import Any, Dict, Optional, Type, Union

import httpx

from campusvibe.core.exceptions import (
    AuthenticationRequired,
    CampusVibeError,
    CheckInFailure,
    EventNotFound,
    LocationTimeout,
    LocationUnavailable,
    TooFar,
    VenueLocationUnavailable,
)
from campusvibe.core.logging_config import get_logger
from campusvibe.core.optimistic import OptimisticCounter
from campusvibe.services.geofence import (
    GeofenceResult,
    Position,
    PositionError,
    PositionProvider,
    acquire_position,
)

logger = get_logger(__name__)

API_PREFIX = "/api/v1"

ERROR_TYPES: Dict[str, Type[CampusVibeError]] = {
    cls.code: cls
    for cls in (
        AuthenticationRequired,
        CheckInFailure,
        EventNotFound,
        LocationTimeout,
        LocationUnavailable,
        VenueLocationUnavailable,
    )
}


def error_from_response(response: httpx.Response) -> CampusVibeError:
    """Rebuild the domain error the server rendered into ``response``."""
    try:
        payload = response.json()
    except ValueError:
        payload = {}

    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict):
        code = error.get("code")
        if code == TooFar.code and error.get("distance_m") is not None:
            return TooFar(error["distance_m"])
        if code in ERROR_TYPES:
            return ERROR_TYPES[code](error.get("message"))

    # Non-domain errors (token rejected, validation, outages)
    detail = payload.get("detail") if isinstance(payload, dict) else None
    if response.status_code == 401:
        return AuthenticationRequired(detail if isinstance(detail, str) else None)
    if response.status_code == 404:
        return EventNotFound()
    return CheckInFailure()


def _position_body(position: Optional[Position], error: Optional[PositionError] = None) -> Dict[str, Any]:
    if position is None:
        return {"position": None, "error": PositionError(error).value if error else None}
    body = {"lat": position.lat, "lng": position.lng, "accuracy": position.accuracy}
    if position.timestamp is not None:
        body["timestamp"] = position.timestamp.isoformat()
    return {"position": body, "error": None}


class CheckInClient:
    """
    Check-in flow against a Campus Vibe server.

    Args:
        base_url: Server root, e.g. ``https://vibe.example.edu``
        token: User JWT sent as a bearer token
        http: Client to send requests with; tests pass one bound to the app
        geolocation_timeout: Seconds to wait for a position fix
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token: Optional[str] = None,
        http: Optional[httpx.AsyncClient] = None,
        geolocation_timeout: Optional[float] = None,
    ):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        if http is None:
            http = httpx.AsyncClient(base_url=base_url, timeout=10.0)
        http.headers.update(headers)
        self._http = http
        self.geolocation_timeout = geolocation_timeout

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "CheckInClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            response = await self._http.request(method, f"{API_PREFIX}{path}", **kwargs)
        except httpx.HTTPError as e:
            logger.warning("checkin_client_request_failed", path=path, error=str(e))
            raise CheckInFailure() from e
        if response.is_error:
            raise error_from_response(response)
        return response.json()

    async def geofence(
        self,
        event_id: int,
        position: Optional[Position],
        error: Optional[Union[PositionError, str]] = None,
    ) -> GeofenceResult:
        """Ask the server whether ``position`` is inside the event's geofence."""
        data = await self._request("POST", f"/events/{event_id}/geofence", json=_position_body(position, error))
        return GeofenceResult(accepted=data["accepted"], distance_m=data["distance_m"], radius_m=data["radius_m"])

    async def checkin_status(self, event_id: int) -> Dict[str, Any]:
        return await self._request("GET", f"/events/{event_id}/checkins/me")

    async def check_in(
        self,
        event_id: int,
        sentiment: str,
        provider: PositionProvider,
        counter: Optional[OptimisticCounter] = None,
        message: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Run the whole check-in flow for one event.

        Returns:
            The server's check-in response (``status`` is ``checked_in`` or
            ``already_checked_in``)

        Raises:
            LocationTimeout, LocationUnavailable: No position fix
            TooFar: Outside the geofence (the count is never touched)
            AuthenticationRequired, EventNotFound, VenueLocationUnavailable,
            CheckInFailure: Reported by the server
        """
        position = await acquire_position(provider, self.geolocation_timeout)
        verdict = await self.geofence(event_id, position)
        verdict.raise_for_status()

        if counter is not None:
            counter.begin(1)
        try:
            body = _position_body(position)
            body.update({"sentiment": sentiment, "message": message})
            data = await self._request("POST", f"/events/{event_id}/checkins", json=body)
        except BaseException:
            # Includes cancellation: the server either never saw the write or
            # the next sync will bring the real count back
            if counter is not None:
                counter.rollback()
            raise

        if counter is not None:
            counter.commit(server_count=data["checkin_count"])
        logger.info("checkin_client_done", event_id=event_id, status=data["status"])
        return data
