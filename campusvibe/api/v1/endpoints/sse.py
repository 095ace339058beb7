"""Server-Sent Events endpoints."""
import asyncio
import json
from typing import Callable, Dict, Optional
from fastapi import APIRouter, Query, Request
from fastapi.responses import StreamingResponse
from sqlalchemy.exc import SQLAlchemyError

from campusvibe.api.deps import get_db_context, TIMEZONE
from campusvibe.api.v1.endpoints.events import vibe_payload
from campusvibe.core.config import settings
from campusvibe.core.exceptions import CampusVibeError
from campusvibe.core.logging_config import get_logger
from campusvibe.services.chat import get_active_thread, list_messages
from campusvibe.services.utils import get_approved_event
from campusvibe.services.vibe import aggregate_event

logger = get_logger(__name__)
router = APIRouter()

MAX_CONSECUTIVE_ERRORS = 3

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def format_event(data: Dict, event: Optional[str] = None) -> str:
    """Render one SSE frame."""
    prefix = f"event: {event}\n" if event else ""
    return f"{prefix}data: {json.dumps(data)}\n\n"


async def event_generator(request: Request, data_func: Callable[[], Optional[Dict]], interval: float = 5):
    """
    Push ``data_func()`` to the client every ``interval`` seconds.

    A frame is only sent when the data changed since the last one, and
    never when ``data_func`` returns None (nothing new yet). Database
    errors are retried until MAX_CONSECUTIVE_ERRORS in a row; domain errors
    (event deleted or unpublished) end the stream with an ``error`` frame.
    """
    consecutive_errors = 0
    last_sent = None

    try:
        while True:
            if await request.is_disconnected():
                break

            try:
                data = data_func()
                consecutive_errors = 0
                if data is not None and data != last_sent:
                    yield format_event(data)
                    last_sent = data
            except CampusVibeError as e:
                yield format_event({"code": e.code, "message": e.detail}, event="error")
                break
            except SQLAlchemyError as e:
                consecutive_errors += 1
                logger.warning("sse_database_error", attempt=consecutive_errors, error=str(e))
                if consecutive_errors >= MAX_CONSECUTIVE_ERRORS:
                    yield format_event({"error": "Service temporarily unavailable"}, event="error")
                    break

            await asyncio.sleep(interval)

    except asyncio.CancelledError:
        # Client disconnected
        pass


@router.get("/sse/events/{event_id}/vibe")
async def sse_event_vibe(request: Request, event_id: int):
    """
    Live crowd vibe of an event.

    Each tick recomputes the aggregate from the stored check-ins with a
    fresh session. The client should reconnect automatically if
    disconnected.
    """
    # Unknown or unpublished events get a normal 404 before the stream opens
    with get_db_context() as db:
        get_approved_event(db, event_id)

    def get_data():
        with get_db_context() as session:
            return vibe_payload(aggregate_event(session, event_id))

    return StreamingResponse(
        event_generator(request, get_data, interval=settings.SSE_VIBE_INTERVAL),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )


@router.get("/sse/threads/{thread_id}/messages")
async def sse_thread_messages(request: Request, thread_id: int, after: int = Query(0, ge=0)):
    """
    Live messages of a topic room.

    Each frame carries the messages posted since the previous frame (or
    since message id ``after`` for the first one), so a client that loaded
    the history passes the last id it has and receives each message once.
    Hiding the room ends the stream with an ``error`` frame.
    """
    with get_db_context() as db:
        get_active_thread(db, thread_id)

    cursor = {"after": after}

    def get_data():
        with get_db_context() as session:
            messages = list_messages(session, thread_id, TIMEZONE, after_id=cursor["after"])
        if not messages:
            return None
        cursor["after"] = messages[-1]["id"]
        return {"thread_id": thread_id, "messages": messages}

    return StreamingResponse(
        event_generator(request, get_data, interval=settings.SSE_CHAT_INTERVAL),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
