"""Shared API dependencies."""
from typing import AsyncIterator
from zoneinfo import ZoneInfo

import httpx

from campusvibe.db import get_db, get_db_context
from campusvibe.core.config import settings
from campusvibe.core.security import get_optional_user_id, require_user_id, verify_admin_token

# Timezone events are displayed in
TIMEZONE = ZoneInfo(settings.TIMEZONE)


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Outbound HTTP client for calls to third-party APIs, closed after the request."""
    async with httpx.AsyncClient(timeout=settings.GEMINI_TIMEOUT_SECONDS) as client:
        yield client


__all__ = [
    "get_db",
    "get_db_context",
    "get_http_client",
    "get_optional_user_id",
    "require_user_id",
    "verify_admin_token",
    "TIMEZONE",
]
