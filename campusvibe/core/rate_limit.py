"""Rate limiting configuration."""
import os
from slowapi import Limiter
from slowapi.util import get_remote_address


def get_client_ip(request):
    """Get client IP for rate limiting, considering proxies."""
    # Check X-Forwarded-For header (from reverse proxies)
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # X-Forwarded-For can contain multiple IPs, take the first one
        return forwarded.split(",")[0].strip()

    return get_remote_address(request)


# Uses Redis if REDIS_URL is set (Docker/production), falls back to memory for local dev
limiter = Limiter(
    key_func=get_client_ip,
    default_limits=["100/minute"],  # Global default
    storage_uri=os.getenv("REDIS_URL", "memory://"),
    strategy="fixed-window"
)

# Rate limit definitions for different endpoint categories
# Note: Campus WiFi environments may share public IPs via NAT,
# so limits are set to accommodate a full auditorium checking in at once
RATE_LIMITS = {
    # Student endpoints
    "check_in": "200/minute",
    "geofence": "200/minute",
    "rsvp": "200/minute",
    "submit_event": "20/minute",
    "vibe": "300/minute",
    "chat_read": "300/minute",
    "chat_post": "60/minute",
    "topic_request": "5/minute",

    # Automation and admin endpoints
    "ingest": "60/minute",
    "student_tone": "20/minute",
    "admin_login": "10/minute",
    "admin_read": "200/minute",
    "admin_write": "200/minute",
}
