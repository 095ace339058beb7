"""Input sanitization utilities."""
import re
from typing import Optional

from campusvibe.core.constants import (
    MAX_CHAT_MESSAGE_LENGTH,
    MAX_CHECKIN_MESSAGE_LENGTH,
    MAX_EVENT_TITLE_LENGTH,
    MAX_THREAD_TITLE_LENGTH,
    MAX_VENUE_NAME_LENGTH,
)


def sanitize_text(text: str, max_length: Optional[int] = None, strip_html: bool = True) -> str:
    """
    Sanitize text input to prevent XSS attacks.

    Note: This function strips HTML tags and normalizes whitespace, but does NOT
    escape HTML entities because the web client escapes output when rendering.

    Args:
        text: The input text to sanitize
        max_length: Optional maximum length to enforce
        strip_html: Whether to strip HTML tags (default True)

    Returns:
        Sanitized text with HTML tags removed and whitespace normalized

    Raises:
        ValueError: If text exceeds max_length or contains dangerous patterns
    """
    if not isinstance(text, str):
        raise ValueError("Input must be a string")

    sanitized = text.strip()

    # Enforce maximum length before processing to prevent length-based attacks
    if max_length and len(sanitized) > max_length:
        raise ValueError(f"Input exceeds maximum length of {max_length} characters")

    if strip_html:
        sanitized = re.sub(r'<[^>]*>', '', sanitized)

    # Reject inputs that still contain HTML-like patterns after stripping
    if '<' in sanitized or '>' in sanitized:
        raise ValueError("Input contains invalid HTML-like patterns")

    sanitized = re.sub(r'\s+', ' ', sanitized)

    return sanitized


def sanitize_event_title(title: str) -> str:
    """Sanitize an event title; empty titles are rejected."""
    sanitized = sanitize_text(title, max_length=MAX_EVENT_TITLE_LENGTH)

    if not sanitized:
        raise ValueError("Event title cannot be empty")

    return sanitized


def sanitize_venue_name(venue_name: Optional[str]) -> Optional[str]:
    """Sanitize a venue name; blank names become None."""
    if venue_name is None:
        return None
    sanitized = sanitize_text(venue_name, max_length=MAX_VENUE_NAME_LENGTH)
    return sanitized or None


def sanitize_checkin_message(message: Optional[str]) -> Optional[str]:
    """Sanitize the optional note attached to a check-in."""
    if message is None:
        return None
    sanitized = sanitize_text(message, max_length=MAX_CHECKIN_MESSAGE_LENGTH)
    return sanitized or None


def sanitize_thread_title(title: str) -> str:
    """Sanitize a topic room title; empty titles are rejected."""
    sanitized = sanitize_text(title, max_length=MAX_THREAD_TITLE_LENGTH)

    if not sanitized:
        raise ValueError("Topic title cannot be empty")

    return sanitized


def sanitize_chat_message(content: str) -> str:
    """Sanitize a chat message; blank messages are rejected."""
    sanitized = sanitize_text(content, max_length=MAX_CHAT_MESSAGE_LENGTH)

    if not sanitized:
        raise ValueError("Message cannot be empty")

    return sanitized
