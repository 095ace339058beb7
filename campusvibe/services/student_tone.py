"""Rewrite news items in a student voice with the Gemini API.

The moderation screen sends a scraped title and summary; the model returns
both rewritten as JSON. When the model answers with something that is not
JSON, its text becomes the summary and the title is kept.
"""
import json
import re
from typing import Any, Dict, Optional

import httpx

from campusvibe.core import config
from campusvibe.core.exceptions import ToneRewriteFailed
from campusvibe.core.logging_config import get_logger

logger = get_logger(__name__)

GENERATE_PATH = "/models/{model}:generateContent"

PROMPT_TEMPLATE = """You're helping rewrite university news for Pakistani Gen-Z students.

VIBE CHECK:
- Keep it real and lowkey informative
- Light humor is fine, but NO cringe (no "slay", "bestie", or overdone slang)
- Pakistani uni student energy - like you're telling your friend about it
- Use emojis but don't overdo it (1-2 max)
- Keep important info intact
- Short and snappy - no essays

Original Title: "{title}"
Original Summary: "{summary}"

Return ONLY valid JSON (no markdown, no code blocks):
{{"title": "rewritten title", "summary": "rewritten summary"}}"""

_CODE_FENCE = re.compile(r"```(?:json)?\n?")


def build_prompt(title: Optional[str], summary: Optional[str]) -> str:
    return PROMPT_TEMPLATE.format(title=title or "N/A", summary=summary or "N/A")


def _generated_text(data: Dict[str, Any]) -> str:
    try:
        return data["candidates"][0]["content"]["parts"][0]["text"] or ""
    except (KeyError, IndexError, TypeError):
        return ""


def parse_rewrite(text: str, title: Optional[str], summary: Optional[str]) -> Dict[str, Optional[str]]:
    """
    Read the model's answer, falling back to the originals field by field.

    Markdown code fences around the JSON are tolerated.
    """
    cleaned = _CODE_FENCE.sub("", text).strip()
    try:
        parsed = json.loads(cleaned)
    except ValueError:
        parsed = None

    if not isinstance(parsed, dict):
        logger.warning("student_tone_unparsed", text=text[:200])
        return {"title": title, "summary": text.strip() or summary}

    return {
        "title": parsed.get("title") or title,
        "summary": parsed.get("summary") or summary,
    }


def _upstream_message(response: httpx.Response) -> str:
    try:
        return response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return f"{response.status_code} {response.reason_phrase}"


async def rewrite_student_tone(
    title: Optional[str],
    summary: Optional[str],
    http: Optional[httpx.AsyncClient] = None,
) -> Dict[str, Optional[str]]:
    """
    Rewrite a news title and summary in the campus voice.

    Args:
        title: Original title
        summary: Original summary
        http: Client to call the model with; a short-lived one is opened
            when omitted

    Returns:
        Dict with the rewritten ``title`` and ``summary``

    Raises:
        ValueError: If both title and summary are empty
        ToneRewriteFailed: If GEMINI_API_KEY is unset or the model call fails
    """
    if not title and not summary:
        raise ValueError("Title or summary is required")

    api_key = config.settings.GEMINI_API_KEY
    if not api_key:
        logger.error("student_tone_not_configured")
        raise ToneRewriteFailed()

    if http is None:
        async with httpx.AsyncClient(timeout=config.settings.GEMINI_TIMEOUT_SECONDS) as client:
            return await rewrite_student_tone(title, summary, http=client)

    url = config.settings.GEMINI_API_URL.rstrip("/") + GENERATE_PATH.format(model=config.settings.GEMINI_MODEL)
    body = {
        "contents": [{"parts": [{"text": build_prompt(title, summary)}]}],
        "generationConfig": {"temperature": 0.7, "maxOutputTokens": 300},
    }

    try:
        response = await http.post(url, json=body, headers={"x-goog-api-key": api_key})
    except httpx.HTTPError as e:
        logger.error("student_tone_request_failed", error=str(e))
        raise ToneRewriteFailed(f"Gemini API error: {e}") from e

    if response.is_error:
        message = _upstream_message(response)
        logger.error("student_tone_upstream_error", status=response.status_code, error=message)
        raise ToneRewriteFailed(f"Gemini API error: {message}")

    try:
        data = response.json()
    except ValueError:
        data = {}
    rewrite = parse_rewrite(_generated_text(data), title, summary)
    logger.info("student_tone_rewritten")
    return rewrite
