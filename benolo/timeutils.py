from __future__ import annotations

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_iso_datetime(value: Any) -> datetime | None:
    """Parse an ISO-8601 or RFC 2822 string, or a datetime, into an aware UTC datetime.

    Returns None for anything that cannot be read as an instant.
    """

    if isinstance(value, datetime):
        return ensure_utc(value)
    if not isinstance(value, str):
        return None
    cleaned = value.strip()
    if not cleaned:
        return None
    iso_candidate = cleaned[:-1] + "+00:00" if cleaned.endswith(("Z", "z")) else cleaned
    try:
        return ensure_utc(datetime.fromisoformat(iso_candidate))
    except ValueError:
        pass
    # Provider feeds sometimes send HTTP-style dates ("Wed, 12 Mar 2025 18:30:00 GMT").
    try:
        return ensure_utc(parsedate_to_datetime(cleaned))
    except (TypeError, ValueError, IndexError):
        return None


def format_iso_utc(value: datetime) -> str:
    """Format as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    return ensure_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")
