from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from ..core.enums import TimeFormat


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def to_iso_z(value: datetime) -> str:
    """Render an instant the way browsers do (`2024-01-01T10:00:00.000Z`)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_iso(value: str) -> datetime:
    """Parse an ISO-8601 instant, accepting a trailing `Z`."""
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_optional_iso(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return parse_iso(value)


def format_checkin(value: str, time_format: TimeFormat) -> str:
    """Date and time of a check-in, e.g. `Jan 1, 2024 10:00 AM` or `Jan 1, 2024 10:00`."""
    dt = parse_iso(value)
    date_s = f"{dt.strftime('%b')} {dt.day}, {dt.year}"
    if time_format == TimeFormat.MILITARY:
        return f"{date_s} {dt.strftime('%H:%M')}"
    hour = dt.hour % 12 or 12
    return f"{date_s} {hour}:{dt.strftime('%M')} {'AM' if dt.hour < 12 else 'PM'}"
