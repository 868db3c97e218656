"""UTC-everywhere time handling. Local time only appears on printed documents."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo


def now_utc() -> datetime:
    """
    Current time in UTC.

    Use this instead of datetime.now() everywhere.
    """
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """
    Convert a datetime to UTC.

    Raises ValueError if datetime is naive (no timezone).
    """
    if dt.tzinfo is None:
        raise ValueError(
            "Cannot convert naive datetime to UTC. Datetime must be timezone-aware."
        )
    return dt.astimezone(timezone.utc)


def to_local(dt: datetime, tz_name: str) -> datetime:
    """
    Convert UTC datetime to the dealership's local timezone.

    Args:
        dt: UTC datetime
        tz_name: IANA timezone name (e.g., "America/Jamaica")

    Raises:
        ValueError: If datetime is naive or timezone name is invalid
    """
    if dt.tzinfo is None:
        raise ValueError(
            "Cannot convert naive datetime. Datetime must be timezone-aware."
        )

    try:
        local_tz = ZoneInfo(tz_name)
    except (KeyError, ValueError):
        raise ValueError(f"Unknown timezone: {tz_name}")

    return dt.astimezone(local_tz)


def parse_iso(iso_string: str) -> datetime:
    """
    Parse ISO 8601 datetime string to UTC datetime.

    Accepts a trailing 'Z' as produced by browsers (Date.toISOString).
    Raises ValueError if string has no timezone info.
    """
    if iso_string.endswith("Z"):
        iso_string = iso_string[:-1] + "+00:00"
    dt = datetime.fromisoformat(iso_string)
    if dt.tzinfo is None:
        raise ValueError(
            "Cannot parse naive datetime string. "
            "Include timezone offset (e.g., 'Z' or '+00:00')."
        )
    return to_utc(dt)


def format_long_date(dt: datetime, tz_name: str) -> str:
    """
    Format a UTC datetime as a long US-style date in the given timezone.

    Example: "October 19, 2026". Month names are fixed English, independent
    of the process locale.
    """
    local = to_local(dt, tz_name)
    return f"{_MONTHS[local.month - 1]} {local.day}, {local.year}"


_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
