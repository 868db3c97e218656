"""Utility modules for cross-cutting concerns."""

from utils.timezone import now_utc, to_utc, to_local, parse_iso, format_long_date
