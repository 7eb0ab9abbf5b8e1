"""Utility helpers for reusable functionality."""

from .datetime import (
    from_naive_utc,
    get_app_timezone,
    now_in_app_timezone,
    parse_iso_datetime,
    to_naive_utc,
    utc_now,
)

__all__ = [
    "from_naive_utc",
    "get_app_timezone",
    "now_in_app_timezone",
    "parse_iso_datetime",
    "to_naive_utc",
    "utc_now",
]
