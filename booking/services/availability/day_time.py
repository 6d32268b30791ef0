# ============================================================================
# booking/services/availability/day_time.py
# Day-of-week and time-of-day conversions shared by every caller
# ============================================================================
"""
Canonical conventions:
- day index: "0".."6" with Sunday = "0"
- storage time: "HH:MM:SS"
- display time: "HH:MM"

Every function here is total: malformed input is passed through rather than
raising, so a bad row never breaks the caller.
"""
import logging
import re
from datetime import date, time
from typing import Any, Optional

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]

_HHMM = re.compile(r"^\d{2}:\d{2}$")
_LEADING_HHMM = re.compile(r"^(\d{2}:\d{2})")


def normalize_day_index(raw: Any) -> str:
    """
    Convert any stored day representation to "0".."6" (Sunday = 0).

    - "1".."7" are read as Monday=1 .. Sunday=7 and reduced with n % 7
    - "0" stays "0"
    - weekday names match case-insensitively
    - anything else is returned unchanged (and logged)
    """
    if raw is None:
        return ""

    s = str(raw).strip()

    if s.isdecimal():
        n = int(s)
        if 1 <= n <= 7:
            return str(n % 7)
        if n != 0:
            logger.warning(f"Day value out of range: {raw!r}")
        return str(n)

    lowered = s.lower()
    for idx, name in enumerate(WEEKDAY_NAMES):
        if name.lower() == lowered:
            return str(idx)

    logger.warning(f"Unrecognized day value: {raw!r}")
    return s


def day_index_for_date(target_date: date) -> str:
    """Canonical day index of a calendar date"""
    return str(target_date.isoweekday() % 7)


def weekday_name(raw: Any) -> str:
    """Readable weekday name for a day index; non-numeric values pass through"""
    if raw is None or raw == "":
        return ""

    s = str(raw).strip()
    if s.isdecimal():
        idx = int(s)
        if 0 <= idx < len(WEEKDAY_NAMES):
            return WEEKDAY_NAMES[idx]
    return s


def format_time_for_storage(value: Any) -> Optional[str]:
    """HH:MM -> HH:MM:SS; values already in the extended form are returned unchanged"""
    if isinstance(value, time):
        return value.strftime("%H:%M:%S")
    if not value:
        return value

    s = str(value).strip()
    if _HHMM.match(s):
        return f"{s}:00"
    return s


def format_time_for_display(value: Any) -> str:
    """HH:MM:SS -> HH:MM; empty string for missing values"""
    if value is None:
        return ""
    if isinstance(value, time):
        return value.strftime("%H:%M")

    s = str(value).strip()
    match = _LEADING_HHMM.match(s)
    return match.group(1) if match else s
