from __future__ import annotations

from datetime import datetime

from ..core.constants import DURATION_DECIMALS, HOURS_PER_DAY
from ..core.exceptions import InvalidTimeFormat


def parse_clock_hours(value: str) -> float:
    """Parse "HH:MM" (24-hour clock) into fractional hours."""
    if not isinstance(value, str) or ":" not in value:
        raise InvalidTimeFormat(f"Invalid time (HH:MM): {value!r}")

    try:
        t = datetime.strptime(value.strip(), "%H:%M").time()
    except ValueError:
        raise InvalidTimeFormat(f"Invalid time (HH:MM): {value!r}")
    return t.hour + t.minute / 60


def elapsed_hours(start: str, end: str) -> float:
    """Hours from start to end; wraps past midnight when end < start."""
    diff = parse_clock_hours(end) - parse_clock_hours(start)
    if diff < 0:
        diff += HOURS_PER_DAY
    return round(diff, DURATION_DECIMALS)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
