from __future__ import annotations

import re
from calendar import monthrange
from datetime import date, datetime

from ..core.constants import MINUTES_PER_DAY, MINUTES_PER_HOUR
from ..core.exceptions import InvalidTimeFormat

_CLOCK_RE = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def today_local() -> date:
    """Current local date.

    Note: Wrapped so services can take it as an injectable clock.
    """
    return date.today()


def is_valid_clock(value: str) -> bool:
    return bool(value) and _CLOCK_RE.match(value) is not None


def parse_clock(value: str, *, field: str = "time") -> int:
    """Parse "HH:mm" into minute-of-day (0-1439)."""
    m = _CLOCK_RE.match(value or "")
    if not m:
        raise InvalidTimeFormat(
            f"{field} must use HH:mm (24-hour) format",
            field=field,
            context={"value": value},
        )
    return int(m.group(1)) * MINUTES_PER_HOUR + int(m.group(2))


def format_clock(minutes: int) -> str:
    minutes = minutes % MINUTES_PER_DAY
    return f"{minutes // MINUTES_PER_HOUR:02d}:{minutes % MINUTES_PER_HOUR:02d}"


def minutes_between(start: int, end: int) -> int:
    """Minutes from start to end, wrapping past midnight when end < start."""
    return (end - start) % MINUTES_PER_DAY


def signed_offset(clock: int, reference: int) -> int:
    """Shortest signed distance from reference to clock, in [-720, 720)."""
    half = MINUTES_PER_DAY // 2
    return (clock - reference + half) % MINUTES_PER_DAY - half


def is_weekend(value: date) -> bool:
    return value.weekday() >= 5


def add_months(value: date, months: int) -> date:
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, monthrange(year, month)[1])
    return date(year, month, day)
