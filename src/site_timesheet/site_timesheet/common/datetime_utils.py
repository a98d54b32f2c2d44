"""Minute-granularity time arithmetic.

Times of day and durations are carried around as "HH:MM" strings, exactly as
they are typed into the dashboard and stored in the record files.
"""

from __future__ import annotations

import calendar
import time
from datetime import datetime
from typing import Optional

from ..core.constants import MINUTES_PER_DAY


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_iso(now: Optional[datetime] = None) -> str:
    return (now or now_local()).strftime("%Y-%m-%d")


def current_time_text(now: Optional[datetime] = None) -> str:
    """Clock reading used as the start time of a live check-in."""
    return (now or now_local()).strftime("%H:%M")


def epoch_millis() -> int:
    return int(time.time() * 1000)


def month_bounds(month: str) -> tuple[str, str]:
    """Return first/last ISO day of a 'YYYY-MM' month."""
    first = datetime.strptime(month, "%Y-%m").date()
    last_day = calendar.monthrange(first.year, first.month)[1]
    return first.isoformat(), first.replace(day=last_day).isoformat()


def _to_int(part: str) -> int:
    try:
        return int(part)
    except (TypeError, ValueError):
        return 0


def parse_time_of_day(text: Optional[str]) -> int:
    """Convert 'HH:MM' into minutes since midnight.

    Empty/missing values count as 0, and so does any missing or non-numeric
    hour/minute part.
    """
    if not text:
        return 0
    parts = str(text).strip().split(":")
    hours = _to_int(parts[0])
    minutes = _to_int(parts[1]) if len(parts) > 1 else 0
    return hours * 60 + minutes


def format_minutes(total_minutes: int, is_duration: bool = False) -> str:
    """Format minutes as 'HH:MM'.

    Clock values wrap around midnight in both directions (-15 -> '23:45').
    Durations never go negative and are not wrapped ('25:00' is a valid
    duration).
    """
    total_minutes = int(total_minutes)
    if is_duration:
        total_minutes = max(total_minutes, 0)
    else:
        total_minutes %= MINUTES_PER_DAY

    hours, minutes = divmod(total_minutes, 60)
    return f"{hours:02d}:{minutes:02d}"


def adjust_time(current: Optional[str], delta_minutes: int, is_duration: bool = False) -> str:
    """Apply a stepper adjustment (e.g. +15 min) to a 'HH:MM' value."""
    return format_minutes(parse_time_of_day(current) + int(delta_minutes), is_duration)


def compute_worked_minutes(start: Optional[str], end: Optional[str], lunch: Optional[str]) -> int:
    if not end or not lunch:
        # Active shift: nothing worked yet as far as reports are concerned.
        return 0

    start_minutes = parse_time_of_day(start)
    end_minutes = parse_time_of_day(end)
    lunch_minutes = parse_time_of_day(lunch)

    if end_minutes < start_minutes:
        end_minutes += MINUTES_PER_DAY

    return max(end_minutes - start_minutes - lunch_minutes, 0)


def compute_worked_hours(start: Optional[str], end: Optional[str], lunch: Optional[str]) -> float:
    """Hours worked in a shift, overnight shifts included.

    A shift ending before it starts is assumed to end the next day
    ('22:00'-'02:00' is four hours). Lunch is subtracted and the result is
    floored at zero.
    """
    return compute_worked_minutes(start, end, lunch) / 60
