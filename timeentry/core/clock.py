# timeentry/core/clock.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal, Optional

ClockMode = Literal["12h", "24h"]
Meridiem = Literal["am", "pm"]

MODE_12H: ClockMode = "12h"
MODE_24H: ClockMode = "24h"
CLOCK_MODES = (MODE_12H, MODE_24H)


def check_mode(mode: str) -> ClockMode:
    if mode not in CLOCK_MODES:
        raise ValueError(f"Unknown clock mode: {mode!r} (expected '12h' or '24h').")
    return mode  # type: ignore[return-value]


# -----------------------------
# Formatting helpers
# -----------------------------
def two_digits(n: int) -> str:
    """
    Zero-pads to two characters.
      7   -> "07"
      42  -> "42"
      123 -> "123" (no truncation)
    """
    return f"{n:02d}"


@dataclass(frozen=True)
class HourDisplay:
    display_hour: int
    is_pm: Optional[bool]  # None in 24h mode


def convert_hours_for_mode(raw_hour: int, mode: str) -> HourDisplay:
    """
    Maps a 24-hour value (0..23) onto the dial of the given mode.

    12h mode:
      0      -> 12 am
      1..11  -> 1..11 am
      12     -> 12 pm
      13..23 -> 1..11 pm
    """
    mode = check_mode(mode)
    if mode == MODE_24H:
        return HourDisplay(display_hour=raw_hour, is_pm=None)

    is_pm = raw_hour >= 12
    if raw_hour == 0:
        return HourDisplay(display_hour=12, is_pm=False)
    if raw_hour > 12:
        return HourDisplay(display_hour=raw_hour - 12, is_pm=True)
    return HourDisplay(display_hour=raw_hour, is_pm=is_pm)


def format_display(value: Optional[datetime], mode: str) -> str:
    """
    24h -> "HH:MM"        e.g. "09:05"
    12h -> "H:MM am|pm"   e.g. "9:05 am" (hour not padded)
    """
    mode = check_mode(mode)
    if value is None:
        return ""

    if mode == MODE_24H:
        return f"{two_digits(value.hour)}:{two_digits(value.minute)}"

    d = convert_hours_for_mode(value.hour, mode)
    return f"{d.display_hour}:{two_digits(value.minute)} {'pm' if d.is_pm else 'am'}"


def truncate_to_minute(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    return value.replace(second=0, microsecond=0)


def on_date(bound: Optional[datetime], day: date) -> Optional[datetime]:
    """Moves a bound onto `day`, keeping its time of day."""
    if bound is None:
        return None
    return bound.replace(year=day.year, month=day.month, day=day.day)


# -----------------------------
# Range checks
# -----------------------------
def is_date_in_range(
    min_date: Optional[datetime],
    max_date: Optional[datetime],
    value: Optional[datetime],
) -> bool:
    """
    Inclusive bounds check. No value is always in range; a missing bound
    removes that side's constraint.
    """
    if value is None:
        return True
    if min_date is not None and value < min_date:
        return False
    if max_date is not None and value > max_date:
        return False
    return True


def _to_24h(hour: int, meridiem: Optional[str]) -> int:
    m = (meridiem or "").lower()
    if m == "am" and hour == 12:
        return 0
    if m == "pm" and hour < 12:
        return hour + 12
    return hour


def is_allowed(
    hour: int,
    minute: int,
    min_date: Optional[datetime],
    max_date: Optional[datetime],
    mode: str,
    meridiem: Optional[str] = None,
) -> bool:
    """
    True if hour:minute is selectable under the given bounds.

    Only the time of day is compared: the candidate is placed on each
    bound's own date before comparing against that bound.
    In 12h mode with a meridiem, `hour` is read on the 12-hour dial.
    """
    mode = check_mode(mode)
    if mode == MODE_12H and meridiem:
        hour = _to_24h(hour, meridiem)

    if not (0 <= hour <= 23) or not (0 <= minute <= 59):
        return False

    if min_date is not None:
        candidate = min_date.replace(hour=hour, minute=minute, second=0, microsecond=0)
        if not is_date_in_range(min_date, None, candidate):
            return False

    if max_date is not None:
        candidate = max_date.replace(hour=hour, minute=minute, second=0, microsecond=0)
        if not is_date_in_range(None, max_date, candidate):
            return False

    return True
