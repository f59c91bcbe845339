# timeentry/core/parser.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Final, List, Optional, Tuple

from timeentry.core.clock import MODE_12H, check_mode

logger = logging.getLogger(__name__)

_MERIDIEM: Final[re.Pattern[str]] = re.compile(r"am|pm", re.IGNORECASE)
_TWO_CHARS: Final[re.Pattern[str]] = re.compile(r"(\d\d)")


class ParseStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    UNPARSEABLE = "unparseable"


@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of parse_time_text.

    - status: OK / EMPTY / UNPARSEABLE. Only OK carries a value.
    - hour, minute: clamped wall-clock numbers as typed (hour may be 24).
    - value: datetime on the base date, second/microsecond zeroed.
      Hours of 24 and above roll over into the following day.
    """
    status: ParseStatus
    hour: Optional[int] = None
    minute: Optional[int] = None
    value: Optional[datetime] = None

    @property
    def ok(self) -> bool:
        return self.status is ParseStatus.OK

    @property
    def clears_value(self) -> bool:
        return self.status is not ParseStatus.OK


EMPTY_RESULT: Final[ParseResult] = ParseResult(status=ParseStatus.EMPTY)
UNPARSEABLE_RESULT: Final[ParseResult] = ParseResult(status=ParseStatus.UNPARSEABLE)


def _to_int(part: Optional[str]) -> Optional[int]:
    """
    Blank parts count as 0 ("12:" -> 12:00). Anything but an optional sign
    followed by ASCII digits returns None ("1_0", non-ASCII digits).
    """
    if part is None:
        return None
    s = part.strip()
    if s == "":
        return 0
    digits = s[1:] if s[0] in "+-" else s
    if not (digits.isascii() and digits.isdigit()):
        return None
    return int(s)


def _split_parts(s: str) -> Tuple[Optional[str], Optional[str]]:
    """
    "9"     -> ("9", "0")
    "9:45"  -> ("9", "45")
    "0945"  -> ("09", "45")
    "130"   -> ("13", "0")
    """
    if len(s) in (1, 2):
        return s, "0"

    if ":" in s:
        parts = s.split(":")
        return parts[0], parts[1]

    groups: List[str] = [g for g in _TWO_CHARS.split(s) if g]
    hours = groups[0] if groups else None
    minutes = groups[1] if len(groups) > 1 else None
    return hours, minutes


def parse_time_text(
    text: Optional[str],
    mode: str = "24h",
    *,
    on: Optional[date] = None,
) -> ParseResult:
    """
    Parses free-text time entry.

    Accepts examples:
      - "9"       -> 09:00
      - "9:45am"  -> 09:45
      - "1630"    -> 16:30
      - "4:30 PM" -> 16:30
      - ""        -> EMPTY
      - "abc"     -> UNPARSEABLE

    Steps:
      1. Strip and remove the first am/pm token (any case).
      2. Split into hours/minutes (1-2 chars = hours only, colon form,
         or successive 2-char groups).
      3. Meridiem adjust: pm and hours < 12 -> +12; am and hours > 12 -> -12.
      4. Clamp hours (12h: below 1 -> 1; otherwise 0..24) and minutes (0..59).

    Never raises for bad text; only an unknown mode raises ValueError.
    """
    mode = check_mode(mode)
    s = (text or "").strip()
    if not s:
        return EMPTY_RESULT

    meridiem: Optional[str] = None
    m = _MERIDIEM.search(s)
    if m:
        meridiem = m.group(0).lower()
        s = (s[: m.start()] + s[m.end():]).strip()

    hours_part, minutes_part = _split_parts(s)
    hours = _to_int(hours_part)
    minutes = _to_int(minutes_part)
    if hours is None or minutes is None:
        logger.debug("Unparseable time input: %r", text)
        return UNPARSEABLE_RESULT

    if meridiem == "pm" and hours < 12:
        hours += 12
    elif meridiem == "am" and hours > 12:
        hours -= 12

    if mode == MODE_12H and hours < 1:
        hours = 1
    elif hours > 24:
        hours = 24
    elif hours < 0:
        hours = 0

    if minutes > 59:
        minutes = 59
    elif minutes < 0:
        minutes = 0

    base = on if on is not None else date.today()
    value = datetime.combine(base, time(0, 0)) + timedelta(hours=hours, minutes=minutes)
    return ParseResult(status=ParseStatus.OK, hour=hours, minute=minutes, value=value)
