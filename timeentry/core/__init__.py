from __future__ import annotations

from .clock import (
    CLOCK_MODES,
    MODE_12H,
    MODE_24H,
    ClockMode,
    HourDisplay,
    Meridiem,
    convert_hours_for_mode,
    format_display,
    is_allowed,
    is_date_in_range,
    truncate_to_minute,
    two_digits,
)
from .allowed_map import AllowedMap, AllowedMapCache, FlatAllowedMap, MeridiemAllowedMap, build_allowed_map
from .parser import ParseResult, ParseStatus, parse_time_text
from .reconcile import ReconcileResult, default_value, reconcile
from .picker import CommitOutcome, TimePickerState
