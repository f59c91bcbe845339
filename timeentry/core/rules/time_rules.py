from __future__ import annotations

from datetime import datetime
from typing import Optional

from . import ValidationResult
from timeentry.core.clock import format_display, is_date_in_range, on_date


def validate_time_value(
    value: Optional[datetime],
    min_date: Optional[datetime],
    max_date: Optional[datetime],
    *,
    mode: str = "24h",
    field_name: str = "time",
    required: bool = False,
) -> ValidationResult:
    """
    Range validation for a committed time value.
    - Missing value is valid unless required.
    - Time of day must lie within [min, max] (inclusive, either side optional);
      the bounds are compared on the value's own date.
    """
    r = ValidationResult()

    if value is None:
        if required:
            r.add_field_error(field_name, "Time is required.")
        return r

    lo = on_date(min_date, value.date())
    hi = on_date(max_date, value.date())
    if is_date_in_range(lo, hi, value):
        return r

    if lo is not None and value < lo:
        r.add_field_error(field_name, f"Time must not be earlier than {format_display(min_date, mode)}.")
    else:
        r.add_field_error(field_name, f"Time must not be later than {format_display(max_date, mode)}.")
    return r
