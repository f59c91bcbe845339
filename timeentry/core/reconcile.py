# timeentry/core/reconcile.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Optional

from timeentry.core.clock import on_date, truncate_to_minute

logger = logging.getLogger(__name__)

Direction = Literal["below", "above"]


@dataclass(frozen=True)
class ReconcileResult:
    value: Optional[datetime]
    out_of_range: bool = False
    direction: Optional[Direction] = None


def reconcile(
    candidate: Optional[datetime],
    min_date: Optional[datetime],
    max_date: Optional[datetime],
) -> ReconcileResult:
    """
    Clamp-to-bound policy for a candidate value.

    - candidate < min -> min, out of range "below"
    - candidate > max -> max, out of range "above"
    - otherwise       -> candidate unchanged

    Out-of-range values are never rejected. The committed value is always
    truncated to the minute. Only the time of day is compared: the bounds
    are moved onto the candidate's date, so a clamped value keeps that date.
    Whether to notify is the caller's decision.
    """
    if candidate is None:
        return ReconcileResult(value=None)

    day = candidate.date()
    min_date = truncate_to_minute(on_date(min_date, day))
    max_date = truncate_to_minute(on_date(max_date, day))

    if min_date is not None and candidate < min_date:
        logger.debug("Clamped %s up to minimum %s", candidate, min_date)
        return ReconcileResult(value=min_date, out_of_range=True, direction="below")

    if max_date is not None and candidate > max_date:
        logger.debug("Clamped %s down to maximum %s", candidate, max_date)
        return ReconcileResult(value=max_date, out_of_range=True, direction="above")

    return ReconcileResult(value=truncate_to_minute(candidate))


def default_value(
    now: datetime,
    min_date: Optional[datetime],
    max_date: Optional[datetime],
) -> datetime:
    """
    Initial value when none has been set: `now` on the minute, moved to the
    max (or min) hour/minute when it falls outside the bounds. The date of
    `now` is kept.
    """
    value = now.replace(second=0, microsecond=0)
    max_date = on_date(max_date, value.date())
    min_date = on_date(min_date, value.date())

    if max_date is not None and value > max_date:
        return value.replace(hour=max_date.hour, minute=max_date.minute)
    if min_date is not None and value < min_date:
        return value.replace(hour=min_date.hour, minute=min_date.minute)
    return value
