# timeentry/core/picker.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from timeentry.core.allowed_map import AllowedMap, AllowedMapCache
from timeentry.core.clock import (
    MODE_24H,
    check_mode,
    format_display,
    is_allowed,
    truncate_to_minute,
)
from timeentry.core.parser import ParseStatus, parse_time_text
from timeentry.core.reconcile import Direction, default_value, reconcile
from timeentry.core.rules import ValidationResult, validate_time_value
from timeentry.core.settings import PickerSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommitOutcome:
    """
    What a text edit or picker selection resolved to.

    - value: committed value (None when cleared)
    - changed: committed value differs from the previous one
    - notify: caller should show the out-of-range notice
    - direction: "below"/"above" when the candidate was clamped
    - status: parse status (OK for picker selections)
    """
    value: Optional[datetime]
    changed: bool
    notify: bool = False
    direction: Optional[Direction] = None
    status: ParseStatus = ParseStatus.OK

    @property
    def out_of_range(self) -> bool:
        return self.direction is not None


class TimePickerState:
    """
    Explicit picker state: mode, bounds, committed value and the allowed
    map snapshot. Holds no references to widgets; the UI reads outcomes and
    renders them.
    """

    def __init__(
        self,
        mode: str = MODE_24H,
        min_date: Optional[datetime] = None,
        max_date: Optional[datetime] = None,
        *,
        notify_out_of_range: bool = False,
        value: Optional[datetime] = None,
    ) -> None:
        self._mode = check_mode(mode)
        self._min_date = truncate_to_minute(min_date)
        self._max_date = truncate_to_minute(max_date)
        self._value = truncate_to_minute(value)
        self.notify_out_of_range = bool(notify_out_of_range)
        self._maps = AllowedMapCache()

    @classmethod
    def from_settings(cls, settings: PickerSettings, *, day: Optional[date] = None) -> "TimePickerState":
        lo, hi = settings.bounds_on(day or date.today())
        return cls(settings.mode, lo, hi, notify_out_of_range=settings.notify_out_of_range)

    # -------------------------
    # Configuration
    # -------------------------
    @property
    def mode(self) -> str:
        return self._mode

    def set_mode(self, mode: str) -> None:
        self._mode = check_mode(mode)

    @property
    def min_date(self) -> Optional[datetime]:
        return self._min_date

    @property
    def max_date(self) -> Optional[datetime]:
        return self._max_date

    def set_bounds(self, min_date: Optional[datetime], max_date: Optional[datetime]) -> None:
        self._min_date = truncate_to_minute(min_date)
        self._max_date = truncate_to_minute(max_date)

    @property
    def allowed_map(self) -> AllowedMap:
        return self._maps.get(self._mode, self._min_date, self._max_date)

    @property
    def allowed_map_rebuilds(self) -> int:
        return self._maps.rebuilds

    # -------------------------
    # Value
    # -------------------------
    @property
    def value(self) -> Optional[datetime]:
        return self._value

    def display_text(self) -> str:
        return format_display(self._value, self._mode)

    def write_value(self, value: Optional[datetime]) -> bool:
        """
        Programmatic set from the form model. Truncated, not clamped.
        Returns True if the stored value changed.
        """
        value = truncate_to_minute(value)
        if value == self._value:
            return False
        self._value = value
        return True

    def ensure_default(self, now: Optional[datetime] = None) -> Optional[datetime]:
        """Sets the initial value (kept inside the bounds) when none is set."""
        if self._value is None:
            self._value = default_value(now or datetime.now(), self._min_date, self._max_date)
        return self._value

    def _base_date(self) -> date:
        if self._value is not None:
            return self._value.date()
        return date.today()

    def commit_text(self, text: Optional[str]) -> CommitOutcome:
        """
        Parses typed text and commits the reconciled value.
        Empty or unparseable text clears the value and never notifies.
        """
        parsed = parse_time_text(text, self._mode, on=self._base_date())
        if not parsed.ok:
            changed = self.write_value(None)
            return CommitOutcome(value=None, changed=changed, status=parsed.status)

        return self._commit(parsed.value)

    def select(self, value: Optional[datetime]) -> CommitOutcome:
        """Direct selection from the picker surface."""
        if value is None:
            return CommitOutcome(value=self._value, changed=False)
        return self._commit(value)

    def _commit(self, candidate: Optional[datetime]) -> CommitOutcome:
        result = reconcile(candidate, self._min_date, self._max_date)
        changed = self.write_value(result.value)
        notify = result.out_of_range and self.notify_out_of_range
        if result.out_of_range:
            logger.info("Time %s is %s the allowed range; using %s", candidate, result.direction, result.value)
        return CommitOutcome(
            value=self._value,
            changed=changed,
            notify=notify,
            direction=result.direction,
        )

    # -------------------------
    # Validation
    # -------------------------
    def check_validity(self, value: Optional[datetime] = None) -> bool:
        """True if the value's time of day is selectable; None is never valid."""
        if value is None:
            value = self._value
        if value is None:
            return False
        return is_allowed(value.hour, value.minute, self._min_date, self._max_date, MODE_24H)

    def validate(self, *, field_name: str = "time", required: bool = False) -> ValidationResult:
        return validate_time_value(
            self._value,
            self._min_date,
            self._max_date,
            mode=self._mode,
            field_name=field_name,
            required=required,
        )
