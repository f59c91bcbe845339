# timeentry/core/allowed_map.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union

from timeentry.core.clock import (
    MODE_12H,
    MODE_24H,
    ClockMode,
    check_mode,
    convert_hours_for_mode,
    is_allowed,
)

logger = logging.getLogger(__name__)

# hour -> selectable flag per minute (index 0..59)
HourMinuteTable = Mapping[int, Tuple[bool, ...]]


def _lookup(table: HourMinuteTable, hour: int, minute: int) -> bool:
    row = table.get(hour)
    if row is None or not (0 <= minute < len(row)):
        return False
    return row[minute]


@dataclass(frozen=True)
class FlatAllowedMap:
    """24h layout: hour (0..23) -> minute flags."""

    table: HourMinuteTable
    mode: ClockMode = MODE_24H

    def is_allowed(self, hour: int, minute: int, meridiem: Optional[str] = None) -> bool:
        return _lookup(self.table, hour, minute)


@dataclass(frozen=True)
class MeridiemAllowedMap:
    """12h layout: am/pm -> display hour (1..12) -> minute flags."""

    am: HourMinuteTable
    pm: HourMinuteTable
    mode: ClockMode = MODE_12H

    def table_for(self, meridiem: str) -> HourMinuteTable:
        return self.pm if meridiem.lower() == "pm" else self.am

    def is_allowed(self, hour: int, minute: int, meridiem: Optional[str] = None) -> bool:
        """
        With a meridiem, `hour` is a display hour (1..12).
        Without one, `hour` is read as 0..23 and mapped onto the dial.
        """
        if meridiem is None:
            if not (0 <= hour <= 23):
                return False
            d = convert_hours_for_mode(hour, MODE_12H)
            return _lookup(self.pm if d.is_pm else self.am, d.display_hour, minute)
        return _lookup(self.table_for(meridiem), hour, minute)


AllowedMap = Union[FlatAllowedMap, MeridiemAllowedMap]

_CacheKey = Tuple[str, Optional[datetime], Optional[datetime]]


def _freeze(rows: Dict[int, List[bool]]) -> HourMinuteTable:
    return MappingProxyType({h: tuple(flags) for h, flags in rows.items()})


def build_allowed_map(
    mode: str,
    min_date: Optional[datetime],
    max_date: Optional[datetime],
) -> AllowedMap:
    """
    Precomputes selectability for all 1440 minutes of a day.
    """
    mode = check_mode(mode)

    if mode == MODE_24H:
        flat: Dict[int, List[bool]] = {}
        for h in range(24):
            flat[h] = [is_allowed(h, m, min_date, max_date, MODE_24H) for m in range(60)]
        return FlatAllowedMap(table=_freeze(flat))

    halves: Dict[str, Dict[int, List[bool]]] = {"am": {}, "pm": {}}
    for h in range(24):
        meridiem = "am" if h < 12 else "pm"
        display_hour = convert_hours_for_mode(h, MODE_12H).display_hour
        halves[meridiem][display_hour] = [
            is_allowed(h, m, min_date, max_date, MODE_24H) for m in range(60)
        ]
    return MeridiemAllowedMap(am=_freeze(halves["am"]), pm=_freeze(halves["pm"]))


class AllowedMapCache:
    """
    Keeps the current allowed map snapshot and rebuilds it only when the
    mode or the bound values change. Bounds are compared by value, so an
    equal datetime passed as a new object does not trigger a rebuild.
    """

    def __init__(self) -> None:
        self._snapshot: Optional[Tuple[_CacheKey, AllowedMap]] = None
        self.rebuilds: int = 0

    def get(
        self,
        mode: str,
        min_date: Optional[datetime],
        max_date: Optional[datetime],
    ) -> AllowedMap:
        key: _CacheKey = (mode, min_date, max_date)
        snapshot = self._snapshot
        if snapshot is not None and snapshot[0] == key:
            return snapshot[1]

        built = build_allowed_map(mode, min_date, max_date)
        # Key and map are replaced together in one assignment.
        self._snapshot = (key, built)
        self.rebuilds += 1
        logger.debug("Allowed map rebuilt (mode=%s, min=%s, max=%s)", mode, min_date, max_date)
        return built
