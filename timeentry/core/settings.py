from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from timeentry.core.clock import MODE_24H, check_mode

SETTINGS_ENV = "TIMEENTRY_SETTINGS"


def _settings_path() -> Path:
    # timeentry/core/settings.py -> timeentry/settings.json
    return Path(__file__).resolve().parent.parent / "settings.json"


def _parse_hhmm(key: str, raw: Any) -> Optional[time]:
    if raw is None or raw == "":
        return None
    s = str(raw).strip()
    parts = s.split(":")
    if len(parts) != 2 or not parts[0].isdigit() or not parts[1].isdigit():
        raise ValueError(f"Setting '{key}' must be HH:MM, got {raw!r}.")
    hh, mm = int(parts[0]), int(parts[1])
    if not (0 <= hh <= 23) or not (0 <= mm <= 59):
        raise ValueError(f"Setting '{key}' is out of range: {raw!r}.")
    return time(hh, mm)


@dataclass(frozen=True)
class PickerSettings:
    mode: str = MODE_24H
    min_time: Optional[time] = None
    max_time: Optional[time] = None
    notify_out_of_range: bool = False
    ok_label: str = "Ok"
    cancel_label: str = "Cancel"
    placeholder: str = ""
    open_dialog_on_click: bool = True

    def bounds_on(self, day: date) -> Tuple[Optional[datetime], Optional[datetime]]:
        """Bounds as datetimes on the given day."""
        lo = datetime.combine(day, self.min_time) if self.min_time is not None else None
        hi = datetime.combine(day, self.max_time) if self.max_time is not None else None
        return lo, hi

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PickerSettings":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown setting(s): {', '.join(unknown)}.")

        kwargs: Dict[str, Any] = dict(data)
        if "mode" in kwargs:
            try:
                kwargs["mode"] = check_mode(kwargs["mode"])
            except ValueError as e:
                raise ValueError(f"Setting 'mode': {e}") from e
        for key in ("min_time", "max_time"):
            if key in kwargs:
                kwargs[key] = _parse_hhmm(key, kwargs[key])
        for key in ("notify_out_of_range", "open_dialog_on_click"):
            if key in kwargs and not isinstance(kwargs[key], bool):
                raise ValueError(f"Setting '{key}' must be true or false.")
        return cls(**kwargs)


def load_settings(path: Optional[Path] = None) -> PickerSettings:
    """
    Loads picker settings from JSON.
    Lookup order: explicit path, $TIMEENTRY_SETTINGS, timeentry/settings.json.
    A missing file yields defaults.
    """
    if path is None:
        env = os.environ.get(SETTINGS_ENV)
        path = Path(env) if env else _settings_path()

    if not path.exists():
        return PickerSettings()

    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid settings file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Settings file must contain a JSON object: {path}")
    return PickerSettings.from_dict(data)
