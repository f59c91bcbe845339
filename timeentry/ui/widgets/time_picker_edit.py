# timeentry/ui/widgets/time_picker_edit.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from PySide6.QtCore import Qt, Signal, QRegularExpression
from PySide6.QtGui import QFocusEvent, QRegularExpressionValidator
from PySide6.QtWidgets import QLineEdit, QMessageBox

from timeentry.core.picker import CommitOutcome, TimePickerState
from timeentry.core.rules import ValidationResult
from timeentry.core.settings import PickerSettings
from timeentry.ui.dialogs.out_of_range_notice import show_out_of_range_notice
from timeentry.ui.dialogs.time_picker_dialog import TimePickerDialog


class TimePickerEdit(QLineEdit):
    """
    Free-text time input backed by TimePickerState.

    Behavior:
      - Accepts typing like "930", "9:30", "9:30 pm", "21".
      - On editingFinished the text is parsed, clamped to the bounds and
        re-rendered as "HH:MM" (24h) or "H:MM am|pm" (12h).
      - Empty or unreadable text clears the value.
      - Gaining focus opens the picker dialog unless disabled in settings.

    Emits:
      - value_changed(datetime|None) when the committed value changes
      - out_of_range(str) with "below"/"above" when the notice is shown
    """

    value_changed = Signal(object)  # datetime | None
    out_of_range = Signal(str)

    def __init__(self, settings: Optional[PickerSettings] = None, parent: Optional[object] = None) -> None:
        super().__init__(parent)

        self._settings = settings or PickerSettings()
        self._state = TimePickerState.from_settings(self._settings)
        self._dialog: Optional[TimePickerDialog] = None
        self._notice: Optional[QMessageBox] = None

        # Digits, colon, spaces and am/pm letters while typing. Parsing decides the rest.
        rx = QRegularExpression(r"^[0-9:\s aApPmM]{0,10}$")
        self.setValidator(QRegularExpressionValidator(rx, self))

        self.setAlignment(Qt.AlignLeft | Qt.AlignVCenter)
        self.setPlaceholderText(self._settings.placeholder or ("H:MM am" if self._state.mode == "12h" else "HH:MM"))
        self.editingFinished.connect(self._commit_now)

    # -------------------------
    # Configuration
    # -------------------------
    @property
    def state(self) -> TimePickerState:
        return self._state

    def set_mode(self, mode: str) -> None:
        self._state.set_mode(mode)
        self._render()

    def set_bounds(self, min_date: Optional[datetime], max_date: Optional[datetime]) -> None:
        self._state.set_bounds(min_date, max_date)

    def set_notify_out_of_range(self, enabled: bool) -> None:
        self._state.notify_out_of_range = bool(enabled)

    # -------------------------
    # Value
    # -------------------------
    def value(self) -> Optional[datetime]:
        return self._state.value

    def set_value(self, value: Optional[datetime]) -> None:
        """Programmatic set; does not emit value_changed."""
        self._state.write_value(value)
        self._render()

    def apply_default(self, now: Optional[datetime] = None) -> Optional[datetime]:
        changed = self._state.value is None
        out = self._state.ensure_default(now)
        self._render()
        if changed:
            self.value_changed.emit(out)
        return out

    def validate(self, *, required: bool = False) -> ValidationResult:
        return self._state.validate(required=required)

    # -------------------------
    # Picker
    # -------------------------
    def open_picker(self) -> Optional[TimePickerDialog]:
        if self._dialog is not None or not self.isEnabled():
            return self._dialog

        dlg = TimePickerDialog(
            mode=self._state.mode,
            allowed_map=self._state.allowed_map,
            value=self._state.value,
            ok_label=self._settings.ok_label,
            cancel_label=self._settings.cancel_label,
            parent=self,
        )
        dlg.finished.connect(self._on_picker_finished)
        self._dialog = dlg
        dlg.open()
        return dlg

    def focusInEvent(self, event: QFocusEvent) -> None:
        super().focusInEvent(event)
        if self._settings.open_dialog_on_click and self._dialog is None:
            self.open_picker()

    # -------------------------
    # Internal
    # -------------------------
    def _render(self) -> None:
        self.setText(self._state.display_text())

    def _commit_now(self) -> None:
        self._apply(self._state.commit_text(self.text()))

    def _apply(self, outcome: CommitOutcome) -> None:
        self._render()
        if outcome.changed:
            self.value_changed.emit(outcome.value)
        if outcome.notify and outcome.direction is not None:
            bound = self._state.min_date if outcome.direction == "below" else self._state.max_date
            self._notice = show_out_of_range_notice(self, outcome.direction, bound, self._state.mode)
            self.out_of_range.emit(outcome.direction)

    def _on_picker_finished(self, _result: int) -> None:
        dlg, self._dialog = self._dialog, None
        # selected_value is only set when OK was accepted
        if dlg is None or dlg.selected_value() is None:
            return
        self._apply(self._state.select(dlg.selected_value()))
