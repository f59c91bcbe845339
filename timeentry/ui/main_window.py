# timeentry/ui/main_window.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from PySide6.QtWidgets import QFormLayout, QLabel, QMainWindow, QVBoxLayout, QWidget

from timeentry.core.clock import format_display
from timeentry.core.settings import PickerSettings
from timeentry.ui.widgets.time_picker_edit import TimePickerEdit


class MainWindow(QMainWindow):
    """Single-form window hosting one time field and its validation status."""

    def __init__(self, settings: Optional[PickerSettings] = None) -> None:
        super().__init__()
        self.setWindowTitle("Time Entry")

        self._settings = settings or PickerSettings()

        central = QWidget(self)
        root = QVBoxLayout(central)
        root.setContentsMargins(16, 16, 16, 16)

        form = QFormLayout()
        self.time_edit = TimePickerEdit(self._settings, parent=central)
        form.addRow("Time", self.time_edit)

        lo, hi = self.time_edit.state.min_date, self.time_edit.state.max_date
        mode = self.time_edit.state.mode
        range_text = f"{format_display(lo, mode) or 'any'} - {format_display(hi, mode) or 'any'}"
        form.addRow("Allowed", QLabel(range_text))

        self.lbl_status = QLabel("")
        self.lbl_status.setWordWrap(True)
        form.addRow("Value", self.lbl_status)
        root.addLayout(form)
        root.addStretch(1)

        self.setCentralWidget(central)

        self.time_edit.value_changed.connect(self._on_value_changed)
        self.time_edit.apply_default()

    def _on_value_changed(self, value: Optional[datetime]) -> None:
        r = self.time_edit.validate()
        if value is None:
            self.lbl_status.setText("(empty)")
        elif r.ok:
            self.lbl_status.setText(value.isoformat(sep=" ", timespec="minutes"))
        else:
            self.lbl_status.setText("; ".join(r.messages()))
