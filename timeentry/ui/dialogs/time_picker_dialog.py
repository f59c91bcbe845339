# timeentry/ui/dialogs/time_picker_dialog.py
from __future__ import annotations

from datetime import date, datetime, time
from typing import List, Optional

from PySide6.QtCore import Qt, QSignalBlocker, Signal
from PySide6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QComboBox,
    QPushButton,
    QWidget,
)

from timeentry.core.allowed_map import AllowedMap
from timeentry.core.clock import MODE_12H, check_mode, convert_hours_for_mode, two_digits

_DIAL_12H: List[int] = [12] + list(range(1, 12))


class TimePickerDialog(QDialog):
    """
    Direct time selection surface.

    Behavior:
      - Hour and minute lists; entries the allowed map rejects are disabled.
      - 12h mode adds an am/pm selector and lists hours 12, 1..11.
      - OK is enabled only while the highlighted time is allowed.
      - OK returns the selection via selected_value(); Cancel leaves it unset.

    Notes:
      - The dialog never clamps. It only offers what the allowed map permits;
        the caller commits the value through TimePickerState.select().
    """

    selection_changed = Signal(object)  # datetime | None

    def __init__(
        self,
        *,
        mode: str,
        allowed_map: AllowedMap,
        value: Optional[datetime] = None,
        ok_label: str = "Ok",
        cancel_label: str = "Cancel",
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Select Time")
        self.setModal(True)

        self._mode = check_mode(mode)
        if allowed_map.mode != self._mode:
            raise ValueError(f"Allowed map is for {allowed_map.mode} mode, dialog is {self._mode}.")
        self._allowed = allowed_map
        self._base_date: date = value.date() if value is not None else date.today()
        self._result: Optional[datetime] = None

        root = QVBoxLayout(self)
        root.setContentsMargins(16, 16, 16, 16)
        root.setSpacing(10)

        root.addWidget(QLabel("Select a time:"))

        lists_row = QHBoxLayout()
        lists_row.setSpacing(6)

        self.hour_list = QListWidget()
        self.minute_list = QListWidget()
        lists_row.addWidget(self.hour_list, 1)
        lists_row.addWidget(self.minute_list, 1)

        self.cmb_meridiem: Optional[QComboBox] = None
        if self._mode == MODE_12H:
            self.cmb_meridiem = QComboBox()
            self.cmb_meridiem.addItems(["am", "pm"])
            lists_row.addWidget(self.cmb_meridiem)
        root.addLayout(lists_row)

        btn_row = QHBoxLayout()
        btn_row.addStretch(1)
        self.btn_cancel = QPushButton(cancel_label)
        self.btn_ok = QPushButton(ok_label)
        self.btn_ok.setEnabled(False)
        self.btn_cancel.clicked.connect(self.reject)
        self.btn_ok.clicked.connect(self._on_ok)
        btn_row.addWidget(self.btn_cancel)
        btn_row.addWidget(self.btn_ok)
        root.addLayout(btn_row)

        self._fill_hours()
        for m in range(60):
            item = QListWidgetItem(two_digits(m))
            item.setData(Qt.UserRole, m)
            self.minute_list.addItem(item)

        self.selection_changed.connect(self._on_selection_changed)
        self.hour_list.currentRowChanged.connect(self._on_hour_changed)
        self.minute_list.currentRowChanged.connect(self._emit_selection)
        if self.cmb_meridiem is not None:
            self.cmb_meridiem.currentIndexChanged.connect(self._on_meridiem_changed)

        if value is not None:
            self._preselect(value)
        else:
            self._refresh_minutes()
        self._emit_selection()

    # --------------------------
    # Public API
    # --------------------------
    def selected_value(self) -> Optional[datetime]:
        return self._result

    def current_selection(self) -> Optional[datetime]:
        """Hour/minute currently highlighted, or None if incomplete or not allowed."""
        hour_item = self.hour_list.currentItem()
        minute_item = self.minute_list.currentItem()
        if hour_item is None or minute_item is None:
            return None

        hour = int(hour_item.data(Qt.UserRole))
        minute = int(minute_item.data(Qt.UserRole))
        meridiem = self._meridiem()
        if not self._allowed.is_allowed(hour, minute, meridiem):
            return None

        if meridiem is not None:
            hour = hour % 12 + (12 if meridiem == "pm" else 0)
        return datetime.combine(self._base_date, time(hour, minute))

    # --------------------------
    # Internals
    # --------------------------
    def _meridiem(self) -> Optional[str]:
        if self.cmb_meridiem is None:
            return None
        return self.cmb_meridiem.currentText()

    def _hour_enabled(self, hour: int) -> bool:
        meridiem = self._meridiem()
        return any(self._allowed.is_allowed(hour, m, meridiem) for m in range(60))

    def _fill_hours(self) -> None:
        row = self.hour_list.currentRow()
        with QSignalBlocker(self.hour_list):
            self.hour_list.clear()
            hours = _DIAL_12H if self._mode == MODE_12H else list(range(24))
            for h in hours:
                label = str(h) if self._mode == MODE_12H else two_digits(h)
                item = QListWidgetItem(label)
                item.setData(Qt.UserRole, h)
                if not self._hour_enabled(h):
                    item.setFlags(item.flags() & ~Qt.ItemIsEnabled)
                self.hour_list.addItem(item)

            if row >= 0:
                self.hour_list.setCurrentRow(row)

    def _refresh_minutes(self) -> None:
        hour_item = self.hour_list.currentItem()
        meridiem = self._meridiem()
        for row in range(self.minute_list.count()):
            item = self.minute_list.item(row)
            m = int(item.data(Qt.UserRole))
            enabled = hour_item is not None and self._allowed.is_allowed(
                int(hour_item.data(Qt.UserRole)), m, meridiem
            )
            if enabled:
                item.setFlags(item.flags() | Qt.ItemIsEnabled)
            else:
                item.setFlags(item.flags() & ~Qt.ItemIsEnabled)

    def _preselect(self, value: datetime) -> None:
        d = convert_hours_for_mode(value.hour, self._mode)
        if self.cmb_meridiem is not None:
            with QSignalBlocker(self.cmb_meridiem):
                self.cmb_meridiem.setCurrentIndex(1 if d.is_pm else 0)
            self._fill_hours()
            self.hour_list.setCurrentRow(_DIAL_12H.index(d.display_hour))
        else:
            self.hour_list.setCurrentRow(value.hour)
        self._refresh_minutes()
        self.minute_list.setCurrentRow(value.minute)

    # --------------------------
    # Slots
    # --------------------------
    def _on_hour_changed(self, _row: int) -> None:
        self._refresh_minutes()
        self._emit_selection()

    def _on_meridiem_changed(self, _index: int) -> None:
        self._fill_hours()
        self._refresh_minutes()
        self._emit_selection()

    def _emit_selection(self, *_args) -> None:
        self.selection_changed.emit(self.current_selection())

    def _on_selection_changed(self, selected: Optional[datetime]) -> None:
        # OK only for a complete, allowed selection
        self.btn_ok.setEnabled(selected is not None)

    def _on_ok(self) -> None:
        selected = self.current_selection()
        if selected is None:
            return
        self._result = selected
        self.accept()
