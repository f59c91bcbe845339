# timeentry/ui/dialogs/out_of_range_notice.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from PySide6.QtWidgets import QMessageBox, QWidget

from timeentry.core.clock import format_display


def out_of_range_message(direction: Optional[str], bound: Optional[datetime], mode: str) -> str:
    """
    "below" -> "... earliest allowed time is 10:00 ..."
    "above" -> "... latest allowed time is 18:00 ..."
    """
    shown = format_display(bound, mode)
    if direction == "below":
        return f"The entered time is too early. The earliest allowed time is {shown}; it has been used instead."
    if direction == "above":
        return f"The entered time is too late. The latest allowed time is {shown}; it has been used instead."
    return "The entered time is outside the allowed range."


def show_out_of_range_notice(
    parent: Optional[QWidget],
    direction: Optional[str],
    bound: Optional[datetime],
    mode: str,
) -> QMessageBox:
    """Non-blocking notice; returned so callers can close it."""
    box = QMessageBox(parent)
    box.setIcon(QMessageBox.Warning)
    box.setWindowTitle("Invalid Time")
    box.setText(out_of_range_message(direction, bound, mode))
    box.setStandardButtons(QMessageBox.Ok)
    box.open()
    return box
