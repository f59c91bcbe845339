import argparse
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from timeentry.core.settings import load_settings
from timeentry.logger import setup_logger
from timeentry.ui.main_window import MainWindow


def main() -> int:
    ap = argparse.ArgumentParser(prog="timeentry", description="Time entry form demo.")
    ap.add_argument("--settings", type=Path, default=None, help="Path to a settings JSON file.")
    ap.add_argument("--debug", action="store_true", help="Log at DEBUG level.")
    args, qt_args = ap.parse_known_args()

    log = setup_logger("timeentry", debug=args.debug)
    try:
        settings = load_settings(args.settings)
    except ValueError as e:
        log.error("%s", e)
        return 2

    app = QApplication([sys.argv[0], *qt_args])
    win = MainWindow(settings)
    win.resize(420, 180)
    win.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
