from __future__ import annotations

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(name: str = "timeentry", debug: bool = False, stream: Optional[object] = None) -> logging.Logger:
    """
    Configures the package logger once; repeated calls only adjust the level.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    if not any(getattr(h, "_timeentry", False) for h in logger.handlers):
        handler = logging.StreamHandler(stream)  # type: ignore[arg-type]
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._timeentry = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
