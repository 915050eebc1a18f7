"""Root logger setup shared by the CLI and the GUI."""
from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)s"


def setup_logging(level: str = "WARNING") -> None:
    lvl = getattr(logging, level.upper(), logging.WARNING)
    root = logging.getLogger()
    root.setLevel(lvl)

    # Replace handlers (avoid duplicate output when the app is relaunched in-process)
    root.handlers = []

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(lvl)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
