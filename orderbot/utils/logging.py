"""Logging configuration for the server and headless runs."""

from __future__ import annotations

import logging
import sys
from typing import Iterable

# The UI polls /state several times a second; per-request access lines drown
# out engine events.
NOISY_LOGGERS = ("uvicorn.access",)


def setup_logging(level: str = "INFO", quiet: Iterable[str] = NOISY_LOGGERS) -> None:
    """Route all records to stdout in the engine's line format.

    Loggers named in *quiet* are held at WARNING unless *level* is stricter.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(levelname)-5s] %(name)-25s | %(message)s",
        datefmt="%H:%M:%S",
    ))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in quiet:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
