# src/guessing_game/utils/logging.py
"""Logging helpers for the guessing game.

Game messages are written to stdout by the engine; log records always go to
stderr (and optionally a file) so the two never interleave on one stream.
Records are tagged with the ``stage`` passed via ``extra`` (``cli``, ``game``).
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from guessing_game.config import IOConfig

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(stage)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _StageDefault(logging.Filter):
    """Give records logged without ``extra={"stage": ...}`` a placeholder stage."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "stage"):
            record.stage = "-"
        return True


def parse_level(level: str | int) -> int:
    """Normalize a logging level string or integer to ``logging`` constants."""
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return int(level)


def configure_logging(*, level: str | int = "WARNING", log_file: str | Path | None = None) -> int:
    """Configure root logging once and return the numeric level applied.

    Parameters
    ----------
    level:
        Logging level as string (e.g., "INFO") or numeric (e.g., logging.INFO).
        Unknown names fall back to INFO.
    log_file:
        Optional file to tee logs to. Parent dirs are created and UTF-8 is used.
    """
    numeric = parse_level(level)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        p = Path(log_file)
        p.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(p, encoding="utf-8"))
    for handler in handlers:
        handler.addFilter(_StageDefault())

    logging.basicConfig(
        level=numeric,
        handlers=handlers,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        force=True,  # ensure a clean config when re-running in notebooks/CLIs
    )
    return numeric


def configure_from_io(
    io_cfg: IOConfig, *, level: str | int | None = None, log_file: Path | None = None
) -> int:
    """Configure logging from ``io_cfg``; explicit *level*/*log_file* win."""
    return configure_logging(
        level=level if level is not None else io_cfg.log_level,
        log_file=log_file if log_file is not None else io_cfg.log_file,
    )


__all__ = ["LOG_FORMAT", "configure_from_io", "configure_logging", "parse_level"]
