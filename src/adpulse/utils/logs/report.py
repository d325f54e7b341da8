"""Process-wide logging setup for adpulse modules.

Usage at the top of a module::

    from adpulse.utils.logs import report

    logger = report.settings(__file__)

The first call configures the ``adpulse`` root logger (stream handler plus an
optional file handler); later calls only hand out child loggers.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

ROOT_LOGGER = "adpulse"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def _module_name(source_file: str) -> str:
    """Map ``.../src/adpulse/analysis/filters.py`` to ``adpulse.analysis.filters``."""
    path = Path(source_file).with_suffix("")
    parts = path.parts
    if ROOT_LOGGER in parts:
        idx = len(parts) - 1 - parts[::-1].index(ROOT_LOGGER)
        return ".".join(parts[idx:])
    return f"{ROOT_LOGGER}.{path.name}"


def _configure_root() -> logging.Logger:
    global _configured
    root = logging.getLogger(ROOT_LOGGER)
    if _configured:
        return root

    level_name = os.getenv("ADPULSE_LOG_LEVEL", "INFO").upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    log_file = os.getenv("ADPULSE_LOG_FILE")
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
    root.handlers = handlers
    # records must still reach the root logger (pytest caplog listens there)
    root.propagate = True
    _configured = True
    return root


def settings(source_file: str) -> logging.Logger:
    """Return the logger for the module living at *source_file*."""
    _configure_root()
    return logging.getLogger(_module_name(source_file))


__all__ = ["settings", "ROOT_LOGGER"]
