# motodb/utils/logging.py
"""
Logging Utilities — One Root Configuration for the Build

Intent
- Provide consistent logging across the build stages with a single configuration entrypoint.
- Keep handlers on the root logger only; modules just call `get_logger(__name__)`.

What this module guarantees
- **Idempotent root configuration:** `configure_logging()` never duplicates handlers across repeated calls.
- **Stable log format:** timestamps + level + logger name + message.
- **Optional log-to-file:** adds a FileHandler next to the stream handler, once per file.

Primary API
- `configure_logging(level="INFO", log_file=None) -> None`
  Configures root logging and can be safely re-called to change the level or add a file handler.

- `get_logger(name: str) -> logging.Logger`
  Returns a module logger. Lazily configures logging with defaults if not configured yet.

External dependencies
- Python stdlib: `logging`, `pathlib`
"""


from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Internal state to avoid duplicating handlers
_CONFIGURED = False
_CURRENT_LOG_FILE: Optional[str] = None


def resolve_level(level: str) -> int:
    """
    Map a level name ("info", "DEBUG", ...) to its logging constant.
    Raises ValueError for unknown names.
    """
    value = getattr(logging, str(level).upper(), None)
    if not isinstance(value, int):
        raise ValueError(f"Invalid log level: {level}")
    return value


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure root logging (idempotent for handlers).
    - Avoids handler duplication across repeated imports / calls.
    - If log_file is provided, adds a FileHandler in addition to StreamHandler.
    """
    global _CONFIGURED, _CURRENT_LOG_FILE

    root = logging.getLogger()
    root.setLevel(resolve_level(level))

    def _has_stream_handler() -> bool:
        return any(
            isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
            for h in root.handlers
        )

    def _has_file_handler(path: str) -> bool:
        target = Path(path).resolve()
        for h in root.handlers:
            if isinstance(h, logging.FileHandler) and Path(h.baseFilename).resolve() == target:
                return True
        return False

    formatter = logging.Formatter(fmt=_DEFAULT_FORMAT, datefmt=_DEFAULT_DATEFMT)

    if not _has_stream_handler():
        sh = logging.StreamHandler()
        sh.setFormatter(formatter)
        root.addHandler(sh)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        if not _has_file_handler(log_file):
            fh = logging.FileHandler(log_file, encoding="utf-8")
            fh.setFormatter(formatter)
            root.addHandler(fh)
        _CURRENT_LOG_FILE = log_file

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger with consistent configuration.

    Notes:
    - We configure logging lazily with INFO level by default, unless configured already.
    - We avoid adding per-logger handlers (handlers live on root).
    """
    if not _CONFIGURED:
        configure_logging(level="INFO", log_file=None)
    return logging.getLogger(name)


__all__ = ["get_logger", "configure_logging", "resolve_level"]
