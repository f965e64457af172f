from __future__ import annotations

import logging
import sys
from contextvars import ContextVar, Token
from typing import Optional

ROOT_LOGGER = "vidscribe"
_FMT = "[%(levelname)s] %(name)s: %(message)s"


def _ensure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if root.handlers:
        return root
    root.setLevel(logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FMT))
    root.addHandler(handler)
    return root


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    # Child loggers ("vidscribe.jobs", ...) propagate to the package root handler.
    _ensure_root()
    return logging.getLogger(name)


def configure_logging(
    *,
    logger_name: str = ROOT_LOGGER,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    log_path: Optional[str] = None,
) -> logging.Logger:
    """
    Process-level logging baseline.

    - console -> stderr at console_level
    - optional file handler at file_level
    Re-running replaces previously installed handlers (no accumulation).
    """
    logger = logging.getLogger(logger_name)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    logger.setLevel(min(console_level, file_level) if log_path else console_level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(_FMT))
    logger.addHandler(console)

    if log_path:
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter("%(asctime)s " + _FMT))
        logger.addHandler(fh)

    return logger


def level_from_name(name: str) -> int:
    lvl = logging.getLevelName((name or "INFO").strip().upper())
    return lvl if isinstance(lvl, int) else logging.INFO


# Request correlation id for log lines emitted while serving an API request.
_trace_id: ContextVar[Optional[str]] = ContextVar("vidscribe_trace_id", default=None)


def set_trace_id(trace_id: Optional[str]) -> Token:
    return _trace_id.set(trace_id)


def clear_trace_id(token: Token) -> None:
    _trace_id.reset(token)


def get_trace_id() -> Optional[str]:
    return _trace_id.get()
