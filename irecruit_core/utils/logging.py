from __future__ import annotations
import logging
import os
from typing import Any, Optional

_ROOT = "irecruit"


def _level_from_env() -> int:
    name = os.getenv("IRECRUIT_LOG_LEVEL", "INFO").upper()
    return getattr(logging, name, logging.INFO)


class _EventFormatter(logging.Formatter):
    """Ajoute le payload structuré (extra={"extra": {...}}) à la ligne formatée."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        payload = getattr(record, "extra", None)
        if isinstance(payload, dict) and payload:
            pairs = " ".join(f"{k}={v!r}" for k, v in sorted(payload.items()))
            return f"{line} | {pairs}"
        return line


def get_logger(name: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name or _ROOT)
    if not logger.handlers:
        handler = logging.StreamHandler()
        fmt = os.getenv("IRECRUIT_LOG_FORMAT", "%(asctime)s %(levelname)s %(name)s: %(message)s")
        handler.setFormatter(_EventFormatter(fmt))
        logger.addHandler(handler)
        logger.setLevel(_level_from_env())
        logger.propagate = False
    return logger


def log_event(logger: logging.Logger, level: int, event: str, exc_info: bool = False, **payload: Any) -> None:
    """Raccourci: logger.log(level, event, extra={"extra": payload})."""
    logger.log(level, event, exc_info=exc_info, extra={"extra": payload})
