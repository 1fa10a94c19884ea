"""Logging setup and helpers for safe structured log fields."""

from __future__ import annotations

import hashlib
import logging
from typing import Any

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach a console handler to the root logger unless one is already present."""
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)


def safe_log_identifier(value: Any, *, prefix: str) -> str:
    """Return a short deterministic digest so request ids can be correlated without being logged raw."""
    text = str(value or "").strip()
    if not text:
        return f"{prefix}-missing"

    return f"{prefix}-{hashlib.sha256(text.encode('utf-8')).hexdigest()[:12]}"
