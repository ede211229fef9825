"""Logging configuration helpers."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s hookchain [%(name)s] %(message)s"


def resolve_level(level: str | int) -> int:
    """Accept ``"debug"``, ``"DEBUG"``, ``"10"`` or ``10``."""
    if isinstance(level, int):
        return level
    normalized = level.strip().upper()
    if normalized.isdigit():
        return int(normalized)
    resolved = logging.getLevelName(normalized)
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(level: str | int = "INFO") -> None:
    logging.basicConfig(level=resolve_level(level), format=LOG_FORMAT)
