"""
Logging and structured event plumbing.

Callers (a UI store, a pipeline) may pass an ``emit(kind, payload)``
callback into the heavier engine calls; every message is also written to
the standard ``logging`` hierarchy under ``concept_graphs``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from .config import EngineConfig


# Event emitter signature
EmitFn = Callable[[str, Dict[str, Any]], None]

DEFAULT_EMIT: EmitFn = lambda *_: None

logger = logging.getLogger("concept_graphs")


def get_emit(emit: Optional[EmitFn]) -> EmitFn:
    return emit if emit else DEFAULT_EMIT


def log_event(
    msg: str,
    emit: Optional[EmitFn],
    *,
    log: logging.Logger = logger,
    level: int = logging.DEBUG,
    **payload: Any,
) -> None:
    """Write ``msg`` to ``log`` and forward it as a ``"log"`` event."""
    log.log(level, msg)
    if emit is None:
        return
    try:
        emit("log", {"message": msg, **payload})
    except Exception:
        log.exception("Event emitter failed for message: %s", msg)


def configure_logging(config: Optional[EngineConfig] = None) -> None:
    """Install a basic handler when logging is enabled in ``config``."""
    if config is None or not config.enable_logging:
        return
    level = getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level)
    logger.setLevel(level)
    logger.info("Concept graph engine logging enabled at %s", config.log_level)
