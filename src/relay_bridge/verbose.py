from __future__ import annotations

import logging

logger = logging.getLogger("relay_bridge.verbose")

_verbose = False


def set_verbose(enabled: bool) -> None:
    global _verbose
    _verbose = bool(enabled)


def is_verbose() -> bool:
    return _verbose


def log_verbose(message: str) -> None:
    """Emit a diagnostic line, only while verbose mode is on."""
    if _verbose:
        logger.info(message)
