from __future__ import annotations

import logging

from ..errors import FallbackReason


def log_fallback(logger: logging.Logger, reason: FallbackReason, message: str) -> None:
    """Log a standardized fallback message at debug level.

    Args:
        logger: Logger instance to emit the message.
        reason: Fallback reason code.
        message: Human-readable detail message.
    """
    logger.debug("[%s] %s", reason.value, message)
