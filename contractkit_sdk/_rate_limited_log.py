"""
Thread-safe rate-limited logging.

Best-effort paths (such as the gas price oracle falling back to its default)
may run in tight polling loops. Their warnings go through here so the same
message is emitted at most once per interval.
"""
import logging
import threading
from typing import Optional

from cachetools import TTLCache

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 60

_log_cache: TTLCache = TTLCache(maxsize=100, ttl=DEFAULT_INTERVAL)
_log_cache_lock = threading.RLock()


def rate_limited_log(
    message: str,
    level: str = "warning",
    key: Optional[str] = None,
    logger_instance: Optional[logging.Logger] = None
) -> bool:
    """
    Log a message unless the same key was logged within the interval.

    Args:
        message: Message to log
        level: Log level (debug, info, warning, error, critical)
        key: Deduplication key; defaults to level + message
        logger_instance: Logger to use (defaults to module logger)

    Returns:
        True if the message was emitted, False if it was suppressed
    """
    log_instance = logger_instance or logger
    log_method = getattr(log_instance, level.lower(), log_instance.warning)
    cache_key = key or f"{level}:{message}"

    with _log_cache_lock:
        if cache_key in _log_cache:
            return False
        log_method(message)
        _log_cache[cache_key] = True
    return True


def clear() -> None:
    """Forget all suppressed keys."""
    with _log_cache_lock:
        _log_cache.clear()
