"""Utility modules for the WatchCompass service."""

from watchcompass.utils.cache import (
    CacheStore,
    CacheStoreError,
    MemoryCacheStore,
    RedisCacheStore,
    create_cache_store,
)
from watchcompass.utils.logging import get_logger, LogContext, setup_logging
from watchcompass.utils.retry import backoff_delay, is_transient_status, RetryConfig

__all__ = [
    # Cache
    "CacheStore",
    "CacheStoreError",
    "MemoryCacheStore",
    "RedisCacheStore",
    "create_cache_store",
    # Logging
    "get_logger",
    "LogContext",
    "setup_logging",
    # Retry
    "backoff_delay",
    "is_transient_status",
    "RetryConfig",
]
