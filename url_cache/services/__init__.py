from .cache import (
    CleanupResult,
    cleanup,
    clear_all,
    fetch,
    refresh_entry,
    statistics,
    store,
    warm_popular_expired,
)
from .metadata import get_metadata

__all__ = [
    "CleanupResult",
    "cleanup",
    "clear_all",
    "fetch",
    "get_metadata",
    "refresh_entry",
    "statistics",
    "store",
    "warm_popular_expired",
]
