import logging
from datetime import datetime
from functools import wraps
from typing import Any, Callable, Dict, Hashable, Optional


class CacheStats:
    """Hit/miss counters shared by the dashboard's in-memory caches."""

    def __init__(self):
        self.hits = 0
        self.misses = 0
        self.last_cleared: Optional[datetime] = None

    @property
    def total_requests(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Hit rate in percent, rounded to 2 decimals."""
        if self.total_requests == 0:
            return 0.0
        return round(self.hits / self.total_requests * 100, 2)

    def mark_cleared(self, when: Optional[datetime] = None) -> None:
        self.last_cleared = when or datetime.now()

    def reset(self) -> None:
        self.hits = 0
        self.misses = 0
        self.last_cleared = None

    def snapshot(self) -> Dict[str, Any]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "total_requests": self.total_requests,
            "hit_rate": self.hit_rate,
            "last_cleared": self.last_cleared.isoformat() if self.last_cleared else None,
        }

    def log(self, logger: logging.Logger) -> None:
        since = "never"
        if self.last_cleared:
            since = f"{round((datetime.now() - self.last_cleared).total_seconds())}s"
        logger.info(
            f"📊 Cache stats: hit rate {self.hit_rate:.2f}%, {self.hits} hits, "
            f"{self.misses} misses, cleared {since} ago"
        )


def get_cached_value(cache: Dict[Hashable, Any], key: Hashable, generator: Callable[[], Any],
                     stats: Optional[CacheStats] = None) -> Any:
    """Return cache[key], computing and storing it with generator() on a miss."""
    if key in cache:
        if stats is not None:
            stats.hits += 1
        return cache[key]
    if stats is not None:
        stats.misses += 1
    value = generator()
    cache[key] = value
    return value


def memoize(stats: Optional[CacheStats] = None):
    """Memoize a pure function by its positional arguments.

    The wrapped function exposes cache_clear() and the backing dict as .cache.
    """

    def decorator(func):
        cache: Dict[Hashable, Any] = {}

        @wraps(func)
        def wrapper(*args):
            return get_cached_value(cache, args, lambda: func(*args), stats)

        def cache_clear():
            cache.clear()
            if stats is not None:
                stats.mark_cleared()

        wrapper.cache = cache
        wrapper.cache_clear = cache_clear
        return wrapper

    return decorator
