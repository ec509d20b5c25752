from __future__ import annotations

from typing import Callable, Optional

from django.conf import settings
from django.core.cache import caches

from .stats import UserStats, compute_user_stats

USER_STATS_CACHE_ALIAS = "user_stats"
USER_STATS_CACHE_PREFIX = "users:stats"


def user_stats_cache():
    return caches[USER_STATS_CACHE_ALIAS]


def user_stats_cache_key(user_id) -> str:
    return f"{USER_STATS_CACHE_PREFIX}:{user_id}"


def user_stats_cache_timeout() -> int:
    return getattr(settings, "CACHE_TTL_USER_STATS", 30)


def get_or_compute_user_stats(
    user_id, compute: Optional[Callable[[object], UserStats]] = None
) -> UserStats:
    cache = user_stats_cache()
    key = user_stats_cache_key(user_id)
    cached = cache.get(key)
    if cached is not None:
        return UserStats(**cached)
    stats = (compute or compute_user_stats)(user_id)
    cache.set(key, stats.as_dict(), timeout=user_stats_cache_timeout())
    return stats


def clear_user_stats_cache(user_id=None) -> None:
    """Drop one user's cached stats, or every entry when no id is given."""
    if user_id is not None:
        user_stats_cache().delete(user_stats_cache_key(user_id))
        return
    user_stats_cache().clear()
