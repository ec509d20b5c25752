import pytest

from users.cache import (
    clear_user_stats_cache,
    get_or_compute_user_stats,
    user_stats_cache,
    user_stats_cache_key,
    user_stats_cache_timeout,
)
from users.stats import UserStats


def _counter():
    calls = []

    def _compute(user_id):
        calls.append(user_id)
        return UserStats(messages_sent_count=len(calls))

    return _compute, calls


def test_timeout_follows_settings(settings):
    settings.CACHE_TTL_USER_STATS = 5
    assert user_stats_cache_timeout() == 5


def test_second_lookup_is_served_from_cache():
    compute, calls = _counter()
    first = get_or_compute_user_stats("u1", compute)
    second = get_or_compute_user_stats("u1", compute)
    assert first == second == UserStats(messages_sent_count=1)
    assert calls == ["u1"]


def test_entries_are_per_user():
    compute, calls = _counter()
    get_or_compute_user_stats("u1", compute)
    get_or_compute_user_stats("u2", compute)
    assert calls == ["u1", "u2"]


def test_expired_entry_is_recomputed(settings):
    settings.CACHE_TTL_USER_STATS = 0
    compute, calls = _counter()
    get_or_compute_user_stats("u1", compute)
    get_or_compute_user_stats("u1", compute)
    assert calls == ["u1", "u1"]


@pytest.mark.parametrize("target", ["u1", None])
def test_clear_drops_entries(target):
    compute, calls = _counter()
    get_or_compute_user_stats("u1", compute)
    clear_user_stats_cache(target)
    assert user_stats_cache().get(user_stats_cache_key("u1")) is None
    get_or_compute_user_stats("u1", compute)
    assert calls == ["u1", "u1"]


def test_clear_one_user_keeps_the_others():
    compute, calls = _counter()
    get_or_compute_user_stats("u1", compute)
    get_or_compute_user_stats("u2", compute)
    clear_user_stats_cache("u1")
    assert user_stats_cache().get(user_stats_cache_key("u2")) is not None
