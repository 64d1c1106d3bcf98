import pytest
from recencycache import LRUCache, InvalidCapacityError, CacheError


def test_get_promotes_before_eviction():
    """A hit moves the key to the front, so the other key is evicted next."""
    cache = LRUCache(2)
    cache.put(1, 1)
    cache.put(2, 2)
    assert cache.get(1) == 1

    cache.put(3, 3)
    assert cache.get(2) is None
    assert cache.get(3) == 3
    assert cache.get(1) == 1
    cache.check_invariants()


def test_single_slot_cache_evicts_previous_key():
    cache = LRUCache(1)
    cache.put(1, 1)
    cache.put(2, 2)
    assert cache.get(1) is None
    assert cache.get(2) == 2
    assert len(cache) == 1


def test_update_keeps_size_and_replaces_value():
    """Putting an existing key updates in place without growing or evicting."""
    cache = LRUCache(2)
    cache.put(1, 1)
    cache.put(1, 10)
    assert cache.get(1) == 10
    assert len(cache) == 1
    assert cache.stats.evictions == 0


def test_miss_on_empty_cache_changes_nothing():
    cache = LRUCache(2)
    assert cache.get(5) is None
    assert len(cache) == 0
    assert list(cache) == []
    assert cache.stats.misses == 1
    cache.check_invariants()


def test_miss_only_bumps_miss_counter():
    """A miss on a populated cache keeps order, size and eviction victim."""
    cache = LRUCache(2)
    cache.put(1, 1)
    cache.put(2, 2)
    before = list(cache.items())

    assert cache.get(3) is None

    assert list(cache.items()) == before
    assert (cache.stats.hits, cache.stats.misses, cache.stats.evictions) == (0, 1, 0)
    cache.put(4, 4)
    assert 1 not in cache


def test_miss_returns_default():
    cache = LRUCache(2)
    sentinel = object()
    assert cache.get("absent", sentinel) is sentinel


def test_none_is_a_storable_value():
    cache = LRUCache(2)
    cache.put("k", None)
    assert "k" in cache
    assert cache.get("k", "missing") is None


@pytest.mark.parametrize("capacity", [0, -1, -100])
def test_non_positive_capacity_rejected(capacity):
    with pytest.raises(InvalidCapacityError) as exc_info:
        LRUCache(capacity)
    assert exc_info.value.capacity == capacity
    assert "positive integer" in str(exc_info.value)


@pytest.mark.parametrize("capacity", [2.5, "3", None, True])
def test_non_integer_capacity_rejected(capacity):
    with pytest.raises(InvalidCapacityError):
        LRUCache(capacity)


def test_invalid_capacity_is_a_value_error():
    with pytest.raises(ValueError):
        LRUCache(0)
    assert issubclass(InvalidCapacityError, CacheError)


def test_recency_law_after_put_and_get():
    """The most recent put or hit is always first in the order track."""
    cache = LRUCache(3)
    for key in "abc":
        cache.put(key, key.upper())
        assert next(iter(cache)) == key
    assert list(cache) == ["c", "b", "a"]

    cache.get("a")
    assert list(cache) == ["a", "c", "b"]

    cache.put("b", "B2")
    assert list(cache) == ["b", "a", "c"]


def test_eviction_removes_exactly_the_previous_lru_key():
    cache = LRUCache(3)
    for key in range(3):
        cache.put(key, key)
    cache.get(0)
    before = list(cache)
    lru = before[-1]

    cache.put(99, 99)

    after = list(cache)
    assert lru not in cache
    assert set(after) == (set(before) - {lru}) | {99}
    assert after[0] == 99
    assert cache.stats.evictions == 1


def test_eviction_order_follows_access_pattern():
    cache = LRUCache(3)
    for key in (1, 2, 3):
        cache.put(key, key)
    cache.get(1)
    cache.get(2)
    cache.put(4, 4)  # evicts 3
    cache.put(5, 5)  # evicts 1
    assert list(cache) == [5, 4, 2]


def test_read_only_views_do_not_change_recency():
    """peek, membership, len and iteration leave the eviction order alone."""
    cache = LRUCache(2)
    cache.put(1, "one")
    cache.put(2, "two")

    assert cache.peek(1) == "one"
    assert 1 in cache
    assert len(cache) == 2
    assert list(cache.items()) == [(2, "two"), (1, "one")]

    cache.put(3, "three")
    assert 1 not in cache
    assert cache.peek(1, "gone") == "gone"


def test_stats_track_hits_misses_and_evictions():
    cache = LRUCache(1)
    cache.put("a", 1)
    cache.get("a")
    cache.get("b")
    cache.put("b", 2)

    assert cache.stats.hits == 1
    assert cache.stats.misses == 1
    assert cache.stats.evictions == 1
    assert cache.stats.hit_rate == 0.5

    cache.reset_stats()
    assert cache.stats.hits == 0
    assert cache.stats.hit_rate == 0.0


def test_capacity_property_and_repr():
    cache = LRUCache(4)
    cache.put("x", 1)
    assert cache.capacity == 4
    assert repr(cache) == "LRUCache(capacity=4, size=1)"


def test_size_never_exceeds_capacity():
    cache = LRUCache(5)
    for key in range(50):
        cache.put(key, key)
        assert 0 <= len(cache) <= 5
    assert list(cache) == [49, 48, 47, 46, 45]
    cache.check_invariants()


if __name__ == "__main__":
    pytest.main([__file__])
