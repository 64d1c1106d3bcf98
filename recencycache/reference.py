"""
Reference caches with the same ``get``/``put`` surface as ``LRUCache``.

They serve as baselines for the benchmark and as oracles for differential tests.
"""

from collections import OrderedDict
from typing import Any, Dict, Hashable

import pylru

from .cache import LRUCache
from .errors import ConfigError, InvalidCapacityError


def _check_capacity(capacity) -> None:
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
        raise InvalidCapacityError(capacity)


class ListOrderCache:
    """Dict plus a Python list for recency. Promotion and eviction are O(n)."""

    def __init__(self, capacity: int):
        _check_capacity(capacity)
        self.capacity = capacity
        self.cache: Dict[Hashable, Any] = {}
        self.order: list = []

    def get(self, key: Hashable, default: Any = None) -> Any:
        if key not in self.cache:
            return default
        self.order.remove(key)
        self.order.insert(0, key)
        return self.cache[key]

    def put(self, key: Hashable, value: Any) -> None:
        if key in self.cache:
            self.order.remove(key)
        elif len(self.cache) >= self.capacity:
            del self.cache[self.order.pop()]
        self.cache[key] = value
        self.order.insert(0, key)

    def __len__(self) -> int:
        return len(self.cache)


class OrderedDictCache:
    """``OrderedDict`` keeping the most recently used key at the end."""

    def __init__(self, capacity: int):
        _check_capacity(capacity)
        self.capacity = capacity
        self.cache: "OrderedDict[Hashable, Any]" = OrderedDict()

    def get(self, key: Hashable, default: Any = None) -> Any:
        if key not in self.cache:
            return default
        self.cache.move_to_end(key)
        return self.cache[key]

    def put(self, key: Hashable, value: Any) -> None:
        if key in self.cache:
            self.cache.move_to_end(key)
            self.cache[key] = value
            return
        self.cache[key] = value
        if len(self.cache) > self.capacity:
            self.cache.popitem(last=False)

    def __len__(self) -> int:
        return len(self.cache)


class PylruCache:
    """Adapter over ``pylru.lrucache``."""

    def __init__(self, capacity: int):
        _check_capacity(capacity)
        self.capacity = capacity
        self.cache = pylru.lrucache(capacity)

    def get(self, key: Hashable, default: Any = None) -> Any:
        # pylru only promotes on __getitem__, membership is a plain check
        return self.cache[key] if key in self.cache else default

    def put(self, key: Hashable, value: Any) -> None:
        self.cache[key] = value

    def __len__(self) -> int:
        return len(self.cache)


IMPLEMENTATIONS = {
    "arena": LRUCache,
    "ordered_dict": OrderedDictCache,
    "pylru": PylruCache,
    "list": ListOrderCache,
}


def resolve(name: str) -> type:
    """
    Look up a cache implementation by its registry name.

    Raises:
        ConfigError: If ``name`` is not registered.
    """
    try:
        return IMPLEMENTATIONS[name]
    except KeyError:
        raise ConfigError(
            f"Unknown implementation '{name}'. Must be one of {sorted(IMPLEMENTATIONS)}."
        ) from None
