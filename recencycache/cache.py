import logging
from dataclasses import dataclass
from typing import Any, Dict, Hashable, Iterator, List, Optional, Tuple

from .errors import CacheError, InvalidCapacityError

logger = logging.getLogger(__name__)

# Arena handles of the two sentinels. NIL marks a missing link.
HEAD = 0
TAIL = 1
NIL = -1


@dataclass
class CacheStats:
    """Lookup and eviction counters for a single cache."""
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0


class LRUCache:
    """
    Capacity-bounded cache that evicts the least recently used entry.

    Entries live in an arena of parallel lists addressed by integer handles.
    ``_prev``/``_next`` hold handles and form a doubly linked order track running
    from the head sentinel (before the most recently used entry) to the tail
    sentinel (after the least recently used one). ``_index`` maps each key to
    its handle, so lookup, promotion and eviction are all O(1).

    Parameters
    ----------
    capacity : int
        Maximum number of entries. Must be a positive integer.

    Raises
    ------
    InvalidCapacityError
        If ``capacity`` is not an integer or is below 1.
    """

    def __init__(self, capacity: int):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise InvalidCapacityError(capacity)

        self._capacity = capacity
        self._index: Dict[Hashable, int] = {}

        # Slots 0 and 1 are the sentinels and never hold a key or value
        self._keys: List[Any] = [None, None]
        self._values: List[Any] = [None, None]
        self._prev: List[int] = [NIL, HEAD]
        self._next: List[int] = [TAIL, NIL]
        self._free: List[int] = []

        self.stats = CacheStats()

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, key: Hashable, default: Any = None) -> Any:
        """
        Look up ``key`` and mark it as the most recently used entry.

        Args:
            key: Key to look up.
            default: Value returned when ``key`` is not cached.

        Returns:
            The cached value, or ``default`` on a miss. A miss leaves the
            order track and index untouched; the only state it changes is
            the ``stats.misses`` counter.
        """
        handle = self._index.get(key)
        if handle is None:
            self.stats.misses += 1
            return default

        self.stats.hits += 1
        self._promote(handle)
        return self._values[handle]

    def put(self, key: Hashable, value: Any) -> None:
        """
        Insert or update ``key`` and mark it as the most recently used entry.

        When a new key pushes the cache past its capacity, the least recently
        used entry is evicted.

        Args:
            key: Key to store. Must be hashable.
            value: Value to associate with the key.
        """
        handle = self._index.get(key)
        if handle is not None:
            self._values[handle] = value
            self._promote(handle)
            return

        handle = self._allocate(key, value)
        self._index[key] = handle
        self._insert_front(handle)

        if len(self._index) > self._capacity:
            self._evict()

    def peek(self, key: Hashable, default: Any = None) -> Any:
        """Return the value for ``key`` without changing its recency."""
        handle = self._index.get(key)
        if handle is None:
            return default
        return self._values[handle]

    def keys(self) -> Iterator[Hashable]:
        """Yield keys from most to least recently used."""
        handle = self._next[HEAD]
        while handle != TAIL:
            yield self._keys[handle]
            handle = self._next[handle]

    def items(self) -> Iterator[Tuple[Hashable, Any]]:
        """Yield ``(key, value)`` pairs from most to least recently used."""
        handle = self._next[HEAD]
        while handle != TAIL:
            yield self._keys[handle], self._values[handle]
            handle = self._next[handle]

    def reset_stats(self) -> None:
        self.stats = CacheStats()

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._index

    def __iter__(self) -> Iterator[Hashable]:
        return self.keys()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(capacity={self._capacity}, size={len(self._index)})"

    # Arena slots

    def _allocate(self, key: Hashable, value: Any) -> int:
        if self._free:
            handle = self._free.pop()
            self._keys[handle] = key
            self._values[handle] = value
            return handle

        self._keys.append(key)
        self._values.append(value)
        self._prev.append(NIL)
        self._next.append(NIL)
        return len(self._keys) - 1

    def _release(self, handle: int) -> None:
        # Drop references so evicted values can be collected
        self._keys[handle] = None
        self._values[handle] = None
        self._free.append(handle)

    # Order track

    def _detach(self, handle: int) -> None:
        """Unlink ``handle`` and join its neighbours to each other."""
        prev_handle = self._prev[handle]
        next_handle = self._next[handle]
        self._next[prev_handle] = next_handle
        self._prev[next_handle] = prev_handle
        self._prev[handle] = NIL
        self._next[handle] = NIL

    def _insert_front(self, handle: int) -> None:
        """Splice ``handle`` in right after the head sentinel."""
        first = self._next[HEAD]
        self._prev[handle] = HEAD
        self._next[handle] = first
        self._prev[first] = handle
        self._next[HEAD] = handle

    def _promote(self, handle: int) -> None:
        self._detach(handle)
        self._insert_front(handle)

    def _evict(self) -> Hashable:
        """Remove the least recently used entry and return its key."""
        handle = self._prev[TAIL]
        self._detach(handle)
        key = self._keys[handle]
        del self._index[key]
        self._release(handle)
        self.stats.evictions += 1

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Evicted key %r (capacity %d)", key, self._capacity)
        return key

    def check_invariants(self) -> None:
        """
        Walk the order track and verify it agrees with the index.

        Raises:
            CacheError: Describing the first inconsistency found.
        """
        if self._prev[HEAD] != NIL or self._next[TAIL] != NIL:
            raise CacheError("Sentinel outer links must be NIL")

        slots = len(self._keys)
        if slots > self._capacity + 3:
            raise CacheError(f"Arena holds {slots} slots for capacity {self._capacity}")
        if slots - 2 != len(self._index) + len(self._free):
            raise CacheError(
                f"Arena accounting mismatch: {slots - 2} slots, "
                f"{len(self._index)} live, {len(self._free)} free"
            )

        seen: Dict[Hashable, int] = {}
        previous = HEAD
        handle = self._next[HEAD]
        while handle != TAIL:
            if handle in (HEAD, NIL) or len(seen) >= slots:
                raise CacheError(f"Order track broken after handle {previous}")
            if self._prev[handle] != previous:
                raise CacheError(f"Handle {handle} has prev {self._prev[handle]}, expected {previous}")
            key = self._keys[handle]
            if key in seen:
                raise CacheError(f"Key {key!r} appears twice in the order track")
            if self._index.get(key) != handle:
                raise CacheError(f"Key {key!r} at handle {handle} is not indexed to it")
            seen[key] = handle
            previous = handle
            handle = self._next[handle]

        if self._prev[TAIL] != previous:
            raise CacheError(f"Tail sentinel points at {self._prev[TAIL]}, expected {previous}")
        if len(seen) != len(self._index):
            raise CacheError(f"Order track has {len(seen)} entries, index has {len(self._index)}")
        if len(self._index) > self._capacity:
            raise CacheError(f"Size {len(self._index)} exceeds capacity {self._capacity}")
