import random
from typing import List, Tuple

Trace = List[Tuple[str, int]]


def make_trace(ops: int, key_space: int, seed: int, put_ratio: float = 0.5) -> Trace:
    """
    Build a reproducible trace of cache operations.

    Args:
        ops: Number of operations in the trace.
        key_space: Keys are drawn uniformly from ``[0, key_space]``.
        seed: Seed for the private random generator.
        put_ratio: Probability that an operation is a ``put``.

    Returns:
        List of ``(op, key)`` tuples where ``op`` is ``"put"`` or ``"get"``.
    """
    rng = random.Random(seed)
    trace: Trace = []
    for _ in range(ops):
        op = "put" if rng.random() < put_ratio else "get"
        trace.append((op, rng.randint(0, key_space)))
    return trace


def replay(cache, trace: Trace) -> Tuple[int, int]:
    """Apply ``trace`` to ``cache`` and return ``(hits, misses)`` for its gets.

    A put stores the key as its own value, so a hit is any non-None result.
    """
    hits = misses = 0
    for op, key in trace:
        if op == "put":
            cache.put(key, key)
        elif cache.get(key) is None:
            misses += 1
        else:
            hits += 1
    return hits, misses
