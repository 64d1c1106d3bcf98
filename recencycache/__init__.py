"""
recencycache: a capacity-bounded least-recently-used cache.

This package contains:
- LRUCache, the O(1) arena-backed cache
- Reference caches used as benchmark baselines
- A benchmark harness with YAML configuration
"""

from .cache import LRUCache, CacheStats
from .errors import CacheError, InvalidCapacityError, ConfigError

__all__ = [
    "LRUCache",
    "CacheStats",
    "CacheError",
    "InvalidCapacityError",
    "ConfigError",
]
