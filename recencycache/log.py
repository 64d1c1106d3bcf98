import logging
import sys

from .cache import CacheStats

PACKAGE_LOGGER = "recencycache"
EVICTION_LOGGER = "recencycache.cache"


def init_logger(name: str = PACKAGE_LOGGER, debug: bool = False, trace_evictions: bool = False) -> logging.Logger:
    """
    Initialize the package logger for a benchmark run.

    ``LRUCache`` reports each eviction at DEBUG on ``recencycache.cache``. A
    benchmark replays hundreds of thousands of operations, so those lines are
    held back at INFO unless ``trace_evictions`` asks for them, even when
    ``debug`` is on.

    Parameters
    ----------
    name : str
        Logger name
    debug : bool
        If True, log per-iteration benchmark results at DEBUG.
    trace_evictions : bool
        If True, let per-eviction DEBUG lines from the cache through.

    Returns
    -------
    logging.Logger
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    # Clear existing handlers to avoid duplicates
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter("[%(levelname)s] %(asctime)s | %(name)s | %(message)s", "%H:%M:%S")
    )
    logger.addHandler(handler)

    eviction_level = logging.DEBUG if trace_evictions else logging.INFO
    logging.getLogger(EVICTION_LOGGER).setLevel(eviction_level)
    return logger


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Return the logger registered under ``name``."""
    return logging.getLogger(name)


def log_cache_stats(logger: logging.Logger, label: str, stats: CacheStats) -> None:
    """Log one DEBUG line with the hit/miss/eviction counters of a cache."""
    logger.debug("%s: hits=%d misses=%d evictions=%d hit_rate=%.3f",
                label, stats.hits, stats.misses, stats.evictions, stats.hit_rate)
