import logging
import pytest
from recencycache import LRUCache, CacheStats
from recencycache.log import EVICTION_LOGGER, init_logger, get_logger, log_cache_stats


@pytest.fixture
def restore_eviction_level():
    eviction_logger = logging.getLogger(EVICTION_LOGGER)
    level = eviction_logger.level
    yield eviction_logger
    eviction_logger.setLevel(level)


def test_init_logger_replaces_handlers(restore_eviction_level):
    logger = init_logger("recencycache.test_log", debug=False)
    init_logger("recencycache.test_log", debug=True)

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert get_logger("recencycache.test_log") is logger


def test_debug_run_keeps_evictions_quiet(restore_eviction_level):
    """Debug output for the benchmark does not switch on per-eviction lines."""
    init_logger("recencycache.test_log", debug=True)
    assert not restore_eviction_level.isEnabledFor(logging.DEBUG)

    init_logger("recencycache.test_log", debug=True, trace_evictions=True)
    assert restore_eviction_level.isEnabledFor(logging.DEBUG)


def test_eviction_is_logged_at_debug(caplog):
    cache = LRUCache(1)
    with caplog.at_level(logging.DEBUG, logger=EVICTION_LOGGER):
        cache.put("old", 1)
        cache.put("new", 2)

    assert "Evicted key 'old'" in caplog.text


def test_log_cache_stats_line(caplog):
    stats = CacheStats(hits=3, misses=1, evictions=2)
    with caplog.at_level(logging.DEBUG, logger="recencycache.test_log"):
        log_cache_stats(logging.getLogger("recencycache.test_log"), "arena", stats)

    assert "arena: hits=3 misses=1 evictions=2 hit_rate=0.750" in caplog.text


if __name__ == "__main__":
    pytest.main([__file__])
