import logging
import statistics
import time
import traceback
import tracemalloc
from typing import Dict, List, Optional

from tqdm import tqdm

from .cache import LRUCache
from .config import Config
from .log import log_cache_stats
from .reference import resolve
from .workload import Trace, make_trace, replay

METRICS = ["latency_sec", "peak_memory_mb", "score", "hit_rate"]


def smoke_test(cache_cls) -> None:
    """Run a fixed correctness scenario against ``cache_cls``.

    Raises:
        AssertionError: If the implementation does not behave as an LRU cache.
        Exception: Anything the implementation itself raises is propagated.
    """
    cache = cache_cls(2)

    # Miss on empty cache
    assert cache.get(1) is None, "Expected miss on empty cache"

    # Put and get
    cache.put(1, 100)
    assert cache.get(1) == 100, "Failed to get correct value after put"

    # Overwrite value
    cache.put(1, 101)
    assert cache.get(1) == 101, "Failed to update existing key"

    # Fill to capacity
    cache.put(2, 200)
    assert cache.get(2) == 200, "Expected value for key 2 after inserting it"
    assert cache.get(1) == 101, "Expected value for key 1 to remain unchanged after inserting key 2"

    # Trigger eviction (key 1 was used last, so key 2 is LRU)
    cache.put(3, 300)
    assert cache.get(1) == 101, "Expected key 1 to remain as it was the most recently used"
    assert cache.get(2) is None, "Expected the least recently used key (2) to be evicted"
    assert cache.get(3) == 300, "Expected key 3 to exist"

    # Use key 1, then evict key 3
    cache.get(1)
    cache.put(4, 400)
    assert cache.get(3) is None, "Expected the least recently used key (3) to be evicted"
    assert cache.get(1) == 101, "Expected key 1 to remain as it was accessed most recently"
    assert cache.get(4) == 400, "Expected key 4 to exist"


def run_once(cache_cls, capacity: int, trace: Trace, verify: bool = False,
             logger: Optional[logging.Logger] = None) -> Dict[str, float]:
    """
    Replay ``trace`` against a fresh cache and measure it.

    The score rewards both speed and a small memory footprint:
    ``1 / (runtime * (1 + peak_mb))``.

    Args:
        cache_cls: Cache class taking ``capacity`` as its only argument.
        capacity: Capacity of the cache under test.
        trace: Operations to replay.
        verify: Check ``LRUCache`` invariants once the replay is done.
        logger: If given, ``LRUCache`` counters are logged to it at DEBUG.

    Returns:
        Dictionary with ``latency_sec``, ``peak_memory_mb``, ``score`` and ``hit_rate``.
    """
    tracemalloc.start()
    try:
        start = time.perf_counter()
        cache = cache_cls(capacity)
        hits, misses = replay(cache, trace)
        runtime = time.perf_counter() - start
        _, peak = tracemalloc.get_traced_memory()
    finally:
        tracemalloc.stop()

    if isinstance(cache, LRUCache):
        if verify:
            cache.check_invariants()
        if logger is not None:
            log_cache_stats(logger, f"{cache_cls.__name__}({capacity})", cache.stats)

    peak_mb = peak / 1e6
    lookups = hits + misses
    return {
        "latency_sec": runtime,
        "peak_memory_mb": peak_mb,
        "score": 1.0 / (max(runtime, 1e-9) * (1 + peak_mb)),
        "hit_rate": hits / lookups if lookups else 0.0,
    }


def summarize(results: List[Dict[str, float]], total_iterations: int) -> Dict[str, float]:
    """Aggregate per-iteration metrics into avg/std/min/max values."""
    summary: Dict[str, float] = {}
    for metric in results[0].keys():
        values = [result[metric] for result in results]
        summary[f"avg_{metric}"] = statistics.mean(values)
        summary[f"std_{metric}"] = statistics.stdev(values) if len(values) > 1 else 0.0
        summary[f"min_{metric}"] = min(values)
        summary[f"max_{metric}"] = max(values)

    summary["total_iterations"] = total_iterations
    summary["successful_iterations"] = len(results)
    return summary


def run_many(name: str, cfg: Config, logger: logging.Logger) -> Dict[str, float]:
    """
    Benchmark one implementation over ``cfg.benchmark.iterations`` fresh traces.

    Failed iterations are logged and skipped.

    Raises:
        ValueError: If no iteration completed successfully.
    """
    cache_cls = resolve(name)
    iterations = cfg.benchmark.iterations
    results = []

    for i in tqdm(range(iterations), desc=name, leave=False):
        trace = make_trace(
            cfg.workload.ops,
            cfg.key_space,
            seed=cfg.workload.seed + i,
            put_ratio=cfg.workload.put_ratio,
        )
        try:
            results.append(run_once(cache_cls, cfg.cache.capacity, trace,
                                    verify=cfg.benchmark.verify, logger=logger))
        except Exception as e:
            logger.error("Iteration %d/%d of %s failed: %s", i + 1, iterations, name, e)
            logger.error("Full traceback: %s", traceback.format_exc())
            continue
        logger.debug("%s iteration %d: %s", name, i + 1, results[-1])

    if not results:
        raise ValueError(f"No successful benchmark iterations for {name}")
    return summarize(results, iterations)


class BenchmarkRunner:
    """Runs every configured implementation and collects their summaries."""

    def __init__(self, cfg: Config, logger: logging.Logger):
        self.cfg = cfg
        self.logger = logger

    def run(self) -> Dict[str, Dict[str, float]]:
        cfg = self.cfg
        self.logger.info(
            "Benchmarking %d implementation(s): capacity=%d ops=%d key_space=%d iterations=%d",
            len(cfg.benchmark.implementations), cfg.cache.capacity, cfg.workload.ops,
            cfg.key_space, cfg.benchmark.iterations,
        )

        summaries: Dict[str, Dict[str, float]] = {}
        for name in cfg.benchmark.implementations:
            try:
                smoke_test(resolve(name))
            except Exception as e:
                self.logger.error("Implementation %s failed the smoke test: %s", name, e)
                self.logger.error("Full traceback: %s", traceback.format_exc())
                continue

            try:
                summaries[name] = run_many(name, cfg, self.logger)
            except ValueError as e:
                self.logger.error(str(e))
                continue
            self._log_summary(name, summaries[name])

        return summaries

    def _log_summary(self, name: str, summary: Dict[str, float]) -> None:
        self.logger.info("=" * 60)
        self.logger.info("%s: %d/%d successful iterations", name,
                         summary["successful_iterations"], summary["total_iterations"])
        for metric in METRICS:
            self.logger.info("  %-15s avg %.6f  std %.6f  min %.6f  max %.6f", metric,
                             summary[f"avg_{metric}"], summary[f"std_{metric}"],
                             summary[f"min_{metric}"], summary[f"max_{metric}"])
