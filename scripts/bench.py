#!/usr/bin/env python
"""
CLI entry-point for the cache benchmark.
Run: python scripts/bench.py path/to/config.yml [--debug] [--trace-evictions] [--iterations N] [--output results.json]
"""
import argparse
import json
import sys
from recencycache.bench import BenchmarkRunner
from recencycache.config import Config
from recencycache.errors import ConfigError
from recencycache.log import init_logger

def main():
    parser = argparse.ArgumentParser(description='Benchmark LRU cache implementations')
    parser.add_argument('config', help='Path to configuration YAML file')
    parser.add_argument('--debug', action='store_true',
                       help='Enable debug logging (per-iteration results and cache counters)')
    parser.add_argument('--trace-evictions', action='store_true',
                       help='Log every eviction made by the arena cache (very verbose)')
    parser.add_argument('--iterations', type=int, default=None,
                       help='Number of iterations per implementation (overrides config file)')
    parser.add_argument('--output', default=None,
                       help='Write the summaries to this JSON file')

    args = parser.parse_args()

    if args.iterations is not None and args.iterations <= 0:
        parser.error("--iterations must be positive")

    try:
        cfg = Config.load(args.config)
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)

    # Override iterations from command line if specified
    if args.iterations is not None:
        cfg.benchmark.iterations = args.iterations

    # Command line flag wins over the config file
    cfg.debug = cfg.debug or args.debug
    logger = init_logger(debug=cfg.debug, trace_evictions=args.trace_evictions)

    summaries = BenchmarkRunner(cfg, logger).run()
    if not summaries:
        logger.error("No implementation produced results")
        sys.exit(1)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(summaries, f, indent=2)
        logger.info("Wrote results to %s", args.output)

if __name__ == "__main__":
    main()
