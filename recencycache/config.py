from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
import yaml

from .errors import ConfigError
from .reference import IMPLEMENTATIONS


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class CacheCfg:
    capacity: int

    def __post_init__(self):
        if not _is_int(self.capacity) or self.capacity < 1:
            raise ConfigError(f"cache.capacity must be a positive integer, got {self.capacity!r}")


@dataclass
class WorkloadCfg:
    ops: int = 100_000
    key_space: Optional[int] = None  # Defaults to twice the cache capacity
    put_ratio: float = 0.5
    seed: int = 0

    def __post_init__(self):
        if not _is_int(self.ops) or self.ops < 1:
            raise ConfigError(f"workload.ops must be a positive integer, got {self.ops!r}")
        if self.key_space is not None and (not _is_int(self.key_space) or self.key_space < 1):
            raise ConfigError(f"workload.key_space must be a positive integer, got {self.key_space!r}")
        if not _is_int(self.seed):
            raise ConfigError(f"workload.seed must be an integer, got {self.seed!r}")
        if isinstance(self.put_ratio, bool) or not isinstance(self.put_ratio, (int, float)):
            raise ConfigError(f"workload.put_ratio must be a number, got {self.put_ratio!r}")
        if not 0.0 <= self.put_ratio <= 1.0:
            raise ConfigError(f"workload.put_ratio must be within [0, 1], got {self.put_ratio}")


@dataclass
class BenchCfg:
    iterations: int = 5
    implementations: List[str] = field(default_factory=lambda: ["arena", "ordered_dict", "pylru", "list"])
    verify: bool = True  # Run LRUCache.check_invariants() after each arena replay

    def __post_init__(self):
        if not _is_int(self.iterations) or self.iterations < 1:
            raise ConfigError(f"benchmark.iterations must be a positive integer, got {self.iterations!r}")
        if not isinstance(self.implementations, list) or not self.implementations:
            raise ConfigError("benchmark.implementations must be a non-empty list")
        unknown = [name for name in self.implementations if name not in IMPLEMENTATIONS]
        if unknown:
            raise ConfigError(f"Unknown implementations {unknown}. Must be drawn from {sorted(IMPLEMENTATIONS)}.")


@dataclass
class Config:
    cache: CacheCfg
    workload: WorkloadCfg
    benchmark: BenchCfg
    debug: bool = False  # Control logging verbosity

    @property
    def key_space(self) -> int:
        if self.workload.key_space is not None:
            return self.workload.key_space
        return self.cache.capacity * 2

    @classmethod
    def load(cls, path: str | Path) -> "Config":
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Config file {path} is not valid YAML: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        try:
            cache_cfg = CacheCfg(**data["cache"])
            workload_cfg = WorkloadCfg(**data.get("workload") or {})
            bench_cfg = BenchCfg(**data.get("benchmark") or {})
        except KeyError as e:
            raise ConfigError(f"Missing required config section {e}") from None
        except TypeError as e:
            raise ConfigError(f"Invalid config: {e}") from None

        return cls(
            cache=cache_cfg,
            workload=workload_cfg,
            benchmark=bench_cfg,
            debug=data.get("debug", False),  # Default to False if not specified
        )
