class CacheError(Exception):
    """Base exception for recencycache."""
    pass


class InvalidCapacityError(CacheError, ValueError):
    """Exception raised when a cache is constructed with a capacity below 1."""

    def __init__(self, capacity):
        self.capacity = capacity
        super().__init__(f"Capacity must be a positive integer, got {capacity!r}")


class ConfigError(CacheError, ValueError):
    """Exception raised when a benchmark configuration is missing keys or holds invalid values."""
    pass
