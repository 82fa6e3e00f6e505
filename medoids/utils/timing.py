# medoids/utils/timing.py
"""
Performance timing utilities for development and debugging.
"""
import time
import functools
from typing import Callable, Any, Optional
from ..logging_config import get_logger

logger = get_logger('timing')


class Timer:
    """
    Context manager for timing code blocks.

    Usage:
        with Timer("Clustering run"):
            session.run(k=3)
    """

    def __init__(self, name: str, log_level: str = "INFO"):
        self.name = name
        self.log_level = log_level.upper()
        self.start_time = None
        self.end_time = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        log_func = getattr(logger, self.log_level.lower(), logger.info)
        log_func(f"START: {self.name}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.perf_counter()
        elapsed = self.end_time - self.start_time

        if exc_type is not None:
            logger.error(f"FAILED: {self.name} (after {elapsed:.3f}s) - {exc_type.__name__}: {exc_val}")
        else:
            log_func = getattr(logger, self.log_level.lower(), logger.info)
            log_func(f"DONE: {self.name} ({elapsed:.3f}s)")

        return False  # Don't suppress exceptions

    @property
    def elapsed(self) -> float:
        """Get elapsed time in seconds."""
        if self.end_time and self.start_time:
            return self.end_time - self.start_time
        elif self.start_time:
            return time.perf_counter() - self.start_time
        return 0.0


def timed(name: Optional[str] = None, log_level: str = "DEBUG"):
    """
    Decorator for timing function execution.

    Usage:
        @timed("Export clusters")
        def export():
            pass

    Args:
        name: Optional custom name for the operation
        log_level: Log level for timing messages (default: DEBUG)
    """
    def decorator(func: Callable) -> Callable:
        operation_name = name or func.__name__

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            with Timer(operation_name, log_level):
                return func(*args, **kwargs)

        return wrapper
    return decorator
