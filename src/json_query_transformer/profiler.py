"""Performance profiler for transformation operations."""

import time
import psutil
import logging
from typing import Optional
from dataclasses import dataclass
from contextlib import contextmanager


@dataclass
class PerformanceMetrics:
    """Performance metrics for a single operation."""
    operation_name: str
    input_size: int = 0
    duration_ms: int = 0
    memory_start_mb: float = 0.0
    memory_end_mb: float = 0.0

    @property
    def memory_delta_mb(self) -> float:
        return self.memory_end_mb - self.memory_start_mb


class PerformanceProfiler:
    """
    Profiler measuring wall time and process memory around an operation.

    Every call to ``profile_operation`` produces its own metrics object, so a
    single profiler can be shared by independent requests.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the performance profiler.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    @contextmanager
    def profile_operation(self, operation_name: str, input_size: int = 0):
        """
        Context manager for profiling operations.

        Args:
            operation_name: Name of the operation being profiled
            input_size: Size of input data in bytes

        Yields:
            PerformanceMetrics filled in when the block exits
        """
        metrics = PerformanceMetrics(operation_name=operation_name, input_size=input_size)
        metrics.memory_start_mb = self._memory_mb()
        start = time.perf_counter()
        self.logger.debug(f"Started profiling: {operation_name}")
        try:
            yield metrics
        finally:
            metrics.duration_ms = self.elapsed_ms(start)
            metrics.memory_end_mb = self._memory_mb()
            self.logger.debug(
                f"Performance Summary - {operation_name}: "
                f"duration={metrics.duration_ms}ms, input={input_size}B, "
                f"memory delta={metrics.memory_delta_mb:.1f}MB"
            )

    @staticmethod
    def elapsed_ms(start: float) -> int:
        """Whole milliseconds since a ``time.perf_counter()`` reading, never negative."""
        return max(0, int((time.perf_counter() - start) * 1000))

    def _memory_mb(self) -> float:
        try:
            return psutil.Process().memory_info().rss / 1024 / 1024
        except psutil.Error as e:
            self.logger.warning(f"Performance sampling failed: {e}")
            return 0.0
