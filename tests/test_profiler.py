"""Tests for the performance profiler."""

import time
from json_query_transformer.profiler import PerformanceProfiler


class TestPerformanceProfiler:
    """Tests for PerformanceProfiler."""

    def test_profile_operation(self):
        """Test metrics are filled in when the block exits."""
        profiler = PerformanceProfiler()

        with profiler.profile_operation("sleep", input_size=10) as metrics:
            time.sleep(0.01)

        assert metrics.operation_name == "sleep"
        assert metrics.input_size == 10
        assert metrics.duration_ms >= 5
        assert metrics.memory_start_mb >= 0

    def test_metrics_recorded_on_exception(self):
        """Test timing is still recorded when the block raises."""
        profiler = PerformanceProfiler()
        captured = None

        try:
            with profiler.profile_operation("failing") as metrics:
                captured = metrics
                raise RuntimeError("boom")
        except RuntimeError:
            pass

        assert captured.duration_ms >= 0

    def test_elapsed_ms_non_negative(self):
        """Test elapsed time never goes negative."""
        assert PerformanceProfiler.elapsed_ms(time.perf_counter() + 10) == 0
