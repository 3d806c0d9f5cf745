"""Performance profiler for JSON Reformatter operations."""

import time
import psutil
import logging
from typing import Dict, Any, Optional, List
from dataclasses import dataclass
from contextlib import contextmanager


@dataclass
class PerformanceMetrics:
    """Performance metrics for a reformat operation."""
    operation_name: str
    start_time: float
    end_time: float
    duration: float
    input_size: int
    output_size: int
    memory_peak_mb: float
    memory_start_mb: float
    memory_end_mb: float
    throughput_mbps: float
    expansion_ratio: float


class PerformanceProfiler:
    """
    Records duration, memory and throughput of reformat operations.

    Sampling problems are logged and never interrupt the operation being
    measured.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the performance profiler.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.metrics_history: List[PerformanceMetrics] = []
        self.current_operation: Optional[str] = None
        self.start_time: Optional[float] = None
        self.start_memory: Optional[float] = None
        self.peak_memory: float = 0
        self.input_size: int = 0
        self.output_size: int = 0

    @contextmanager
    def profile_operation(self, operation_name: str, input_size: int = 0):
        """
        Context manager for profiling operations.

        Metrics are only recorded when the block completes; set
        ``output_size`` on the yielded profiler before leaving it.

        Args:
            operation_name: Name of the operation being profiled
            input_size: Size of input data in bytes
        """
        self.start_profiling(operation_name, input_size)
        completed = False
        try:
            yield self
            completed = True
        finally:
            if completed:
                self.stop_profiling(self.output_size)
            else:
                self._reset()

    def start_profiling(self, operation_name: str, input_size: int = 0):
        """
        Start profiling an operation.

        Args:
            operation_name: Name of the operation
            input_size: Size of input data in bytes
        """
        self.current_operation = operation_name
        self.start_time = time.time()
        self.input_size = input_size
        self.output_size = 0
        self.start_memory = self._current_memory_mb()
        self.peak_memory = self.start_memory

        self.logger.debug(f"Started profiling: {operation_name}")

    def sample_performance(self):
        """Sample current memory usage."""
        if not self.current_operation:
            return
        self.peak_memory = max(self.peak_memory, self._current_memory_mb())

    def stop_profiling(self, output_size: int = 0) -> PerformanceMetrics:
        """
        Stop profiling and return metrics.

        Args:
            output_size: Size of output data in bytes

        Returns:
            PerformanceMetrics object with collected data
        """
        if not self.current_operation or not self.start_time:
            raise ValueError("No active profiling session")

        end_time = time.time()
        duration = end_time - self.start_time
        end_memory = self._current_memory_mb()
        self.peak_memory = max(self.peak_memory, end_memory)

        throughput = (self.input_size / 1024 / 1024) / duration if duration > 0 else 0  # MB/s
        expansion_ratio = output_size / self.input_size if self.input_size > 0 else 1.0

        metrics = PerformanceMetrics(
            operation_name=self.current_operation,
            start_time=self.start_time,
            end_time=end_time,
            duration=duration,
            input_size=self.input_size,
            output_size=output_size,
            memory_peak_mb=self.peak_memory,
            memory_start_mb=self.start_memory,
            memory_end_mb=end_memory,
            throughput_mbps=throughput,
            expansion_ratio=expansion_ratio
        )

        self.metrics_history.append(metrics)

        self.logger.debug(f"Performance Summary - {self.current_operation}: "
                          f"{duration * 1000:.2f}ms, {self.input_size}B -> {output_size}B, "
                          f"memory peak {self.peak_memory:.1f} MB")

        self._reset()
        return metrics

    def get_performance_summary(self) -> Dict[str, Any]:
        """
        Get summary of all performance metrics.

        Returns:
            Dictionary with performance summary
        """
        if not self.metrics_history:
            return {"total_operations": 0}

        total_duration = sum(m.duration for m in self.metrics_history)
        total_input = sum(m.input_size for m in self.metrics_history)
        total_output = sum(m.output_size for m in self.metrics_history)
        avg_memory = sum(m.memory_peak_mb for m in self.metrics_history) / len(self.metrics_history)

        return {
            "total_operations": len(self.metrics_history),
            "total_duration": total_duration,
            "total_input_bytes": total_input,
            "total_output_bytes": total_output,
            "average_memory_peak_mb": avg_memory,
            "overall_expansion_ratio": total_output / total_input if total_input > 0 else 1.0,
            "operations": [
                {
                    "name": m.operation_name,
                    "duration": m.duration,
                    "input_size": m.input_size,
                    "output_size": m.output_size,
                }
                for m in self.metrics_history
            ]
        }

    def _current_memory_mb(self) -> float:
        try:
            return psutil.Process().memory_info().rss / 1024 / 1024
        except psutil.Error as e:
            self.logger.warning(f"Performance sampling failed: {e}")
            return self.start_memory or 0.0

    def _reset(self):
        self.current_operation = None
        self.start_time = None
        self.start_memory = None
