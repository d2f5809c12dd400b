"""Benchmark utilities and fixtures for performance testing."""

import pytest
import time
import tracemalloc
import gc
from dataclasses import dataclass, field
from typing import Callable, Optional, List
import numpy as np


@dataclass
class BenchmarkResult:
    """Results from a benchmark run."""
    name: str
    time_ms: float
    memory_peak_mb: float
    memory_current_mb: float
    iterations: int
    time_std_ms: float = 0.0
    all_times_ms: List[float] = field(default_factory=list)

    def __str__(self):
        return (
            f"{self.name}: "
            f"time={self.time_ms:.2f}ms (std={self.time_std_ms:.2f}ms), "
            f"memory_peak={self.memory_peak_mb:.2f}MB"
        )


class BenchmarkRunner:
    """Runner for timing and memory benchmarks."""

    def __init__(self, warmup: int = 2, iterations: int = 10):
        self.warmup = warmup
        self.iterations = iterations

    def run(self, func: Callable, name: Optional[str] = None) -> BenchmarkResult:
        """Run benchmark with timing and memory measurement.

        Args:
            func: Function to benchmark (should take no arguments)
            name: Optional name for the benchmark

        Returns:
            BenchmarkResult with timing and memory data
        """
        name = name or getattr(func, '__name__', 'benchmark')

        # Force garbage collection before benchmarking
        gc.collect()

        # Warmup runs
        for _ in range(self.warmup):
            func()

        # Memory measurement (single run)
        gc.collect()
        tracemalloc.start()
        func()
        current, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()

        memory_current_mb = current / (1024 * 1024)
        memory_peak_mb = peak / (1024 * 1024)

        # Timing runs
        times = []
        for _ in range(self.iterations):
            gc.collect()
            start = time.perf_counter()
            func()
            elapsed = (time.perf_counter() - start) * 1000  # Convert to ms
            times.append(elapsed)

        return BenchmarkResult(
            name=name,
            time_ms=np.median(times),
            time_std_ms=np.std(times),
            memory_peak_mb=memory_peak_mb,
            memory_current_mb=memory_current_mb,
            iterations=self.iterations,
            all_times_ms=times
        )

    def compare(self, baseline_func: Callable, optimized_func: Callable,
                baseline_name: str = "baseline",
                optimized_name: str = "optimized") -> dict:
        """Compare baseline vs optimized implementation.

        Returns:
            dict with both results and improvement ratios
        """
        baseline = self.run(baseline_func, baseline_name)
        optimized = self.run(optimized_func, optimized_name)

        time_improvement = (baseline.time_ms - optimized.time_ms) / baseline.time_ms * 100
        memory_improvement = (baseline.memory_peak_mb - optimized.memory_peak_mb) / baseline.memory_peak_mb * 100

        return {
            'baseline': baseline,
            'optimized': optimized,
            'time_improvement_pct': time_improvement,
            'memory_improvement_pct': memory_improvement,
            'time_speedup': baseline.time_ms / optimized.time_ms if optimized.time_ms > 0 else float('inf'),
            'memory_reduction': baseline.memory_peak_mb / optimized.memory_peak_mb if optimized.memory_peak_mb > 0 else float('inf')
        }


@pytest.fixture
def benchmark():
    """Fixture providing a BenchmarkRunner instance."""
    return BenchmarkRunner(warmup=2, iterations=10)


@pytest.fixture
def quick_benchmark():
    """Faster benchmark runner for CI/development."""
    return BenchmarkRunner(warmup=1, iterations=5)


# =============================================================================
# Benchmark-specific image fixtures (larger sizes for realistic testing)
# =============================================================================

@pytest.fixture
def benchmark_4k_image():
    """4096x4096 16-bit image for benchmarking."""
    np.random.seed(42)
    return np.random.randint(0, 65535, (4096, 4096), dtype=np.uint16)


@pytest.fixture
def benchmark_4k_float_image(benchmark_4k_image):
    """4096x4096 float image with a sprinkling of NaN samples."""
    img = benchmark_4k_image.astype(np.float32)
    img[::97, ::89] = np.nan
    return img

