"""
Performance benchmarking for streaming indicators versus pandas rolling windows.

Both paths compute the same rolling statistic over generated OHLCV data; the
benchmark records execution time and memory for each and checks that the
outputs agree once the window is full.

Example Usage:
    from streamta.benchmark import PerformanceBenchmark

    benchmark = PerformanceBenchmark()
    results = benchmark.run_comprehensive_benchmark()
    print(benchmark.generate_report(results))
"""

import gc
import logging
import statistics
import time
import tracemalloc
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import psutil

from .base import BaseIndicator
from .factory import create

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkMetrics:
    """Metrics collected during one benchmark run."""
    execution_time: float
    peak_memory_mb: float
    avg_memory_mb: float
    data_points_processed: int
    setup_time: float = 0.0
    points_per_second: float = 0.0
    memory_per_datapoint_kb: float = 0.0


@dataclass
class ComparisonResult:
    """Result of comparing streaming and pandas computations of one statistic."""
    indicator: str
    data_size: int
    streaming_metrics: BenchmarkMetrics
    pandas_metrics: BenchmarkMetrics
    time_ratio: float = 0.0
    memory_ratio: float = 0.0
    values_match: bool = False
    max_abs_difference: float = 0.0


class DataGenerator:
    """Generate realistic market data for benchmarks and tests."""

    @staticmethod
    def generate_ohlcv_data(size: int, start_price: float = 100.0,
                            volatility: float = 0.02,
                            seed: Optional[int] = None) -> pd.DataFrame:
        """
        Generate a random-walk OHLCV frame.

        Args:
            size (int): Number of bars to generate
            start_price (float): Opening price of the first bar
            volatility (float): Standard deviation of log returns
            seed (Optional[int]): Seed for reproducible data

        Returns:
            pd.DataFrame: open/high/low/close/volume columns with a minute index
        """
        rng = np.random.default_rng(seed)
        start_time = datetime(2023, 1, 1, 9, 30)
        timestamps = [start_time + timedelta(minutes=i) for i in range(size)]

        returns = rng.normal(0, volatility, size)
        prices = np.exp(np.log(start_price) + np.cumsum(returns))

        opens = np.roll(prices, 1)
        if size:
            opens[0] = start_price

        highs = prices * (1 + rng.uniform(0.001, 0.01, size))
        lows = prices * (1 + rng.uniform(-0.01, -0.001, size))

        # Keep open and close inside the bar range
        highs = np.maximum.reduce([opens, prices, highs])
        lows = np.minimum.reduce([opens, prices, lows])

        volumes = rng.integers(1000, 10000, size)

        return pd.DataFrame({
            'open': opens,
            'high': highs,
            'low': lows,
            'close': prices,
            'volume': volumes
        }, index=pd.DatetimeIndex(timestamps))


class MemoryProfiler:
    """Profile memory usage during benchmark execution."""

    def __init__(self):
        self.measurements = []
        self.peak_memory = 0

    def start_profiling(self):
        """Start memory profiling."""
        gc.collect()
        tracemalloc.start()

    def stop_profiling(self) -> Tuple[float, float]:
        """
        Stop memory profiling and return metrics.

        Returns:
            Tuple[float, float]: (peak_memory_mb, current_memory_mb)
        """
        current, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()
        return peak / (1024 * 1024), current / (1024 * 1024)

    def measure_current(self):
        """Record the resident set size of this process."""
        memory_mb = psutil.Process().memory_info().rss / (1024 * 1024)
        self.measurements.append(memory_mb)
        self.peak_memory = max(self.peak_memory, memory_mb)

    def get_average(self) -> float:
        return statistics.mean(self.measurements) if self.measurements else 0.0


# Pairs of (registry name, input column, pandas rolling equivalent)
PANDAS_EQUIVALENTS: Dict[str, Tuple[str, Callable[[pd.Series, int], pd.Series]]] = {
    'sma': ('close', lambda s, n: s.rolling(n).mean()),
    'standard_deviation': ('close', lambda s, n: s.rolling(n).std(ddof=0)),
    'maximum': ('high', lambda s, n: s.rolling(n).max()),
    'minimum': ('low', lambda s, n: s.rolling(n).min()),
}


class PerformanceBenchmark:
    """Main benchmarking class."""

    def __init__(self, period: int = 20):
        self.period = period
        self.data_generator = DataGenerator()
        self.memory_profiler = MemoryProfiler()

    def benchmark_streaming(self, name: str, data: pd.DataFrame) -> Tuple[BenchmarkMetrics, List[float]]:
        """Feed the input column one value at a time through a streaming indicator."""
        column, _ = PANDAS_EQUIVALENTS[name]
        values = data[column].tolist()

        setup_start = time.perf_counter()
        indicator: BaseIndicator = create(name, period=self.period)
        setup_time = time.perf_counter() - setup_start

        self.memory_profiler.start_profiling()
        start_time = time.perf_counter()
        outputs = []
        for i, value in enumerate(values):
            outputs.append(indicator.next(value))
            if i % 1000 == 0:
                self.memory_profiler.measure_current()
        execution_time = time.perf_counter() - start_time
        peak_memory, avg_memory = self.memory_profiler.stop_profiling()

        return self._metrics(len(values), execution_time, peak_memory, avg_memory, setup_time), outputs

    def benchmark_pandas(self, name: str, data: pd.DataFrame) -> Tuple[BenchmarkMetrics, pd.Series]:
        """Compute the same statistic with a pandas rolling window."""
        column, rolling = PANDAS_EQUIVALENTS[name]
        series = data[column]

        self.memory_profiler.start_profiling()
        start_time = time.perf_counter()
        result = rolling(series, self.period)
        execution_time = time.perf_counter() - start_time
        peak_memory, avg_memory = self.memory_profiler.stop_profiling()

        return self._metrics(len(series), execution_time, peak_memory, avg_memory), result

    @staticmethod
    def _metrics(size: int, execution_time: float, peak_memory: float,
                 avg_memory: float, setup_time: float = 0.0) -> BenchmarkMetrics:
        return BenchmarkMetrics(
            execution_time=execution_time,
            peak_memory_mb=peak_memory,
            avg_memory_mb=avg_memory,
            data_points_processed=size,
            setup_time=setup_time,
            points_per_second=size / execution_time if execution_time > 0 else 0,
            memory_per_datapoint_kb=(peak_memory * 1024) / size if size > 0 else 0
        )

    def compare(self, name: str, data: pd.DataFrame, tolerance: float = 1e-8) -> ComparisonResult:
        """
        Compare streaming and pandas computations of one statistic.

        Values are compared from the first full window onwards; before that
        pandas yields NaN while the streaming indicator already has a value.
        """
        if name not in PANDAS_EQUIVALENTS:
            raise KeyError(f"No pandas equivalent registered for '{name}'")

        logger.info(f"Benchmarking {name} on {len(data)} data points")
        streaming_metrics, streaming_values = self.benchmark_streaming(name, data)
        gc.collect()
        pandas_metrics, pandas_values = self.benchmark_pandas(name, data)

        warm = self.period - 1
        streamed = np.asarray(streaming_values[warm:], dtype=float)
        expected = pandas_values.to_numpy(dtype=float)[warm:]
        max_diff = float(np.max(np.abs(streamed - expected))) if len(streamed) else 0.0

        return ComparisonResult(
            indicator=name,
            data_size=len(data),
            streaming_metrics=streaming_metrics,
            pandas_metrics=pandas_metrics,
            time_ratio=(streaming_metrics.execution_time / pandas_metrics.execution_time
                        if pandas_metrics.execution_time > 0 else 0),
            memory_ratio=(pandas_metrics.peak_memory_mb / streaming_metrics.peak_memory_mb
                          if streaming_metrics.peak_memory_mb > 0 else 0),
            values_match=max_diff <= tolerance,
            max_abs_difference=max_diff
        )

    def run_scalability_test(self, data_sizes: List[int] = None,
                             indicators: List[str] = None,
                             seed: Optional[int] = 42) -> List[ComparisonResult]:
        """
        Run the comparison for each indicator at each data size.

        Args:
            data_sizes (List[int]): Data sizes to test
            indicators (List[str]): Registry names, all known pairs by default
            seed (Optional[int]): Seed for the generated data

        Returns:
            List[ComparisonResult]: One result per (size, indicator)
        """
        if data_sizes is None:
            data_sizes = [1000, 5000, 10000, 50000]
        if indicators is None:
            indicators = list(PANDAS_EQUIVALENTS)

        results = []
        for size in data_sizes:
            data = self.data_generator.generate_ohlcv_data(size, seed=seed)
            for name in indicators:
                result = self.compare(name, data)
                results.append(result)
                logger.info(f"Size {size} {name}: streaming {result.streaming_metrics.execution_time:.4f}s, "
                            f"pandas {result.pandas_metrics.execution_time:.4f}s, "
                            f"match: {result.values_match}")
        return results

    def run_comprehensive_benchmark(self, data_sizes: List[int] = None) -> Dict[str, Any]:
        """Run the scalability test and summarise it."""
        logger.info("Starting comprehensive performance benchmark")
        scalability_results = self.run_scalability_test(data_sizes)
        return {
            'timestamp': datetime.now(),
            'scalability_results': scalability_results,
            'performance_summary': self._generate_performance_summary(scalability_results)
        }

    def _generate_performance_summary(self, results: List[ComparisonResult]) -> Dict[str, Any]:
        if not results:
            return {}

        per_point_us = [
            r.streaming_metrics.execution_time / r.data_size * 1e6
            for r in results if r.data_size
        ]
        accuracy = [r.values_match for r in results]

        return {
            'streaming_us_per_point': {
                'mean': statistics.mean(per_point_us) if per_point_us else 0.0,
                'max': max(per_point_us) if per_point_us else 0.0,
                'std_deviation': statistics.stdev(per_point_us) if len(per_point_us) > 1 else 0.0
            },
            'accuracy': {
                'accuracy_rate': sum(accuracy) / len(accuracy),
                'total_tests': len(accuracy),
                'accurate_tests': sum(accuracy)
            },
            'scaling': self._analyze_scaling_behavior(results)
        }

    @staticmethod
    def _analyze_scaling_behavior(results: List[ComparisonResult]) -> Dict[str, Any]:
        """Check that streaming time per point stays flat as the data grows."""
        by_indicator: Dict[str, List[ComparisonResult]] = {}
        for r in results:
            by_indicator.setdefault(r.indicator, []).append(r)

        analysis = {}
        for name, rows in by_indicator.items():
            if len(rows) < 2:
                analysis[name] = {'analysis': 'Insufficient data for scaling analysis'}
                continue
            first, last = rows[0], rows[-1]
            first_rate = first.streaming_metrics.execution_time / first.data_size
            last_rate = last.streaming_metrics.execution_time / last.data_size
            factor = last_rate / first_rate if first_rate > 0 else 0
            analysis[name] = {
                'per_point_growth_factor': factor,
                'is_linear': factor < 2.0
            }
        return analysis

    def generate_report(self, results: Dict[str, Any], output_file: Optional[str] = None) -> str:
        """
        Generate a human-readable performance report.

        Args:
            results (Dict[str, Any]): Output of run_comprehensive_benchmark
            output_file (Optional[str]): Write the report here as well

        Returns:
            str: Generated report
        """
        report_lines = []
        report_lines.append("=" * 80)
        report_lines.append("STREAMING VS PANDAS ROLLING PERFORMANCE REPORT")
        report_lines.append("=" * 80)
        report_lines.append(f"Generated: {results['timestamp']}")
        report_lines.append("")

        report_lines.append(f"{'Indicator':<20} {'Size':<8} {'Stream(s)':<10} {'Pandas(s)':<10} {'Max diff':<12} {'Match':<6}")
        report_lines.append("-" * 70)
        for r in results['scalability_results']:
            report_lines.append(
                f"{r.indicator:<20} {r.data_size:<8} {r.streaming_metrics.execution_time:<10.4f} "
                f"{r.pandas_metrics.execution_time:<10.4f} {r.max_abs_difference:<12.2e} "
                f"{'yes' if r.values_match else 'no':<6}"
            )
        report_lines.append("")

        summary = results.get('performance_summary') or {}
        if summary:
            per_point = summary['streaming_us_per_point']
            accuracy = summary['accuracy']
            report_lines.append(f"Streaming cost per point: {per_point['mean']:.2f}us (max {per_point['max']:.2f}us)")
            report_lines.append(f"Accuracy: {accuracy['accuracy_rate'] * 100:.1f}% "
                                f"({accuracy['accurate_tests']}/{accuracy['total_tests']} comparisons)")
            for name, scaling in summary['scaling'].items():
                if 'is_linear' in scaling:
                    report_lines.append(f"{name}: linear scaling {'yes' if scaling['is_linear'] else 'no'} "
                                        f"(per-point growth {scaling['per_point_growth_factor']:.2f}x)")
        report_lines.append("=" * 80)

        report_text = '\n'.join(report_lines)
        if output_file:
            with open(output_file, 'w') as f:
                f.write(report_text)
            logger.info(f"Report saved to {output_file}")
        return report_text


def main():
    """Run the default benchmark and print the report."""
    logging.basicConfig(level=logging.INFO)
    benchmark = PerformanceBenchmark()
    results = benchmark.run_comprehensive_benchmark()
    print(benchmark.generate_report(results))


if __name__ == "__main__":
    main()
