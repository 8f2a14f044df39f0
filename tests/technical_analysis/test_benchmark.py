"""Tests for the benchmark helpers."""

import pytest

from streamta.benchmark import (ComparisonResult, DataGenerator, MemoryProfiler,
                                PerformanceBenchmark, PANDAS_EQUIVALENTS)


class TestDataGenerator:

    def test_shape_and_columns(self):
        data = DataGenerator.generate_ohlcv_data(50, seed=1)
        assert list(data.columns) == ['open', 'high', 'low', 'close', 'volume']
        assert len(data) == 50
        assert data.index.is_monotonic_increasing

    def test_bars_are_consistent(self):
        data = DataGenerator.generate_ohlcv_data(500, seed=2)
        assert (data['low'] <= data[['open', 'close']].min(axis=1)).all()
        assert (data['high'] >= data[['open', 'close']].max(axis=1)).all()
        assert (data['volume'] > 0).all()

    def test_seed_is_reproducible(self):
        a = DataGenerator.generate_ohlcv_data(30, seed=3)
        b = DataGenerator.generate_ohlcv_data(30, seed=3)
        assert a.equals(b)


class TestMemoryProfiler:

    def test_profiling_cycle(self):
        profiler = MemoryProfiler()
        profiler.start_profiling()
        payload = [float(i) for i in range(10000)]
        peak, current = profiler.stop_profiling()
        assert peak >= current >= 0
        assert len(payload) == 10000

    def test_rss_samples(self):
        profiler = MemoryProfiler()
        assert profiler.get_average() == 0.0
        profiler.measure_current()
        assert profiler.get_average() > 0
        assert profiler.peak_memory == profiler.measurements[0]


class TestPerformanceBenchmark:

    @pytest.mark.parametrize("name", sorted(PANDAS_EQUIVALENTS))
    def test_streaming_agrees_with_pandas(self, name):
        benchmark = PerformanceBenchmark(period=10)
        data = DataGenerator.generate_ohlcv_data(400, seed=4)
        result = benchmark.compare(name, data)
        assert isinstance(result, ComparisonResult)
        assert result.values_match, result.max_abs_difference
        assert result.streaming_metrics.data_points_processed == 400

    def test_unknown_indicator(self):
        with pytest.raises(KeyError):
            PerformanceBenchmark().compare('rsi', DataGenerator.generate_ohlcv_data(10, seed=0))

    def test_comprehensive_report(self, tmp_path):
        benchmark = PerformanceBenchmark(period=5)
        results = benchmark.run_comprehensive_benchmark(data_sizes=[100, 200])
        assert len(results['scalability_results']) == 2 * len(PANDAS_EQUIVALENTS)
        assert results['performance_summary']['accuracy']['accuracy_rate'] == 1.0

        output = tmp_path / 'report.txt'
        report = benchmark.generate_report(results, str(output))
        assert 'STREAMING VS PANDAS ROLLING' in report
        assert output.read_text() == report
