"""Tests for the pandas adapter."""

import numpy as np
import pandas as pd
import pytest

from streamta import SMA, BollingerBands, MACD, MoneyFlowIndex, Maximum
from streamta.frame import run, run_many, run_values


class TestRun:

    def test_scalar_output_is_series(self, ohlcv_frame):
        result = run(SMA(period=5), ohlcv_frame)
        assert isinstance(result, pd.Series)
        assert result.index.equals(ohlcv_frame.index)
        assert result.name == 'SMA(5)'
        expected = ohlcv_frame['close'].rolling(5, min_periods=1).mean()
        assert result.tolist() == pytest.approx(expected.tolist())

    def test_record_output_is_frame(self, ohlcv_frame):
        result = run(BollingerBands(period=10), ohlcv_frame)
        assert isinstance(result, pd.DataFrame)
        assert list(result.columns) == ['average', 'upper', 'lower']
        assert (result['upper'] >= result['lower']).all()

    def test_column_names_are_case_insensitive(self, ohlcv_frame):
        upper = ohlcv_frame.rename(columns=str.upper)
        assert run(Maximum(4), upper).tolist() == run(Maximum(4), ohlcv_frame).tolist()

    def test_volume_indicator(self, ohlcv_frame):
        result = run(MoneyFlowIndex(period=14), ohlcv_frame)
        assert result.iloc[0] == 50.0
        assert result.between(-1e-9, 100 + 1e-9).all()

    def test_continue_across_frames(self, ohlcv_frame):
        whole = run(MACD(5, 10, 3), ohlcv_frame)

        macd = MACD(5, 10, 3)
        first = run(macd, ohlcv_frame.iloc[:100])
        second = run(macd, ohlcv_frame.iloc[100:], reset=False)
        pd.testing.assert_frame_equal(pd.concat([first, second]), whole)

    def test_reset_by_default(self, ohlcv_frame):
        sma = SMA(period=5)
        first = run(sma, ohlcv_frame)
        again = run(sma, ohlcv_frame)
        pd.testing.assert_series_equal(first, again)


class TestRunValues:

    def test_list(self):
        result = run_values(SMA(period=2), [1.0, 3.0, 5.0])
        assert result.tolist() == [1.0, 2.0, 4.0]
        assert isinstance(result.index, pd.RangeIndex)

    def test_series_keeps_index(self):
        values = pd.Series([1.0, 2.0, 3.0], index=['a', 'b', 'c'])
        result = run_values(Maximum(2), values)
        assert list(result.index) == ['a', 'b', 'c']
        assert result.tolist() == [1.0, 2.0, 3.0]

    def test_numpy_array(self):
        result = run_values(SMA(period=3), np.array([3, 6, 9, 12]))
        assert result.tolist() == [3.0, 4.5, 6.0, 9.0]


class TestRunMany:

    def test_joins_scalar_and_record_columns(self, ohlcv_frame):
        result = run_many({'fast': SMA(3), 'bands': BollingerBands(5)}, ohlcv_frame)
        assert list(result.columns) == ['fast', 'bands.average', 'bands.upper', 'bands.lower']
        assert result.index.equals(ohlcv_frame.index)
        assert result['fast'].tolist() == pytest.approx(run(SMA(3), ohlcv_frame).tolist())

    def test_empty(self, ohlcv_frame):
        result = run_many({}, ohlcv_frame)
        assert result.empty
        assert len(result.index) == len(ohlcv_frame)
