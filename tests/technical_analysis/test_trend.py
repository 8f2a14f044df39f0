"""Tests for the moving averages."""

import math

import numpy as np
import pandas as pd
import pytest

from streamta import EMA, HMA, SMA, WMA, InvalidParameterError


def _reference_wma(values, period):
    out = []
    for i in range(len(values)):
        window = values[max(0, i - period + 1):i + 1]
        weights = range(1, len(window) + 1)
        out.append(sum(w * v for w, v in zip(weights, window)) / sum(weights))
    return out


class TestSMA:

    def test_filling_uses_available_samples(self):
        sma = SMA(period=4)
        assert [sma.next(x) for x in (4.0, 5.0, 6.0, 6.0, 6.0)] == [4.0, 4.5, 5.0, 5.25, 5.75]

    def test_matches_pandas_rolling_mean(self, closes):
        sma = SMA(period=20)
        outputs = [sma.next(x) for x in closes]
        expected = pd.Series(closes).rolling(20, min_periods=1).mean().tolist()
        assert outputs == pytest.approx(expected, rel=1e-10)

    def test_reads_input_field_from_bars(self, bars):
        sma = SMA(period=3, input_field='high')
        outputs = [sma.next(bar) for bar in bars[:3]]
        assert outputs[-1] == pytest.approx(sum(b.high for b in bars[:3]) / 3)

    def test_ready_transition_at_period(self):
        sma = SMA(period=3)
        readiness = []
        for x in (1.0, 2.0, 3.0, 4.0):
            sma.next(x)
            readiness.append(sma.is_ready)
        assert readiness == [False, False, True, True]

    def test_value_property(self):
        sma = SMA(period=2)
        assert sma.value is None
        sma.next(2.0)
        sma.next(4.0)
        assert sma.value == 3.0

    def test_display_and_params(self):
        sma = SMA(period=20)
        assert str(sma) == 'SMA(20)'
        assert sma.params == {'period': 20, 'input_field': 'close'}

    @pytest.mark.parametrize("period", [0, -5, 2.5, '10', True])
    def test_invalid_period(self, period):
        with pytest.raises(InvalidParameterError):
            SMA(period=period)

    def test_invalid_input_field(self):
        with pytest.raises(InvalidParameterError):
            SMA(period=5, input_field='median')


class TestEMA:

    def test_documented_sequence(self):
        ema = EMA(period=3)
        assert [ema.next(x) for x in (2.0, 5.0, 1.0, 6.25)] == [2.0, 3.5, 2.25, 4.25]

    def test_matches_pandas_ewm(self, closes):
        ema = EMA(period=12)
        outputs = [ema.next(x) for x in closes]
        expected = pd.Series(closes).ewm(span=12, adjust=False).mean().tolist()
        assert outputs == pytest.approx(expected, rel=1e-10)

    def test_custom_alpha(self):
        ema = EMA(period=10, alpha=0.5)
        assert [ema.next(x) for x in (2.0, 4.0, 8.0)] == [2.0, 3.0, 5.5]
        assert ema.params['alpha'] == 0.5

    @pytest.mark.parametrize("alpha", [0, 1.5, -0.1])
    def test_invalid_alpha(self, alpha):
        with pytest.raises(InvalidParameterError):
            EMA(period=10, alpha=alpha)

    def test_zero_input_is_a_legitimate_seed(self):
        ema = EMA(period=3)
        assert ema.next(0.0) == 0.0
        assert ema.next(4.0) == 2.0


class TestWMA:

    def test_matches_reference(self):
        values = [1.0, 3.0, 2.0, 5.0, 4.0, 7.0, 6.0, 9.0]
        wma = WMA(period=4)
        outputs = [wma.next(x) for x in values]
        assert outputs == pytest.approx(_reference_wma(values, 4))

    def test_matches_numpy_convolution(self, closes):
        period = 9
        wma = WMA(period=period)
        outputs = [wma.next(x) for x in closes]
        weights = np.arange(1, period + 1, dtype=float)
        expected = np.convolve(closes, weights[::-1], mode='valid') / weights.sum()
        assert outputs[period - 1:] == pytest.approx(expected.tolist(), rel=1e-9)

    def test_period_one_is_identity(self):
        wma = WMA(period=1)
        assert [wma.next(x) for x in (3.0, -1.0, 8.0)] == [3.0, -1.0, 8.0]


class TestHMA:

    def test_composition_of_wmas(self, closes):
        period = 9
        hma = HMA(period=period)
        half, full, root = WMA(period // 2), WMA(period), WMA(math.isqrt(period))
        for x in closes[:60]:
            expected = root.next(2 * half.next(x) - full.next(x))
            assert hma.next(x) == pytest.approx(expected)

    def test_constant_series(self):
        hma = HMA(period=16)
        for _ in range(40):
            out = hma.next(5.0)
        assert out == pytest.approx(5.0)

    def test_requires_period_of_two(self):
        with pytest.raises(InvalidParameterError):
            HMA(period=1)

    def test_reset_resets_children(self):
        values = [float(x % 7) for x in range(30)]
        hma = HMA(period=6)
        first = [hma.next(x) for x in values]
        hma.reset()
        assert [hma.next(x) for x in values] == first
        assert len(hma.children) == 3
