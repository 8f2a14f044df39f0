"""
Volatility technical indicators.

Classes:
    StandardDeviation: Windowed population standard deviation (Welford)
    MeanAbsoluteDeviation: Mean absolute deviation about the window mean
    TrueRange: Wilder's true range of a bar
    AverageTrueRange: Exponential average of the true range
"""

from typing import Any, Dict

from .. import numeric as num
from ..base import BaseIndicator, validate_input_field, validate_period
from ..capabilities import field_of, is_scalar, to_number, value_of
from ..window import CircularWindow
from .smoothing import EmaSmoothing


class StandardDeviation(BaseIndicator):
    """
    Population standard deviation over a sliding window.

    Mean and sum of squared deviations are maintained with Welford's
    online algorithm, extended for the sliding case where the departing
    sample is removed in the same step the new one is added:

        Filling (n samples so far):
            delta  = x - mean
            mean  += delta / n
            m2    += delta * (x - mean)

        Full (window of N, departing sample x_old):
            delta  = x - x_old
            mean' = mean + delta / N
            m2    += delta * (x - mean' + x_old - mean)

    Output is sqrt(max(m2, 0) / n). The clamp absorbs tiny negative m2
    values produced by rounding.
    """

    display_name = 'SD'
    _state_attrs = ('_window', '_m', '_m2')

    def __init__(self, period: int, input_field: str = 'close'):
        period = validate_period(period, indicator_name='SD')
        self.input_field = validate_input_field(input_field, 'SD')
        super().__init__(period)

        self._window = CircularWindow(period, num.ZERO)
        self._n = num.from_int(period)
        self._m = num.ZERO
        self._m2 = num.ZERO

    def _next(self, data_point: Any) -> num.Number:
        value = value_of(data_point, self.input_field, self._name)
        window = self._window

        if window.is_full:
            old = window.push(value)
            delta = value - old
            old_m = self._m
            self._m += delta / self._n
            delta2 = value - self._m + old - old_m
        else:
            window.push(value)
            delta = value - self._m
            self._m += delta / num.from_int(window.count)
            delta2 = value - self._m
        self._m2 += delta * delta2

        return num.sqrt(max(self._m2, num.ZERO) / num.from_int(window.count))

    def mean(self) -> num.Number:
        """Mean of the samples currently in the window."""
        return self._m

    @property
    def params(self) -> Dict[str, Any]:
        return {'period': self._period, 'input_field': self.input_field}

    def reset(self) -> None:
        super().reset()
        self._window.reset(num.ZERO)
        self._m = num.ZERO
        self._m2 = num.ZERO


class MeanAbsoluteDeviation(BaseIndicator):
    """
    Mean absolute deviation about the window mean.

    The mean comes from a running sum; the deviation itself needs one pass
    over the window, so each step costs O(period).
    """

    display_name = 'MAD'
    _state_attrs = ('_window', '_sum')

    def __init__(self, period: int, input_field: str = 'close'):
        period = validate_period(period, indicator_name='MAD')
        self.input_field = validate_input_field(input_field, 'MAD')
        super().__init__(period)

        self._window = CircularWindow(period, num.ZERO)
        self._sum = num.ZERO

    def _next(self, data_point: Any) -> num.Number:
        value = value_of(data_point, self.input_field, self._name)
        old = self._window.push(value)
        self._sum += value - old

        count = num.from_int(self._window.count)
        mean = self._sum / count
        deviation = num.ZERO
        for sample in self._window:
            deviation += abs(sample - mean)
        return deviation / count

    @property
    def params(self) -> Dict[str, Any]:
        return {'period': self._period, 'input_field': self.input_field}

    def reset(self) -> None:
        super().reset()
        self._window.reset(num.ZERO)
        self._sum = num.ZERO


class TrueRange(BaseIndicator):
    """
    Wilder's true range.

    Bars:
        TR = max(high - low, |high - prev_close|, |low - prev_close|)
        The first bar has no previous close and yields high - low.

    Bare numbers:
        TR = |x - prev|, 0 for the first input.
    """

    display_name = 'TRUE_RANGE'
    required_inputs = ('high', 'low', 'close')
    _state_attrs = ('_prev_close',)

    def __init__(self):
        super().__init__(1)
        self._prev_close = None

    def _next(self, data_point: Any) -> num.Number:
        prev_close = self._prev_close

        if is_scalar(data_point):
            value = to_number(data_point)
            self._prev_close = value
            if prev_close is None:
                return num.ZERO
            return abs(value - prev_close)

        high = field_of(data_point, 'high', self._name)
        low = field_of(data_point, 'low', self._name)
        self._prev_close = field_of(data_point, 'close', self._name)
        if prev_close is None:
            return high - low
        return max(high - low, abs(high - prev_close), abs(low - prev_close))

    @property
    def params(self) -> Dict[str, Any]:
        return {}

    def reset(self) -> None:
        super().reset()
        self._prev_close = None

    def __str__(self) -> str:
        return 'TRUE_RANGE()'


class AverageTrueRange(BaseIndicator):
    """
    Average True Range: exponential moving average (k = 2/(n+1)) of the
    true range.

    Example:
        >>> atr = AverageTrueRange(3)
        >>> bars = [{'high': 10, 'low': 7.5, 'close': 9},
        ...         {'high': 11, 'low': 9, 'close': 9.5},
        ...         {'high': 9, 'low': 5, 'close': 8}]
        >>> [atr.next(b) for b in bars]
        [2.5, 2.25, 3.375]
    """

    display_name = 'ATR'
    required_inputs = ('high', 'low', 'close')
    _state_attrs = ('_true_range', '_smoothing')

    def __init__(self, period: int):
        period = validate_period(period, indicator_name='ATR')
        super().__init__(period)

        self._true_range = TrueRange()
        self._smoothing = EmaSmoothing(period)
        self._children = [self._true_range]

    def _next(self, data_point: Any) -> num.Number:
        return self._smoothing.update(self._true_range.next(data_point))

    def reset(self) -> None:
        super().reset()
        self._smoothing.reset()
