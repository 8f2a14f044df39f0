"""
Trend-following technical indicators.

This module implements moving average indicators that follow price trends.
All indicators use O(1) streaming updates.

Classes:
    SMA: Simple Moving Average with a running window sum
    EMA: Exponential Moving Average, seeded with the first input
    WMA: Linearly Weighted Moving Average with running weighted/flat sums
    HMA: Hull Moving Average built from three WMAs
"""

import math
from typing import Any, Dict, Optional

from .. import numeric as num
from ..base import BaseIndicator, validate_alpha, validate_input_field, validate_period
from ..capabilities import value_of
from ..window import CircularWindow
from .smoothing import EmaSmoothing

_TWO = num.from_int(2)


class SMA(BaseIndicator):
    """
    Simple Moving Average (SMA) indicator.

    Mathematical Formula:
        SMA = (P1 + P2 + ... + Pn) / n

    For streaming updates the departing sample is subtracted from a running
    sum. While the window is filling the sum is divided by the number of
    samples seen so far, so the first output equals the first input.

    Example:
        >>> sma = SMA(period=4)
        >>> [sma.next(x) for x in (4.0, 5.0, 6.0, 6.0, 6.0)]
        [4.0, 4.5, 5.0, 5.25, 5.75]
    """

    display_name = 'SMA'
    _state_attrs = ('_window', '_sum')

    def __init__(self, period: int, input_field: str = 'close'):
        """
        Initialize Simple Moving Average indicator.

        Args:
            period (int): Number of periods for the moving average calculation.
            input_field (str): OHLCV field read from bar inputs. Defaults to 'close'.

        Raises:
            InvalidParameterError: If period is not a positive integer.
        """
        period = validate_period(period, indicator_name='SMA')
        self.input_field = validate_input_field(input_field, 'SMA')
        super().__init__(period)

        self._window = CircularWindow(period, num.ZERO)
        self._sum = num.ZERO

    def _next(self, data_point: Any) -> num.Number:
        value = value_of(data_point, self.input_field, self._name)
        old = self._window.push(value)
        self._sum += value - old
        return self._sum / num.from_int(self._window.count)

    @property
    def params(self) -> Dict[str, Any]:
        return {'period': self._period, 'input_field': self.input_field}

    def reset(self) -> None:
        super().reset()
        self._window.reset(num.ZERO)
        self._sum = num.ZERO


class EMA(BaseIndicator):
    """
    Exponential Moving Average (EMA) indicator.

    Mathematical Formula:
        EMA_today = k * Price_today + (1 - k) * EMA_yesterday
        where k = 2 / (period + 1) by default, or a custom alpha if provided

    The first input is returned unchanged and seeds the average.

    Example:
        >>> ema = EMA(period=3)
        >>> [ema.next(x) for x in (2.0, 5.0, 1.0, 6.25)]
        [2.0, 3.5, 2.25, 4.25]
    """

    display_name = 'EMA'
    _state_attrs = ('_smoothing',)

    def __init__(self, period: int, input_field: str = 'close', alpha: Optional[float] = None):
        """
        Initialize Exponential Moving Average indicator.

        Args:
            period (int): Number of periods for the EMA calculation.
            input_field (str): OHLCV field read from bar inputs. Defaults to 'close'.
            alpha (Optional[float]): Custom smoothing factor in (0, 1].
                If None, uses k = 2/(period+1).

        Raises:
            InvalidParameterError: If period is not positive or alpha is out of range.
        """
        period = validate_period(period, indicator_name='EMA')
        self.input_field = validate_input_field(input_field, 'EMA')
        if alpha is not None:
            alpha = validate_alpha(alpha, 'EMA')
        self.alpha = alpha
        super().__init__(period)

        self._smoothing = EmaSmoothing(period, alpha)

    def _next(self, data_point: Any) -> num.Number:
        return self._smoothing.update(value_of(data_point, self.input_field, self._name))

    @property
    def params(self) -> Dict[str, Any]:
        params = {'period': self._period, 'input_field': self.input_field}
        if self.alpha is not None:
            params['alpha'] = self.alpha
        return params

    def reset(self) -> None:
        super().reset()
        self._smoothing.reset()


class WMA(BaseIndicator):
    """
    Weighted Moving Average: linear weights n, n-1, ..., 1 (newest heaviest).

    Keeps a weighted running sum and a flat running sum so that sliding the
    window is O(1):

        weighted' = weighted - flat + n * x
        flat'     = flat - departing + x

    The divisor is w * (w + 1) / 2 where w is the number of samples seen,
    capped at the period.
    """

    display_name = 'WMA'
    _state_attrs = ('_window', '_weight', '_sum', '_sum_flat')

    def __init__(self, period: int, input_field: str = 'close'):
        period = validate_period(period, indicator_name='WMA')
        self.input_field = validate_input_field(input_field, 'WMA')
        super().__init__(period)

        self._window = CircularWindow(period, num.ZERO)
        self._weight = num.ZERO
        self._sum = num.ZERO
        self._sum_flat = num.ZERO

    def _next(self, data_point: Any) -> num.Number:
        value = value_of(data_point, self.input_field, self._name)
        filling = not self._window.is_full
        old = self._window.push(value)

        if filling:
            self._weight = num.from_int(self._window.count)
            self._sum += value * self._weight
        else:
            self._sum = self._sum - self._sum_flat + value * self._weight
        self._sum_flat = self._sum_flat - old + value

        return self._sum / (self._weight * (self._weight + num.ONE) / _TWO)

    @property
    def params(self) -> Dict[str, Any]:
        return {'period': self._period, 'input_field': self.input_field}

    def reset(self) -> None:
        super().reset()
        self._window.reset(num.ZERO)
        self._weight = num.ZERO
        self._sum = num.ZERO
        self._sum_flat = num.ZERO


class HMA(BaseIndicator):
    """
    Hull Moving Average.

        HMA = WMA(2 * WMA(x, n // 2) - WMA(x, n), floor(sqrt(n)))

    Requires period >= 2 so that every inner WMA has a positive period.
    """

    display_name = 'HMA'
    _state_attrs = ('_short_wma', '_regular_wma', '_wrapping_wma')

    def __init__(self, period: int, input_field: str = 'close'):
        period = validate_period(period, indicator_name='HMA', minimum=2)
        self.input_field = validate_input_field(input_field, 'HMA')
        super().__init__(period)

        self._short_wma = WMA(period // 2)
        self._regular_wma = WMA(period)
        self._wrapping_wma = WMA(math.isqrt(period))
        self._children = [self._short_wma, self._regular_wma, self._wrapping_wma]

    def _next(self, data_point: Any) -> num.Number:
        value = value_of(data_point, self.input_field, self._name)
        source = _TWO * self._short_wma.next(value) - self._regular_wma.next(value)
        return self._wrapping_wma.next(source)

    @property
    def params(self) -> Dict[str, Any]:
        return {'period': self._period, 'input_field': self.input_field}
