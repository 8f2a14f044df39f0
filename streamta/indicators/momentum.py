"""
Momentum technical indicators.

Classes:
    RSI: Relative Strength Index with configurable smoothing strategies
    RateOfChange: Percentage change over N periods
    EfficiencyRatio: Kaufman's efficiency ratio
    FastStochastic: %K of the stochastic oscillator
    SlowStochastic: EMA-smoothed %K
    QQE: Quantitative Qualitative Estimation
    RotationFactor: Market profile rotation factor
"""

from dataclasses import astuple, dataclass
from typing import Any, Dict, Literal, Optional, Tuple

from .. import numeric as num
from ..base import (BaseIndicator, format_param, to_param, validate_input_field,
                     validate_multiplier, validate_period)
from ..capabilities import field_of, is_scalar, to_number, value_of
from ..exceptions import InvalidParameterError
from ..window import CircularWindow
from .minmax import Maximum, Minimum
from .smoothing import EmaSmoothing, SmoothingStrategy, WildersSmoothing

_HUNDRED = num.from_int(100)
_FIFTY = num.from_int(50)
_RSI_SEED = num.lit("0.1")

SMOOTHING_STRATEGIES = {
    'ema': EmaSmoothing,
    'wilders': WildersSmoothing,
}


def _make_smoother(smoothing_strategy: str, period: int, indicator_name: str) -> SmoothingStrategy:
    try:
        return SMOOTHING_STRATEGIES[smoothing_strategy](period)
    except KeyError:
        raise InvalidParameterError("smoothing_strategy", smoothing_strategy, "either 'ema' or 'wilders'",
                                    indicator_name) from None


class RSI(BaseIndicator):
    """
    Relative Strength Index (RSI) indicator.

    Mathematical Formula:
        up   = x - prev if x > prev else 0
        down = prev - x if x <= prev else 0
        RSI  = 100 * smooth(up) / (smooth(up) + smooth(down))

    The first input has no predecessor; both averages are seeded with 0.1
    so the first output is 50 and the ratio is defined from the start. If
    both averages are zero the output is 50.

    Smoothing Strategies:
        - 'ema': EMA smoothing (k = 2/(N+1)), the default
        - 'wilders': Wilder's smoothing (k = 1/N)

    Example:
        >>> rsi = RSI(period=3)
        >>> [round(rsi.next(x)) for x in (10.0, 10.5, 10.0, 9.5)]
        [50, 86, 35, 16]
    """

    display_name = 'RSI'
    _state_attrs = ('_gain_smoother', '_loss_smoother', '_previous_price')

    def __init__(
        self,
        period: int,
        input_field: str = 'close',
        smoothing_strategy: Literal['ema', 'wilders'] = 'ema'
    ):
        """
        Initialize Relative Strength Index indicator.

        Args:
            period (int): Number of periods for the gain/loss averages.
            input_field (str): OHLCV field read from bar inputs. Defaults to 'close'.
            smoothing_strategy (str): 'ema' or 'wilders'.

        Raises:
            InvalidParameterError: If period is not positive or smoothing_strategy is invalid.
        """
        period = validate_period(period, indicator_name='RSI')
        self.input_field = validate_input_field(input_field, 'RSI')
        self._gain_smoother = _make_smoother(smoothing_strategy, period, 'RSI')
        self._loss_smoother = _make_smoother(smoothing_strategy, period, 'RSI')
        self.smoothing_strategy = smoothing_strategy
        super().__init__(period)

        self._previous_price: Optional[num.Number] = None

    def _next(self, data_point: Any) -> num.Number:
        price = value_of(data_point, self.input_field, self._name)
        previous = self._previous_price

        if previous is None:
            up = down = _RSI_SEED
        elif price > previous:
            up, down = price - previous, num.ZERO
        else:
            up, down = num.ZERO, previous - price
        self._previous_price = price

        average_gain = self._gain_smoother.update(up)
        average_loss = self._loss_smoother.update(down)
        total = average_gain + average_loss
        if total == 0:
            return _FIFTY
        return _HUNDRED * average_gain / total

    @property
    def average_gain(self) -> Optional[num.Number]:
        return self._gain_smoother.value

    @property
    def average_loss(self) -> Optional[num.Number]:
        return self._loss_smoother.value

    @property
    def params(self) -> Dict[str, Any]:
        return {'period': self._period, 'input_field': self.input_field,
                'smoothing_strategy': self.smoothing_strategy}

    def reset(self) -> None:
        super().reset()
        self._previous_price = None
        self._gain_smoother.reset()
        self._loss_smoother.reset()


class RateOfChange(BaseIndicator):
    """
    Rate of Change: percentage change between the current price and the
    price ``period`` inputs ago.

        ROC = (x - x[t - n]) / x[t - n] * 100

    While fewer than n earlier prices exist the oldest available one is
    used. The first output is 0, as is any output whose reference price is 0.
    """

    display_name = 'ROC'
    _state_attrs = ('_prices',)

    def __init__(self, period: int, input_field: str = 'close'):
        period = validate_period(period, indicator_name='ROC')
        self.input_field = validate_input_field(input_field, 'ROC')
        super().__init__(period)

        self._prices = CircularWindow(period + 1, num.ZERO)

    def _next(self, data_point: Any) -> num.Number:
        price = value_of(data_point, self.input_field, self._name)
        self._prices.push(price)
        if self._prices.count == 1:
            return num.ZERO

        reference = self._prices.oldest()
        if reference == 0:
            return num.ZERO
        return (price - reference) / reference * _HUNDRED

    @property
    def params(self) -> Dict[str, Any]:
        return {'period': self._period, 'input_field': self.input_field}

    def reset(self) -> None:
        super().reset()
        self._prices.reset(num.ZERO)


class EfficiencyRatio(BaseIndicator):
    """
    Kaufman's Efficiency Ratio over the last ``period`` price changes.

        ER = |x - x[t - n]| / sum(|x[i] - x[i - 1]|)

    The denominator is kept as a running sum over a window of absolute
    changes. The ratio is 1.0 until three prices have been seen, and 1.0
    whenever the denominator is zero (a flat market).
    """

    display_name = 'ER'
    _state_attrs = ('_prices', '_changes', '_volatility')

    def __init__(self, period: int, input_field: str = 'close'):
        period = validate_period(period, indicator_name='ER')
        self.input_field = validate_input_field(input_field, 'ER')
        super().__init__(period)

        self._prices = CircularWindow(period + 1, num.ZERO)
        self._changes = CircularWindow(period, num.ZERO)
        self._volatility = num.ZERO

    def _next(self, data_point: Any) -> num.Number:
        price = value_of(data_point, self.input_field, self._name)
        if self._prices.count:
            change = abs(price - self._prices.newest())
            self._volatility += change - self._changes.push(change)
        self._prices.push(price)

        if self._prices.count <= 2 or self._volatility == 0:
            return num.ONE
        return abs(price - self._prices.oldest()) / self._volatility

    @property
    def params(self) -> Dict[str, Any]:
        return {'period': self._period, 'input_field': self.input_field}

    def reset(self) -> None:
        super().reset()
        self._prices.reset(num.ZERO)
        self._changes.reset(num.ZERO)
        self._volatility = num.ZERO


class FastStochastic(BaseIndicator):
    """
    Fast stochastic oscillator (%K).

        %K = 100 * (close - lowest low) / (highest high - lowest low)

    Bars feed their high into the rolling maximum and their low into the
    rolling minimum; bare numbers feed both. When the range is empty the
    output is 50.
    """

    display_name = 'FAST_STOCH'
    required_inputs = ('high', 'low', 'close')
    _state_attrs = ('_minimum', '_maximum')

    def __init__(self, period: int = 14):
        period = validate_period(period, indicator_name='FAST_STOCH')
        super().__init__(period)

        self._minimum = Minimum(period)
        self._maximum = Maximum(period)
        self._children = [self._minimum, self._maximum]

    def _next(self, data_point: Any) -> num.Number:
        lowest = self._minimum.next(data_point)
        highest = self._maximum.next(data_point)
        close = value_of(data_point, 'close', self._name)

        if highest == lowest:
            return _FIFTY
        return (close - lowest) / (highest - lowest) * _HUNDRED


class SlowStochastic(BaseIndicator):
    """Slow stochastic: EMA of the fast stochastic."""

    display_name = 'SLOW_STOCH'
    required_inputs = ('high', 'low', 'close')
    _state_attrs = ('_fast', '_smoothing')

    def __init__(self, stochastic_period: int = 14, ema_period: int = 3):
        stochastic_period = validate_period(stochastic_period, "stochastic_period", 'SLOW_STOCH')
        ema_period = validate_period(ema_period, "ema_period", 'SLOW_STOCH')
        super().__init__(stochastic_period)

        self.ema_period = ema_period
        self._fast = FastStochastic(stochastic_period)
        self._smoothing = EmaSmoothing(ema_period)
        self._children = [self._fast]

    def _next(self, data_point: Any) -> num.Number:
        return self._smoothing.update(self._fast.next(data_point))

    @property
    def params(self) -> Dict[str, Any]:
        return {'stochastic_period': self._period, 'ema_period': self.ema_period}

    def reset(self) -> None:
        super().reset()
        self._smoothing.reset()

    def __str__(self) -> str:
        return f"SLOW_STOCH({self._period}, {self.ema_period})"


@dataclass(frozen=True)
class QQEOutput:
    rsi_ma: num.Number
    qqe_combined: num.Number
    qqe_upperband: num.Number
    qqe_lowerband: num.Number

    def astuple(self) -> Tuple[num.Number, ...]:
        return astuple(self)


class QQE(BaseIndicator):
    """
    Quantitative Qualitative Estimation.

    An RSI smoothed by an EMA (``rsi_ma``) surrounded by trailing bands.
    The band gap is the double-smoothed absolute change of ``rsi_ma``,
    using EMAs of period 2n - 1, scaled by ``wilders_multiplier``. A band
    only moves against the trend when the smoothed RSI crosses it; the
    combined line follows the upper band in a long trend and the lower band
    in a short trend.

    Args:
        period (int): RSI period n.
        smooth_period (int): EMA period applied to the RSI.
        wilders_multiplier (float): Band width factor, at least 1.
    """

    display_name = 'QQE'
    output_type = QQEOutput
    _state_attrs = ('_rsi', '_rsi_smoother', '_rsi_tr_smoother', '_wilders_smoother',
                    '_last_smoothed_rsi', '_last_upperband', '_last_lowerband', '_trend')

    def __init__(self, period: int = 14, smooth_period: int = 5, wilders_multiplier: float = 4.236):
        period = validate_period(period, indicator_name='QQE')
        smooth_period = validate_period(smooth_period, "smooth_period", 'QQE')
        wilders_multiplier = validate_multiplier(wilders_multiplier, "wilders_multiplier", 'QQE', minimum=1)
        super().__init__(period)

        self.smooth_period = smooth_period
        self.wilders_multiplier = wilders_multiplier
        self._multiplier = to_param(wilders_multiplier)

        wilders_period = 2 * period - 1
        self._rsi = RSI(period)
        self._rsi_smoother = EmaSmoothing(smooth_period)
        self._rsi_tr_smoother = EmaSmoothing(wilders_period)
        self._wilders_smoother = EmaSmoothing(wilders_period)
        self._children = [self._rsi]

        self._last_smoothed_rsi = _FIFTY
        self._last_upperband = num.ZERO
        self._last_lowerband = num.ZERO
        self._trend = True

    def _next(self, data_point: Any) -> QQEOutput:
        smoothed_rsi = self._rsi_smoother.update(self._rsi.next(data_point))
        last_smoothed_rsi = self._last_smoothed_rsi
        last_upperband = self._last_upperband
        last_lowerband = self._last_lowerband

        rsi_tr_smooth = self._rsi_tr_smoother.update(abs(last_smoothed_rsi - smoothed_rsi))
        band_gap = self._wilders_smoother.update(rsi_tr_smooth) * self._multiplier

        upperband = smoothed_rsi + band_gap
        if last_smoothed_rsi > last_upperband and smoothed_rsi > last_upperband and upperband < last_upperband:
            upperband = last_upperband

        lowerband = smoothed_rsi - band_gap
        if last_smoothed_rsi < last_lowerband and smoothed_rsi < last_lowerband and lowerband > last_lowerband:
            lowerband = last_lowerband

        if ((smoothed_rsi > lowerband and last_smoothed_rsi < last_lowerband)
                or (smoothed_rsi <= lowerband and last_smoothed_rsi >= last_lowerband)):
            self._trend = True
        elif ((smoothed_rsi > upperband and last_smoothed_rsi < last_upperband)
                or (smoothed_rsi <= upperband and last_smoothed_rsi >= last_upperband)):
            self._trend = False

        combined = upperband if self._trend else lowerband

        self._last_smoothed_rsi = smoothed_rsi
        self._last_upperband = upperband
        self._last_lowerband = lowerband

        return QQEOutput(smoothed_rsi, combined, upperband, lowerband)

    @property
    def params(self) -> Dict[str, Any]:
        return {'period': self._period, 'smooth_period': self.smooth_period,
                'wilders_multiplier': self.wilders_multiplier}

    def reset(self) -> None:
        super().reset()
        self._rsi_smoother.reset()
        self._rsi_tr_smoother.reset()
        self._wilders_smoother.reset()
        self._last_smoothed_rsi = _FIFTY
        self._last_upperband = num.ZERO
        self._last_lowerband = num.ZERO
        self._trend = True

    def __str__(self) -> str:
        return f"QQE({self._period}, {self.smooth_period}, {format_param(self.wilders_multiplier)})"


class RotationFactor(BaseIndicator):
    """
    Market profile rotation factor.

    Each bar scores +1 for a higher high, -1 for a lower high, +1 for a
    higher low and -1 for a lower low compared with the previous bar. The
    first bar scores 0. ``accumulation`` holds the running total of scores.
    Bare numbers count as both high and low.
    """

    display_name = 'ROTATION_FACTOR'
    required_inputs = ('high', 'low')
    _state_attrs = ('_prev_high', '_prev_low', '_accumulation')

    def __init__(self):
        super().__init__(1)
        self._prev_high: Optional[num.Number] = None
        self._prev_low: Optional[num.Number] = None
        self._accumulation = num.ZERO

    def _next(self, data_point: Any) -> num.Number:
        if is_scalar(data_point):
            high = low = to_number(data_point)
        else:
            high = field_of(data_point, 'high', self._name)
            low = field_of(data_point, 'low', self._name)

        score = num.ZERO
        if self._prev_high is not None:
            if high > self._prev_high:
                score += num.ONE
            elif high < self._prev_high:
                score -= num.ONE
            if low > self._prev_low:
                score += num.ONE
            elif low < self._prev_low:
                score -= num.ONE

        self._prev_high = high
        self._prev_low = low
        self._accumulation += score
        return score

    @property
    def accumulation(self) -> num.Number:
        return self._accumulation

    @property
    def params(self) -> Dict[str, Any]:
        return {}

    def reset(self) -> None:
        super().reset()
        self._prev_high = None
        self._prev_low = None
        self._accumulation = num.ZERO

    def __str__(self) -> str:
        return 'ROTATION_FACTOR'
