"""
Composite technical indicators.

This module implements indicators that are wired together from other
indicators and smoothers. Multi-valued outputs are small frozen
dataclasses; ``astuple()`` gives positional unpacking.
"""

from dataclasses import astuple, dataclass
from typing import Any, Dict, Tuple

from .. import numeric as num
from ..base import (BaseIndicator, format_param, to_param, validate_input_field,
                     validate_multiplier, validate_period)
from ..capabilities import typical_price, value_of
from .minmax import Maximum, Minimum
from .smoothing import EmaSmoothing
from .trend import SMA
from .volatility import AverageTrueRange, MeanAbsoluteDeviation, StandardDeviation

_HUNDRED = num.from_int(100)
_CCI_SCALE = num.lit("0.015")


@dataclass(frozen=True)
class BandsOutput:
    average: num.Number
    upper: num.Number
    lower: num.Number

    def astuple(self) -> Tuple[num.Number, ...]:
        return astuple(self)

    def bandwidth(self) -> num.Number:
        """(upper - lower) / average, 0 when the average is 0."""
        if self.average == 0:
            return num.ZERO
        return (self.upper - self.lower) / self.average


@dataclass(frozen=True)
class MACDOutput:
    value: num.Number
    signal: num.Number
    histogram: num.Number

    def astuple(self) -> Tuple[num.Number, ...]:
        return astuple(self)


@dataclass(frozen=True)
class PPOOutput:
    ppo: num.Number
    signal: num.Number
    histogram: num.Number

    def astuple(self) -> Tuple[num.Number, ...]:
        return astuple(self)


@dataclass(frozen=True)
class ChandelierExitOutput:
    long: num.Number
    short: num.Number

    def astuple(self) -> Tuple[num.Number, ...]:
        return astuple(self)


class BollingerBands(BaseIndicator):
    """
    Bollinger Bands indicator.

    Mathematical Formula:
        Average    = mean of the last n values
        Upper Band = Average + multiplier * SD(n)
        Lower Band = Average - multiplier * SD(n)

    Average and population standard deviation both come from the same
    windowed Welford tracker.

    Example:
        >>> bb = BollingerBands(period=3, multiplier=2.0)
        >>> out = bb.next(2.0)
        >>> out.astuple()
        (2.0, 2.0, 2.0)
    """

    display_name = 'BB'
    output_type = BandsOutput
    _state_attrs = ('_sd',)

    def __init__(self, period: int = 20, multiplier: float = 2.0, input_field: str = 'close'):
        """
        Initialize Bollinger Bands indicator.

        Args:
            period (int): The lookback period for the mean and SD.
            multiplier (float): The number of standard deviations for the bands.
            input_field (str): OHLCV field read from bar inputs.

        Raises:
            InvalidParameterError: If period or multiplier is not positive.
        """
        period = validate_period(period, indicator_name='BB')
        multiplier = validate_multiplier(multiplier, indicator_name='BB')
        self.input_field = validate_input_field(input_field, 'BB')
        super().__init__(period)

        self.multiplier = multiplier
        self._multiplier = to_param(multiplier)
        self._sd = StandardDeviation(period, self.input_field)
        self._children = [self._sd]

    def _next(self, data_point: Any) -> BandsOutput:
        sd = self._sd.next(data_point)
        average = self._sd.mean()
        width = sd * self._multiplier
        return BandsOutput(average, average + width, average - width)

    @property
    def params(self) -> Dict[str, Any]:
        return {'period': self._period, 'multiplier': self.multiplier, 'input_field': self.input_field}

    def __str__(self) -> str:
        return f"BB({self._period}, {format_param(self.multiplier)})"


class KeltnerChannel(BaseIndicator):
    """
    Keltner Channel.

        Average = EMA(n) of the close
        Upper   = Average + multiplier * ATR(n)
        Lower   = Average - multiplier * ATR(n)

    Bars are reduced to their close before either child sees them, so the
    ATR tracks close-to-close ranges rather than the bar's true range.
    """

    display_name = 'KC'
    required_inputs = ('close',)
    output_type = BandsOutput
    _state_attrs = ('_atr', '_smoothing')

    def __init__(self, period: int = 20, multiplier: float = 2.0):
        period = validate_period(period, indicator_name='KC')
        multiplier = validate_multiplier(multiplier, indicator_name='KC')
        super().__init__(period)

        self.multiplier = multiplier
        self._multiplier = to_param(multiplier)
        self._atr = AverageTrueRange(period)
        self._smoothing = EmaSmoothing(period)
        self._children = [self._atr]

    def _next(self, data_point: Any) -> BandsOutput:
        close = value_of(data_point, 'close', self._name)
        average = self._smoothing.update(close)
        width = self._atr.next(close) * self._multiplier
        return BandsOutput(average, average + width, average - width)

    @property
    def params(self) -> Dict[str, Any]:
        return {'period': self._period, 'multiplier': self.multiplier}

    def reset(self) -> None:
        super().reset()
        self._smoothing.reset()

    def __str__(self) -> str:
        return f"KC({self._period}, {format_param(self.multiplier)})"


class MACD(BaseIndicator):
    """
    Moving Average Convergence Divergence.

        MACD      = EMA(fast) - EMA(slow)
        Signal    = EMA(signal) of MACD
        Histogram = MACD - Signal

    ``period`` reports the slow period. The indicator counts as ready once
    the slow EMA and the signal EMA have both seen a full period.
    """

    display_name = 'MACD'
    output_type = MACDOutput
    _state_attrs = ('_fast_ema', '_slow_ema', '_signal_ema')

    def __init__(self, fast_period: int = 12, slow_period: int = 26, signal_period: int = 9,
                 input_field: str = 'close'):
        fast_period = validate_period(fast_period, "fast_period", 'MACD')
        slow_period = validate_period(slow_period, "slow_period", 'MACD')
        signal_period = validate_period(signal_period, "signal_period", 'MACD')
        self.input_field = validate_input_field(input_field, 'MACD')
        super().__init__(slow_period)

        self.fast_period = fast_period
        self.signal_period = signal_period
        self._ready_threshold = slow_period + signal_period - 1

        self._fast_ema = EmaSmoothing(fast_period)
        self._slow_ema = EmaSmoothing(slow_period)
        self._signal_ema = EmaSmoothing(signal_period)

    def _next(self, data_point: Any) -> MACDOutput:
        value = value_of(data_point, self.input_field, self._name)
        macd = self._fast_ema.update(value) - self._slow_ema.update(value)
        signal = self._signal_ema.update(macd)
        return MACDOutput(macd, signal, macd - signal)

    @property
    def params(self) -> Dict[str, Any]:
        return {'fast_period': self.fast_period, 'slow_period': self._period,
                'signal_period': self.signal_period, 'input_field': self.input_field}

    def reset(self) -> None:
        super().reset()
        self._fast_ema.reset()
        self._slow_ema.reset()
        self._signal_ema.reset()

    def __str__(self) -> str:
        return f"MACD({self.fast_period}, {self._period}, {self.signal_period})"


class PercentagePriceOscillator(BaseIndicator):
    """
    Percentage Price Oscillator: MACD normalised by the slow EMA.

        PPO       = (EMA(fast) - EMA(slow)) / EMA(slow) * 100   (0 when EMA(slow) is 0)
        Signal    = EMA(signal) of PPO
        Histogram = PPO - Signal
    """

    display_name = 'PPO'
    output_type = PPOOutput
    _state_attrs = ('_fast_ema', '_slow_ema', '_signal_ema')

    def __init__(self, fast_period: int = 12, slow_period: int = 26, signal_period: int = 9,
                 input_field: str = 'close'):
        fast_period = validate_period(fast_period, "fast_period", 'PPO')
        slow_period = validate_period(slow_period, "slow_period", 'PPO')
        signal_period = validate_period(signal_period, "signal_period", 'PPO')
        self.input_field = validate_input_field(input_field, 'PPO')
        super().__init__(slow_period)

        self.fast_period = fast_period
        self.signal_period = signal_period
        self._ready_threshold = slow_period + signal_period - 1

        self._fast_ema = EmaSmoothing(fast_period)
        self._slow_ema = EmaSmoothing(slow_period)
        self._signal_ema = EmaSmoothing(signal_period)

    def _next(self, data_point: Any) -> PPOOutput:
        value = value_of(data_point, self.input_field, self._name)
        fast = self._fast_ema.update(value)
        slow = self._slow_ema.update(value)
        ppo = num.ZERO if slow == 0 else (fast - slow) / slow * _HUNDRED
        signal = self._signal_ema.update(ppo)
        return PPOOutput(ppo, signal, ppo - signal)

    @property
    def params(self) -> Dict[str, Any]:
        return {'fast_period': self.fast_period, 'slow_period': self._period,
                'signal_period': self.signal_period, 'input_field': self.input_field}

    def reset(self) -> None:
        super().reset()
        self._fast_ema.reset()
        self._slow_ema.reset()
        self._signal_ema.reset()

    def __str__(self) -> str:
        return f"PPO({self.fast_period}, {self._period}, {self.signal_period})"


class ChandelierExit(BaseIndicator):
    """
    Chandelier Exit trailing stops.

        Long  = highest high(n) - multiplier * ATR(n)
        Short = lowest low(n)   + multiplier * ATR(n)
    """

    display_name = 'CE'
    required_inputs = ('high', 'low', 'close')
    output_type = ChandelierExitOutput
    _state_attrs = ('_atr', '_minimum', '_maximum')

    def __init__(self, period: int = 22, multiplier: float = 3.0):
        period = validate_period(period, indicator_name='CE')
        multiplier = validate_multiplier(multiplier, indicator_name='CE')
        super().__init__(period)

        self.multiplier = multiplier
        self._multiplier = to_param(multiplier)
        self._atr = AverageTrueRange(period)
        self._minimum = Minimum(period)
        self._maximum = Maximum(period)
        self._children = [self._atr, self._minimum, self._maximum]

    def _next(self, data_point: Any) -> ChandelierExitOutput:
        offset = self._atr.next(data_point) * self._multiplier
        highest = self._maximum.next(data_point)
        lowest = self._minimum.next(data_point)
        return ChandelierExitOutput(highest - offset, lowest + offset)

    @property
    def params(self) -> Dict[str, Any]:
        return {'period': self._period, 'multiplier': self.multiplier}

    def __str__(self) -> str:
        return f"CE({self._period}, {format_param(self.multiplier)})"


class CommodityChannelIndex(BaseIndicator):
    """
    Commodity Channel Index.

        CCI = (TP - SMA(TP, n)) / (0.015 * MAD(close, n))

    TP is the typical price. The output is 0 while the mean absolute
    deviation is 0.
    """

    display_name = 'CCI'
    required_inputs = ('high', 'low', 'close')
    _state_attrs = ('_sma', '_mad')

    def __init__(self, period: int = 20):
        period = validate_period(period, indicator_name='CCI')
        super().__init__(period)

        self._sma = SMA(period)
        self._mad = MeanAbsoluteDeviation(period)
        self._children = [self._sma, self._mad]

    def _next(self, data_point: Any) -> num.Number:
        tp = typical_price(data_point, self._name)
        sma = self._sma.next(tp)
        mad = self._mad.next(data_point)

        if mad == 0:
            return num.ZERO
        return (tp - sma) / (mad * _CCI_SCALE)
