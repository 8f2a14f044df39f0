"""
Directional movement system (J. Welles Wilder Jr.).

Raw directional movement compares each bar with the previous one:

    up   = high - prev_high
    down = prev_low - low
    +DM  = up   if up > down and up > 0 else 0
    -DM  = down if down > up and down > 0 else 0

The first bar has no predecessor and yields 0 for both. Everything else is
built from Wilder smoothing (k = 1/n):

    +DI = 100 * S(+DM) / S(TR)        0 when S(TR) is 0
    DX  = 100 * |+DI - -DI| / (+DI + -DI)   0 when the sum is 0
    ADX = S(DX)

Bare numbers are treated as bars whose high, low and close all equal the
number.

Classes:
    DirectionalMovement: Raw (+DM, -DM) pair
    PositiveDirectionalMovement, NegativeDirectionalMovement: Raw +DM / -DM
    SmoothedPositiveDirectionalMovement, SmoothedNegativeDirectionalMovement
    PositiveDirectionalIndicator, NegativeDirectionalIndicator: +DI / -DI
    DirectionalMovementIndex: DX
    AverageDirectionalIndex: ADX
    DirectionalMovementIndicator: (+DI, -DI, ADX) record
"""

from dataclasses import astuple, dataclass
from typing import Any, Dict, Optional, Tuple

from .. import numeric as num
from ..base import BaseIndicator, validate_period
from ..capabilities import field_of, is_scalar, to_number
from .smoothing import WildersSmoothing
from .volatility import TrueRange

_HUNDRED = num.from_int(100)


@dataclass(frozen=True)
class DirectionalMovementOutput:
    plus: num.Number
    minus: num.Number

    def astuple(self) -> Tuple[num.Number, ...]:
        return astuple(self)


@dataclass(frozen=True)
class ADXOutput:
    plus_di: num.Number
    minus_di: num.Number
    adx: num.Number

    def astuple(self) -> Tuple[num.Number, ...]:
        return astuple(self)


class DirectionalMovement(BaseIndicator):
    """Raw +DM and -DM of each bar against the previous bar."""

    display_name = 'DM'
    required_inputs = ('high', 'low')
    output_type = DirectionalMovementOutput
    _state_attrs = ('_prev_high', '_prev_low')

    def __init__(self):
        super().__init__(1)
        self._prev_high: Optional[num.Number] = None
        self._prev_low: Optional[num.Number] = None

    def _next(self, data_point: Any) -> DirectionalMovementOutput:
        if is_scalar(data_point):
            high = low = to_number(data_point)
        else:
            high = field_of(data_point, 'high', self._name)
            low = field_of(data_point, 'low', self._name)

        prev_high, prev_low = self._prev_high, self._prev_low
        self._prev_high, self._prev_low = high, low
        if prev_high is None:
            return DirectionalMovementOutput(num.ZERO, num.ZERO)

        up = high - prev_high
        down = prev_low - low
        plus = up if up > down and up > 0 else num.ZERO
        minus = down if down > up and down > 0 else num.ZERO
        return DirectionalMovementOutput(plus, minus)

    @property
    def params(self) -> Dict[str, Any]:
        return {}

    def reset(self) -> None:
        super().reset()
        self._prev_high = None
        self._prev_low = None

    def __str__(self) -> str:
        return 'DM'


class PositiveDirectionalMovement(BaseIndicator):
    """Raw +DM."""

    display_name = 'DM+'
    required_inputs = ('high', 'low')
    _state_attrs = ('_movement',)

    def __init__(self):
        super().__init__(1)
        self._movement = DirectionalMovement()
        self._children = [self._movement]

    def _next(self, data_point: Any) -> num.Number:
        return self._movement.next(data_point).plus

    @property
    def params(self) -> Dict[str, Any]:
        return {}

    def __str__(self) -> str:
        return 'DM+'


class NegativeDirectionalMovement(BaseIndicator):
    """Raw -DM."""

    display_name = 'DM-'
    required_inputs = ('high', 'low')
    _state_attrs = ('_movement',)

    def __init__(self):
        super().__init__(1)
        self._movement = DirectionalMovement()
        self._children = [self._movement]

    def _next(self, data_point: Any) -> num.Number:
        return self._movement.next(data_point).minus

    @property
    def params(self) -> Dict[str, Any]:
        return {}

    def __str__(self) -> str:
        return 'DM-'


class _SmoothedDirectionalMovement(BaseIndicator):
    """Wilder smoothing of one side of the raw directional movement."""

    required_inputs = ('high', 'low')
    _side = 'plus'
    _state_attrs = ('_movement', '_smoothing')

    def __init__(self, period: int = 14):
        period = validate_period(period, indicator_name=self.display_name)
        super().__init__(period)

        self._movement = DirectionalMovement()
        self._smoothing = WildersSmoothing(period)
        self._children = [self._movement]

    def _next(self, data_point: Any) -> num.Number:
        movement = self._movement.next(data_point)
        return self._smoothing.update(getattr(movement, self._side))

    def reset(self) -> None:
        super().reset()
        self._smoothing.reset()


class SmoothedPositiveDirectionalMovement(_SmoothedDirectionalMovement):
    display_name = 'S+DM'
    _side = 'plus'


class SmoothedNegativeDirectionalMovement(_SmoothedDirectionalMovement):
    display_name = 'S-DM'
    _side = 'minus'


class _DirectionalCore:
    """
    Shared +DI/-DI engine: raw movement, true range and their Wilder
    averages. Not an indicator on its own.
    """

    def __init__(self, period: int):
        self._movement = DirectionalMovement()
        self._true_range = TrueRange()
        self._plus_smoothing = WildersSmoothing(period)
        self._minus_smoothing = WildersSmoothing(period)
        self._range_smoothing = WildersSmoothing(period)

    def update(self, data_point: Any) -> Tuple[num.Number, num.Number]:
        movement = self._movement.next(data_point)
        smoothed_range = self._range_smoothing.update(self._true_range.next(data_point))
        smoothed_plus = self._plus_smoothing.update(movement.plus)
        smoothed_minus = self._minus_smoothing.update(movement.minus)

        if smoothed_range == 0:
            return num.ZERO, num.ZERO
        return _HUNDRED * smoothed_plus / smoothed_range, _HUNDRED * smoothed_minus / smoothed_range

    def reset(self) -> None:
        self._movement.reset()
        self._true_range.reset()
        self._plus_smoothing.reset()
        self._minus_smoothing.reset()
        self._range_smoothing.reset()

    def get_state(self) -> Dict[str, Any]:
        return {
            'movement': self._movement.get_state(),
            'true_range': self._true_range.get_state(),
            'plus_smoothing': self._plus_smoothing.get_state(),
            'minus_smoothing': self._minus_smoothing.get_state(),
            'range_smoothing': self._range_smoothing.get_state(),
        }

    def set_state(self, state: Dict[str, Any]) -> None:
        self._movement.set_state(state['movement'])
        self._true_range.set_state(state['true_range'])
        self._plus_smoothing.set_state(state['plus_smoothing'])
        self._minus_smoothing.set_state(state['minus_smoothing'])
        self._range_smoothing.set_state(state['range_smoothing'])


def _directional_index(plus_di: num.Number, minus_di: num.Number) -> num.Number:
    total = plus_di + minus_di
    if total == 0:
        return num.ZERO
    return _HUNDRED * abs(plus_di - minus_di) / total


class _DirectionalIndicatorBase(BaseIndicator):
    required_inputs = ('high', 'low', 'close')
    _state_attrs = ('_core',)

    def __init__(self, period: int = 14):
        period = validate_period(period, indicator_name=self.display_name)
        super().__init__(period)
        self._core = _DirectionalCore(period)

    def reset(self) -> None:
        super().reset()
        self._core.reset()


class PositiveDirectionalIndicator(_DirectionalIndicatorBase):
    """+DI: smoothed +DM as a percentage of the smoothed true range."""

    display_name = 'DI+'

    def _next(self, data_point: Any) -> num.Number:
        return self._core.update(data_point)[0]


class NegativeDirectionalIndicator(_DirectionalIndicatorBase):
    """-DI: smoothed -DM as a percentage of the smoothed true range."""

    display_name = 'DI-'

    def _next(self, data_point: Any) -> num.Number:
        return self._core.update(data_point)[1]


class DirectionalMovementIndex(_DirectionalIndicatorBase):
    """DX: spread between +DI and -DI relative to their sum."""

    display_name = 'DX'

    def _next(self, data_point: Any) -> num.Number:
        return _directional_index(*self._core.update(data_point))


class AverageDirectionalIndex(_DirectionalIndicatorBase):
    """ADX: Wilder-smoothed DX, a trend strength reading between 0 and 100."""

    display_name = 'ADX'
    _state_attrs = ('_core', '_smoothing')

    def __init__(self, period: int = 14):
        super().__init__(period)
        self._smoothing = WildersSmoothing(self._period)

    def _next(self, data_point: Any) -> num.Number:
        return self._smoothing.update(_directional_index(*self._core.update(data_point)))

    def reset(self) -> None:
        super().reset()
        self._smoothing.reset()


class DirectionalMovementIndicator(AverageDirectionalIndex):
    """The full directional movement system: +DI, -DI and ADX together."""

    display_name = 'DMI'
    output_type = ADXOutput

    def _next(self, data_point: Any) -> ADXOutput:
        plus_di, minus_di = self._core.update(data_point)
        adx = self._smoothing.update(_directional_index(plus_di, minus_di))
        return ADXOutput(plus_di, minus_di, adx)
