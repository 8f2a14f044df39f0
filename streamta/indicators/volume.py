"""
Volume-based technical indicators.

All of these need a ``volume`` capability, so bare numbers are rejected
with ``MissingInputError``.

Classes:
    MoneyFlowIndex: Volume-weighted RSI over typical prices
    OnBalanceVolume: Cumulative signed volume
    VolumeWeightedAveragePrice: Cumulative volume-weighted close
"""

from typing import Any, Dict

from .. import numeric as num
from ..base import BaseIndicator, validate_period
from ..capabilities import field_of, typical_price
from ..window import CircularWindow

_HUNDRED = num.from_int(100)
_FIFTY = num.from_int(50)


class MoneyFlowIndex(BaseIndicator):
    """
    Money Flow Index.

    Each bar contributes a signed money flow, typical price times volume,
    positive when the typical price did not fall and negative otherwise.
    Over a window of the last n flows:

        MFI = 100 * positive flow / absolute flow

    The first bar has no previous typical price; it stores a zero flow and
    returns 50. The output is also 50 whenever the absolute flow is zero.
    """

    display_name = 'MFI'
    required_inputs = ('high', 'low', 'close', 'volume')
    _state_attrs = ('_money_flows', '_prev_typical_price', '_positive_flow', '_absolute_flow')

    def __init__(self, period: int = 14):
        period = validate_period(period, indicator_name='MFI')
        super().__init__(period)

        self._money_flows = CircularWindow(period, num.ZERO)
        self._prev_typical_price = None
        self._positive_flow = num.ZERO
        self._absolute_flow = num.ZERO

    def _next(self, data_point: Any) -> num.Number:
        tp = typical_price(data_point, self._name)
        volume = field_of(data_point, 'volume', self._name)
        prev_tp = self._prev_typical_price
        self._prev_typical_price = tp

        if prev_tp is None:
            self._retire(self._money_flows.push(num.ZERO))
            return _FIFTY

        money_flow = tp * volume
        if tp >= prev_tp:
            signed_flow = money_flow
            self._positive_flow += money_flow
        else:
            signed_flow = -money_flow
        self._absolute_flow += money_flow
        self._retire(self._money_flows.push(signed_flow))

        if self._absolute_flow == 0:
            return _FIFTY
        return self._positive_flow / self._absolute_flow * _HUNDRED

    def _retire(self, old_flow: num.Number) -> None:
        """Remove a flow that left the window from the running sums."""
        if old_flow > 0:
            self._positive_flow -= old_flow
            self._absolute_flow -= old_flow
        else:
            self._absolute_flow += old_flow

    def reset(self) -> None:
        super().reset()
        self._money_flows.reset(num.ZERO)
        self._prev_typical_price = None
        self._positive_flow = num.ZERO
        self._absolute_flow = num.ZERO


class OnBalanceVolume(BaseIndicator):
    """
    On Balance Volume: volume is added on an up close and subtracted on a
    down close. The previous close starts at 0, so a positive first close
    adds its volume.
    """

    display_name = 'OBV'
    required_inputs = ('close', 'volume')
    _state_attrs = ('_obv', '_prev_close')

    def __init__(self):
        super().__init__(1)
        self._obv = num.ZERO
        self._prev_close = num.ZERO

    def _next(self, data_point: Any) -> num.Number:
        close = field_of(data_point, 'close', self._name)
        volume = field_of(data_point, 'volume', self._name)
        if close > self._prev_close:
            self._obv += volume
        elif close < self._prev_close:
            self._obv -= volume
        self._prev_close = close
        return self._obv

    @property
    def params(self) -> Dict[str, Any]:
        return {}

    def reset(self) -> None:
        super().reset()
        self._obv = num.ZERO
        self._prev_close = num.ZERO

    def __str__(self) -> str:
        return 'OBV'


class VolumeWeightedAveragePrice(BaseIndicator):
    """
    Cumulative volume weighted average price.

        VWAP = sum(close * volume) / sum(volume)

    Until some volume has traded the output is the current close.
    """

    display_name = 'VWAP'
    required_inputs = ('close', 'volume')
    _state_attrs = ('_cumulative_volume', '_cumulative_traded')

    def __init__(self):
        super().__init__(1)
        self._cumulative_volume = num.ZERO
        self._cumulative_traded = num.ZERO

    def _next(self, data_point: Any) -> num.Number:
        close = field_of(data_point, 'close', self._name)
        volume = field_of(data_point, 'volume', self._name)
        self._cumulative_volume += volume
        self._cumulative_traded += close * volume

        if self._cumulative_volume == 0:
            return close
        return self._cumulative_traded / self._cumulative_volume

    @property
    def params(self) -> Dict[str, Any]:
        return {}

    def reset(self) -> None:
        super().reset()
        self._cumulative_volume = num.ZERO
        self._cumulative_traded = num.ZERO

    def __str__(self) -> str:
        return 'VWAP'
