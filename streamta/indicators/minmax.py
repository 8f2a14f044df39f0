"""
Min/Max technical indicators.

Rolling extremum trackers over a circular window. The index of the current
extremum is cached; a full rescan of the window only happens when the slot
holding the extremum is overwritten by a less extreme value, which keeps the
amortized cost per update O(1) for typical price series.

Classes:
    Maximum: Highest value over the last N inputs (reads ``high`` from bars).
    Minimum: Lowest value over the last N inputs (reads ``low`` from bars).
"""

import operator
from typing import Any, Dict, Optional

from .. import numeric as num
from ..base import BaseIndicator, validate_input_field, validate_period
from ..capabilities import value_of
from ..window import CircularWindow


class _RollingExtremum(BaseIndicator):
    """Shared lazy-rescan algorithm for Maximum and Minimum."""

    default_field = 'close'
    _state_attrs = ('_window', '_index')

    # Overridden by subclasses
    _sentinel: Any = None
    _at_least_as_extreme = staticmethod(operator.ge)
    _select = staticmethod(max)

    def __init__(self, period: int, input_field: Optional[str] = None):
        period = validate_period(period, indicator_name=self.display_name)
        self.input_field = validate_input_field(input_field or self.default_field, self.display_name)
        super().__init__(period)

        self._window = CircularWindow(period, self._sentinel)
        self._index = 0

    def _next(self, data_point: Any) -> num.Number:
        value = value_of(data_point, self.input_field, self._name)
        window = self._window
        slots = window.slots
        cursor = window.cursor
        extremum = slots[self._index]

        window.push(value)

        if self._at_least_as_extreme(value, extremum):
            self._index = cursor
        elif self._index == cursor:
            self._index = self._rescan()

        return slots[self._index]

    def _rescan(self) -> int:
        slots = self._window.slots
        return self._select(range(len(slots)), key=slots.__getitem__)

    @property
    def params(self) -> Dict[str, Any]:
        return {'period': self._period, 'input_field': self.input_field}

    def reset(self) -> None:
        super().reset()
        self._window.reset(self._sentinel)
        self._index = 0


class Maximum(_RollingExtremum):
    """
    Highest value over the last ``period`` inputs.

    Before the window is full the maximum is taken over the inputs seen so
    far (unwritten slots hold -inf). Bar inputs contribute their ``high``.

    Example:
        >>> m = Maximum(3)
        >>> [m.next(x) for x in (4.0, 1.2, 5.0, 3.0, 4.0, 0.0)]
        [4.0, 4.0, 5.0, 5.0, 5.0, 4.0]
    """

    display_name = 'MAX'
    required_inputs = ('high',)
    default_field = 'high'
    _sentinel = -num.INFINITY
    _at_least_as_extreme = staticmethod(operator.ge)
    _select = staticmethod(max)


class Minimum(_RollingExtremum):
    """Lowest value over the last ``period`` inputs; bars contribute their ``low``."""

    display_name = 'MIN'
    required_inputs = ('low',)
    default_field = 'low'
    _sentinel = num.INFINITY
    _at_least_as_extreme = staticmethod(operator.le)
    _select = staticmethod(min)
