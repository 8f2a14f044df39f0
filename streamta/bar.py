"""OHLCV bar value object and its validating builder."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from . import numeric as num
from .capabilities import OHLCV_FIELDS, to_number
from .exceptions import IncompleteInputError, InvalidInputError


@dataclass(frozen=True)
class Bar:
    """One OHLCV observation. Satisfies every input capability."""
    open: num.Number
    high: num.Number
    low: num.Number
    close: num.Number
    volume: num.Number
    timestamp: Optional[datetime] = field(default=None, compare=False)

    @classmethod
    def builder(cls) -> 'BarBuilder':
        return BarBuilder()


class BarBuilder:
    """
    Fluent builder for ``Bar`` that checks the OHLCV range relationships.

    Example:
        >>> bar = BarBuilder().open(9).high(10).low(8).close(9.5).volume(1000).build()
    """

    def __init__(self):
        self._open = None
        self._high = None
        self._low = None
        self._close = None
        self._volume = None
        self._timestamp = None

    def open(self, value) -> 'BarBuilder':
        self._open = to_number(value)
        return self

    def high(self, value) -> 'BarBuilder':
        self._high = to_number(value)
        return self

    def low(self, value) -> 'BarBuilder':
        self._low = to_number(value)
        return self

    def close(self, value) -> 'BarBuilder':
        self._close = to_number(value)
        return self

    def volume(self, value) -> 'BarBuilder':
        self._volume = to_number(value)
        return self

    def timestamp(self, value: datetime) -> 'BarBuilder':
        self._timestamp = value
        return self

    def build(self) -> Bar:
        """
        Validate and build the bar.

        Raises:
            IncompleteInputError: If any of open/high/low/close/volume is unset.
            InvalidInputError: Unless low <= open, close <= high and volume >= 0.
        """
        missing = [name for name in OHLCV_FIELDS if getattr(self, f"_{name}") is None]
        if missing:
            raise IncompleteInputError(missing)

        open_, high, low, close, volume = self._open, self._high, self._low, self._close, self._volume
        if low > high:
            raise InvalidInputError('low', low, f"above high {high}")
        if not low <= open_ <= high:
            raise InvalidInputError('open', open_, f"outside low/high range [{low}, {high}]")
        if not low <= close <= high:
            raise InvalidInputError('close', close, f"outside low/high range [{low}, {high}]")
        if volume < 0:
            raise InvalidInputError('volume', volume, "negative volume")

        return Bar(open_, high, low, close, volume, self._timestamp)
