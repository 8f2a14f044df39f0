"""
Input capabilities.

Indicators never depend on a concrete bar class. Each one asks only for the
accessors it needs (``open``, ``high``, ``low``, ``close``, ``volume``) and
accepts anything offering them:

* a bare number, used directly as the value;
* an object with the accessors as attributes (``Bar``, dataclasses,
  pandas ``itertuples()`` rows, ...);
* a mapping with the accessors as keys (dict data points).
"""

import numbers
from decimal import Decimal
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from . import numeric as num
from .exceptions import MissingInputError

OHLCV_FIELDS = ('open', 'high', 'low', 'close', 'volume')

_THREE = num.from_int(3)


@runtime_checkable
class HasOpen(Protocol):
    @property
    def open(self) -> num.Number: ...


@runtime_checkable
class HasHigh(Protocol):
    @property
    def high(self) -> num.Number: ...


@runtime_checkable
class HasLow(Protocol):
    @property
    def low(self) -> num.Number: ...


@runtime_checkable
class HasClose(Protocol):
    @property
    def close(self) -> num.Number: ...


@runtime_checkable
class HasVolume(Protocol):
    @property
    def volume(self) -> num.Number: ...


def is_scalar(data: Any) -> bool:
    """True for bare numeric inputs (bools excluded)."""
    return isinstance(data, numbers.Number) and not isinstance(data, bool)


def to_number(value: Any) -> num.Number:
    """
    Convert a numeric input to the active representation.

    Integers go through the integer seam and other reals through their
    decimal text, so floats, ``Decimal`` and numpy scalars all arrive as
    ``num.NUMBER_TYPE``. Anything else is returned unchanged.
    """
    if isinstance(value, num.NUMBER_TYPE):
        return value
    if isinstance(value, numbers.Integral) and not isinstance(value, bool):
        return num.from_int(value)
    if isinstance(value, (numbers.Real, Decimal)):
        return num.lit(str(value))
    return value


def field_of(data: Any, name: str, indicator_name: Optional[str] = None) -> num.Number:
    """
    Read one capability from a bar-like input.

    Raises:
        MissingInputError: If the input does not expose ``name``.
    """
    if isinstance(data, Mapping):
        try:
            value = data[name]
        except KeyError:
            raise MissingInputError(name, indicator_name) from None
    else:
        try:
            value = getattr(data, name)
        except AttributeError:
            raise MissingInputError(name, indicator_name) from None
    return to_number(value)


def value_of(data: Any, name: str = 'close', indicator_name: Optional[str] = None) -> num.Number:
    """A bare number is its own value; otherwise read the ``name`` capability."""
    if is_scalar(data):
        return to_number(data)
    return field_of(data, name, indicator_name)


def typical_price(data: Any, indicator_name: Optional[str] = None) -> num.Number:
    """(high + low + close) / 3 of a bar, or the number itself."""
    if is_scalar(data):
        return to_number(data)
    high = field_of(data, 'high', indicator_name)
    low = field_of(data, 'low', indicator_name)
    close = field_of(data, 'close', indicator_name)
    return (high + low + close) / _THREE
