"""
Numeric representation used by every indicator.

The engine works over a single number type chosen once per process, when
this module is first imported:

    STREAMTA_NUMERIC=float    binary floating point (default)
    STREAMTA_NUMERIC=decimal  arbitrary precision ``decimal.Decimal``

Indicator code only ever touches the representation through three
operations, plus the representation's infinity:

    lit("0.015")   literal from decimal text
    from_int(3)    integer conversion
    sqrt(x)        square root appropriate to the representation

Everything else is ordinary arithmetic on the chosen type.
"""

import logging
import math
import os
from decimal import Decimal
from typing import Union

logger = logging.getLogger(__name__)

Number = Union[float, Decimal]

ENV_VAR = "STREAMTA_NUMERIC"


class FloatBackend:
    """IEEE-754 double precision."""

    name = "float"
    number_type = float
    INFINITY = math.inf

    @staticmethod
    def lit(text: str) -> float:
        return float(text)

    @staticmethod
    def from_int(value: int) -> float:
        return float(value)

    @staticmethod
    def sqrt(value: float) -> float:
        return math.sqrt(value)


class DecimalBackend:
    """Fixed-point decimal arithmetic using the active ``decimal`` context."""

    name = "decimal"
    number_type = Decimal
    INFINITY = Decimal("Infinity")

    @staticmethod
    def lit(text: str) -> Decimal:
        return Decimal(text)

    @staticmethod
    def from_int(value: int) -> Decimal:
        return Decimal(int(value))

    @staticmethod
    def sqrt(value: Decimal) -> Decimal:
        return value.sqrt()


BACKENDS = {
    FloatBackend.name: FloatBackend,
    DecimalBackend.name: DecimalBackend,
}


def _select_backend(name: str):
    backend = BACKENDS.get(name.strip().lower())
    if backend is None:
        logger.warning(f"Unknown numeric backend '{name}' in {ENV_VAR}, falling back to float")
        return FloatBackend
    return backend


BACKEND = _select_backend(os.environ.get(ENV_VAR, FloatBackend.name))

NUMBER_TYPE = BACKEND.number_type
INFINITY = BACKEND.INFINITY
lit = BACKEND.lit
from_int = BACKEND.from_int
sqrt = BACKEND.sqrt

ZERO = from_int(0)
ONE = from_int(1)
