"""Base class and parameter validation for streaming indicators."""

import copy
import dataclasses
import logging
import math
import numbers
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from . import numeric as num
from .exceptions import InvalidParameterError, SnapshotError

logger = logging.getLogger(__name__)

VALID_INPUT_FIELDS = ('open', 'high', 'low', 'close', 'volume')


def validate_period(period: Any, name: str = "period", indicator_name: Optional[str] = None,
                    minimum: int = 1) -> int:
    """
    Validate a period parameter.

    Args:
        period (Any): The period value to validate
        name (str): Parameter name for error messages
        indicator_name (Optional[str]): Indicator reported in the error
        minimum (int): Smallest accepted period

    Returns:
        int: Validated period value

    Raises:
        InvalidParameterError: If period is not an integer >= minimum
    """
    if isinstance(period, bool) or not isinstance(period, numbers.Integral):
        raise InvalidParameterError(name, period, "positive integer", indicator_name)

    if period < minimum:
        raise InvalidParameterError(name, period, f"integer >= {minimum}", indicator_name)

    return int(period)


def validate_multiplier(multiplier: Any, name: str = "multiplier", indicator_name: Optional[str] = None,
                        minimum: Optional[float] = None) -> float:
    """
    Validate a band/factor multiplier.

    Multipliers must be strictly positive, or at least ``minimum`` when one
    is given.

    Raises:
        InvalidParameterError: If the multiplier is not numeric or out of range
    """
    if isinstance(multiplier, bool) or not isinstance(multiplier, (numbers.Real, Decimal)):
        raise InvalidParameterError(name, multiplier, "positive numeric value", indicator_name)

    finite = multiplier.is_finite() if isinstance(multiplier, Decimal) else math.isfinite(multiplier)
    if not finite:
        raise InvalidParameterError(name, multiplier, "finite numeric value", indicator_name)

    if minimum is None:
        if multiplier <= 0:
            raise InvalidParameterError(name, multiplier, "positive value (> 0)", indicator_name)
    elif multiplier < minimum:
        raise InvalidParameterError(name, multiplier, f"value >= {minimum}", indicator_name)

    return multiplier


def validate_alpha(alpha: Any, indicator_name: Optional[str] = None) -> float:
    """
    Validate a smoothing factor.

    Raises:
        InvalidParameterError: If alpha is not in (0, 1]
    """
    if isinstance(alpha, bool) or not isinstance(alpha, numbers.Real):
        raise InvalidParameterError("alpha", alpha, "numeric value between 0 and 1", indicator_name)

    if not 0 < alpha <= 1:
        raise InvalidParameterError("alpha", alpha, "value between 0 and 1 (exclusive of 0)", indicator_name)

    return float(alpha)


def validate_input_field(input_field: Any, indicator_name: Optional[str] = None) -> str:
    """
    Validate an OHLCV input field name.

    Returns:
        str: Lower-cased field name

    Raises:
        InvalidParameterError: If the field is not one of open/high/low/close/volume
    """
    if not isinstance(input_field, str):
        raise InvalidParameterError("input_field", input_field, "string", indicator_name)

    if input_field.lower() not in VALID_INPUT_FIELDS:
        raise InvalidParameterError("input_field", input_field, f"one of {list(VALID_INPUT_FIELDS)}",
                                    indicator_name)

    return input_field.lower()


def to_param(value: Any) -> num.Number:
    """Convert a construction parameter into the active numeric representation."""
    return num.lit(str(value))


def format_param(value: Any) -> str:
    """Display form of a parameter: integral floats lose their fractional part."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class BaseIndicator(ABC):
    """
    Abstract base for streaming technical indicators.

    Every indicator is a stateful transform: ``next`` consumes one
    observation and returns one output, in amortized O(1) time. Outputs are
    defined from the very first input; ``is_ready`` only tells whether the
    warm-up (filling) phase is over.

    Subclasses implement ``_next`` and list in ``_state_attrs`` the
    attributes that make up their mutable state. Attributes holding windows,
    smoothers or child indicators are snapshotted through their own
    ``get_state``/``set_state``; everything else must be plain data.
    """

    # Display prefix used by __str__
    display_name: str = ''

    # OHLCV fields read from bar inputs
    required_inputs: Tuple[str, ...] = ('close',)

    # Attributes captured by get_state/set_state in addition to value/count
    _state_attrs: Tuple[str, ...] = ()

    # Dataclass type for record outputs, None for scalar outputs
    output_type: Optional[type] = None

    def __init__(self, period: int):
        self._period = period
        self._value: Any = None
        self._data_count = 0
        self._ready_threshold = period

        # Composite pattern support
        self._children: List['BaseIndicator'] = []

        self._name = self.__class__.__name__

        logger.debug(f"Initialized {self._name} with period={period}")

    def next(self, data_point: Any) -> Any:
        """
        Process one observation and return the indicator's new output.

        Args:
            data_point: A bare number, an object exposing the needed OHLCV
                attributes, or a mapping with the needed keys.

        Raises:
            MissingInputError: If the input lacks a required field.
        """
        output = self._next(data_point)
        self._value = output
        self._data_count += 1
        return output

    @abstractmethod
    def _next(self, data_point: Any) -> Any:
        """Compute the output for one observation, updating internal state."""

    @property
    def period(self) -> int:
        return self._period

    @property
    def value(self) -> Any:
        """Last output, or None before the first input."""
        return self._value

    @property
    def is_ready(self) -> bool:
        return self._data_count >= self._ready_threshold

    @property
    def children(self) -> List['BaseIndicator']:
        return self._children.copy()

    @property
    def params(self) -> Dict[str, Any]:
        """Construction parameters, as accepted by the constructor."""
        return {'period': self._period}

    def reset(self) -> None:
        """Return to the just-constructed state, reusing allocated storage."""
        self._value = None
        self._data_count = 0

        for child in self._children:
            child.reset()

        logger.debug(f"Reset {self._name} indicator state")

    def get_state(self) -> Dict[str, Any]:
        """Full internal state as plain Python data."""
        value = self._value
        if value is not None and self.output_type is not None:
            value = dataclasses.asdict(value)
        state = {'value': value, 'data_count': self._data_count}
        for attr in self._state_attrs:
            current = getattr(self, attr)
            state[attr] = current.get_state() if hasattr(current, 'get_state') else current
        return state

    def set_state(self, state: Dict[str, Any]) -> None:
        """
        Restore state produced by ``get_state`` on an identically
        parameterised indicator.

        The indicator is left untouched when the state is rejected.

        Raises:
            SnapshotError: If the state does not fit this indicator.
        """
        backup = copy.deepcopy(self.get_state())
        try:
            self._restore_state(state)
        except SnapshotError:
            self._restore_state(backup)
            raise
        except (KeyError, TypeError, ValueError) as e:
            self._restore_state(backup)
            raise SnapshotError(f"{type(e).__name__}: {e}", str(self)) from e

    def _restore_state(self, state: Dict[str, Any]) -> None:
        value = state['value']
        if value is not None and self.output_type is not None:
            value = self.output_type(**value)
        for attr in self._state_attrs:
            current = getattr(self, attr)
            if hasattr(current, 'set_state'):
                current.set_state(state[attr])
            else:
                setattr(self, attr, state[attr])
        self._value = value
        self._data_count = state['data_count']

    def __str__(self) -> str:
        return f"{self.display_name}({self._period})"

    def __repr__(self) -> str:
        ready_status = "ready" if self.is_ready else f"warming up ({self._data_count}/{self._ready_threshold})"
        return f"{self._name}({str(self)}, {ready_status})"
