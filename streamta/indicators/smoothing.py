"""
Smoothing strategy classes for technical indicators.

This module implements the Strategy pattern for the exponential smoothers
used throughout the library. A smoother is a two-state machine:

    uninitialized --first update--> running

The first update stores the input and returns it unchanged; every later
update applies ``current = k * x + (1 - k) * current``.

Classes:
    SmoothingStrategy: Abstract base class for smoothing algorithms
    WildersSmoothing: Wilder's exponential smoothing (k = 1/N)
    EmaSmoothing: Standard exponential moving average smoothing (k = 2/(N+1))
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from .. import numeric as num

_ONE = num.from_int(1)
_TWO = num.from_int(2)


class SmoothingStrategy(ABC):
    """
    Abstract base class for exponential smoothing.

    Used directly as a building block by composed indicators (ATR, RSI,
    MACD, the directional family) so that they do not pay for a full
    indicator wrapper per smoother.
    """

    def __init__(self, period: int):
        """
        Initialize the smoothing strategy.

        Args:
            period (int): The smoothing period for the algorithm.
        """
        self.period = period
        self._k = self.get_alpha()
        self._one_minus_k = _ONE - self._k
        self._current: Optional[num.Number] = None

    @abstractmethod
    def get_alpha(self) -> num.Number:
        """Smoothing factor k for this strategy."""

    def update(self, new_value: num.Number) -> num.Number:
        """
        Incorporate a new value and return the smoothed result.

        Args:
            new_value: New value to incorporate into smoothed result.

        Returns:
            The updated smoothed value.
        """
        if self._current is None:
            self._current = new_value
        else:
            self._current = self._k * new_value + self._one_minus_k * self._current
        return self._current

    @property
    def value(self) -> Optional[num.Number]:
        """Current smoothed value, None before the first update."""
        return self._current

    @property
    def is_initialized(self) -> bool:
        return self._current is not None

    def reset(self) -> None:
        """Return to the uninitialized state."""
        self._current = None

    def get_state(self) -> Dict[str, Any]:
        return {'current': self._current}

    def set_state(self, state: Dict[str, Any]) -> None:
        self._current = state['current']

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(period={self.period}, current={self._current})"


class WildersSmoothing(SmoothingStrategy):
    """
    Wilder's exponential smoothing.

    Uses k = 1/N, the smoothing J. Welles Wilder Jr. used for RSI, ATR and
    the directional movement system.
    """

    def get_alpha(self) -> num.Number:
        return _ONE / num.from_int(self.period)


class EmaSmoothing(SmoothingStrategy):
    """
    Standard exponential moving average smoothing.

    Uses k = 2/(N+1) unless an explicit ``alpha`` is given.
    """

    def __init__(self, period: int, alpha: Optional[float] = None):
        self.alpha = alpha
        super().__init__(period)

    def get_alpha(self) -> num.Number:
        if self.alpha is not None:
            return num.lit(str(self.alpha))
        return _TWO / num.from_int(self.period + 1)
