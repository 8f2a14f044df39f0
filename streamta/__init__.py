"""
streamta: streaming technical analysis indicators

Computes technical-analysis indicators over a sequential stream of
price/volume observations, one output per input, in amortized O(1) time
per update and without re-scanning history.

This library provides:
- Factory pattern for creating indicators by name
- Circular windows, lazy-rescan extremum trackers and windowed Welford
  variance as the shared streaming primitives
- Composite indicators wired from those primitives
- Snapshots for persisting and resuming indicator state
- A pandas adapter for running indicators over DataFrames

Example Usage:
    import streamta as ta

    # Factory pattern
    sma = ta.create('sma', period=20)
    bb = ta.create('bollinger_bands', period=20, multiplier=2.0)

    # Direct class access
    macd = ta.MACD(fast_period=12, slow_period=26, signal_period=9)

    for bar in bars:
        out = macd.next(bar)
        print(out.value, out.signal, out.histogram)
"""

__version__ = "1.0.0"

# Public API exports
from .base import BaseIndicator
from .bar import Bar, BarBuilder
from .window import CircularWindow
from .exceptions import (
    IndicatorError,
    InvalidParameterError,
    MissingInputError,
    IncompleteInputError,
    InvalidInputError,
    IndicatorNotFoundError,
    SnapshotError,
)
from .indicators import *  # noqa: F401,F403
from .indicators import __all__ as _indicator_names
from .factory import (
    create,
    list_indicators,
    describe,
    registry_name,
    validate_period,
    validate_multiplier,
    validate_alpha,
    validate_input_field,
)
from . import snapshot

__all__ = [
    # Core classes
    "BaseIndicator",
    "CircularWindow",
    "Bar",
    "BarBuilder",

    # Factory functions
    "create",
    "list_indicators",
    "describe",
    "registry_name",

    # Snapshots
    "snapshot",

    # Validation utilities
    "validate_period",
    "validate_multiplier",
    "validate_alpha",
    "validate_input_field",

    # Exceptions
    "IndicatorError",
    "InvalidParameterError",
    "MissingInputError",
    "IncompleteInputError",
    "InvalidInputError",
    "IndicatorNotFoundError",
    "SnapshotError",

    # Metadata
    "__version__",
] + list(_indicator_names)
