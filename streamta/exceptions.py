"""Exception classes for the streaming indicator library."""

from typing import Any, List, Optional


class IndicatorError(Exception):
    """Base exception for indicator errors."""

    def __init__(self, message: str, indicator_name: Optional[str] = None):
        self.indicator_name = indicator_name
        super().__init__(f"[{indicator_name}] {message}" if indicator_name else message)


class InvalidParameterError(IndicatorError):
    """Construction parameter out of range (period, multiplier, alpha, ...)."""

    def __init__(self, parameter_name: str, value: Any, expected: str, indicator_name: Optional[str] = None):
        self.parameter_name = parameter_name
        self.value = value
        self.expected = expected
        super().__init__(f"Parameter '{parameter_name}' is {value!r}, expected {expected}", indicator_name)


class MissingInputError(IndicatorError):
    """An input lacks an OHLCV accessor the indicator reads."""

    def __init__(self, field_name: str, indicator_name: Optional[str] = None):
        self.field_name = field_name
        self.missing_fields = [field_name]
        super().__init__(f"Input has no '{field_name}' field", indicator_name)


class IncompleteInputError(IndicatorError):
    """Bar builder is missing one or more OHLCV fields."""

    def __init__(self, missing_fields: List[str]):
        self.missing_fields = missing_fields
        super().__init__(f"Bar is incomplete, missing: {', '.join(missing_fields)}")


class InvalidInputError(IndicatorError):
    """Bar fields violate the OHLCV range relationships."""

    def __init__(self, field_name: str, value: Any, reason: str):
        self.field_name = field_name
        self.value = value
        self.reason = reason
        super().__init__(f"Bar field '{field_name}' = {value} is invalid: {reason}")


class IndicatorNotFoundError(IndicatorError):
    """No indicator registered under the requested name."""

    def __init__(self, indicator_name: str, available_indicators: Optional[List[str]] = None):
        self.available_indicators = available_indicators or []
        message = f"No indicator named '{indicator_name}'"
        if self.available_indicators:
            message += f". Available: {', '.join(sorted(self.available_indicators))}"
        super().__init__(message)
        self.indicator_name = indicator_name


class SnapshotError(IndicatorError):
    """Snapshot does not match the indicator it is restored into."""

    def __init__(self, reason: str, indicator_name: Optional[str] = None):
        self.reason = reason
        super().__init__(f"Cannot restore snapshot: {reason}", indicator_name)
