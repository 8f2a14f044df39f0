"""Factory for creating streaming indicators by name."""

import inspect
import logging
from typing import Any, Dict, List, Optional, Type

from .base import (BaseIndicator, validate_alpha, validate_input_field, validate_multiplier,
                   validate_period)
from .exceptions import IndicatorNotFoundError, InvalidParameterError
from .indicators import (
    AverageDirectionalIndex,
    AverageTrueRange,
    BollingerBands,
    ChandelierExit,
    CommodityChannelIndex,
    DirectionalMovement,
    DirectionalMovementIndex,
    DirectionalMovementIndicator,
    EfficiencyRatio,
    EMA,
    FastStochastic,
    HMA,
    KeltnerChannel,
    MACD,
    Maximum,
    MeanAbsoluteDeviation,
    Minimum,
    MoneyFlowIndex,
    NegativeDirectionalIndicator,
    NegativeDirectionalMovement,
    OnBalanceVolume,
    PercentagePriceOscillator,
    PositiveDirectionalIndicator,
    PositiveDirectionalMovement,
    QQE,
    RateOfChange,
    RotationFactor,
    RSI,
    SlowStochastic,
    SMA,
    SmoothedNegativeDirectionalMovement,
    SmoothedPositiveDirectionalMovement,
    StandardDeviation,
    TrueRange,
    VolumeWeightedAveragePrice,
    WMA,
)

logger = logging.getLogger(__name__)

__all__ = [
    "IndicatorRegistry",
    "create",
    "list_indicators",
    "describe",
    "registry_name",
    "validate_period",
    "validate_multiplier",
    "validate_alpha",
    "validate_input_field",
]


class IndicatorRegistry:
    """Registry for managing indicators with aliases."""

    def __init__(self):
        """Initialize registry with built-in indicators."""
        self._registry: Dict[str, Type[BaseIndicator]] = {}
        self._canonical: Dict[Type[BaseIndicator], str] = {}
        self._register_builtin_indicators()

    def _register_builtin_indicators(self) -> None:
        """Register built-in indicators."""
        # Extremum trackers
        self.register('maximum', Maximum, aliases=['max', 'highest'])
        self.register('minimum', Minimum, aliases=['min', 'lowest'])

        # Trend indicators
        self.register('sma', SMA, aliases=['simple_ma', 'simple_moving_average'])
        self.register('ema', EMA, aliases=['exp_ma', 'exponential_moving_average'])
        self.register('wma', WMA, aliases=['weighted_moving_average'])
        self.register('hma', HMA, aliases=['hull_moving_average'])

        # Volatility indicators
        self.register('standard_deviation', StandardDeviation, aliases=['sd', 'stddev'])
        self.register('mean_absolute_deviation', MeanAbsoluteDeviation, aliases=['mad'])
        self.register('true_range', TrueRange, aliases=['tr'])
        self.register('atr', AverageTrueRange, aliases=['average_true_range'])

        # Momentum indicators
        self.register('rsi', RSI, aliases=['relative_strength_index'])
        self.register('roc', RateOfChange, aliases=['rate_of_change'])
        self.register('efficiency_ratio', EfficiencyRatio, aliases=['er'])
        self.register('fast_stochastic', FastStochastic, aliases=['fast_stoch', 'stochastic', 'stoch'])
        self.register('slow_stochastic', SlowStochastic, aliases=['slow_stoch'])
        self.register('qqe', QQE, aliases=['quantitative_qualitative_estimation'])
        self.register('rotation_factor', RotationFactor, aliases=['rf'])

        # Volume indicators
        self.register('mfi', MoneyFlowIndex, aliases=['money_flow_index'])
        self.register('obv', OnBalanceVolume, aliases=['on_balance_volume'])
        self.register('vwap', VolumeWeightedAveragePrice, aliases=['volume_weighted_average_price'])

        # Directional movement
        self.register('directional_movement', DirectionalMovement, aliases=['dm'])
        self.register('plus_dm', PositiveDirectionalMovement, aliases=['positive_directional_movement'])
        self.register('minus_dm', NegativeDirectionalMovement, aliases=['negative_directional_movement'])
        self.register('smoothed_plus_dm', SmoothedPositiveDirectionalMovement,
                      aliases=['smoothed_positive_directional_movement'])
        self.register('smoothed_minus_dm', SmoothedNegativeDirectionalMovement,
                      aliases=['smoothed_negative_directional_movement'])
        self.register('plus_di', PositiveDirectionalIndicator, aliases=['positive_directional_indicator'])
        self.register('minus_di', NegativeDirectionalIndicator, aliases=['negative_directional_indicator'])
        self.register('dx', DirectionalMovementIndex, aliases=['directional_movement_index'])
        self.register('adx', AverageDirectionalIndex, aliases=['average_directional_index'])
        self.register('dmi', DirectionalMovementIndicator, aliases=['directional_movement_indicator'])

        # Composite indicators
        self.register('macd', MACD, aliases=['moving_average_convergence_divergence'])
        self.register('ppo', PercentagePriceOscillator, aliases=['percentage_price_oscillator'])
        self.register('bollinger_bands', BollingerBands, aliases=['bbands', 'bb'])
        self.register('keltner_channel', KeltnerChannel, aliases=['kc'])
        self.register('chandelier_exit', ChandelierExit, aliases=['ce'])
        self.register('cci', CommodityChannelIndex, aliases=['commodity_channel_index'])

    def register(self, name: str, indicator_class: Type[BaseIndicator], aliases: Optional[List[str]] = None) -> None:
        """Register indicator under a canonical name plus aliases."""
        name_lower = name.lower()
        self._registry[name_lower] = indicator_class
        self._canonical[indicator_class] = name_lower

        if aliases:
            for alias in aliases:
                self._registry[alias.lower()] = indicator_class

    def get(self, name: str) -> Type[BaseIndicator]:
        """Get indicator class by name or alias."""
        name_lower = name.lower()
        if name_lower not in self._registry:
            raise IndicatorNotFoundError(name, self.list_indicators())

        return self._registry[name_lower]

    def name_of(self, indicator_class: Type[BaseIndicator]) -> str:
        """Canonical registered name of an indicator class."""
        try:
            return self._canonical[indicator_class]
        except KeyError:
            raise IndicatorNotFoundError(indicator_class.__name__, self.list_indicators()) from None

    def list_indicators(self) -> List[str]:
        """List canonical indicator names."""
        return sorted(self._canonical.values())

    def get_aliases(self, name: str) -> List[str]:
        """
        Get all aliases for an indicator.

        Args:
            name (str): Indicator name

        Returns:
            List[str]: List of all names (including aliases) for the indicator
        """
        try:
            target_class = self.get(name)
            return [key for key, cls in self._registry.items() if cls == target_class]
        except IndicatorNotFoundError:
            return []


# Global registry instance
_REGISTRY = IndicatorRegistry()


def create(name: str, **kwargs) -> BaseIndicator:
    """
    Create an indicator by name.

    Args:
        name (str): Name or alias of the indicator (case-insensitive).
        **kwargs: Constructor parameters, e.g. ``period``, ``multiplier``,
            ``fast_period``/``slow_period``/``signal_period``.

    Returns:
        BaseIndicator: Configured indicator instance.

    Raises:
        IndicatorNotFoundError: If the indicator name is not recognized
        InvalidParameterError: If parameters are invalid or unexpected

    Examples:
        >>> import streamta as ta
        >>> sma = ta.create('sma', period=20)
        >>> bb = ta.create('BB', period=20, multiplier=2.0)
        >>> macd = ta.create('macd', fast_period=12, slow_period=26, signal_period=9)
    """
    indicator_class = _REGISTRY.get(name)
    try:
        return indicator_class(**kwargs)
    except TypeError as e:
        sig = inspect.signature(indicator_class.__init__)
        params = list(sig.parameters.keys())[1:]  # Skip 'self'

        logger.error(f"Cannot create '{name}' with {kwargs}: {e}")
        raise InvalidParameterError(
            parameter_name="constructor",
            value=str(kwargs),
            expected=f"valid parameters for {name}: {params}",
            indicator_name=name
        ) from e


def list_indicators() -> List[str]:
    """
    Get a list of all available indicator names.

    Returns:
        List[str]: Alphabetically sorted list of canonical indicator names
    """
    return _REGISTRY.list_indicators()


def registry_name(indicator: BaseIndicator) -> str:
    """Canonical registered name of an indicator instance."""
    return _REGISTRY.name_of(type(indicator))


def describe(name: str) -> Dict[str, Any]:
    """
    Get detailed information about an indicator.

    Args:
        name (str): Name of the indicator to describe (case-insensitive)

    Returns:
        Dict[str, Any]: Dictionary containing:
            - name: Canonical registered name
            - class_name: Implementing class
            - aliases: List of alternative names
            - parameters: Parameter information from constructor signature
            - docstring: Class documentation
            - required_inputs: OHLCV fields read from bar inputs

    Raises:
        IndicatorNotFoundError: If the indicator name is not recognized
    """
    indicator_class = _REGISTRY.get(name)

    sig = inspect.signature(indicator_class.__init__)
    parameters = {}

    for param_name, param in sig.parameters.items():
        if param_name == 'self':
            continue

        param_info = {
            'type': param.annotation if param.annotation != inspect.Parameter.empty else 'Any',
            'default': param.default if param.default != inspect.Parameter.empty else None,
            'required': param.default == inspect.Parameter.empty
        }
        parameters[param_name] = param_info

    return {
        'name': _REGISTRY.name_of(indicator_class),
        'class_name': indicator_class.__name__,
        'aliases': _REGISTRY.get_aliases(name),
        'parameters': parameters,
        'docstring': indicator_class.__doc__,
        'required_inputs': indicator_class.required_inputs,
    }
