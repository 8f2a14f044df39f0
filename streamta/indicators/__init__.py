"""
Technical Analysis Indicators Module

Concrete implementations of streaming technical indicators built on BaseIndicator.
"""

from .smoothing import SmoothingStrategy, WildersSmoothing, EmaSmoothing
from .minmax import Maximum, Minimum
from .trend import SMA, EMA, WMA, HMA
from .volatility import StandardDeviation, MeanAbsoluteDeviation, TrueRange, AverageTrueRange
from .momentum import (RSI, RateOfChange, EfficiencyRatio, FastStochastic, SlowStochastic,
                       QQE, QQEOutput, RotationFactor)
from .volume import MoneyFlowIndex, OnBalanceVolume, VolumeWeightedAveragePrice
from .directional import (
    DirectionalMovement,
    DirectionalMovementOutput,
    PositiveDirectionalMovement,
    NegativeDirectionalMovement,
    SmoothedPositiveDirectionalMovement,
    SmoothedNegativeDirectionalMovement,
    PositiveDirectionalIndicator,
    NegativeDirectionalIndicator,
    DirectionalMovementIndex,
    AverageDirectionalIndex,
    DirectionalMovementIndicator,
    ADXOutput,
)
from .composite import (
    BandsOutput,
    MACDOutput,
    PPOOutput,
    ChandelierExitOutput,
    BollingerBands,
    KeltnerChannel,
    MACD,
    PercentagePriceOscillator,
    ChandelierExit,
    CommodityChannelIndex,
)

__all__ = [
    # Smoothing strategies
    "SmoothingStrategy",
    "WildersSmoothing",
    "EmaSmoothing",

    # Extremum trackers
    "Maximum",
    "Minimum",

    # Trend indicators
    "SMA",
    "EMA",
    "WMA",
    "HMA",

    # Volatility indicators
    "StandardDeviation",
    "MeanAbsoluteDeviation",
    "TrueRange",
    "AverageTrueRange",

    # Momentum indicators
    "RSI",
    "RateOfChange",
    "EfficiencyRatio",
    "FastStochastic",
    "SlowStochastic",
    "QQE",
    "RotationFactor",

    # Volume indicators
    "MoneyFlowIndex",
    "OnBalanceVolume",
    "VolumeWeightedAveragePrice",

    # Directional movement
    "DirectionalMovement",
    "PositiveDirectionalMovement",
    "NegativeDirectionalMovement",
    "SmoothedPositiveDirectionalMovement",
    "SmoothedNegativeDirectionalMovement",
    "PositiveDirectionalIndicator",
    "NegativeDirectionalIndicator",
    "DirectionalMovementIndex",
    "AverageDirectionalIndex",
    "DirectionalMovementIndicator",

    # Composite indicators
    "BollingerBands",
    "KeltnerChannel",
    "MACD",
    "PercentagePriceOscillator",
    "ChandelierExit",
    "CommodityChannelIndex",

    # Output records
    "BandsOutput",
    "MACDOutput",
    "PPOOutput",
    "ChandelierExitOutput",
    "QQEOutput",
    "DirectionalMovementOutput",
    "ADXOutput",
]
