"""
pandas adapter: stream the rows of a DataFrame through an indicator.

The indicator still sees one observation at a time; this module only
handles iteration and collects the outputs into pandas objects aligned
with the input index.
"""

import dataclasses
import logging
from typing import Any, Dict, Iterable, List

import numpy as np
import pandas as pd

from .base import BaseIndicator

logger = logging.getLogger(__name__)


def _collect(indicator: BaseIndicator, outputs: List[Any], index: pd.Index):
    if indicator.output_type is not None:
        columns = [f.name for f in dataclasses.fields(indicator.output_type)]
        rows = [dataclasses.astuple(output) for output in outputs]
        return pd.DataFrame(rows, index=index, columns=columns)
    return pd.Series(outputs, index=index, name=str(indicator))


def run(indicator: BaseIndicator, frame: pd.DataFrame, reset: bool = True):
    """
    Feed every row of an OHLCV DataFrame to ``indicator``.

    Column names are matched case-insensitively against
    open/high/low/close/volume; other columns are ignored.

    Args:
        indicator (BaseIndicator): Indicator to drive.
        frame (pd.DataFrame): One row per observation, in time order.
        reset (bool): Reset the indicator before the first row. Pass False to
            continue a stream across consecutive frames.

    Returns:
        pd.Series for scalar indicators, pd.DataFrame with one column per
        output field for record indicators. Both share ``frame.index``.
    """
    if reset:
        indicator.reset()

    data = frame.rename(columns=lambda c: str(c).lower())
    outputs = [indicator.next(row) for row in data.itertuples(index=False)]

    logger.debug(f"Ran {indicator} over {len(outputs)} rows")
    return _collect(indicator, outputs, frame.index)


def run_values(indicator: BaseIndicator, values: Iterable[Any], reset: bool = True):
    """
    Feed a sequence of bare numbers to ``indicator``.

    A pd.Series keeps its index; any other iterable gets a RangeIndex.
    numpy arrays are converted to Python scalars first.
    """
    if reset:
        indicator.reset()

    if isinstance(values, pd.Series):
        index = values.index
        values = values.tolist()
    elif isinstance(values, np.ndarray):
        values = values.tolist()
        index = pd.RangeIndex(len(values))
    else:
        values = list(values)
        index = pd.RangeIndex(len(values))

    outputs = [indicator.next(value) for value in values]
    return _collect(indicator, outputs, index)


def run_many(indicators: Dict[str, BaseIndicator], frame: pd.DataFrame, reset: bool = True) -> pd.DataFrame:
    """
    Run several indicators over the same frame and join their outputs.

    Scalar indicators become one column named after their key; record
    indicators contribute one ``<key>.<field>`` column per output field.
    """
    columns = {}
    for alias, indicator in indicators.items():
        result = run(indicator, frame, reset=reset)
        if isinstance(result, pd.DataFrame):
            for field in result.columns:
                columns[f"{alias}.{field}"] = result[field]
        else:
            columns[alias] = result
    return pd.DataFrame(columns, index=frame.index)
