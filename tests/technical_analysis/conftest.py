"""Shared fixtures for the streaming indicator tests."""

import pytest

from streamta import Bar
from streamta.benchmark import DataGenerator


@pytest.fixture(scope='module')
def ohlcv_frame():
    """Reproducible random-walk OHLCV frame with a minute index."""
    return DataGenerator.generate_ohlcv_data(300, seed=7)


@pytest.fixture
def bars(ohlcv_frame):
    """The fixture frame as a list of Bar objects."""
    return [
        Bar(row.open, row.high, row.low, row.close, float(row.volume))
        for row in ohlcv_frame.itertuples(index=False)
    ]


@pytest.fixture
def closes(ohlcv_frame):
    return ohlcv_frame['close'].tolist()


@pytest.fixture
def small_bars():
    """Five hand-written bars used for exact expected values."""
    return [
        {'open': 9.0, 'high': 10.0, 'low': 7.5, 'close': 9.0, 'volume': 100.0},
        {'open': 9.0, 'high': 11.0, 'low': 9.0, 'close': 9.5, 'volume': 200.0},
        {'open': 9.5, 'high': 9.0, 'low': 5.0, 'close': 8.0, 'volume': 150.0},
        {'open': 8.0, 'high': 12.0, 'low': 8.0, 'close': 11.0, 'volume': 300.0},
        {'open': 11.0, 'high': 11.5, 'low': 10.0, 'close': 10.0, 'volume': 0.0},
    ]
