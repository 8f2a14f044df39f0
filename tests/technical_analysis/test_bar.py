"""Tests for the Bar value object and its builder."""

from dataclasses import FrozenInstanceError
from datetime import datetime

import pytest

from streamta import Bar, BarBuilder, IncompleteInputError, InvalidInputError, SMA, TrueRange


def _builder():
    return BarBuilder().open(9).high(10).low(8).close(9.5).volume(1000)


class TestBarBuilder:

    def test_build(self):
        bar = _builder().build()
        assert bar == Bar(9.0, 10.0, 8.0, 9.5, 1000.0)
        assert isinstance(bar.open, float)

    def test_builder_classmethod(self):
        bar = Bar.builder().open(1).high(1).low(1).close(1).volume(0).build()
        assert bar.volume == 0

    def test_timestamp_not_part_of_equality(self):
        stamped = _builder().timestamp(datetime(2024, 1, 2)).build()
        assert stamped.timestamp == datetime(2024, 1, 2)
        assert stamped == _builder().build()

    def test_incomplete(self):
        with pytest.raises(IncompleteInputError) as exc_info:
            BarBuilder().open(1).close(1).build()
        assert exc_info.value.missing_fields == ['high', 'low', 'volume']

    @pytest.mark.parametrize("field,value", [
        ('low', 11),
        ('open', 7),
        ('open', 10.5),
        ('close', 7.9),
        ('close', 10.1),
        ('volume', -1),
    ])
    def test_invalid_ranges(self, field, value):
        builder = _builder()
        getattr(builder, field)(value)
        with pytest.raises(InvalidInputError) as exc_info:
            builder.build()
        assert exc_info.value.field_name == field

    def test_frozen(self):
        bar = _builder().build()
        with pytest.raises(FrozenInstanceError):
            bar.close = 1.0


class TestBarAsInput:

    def test_satisfies_every_capability(self):
        bar = _builder().build()
        assert SMA(3).next(bar) == 9.5
        assert TrueRange().next(bar) == 2.0
