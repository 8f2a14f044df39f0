"""Tests for MFI, OBV and VWAP."""

import pytest

from streamta import MissingInputError, MoneyFlowIndex, OnBalanceVolume, VolumeWeightedAveragePrice


class TestMoneyFlowIndex:

    def test_sequence(self, small_bars):
        mfi = MoneyFlowIndex(period=3)
        outputs = [mfi.next(bar) for bar in small_bars]
        assert outputs == pytest.approx([
            50.0,
            100.0,
            5900.0 / 9200.0 * 100,
            15200.0 / 18500.0 * 100,
            3100.0 / 4200.0 * 100,
        ])

    def test_zero_volume_is_fifty(self):
        mfi = MoneyFlowIndex(period=3)
        bar = {'high': 2.0, 'low': 1.0, 'close': 1.5, 'volume': 0.0}
        assert [mfi.next(bar) for _ in range(4)] == [50.0] * 4

    def test_bounded(self, bars):
        mfi = MoneyFlowIndex(period=14)
        for bar in bars:
            assert -1e-9 <= mfi.next(bar) <= 100.0 + 1e-9

    def test_requires_volume(self):
        with pytest.raises(MissingInputError):
            MoneyFlowIndex(period=3).next(10.0)

    def test_reset(self, small_bars):
        mfi = MoneyFlowIndex(period=2)
        first = [mfi.next(bar) for bar in small_bars]
        mfi.reset()
        assert [mfi.next(bar) for bar in small_bars] == first


class TestOnBalanceVolume:

    def test_sequence(self, small_bars):
        obv = OnBalanceVolume()
        assert [obv.next(bar) for bar in small_bars] == [100.0, 300.0, 150.0, 450.0, 450.0]

    def test_unchanged_close_keeps_total(self):
        obv = OnBalanceVolume()
        obv.next({'close': 5.0, 'volume': 10.0})
        assert obv.next({'close': 5.0, 'volume': 99.0}) == 10.0

    def test_requires_volume(self):
        with pytest.raises(MissingInputError):
            OnBalanceVolume().next({'close': 5.0})

    def test_display(self):
        assert str(OnBalanceVolume()) == 'OBV'


class TestVolumeWeightedAveragePrice:

    def test_sequence(self, small_bars):
        vwap = VolumeWeightedAveragePrice()
        outputs = [vwap.next(bar) for bar in small_bars]
        assert outputs == pytest.approx([9.0, 2800 / 300, 4000 / 450, 7300 / 750, 7300 / 750])

    def test_no_volume_returns_close(self):
        vwap = VolumeWeightedAveragePrice()
        assert vwap.next({'close': 5.0, 'volume': 0.0}) == 5.0
        assert vwap.next({'close': 6.0, 'volume': 0.0}) == 6.0
        assert vwap.next({'close': 8.0, 'volume': 2.0}) == 8.0

    def test_display(self):
        assert str(VolumeWeightedAveragePrice()) == 'VWAP'
