"""Tests for indicator snapshots and resumption."""

import copy
import json

import pytest

import streamta as ta
from streamta import IndicatorNotFoundError, SnapshotError, snapshot

# (registry name, constructor kwargs); every one is fed bars
CASES = [
    ('maximum', {'period': 5}),
    ('minimum', {'period': 5}),
    ('sma', {'period': 7}),
    ('ema', {'period': 7, 'alpha': 0.3}),
    ('wma', {'period': 6}),
    ('hma', {'period': 9}),
    ('standard_deviation', {'period': 8}),
    ('mean_absolute_deviation', {'period': 8}),
    ('true_range', {}),
    ('atr', {'period': 5}),
    ('rsi', {'period': 6, 'smoothing_strategy': 'wilders'}),
    ('roc', {'period': 4}),
    ('efficiency_ratio', {'period': 4}),
    ('fast_stochastic', {'period': 5}),
    ('slow_stochastic', {'stochastic_period': 5, 'ema_period': 3}),
    ('qqe', {'period': 6, 'smooth_period': 3, 'wilders_multiplier': 4.236}),
    ('rotation_factor', {}),
    ('mfi', {'period': 5}),
    ('obv', {}),
    ('vwap', {}),
    ('directional_movement', {}),
    ('plus_dm', {}),
    ('minus_dm', {}),
    ('smoothed_plus_dm', {'period': 5}),
    ('smoothed_minus_dm', {'period': 5}),
    ('plus_di', {'period': 5}),
    ('minus_di', {'period': 5}),
    ('dx', {'period': 5}),
    ('adx', {'period': 5}),
    ('dmi', {'period': 5}),
    ('macd', {'fast_period': 3, 'slow_period': 6, 'signal_period': 4}),
    ('ppo', {'fast_period': 3, 'slow_period': 6, 'signal_period': 4}),
    ('bollinger_bands', {'period': 6, 'multiplier': 1.5}),
    ('keltner_channel', {'period': 6, 'multiplier': 1.5}),
    ('chandelier_exit', {'period': 6, 'multiplier': 2.0}),
    ('cci', {'period': 6}),
]


def test_every_registered_indicator_is_covered():
    assert sorted(name for name, _ in CASES) == ta.list_indicators()


@pytest.mark.parametrize("name,kwargs", CASES, ids=[c[0] for c in CASES])
class TestResume:

    def test_json_resume_matches_uninterrupted_run(self, name, kwargs, bars):
        head, tail = bars[:40], bars[40:90]

        uninterrupted = ta.create(name, **kwargs)
        expected = [uninterrupted.next(bar) for bar in head + tail][len(head):]

        interrupted = ta.create(name, **kwargs)
        for bar in head:
            interrupted.next(bar)
        text = snapshot.to_json(interrupted)
        json.loads(text)  # plain JSON

        resumed = snapshot.from_json(text)
        assert str(resumed) == str(interrupted)
        assert resumed.is_ready == interrupted.is_ready
        assert [resumed.next(bar) for bar in tail] == expected

    def test_deep_copy_is_independent(self, name, kwargs, bars):
        original = ta.create(name, **kwargs)
        for bar in bars[:20]:
            original.next(bar)

        clone = copy.deepcopy(original)
        expected = [original.next(bar) for bar in bars[20:40]]
        assert [clone.next(bar) for bar in bars[20:40]] == expected

    def test_reset_replays_identically(self, name, kwargs, bars):
        indicator = ta.create(name, **kwargs)
        first = [indicator.next(bar) for bar in bars[:50]]
        indicator.reset()
        assert indicator.value is None
        assert not indicator.is_ready
        assert [indicator.next(bar) for bar in bars[:50]] == first


class TestSnapshotErrors:

    def test_dump_layout(self):
        sma = ta.create('sma', period=3)
        sma.next(1.0)
        data = snapshot.dump(sma)
        assert data['indicator'] == 'sma'
        assert data['params'] == {'period': 3, 'input_field': 'close'}
        assert data['state']['data_count'] == 1
        assert data['state']['value'] == 1.0

    def test_fresh_indicator_round_trip(self):
        restored = snapshot.load(snapshot.dump(ta.create('ema', period=4)))
        assert restored.value is None
        assert restored.next(3.0) == 3.0

    def test_malformed_snapshot(self):
        with pytest.raises(SnapshotError):
            snapshot.load({'indicator': 'sma'})

    def test_state_from_other_period_rejected(self):
        state = snapshot.dump(ta.create('sma', period=3))
        state['params'] = {'period': 4}
        with pytest.raises(SnapshotError):
            snapshot.load(state)

    def test_missing_state_key_rejected(self):
        data = snapshot.dump(ta.create('rsi', period=3))
        del data['state']['_gain_smoother']
        with pytest.raises(SnapshotError):
            snapshot.load(data)

    def test_unknown_indicator(self):
        with pytest.raises(IndicatorNotFoundError):
            snapshot.load({'indicator': 'nope', 'params': {}, 'state': {}})

    def test_invalid_json(self):
        with pytest.raises(SnapshotError):
            snapshot.from_json('{not json')

    def test_infinite_sentinels_survive_json(self):
        maximum = ta.create('maximum', period=5)
        maximum.next(1.0)
        resumed = snapshot.from_json(snapshot.to_json(maximum))
        assert [resumed.next(x) for x in (0.5, 2.0)] == [1.0, 2.0]

    @pytest.mark.parametrize("damage", ['data_count', 'window_cursor'])
    def test_rejected_state_leaves_indicator_untouched(self, damage):
        sma = ta.create('sma', period=3)
        twin = ta.create('sma', period=3)
        for x in (1.0, 2.0, 3.0, 4.0):
            sma.next(x)
            twin.next(x)
        before = sma.get_state()

        bad = copy.deepcopy(before)
        bad['_window']['slots'] = [9.0, 9.0, 9.0]
        bad['_sum'] = 27.0
        if damage == 'data_count':
            del bad['data_count']
        else:
            del bad['_window']['cursor']

        with pytest.raises(SnapshotError):
            sma.set_state(bad)
        assert sma.get_state() == before
        assert [sma.next(x) for x in (5.0, 6.0)] == [twin.next(x) for x in (5.0, 6.0)]

    def test_rejected_child_state_rolls_back_parent(self):
        bb = ta.create('bollinger_bands', period=3)
        for x in (2.0, 5.0, 1.0):
            bb.next(x)
        before = bb.get_state()

        bad = copy.deepcopy(before)
        bad['value'] = {'average': 0.0, 'upper': 0.0, 'lower': 0.0}
        bad['_sd']['_window']['slots'] = [7.0, 7.0, 7.0]
        del bad['_sd']['data_count']

        with pytest.raises(SnapshotError):
            bb.set_state(bad)
        assert bb.get_state() == before
