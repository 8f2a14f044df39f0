"""Tests for the fixed-capacity circular window."""

import pytest

from streamta.window import CircularWindow


class TestCircularWindow:

    def test_push_returns_replaced_value(self):
        window = CircularWindow(3, fill=0.0)
        assert window.push(1.0) == 0.0
        assert window.push(2.0) == 0.0
        assert window.push(3.0) == 0.0
        assert window.push(4.0) == 1.0
        assert window.push(5.0) == 2.0

    def test_filling_then_full(self):
        window = CircularWindow(3)
        for i, value in enumerate((1.0, 2.0, 3.0), start=1):
            assert not window.is_full
            window.push(value)
            assert len(window) == i
        assert window.is_full

        window.push(4.0)
        assert len(window) == 3
        assert window.is_full

    def test_iteration_is_oldest_to_newest(self):
        window = CircularWindow(3)
        window.push(1.0)
        window.push(2.0)
        assert list(window) == [1.0, 2.0]

        window.push(3.0)
        window.push(4.0)
        assert list(window) == [2.0, 3.0, 4.0]
        assert window.oldest() == 2.0
        assert window.newest() == 4.0
        assert window.peek() == 2.0

    def test_oldest_while_filling(self):
        window = CircularWindow(4)
        window.push(7.0)
        window.push(8.0)
        assert window.oldest() == 7.0
        assert window.newest() == 8.0

    def test_reset_reseeds_slots_in_place(self):
        window = CircularWindow(2, fill=0.0)
        slots = window.slots
        window.push(1.0)
        window.push(2.0)
        window.reset(fill=-1.0)

        assert window.slots is slots
        assert window.slots == [-1.0, -1.0]
        assert len(window) == 0
        assert window.cursor == 0

    def test_state_round_trip(self):
        window = CircularWindow(3)
        for value in (1.0, 2.0, 3.0, 4.0):
            window.push(value)

        restored = CircularWindow(3)
        restored.set_state(window.get_state())
        assert list(restored) == list(window)
        assert restored.push(5.0) == window.push(5.0)

    def test_state_with_wrong_capacity_rejected(self):
        window = CircularWindow(3)
        with pytest.raises(ValueError):
            CircularWindow(2).set_state(window.get_state())

    @pytest.mark.parametrize("capacity", [0, -1, 2.5])
    def test_invalid_capacity(self, capacity):
        with pytest.raises(ValueError):
            CircularWindow(capacity)
