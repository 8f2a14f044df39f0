"""Fixed-capacity circular window shared by the windowed indicators."""

from typing import Any, Dict, Iterator, List


class CircularWindow:
    """
    Preallocated ring of ``capacity`` slots.

    ``push`` overwrites the slot under the cursor and advances the cursor
    modulo capacity. While the window is filling, ``count`` tracks how many
    slots hold real samples; once full it stays at ``capacity``. Slots that
    were never written keep the ``fill`` value they were seeded with, which
    lets extremum trackers seed with infinities and sum trackers with zero.

    Attributes:
        capacity (int): Number of slots, fixed at construction.
        cursor (int): Index of the slot the next push overwrites.
        count (int): Number of real samples held, capped at capacity.
        slots (List): The raw slot storage.
    """

    __slots__ = ('capacity', 'cursor', 'count', 'slots')

    def __init__(self, capacity: int, fill: Any = 0.0):
        if not isinstance(capacity, int) or capacity <= 0:
            raise ValueError(f"Window capacity must be a positive integer, got {capacity}")
        self.capacity = capacity
        self.cursor = 0
        self.count = 0
        self.slots: List[Any] = [fill] * capacity

    def push(self, value: Any) -> Any:
        """Store ``value`` at the cursor and return the value it replaced."""
        cursor = self.cursor
        old = self.slots[cursor]
        self.slots[cursor] = value
        cursor += 1
        self.cursor = 0 if cursor == self.capacity else cursor
        if self.count < self.capacity:
            self.count += 1
        return old

    def peek(self) -> Any:
        """Value the next push will overwrite (the oldest sample once full)."""
        return self.slots[self.cursor]

    @property
    def is_full(self) -> bool:
        return self.count == self.capacity

    def oldest(self) -> Any:
        """Oldest real sample in the window."""
        if self.count < self.capacity:
            return self.slots[0]
        return self.slots[self.cursor]

    def newest(self) -> Any:
        """Most recently pushed sample."""
        return self.slots[self.cursor - 1]

    def reset(self, fill: Any = 0.0) -> None:
        """Re-seed every slot in place and rewind cursor and count."""
        slots = self.slots
        for i in range(self.capacity):
            slots[i] = fill
        self.cursor = 0
        self.count = 0

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[Any]:
        """Iterate the real samples from oldest to newest."""
        if self.count < self.capacity:
            return iter(self.slots[:self.count])
        return iter(self.slots[self.cursor:] + self.slots[:self.cursor])

    def __getitem__(self, index: int) -> Any:
        return self.slots[index]

    def get_state(self) -> Dict[str, Any]:
        return {'cursor': self.cursor, 'count': self.count, 'slots': list(self.slots)}

    def set_state(self, state: Dict[str, Any]) -> None:
        slots = state['slots']
        if len(slots) != self.capacity:
            raise ValueError(f"Window state holds {len(slots)} slots, expected {self.capacity}")
        self.slots[:] = slots
        self.cursor = state['cursor']
        self.count = state['count']

    def __repr__(self) -> str:
        return f"CircularWindow(capacity={self.capacity}, count={self.count}, cursor={self.cursor})"
