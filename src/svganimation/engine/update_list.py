"""
Active update list

Arena of compiled update functions. Removal leaves a tombstone, so an update
can remove itself while the list is being iterated; compact() drops the
tombstones between passes. Handles carry a stable key rather than a position,
so compaction never invalidates them. clear() drops every slot and bumps the
generation, which turns handles from the previous compile into no-ops.
"""

from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, Iterator, List, NamedTuple, Optional

UpdateFn = Callable[[float], None]


class UpdateHandle(NamedTuple):
    key: int
    generation: int


@dataclass
class UpdateEntry:
    handle: UpdateHandle
    fn: UpdateFn
    label: str


class ActiveUpdateList:
    """Ordered list of update functions with tombstone removal"""

    def __init__(self):
        self._slots: List[Optional[UpdateEntry]] = []
        self._positions: Dict[int, int] = {}
        self._generation = 0
        self._next_key = 0
        self._live = 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def tombstones(self) -> int:
        return len(self._slots) - self._live

    def add(self, factory: Callable[[Callable[[], bool]], UpdateFn], label: str = "") -> UpdateHandle:
        """
        Append an update function.

        Args:
            factory: Called with a zero-argument `remove` callback bound to the
                new slot; returns the update function to store
            label: Human readable name for logs and introspection

        Returns:
            Handle of the new slot
        """
        handle = UpdateHandle(self._next_key, self._generation)
        self._next_key += 1
        fn = factory(partial(self.remove, handle))
        self._positions[handle.key] = len(self._slots)
        self._slots.append(UpdateEntry(handle=handle, fn=fn, label=label))
        self._live += 1
        return handle

    def remove(self, handle: UpdateHandle) -> bool:
        """Tombstone a slot. Returns False for stale or already removed handles."""
        if handle.generation != self._generation:
            return False
        position = self._positions.pop(handle.key, None)
        if position is None:
            return False
        self._slots[position] = None
        self._live -= 1
        return True

    def is_live(self, handle: UpdateHandle) -> bool:
        return handle.generation == self._generation and handle.key in self._positions

    def compact(self) -> int:
        """
        Drop tombstones, keeping order. Must not run during a pass.

        Returns:
            Number of tombstones dropped
        """
        dropped = self.tombstones
        if dropped:
            self._slots = [entry for entry in self._slots if entry is not None]
            self._positions = {entry.handle.key: index for index, entry in enumerate(self._slots)}
        return dropped

    def clear(self) -> None:
        self._slots = []
        self._positions = {}
        self._live = 0
        self._generation += 1

    def labels(self) -> List[str]:
        return [entry.label for entry in self]

    def __iter__(self) -> Iterator[UpdateEntry]:
        # Index walk: slots tombstoned mid-pass are skipped, none are shifted
        slots = self._slots
        for index in range(len(slots)):
            entry = slots[index]
            if entry is not None:
                yield entry

    def __len__(self) -> int:
        return self._live

    def __bool__(self) -> bool:
        return self._live > 0

    def __repr__(self) -> str:
        return f"ActiveUpdateList(live={self._live}, slots={len(self._slots)}, generation={self._generation})"
