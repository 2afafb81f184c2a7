"""
Key-generating storage for level entities.

An :class:`Arena` hands out opaque :class:`Key` handles on insertion. Keys
stay valid while siblings are added or removed; removing an entry bumps its
slot's generation so stale keys no longer resolve.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, NamedTuple, TypeVar

T = TypeVar("T")


class Key(NamedTuple):
    """Opaque handle to an arena entry."""

    index: int
    generation: int

    def __repr__(self) -> str:
        return f"Key({self.index}v{self.generation})"


class _Slot(Generic[T]):
    __slots__ = ("generation", "value", "occupied")

    def __init__(self, generation: int, value: T | None, occupied: bool):
        self.generation = generation
        self.value = value
        self.occupied = occupied


class Arena(Generic[T]):
    """
    Generational arena.

    Iteration order is slot order, which equals insertion order as long as
    nothing has been removed.
    """

    def __init__(self) -> None:
        self._slots: list[_Slot[T]] = []
        self._free: list[int] = []
        self._len = 0

    def insert(self, value: T) -> Key:
        if self._free:
            index = self._free.pop()
            slot = self._slots[index]
            slot.value = value
            slot.occupied = True
        else:
            index = len(self._slots)
            slot = _Slot(0, value, True)
            self._slots.append(slot)
        self._len += 1
        return Key(index, slot.generation)

    def _slot(self, key: Key) -> _Slot[T] | None:
        if not isinstance(key, Key) or not 0 <= key.index < len(self._slots):
            return None
        slot = self._slots[key.index]
        if not slot.occupied or slot.generation != key.generation:
            return None
        return slot

    def get(self, key: Key) -> T | None:
        slot = self._slot(key)
        return slot.value if slot else None

    def __getitem__(self, key: Key) -> T:
        slot = self._slot(key)
        if slot is None:
            raise KeyError(key)
        return slot.value  # type: ignore[return-value]

    def __setitem__(self, key: Key, value: T) -> None:
        """Replace the value stored under an existing key."""
        slot = self._slot(key)
        if slot is None:
            raise KeyError(key)
        slot.value = value

    def remove(self, key: Key) -> T:
        slot = self._slot(key)
        if slot is None:
            raise KeyError(key)
        value = slot.value
        slot.value = None
        slot.occupied = False
        slot.generation += 1
        self._free.append(key.index)
        self._len -= 1
        return value  # type: ignore[return-value]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, Key) and self._slot(key) is not None

    def __len__(self) -> int:
        return self._len

    def __iter__(self) -> Iterator[Key]:
        return self.keys()

    def keys(self) -> Iterator[Key]:
        for index, slot in enumerate(self._slots):
            if slot.occupied:
                yield Key(index, slot.generation)

    def values(self) -> Iterator[T]:
        for slot in self._slots:
            if slot.occupied:
                yield slot.value  # type: ignore[misc]

    def items(self) -> Iterator[tuple[Key, T]]:
        for index, slot in enumerate(self._slots):
            if slot.occupied:
                yield Key(index, slot.generation), slot.value  # type: ignore[misc]

    def __repr__(self) -> str:
        return f"Arena({len(self)} entries)"
