"""
Position/key translation tables for the linker and unlinker.

Linking resolves every positional reference of a raw level through a
position -> key table; unlinking rewrites every key through the inverse
key -> position table.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .arena import Arena, Key
from .errors import IndexOutOfRangeError, IndexTooLargeError, InvalidKeyError
from .ir import EntityKind

MAX_INDEXED_ENTITIES = 0xFFFF
"""Largest number of entities of one kind addressable by a 16-bit index (0xFFFF means none)."""


@dataclass
class KeyTable:
    """Keys of one entity kind, in position order."""

    kind: EntityKind
    keys: list[Key] = field(default_factory=list)

    def resolve(self, index: int, referrer: EntityKind, referrer_index: int, field_name: str) -> Key:
        """
        Key at ``index``.

        Raises:
            IndexOutOfRangeError: If ``index`` is past the end of the table
        """
        if not 0 <= index < len(self.keys):
            raise IndexOutOfRangeError(referrer, referrer_index, field_name, self.kind, index)
        return self.keys[index]


@dataclass
class PositionTable:
    """Positions of one entity kind, by key."""

    kind: EntityKind
    positions: dict[Key, int] = field(default_factory=dict)

    @classmethod
    def of(cls, kind: EntityKind, arena: Arena) -> PositionTable:
        return cls(kind=kind, positions={key: i for i, key in enumerate(arena.keys())})

    def resolve(self, key: Key, referrer: EntityKind, field_name: str) -> int:
        """
        Position of ``key``.

        Raises:
            InvalidKeyError: If ``key`` is not in the table
        """
        try:
            return self.positions[key]
        except KeyError:
            raise InvalidKeyError(referrer, field_name, self.kind, key) from None


def insert_all(arena: Arena, kind: EntityKind, entities: Iterable) -> KeyTable:
    """Insert ``entities`` in order, returning their position -> key table."""
    table = KeyTable(kind=kind)
    for entity in entities:
        table.keys.append(arena.insert(entity))
    return table


def check_capacity(counts: dict[EntityKind, int]) -> None:
    """
    Raises:
        IndexTooLargeError: For the first kind with more entities than 16-bit indices address
    """
    for kind, count in counts.items():
        if count > MAX_INDEXED_ENTITIES:
            raise IndexTooLargeError(kind, count, MAX_INDEXED_ENTITIES)
