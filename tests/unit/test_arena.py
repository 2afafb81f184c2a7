"""Tests for the generational arena."""

import pytest

from textmap.core.arena import Arena, Key


def test_insert_and_get():
    arena: Arena[str] = Arena()
    a = arena.insert("a")
    b = arena.insert("b")

    assert arena[a] == "a"
    assert arena.get(b) == "b"
    assert len(arena) == 2
    assert list(arena.values()) == ["a", "b"]


def test_keys_stay_valid_when_siblings_change():
    arena: Arena[str] = Arena()
    a = arena.insert("a")
    b = arena.insert("b")
    c = arena.insert("c")

    arena.remove(b)
    d = arena.insert("d")

    assert arena[a] == "a"
    assert arena[c] == "c"
    assert arena[d] == "d"


def test_removed_key_is_stale():
    arena: Arena[str] = Arena()
    a = arena.insert("a")
    arena.remove(a)
    reused = arena.insert("again")

    assert reused.index == a.index
    assert reused.generation == a.generation + 1
    assert a not in arena
    assert arena.get(a) is None
    with pytest.raises(KeyError):
        arena[a]
    with pytest.raises(KeyError):
        arena.remove(a)


def test_replace_value():
    arena: Arena[str] = Arena()
    a = arena.insert("a")
    arena[a] = "A"
    assert arena[a] == "A"

    with pytest.raises(KeyError):
        arena[Key(5, 0)] = "nope"


def test_iteration_is_slot_order():
    arena: Arena[int] = Arena()
    keys = [arena.insert(i) for i in range(4)]
    arena.remove(keys[1])
    arena.insert(10)

    assert list(arena.values()) == [0, 10, 2, 3]
    assert [k.index for k in arena] == [0, 1, 2, 3]
    assert dict(arena.items())[keys[0]] == 0


def test_contains_rejects_foreign_values():
    arena: Arena[int] = Arena()
    arena.insert(1)
    assert (0, 0) not in arena
    assert Key(0, 0) in arena
