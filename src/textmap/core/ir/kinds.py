"""Entity kinds of a level, named by their textmap block identifiers."""

from __future__ import annotations

from enum import Enum


class EntityKind(str, Enum):
    """The five entity kinds a textmap can declare."""

    VERTEX = "vertex"
    LINEDEF = "linedef"
    SIDEDEF = "sidedef"
    SECTOR = "sector"
    THING = "thing"
