"""
Level representations.

- ``raw``: positional form produced by the compiler
- ``level``: keyed graph form produced by the linker
"""

from .kinds import EntityKind
from .level import Level, LineDef, Sector, SideDef, Thing, Vertex
from .raw import (
    DEFAULT_LIGHT_LEVEL,
    DEFAULT_TEXTURE,
    RawLevel,
    RawLineDef,
    RawSector,
    RawSideDef,
    RawThing,
    RawVertex,
)

__all__ = [
    "EntityKind",
    # Graph form
    "Level",
    "LineDef",
    "Sector",
    "SideDef",
    "Thing",
    "Vertex",
    # Raw form
    "DEFAULT_LIGHT_LEVEL",
    "DEFAULT_TEXTURE",
    "RawLevel",
    "RawLineDef",
    "RawSector",
    "RawSideDef",
    "RawThing",
    "RawVertex",
]
