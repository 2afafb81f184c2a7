"""
Linked (graph) level representation.

Entities refer to each other through arena :class:`Key` handles instead of
list positions, so entities can be added or removed without renumbering
their siblings. Only the linker builds a Level from positional data.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field

from ..arena import Arena, Key
from ..flags import LineDefFlags, ThingFlags, TriggerFlags
from ..point import Point
from ..specials import LineSpecial, NoSectorSpecial, NoSpecial, SectorSpecial
from ..strings import FixedString
from .kinds import EntityKind
from .raw import DEFAULT_LIGHT_LEVEL, default_texture


class Vertex(BaseModel):
    position: Point[int]

    model_config = ConfigDict(frozen=True)


class SideDef(BaseModel):
    sector: Key
    offset: Point[int] = Field(default_factory=lambda: Point[int](x=0, y=0))
    upper_texture: FixedString = Field(default_factory=default_texture)
    middle_texture: FixedString = Field(default_factory=default_texture)
    lower_texture: FixedString = Field(default_factory=default_texture)

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class Sector(BaseModel):
    floor_height: int = 0
    ceiling_height: int = 0
    floor_flat: FixedString
    ceiling_flat: FixedString
    light_level: int = DEFAULT_LIGHT_LEVEL
    special: SectorSpecial = Field(default_factory=NoSectorSpecial)
    tag: int = 0

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class LineDef(BaseModel):
    from_: Key
    to: Key
    left_side: Key
    right_side: Key | None = None
    flags: LineDefFlags = Field(default_factory=LineDefFlags)
    special: LineSpecial = Field(default_factory=NoSpecial)
    trigger_flags: TriggerFlags = Field(default_factory=TriggerFlags)

    model_config = ConfigDict(frozen=True)

    @property
    def two_sided(self) -> bool:
        return self.right_side is not None


class Thing(BaseModel):
    position: Point[int]
    height: int = 0
    angle: int = 0
    type: int
    flags: ThingFlags = Field(default_factory=ThingFlags)
    special: LineSpecial = Field(default_factory=NoSpecial)

    model_config = ConfigDict(frozen=True)


@dataclass
class Level:
    """
    A level as a graph of keyed entities.

    Iteration order of each arena is the order entities are written in and
    the positions they receive when unlinked.

    Attributes:
        name: Lump name of the level, if known
        namespace: The textmap ``namespace`` value, if one was declared
    """

    name: FixedString | None = None
    namespace: str | None = None
    vertices: Arena[Vertex] = field(default_factory=Arena)
    sidedefs: Arena[SideDef] = field(default_factory=Arena)
    sectors: Arena[Sector] = field(default_factory=Arena)
    linedefs: Arena[LineDef] = field(default_factory=Arena)
    things: Arena[Thing] = field(default_factory=Arena)

    def add_vertex(self, vertex: Vertex) -> Key:
        return self.vertices.insert(vertex)

    def add_sector(self, sector: Sector) -> Key:
        return self.sectors.insert(sector)

    def add_sidedef(self, sidedef: SideDef) -> Key:
        """Insert a sidedef; its sector must already be in the level."""
        self._require(self.sectors, sidedef.sector, EntityKind.SECTOR)
        return self.sidedefs.insert(sidedef)

    def add_linedef(self, linedef: LineDef) -> Key:
        """Insert a linedef; its vertices and sides must already be in the level."""
        self._require(self.vertices, linedef.from_, EntityKind.VERTEX)
        self._require(self.vertices, linedef.to, EntityKind.VERTEX)
        self._require(self.sidedefs, linedef.left_side, EntityKind.SIDEDEF)
        if linedef.right_side is not None:
            self._require(self.sidedefs, linedef.right_side, EntityKind.SIDEDEF)
        return self.linedefs.insert(linedef)

    def add_thing(self, thing: Thing) -> Key:
        return self.things.insert(thing)

    @staticmethod
    def _require(arena: Arena, key: Key, kind: EntityKind) -> None:
        if key not in arena:
            raise KeyError(f"{kind.value} {key!r} is not in this level")

    def sidedefs_of_sector(self, sector: Key) -> list[Key]:
        """Keys of the sidedefs facing ``sector``, in iteration order."""
        return [key for key, side in self.sidedefs.items() if side.sector == sector]

    def linedefs_of_vertex(self, vertex: Key) -> list[Key]:
        """Keys of the linedefs starting or ending at ``vertex``."""
        return [
            key
            for key, line in self.linedefs.items()
            if line.from_ == vertex or line.to == vertex
        ]

    def counts(self) -> dict[EntityKind, int]:
        return {
            EntityKind.VERTEX: len(self.vertices),
            EntityKind.LINEDEF: len(self.linedefs),
            EntityKind.SIDEDEF: len(self.sidedefs),
            EntityKind.SECTOR: len(self.sectors),
            EntityKind.THING: len(self.things),
        }
