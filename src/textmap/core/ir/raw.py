"""
Raw (positional) level representation.

The compiler produces this form and the linker consumes it. Cross-references
are 16-bit positions into the sibling lists, exactly as written in the
textmap; they are only validated when the level is linked.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..flags import LineDefFlags, ThingFlags, TriggerFlags
from ..point import Point
from ..specials import LineSpecial, NoSectorSpecial, NoSpecial, SectorSpecial
from ..strings import FixedString

DEFAULT_TEXTURE = "-"
DEFAULT_LIGHT_LEVEL = 160


def default_texture() -> FixedString:
    return FixedString.from_str(DEFAULT_TEXTURE)


class RawVertex(BaseModel):
    position: Point[int]

    model_config = ConfigDict(frozen=True)


class RawSideDef(BaseModel):
    """A sidedef; ``sector_idx`` is a position in ``RawLevel.sectors``."""

    sector_idx: int
    offset: Point[int] = Field(default_factory=lambda: Point[int](x=0, y=0))
    upper_texture: FixedString = Field(default_factory=default_texture)
    middle_texture: FixedString = Field(default_factory=default_texture)
    lower_texture: FixedString = Field(default_factory=default_texture)

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class RawSector(BaseModel):
    floor_height: int = 0
    ceiling_height: int = 0
    floor_flat: FixedString
    ceiling_flat: FixedString
    light_level: int = DEFAULT_LIGHT_LEVEL
    special: SectorSpecial = Field(default_factory=NoSectorSpecial)
    tag: int = 0

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class RawLineDef(BaseModel):
    """
    A linedef; ``from_idx``/``to_idx`` index vertices, the side indices
    index sidedefs. The line is two-sided iff ``right_side_idx`` is set.
    """

    from_idx: int
    to_idx: int
    left_side_idx: int
    right_side_idx: int | None = None
    flags: LineDefFlags = Field(default_factory=LineDefFlags)
    special: LineSpecial = Field(default_factory=NoSpecial)
    trigger_flags: TriggerFlags = Field(default_factory=TriggerFlags)

    model_config = ConfigDict(frozen=True)


class RawThing(BaseModel):
    position: Point[int]
    height: int = 0
    angle: int = 0
    type: int
    flags: ThingFlags = Field(default_factory=ThingFlags)
    special: LineSpecial = Field(default_factory=NoSpecial)

    model_config = ConfigDict(frozen=True)


class RawLevel(BaseModel):
    """
    A whole level in positional form.

    Produced once per compile and consumed once per link (or the reverse
    when writing); it is not meant to be edited.
    """

    name: FixedString | None = None
    namespace: str | None = None
    vertices: list[RawVertex] = Field(default_factory=list)
    sidedefs: list[RawSideDef] = Field(default_factory=list)
    sectors: list[RawSector] = Field(default_factory=list)
    linedefs: list[RawLineDef] = Field(default_factory=list)
    things: list[RawThing] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
