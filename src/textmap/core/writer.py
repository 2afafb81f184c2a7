"""
Textmap writer.

Serializes a level graph back to textmap source. The graph is unlinked
first; entities are then written grouped by kind, each block preceded by a
comment stating its position. A field is omitted whenever it holds the
value the compiler would fill in for a missing assignment.
"""

from __future__ import annotations

import logging
from typing import TextIO

from .ast import format_value
from .errors import FixedStringEncodingError, OutputError, UnlinkError, UnlinkFailedError
from .flags import FlagSet
from .ir import (
    DEFAULT_LIGHT_LEVEL,
    DEFAULT_TEXTURE,
    EntityKind,
    Level,
    RawLevel,
    RawLineDef,
    RawSector,
    RawSideDef,
    RawThing,
    RawVertex,
)
from .linker import unlink
from .manifest import WriterConfig
from .schema import (
    ARG_KEYS,
    LINEDEF_FLAG_KEYS,
    NAMESPACE_KEY,
    SPECIAL_KEY,
    THING_FLAG_KEYS,
    TRIGGER_FLAG_KEYS,
)
from .specials import LINE_SPECIALS, SECTOR_SPECIALS, LineSpecial
from .strings import FixedString

logger = logging.getLogger(__name__)

Scalar = int | float | str | bool


class TextmapWriter:
    """
    Renders a raw level to textmap lines.

    Usage:
        writer = TextmapWriter(WriterConfig(indent=4))
        text = writer.render(raw_level)
    """

    def __init__(self, config: WriterConfig | None = None):
        self.config = config or WriterConfig()
        self.lines: list[str] = []

    def render(self, raw: RawLevel) -> str:
        self.lines = []

        if self.config.header:
            self.lines.append(f"// {self.config.header}")
        namespace = raw.namespace if raw.namespace is not None else self.config.namespace
        self.lines.append(f"{NAMESPACE_KEY} = {format_value(namespace)};")

        for i, vertex in enumerate(raw.vertices):
            self._block(EntityKind.VERTEX, i, self._vertex_fields(vertex))
        for i, line in enumerate(raw.linedefs):
            self._block(EntityKind.LINEDEF, i, self._linedef_fields(line))
        for i, side in enumerate(raw.sidedefs):
            self._block(EntityKind.SIDEDEF, i, self._sidedef_fields(side))
        for i, sector in enumerate(raw.sectors):
            self._block(EntityKind.SECTOR, i, self._sector_fields(sector))
        for i, thing in enumerate(raw.things):
            self._block(EntityKind.THING, i, self._thing_fields(thing))

        return "\n".join(self.lines) + "\n"

    def _block(self, kind: EntityKind, index: int, fields: list[tuple[str, Scalar]]) -> None:
        self.lines.append("")
        if self.config.index_comments:
            self.lines.append(f"// #{index}")
        self.lines.append(kind.value)
        self.lines.append("{")
        pad = " " * self.config.indent
        for key, value in fields:
            self.lines.append(f"{pad}{key} = {format_value(value)};")
        self.lines.append("}")

    def _coordinate(self, value: int) -> int | float:
        return float(value) if self.config.vertex_coordinates == "float" else value

    # -------------------------------------------------------------------------
    # Per-kind field lists
    # -------------------------------------------------------------------------

    def _vertex_fields(self, vertex: RawVertex) -> list[tuple[str, Scalar]]:
        return [
            ("x", self._coordinate(vertex.position.x)),
            ("y", self._coordinate(vertex.position.y)),
        ]

    def _linedef_fields(self, line: RawLineDef) -> list[tuple[str, Scalar]]:
        fields: list[tuple[str, Scalar]] = [
            ("v1", line.from_idx),
            ("v2", line.to_idx),
            ("sidefront", line.left_side_idx),
        ]
        if line.right_side_idx is not None:
            fields.append(("sideback", line.right_side_idx))
        fields.extend(_flag_fields(line.flags, LINEDEF_FLAG_KEYS))
        fields.extend(_special_fields(line.special))
        fields.extend(_flag_fields(line.trigger_flags, TRIGGER_FLAG_KEYS))
        return fields

    def _sidedef_fields(self, side: RawSideDef) -> list[tuple[str, Scalar]]:
        fields: list[tuple[str, Scalar]] = []
        if side.offset.x != 0:
            fields.append(("offsetx", side.offset.x))
        if side.offset.y != 0:
            fields.append(("offsety", side.offset.y))
        fields.append(("sector", side.sector_idx))
        for key, texture in (
            ("texturetop", side.upper_texture),
            ("texturemiddle", side.middle_texture),
            ("texturebottom", side.lower_texture),
        ):
            name = _name(key, texture)
            if name != DEFAULT_TEXTURE:
                fields.append((key, name))
        return fields

    def _sector_fields(self, sector: RawSector) -> list[tuple[str, Scalar]]:
        fields: list[tuple[str, Scalar]] = []
        if sector.floor_height != 0:
            fields.append(("heightfloor", sector.floor_height))
        if sector.ceiling_height != 0:
            fields.append(("heightceiling", sector.ceiling_height))
        fields.append(("texturefloor", _name("texturefloor", sector.floor_flat)))
        fields.append(("textureceiling", _name("textureceiling", sector.ceiling_flat)))
        if sector.light_level != DEFAULT_LIGHT_LEVEL:
            fields.append(("lightlevel", sector.light_level))
        if sector.tag != 0:
            fields.append(("id", sector.tag))
        code = SECTOR_SPECIALS.wide_encode(sector.special).code
        if code != 0:
            fields.append((SPECIAL_KEY, code))
        return fields

    def _thing_fields(self, thing: RawThing) -> list[tuple[str, Scalar]]:
        fields: list[tuple[str, Scalar]] = [
            ("x", self._coordinate(thing.position.x)),
            ("y", self._coordinate(thing.position.y)),
        ]
        if thing.height != 0:
            fields.append(("height", self._coordinate(thing.height)))
        if thing.angle != 0:
            fields.append(("angle", thing.angle))
        fields.append(("type", thing.type))
        fields.extend(_flag_fields(thing.flags, THING_FLAG_KEYS))
        fields.extend(_special_fields(thing.special))
        return fields


def _name(key: str, value: FixedString) -> str:
    try:
        return value.to_str()
    except UnicodeDecodeError as e:
        raise FixedStringEncodingError(key, value.as_bytes()) from e


def _flag_fields(flags: FlagSet, keys: dict[str, str]) -> list[tuple[str, Scalar]]:
    changed = flags.changed()
    return [(key, changed[attr]) for key, attr in keys.items() if attr in changed]


def _special_fields(special: LineSpecial) -> list[tuple[str, Scalar]]:
    wide = LINE_SPECIALS.wide_encode(special)
    fields: list[tuple[str, Scalar]] = []
    if wide.code != 0:
        fields.append((SPECIAL_KEY, wide.code))
    fields.extend((key, arg) for key, arg in zip(ARG_KEYS, wide.args) if arg != 0)
    return fields


def write(level: Level, config: WriterConfig | None = None) -> str:
    """
    Serialize ``level`` to textmap source.

    Raises:
        UnlinkFailedError: If the level cannot be unlinked (cause attached)
        FixedStringEncodingError: If a texture or flat name is not UTF-8
    """
    try:
        raw = unlink(level)
    except UnlinkError as e:
        raise UnlinkFailedError(e) from e

    text = TextmapWriter(config).render(raw)
    logger.debug("Wrote textmap for %s: %d characters", level.name, len(text))
    return text


def write_to(level: Level, stream: TextIO, config: WriterConfig | None = None) -> None:
    """
    Serialize ``level`` and write it to ``stream``.

    Raises:
        OutputError: If the stream rejects the write
    """
    text = write(level, config)
    try:
        stream.write(text)
    except OSError as e:
        raise OutputError(f"Cannot write textmap: {e}") from e
