import logging

from .ir import (
    EntityKind,
    Level,
    LineDef,
    RawLevel,
    RawLineDef,
    RawSector,
    RawSideDef,
    RawThing,
    RawVertex,
    Sector,
    SideDef,
    Thing,
    Vertex,
)
from .linker_impl import PositionTable, check_capacity, insert_all

logger = logging.getLogger(__name__)


def link(raw: RawLevel) -> Level:
    """
    Build a keyed level graph from a positional level.

    Performs:
    1. Vertex and sector insertion (order preserved)
    2. Sidedef insertion, resolving ``sector_idx``
    3. Linedef insertion, resolving vertex and side indices
    4. Thing insertion (no references)

    Args:
        raw: Compiled positional level

    Returns:
        Level in which every reference names an existing entity

    Raises:
        IndexOutOfRangeError: If any positional reference is out of bounds
    """
    level = Level(name=raw.name, namespace=raw.namespace)

    vertex_keys = insert_all(
        level.vertices,
        EntityKind.VERTEX,
        (Vertex(position=v.position) for v in raw.vertices),
    )
    sector_keys = insert_all(
        level.sectors,
        EntityKind.SECTOR,
        (
            Sector(
                floor_height=s.floor_height,
                ceiling_height=s.ceiling_height,
                floor_flat=s.floor_flat,
                ceiling_flat=s.ceiling_flat,
                light_level=s.light_level,
                special=s.special,
                tag=s.tag,
            )
            for s in raw.sectors
        ),
    )

    sidedefs = []
    for i, side in enumerate(raw.sidedefs):
        sector = sector_keys.resolve(side.sector_idx, EntityKind.SIDEDEF, i, "sector")
        sidedefs.append(
            SideDef(
                sector=sector,
                offset=side.offset,
                upper_texture=side.upper_texture,
                middle_texture=side.middle_texture,
                lower_texture=side.lower_texture,
            )
        )
    side_keys = insert_all(level.sidedefs, EntityKind.SIDEDEF, sidedefs)

    linedefs = []
    for i, line in enumerate(raw.linedefs):
        right_side = None
        if line.right_side_idx is not None:
            right_side = side_keys.resolve(line.right_side_idx, EntityKind.LINEDEF, i, "sideback")
        linedefs.append(
            LineDef(
                from_=vertex_keys.resolve(line.from_idx, EntityKind.LINEDEF, i, "v1"),
                to=vertex_keys.resolve(line.to_idx, EntityKind.LINEDEF, i, "v2"),
                left_side=side_keys.resolve(line.left_side_idx, EntityKind.LINEDEF, i, "sidefront"),
                right_side=right_side,
                flags=line.flags,
                special=line.special,
                trigger_flags=line.trigger_flags,
            )
        )
    insert_all(level.linedefs, EntityKind.LINEDEF, linedefs)

    insert_all(
        level.things,
        EntityKind.THING,
        (
            Thing(
                position=t.position,
                height=t.height,
                angle=t.angle,
                type=t.type,
                flags=t.flags,
                special=t.special,
            )
            for t in raw.things
        ),
    )

    logger.debug("Linked level %s: %s", raw.name, _format_counts(level))
    return level


def unlink(level: Level) -> RawLevel:
    """
    Convert a level graph back to positional form.

    Each entity's position is its place in arena iteration order. Capacity is
    checked for every kind before any conversion starts.

    Raises:
        IndexTooLargeError: If a kind has more entities than 16-bit indices address
        InvalidKeyError: If a reference names a key missing from its arena
    """
    check_capacity(level.counts())

    vertex_positions = PositionTable.of(EntityKind.VERTEX, level.vertices)
    sector_positions = PositionTable.of(EntityKind.SECTOR, level.sectors)
    side_positions = PositionTable.of(EntityKind.SIDEDEF, level.sidedefs)

    vertices = [RawVertex(position=v.position) for v in level.vertices.values()]
    sectors = [
        RawSector(
            floor_height=s.floor_height,
            ceiling_height=s.ceiling_height,
            floor_flat=s.floor_flat,
            ceiling_flat=s.ceiling_flat,
            light_level=s.light_level,
            special=s.special,
            tag=s.tag,
        )
        for s in level.sectors.values()
    ]
    sidedefs = [
        RawSideDef(
            sector_idx=sector_positions.resolve(side.sector, EntityKind.SIDEDEF, "sector"),
            offset=side.offset,
            upper_texture=side.upper_texture,
            middle_texture=side.middle_texture,
            lower_texture=side.lower_texture,
        )
        for side in level.sidedefs.values()
    ]

    linedefs = []
    for line in level.linedefs.values():
        right_side_idx = None
        if line.right_side is not None:
            right_side_idx = side_positions.resolve(line.right_side, EntityKind.LINEDEF, "sideback")
        linedefs.append(
            RawLineDef(
                from_idx=vertex_positions.resolve(line.from_, EntityKind.LINEDEF, "v1"),
                to_idx=vertex_positions.resolve(line.to, EntityKind.LINEDEF, "v2"),
                left_side_idx=side_positions.resolve(line.left_side, EntityKind.LINEDEF, "sidefront"),
                right_side_idx=right_side_idx,
                flags=line.flags,
                special=line.special,
                trigger_flags=line.trigger_flags,
            )
        )

    things = [
        RawThing(
            position=t.position,
            height=t.height,
            angle=t.angle,
            type=t.type,
            flags=t.flags,
            special=t.special,
        )
        for t in level.things.values()
    ]

    raw = RawLevel(
        name=level.name,
        namespace=level.namespace,
        vertices=vertices,
        sidedefs=sidedefs,
        sectors=sectors,
        linedefs=linedefs,
        things=things,
    )
    logger.debug("Unlinked level %s: %s", level.name, _format_counts(level))
    return raw


def _format_counts(level: Level) -> str:
    return ", ".join(f"{count} {kind.value}" for kind, count in level.counts().items())
