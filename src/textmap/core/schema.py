"""
Field vocabulary of each textmap block kind.

Every block kind has a fixed schema: the keys it accepts, the value type
each key expects, the numeric width it must fit and whether it is required.
The compiler checks assignments against these schemas and the writer uses
them to decide which fields it may omit.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from .ir.kinds import EntityKind


class FieldKind(str, Enum):
    """Value types a field can expect."""

    INT = "integer"
    NUMBER = "number"  # int, or a float with no fractional part
    BOOL = "bool"
    STRING = "string"
    FIXED_STRING = "name"  # string of at most 8 bytes


class Width(str, Enum):
    """Storage width of a numeric field."""

    U8 = "u8"
    I16 = "i16"
    U16 = "u16"

    @property
    def minimum(self) -> int:
        return {Width.U8: 0, Width.I16: -(2**15), Width.U16: 0}[self]

    @property
    def maximum(self) -> int:
        return {Width.U8: 2**8 - 1, Width.I16: 2**15 - 1, Width.U16: 2**16 - 1}[self]

    def contains(self, value: int) -> bool:
        return self.minimum <= value <= self.maximum


class FieldSpec(BaseModel):
    """
    Specification of a single block field.

    Attributes:
        key: Identifier used in the textmap
        kind: Expected value type
        width: Range numeric values must fit, None for non-numeric fields
        required: Whether the block is invalid without this field
    """

    key: str
    kind: FieldKind
    width: Width | None = None
    required: bool = False

    model_config = ConfigDict(frozen=True)


class BlockSchema(BaseModel):
    """The ordered fields of one block kind."""

    kind: EntityKind
    field_specs: tuple[FieldSpec, ...]

    model_config = ConfigDict(frozen=True)

    def get(self, key: str) -> FieldSpec | None:
        for spec in self.field_specs:
            if spec.key == key:
                return spec
        return None

    @property
    def keys(self) -> list[str]:
        return [spec.key for spec in self.field_specs]

    @property
    def required(self) -> list[str]:
        return [spec.key for spec in self.field_specs if spec.required]


def _int(key: str, width: Width = Width.I16, required: bool = False) -> FieldSpec:
    return FieldSpec(key=key, kind=FieldKind.INT, width=width, required=required)


def _number(key: str, required: bool = False) -> FieldSpec:
    return FieldSpec(key=key, kind=FieldKind.NUMBER, width=Width.I16, required=required)


def _bool(key: str) -> FieldSpec:
    return FieldSpec(key=key, kind=FieldKind.BOOL)


def _name(key: str, required: bool = False) -> FieldSpec:
    return FieldSpec(key=key, kind=FieldKind.FIXED_STRING, required=required)


# Textmap key -> attribute of LineDefFlags
LINEDEF_FLAG_KEYS: dict[str, str] = {
    "blocking": "impassable",
    "blockmonsters": "blocks_monsters",
    "twosided": "two_sided",
    "dontpegtop": "upper_unpegged",
    "dontpegbottom": "lower_unpegged",
    "secret": "secret",
    "blocksound": "blocks_sound",
    "dontdraw": "not_on_map",
    "mapped": "already_on_map",
}

# Textmap key -> attribute of TriggerFlags
TRIGGER_FLAG_KEYS: dict[str, str] = {
    "playercross": "player_cross",
    "playeruse": "player_use",
    "monstercross": "monster_cross",
    "monsteruse": "monster_use",
    "impact": "impact",
    "playerpush": "player_push",
    "monsterpush": "monster_push",
    "missilecross": "missile_cross",
    "repeatspecial": "repeats",
    "monsteractivate": "monster_activate",
}

# Textmap key -> attribute of ThingFlags
THING_FLAG_KEYS: dict[str, str] = {
    "skill1": "skill1",
    "skill2": "skill2",
    "skill3": "skill3",
    "skill4": "skill4",
    "skill5": "skill5",
    "ambush": "ambush",
    "single": "single",
    "dm": "dm",
    "coop": "coop",
    "friend": "friend",
    "dormant": "dormant",
    "class1": "class1",
    "class2": "class2",
    "class3": "class3",
    "standing": "standing",
    "strifeally": "strife_ally",
    "translucent": "translucent",
    "invisible": "invisible",
}

SPECIAL_KEY = "special"
ARG_KEYS = tuple(f"arg{i}" for i in range(5))
NAMESPACE_KEY = "namespace"


VERTEX_SCHEMA = BlockSchema(
    kind=EntityKind.VERTEX,
    field_specs=(_number("x", required=True), _number("y", required=True)),
)

LINEDEF_SCHEMA = BlockSchema(
    kind=EntityKind.LINEDEF,
    field_specs=(
        _int("v1", Width.U16, required=True),
        _int("v2", Width.U16, required=True),
        _int("sidefront", Width.U16, required=True),
        _int("sideback", Width.U16),
        *(_bool(key) for key in LINEDEF_FLAG_KEYS),
        _int(SPECIAL_KEY),
        *(_int(key) for key in ARG_KEYS),
        *(_bool(key) for key in TRIGGER_FLAG_KEYS),
    ),
)

SIDEDEF_SCHEMA = BlockSchema(
    kind=EntityKind.SIDEDEF,
    field_specs=(
        _int("offsetx"),
        _int("offsety"),
        _int("sector", Width.U16, required=True),
        _name("texturetop"),
        _name("texturemiddle"),
        _name("texturebottom"),
    ),
)

SECTOR_SCHEMA = BlockSchema(
    kind=EntityKind.SECTOR,
    field_specs=(
        _int("heightfloor"),
        _int("heightceiling"),
        _name("texturefloor", required=True),
        _name("textureceiling", required=True),
        _int("lightlevel", Width.U8),
        _int("id"),
        _int(SPECIAL_KEY),
    ),
)

THING_SCHEMA = BlockSchema(
    kind=EntityKind.THING,
    field_specs=(
        _number("x", required=True),
        _number("y", required=True),
        _number("height"),
        _int("angle"),
        _int("type", required=True),
        *(_bool(key) for key in THING_FLAG_KEYS),
        _int(SPECIAL_KEY),
        *(_int(key) for key in ARG_KEYS),
    ),
)

SCHEMAS: dict[EntityKind, BlockSchema] = {
    schema.kind: schema
    for schema in (VERTEX_SCHEMA, LINEDEF_SCHEMA, SIDEDEF_SCHEMA, SECTOR_SCHEMA, THING_SCHEMA)
}


def schema_for(name: str) -> BlockSchema | None:
    """Schema of the block named ``name``, or None if it is not an entity kind."""
    try:
        return SCHEMAS[EntityKind(name)]
    except ValueError:
        return None


def block_names() -> list[str]:
    return [kind.value for kind in SCHEMAS]
