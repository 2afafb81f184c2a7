"""
Block checking and entity construction for the textmap compiler.

Checks every assignment of a block against its schema, then builds the raw
entity for that block. The first failure is raised; nothing is accumulated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from . import ast
from .errors import (
    FixedStringInvalidError,
    InvalidAssignmentError,
    InvalidAssignmentTypeError,
    LineDefSpecialError,
    MissingAssignmentsError,
    MultipleAssignmentError,
    OutOfRangeError,
    SectorSpecialError,
    SpecialMappingError,
    ThingSpecialError,
)
from .flags import LineDefFlags, ThingFlags, TriggerFlags
from .ir import RawLineDef, RawSector, RawSideDef, RawThing, RawVertex
from .location import Span
from .number import Number
from .point import Point
from .schema import (
    ARG_KEYS,
    LINEDEF_FLAG_KEYS,
    SPECIAL_KEY,
    THING_FLAG_KEYS,
    TRIGGER_FLAG_KEYS,
    BlockSchema,
    FieldKind,
    FieldSpec,
)
from .specials import LINE_SPECIALS, SECTOR_SPECIALS, ActionTable
from .strings import FixedString, FixedStringError


@dataclass
class BlockFields:
    """The checked assignments of one block, keyed by textmap field name."""

    block: ast.Block
    values: dict[str, Any] = field(default_factory=dict)
    assignments: dict[str, ast.AssignmentExpr] = field(default_factory=dict)

    def __contains__(self, key: str) -> bool:
        return key in self.values

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def span_of(self, key: str) -> Span:
        return self.assignments[key].span

    def flags(self, keys: dict[str, str]) -> dict[str, bool]:
        """Flag-model keyword arguments for the flag keys that were assigned."""
        return {attr: self.values[key] for key, attr in keys.items() if key in self.values}


def coerce_value(spec: FieldSpec, value: ast.Value) -> Any:
    """
    Convert a literal to the Python value stored for ``spec``.

    Raises:
        InvalidAssignmentTypeError: If the literal has the wrong type
        OutOfRangeError: If a number does not fit the field's width
        FixedStringInvalidError: If a name does not fit in eight bytes
    """
    if spec.kind == FieldKind.BOOL:
        if value.kind != ast.ValueKind.BOOL:
            raise InvalidAssignmentTypeError(spec.key, spec.kind.value, value, value.span)
        return value.value

    if spec.kind == FieldKind.STRING:
        if value.kind != ast.ValueKind.STR:
            raise InvalidAssignmentTypeError(spec.key, spec.kind.value, value, value.span)
        return value.value

    if spec.kind == FieldKind.FIXED_STRING:
        if value.kind != ast.ValueKind.STR:
            raise InvalidAssignmentTypeError(spec.key, spec.kind.value, value, value.span)
        try:
            return FixedString.from_str(value.value)
        except FixedStringError as e:
            raise FixedStringInvalidError(spec.key, value.value, e.message, value.span) from e

    if spec.kind == FieldKind.INT:
        if value.kind != ast.ValueKind.INT:
            raise InvalidAssignmentTypeError(spec.key, spec.kind.value, value, value.span)
        number = value.value
    else:
        if value.kind not in (ast.ValueKind.INT, ast.ValueKind.FLOAT):
            raise InvalidAssignmentTypeError(spec.key, spec.kind.value, value, value.span)
        literal = Number(value=value.value)
        if literal.has_fraction():
            raise InvalidAssignmentTypeError(
                spec.key, "number without a fractional part", value, value.span
            )
        number = literal.into_int()

    if spec.width is not None and not spec.width.contains(number):
        raise OutOfRangeError(
            spec.key, number, spec.width.minimum, spec.width.maximum, value.span
        )
    return number


def check_block(block: ast.Block, schema: BlockSchema) -> BlockFields:
    """
    Check every assignment of ``block`` against ``schema``.

    Per assignment, in order: the key is known, the value has the right type,
    it fits the field width, and the key was not assigned before. Missing
    required keys are reported after all assignments have been checked.
    """
    fields = BlockFields(block=block)
    block_name = schema.kind.value

    for assignment in block.assignments:
        spec = schema.get(assignment.key)
        if spec is None:
            raise InvalidAssignmentError(
                assignment.key, block_name, schema.keys, assignment.identifier.span
            )

        value = coerce_value(spec, assignment.value)

        original = fields.assignments.get(assignment.key)
        if original is not None:
            raise MultipleAssignmentError(assignment.key, original.span, assignment.span)

        fields.values[assignment.key] = value
        fields.assignments[assignment.key] = assignment

    missing = [key for key in schema.required if key not in fields]
    if missing:
        raise MissingAssignmentsError(block_name, missing, block.span)

    return fields


def decode_special(
    fields: BlockFields,
    table: ActionTable,
    error_cls: type[LineDefSpecialError] | type[ThingSpecialError],
) -> Any:
    """Resolve the ``special``/``arg0..arg4`` fields of a block through ``table``."""
    code = fields.get(SPECIAL_KEY, 0)
    args = [fields.get(key, 0) for key in ARG_KEYS]
    try:
        return table.wide_decode(code, args)
    except SpecialMappingError as e:
        involved = [fields.span_of(key) for key in (SPECIAL_KEY, *ARG_KEYS) if key in fields]
        raise error_cls(code, involved, fields.block.span) from e


# =============================================================================
# Entity builders
# =============================================================================


def build_vertex(fields: BlockFields) -> RawVertex:
    return RawVertex(position=Point[int](x=fields.get("x"), y=fields.get("y")))


def build_linedef(fields: BlockFields) -> RawLineDef:
    return RawLineDef(
        from_idx=fields.get("v1"),
        to_idx=fields.get("v2"),
        left_side_idx=fields.get("sidefront"),
        right_side_idx=fields.get("sideback"),
        flags=LineDefFlags(**fields.flags(LINEDEF_FLAG_KEYS)),
        special=decode_special(fields, LINE_SPECIALS, LineDefSpecialError),
        trigger_flags=TriggerFlags(**fields.flags(TRIGGER_FLAG_KEYS)),
    )


def build_sidedef(fields: BlockFields) -> RawSideDef:
    textures = {
        attr: fields.get(key)
        for key, attr in (
            ("texturetop", "upper_texture"),
            ("texturemiddle", "middle_texture"),
            ("texturebottom", "lower_texture"),
        )
        if key in fields
    }
    return RawSideDef(
        sector_idx=fields.get("sector"),
        offset=Point[int](x=fields.get("offsetx", 0), y=fields.get("offsety", 0)),
        **textures,
    )


def build_sector(fields: BlockFields) -> RawSector:
    code = fields.get(SPECIAL_KEY, 0)
    try:
        special = SECTOR_SPECIALS.wide_decode(code)
    except SpecialMappingError as e:
        involved = [fields.span_of(SPECIAL_KEY)] if SPECIAL_KEY in fields else []
        raise SectorSpecialError(code, involved, fields.block.span) from e

    extra = {"light_level": fields.get("lightlevel")} if "lightlevel" in fields else {}
    return RawSector(
        floor_height=fields.get("heightfloor", 0),
        ceiling_height=fields.get("heightceiling", 0),
        floor_flat=fields.get("texturefloor"),
        ceiling_flat=fields.get("textureceiling"),
        special=special,
        tag=fields.get("id", 0),
        **extra,
    )


def build_thing(fields: BlockFields) -> RawThing:
    return RawThing(
        position=Point[int](x=fields.get("x"), y=fields.get("y")),
        height=fields.get("height", 0),
        angle=fields.get("angle", 0),
        type=fields.get("type"),
        flags=ThingFlags(**fields.flags(THING_FLAG_KEYS)),
        special=decode_special(fields, LINE_SPECIALS, ThingSpecialError),
    )
