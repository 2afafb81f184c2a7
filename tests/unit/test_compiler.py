"""Tests for the textmap compiler (AST -> raw level)."""

import pytest

from textmap.core.compiler import compile_translation_unit
from textmap.core.errors import (
    FixedStringInvalidError,
    InvalidAssignmentError,
    InvalidAssignmentTypeError,
    InvalidBlockError,
    InvalidNamespaceError,
    LineDefSpecialError,
    MissingAssignmentsError,
    MultipleAssignmentError,
    OutOfRangeError,
    SectorSpecialError,
    ThingSpecialError,
)
from textmap.core.flags import LineDefFlags, ThingFlags, TriggerFlags
from textmap.core.ir import RawLevel
from textmap.core.location import Span
from textmap.core.manifest import CompilerConfig
from textmap.core.parser import parse_textmap
from textmap.core.specials import DamageNukage, DoorClose, NoSectorSpecial, NoSpecial, Teleport
from textmap.core.strings import FixedString

SECTOR = 'sector { texturefloor="F"; textureceiling="C"; '


def compile_source(source: str, **kwargs) -> RawLevel:
    return compile_translation_unit(parse_textmap(source), **kwargs)


# =============================================================================
# Numeric coercion
# =============================================================================


@pytest.mark.parametrize("literal", ["5", "5.0", "0x5"])
def test_vertex_coordinates_accept_integral_numbers(literal):
    level = compile_source(f"vertex {{ x={literal}; y=-3; }}")
    assert level.vertices[0].position.x == 5
    assert level.vertices[0].position.y == -3


def test_fractional_coordinate_is_a_type_error():
    with pytest.raises(InvalidAssignmentTypeError) as exc_info:
        compile_source("vertex { x=5.5; y=0; }")
    assert exc_info.value.key == "x"
    assert exc_info.value.span == Span(start=11, end=14)


def test_integer_field_rejects_float():
    with pytest.raises(InvalidAssignmentTypeError):
        compile_source(SECTOR + "heightfloor=8.0; }")


def test_string_in_numeric_field():
    with pytest.raises(InvalidAssignmentTypeError) as exc_info:
        compile_source('vertex { x="zero"; y=0; }')
    assert exc_info.value.expected == "number"


def test_bool_field_rejects_int():
    with pytest.raises(InvalidAssignmentTypeError):
        compile_source("linedef { v1=0; v2=1; sidefront=0; blocking=1; }")


@pytest.mark.parametrize(
    ("source", "key", "value"),
    [
        ("vertex { x=40000; y=0; }", "x", 40000),
        ("vertex { x=0; y=-32769.0; }", "y", -32769),
        (SECTOR + "lightlevel=256; }", "lightlevel", 256),
        (SECTOR + "lightlevel=-1; }", "lightlevel", -1),
        ("sidedef { sector=-1; }", "sector", -1),
        ("sidedef { sector=65536; }", "sector", 65536),
    ],
)
def test_out_of_range(source, key, value):
    with pytest.raises(OutOfRangeError) as exc_info:
        compile_source(source)
    assert exc_info.value.key == key
    assert exc_info.value.value == value


def test_u16_index_upper_bound_is_accepted():
    level = compile_source("sidedef { sector=65535; }")
    assert level.sidedefs[0].sector_idx == 65535


# =============================================================================
# Block and assignment checks
# =============================================================================


def test_missing_required_field():
    with pytest.raises(MissingAssignmentsError) as exc_info:
        compile_source("linedef { v2=1; sidefront=0; }")
    assert exc_info.value.missing == ["v1"]
    assert exc_info.value.block == "linedef"


def test_missing_fields_are_all_listed_in_schema_order():
    with pytest.raises(MissingAssignmentsError) as exc_info:
        compile_source("thing { angle=90; }")
    assert exc_info.value.missing == ["x", "y", "type"]
    assert exc_info.value.span == Span(start=0, end=19)


def test_duplicate_assignment_carries_both_spans():
    source = "sector { id=1; id=2; }"
    with pytest.raises(MultipleAssignmentError) as exc_info:
        compile_source(source)

    error = exc_info.value
    assert error.key == "id"
    assert source[error.original.start : error.original.end] == "id=1;"
    assert source[error.duplicate.start : error.duplicate.end] == "id=2;"
    assert [label.label for label in error.labels] == ["first assigned here", "assigned again here"]


def test_unknown_field_lists_valid_fields():
    with pytest.raises(InvalidAssignmentError) as exc_info:
        compile_source("vertex { x=0; y=0; z=0; }")
    assert exc_info.value.key == "z"
    assert exc_info.value.valid == ["x", "y"]


def test_unknown_field_is_reported_before_type():
    with pytest.raises(InvalidAssignmentError):
        compile_source('vertex { x=0; y=0; colour="red"; }')


def test_type_is_checked_before_duplicate():
    with pytest.raises(InvalidAssignmentTypeError):
        compile_source("vertex { x=0; y=0; x=1.5; }")


def test_unknown_block():
    with pytest.raises(InvalidBlockError) as exc_info:
        compile_source("vertex { x=0; y=0; } floor { }")
    assert exc_info.value.name == "floor"
    assert "vertex" in exc_info.value.valid


def test_unknown_global_assignment():
    with pytest.raises(InvalidBlockError) as exc_info:
        compile_source("version = 2;")
    assert exc_info.value.name == "version"


def test_texture_longer_than_eight_bytes():
    with pytest.raises(FixedStringInvalidError) as exc_info:
        compile_source('sidedef { sector=0; texturemiddle="VERYLONGNAME"; }')
    assert exc_info.value.key == "texturemiddle"
    assert exc_info.value.value == "VERYLONGNAME"


def test_render_points_at_source():
    source = "sector { id=1;\nid=2; }"
    with pytest.raises(MultipleAssignmentError) as exc_info:
        compile_source(source)

    rendered = exc_info.value.render(source, file="TEXTMAP")
    assert "Multiple assignment of 'id'" in rendered
    assert "TEXTMAP:1:10" in rendered
    assert "TEXTMAP:2:1" in rendered


# =============================================================================
# Entities
# =============================================================================


def test_sector_defaults():
    level = compile_source(SECTOR + "}")
    sector = level.sectors[0]
    assert sector.floor_height == 0
    assert sector.ceiling_height == 0
    assert sector.light_level == 160
    assert sector.tag == 0
    assert sector.special == NoSectorSpecial()
    assert sector.floor_flat == FixedString.from_str("F")


def test_sector_special_and_tag():
    level = compile_source(SECTOR + "special=71; id=4; lightlevel=255; }")
    sector = level.sectors[0]
    assert sector.special == DamageNukage()
    assert sector.tag == 4
    assert sector.light_level == 255


def test_unknown_sector_special():
    source = SECTOR + "special=3; }"
    with pytest.raises(SectorSpecialError) as exc_info:
        compile_source(source)
    assert exc_info.value.code == 3
    span = exc_info.value.spans[0]
    assert source[span.start : span.end] == "special=3;"


def test_sidedef_defaults():
    side = compile_source("sidedef { sector=2; }").sidedefs[0]
    assert side.sector_idx == 2
    assert side.offset.as_tuple() == (0, 0)
    assert side.upper_texture == FixedString.from_str("-")
    assert side.middle_texture == FixedString.from_str("-")
    assert side.lower_texture == FixedString.from_str("-")


def test_linedef_flags_and_special():
    level = compile_source(
        "linedef { v1=0; v2=1; sidefront=0; sideback=1; twosided=true; "
        "special=10; arg0=3; arg1=16; playeruse=true; repeatspecial=true; }"
    )
    line = level.linedefs[0]
    assert line.right_side_idx == 1
    assert line.flags == LineDefFlags(two_sided=True)
    assert line.special == DoorClose(tag=3, speed=16)
    assert line.trigger_flags == TriggerFlags(player_use=True, repeats=True)


def test_linedef_defaults():
    line = compile_source("linedef { v1=0; v2=1; sidefront=0; }").linedefs[0]
    assert line.right_side_idx is None
    assert line.flags == LineDefFlags()
    assert line.special == NoSpecial()
    assert line.trigger_flags == TriggerFlags()


def test_linedef_special_with_extra_argument():
    source = "linedef { v1=0; v2=1; sidefront=0; special=243; arg0=0; arg3=1; }"
    with pytest.raises(LineDefSpecialError) as exc_info:
        compile_source(source)

    error = exc_info.value
    assert error.code == 243
    assert [source[s.start : s.end] for s in error.spans] == [
        "special=243;",
        "arg0=0;",
        "arg3=1;",
    ]


def test_thing_flags_and_special():
    level = compile_source(
        "thing { x=32.0; y=-32; type=3004; angle=180; skill1=false; friend=true; "
        "special=70; arg1=5; }"
    )
    thing = level.things[0]
    assert thing.position.as_tuple() == (32, -32)
    assert thing.type == 3004
    assert thing.angle == 180
    assert thing.flags == ThingFlags(skill1=False, friend=True)
    assert thing.special == Teleport(tag=5)


def test_thing_special_error():
    with pytest.raises(ThingSpecialError):
        compile_source("thing { x=0; y=0; type=1; special=12345; }")


def test_entities_keep_source_order():
    level = compile_source("vertex { x=1; y=0; } vertex { x=2; y=0; } vertex { x=3; y=0; }")
    assert [v.position.x for v in level.vertices] == [1, 2, 3]


# =============================================================================
# Namespace
# =============================================================================


def test_namespace_is_recorded():
    assert compile_source('namespace="zdoom";').namespace == "zdoom"
    assert compile_source("").namespace is None


def test_namespace_must_be_string():
    with pytest.raises(InvalidAssignmentTypeError):
        compile_source("namespace=1;")


def test_namespace_assigned_twice():
    with pytest.raises(MultipleAssignmentError):
        compile_source('namespace="zdoom"; namespace="doom";')


def test_namespace_allow_list():
    config = CompilerConfig(namespaces=["zdoom"])
    assert compile_source('namespace="zdoom";', config=config).namespace == "zdoom"
    with pytest.raises(InvalidNamespaceError) as exc_info:
        compile_source('namespace="heretic";', config=config)
    assert exc_info.value.namespace == "heretic"


def test_required_namespace():
    with pytest.raises(MissingAssignmentsError) as exc_info:
        compile_source("", config=CompilerConfig(require_namespace=True))
    assert exc_info.value.missing == ["namespace"]


def test_level_name():
    assert compile_source("", name="MAP01").name == FixedString.from_str("MAP01")
    assert compile_source("").name is None


# =============================================================================
# End to end
# =============================================================================


def test_square_compiles(square_raw: RawLevel):
    assert square_raw.namespace == "zdoom"
    assert len(square_raw.vertices) == 4
    assert len(square_raw.linedefs) == 4
    assert len(square_raw.sidedefs) == 4
    assert len(square_raw.sectors) == 1
    assert square_raw.things == []
    assert all(line.flags.impassable for line in square_raw.linedefs)
    assert square_raw.vertices[0].position.as_tuple() == (-96, 32)
