"""Tests for the textmap writer."""

import io

import pytest

from textmap.core import ir
from textmap.core.compiler import compile_translation_unit
from textmap.core.errors import (
    FixedStringEncodingError,
    OutputError,
    UnlinkFailedError,
    UnlinkError,
)
from textmap.core.flags import LineDefFlags, ThingFlags, TriggerFlags
from textmap.core.linker import link, unlink
from textmap.core.manifest import WriterConfig
from textmap.core.parser import parse_textmap
from textmap.core.point import Point
from textmap.core.specials import DamageNukage, DoorClose
from textmap.core.strings import FixedString
from textmap.core.writer import TextmapWriter, write, write_to


def block_lines(text: str, kind: str, index: int = 0) -> list[str]:
    """Assignment lines of the ``index``-th block of ``kind``, stripped."""
    lines = text.splitlines()
    found = -1
    for i, line in enumerate(lines):
        if line == kind:
            found += 1
            if found == index:
                end = lines.index("}", i)
                return [entry.strip() for entry in lines[i + 2 : end]]
    raise AssertionError(f"no {kind} #{index} in output")


def test_header_and_namespace(simple_raw: ir.RawLevel):
    text = write(link(simple_raw))
    lines = text.splitlines()
    assert lines[0] == "// Written by textmap"
    assert lines[1] == 'namespace = "zdoom";'


def test_fallback_namespace(simple_raw: ir.RawLevel):
    raw = simple_raw.model_copy(update={"namespace": None})
    text = write(link(raw), WriterConfig(namespace="doom", header=""))
    assert text.splitlines()[0] == 'namespace = "doom";'


def test_blocks_are_grouped_and_numbered(simple_raw: ir.RawLevel):
    text = write(link(simple_raw))
    lines = text.splitlines()

    headers = [line for line in lines if line in ("vertex", "linedef", "sidedef", "sector", "thing")]
    assert headers == ["vertex", "vertex", "linedef", "sidedef", "sidedef", "sector", "sector", "thing"]

    second_vertex = [i for i, line in enumerate(lines) if line == "vertex"][1]
    assert lines[second_vertex - 1] == "// #1"


def test_index_comments_can_be_disabled(simple_raw: ir.RawLevel):
    text = write(link(simple_raw), WriterConfig(index_comments=False))
    assert "// #0" not in text


def test_vertex_coordinates_style(simple_raw: ir.RawLevel):
    level = link(simple_raw)
    assert block_lines(write(level), "vertex", 1) == ["x = 64.0;", "y = 0.0;"]
    assert block_lines(write(level, WriterConfig(vertex_coordinates="int")), "vertex", 1) == [
        "x = 64;",
        "y = 0;",
    ]


def test_indent(simple_raw: ir.RawLevel):
    text = write(link(simple_raw), WriterConfig(indent=4))
    assert "    x = 0.0;" in text.splitlines()


def test_defaults_are_omitted(simple_raw: ir.RawLevel):
    text = write(link(simple_raw))

    assert block_lines(text, "sidedef", 0) == ["sector = 0;"]
    assert block_lines(text, "sidedef", 1) == ["offsetx = 8;", "offsety = -8;", "sector = 1;"]
    assert block_lines(text, "sector", 0) == [
        "heightceiling = 128;",
        'texturefloor = "FLAT1";',
        'textureceiling = "FLAT1";',
    ]
    assert block_lines(text, "sector", 1) == [
        "heightfloor = 16;",
        'texturefloor = "FLAT1";',
        'textureceiling = "FLAT1";',
        "lightlevel = 192;",
    ]
    assert block_lines(text, "linedef") == ["v1 = 0;", "v2 = 1;", "sidefront = 0;", "sideback = 1;"]
    assert block_lines(text, "thing") == ["x = 32.0;", "y = 32.0;", "angle = 90;", "type = 1;"]


def test_flags_and_specials_are_written(simple_raw: ir.RawLevel):
    line = ir.RawLineDef(
        from_idx=0,
        to_idx=1,
        left_side_idx=0,
        flags=LineDefFlags(impassable=True),
        special=DoorClose(tag=3, speed=16),
        trigger_flags=TriggerFlags(player_use=True),
    )
    flat = FixedString.from_str("NUKAGE1")
    sector = ir.RawSector(floor_flat=flat, ceiling_flat=flat, special=DamageNukage(), tag=2)
    thing = ir.RawThing(
        position=Point[int](x=0, y=0), type=9, flags=ThingFlags(skill5=False, friend=True)
    )
    raw = simple_raw.model_copy(
        update={"linedefs": [line], "sectors": [sector, sector], "things": [thing]}
    )
    text = write(link(raw))

    assert block_lines(text, "linedef") == [
        "v1 = 0;",
        "v2 = 1;",
        "sidefront = 0;",
        "blocking = true;",
        "special = 10;",
        "arg0 = 3;",
        "arg1 = 16;",
        "playeruse = true;",
    ]
    assert block_lines(text, "sector") == [
        'texturefloor = "NUKAGE1";',
        'textureceiling = "NUKAGE1";',
        "id = 2;",
        "special = 71;",
    ]
    assert block_lines(text, "thing") == [
        "x = 0.0;",
        "y = 0.0;",
        "type = 9;",
        "skill5 = false;",
        "friend = true;",
    ]


def test_written_text_compiles_back(simple_raw: ir.RawLevel):
    text = write(link(simple_raw))
    assert compile_translation_unit(parse_textmap(text)) == simple_raw


def test_square_round_trip(square_level: ir.Level, square_raw: ir.RawLevel):
    text = write(square_level)
    recompiled = compile_translation_unit(parse_textmap(text), name="MAP01")
    assert recompiled == square_raw


def test_non_utf8_name():
    level = ir.Level()
    flat = FixedString.from_raw(b"\xffBAD")
    level.add_sector(ir.Sector(floor_flat=flat, ceiling_flat=FixedString.from_str("OK")))

    with pytest.raises(FixedStringEncodingError) as exc_info:
        write(level)
    assert exc_info.value.key == "texturefloor"
    assert exc_info.value.raw == b"\xffBAD"


def test_unlink_failure_is_wrapped(simple_raw: ir.RawLevel):
    level = link(simple_raw)
    level.sectors.remove(next(level.sectors.keys()))

    with pytest.raises(UnlinkFailedError) as exc_info:
        write(level)
    assert isinstance(exc_info.value.__cause__, UnlinkError)
    assert exc_info.value.error is exc_info.value.__cause__


def test_write_to_stream(simple_raw: ir.RawLevel):
    stream = io.StringIO()
    level = link(simple_raw)
    write_to(level, stream)
    assert stream.getvalue() == write(level)


def test_write_to_failing_stream(simple_raw: ir.RawLevel):
    class BrokenStream(io.StringIO):
        def write(self, s: str) -> int:
            raise OSError("disk full")

    with pytest.raises(OutputError) as exc_info:
        write_to(link(simple_raw), BrokenStream())
    assert "disk full" in exc_info.value.message


def test_renderer_works_on_raw_levels(simple_raw: ir.RawLevel):
    assert TextmapWriter().render(simple_raw) == write(link(simple_raw))
    assert TextmapWriter().render(unlink(link(simple_raw))) == TextmapWriter().render(simple_raw)
