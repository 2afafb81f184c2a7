"""Shared pytest fixtures for textmap tests."""

from pathlib import Path

import pytest

from textmap.core import ir
from textmap.core.compiler import compile_translation_unit
from textmap.core.parser import parse_textmap
from textmap.core.pipeline import load_textmap
from textmap.core.point import Point
from textmap.core.strings import FixedString


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def square_source(fixtures_dir: Path) -> str:
    """Textmap of one square sector bounded by four impassable lines."""
    return (fixtures_dir / "square.txt").read_text(encoding="utf-8")


@pytest.fixture
def square_raw(square_source: str) -> ir.RawLevel:
    return compile_translation_unit(parse_textmap(square_source), name="MAP01")


@pytest.fixture
def square_level(square_source: str) -> ir.Level:
    return load_textmap(square_source, name="MAP01")


@pytest.fixture
def simple_raw() -> ir.RawLevel:
    """Return a small raw level with one two-sided line and one thing."""
    flat = FixedString.from_str("FLAT1")
    return ir.RawLevel(
        namespace="zdoom",
        vertices=[
            ir.RawVertex(position=Point[int](x=0, y=0)),
            ir.RawVertex(position=Point[int](x=64, y=0)),
        ],
        sectors=[
            ir.RawSector(floor_flat=flat, ceiling_flat=flat, ceiling_height=128),
            ir.RawSector(floor_flat=flat, ceiling_flat=flat, floor_height=16, light_level=192),
        ],
        sidedefs=[
            ir.RawSideDef(sector_idx=0),
            ir.RawSideDef(sector_idx=1, offset=Point[int](x=8, y=-8)),
        ],
        linedefs=[
            ir.RawLineDef(from_idx=0, to_idx=1, left_side_idx=0, right_side_idx=1),
        ],
        things=[
            ir.RawThing(position=Point[int](x=32, y=32), type=1, angle=90),
        ],
    )
