"""Tests for the textmap parser."""

import pytest

from textmap.core import ast
from textmap.core.errors import ParseError
from textmap.core.location import Span
from textmap.core.parser import parse_textmap


def test_empty_source():
    unit = parse_textmap("  // nothing here\n")
    assert unit.expressions == []


def test_top_level_assignment():
    unit = parse_textmap('namespace = "zdoom";')

    assert len(unit.expressions) == 1
    assignment = unit.expressions[0]
    assert isinstance(assignment, ast.AssignmentExpr)
    assert assignment.key == "namespace"
    assert assignment.value.kind == ast.ValueKind.STR
    assert assignment.value.value == "zdoom"
    assert assignment.span == Span(start=0, end=20)


def test_block_with_assignments():
    source = "sector { id=1; }"
    unit = parse_textmap(source)

    block = unit.blocks[0]
    assert block.name == "sector"
    assert block.span == Span(start=0, end=len(source))
    assert len(block.assignments) == 1

    assignment = block.assignments[0]
    assert assignment.identifier.span == Span(start=9, end=11)
    assert assignment.value.span == Span(start=12, end=13)
    assert assignment.span == Span(start=9, end=14)


def test_expressions_keep_source_order():
    unit = parse_textmap('vertex { x=0; y=0; } namespace="zdoom"; thing { type=1; }')

    kinds = [type(e).__name__ for e in unit.expressions]
    assert kinds == ["Block", "AssignmentExpr", "Block"]
    assert [b.name for b in unit.blocks] == ["vertex", "thing"]
    assert [a.key for a in unit.assignments] == ["namespace"]


@pytest.mark.parametrize(
    ("literal", "expected"),
    [("true", True), ("TRUE", True), ("False", False), ("fAlSe", False)],
)
def test_booleans_are_case_insensitive(literal, expected):
    unit = parse_textmap(f"flag = {literal};")
    value = unit.assignments[0].value
    assert value.kind == ast.ValueKind.BOOL
    assert value.value is expected


def test_value_kinds():
    unit = parse_textmap('a = 1; b = 1.5; c = "s"; d = true;')
    kinds = [a.value.kind for a in unit.assignments]
    assert kinds == [
        ast.ValueKind.INT,
        ast.ValueKind.FLOAT,
        ast.ValueKind.STR,
        ast.ValueKind.BOOL,
    ]


def test_missing_semicolon():
    with pytest.raises(ParseError) as exc_info:
        parse_textmap("x = 1")
    assert "Expected ';'" in exc_info.value.message
    assert exc_info.value.offset == 5


def test_identifier_is_not_a_value():
    with pytest.raises(ParseError) as exc_info:
        parse_textmap("x = y;")
    assert exc_info.value.offset == 4


def test_blocks_do_not_nest():
    with pytest.raises(ParseError):
        parse_textmap("sector { inner { x = 1; } }")


def test_unterminated_block():
    with pytest.raises(ParseError) as exc_info:
        parse_textmap("vertex { x = 1;")
    assert "Unterminated block" in exc_info.value.message


def test_error_context_has_line_and_column():
    with pytest.raises(ParseError) as exc_info:
        parse_textmap("x = 1;\ny = ;", file="TEXTMAP")

    error = exc_info.value
    assert error.offset == 11
    assert error.context is not None
    assert error.context.line == 2
    assert error.context.column == 5
    assert str(error).startswith("TEXTMAP:2:5")
