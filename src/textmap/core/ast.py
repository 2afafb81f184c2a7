"""
Abstract syntax tree for textmap source.

The tree is passive: it records what was written and where, with no
knowledge of entity kinds. Every node carries the byte span it was parsed
from so the compiler can point diagnostics at exact source locations.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from .location import Span


class ValueKind(str, Enum):
    """Literal types a value can have."""

    INT = "int"
    FLOAT = "float"
    STR = "string"
    BOOL = "bool"


class Identifier(BaseModel):
    """A name: ``[A-Za-z_][A-Za-z0-9_]*``."""

    name: str
    span: Span

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.name


class Value(BaseModel):
    """
    A literal value.

    Examples:
        - 128: Value(kind=INT, value=128)
        - -96.0: Value(kind=FLOAT, value=-96.0)
        - "STONE2": Value(kind=STR, value="STONE2")
        - TRUE: Value(kind=BOOL, value=True)
    """

    kind: ValueKind
    value: int | float | str | bool
    span: Span

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return format_value(self.value)


class AssignmentExpr(BaseModel):
    """``identifier = value;``"""

    identifier: Identifier
    value: Value
    span: Span

    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> str:
        return self.identifier.name


class Block(BaseModel):
    """``identifier { assignment* }``; blocks do not nest."""

    identifier: Identifier
    assignments: list[AssignmentExpr]
    span: Span

    model_config = ConfigDict(frozen=True)

    @property
    def name(self) -> str:
        return self.identifier.name


GlobalExpr = AssignmentExpr | Block


class TranslationUnit(BaseModel):
    """A whole textmap: top-level assignments and blocks in source order."""

    expressions: list[AssignmentExpr | Block]

    model_config = ConfigDict(frozen=True)

    @property
    def blocks(self) -> list[Block]:
        return [e for e in self.expressions if isinstance(e, Block)]

    @property
    def assignments(self) -> list[AssignmentExpr]:
        return [e for e in self.expressions if isinstance(e, AssignmentExpr)]


def format_value(value: int | float | str | bool) -> str:
    """Render a Python value as a textmap literal."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
        return f'"{escaped}"'
    if isinstance(value, float):
        return repr(value)
    return str(value)
