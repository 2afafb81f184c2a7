"""Source location tracking for textmap nodes.

Spans are half-open byte ranges into the UTF-8 encoded source text. They are
converted to 1-indexed line/column pairs only when a diagnostic is rendered.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Span(BaseModel):
    """Half-open byte range ``[start, end)`` a node was parsed from."""

    start: int
    end: int

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"

    def __len__(self) -> int:
        return self.end - self.start

    def merge(self, other: Span) -> Span:
        """Smallest span covering both ``self`` and ``other``."""
        return Span(start=min(self.start, other.start), end=max(self.end, other.end))


def locate(source: str | bytes, offset: int) -> tuple[int, int]:
    """
    Convert a byte offset into a (line, column) pair.

    Both values are 1-indexed. The column counts bytes, which matches
    characters for the ASCII-only vocabulary of textmaps.
    """
    data = source.encode("utf-8") if isinstance(source, str) else source
    offset = max(0, min(offset, len(data)))
    line = data.count(b"\n", 0, offset) + 1
    line_start = data.rfind(b"\n", 0, offset) + 1
    return line, offset - line_start + 1


def snippet_lines(source: str | bytes, line: int, context: int = 2) -> tuple[int, list[str]]:
    """
    Return ``(first_line_number, lines)`` surrounding ``line``.

    Used to build the code excerpt shown under an error message.
    """
    data = source.encode("utf-8") if isinstance(source, str) else source
    lines = data.decode("utf-8", errors="replace").split("\n")
    first = max(1, line - context)
    last = min(len(lines), line + context)
    return first, lines[first - 1 : last]
