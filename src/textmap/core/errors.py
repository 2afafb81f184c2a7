"""
Error types for textmap parsing, compiling, linking and writing.

Every stage fails fast: the first problem found is raised as one of the
exceptions below and no partial result is returned.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from .location import Span, locate, snippet_lines

if TYPE_CHECKING:
    from .ast import Value
    from .ir.kinds import EntityKind
    from .specials.table import LegacySpecial, WideSpecial


class TextmapError(Exception):
    """Base exception for all textmap errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed, in bytes)
        snippet: Optional source excerpt around the error location
        file: Optional path of the textmap (or lump name) being processed
    """

    line: int
    column: int
    snippet: str | None = None
    file: Path | str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "TEXTMAP:10:5"
        """
        location = f"{self.line}:{self.column}"
        if self.file:
            location = f"{self.file}:{location}"

        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format code snippet with line numbers and error marker."""
        if not self.snippet:
            return ""

        lines = self.snippet.split("\n")
        formatted = []

        # Snippet shows up to 2 lines before the error line
        start_line = max(1, self.line - 2)

        for i, line in enumerate(lines):
            line_num = start_line + i
            prefix = f"{line_num:4d} | "
            formatted.append(prefix + line)

            if line_num == self.line:
                marker_pos = len(prefix) + self.column - 1
                formatted.append(" " * marker_pos + "^^^")

        return "\n".join(formatted)


def context_for(source: str | bytes, offset: int, file: Path | str | None = None) -> ErrorContext:
    """Build an ErrorContext (with snippet) for a byte offset into ``source``."""
    line, column = locate(source, offset)
    _, lines = snippet_lines(source, line)
    return ErrorContext(line=line, column=column, snippet="\n".join(lines), file=file)


class ConfigError(TextmapError):
    """Raised when a textmap.toml file contains invalid settings."""

    pass


# =============================================================================
# Syntax
# =============================================================================


class ParseError(TextmapError):
    """
    Raised when textmap syntax cannot be parsed.

    Examples:
    - Unterminated string or block comment
    - Missing ``;`` after an assignment
    - Unexpected character
    """

    def __init__(self, message: str, offset: int, context: ErrorContext | None = None):
        self.offset = offset
        super().__init__(message, context)


def make_parse_error(
    message: str,
    source: str | bytes,
    offset: int,
    file: Path | str | None = None,
) -> ParseError:
    """
    Helper to create a ParseError with context.

    Args:
        message: Error description
        source: Full source text being parsed
        offset: Byte offset of the offending input
        file: Optional source name

    Returns:
        ParseError with context attached
    """
    return ParseError(message, offset, context_for(source, offset, file))


# =============================================================================
# Semantic (compiler)
# =============================================================================


@dataclass(frozen=True)
class SpanLabel:
    """A source span with a short explanation, as shown under a diagnostic."""

    span: Span
    label: str


class CompileError(TextmapError):
    """
    Raised when a syntactically valid textmap describes an invalid level.

    Each subclass carries one or more labeled spans so callers can render a
    source-pointing diagnostic with :meth:`render`.
    """

    def __init__(self, message: str, labels: Sequence[SpanLabel]):
        self.labels = list(labels)
        super().__init__(message)

    @property
    def span(self) -> Span:
        """Primary span of the error (the first label)."""
        return self.labels[0].span

    def render(self, source: str | bytes, file: Path | str | None = None) -> str:
        """Render the error against ``source`` with one excerpt per label."""
        parts = [self.message]
        for label in self.labels:
            context = context_for(source, label.span.start, file)
            parts.append(f"{context.format()}\n  = {label.label}")
        return "\n".join(parts)


class FixedStringInvalidError(CompileError):
    """A string value cannot be stored in an 8-byte fixed identifier."""

    def __init__(self, key: str, value: str, reason: str, span: Span):
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(
            f"Invalid value for '{key}': {value!r} is not a valid 8-byte name ({reason})",
            [SpanLabel(span, reason)],
        )


class MultipleAssignmentError(CompileError):
    """A field was assigned more than once in the same block."""

    def __init__(self, key: str, original: Span, duplicate: Span):
        self.key = key
        self.original = original
        self.duplicate = duplicate
        super().__init__(
            f"Multiple assignment of '{key}'",
            [
                SpanLabel(original, "first assigned here"),
                SpanLabel(duplicate, "assigned again here"),
            ],
        )


class InvalidAssignmentTypeError(CompileError):
    """A field was assigned a value of the wrong type."""

    def __init__(self, key: str, expected: str, value: Value, span: Span):
        self.key = key
        self.expected = expected
        self.value = value
        super().__init__(
            f"Invalid type for '{key}': expected {expected}, got {value.kind.value} {value}",
            [SpanLabel(span, f"expected {expected}")],
        )


class OutOfRangeError(CompileError):
    """A numeric value does not fit the width of its target field."""

    def __init__(self, key: str, value: int, minimum: int, maximum: int, span: Span):
        self.key = key
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"Value {value} for '{key}' is out of range [{minimum}, {maximum}]",
            [SpanLabel(span, f"must be between {minimum} and {maximum}")],
        )


class InvalidAssignmentError(CompileError):
    """An identifier is not a field of the block (or of the global scope)."""

    def __init__(self, key: str, block: str, valid: Sequence[str], span: Span):
        self.key = key
        self.block = block
        self.valid = list(valid)
        super().__init__(
            f"Unknown field '{key}' in {block}. Valid fields: {', '.join(self.valid)}",
            [SpanLabel(span, "unknown field")],
        )


class InvalidBlockError(CompileError):
    """A top-level block does not name one of the entity kinds."""

    def __init__(self, name: str, valid: Sequence[str], span: Span):
        self.name = name
        self.valid = list(valid)
        super().__init__(
            f"Unknown block '{name}'. Valid blocks: {', '.join(self.valid)}",
            [SpanLabel(span, "unknown block")],
        )


class MissingAssignmentsError(CompileError):
    """Required fields were never assigned in a block."""

    def __init__(self, block: str, missing: Sequence[str], span: Span):
        self.block = block
        self.missing = list(missing)
        super().__init__(
            f"Missing required field(s) in {block}: {', '.join(self.missing)}",
            [SpanLabel(span, f"{block} declared here")],
        )


class InvalidNamespaceError(CompileError):
    """The declared namespace is not in the configured allow-list."""

    def __init__(self, namespace: str, allowed: Sequence[str], span: Span):
        self.namespace = namespace
        self.allowed = list(allowed)
        super().__init__(
            f"Namespace {namespace!r} is not accepted. Accepted: {', '.join(self.allowed)}",
            [SpanLabel(span, "namespace declared here")],
        )


class _SpecialError(CompileError):
    entity = "special"

    def __init__(self, code: int, spans: Sequence[Span], span: Span):
        self.code = code
        self.spans = list(spans)
        labels = [SpanLabel(s, "involved in special") for s in self.spans] or [
            SpanLabel(span, f"{self.entity} declared here")
        ]
        super().__init__(f"Invalid {self.entity} special {code}", labels)


class LineDefSpecialError(_SpecialError):
    """The linedef special/arg fields do not decode to a known action."""

    entity = "linedef"


class SectorSpecialError(_SpecialError):
    """The sector special does not decode to a known sector type."""

    entity = "sector"


class ThingSpecialError(_SpecialError):
    """The thing special/arg fields do not decode to a known action."""

    entity = "thing"


# =============================================================================
# Action tables
# =============================================================================


class SpecialMappingError(TextmapError, ValueError):
    """An encoded special does not correspond to any table entry."""

    def __init__(self, rejected: WideSpecial | LegacySpecial):
        self.rejected = rejected
        super().__init__(f"No special matches {rejected!r}")


class SpecialTableError(TextmapError):
    """A mapping table is structurally inconsistent (duplicate codes, bad arity)."""

    pass


# =============================================================================
# Referential (linker) and capacity (unlinker)
# =============================================================================


class LinkError(TextmapError):
    """Raised when positional references in a raw level cannot be resolved."""

    pass


class IndexOutOfRangeError(LinkError):
    """A positional reference points past the end of its target table."""

    def __init__(
        self,
        referrer: EntityKind,
        referrer_index: int,
        field: str,
        referee: EntityKind,
        referee_index: int,
    ):
        self.referrer = referrer
        self.referrer_index = referrer_index
        self.field = field
        self.referee = referee
        self.referee_index = referee_index
        super().__init__(
            f"{referrer.value} #{referrer_index}: '{field}' refers to "
            f"{referee.value} #{referee_index}, which does not exist"
        )


class UnlinkError(TextmapError):
    """Raised when a graph level cannot be converted back to positional form."""

    pass


class IndexTooLargeError(UnlinkError):
    """An entity collection is too large to be addressed with 16-bit indices."""

    def __init__(self, kind: EntityKind, count: int, limit: int):
        self.kind = kind
        self.count = count
        self.limit = limit
        super().__init__(f"Too many {kind.value} entities to index: {count} (limit {limit})")


class InvalidKeyError(UnlinkError):
    """A reference names a key that is not present in the target collection."""

    def __init__(self, referrer: EntityKind, field: str, referee: EntityKind, key: object):
        self.referrer = referrer
        self.field = field
        self.referee = referee
        self.key = key
        super().__init__(
            f"{referrer.value}: '{field}' refers to unknown {referee.value} key {key!r}"
        )


# =============================================================================
# Output (writer)
# =============================================================================


class WriteError(TextmapError):
    """Raised when a level cannot be serialized to textmap form."""

    pass


class OutputError(WriteError):
    """The output stream rejected a write."""

    pass


class FixedStringEncodingError(WriteError):
    """A fixed identifier holds bytes that are not valid UTF-8."""

    def __init__(self, key: str, raw: bytes):
        self.key = key
        self.raw = raw
        super().__init__(f"Value of '{key}' is not valid UTF-8: {raw!r}")


class UnlinkFailedError(WriteError):
    """The graph could not be unlinked; the UnlinkError is the ``__cause__``."""

    def __init__(self, error: UnlinkError):
        self.error = error
        super().__init__(f"Cannot write level: {error.message}")
