"""
Fixed-capacity 8-byte names.

Texture and flat names are stored as eight bytes padded with NULs, the way
the binary level lumps lay them out. Only a trailing run of NULs is allowed.
"""

from __future__ import annotations

from .errors import TextmapError

CAPACITY = 8


class FixedStringError(TextmapError, ValueError):
    """Base for fixed-string construction failures."""

    pass


class TooLongError(FixedStringError):
    """The value is longer than eight bytes."""

    def __init__(self, length: int):
        self.length = length
        super().__init__(f"Longer than {CAPACITY} bytes ({length} bytes)")


class InteriorNulError(FixedStringError):
    """The value contains a NUL byte before its trailing padding."""

    def __init__(self, position: int):
        self.position = position
        super().__init__(f"Interior NUL byte at position {position}")


class FixedString:
    """
    An 8-byte NUL-padded identifier.

    Examples:
        FixedString.from_str("STONE2").to_str() == "STONE2"
        FixedString.from_str("TOOLONGNAME")  # raises TooLongError
    """

    __slots__ = ("_data",)

    def __init__(self, data: bytes = b""):
        self._data = _validate(data).ljust(CAPACITY, b"\0")

    @classmethod
    def from_str(cls, value: str) -> FixedString:
        return cls(value.encode("utf-8"))

    @classmethod
    def from_bytes(cls, value: bytes) -> FixedString:
        return cls(value)

    @classmethod
    def from_raw(cls, data: bytes) -> FixedString:
        """
        Wrap up to eight raw bytes without validation.

        Longer input is truncated. Used for data read from binary lumps,
        which may hold arbitrary bytes.
        """
        instance = cls.__new__(cls)
        instance._data = bytes(data[:CAPACITY]).ljust(CAPACITY, b"\0")
        return instance

    @property
    def raw(self) -> bytes:
        """All eight bytes, padding included."""
        return self._data

    def as_bytes(self) -> bytes:
        """The bytes before the trailing NUL padding."""
        return self._data.rstrip(b"\0")

    def to_str(self) -> str:
        """
        Checked projection to ``str``.

        Raises:
            UnicodeDecodeError: If the stored bytes are not valid UTF-8
        """
        return self.as_bytes().decode("utf-8")

    def __len__(self) -> int:
        return len(self.as_bytes())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FixedString):
            return self._data == other._data
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._data)

    def __str__(self) -> str:
        return self.as_bytes().decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return f"FixedString({self.as_bytes()!r})"


def _validate(data: bytes) -> bytes:
    if len(data) > CAPACITY:
        raise TooLongError(len(data))
    trimmed = data.rstrip(b"\0")
    position = trimmed.find(b"\0")
    if position != -1:
        raise InteriorNulError(position)
    return trimmed
