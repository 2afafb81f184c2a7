"""
Numeric literals that may be either integers or floats.

The binary level format stores coordinates as 16-bit integers while the
textmap format specifies floats (integers are accepted in practice). This
type lets both spellings flow through the compiler without losing precision.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, field_validator

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class Number(BaseModel):
    """
    A numeric literal: exactly one of a 32-bit signed int or a 64-bit float.

    The Python type of ``value`` is the tag: ``int`` for Int, ``float`` for Float.
    """

    value: int | float

    model_config = ConfigDict(frozen=True, strict=True)

    @field_validator("value")
    @classmethod
    def validate_int_width(cls, v: int | float) -> int | float:
        if isinstance(v, bool):
            raise ValueError("bool is not a numeric literal")
        if isinstance(v, int) and not INT32_MIN <= v <= INT32_MAX:
            raise ValueError(f"integer literal {v} does not fit in 32 bits")
        return v

    @classmethod
    def int_(cls, value: int) -> Number:
        return cls(value=value)

    @classmethod
    def float_(cls, value: float) -> Number:
        return cls(value=float(value))

    @property
    def is_int(self) -> bool:
        return isinstance(self.value, int)

    @property
    def is_float(self) -> bool:
        return isinstance(self.value, float)

    def as_int(self) -> int | None:
        """The integer payload, or None for a Float."""
        return self.value if isinstance(self.value, int) else None

    def as_float(self) -> float | None:
        """The float payload, or None for an Int."""
        return self.value if isinstance(self.value, float) else None

    def into_int(self) -> int:
        """Truncating conversion to int."""
        return int(self.value)

    def into_float(self) -> float:
        return float(self.value)

    def is_zero(self) -> bool:
        return self.value == 0

    def has_fraction(self) -> bool:
        """True if a Float has a non-zero fractional part (or is not finite)."""
        if isinstance(self.value, int):
            return False
        return not math.isfinite(self.value) or not self.value.is_integer()

    def __str__(self) -> str:
        return repr(self.value) if isinstance(self.value, float) else str(self.value)
