"""Two-dimensional points, generic over their coordinate representation."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class Point(BaseModel, Generic[T]):
    """A 2-tuple ``(x, y)``; ``Point[int]`` once coordinates are 16-bit integers."""

    x: T
    y: T

    model_config = ConfigDict(frozen=True)

    def as_tuple(self) -> tuple[T, T]:
        return (self.x, self.y)
