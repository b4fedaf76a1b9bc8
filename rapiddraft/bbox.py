"""
Running 2D bounding box.

The box is an immutable value: every ``include_*`` call returns a new box, so
extraction stages fold it through their return values instead of mutating
shared state.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Tuple

from rapiddraft.cad_types import Point2D
from rapiddraft.curves import Curve2D


@dataclass(frozen=True)
class BoundingBox2D:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def empty(cls) -> "BoundingBox2D":
        return cls(math.inf, math.inf, -math.inf, -math.inf)

    @classmethod
    def zero(cls) -> "BoundingBox2D":
        return cls(0.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_points(cls, points: Iterable[Point2D]) -> "BoundingBox2D":
        return cls.empty().include_points(points)

    @property
    def is_empty(self) -> bool:
        return self.min_x > self.max_x or self.min_y > self.max_y

    @property
    def min(self) -> Point2D:
        return (self.min_x, self.min_y)

    @property
    def max(self) -> Point2D:
        return (self.max_x, self.max_y)

    def include_point(self, point: Point2D) -> "BoundingBox2D":
        x, y = point
        return BoundingBox2D(
            min(self.min_x, x),
            min(self.min_y, y),
            max(self.max_x, x),
            max(self.max_y, y),
        )

    def include_points(self, points: Iterable[Point2D]) -> "BoundingBox2D":
        box = self
        for p in points:
            box = box.include_point(p)
        return box

    def include_curve(self, curve: Curve2D) -> "BoundingBox2D":
        """Grow by a curve's extent (circles and ellipses via ``center ± radius``)."""
        return self.include_points(curve.extent_points())

    def merge(self, other: "BoundingBox2D") -> "BoundingBox2D":
        if other.is_empty:
            return self
        if self.is_empty:
            return other
        return self.include_points([other.min, other.max])

    def scaled(self, factor: float) -> "BoundingBox2D":
        if self.is_empty:
            return self
        return BoundingBox2D.from_points(
            [
                (self.min_x * factor, self.min_y * factor),
                (self.max_x * factor, self.max_y * factor),
            ]
        )

    def translated(self, dx: float, dy: float) -> "BoundingBox2D":
        if self.is_empty:
            return self
        return BoundingBox2D(
            self.min_x + dx, self.min_y + dy, self.max_x + dx, self.max_y + dy
        )

    def expand(self, margin: float) -> "BoundingBox2D":
        if self.is_empty:
            return self
        return BoundingBox2D(
            self.min_x - margin,
            self.min_y - margin,
            self.max_x + margin,
            self.max_y + margin,
        )

    def or_zero(self) -> "BoundingBox2D":
        """The zero rectangle when nothing was accumulated, otherwise self."""
        return BoundingBox2D.zero() if self.is_empty else self

    @property
    def width(self) -> float:
        return 0.0 if self.is_empty else self.max_x - self.min_x

    @property
    def height(self) -> float:
        return 0.0 if self.is_empty else self.max_y - self.min_y

    @property
    def diagonal(self) -> float:
        return math.hypot(self.width, self.height)

    @property
    def center(self) -> Point2D:
        if self.is_empty:
            return (0.0, 0.0)
        return ((self.min_x + self.max_x) / 2.0, (self.min_y + self.max_y) / 2.0)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    def to_json(self):
        return {"min": list(self.min), "max": list(self.max)}
