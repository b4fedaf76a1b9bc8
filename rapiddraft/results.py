"""
Results of projection and section extraction, plus post-processing helpers
(scaling, fitting to a sheet, merging and simplifying).
"""

import math
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple

from rapiddraft.bbox import BoundingBox2D
from rapiddraft.cad_types import Point2D
from rapiddraft.config import HatchConfig, HatchPattern
from rapiddraft.curves import (
    Arc2D,
    Curve2D,
    CurveKind,
    Ellipse2D,
    Line2D,
    LineClass,
    Polyline2D,
    distance,
    to_line_segments,
)
from rapiddraft.views import SectionPlane


@dataclass(frozen=True)
class ProjectionResult:
    curves: Tuple[Curve2D, ...] = ()
    bounding_box: BoundingBox2D = field(default_factory=BoundingBox2D.zero)
    scale: float = 1.0
    label: str = ""
    used_fallback: bool = False

    @classmethod
    def empty(cls, scale: float = 1.0, label: str = "") -> "ProjectionResult":
        return cls(scale=scale, label=label)

    @property
    def is_empty(self) -> bool:
        return not self.curves

    def _count(self, kind: CurveKind) -> int:
        return sum(1 for c in self.curves if c.kind is kind)

    @property
    def num_lines(self) -> int:
        return self._count(CurveKind.LINE)

    @property
    def num_arcs(self) -> int:
        return self._count(CurveKind.ARC)

    @property
    def num_ellipses(self) -> int:
        return self._count(CurveKind.ELLIPSE)

    @property
    def num_polylines(self) -> int:
        return self._count(CurveKind.POLYLINE)

    def visible_curves(self) -> List[Curve2D]:
        return [c for c in self.curves if c.line_class.is_visible]

    def hidden_curves(self) -> List[Curve2D]:
        return [c for c in self.curves if c.line_class.is_hidden]

    def curves_by_class(self, line_class: LineClass) -> List[Curve2D]:
        return [c for c in self.curves if c.line_class is line_class]

    def curves_by_kind(self, kind: CurveKind) -> List[Curve2D]:
        return [c for c in self.curves if c.kind is kind]

    def as_line_segments(self) -> List[Line2D]:
        """Every curve flattened to straight segments, in emission order."""
        segments: List[Line2D] = []
        for curve in self.curves:
            segments.extend(to_line_segments(curve))
        return segments

    def transformed(self, factor: float, dx: float = 0.0, dy: float = 0.0) -> "ProjectionResult":
        if self.is_empty:
            return replace(self, scale=self.scale * factor)
        return replace(
            self,
            curves=tuple(c.transformed(factor, dx, dy) for c in self.curves),
            bounding_box=self.bounding_box.scaled(factor).translated(dx, dy),
            scale=self.scale * factor,
        )

    def scaled(self, factor: float) -> "ProjectionResult":
        return self.transformed(factor)

    def to_json(self):
        return {
            "label": self.label,
            "scale": self.scale,
            "used_fallback": self.used_fallback,
            "bounding_box": self.bounding_box.to_json(),
            "num_lines": self.num_lines,
            "num_arcs": self.num_arcs,
            "num_ellipses": self.num_ellipses,
            "num_polylines": self.num_polylines,
        }


@dataclass(frozen=True)
class HatchSegment:
    start: Point2D
    end: Point2D

    def length(self) -> float:
        return distance(self.start, self.end)

    def midpoint(self) -> Point2D:
        return (
            (self.start[0] + self.end[0]) / 2.0,
            (self.start[1] + self.end[1]) / 2.0,
        )

    def angle(self) -> float:
        return math.atan2(self.end[1] - self.start[1], self.end[0] - self.start[0])


@dataclass(frozen=True)
class SectionCurve:
    points: Tuple[Point2D, ...]
    is_closed: bool
    is_outer: bool = True
    line_class: LineClass = LineClass.VISIBLE

    def as_polyline(self) -> Polyline2D:
        points = self.points + (self.points[0],) if self.is_closed else self.points
        return Polyline2D(points, self.line_class)


@dataclass(frozen=True)
class Region:
    """A closed section loop and the hatch strokes that fill it."""

    boundary: Tuple[Point2D, ...]
    area: float
    is_outer: bool
    hatch_segments: Tuple[HatchSegment, ...] = ()


@dataclass(frozen=True)
class SectionResult:
    plane: Optional[SectionPlane] = None
    curves: Tuple[SectionCurve, ...] = ()
    regions: Tuple[Region, ...] = ()
    bounding_box: BoundingBox2D = field(default_factory=BoundingBox2D.zero)
    # None for an unhatched section view
    hatch: Optional[HatchConfig] = None

    @classmethod
    def empty(
        cls, plane: Optional[SectionPlane] = None, hatch: Optional[HatchConfig] = None
    ) -> "SectionResult":
        return cls(plane=plane, hatch=hatch)

    @property
    def pattern(self) -> HatchPattern:
        return self.hatch.pattern if self.hatch is not None else HatchPattern.NONE

    @property
    def is_empty(self) -> bool:
        return not self.curves

    @property
    def num_regions(self) -> int:
        return len(self.regions)

    @property
    def total_hatch_lines(self) -> int:
        return sum(len(r.hatch_segments) for r in self.regions)

    @property
    def label(self) -> str:
        return self.plane.full_label() if self.plane is not None else ""

    def closed_curves(self) -> List[SectionCurve]:
        return [c for c in self.curves if c.is_closed]

    def open_curves(self) -> List[SectionCurve]:
        return [c for c in self.curves if not c.is_closed]

    def hatch_segments(self) -> List[HatchSegment]:
        return [s for r in self.regions for s in r.hatch_segments]

    def to_json(self):
        return {
            "label": self.label,
            "bounding_box": self.bounding_box.to_json(),
            "num_curves": len(self.curves),
            "num_regions": self.num_regions,
            "total_hatch_lines": self.total_hatch_lines,
            "hatch": self.hatch.to_json() if self.hatch is not None else None,
        }


def fit_to_view(
    result: ProjectionResult, width: float, height: float, margin: float = 0.0
) -> ProjectionResult:
    """
    Uniformly scale and translate a projection so it is centered inside a
    ``width`` x ``height`` sheet with ``margin`` on every side.

    Returns the result unchanged when it has no extent.
    """
    box = result.bounding_box
    if result.is_empty or box.is_empty:
        return result

    available_w = width - 2 * margin
    available_h = height - 2 * margin
    factors = []
    if box.width > 0:
        factors.append(available_w / box.width)
    if box.height > 0:
        factors.append(available_h / box.height)
    if not factors:
        return result
    factor = min(factors)

    dx = margin + (available_w - box.width * factor) / 2.0 - box.min_x * factor
    dy = margin + (available_h - box.height * factor) / 2.0 - box.min_y * factor
    return result.transformed(factor, dx, dy)


def merge_projections(results: Sequence[ProjectionResult], label: str = "") -> ProjectionResult:
    """Concatenate several projections into one, in order."""
    curves: List[Curve2D] = []
    box = BoundingBox2D.empty()
    for r in results:
        curves.extend(r.curves)
        if not r.is_empty:
            box = box.merge(r.bounding_box)
    return ProjectionResult(
        curves=tuple(curves),
        bounding_box=box.or_zero(),
        scale=1.0,
        label=label,
        used_fallback=any(r.used_fallback for r in results),
    )


def simplify(result: ProjectionResult, min_length: float) -> ProjectionResult:
    """Drop curves shorter than ``min_length``; the bounding box is recomputed."""
    kept = tuple(c for c in result.curves if c.length() >= min_length)
    box = BoundingBox2D.empty()
    for c in kept:
        box = box.include_curve(c)
    return replace(result, curves=kept, bounding_box=box.or_zero())


def curve_summary(curves: Sequence[Curve2D]) -> str:
    lines = sum(isinstance(c, Line2D) for c in curves)
    arcs = sum(isinstance(c, Arc2D) for c in curves)
    ellipses = sum(isinstance(c, Ellipse2D) for c in curves)
    polylines = sum(isinstance(c, Polyline2D) for c in curves)
    return f"{lines} lines, {arcs} arcs, {ellipses} ellipses, {polylines} polylines"
