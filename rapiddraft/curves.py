"""
2D drawing primitives produced by projection and sectioning.

Every primitive carries the :class:`LineClass` it was classified under. All
angles are radians.
"""

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Tuple, Union

from rapiddraft.cad_types import Point2D
from rapiddraft.constants import CLOSED_SWEEP_TOL, TWO_PI


class LineClass(Enum):
    """Visibility / role tag of a drawing primitive."""

    VISIBLE_SHARP = "visible_sharp"
    HIDDEN_SHARP = "hidden_sharp"
    VISIBLE_SMOOTH = "visible_smooth"
    HIDDEN_SMOOTH = "hidden_smooth"
    VISIBLE_OUTLINE = "visible_outline"
    HIDDEN_OUTLINE = "hidden_outline"
    # Section cut geometry
    VISIBLE = "visible"

    @property
    def is_visible(self) -> bool:
        return self not in HIDDEN_CLASSES

    @property
    def is_hidden(self) -> bool:
        return self in HIDDEN_CLASSES

    def svg_dash_array(self):
        return "4,2" if self.is_hidden else None

    def stroke_width(self) -> float:
        """Recommended stroke width in mm."""
        return _STROKE_WIDTHS[self]


HIDDEN_CLASSES = frozenset(
    {LineClass.HIDDEN_SHARP, LineClass.HIDDEN_SMOOTH, LineClass.HIDDEN_OUTLINE}
)

# Order in which the visibility groups are walked
HLR_CLASSES: Tuple[LineClass, ...] = (
    LineClass.VISIBLE_SHARP,
    LineClass.HIDDEN_SHARP,
    LineClass.VISIBLE_SMOOTH,
    LineClass.HIDDEN_SMOOTH,
    LineClass.VISIBLE_OUTLINE,
    LineClass.HIDDEN_OUTLINE,
)

_STROKE_WIDTHS = {
    LineClass.VISIBLE_SHARP: 0.5,
    LineClass.VISIBLE: 0.5,
    LineClass.VISIBLE_OUTLINE: 0.7,
    LineClass.HIDDEN_SHARP: 0.25,
    LineClass.VISIBLE_SMOOTH: 0.35,
    LineClass.HIDDEN_SMOOTH: 0.35,
    LineClass.HIDDEN_OUTLINE: 0.35,
}


class CurveKind(Enum):
    LINE = "line"
    ARC = "arc"
    ELLIPSE = "ellipse"
    POLYLINE = "polyline"


def _half_turn(angle: float) -> float:
    """``angle + pi`` wrapped back into (-pi, pi]."""
    turned = angle + math.pi
    return math.atan2(math.sin(turned), math.cos(turned))


def _transform_point(p: Point2D, factor: float, dx: float, dy: float) -> Point2D:
    return (p[0] * factor + dx, p[1] * factor + dy)


def distance(a: Point2D, b: Point2D) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


@dataclass(frozen=True)
class Line2D:
    start: Point2D
    end: Point2D
    line_class: LineClass = LineClass.VISIBLE_SHARP

    kind = CurveKind.LINE

    def length(self) -> float:
        return distance(self.start, self.end)

    def midpoint(self) -> Point2D:
        return (
            (self.start[0] + self.end[0]) / 2.0,
            (self.start[1] + self.end[1]) / 2.0,
        )

    def extent_points(self) -> List[Point2D]:
        return [self.start, self.end]

    def transformed(self, factor: float, dx: float = 0.0, dy: float = 0.0) -> "Line2D":
        return replace(
            self,
            start=_transform_point(self.start, factor, dx, dy),
            end=_transform_point(self.end, factor, dx, dy),
        )


@dataclass(frozen=True)
class Arc2D:
    """
    Circular arc or full circle.

    ``start_angle``/``end_angle`` are measured at the center. ``ccw`` is the
    orientation flag of the source edge. The arc covers the points from
    ``start`` to ``end`` in the curve's parameter direction, which runs
    counter-clockwise on the sheet unless the circle's axis pointed away
    from the viewer (``axis_flipped``).
    """

    center: Point2D
    radius: float
    start_angle: float
    end_angle: float
    start: Point2D
    end: Point2D
    full: bool = False
    ccw: bool = True
    line_class: LineClass = LineClass.VISIBLE_SHARP
    axis_flipped: bool = False

    kind = CurveKind.ARC

    @property
    def sheet_ccw(self) -> bool:
        """True when the arc runs counter-clockwise on the sheet from start to end."""
        return not self.axis_flipped

    def sweep(self) -> float:
        if self.full:
            return TWO_PI
        if self.sheet_ccw:
            span = self.end_angle - self.start_angle
        else:
            span = self.start_angle - self.end_angle
        span = span % TWO_PI
        # coincident endpoints on a non-full arc means a closed loop
        if span < CLOSED_SWEEP_TOL or span > TWO_PI - CLOSED_SWEEP_TOL:
            return TWO_PI
        return span

    def is_closed(self) -> bool:
        return self.sweep() == TWO_PI

    def length(self) -> float:
        return self.radius * self.sweep()

    def midpoint(self) -> Point2D:
        direction = 1.0 if self.sheet_ccw else -1.0
        angle = self.start_angle + direction * self.sweep() / 2.0
        return (
            self.center[0] + self.radius * math.cos(angle),
            self.center[1] + self.radius * math.sin(angle),
        )

    def extent_points(self) -> List[Point2D]:
        cx, cy = self.center
        r = self.radius
        return [(cx - r, cy - r), (cx + r, cy + r)]

    def transformed(self, factor: float, dx: float = 0.0, dy: float = 0.0) -> "Arc2D":
        start_angle, end_angle = self.start_angle, self.end_angle
        if factor < 0:
            # a negative uniform scale is a half turn
            start_angle, end_angle = _half_turn(start_angle), _half_turn(end_angle)
        return replace(
            self,
            center=_transform_point(self.center, factor, dx, dy),
            radius=self.radius * abs(factor),
            start_angle=start_angle,
            end_angle=end_angle,
            start=_transform_point(self.start, factor, dx, dy),
            end=_transform_point(self.end, factor, dx, dy),
        )


@dataclass(frozen=True)
class Ellipse2D:
    """
    Ellipse or elliptical arc.

    ``rotation`` is the angle of the major axis from +X. ``start_angle`` and
    ``end_angle`` are the curve parameters of the source edge, negated when
    the ellipse's axis pointed away from the viewer, so that
    :meth:`point_at` always returns the sheet position. The arc runs from
    ``start_angle`` to ``end_angle``: counter-clockwise on the sheet unless
    ``axis_flipped``.
    """

    center: Point2D
    major_radius: float
    minor_radius: float
    rotation: float
    start_angle: float
    end_angle: float
    start: Point2D
    end: Point2D
    ccw: bool = True
    line_class: LineClass = LineClass.VISIBLE_SHARP
    axis_flipped: bool = False

    kind = CurveKind.ELLIPSE

    @property
    def sheet_ccw(self) -> bool:
        return not self.axis_flipped

    def point_at(self, t: float) -> Point2D:
        cos_r, sin_r = math.cos(self.rotation), math.sin(self.rotation)
        lx = self.major_radius * math.cos(t)
        ly = self.minor_radius * math.sin(t)
        return (
            self.center[0] + lx * cos_r - ly * sin_r,
            self.center[1] + lx * sin_r + ly * cos_r,
        )

    def span(self) -> float:
        return min(abs(self.end_angle - self.start_angle), TWO_PI)

    def is_closed(self) -> bool:
        return self.span() >= TWO_PI - CLOSED_SWEEP_TOL

    def extent_points(self) -> List[Point2D]:
        cx, cy = self.center
        r = self.major_radius
        return [(cx - r, cy - r), (cx + r, cy + r)]

    def transformed(self, factor: float, dx: float = 0.0, dy: float = 0.0) -> "Ellipse2D":
        rotation = _half_turn(self.rotation) if factor < 0 else self.rotation
        return replace(
            self,
            center=_transform_point(self.center, factor, dx, dy),
            major_radius=self.major_radius * abs(factor),
            minor_radius=self.minor_radius * abs(factor),
            rotation=rotation,
            start=_transform_point(self.start, factor, dx, dy),
            end=_transform_point(self.end, factor, dx, dy),
        )

    def length(self) -> float:
        # Ramanujan's perimeter approximation, prorated by the parameter span
        a, b = self.major_radius, self.minor_radius
        h = ((a - b) ** 2) / ((a + b) ** 2) if (a + b) > 0 else 0.0
        perimeter = math.pi * (a + b) * (1 + 3 * h / (10 + math.sqrt(4 - 3 * h)))
        return perimeter * self.span() / TWO_PI


@dataclass(frozen=True)
class Polyline2D:
    """Tessellated free-form curve (B-spline, Bezier, offset, ...)."""

    points: Tuple[Point2D, ...]
    line_class: LineClass = LineClass.VISIBLE_SHARP

    kind = CurveKind.POLYLINE

    def length(self) -> float:
        return sum(distance(a, b) for a, b in zip(self.points, self.points[1:]))

    def extent_points(self) -> List[Point2D]:
        return list(self.points)

    def transformed(self, factor: float, dx: float = 0.0, dy: float = 0.0) -> "Polyline2D":
        return replace(
            self, points=tuple(_transform_point(p, factor, dx, dy) for p in self.points)
        )


Curve2D = Union[Line2D, Arc2D, Ellipse2D, Polyline2D]


def endpoints(curve: Curve2D) -> Tuple[Point2D, Point2D]:
    if isinstance(curve, Polyline2D):
        return curve.points[0], curve.points[-1]
    if isinstance(curve, (Line2D, Arc2D, Ellipse2D)):
        return curve.start, curve.end
    raise TypeError(f"Unsupported curve type: {type(curve).__name__}")


def to_line_segments(curve: Curve2D) -> List[Line2D]:
    """Flatten a curve to straight segments (arcs and ellipses become chords)."""
    if isinstance(curve, Line2D):
        return [curve]
    if isinstance(curve, (Arc2D, Ellipse2D)):
        return [Line2D(curve.start, curve.end, curve.line_class)]
    if isinstance(curve, Polyline2D):
        return [
            Line2D(a, b, curve.line_class) for a, b in zip(curve.points, curve.points[1:])
        ]
    raise TypeError(f"Unsupported curve type: {type(curve).__name__}")
