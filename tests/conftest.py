"""Shared fixtures: an in-memory geometry kernel for testing the extractors without OCP."""

import math
from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Tuple

import pytest

from rapiddraft.curves import LineClass
from rapiddraft.kernel import GeometryKernel, KernelCurveType, KernelError


@dataclass
class FakeCurve:
    kind: KernelCurveType
    first: float
    last: float
    points: Tuple = ()  # line endpoints or spline samples
    center: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    radius: float = 0.0
    minor_radius: float = 0.0
    rotation: float = 0.0
    axis: Tuple[float, float, float] = (0.0, 0.0, 1.0)

    def evaluate(self, u: float):
        cx, cy, cz = self.center
        # a -Z axis runs the parameter clockwise
        turn = 1.0 if self.axis[2] > 0 else -1.0
        if self.kind is KernelCurveType.LINE:
            (x0, y0, z0), (x1, y1, z1) = self.points
            return (x0 + (x1 - x0) * u, y0 + (y1 - y0) * u, z0 + (z1 - z0) * u)
        if self.kind is KernelCurveType.CIRCLE:
            return (cx + self.radius * math.cos(u), cy + turn * self.radius * math.sin(u), cz)
        if self.kind is KernelCurveType.ELLIPSE:
            c, s = math.cos(self.rotation), math.sin(self.rotation)
            lx = self.radius * math.cos(u)
            ly = turn * self.minor_radius * math.sin(u)
            return (cx + lx * c - ly * s, cy + lx * s + ly * c, cz)
        return self.points[0] if u <= self.first else self.points[-1]


@dataclass
class FakeEdge:
    curve: Optional[FakeCurve]
    reversed: bool = False
    fail: bool = False


@dataclass
class FakeShape:
    faces: int = 6
    edges: int = 12
    null: bool = False
    groups: Dict[LineClass, List[FakeEdge]] = field(default_factory=dict)
    bbox: Optional[Tuple] = None
    # (closed wires, open wires); each wire is a list of 3D points
    section: Optional[Tuple[List, List]] = None
    fail_classify: bool = False
    fail_section: bool = False


class FakeKernel(GeometryKernel):
    def __init__(self):
        self.last_basis = None
        self.tessellate_calls = []

    def is_null(self, shape):
        return shape is None or shape.null

    def count_topology(self, shape):
        return shape.faces, shape.edges

    def classify_visibility(self, shape, basis):
        self.last_basis = basis
        if shape.fail_classify:
            raise KernelError("HLR failed.")
        return shape.groups

    def intersect_with_plane(self, shape, origin, normal):
        if shape.fail_section:
            raise KernelError("Section operation failed.")
        return shape.section

    def partition_closed_open(self, edges):
        closed, open_ = edges
        return list(closed), list(open_)

    def wire_points(self, wire):
        return list(wire)

    def curve_of(self, edge):
        if edge.fail:
            raise KernelError("Edge has no usable curve.")
        if edge.curve is None:
            return None
        return edge.curve, edge.curve.first, edge.curve.last

    def curve_type(self, curve):
        return curve.kind

    def evaluate(self, curve, parameter):
        return curve.evaluate(parameter)

    def circle_of(self, curve):
        return curve.center, curve.radius

    def ellipse_of(self, curve):
        direction = (math.cos(curve.rotation), math.sin(curve.rotation), 0.0)
        return curve.center, curve.radius, curve.minor_radius, direction

    def conic_axis(self, curve):
        return curve.axis

    def is_reversed(self, edge):
        return edge.reversed

    def tessellate(self, curve, first, last, chord_tolerance, angular_tolerance=0.1):
        self.tessellate_calls.append((chord_tolerance, angular_tolerance))
        return list(curve.points)

    def bounding_box_3d(self, shape):
        return shape.bbox


def line_edge(p0, p1, **kwargs) -> FakeEdge:
    curve = FakeCurve(KernelCurveType.LINE, 0.0, 1.0, points=(tuple(p0), tuple(p1)))
    return FakeEdge(curve, **kwargs)


def circle_edge(
    center, radius, first=0.0, last=2 * math.pi, axis=(0.0, 0.0, 1.0), **kwargs
) -> FakeEdge:
    curve = FakeCurve(
        KernelCurveType.CIRCLE, first, last, center=tuple(center), radius=radius, axis=axis
    )
    return FakeEdge(curve, **kwargs)


def ellipse_edge(
    center, major, minor, rotation=0.0, first=0.0, last=2 * math.pi, axis=(0.0, 0.0, 1.0), **kwargs
):
    curve = FakeCurve(
        KernelCurveType.ELLIPSE,
        first,
        last,
        center=tuple(center),
        radius=major,
        minor_radius=minor,
        rotation=rotation,
        axis=axis,
    )
    return FakeEdge(curve, **kwargs)


def spline_edge(points, **kwargs) -> FakeEdge:
    curve = FakeCurve(KernelCurveType.OTHER, 0.0, 1.0, points=tuple(tuple(p) for p in points))
    return FakeEdge(curve, **kwargs)


def square_loop(size: float, z: float = 0.0, ccw: bool = True) -> List[Tuple[float, float, float]]:
    h = size / 2.0
    loop = [(-h, -h, z), (h, -h, z), (h, h, z), (-h, h, z)]
    return loop if ccw else loop[::-1]


@pytest.fixture
def kernel() -> FakeKernel:
    return FakeKernel()


@pytest.fixture
def fake() -> Any:
    """Builders for fake shapes and edges."""
    return SimpleNamespace(
        Shape=FakeShape,
        Edge=FakeEdge,
        line_edge=line_edge,
        circle_edge=circle_edge,
        ellipse_edge=ellipse_edge,
        spline_edge=spline_edge,
        square_loop=square_loop,
    )
