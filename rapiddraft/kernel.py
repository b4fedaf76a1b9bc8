"""
Abstract geometry-kernel interface.

The extractors only ever talk to the kernel through this small query surface,
so any B-rep backend (OpenCascade via OCP, a test double, ...) can be plugged
in by subclassing :class:`GeometryKernel`.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from rapiddraft.cad_types import Point3D
from rapiddraft.constants import ANGULAR_DEFLECTION
from rapiddraft.curves import LineClass
from rapiddraft.view_basis import ViewBasis


class KernelError(RuntimeError):
    """A kernel operation failed or reported not-done."""


class KernelCurveType(Enum):
    LINE = "line"
    CIRCLE = "circle"
    ELLIPSE = "ellipse"
    OTHER = "other"


VisibilityGroups = Dict[LineClass, List[Any]]


class GeometryKernel(ABC):
    """
    Query interface of a B-rep geometry kernel.

    Shapes, edges, wires and curves are opaque handles owned by the backend.
    Methods may raise; the extractors catch failures at their stage
    boundaries.
    """

    @abstractmethod
    def is_null(self, shape: Any) -> bool:
        pass

    @abstractmethod
    def count_topology(self, shape: Any) -> Tuple[int, int]:
        """Return ``(number_of_faces, number_of_edges)``."""
        pass

    @abstractmethod
    def classify_visibility(self, shape: Any, basis: ViewBasis) -> VisibilityGroups:
        """
        Run hidden-line removal for a view.

        Args:
            shape: Shape handle
            basis: Projection frame; ``basis.forward`` is the view direction and
                ``basis.x_axis`` the sheet X axis

        Returns:
            Edges keyed by the six HLR line classes. The edges lie in the
            projection plane: their (x, y) coordinates are sheet coordinates.
        """
        pass

    @abstractmethod
    def intersect_with_plane(
        self, shape: Any, origin: Point3D, normal: Point3D
    ) -> Optional[Any]:
        """Intersect a shape with a plane, returning the section edges or None."""
        pass

    @abstractmethod
    def partition_closed_open(self, edges: Any) -> Tuple[List[Any], List[Any]]:
        """Chain section edges into wires and split them into ``(closed, open)``."""
        pass

    @abstractmethod
    def wire_points(self, wire: Any) -> List[Point3D]:
        """Ordered vertex positions along a wire."""
        pass

    @abstractmethod
    def curve_of(self, edge: Any) -> Optional[Tuple[Any, float, float]]:
        """Return ``(curve, first_parameter, last_parameter)`` or None for edges without a 3D curve."""
        pass

    @abstractmethod
    def curve_type(self, curve: Any) -> KernelCurveType:
        pass

    @abstractmethod
    def evaluate(self, curve: Any, parameter: float) -> Point3D:
        pass

    @abstractmethod
    def circle_of(self, curve: Any) -> Tuple[Point3D, float]:
        """Return ``(center, radius)`` of a circular curve."""
        pass

    @abstractmethod
    def ellipse_of(self, curve: Any) -> Tuple[Point3D, float, float, Point3D]:
        """Return ``(center, major_radius, minor_radius, major_axis_direction)``."""
        pass

    @abstractmethod
    def conic_axis(self, curve: Any) -> Point3D:
        """
        Main axis of a circle or ellipse.

        Projected curves live in the sheet frame, so the axis is ``(0, 0, 1)``
        when the curve parameter runs counter-clockwise on the sheet and
        ``(0, 0, -1)`` when it runs clockwise.
        """
        pass

    @abstractmethod
    def is_reversed(self, edge: Any) -> bool:
        pass

    @abstractmethod
    def tessellate(
        self,
        curve: Any,
        first: float,
        last: float,
        chord_tolerance: float,
        angular_tolerance: float = ANGULAR_DEFLECTION,
    ) -> Sequence[Point3D]:
        """Sample a curve by tangential deflection."""
        pass

    @abstractmethod
    def bounding_box_3d(self, shape: Any) -> Optional[Tuple[Point3D, Point3D]]:
        """Return ``(min, max)`` corners, or None for a void box."""
        pass

    @classmethod
    def is_available(cls) -> bool:
        """Whether this backend's dependencies can be imported."""
        return True

    @classmethod
    def get_name(cls) -> str:
        return cls.__name__
