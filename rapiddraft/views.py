"""
Standard drawing views and section-plane presets.
"""

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple

from rapiddraft.cad_types import Point3D

_INV_SQRT3 = 1.0 / math.sqrt(3.0)
_INV_SQRT6 = 1.0 / math.sqrt(6.0)


class ProjectionType(Enum):
    """
    Named drawing views.

    :meth:`get_vectors` returns ``(direction, up)``. ``direction`` becomes the
    main axis of the HLR projector, whose viewer sits on the positive side
    of that axis. ``up`` is the sheet-up hint.
    """

    TOP = "top"
    BOTTOM = "bottom"
    FRONT = "front"
    BACK = "back"
    RIGHT = "right"
    LEFT = "left"
    ISOMETRIC_SW = "isometric_sw"
    ISOMETRIC_SE = "isometric_se"
    ISOMETRIC_NE = "isometric_ne"
    ISOMETRIC_NW = "isometric_nw"

    # Default isometric is the SW (front-right) view
    ISOMETRIC = "isometric_sw"

    @property
    def is_isometric(self) -> bool:
        return self.value.startswith("isometric")

    def get_vectors(self) -> Tuple[Point3D, Point3D]:
        """Return ``(view_direction, up)`` for this view."""
        return _VIEW_VECTORS[self]

    @property
    def label(self) -> str:
        return _VIEW_LABELS[self]


_VIEW_VECTORS = {
    ProjectionType.TOP: ((0.0, 0.0, -1.0), (0.0, 1.0, 0.0)),
    ProjectionType.BOTTOM: ((0.0, 0.0, 1.0), (0.0, 1.0, 0.0)),
    ProjectionType.FRONT: ((0.0, -1.0, 0.0), (0.0, 0.0, 1.0)),
    ProjectionType.BACK: ((0.0, 1.0, 0.0), (0.0, 0.0, 1.0)),
    ProjectionType.RIGHT: ((-1.0, 0.0, 0.0), (0.0, 0.0, 1.0)),
    ProjectionType.LEFT: ((1.0, 0.0, 0.0), (0.0, 0.0, 1.0)),
    # Main axis along (-X, -Y, -Z)
    ProjectionType.ISOMETRIC_SW: (
        (-_INV_SQRT3, -_INV_SQRT3, -_INV_SQRT3),
        (-_INV_SQRT6, -_INV_SQRT6, 2.0 * _INV_SQRT6),
    ),
    # Main axis along (+X, -Y, -Z)
    ProjectionType.ISOMETRIC_SE: (
        (_INV_SQRT3, -_INV_SQRT3, -_INV_SQRT3),
        (_INV_SQRT6, -_INV_SQRT6, 2.0 * _INV_SQRT6),
    ),
    # Main axis along (+X, +Y, -Z)
    ProjectionType.ISOMETRIC_NE: (
        (_INV_SQRT3, _INV_SQRT3, -_INV_SQRT3),
        (_INV_SQRT6, _INV_SQRT6, 2.0 * _INV_SQRT6),
    ),
    # Main axis along (-X, +Y, -Z)
    ProjectionType.ISOMETRIC_NW: (
        (-_INV_SQRT3, _INV_SQRT3, -_INV_SQRT3),
        (-_INV_SQRT6, _INV_SQRT6, 2.0 * _INV_SQRT6),
    ),
}

_VIEW_LABELS = {
    ProjectionType.TOP: "TOP",
    ProjectionType.BOTTOM: "BOTTOM",
    ProjectionType.FRONT: "FRONT",
    ProjectionType.BACK: "BACK",
    ProjectionType.RIGHT: "RIGHT",
    ProjectionType.LEFT: "LEFT",
    ProjectionType.ISOMETRIC_SW: "ISOMETRIC SW",
    ProjectionType.ISOMETRIC_SE: "ISOMETRIC SE",
    ProjectionType.ISOMETRIC_NE: "ISOMETRIC NE",
    ProjectionType.ISOMETRIC_NW: "ISOMETRIC NW",
}

STANDARD_VIEWS = (
    ProjectionType.TOP,
    ProjectionType.FRONT,
    ProjectionType.RIGHT,
    ProjectionType.ISOMETRIC,
)


@dataclass(frozen=True)
class CustomView:
    """An arbitrary view direction with its up vector."""

    direction: Point3D
    up: Point3D = (0.0, 0.0, 1.0)
    label: str = "CUSTOM"

    def get_vectors(self) -> Tuple[Point3D, Point3D]:
        return self.direction, self.up


@dataclass(frozen=True)
class SectionPlane:
    """
    A cutting plane.

    ``normal`` is the forward axis of the section's sheet frame (sheet x is
    ``up x normal``) and ``up`` is the sheet-up direction of the 2D result.
    """

    origin: Point3D
    normal: Point3D
    up: Point3D = (0.0, 0.0, 1.0)
    label: str = "A"
    depth: Optional[float] = field(default=None)

    @classmethod
    def horizontal(cls, z: float, label: str = "A") -> "SectionPlane":
        """Horizontal section at height ``z``: normal -Z, sheet up +Y."""
        return cls((0.0, 0.0, z), (0.0, 0.0, -1.0), (0.0, 1.0, 0.0), label)

    @classmethod
    def longitudinal(cls, y: float, label: str = "A") -> "SectionPlane":
        """Vertical section at ``y``: normal -Y, sheet up +Z."""
        return cls((0.0, y, 0.0), (0.0, -1.0, 0.0), (0.0, 0.0, 1.0), label)

    @classmethod
    def transversal(cls, x: float, label: str = "A") -> "SectionPlane":
        """Vertical section at ``x``: normal -X, sheet up +Z."""
        return cls((x, 0.0, 0.0), (-1.0, 0.0, 0.0), (0.0, 0.0, 1.0), label)

    @classmethod
    def angled(cls, origin: Point3D, angle_deg: float, label: str = "A") -> "SectionPlane":
        """Vertical plane whose normal is rotated ``angle_deg`` about Z from +X."""
        a = math.radians(angle_deg)
        return cls(tuple(origin), (math.cos(a), math.sin(a), 0.0), (0.0, 0.0, 1.0), label)

    def with_depth(self, depth: float) -> "SectionPlane":
        return replace(self, depth=depth)

    def full_label(self) -> str:
        return f"{self.label}-{self.label}"
