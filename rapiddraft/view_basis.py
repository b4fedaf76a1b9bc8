"""
Orthonormal 2D drawing frames derived from a 3D view or plane-normal direction.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

import numpy as np

from rapiddraft.cad_types import Point2D, Vector, VectorLike
from rapiddraft.constants import ZERO_VECTOR_TOL

logger = logging.getLogger(__name__)

_FALLBACK_X_AXES = (Vector(1, 0, 0), Vector(0, 1, 0))


@dataclass(frozen=True)
class ViewBasis:
    """
    A right-handed drawing frame.

    ``forward`` is the viewing direction (or the section-plane normal),
    ``x_axis`` points right on the sheet and ``y_axis = forward × x_axis``
    points up on the sheet.
    """

    origin: Vector
    forward: Vector
    up: Vector
    x_axis: Vector
    y_axis: Vector

    @classmethod
    def from_vectors(
        cls,
        direction: VectorLike,
        up: VectorLike,
        origin: VectorLike = (0.0, 0.0, 0.0),
    ) -> Optional["ViewBasis"]:
        """
        Build a frame from a view direction and an up vector.

        Args:
            direction: View direction or plane normal (need not be unit length)
            up: Up hint; only its component perpendicular to ``direction`` matters
            origin: Frame origin used by :meth:`project`

        Returns:
            The frame, or None when ``direction`` or ``up`` has zero length
        """
        d = Vector.of(direction)
        u = Vector.of(up)
        if d.is_zero():
            logger.warning(f"Invalid view direction (zero length): {d.to_tuple()}")
            return None
        if u.is_zero():
            logger.warning(f"Invalid up direction (zero length): {u.to_tuple()}")
            return None

        forward = d.normalize()
        x_raw = u.cross(forward)
        if x_raw.is_zero():
            logger.warning(
                "View and up directions are parallel, using fallback X axis"
            )
            x_axis = _fallback_x_axis(forward)
        else:
            x_axis = x_raw.normalize()
        y_axis = forward.cross(x_axis).normalize()

        return cls(
            origin=Vector.of(origin),
            forward=forward,
            up=u.normalize(),
            x_axis=x_axis,
            y_axis=y_axis,
        )

    def project(self, point: VectorLike) -> Point2D:
        """Project a 3D point onto the frame: ``((P - O)·x, (P - O)·y)``."""
        v = np.asarray(Vector.of(point)) - np.asarray(self.origin)
        return (
            float(np.dot(v, np.asarray(self.x_axis))),
            float(np.dot(v, np.asarray(self.y_axis))),
        )

    def project_all(self, points: Iterable[VectorLike]) -> List[Point2D]:
        return [self.project(p) for p in points]


def _fallback_x_axis(forward: Vector) -> Vector:
    # (1,0,0) unless it is parallel to forward; orthogonalised so the frame stays orthonormal
    for candidate in _FALLBACK_X_AXES:
        ortho = Vector(*(np.asarray(candidate) - candidate.dot(forward) * np.asarray(forward)))
        if ortho.length() > ZERO_VECTOR_TOL:
            return ortho.normalize()
    return Vector(1, 0, 0)
