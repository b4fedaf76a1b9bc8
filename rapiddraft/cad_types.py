from typing import Sequence, Tuple, Union

import numpy as np

from rapiddraft.constants import ZERO_VECTOR_TOL

Point2D = Tuple[float, float]
Point3D = Tuple[float, float, float]


class Vector(np.ndarray):
    def __new__(cls, x: float, y: float, z: float = 0) -> "Vector":
        return np.asarray([x, y, z], dtype=float).view(cls)

    @classmethod
    def of(cls, value: "VectorLike") -> "Vector":
        if isinstance(value, Vector):
            return value
        values = [float(v) for v in value]
        if len(values) == 2:
            values.append(0.0)
        if len(values) != 3:
            raise ValueError(f"Expected 2 or 3 components, got {len(values)}")
        return cls(*values)

    def __eq__(self, other: object) -> bool:
        return np.allclose(self, other)

    def __hash__(self):
        return hash(tuple(round(float(v), 9) for v in self))

    def length(self) -> float:
        return float(np.linalg.norm(self))

    def is_zero(self, tol: float = ZERO_VECTOR_TOL) -> bool:
        return self.length() < tol

    def normalize(self) -> "Vector":
        return Vector(*(np.asarray(self) / self.length()))

    def cross(self, other: "VectorLike") -> "Vector":
        return Vector(*np.cross(np.asarray(self), np.asarray(Vector.of(other))))

    def dot(self, other: "VectorLike") -> float:
        return float(np.dot(np.asarray(self), np.asarray(Vector.of(other))))

    def to_tuple(self) -> Point3D:
        return (float(self[0]), float(self[1]), float(self[2]))

    @property
    def x(self):
        return float(self[0])

    @property
    def y(self):
        return float(self[1])

    @property
    def z(self):
        return float(self[2])


VectorLike = Union[Tuple[float, float], Tuple[float, float, float], Sequence[float], Vector]
