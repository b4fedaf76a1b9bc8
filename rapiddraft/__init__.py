"""
rapiddraft - 2D engineering-drawing geometry from 3D B-rep shapes.

This package provides hidden-line projection and planar sectioning with
cross-hatching on top of a pluggable geometry kernel.
"""

__version__ = "0.1.0"

from .app import App
from .bbox import BoundingBox2D
from .cad_types import Vector
from .config import DrawingConfig, HatchConfig, HatchPattern
from .curves import Arc2D, Ellipse2D, Line2D, LineClass, Polyline2D
from .hlr import HLRExtractor
from .kernel import GeometryKernel, KernelError
from .results import (
    HatchSegment,
    ProjectionResult,
    Region,
    SectionCurve,
    SectionResult,
    fit_to_view,
    merge_projections,
    simplify,
)
from .section import SectionExtractor
from .shape import Shape
from .view_basis import ViewBasis
from .views import CustomView, ProjectionType, SectionPlane

__all__ = [
    # Facade
    "App",
    "Shape",
    "DrawingConfig",
    "HatchConfig",
    "HatchPattern",
    # Extraction
    "HLRExtractor",
    "SectionExtractor",
    "GeometryKernel",
    "KernelError",
    "ViewBasis",
    # Views
    "ProjectionType",
    "CustomView",
    "SectionPlane",
    # Results
    "ProjectionResult",
    "SectionResult",
    "SectionCurve",
    "Region",
    "HatchSegment",
    "BoundingBox2D",
    "Line2D",
    "Arc2D",
    "Ellipse2D",
    "Polyline2D",
    "LineClass",
    "fit_to_view",
    "merge_projections",
    "simplify",
    # Geometry types
    "Vector",
]
