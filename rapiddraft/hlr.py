"""
Hidden-line-removal projection of a shape into typed 2D drawing primitives.
"""

import logging
import math
from typing import Any, List, Optional, Tuple

from rapiddraft.bbox import BoundingBox2D
from rapiddraft.cad_types import Point2D, Point3D, Vector, VectorLike
from rapiddraft.constants import (
    ANGULAR_DEFLECTION,
    DEFAULT_DEFLECTION,
    DEGENERATE_EDGE_TOL,
    DOMINANT_AXIS_THRESHOLD,
    FULL_CIRCLE_PARAM_TOL,
    TWO_PI,
)
from rapiddraft.curves import (
    HLR_CLASSES,
    Arc2D,
    Curve2D,
    Ellipse2D,
    Line2D,
    LineClass,
    Polyline2D,
    distance,
)
from rapiddraft.kernel import GeometryKernel, KernelCurveType, VisibilityGroups
from rapiddraft.results import ProjectionResult, curve_summary
from rapiddraft.view_basis import ViewBasis

logger = logging.getLogger(__name__)


def _xy(p: Point3D) -> Point2D:
    return (float(p[0]), float(p[1]))


class HLRExtractor:
    """
    Converts the kernel's visibility classification of a shape into 2D
    lines, arcs, ellipses and polylines.

    The extractor never raises: invalid input and kernel failures both
    degrade to an empty (or bounding-box fallback) result.
    """

    def __init__(self, kernel: GeometryKernel):
        self.kernel = kernel

    def extract(
        self,
        shape: Any,
        direction: VectorLike,
        up: VectorLike,
        deflection: float = DEFAULT_DEFLECTION,
        scale: float = 1.0,
        label: str = "",
    ) -> ProjectionResult:
        """
        Project a shape along ``direction``.

        Args:
            shape: Kernel shape handle
            direction: Projector main axis; the HLR projector places the viewer
                on its positive side and projects along it
            up: Sheet-up hint
            deflection: Chord tolerance used to tessellate free-form curves
            scale: Uniform factor applied to every output coordinate and radius
            label: View label stored on the result

        Returns:
            ProjectionResult with curves in group order (visible sharp, hidden
            sharp, visible smooth, hidden smooth, visible outline, hidden outline)
        """
        empty = ProjectionResult.empty(scale=scale, label=label)

        try:
            if self.kernel.is_null(shape):
                logger.warning("HLR: shape is null")
                return empty
            faces, edges = self.kernel.count_topology(shape)
        except Exception as e:
            logger.warning(f"HLR: could not inspect shape: {e}")
            return empty

        logger.debug(f"HLR input shape: {faces} faces, {edges} edges")
        if faces == 0 and edges == 0:
            logger.warning("HLR: shape has no faces or edges")
            return empty

        basis = ViewBasis.from_vectors(direction, up)
        if basis is None:
            return empty

        if deflection <= 0:
            deflection = DEFAULT_DEFLECTION

        groups = self._classify(shape, basis)
        curves, box = self._convert_groups(groups, deflection)

        if not curves:
            logger.warning("HLR produced no lines, using bounding box fallback")
            curves, box = self._bounding_box_outline(shape, basis.forward, scale)
            return ProjectionResult(
                curves=tuple(curves),
                bounding_box=box.or_zero(),
                scale=scale,
                label=label,
                used_fallback=bool(curves),
            )

        if scale != 1.0:
            curves = [c.transformed(scale) for c in curves]
            box = box.scaled(scale)

        logger.info(f"HLR extracted {curve_summary(curves)}")
        return ProjectionResult(
            curves=tuple(curves),
            bounding_box=box.or_zero(),
            scale=scale,
            label=label,
        )

    def _classify(self, shape: Any, basis: ViewBasis) -> VisibilityGroups:
        try:
            return self.kernel.classify_visibility(shape, basis)
        except Exception as e:
            logger.warning(f"HLR visibility classification failed: {e}")
            return {}

    def _convert_groups(
        self, groups: VisibilityGroups, deflection: float
    ) -> Tuple[List[Curve2D], BoundingBox2D]:
        curves: List[Curve2D] = []
        box = BoundingBox2D.empty()
        for line_class in HLR_CLASSES:
            extracted = 0
            skipped = 0
            for edge in groups.get(line_class, ()):
                try:
                    curve = self.convert_edge(edge, line_class, deflection)
                except Exception as e:
                    logger.debug(f"HLR: skipping edge that failed to convert: {e}")
                    curve = None
                if curve is None:
                    skipped += 1
                    continue
                curves.append(curve)
                box = box.include_curve(curve)
                extracted += 1
            logger.debug(
                f"HLR {line_class.value}: extracted={extracted}, skipped={skipped}"
            )
        return curves, box

    def convert_edge(
        self, edge: Any, line_class: LineClass, deflection: float = DEFAULT_DEFLECTION
    ) -> Optional[Curve2D]:
        """
        Convert one projected edge to a 2D primitive.

        Returns:
            The primitive, or None when the edge has no curve or is degenerate
        """
        k = self.kernel
        curve_data = k.curve_of(edge)
        if curve_data is None:
            return None
        curve, first, last = curve_data
        curve_type = k.curve_type(curve)

        start = _xy(k.evaluate(curve, first))
        end = _xy(k.evaluate(curve, last))

        if curve_type is KernelCurveType.LINE:
            if distance(start, end) < DEGENERATE_EDGE_TOL:
                return None
            return Line2D(start, end, line_class)

        if curve_type is KernelCurveType.CIRCLE:
            center3d, radius = k.circle_of(curve)
            if radius <= DEGENERATE_EDGE_TOL:
                return None
            cx, cy = _xy(center3d)
            full = (
                abs(first) < FULL_CIRCLE_PARAM_TOL
                and abs(last - TWO_PI) < FULL_CIRCLE_PARAM_TOL
            )
            return Arc2D(
                center=(cx, cy),
                radius=float(radius),
                start_angle=math.atan2(start[1] - cy, start[0] - cx),
                end_angle=math.atan2(end[1] - cy, end[0] - cx),
                start=start,
                end=end,
                full=full,
                ccw=not k.is_reversed(edge),
                line_class=line_class,
                axis_flipped=k.conic_axis(curve)[2] < 0,
            )

        if curve_type is KernelCurveType.ELLIPSE:
            center3d, major, minor, major_dir = k.ellipse_of(curve)
            if major <= DEGENERATE_EDGE_TOL:
                return None
            # a flipped frame runs its parameter clockwise on the sheet
            axis_flipped = k.conic_axis(curve)[2] < 0
            sign = -1.0 if axis_flipped else 1.0
            return Ellipse2D(
                center=_xy(center3d),
                major_radius=float(major),
                minor_radius=float(minor),
                rotation=math.atan2(major_dir[1], major_dir[0]),
                start_angle=sign * float(first),
                end_angle=sign * float(last),
                start=start,
                end=end,
                ccw=not k.is_reversed(edge),
                line_class=line_class,
                axis_flipped=axis_flipped,
            )

        points = [
            _xy(p)
            for p in k.tessellate(curve, first, last, deflection, ANGULAR_DEFLECTION)
        ]
        if len(points) < 2:
            return None
        polyline = Polyline2D(tuple(points), line_class)
        if polyline.length() < DEGENERATE_EDGE_TOL:
            return None
        return polyline

    def _bounding_box_outline(
        self, shape: Any, forward: Vector, scale: float
    ) -> Tuple[List[Curve2D], BoundingBox2D]:
        """Rectangle of the shape's 3D box projected on the plane the view looks at most."""
        try:
            corners = self.kernel.bounding_box_3d(shape)
        except Exception as e:
            logger.warning(f"HLR fallback: bounding box failed: {e}")
            return [], BoundingBox2D.empty()
        if corners is None:
            return [], BoundingBox2D.empty()

        (xmin, ymin, zmin), (xmax, ymax, zmax) = corners
        if abs(forward.y) > DOMINANT_AXIS_THRESHOLD:
            # front/back: XZ
            u0, v0, u1, v1 = xmin, zmin, xmax, zmax
        elif abs(forward.z) > DOMINANT_AXIS_THRESHOLD:
            # top/bottom: XY
            u0, v0, u1, v1 = xmin, ymin, xmax, ymax
        elif abs(forward.x) > DOMINANT_AXIS_THRESHOLD:
            # left/right: YZ
            u0, v0, u1, v1 = ymin, zmin, ymax, zmax
        else:
            u0, v0, u1, v1 = xmin, ymin, xmax, ymax

        u0, v0, u1, v1 = u0 * scale, v0 * scale, u1 * scale, v1 * scale
        outline = LineClass.VISIBLE_OUTLINE
        curves: List[Curve2D] = [
            Line2D((u0, v0), (u1, v0), outline),
            Line2D((u1, v0), (u1, v1), outline),
            Line2D((u1, v1), (u0, v1), outline),
            Line2D((u0, v1), (u0, v0), outline),
        ]
        box = BoundingBox2D.empty()
        for c in curves:
            box = box.include_curve(c)
        logger.info("HLR fallback: generated bbox outline with 4 edges")
        return curves, box


def project_shape(
    kernel: GeometryKernel,
    shape: Any,
    direction: VectorLike,
    up: VectorLike,
    deflection: float = DEFAULT_DEFLECTION,
    scale: float = 1.0,
) -> ProjectionResult:
    return HLRExtractor(kernel).extract(shape, direction, up, deflection, scale)
