"""
Planar cross-sections with automatic cross-hatching of the closed regions.
"""

import logging
import string
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from rapiddraft.bbox import BoundingBox2D
from rapiddraft.cad_types import Point2D
from rapiddraft.config import HatchConfig
from rapiddraft.hatching import generate_hatch, signed_area
from rapiddraft.kernel import GeometryKernel
from rapiddraft.results import Region, SectionCurve, SectionResult
from rapiddraft.view_basis import ViewBasis
from rapiddraft.views import SectionPlane

logger = logging.getLogger(__name__)

DEFAULT_HATCH = HatchConfig()


class SectionExtractor:
    """
    Cuts a shape with a plane and returns the cut outline in the plane's own
    2D frame. Closed loops become hatched regions; open chains are kept as
    plain curves.
    """

    def __init__(self, kernel: GeometryKernel):
        self.kernel = kernel

    def extract(
        self,
        shape: Any,
        plane: SectionPlane,
        hatch: Optional[HatchConfig] = DEFAULT_HATCH,
    ) -> SectionResult:
        """
        Section a shape.

        Args:
            shape: Kernel shape handle
            plane: Cutting plane; its normal is the viewing direction of the result
            hatch: Hatch pattern for closed regions (defaults to 45 degrees,
                spacing 2). None gives an unhatched section view.

        Returns:
            SectionResult; empty when the plane misses the shape or the kernel fails
        """
        empty = SectionResult.empty(plane, hatch)

        try:
            edges = self.kernel.intersect_with_plane(shape, plane.origin, plane.normal)
        except Exception as e:
            logger.warning(f"Section: plane intersection failed: {e}")
            return empty
        if edges is None:
            logger.debug("Section: plane does not intersect the shape")
            return empty

        basis = ViewBasis.from_vectors(plane.normal, plane.up, origin=plane.origin)
        if basis is None:
            return empty

        try:
            closed_wires, open_wires = self.kernel.partition_closed_open(edges)
        except Exception as e:
            logger.warning(f"Section: could not build wires from section edges: {e}")
            return empty

        box = BoundingBox2D.empty()
        loops: List[Tuple[Point2D, ...]] = []
        for wire in closed_wires:
            points = self._project_wire(wire, basis)
            box = box.include_points(points)
            if len(points) >= 3:
                loops.append(points)

        open_curves: List[SectionCurve] = []
        for wire in open_wires:
            points = self._project_wire(wire, basis)
            box = box.include_points(points)
            if len(points) >= 2:
                open_curves.append(SectionCurve(points, is_closed=False))

        regions = [self._hatched_region(loop, hatch, box) for loop in loops]
        curves = [
            SectionCurve(r.boundary, is_closed=True, is_outer=r.is_outer)
            for r in regions
        ] + open_curves

        result = SectionResult(
            plane=plane,
            curves=tuple(curves),
            regions=tuple(regions),
            bounding_box=box.or_zero() if curves else BoundingBox2D.zero(),
            hatch=hatch,
        )
        logger.info(
            f"Section {result.label}: {len(regions)} closed wires, "
            f"{len(open_curves)} open wires, {result.total_hatch_lines} hatch lines"
        )
        return result

    def _project_wire(self, wire: Any, basis: ViewBasis) -> Tuple[Point2D, ...]:
        try:
            points = self.kernel.wire_points(wire)
        except Exception as e:
            logger.debug(f"Section: skipping wire that could not be explored: {e}")
            return ()
        return tuple(basis.project(p) for p in points)

    @staticmethod
    def _hatched_region(
        boundary: Sequence[Point2D],
        hatch: Optional[HatchConfig],
        bounds: BoundingBox2D,
    ) -> Region:
        area = signed_area(boundary)
        segments = []
        if hatch is not None:
            for angle in hatch.stroke_angles():
                segments.extend(generate_hatch(boundary, angle, hatch.spacing, bounds))
        return Region(
            boundary=tuple(boundary),
            area=abs(area),
            is_outer=area > 0,
            hatch_segments=tuple(segments),
        )

    def horizontal_sections(
        self,
        shape: Any,
        heights: Iterable[float],
        hatch: Optional[HatchConfig] = DEFAULT_HATCH,
    ) -> List[SectionResult]:
        """One plan section per height, labelled A, B, C, ..."""
        results = []
        for i, z in enumerate(heights):
            plane = SectionPlane.horizontal(z, label=section_label(i))
            results.append(self.extract(shape, plane, hatch))
        return results


def section_label(index: int) -> str:
    """A, B, ..., Z, AA, AB, ..."""
    letters = string.ascii_uppercase
    label = ""
    index += 1
    while index > 0:
        index, rem = divmod(index - 1, 26)
        label = letters[rem] + label
    return label


def section_shape(
    kernel: GeometryKernel,
    shape: Any,
    plane: SectionPlane,
    hatch: Optional[HatchConfig] = DEFAULT_HATCH,
) -> SectionResult:
    return SectionExtractor(kernel).extract(shape, plane, hatch)


def section_view(kernel: GeometryKernel, shape: Any, plane: SectionPlane) -> SectionResult:
    """Section outline only, without hatching."""
    return SectionExtractor(kernel).extract(shape, plane, None)
