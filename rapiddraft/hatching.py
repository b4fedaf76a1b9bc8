"""
Scanline cross-hatching of closed section regions.

A family of parallel candidate lines is laid across a bounding rectangle.
Each line is intersected with the region boundary; the sorted crossings
alternate outside -> inside -> outside for a simple polygon, so pairing them
``(0, 1), (2, 3), ...`` yields exactly the filled spans.
"""

import logging
import math
from typing import Iterator, List, Sequence, Tuple

from rapiddraft.bbox import BoundingBox2D
from rapiddraft.cad_types import Point2D
from rapiddraft.constants import (
    DETERMINANT_TOL,
    HATCH_LINE_PADDING,
    MIN_SEGMENT_LENGTH,
)
from rapiddraft.results import HatchSegment

logger = logging.getLogger(__name__)

# (anchor point, direction, sorted crossing parameters)
HatchLine = Tuple[Point2D, Point2D, List[float]]


def signed_area(points: Sequence[Point2D]) -> float:
    """Shoelace signed area; positive for counter-clockwise loops."""
    n = len(points)
    if n < 3:
        return 0.0
    area = 0.0
    for i in range(n):
        x1, y1 = points[i]
        x2, y2 = points[(i + 1) % n]
        area += x1 * y2 - x2 * y1
    return area / 2.0


def polygon_area(points: Sequence[Point2D]) -> float:
    return abs(signed_area(points))


def line_crossings(
    boundary: Sequence[Point2D],
    angle_deg: float,
    spacing: float,
    bounds: BoundingBox2D,
) -> Iterator[HatchLine]:
    """
    Yield every candidate hatch line with its sorted boundary crossings.

    Args:
        boundary: Closed polygon (implicitly closed, at least 3 points)
        angle_deg: Hatch direction in degrees from +X
        spacing: Perpendicular distance between consecutive lines
        bounds: Rectangle whose center fixes the phase of the line family and
            whose diagonal fixes how many lines are laid. It may be larger than
            the polygon's own extent so that several regions share one phase.
    """
    if len(boundary) < 3 or spacing <= 0 or bounds.is_empty:
        return

    angle = math.radians(angle_deg)
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)

    cx, cy = bounds.center
    num_lines = math.ceil(bounds.diagonal / spacing) + HATCH_LINE_PADDING

    n = len(boundary)
    for i in range(-num_lines, num_lines + 1):
        offset = i * spacing
        hx = cx + offset * sin_a
        hy = cy - offset * cos_a

        crossings: List[float] = []
        for j in range(n):
            x1, y1 = boundary[j]
            x2, y2 = boundary[(j + 1) % n]
            dx = x2 - x1
            dy = y2 - y1

            det = dx * sin_a - dy * cos_a
            if abs(det) < DETERMINANT_TOL:
                continue

            t_edge = ((hx - x1) * sin_a - (hy - y1) * cos_a) / det
            if 0.0 <= t_edge <= 1.0:
                ix = x1 + t_edge * dx
                iy = y1 + t_edge * dy
                crossings.append((ix - hx) * cos_a + (iy - hy) * sin_a)

        crossings.sort()
        yield (hx, hy), (cos_a, sin_a), crossings


def generate_hatch(
    boundary: Sequence[Point2D],
    angle_deg: float,
    spacing: float,
    bounds: BoundingBox2D,
) -> List[HatchSegment]:
    """
    Generate parallel hatch strokes filling a closed polygon.

    Args:
        boundary: Closed polygon (implicitly closed, at least 3 points)
        angle_deg: Hatch direction in degrees
        spacing: Distance between strokes; non-positive spacing yields nothing
        bounds: Phase/coverage rectangle, see :func:`line_crossings`

    Returns:
        Hatch segments, line by line in increasing offset order
    """
    segments: List[HatchSegment] = []
    for (hx, hy), (cos_a, sin_a), crossings in line_crossings(
        boundary, angle_deg, spacing, bounds
    ):
        for k in range(0, len(crossings) - 1, 2):
            t1 = crossings[k]
            t2 = crossings[k + 1]
            if t2 - t1 <= MIN_SEGMENT_LENGTH:
                continue
            segments.append(
                HatchSegment(
                    start=(hx + t1 * cos_a, hy + t1 * sin_a),
                    end=(hx + t2 * cos_a, hy + t2 * sin_a),
                )
            )
    return segments
