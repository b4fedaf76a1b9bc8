"""
SVG output for projection and section results.

Model Y points up, SVG Y points down: every coordinate is written with its Y
negated, so arcs drawn counter-clockwise in the model use sweep-flag 0.
"""

import math
from typing import List, Union

from rapiddraft.cad_types import Point2D
from rapiddraft.config import HatchPattern
from rapiddraft.curves import Arc2D, Curve2D, Ellipse2D, Line2D, LineClass, Polyline2D
from rapiddraft.results import ProjectionResult, SectionResult

DrawingResult = Union[ProjectionResult, SectionResult]

HATCH_STROKE_WIDTH = 0.18


def _pt(p: Point2D) -> str:
    # adding/subtracting from 0.0 keeps "-0.000" out of the output
    return f"{p[0] + 0.0:.3f} {0.0 - p[1]:.3f}"


def _arc_path(curve: Arc2D) -> str:
    r = f"{curve.radius:.3f}"
    sweep_flag = 0 if curve.sheet_ccw else 1
    if curve.is_closed():
        cx, cy = curve.center
        right = (cx + curve.radius, cy)
        left = (cx - curve.radius, cy)
        return (
            f"M {_pt(right)} A {r} {r} 0 1 {sweep_flag} {_pt(left)} "
            f"A {r} {r} 0 1 {sweep_flag} {_pt(right)}"
        )
    large = 1 if curve.sweep() > math.pi else 0
    return f"M {_pt(curve.start)} A {r} {r} 0 {large} {sweep_flag} {_pt(curve.end)}"


def _ellipse_path(curve: Ellipse2D) -> str:
    rx = f"{curve.major_radius:.3f}"
    ry = f"{curve.minor_radius:.3f}"
    rotation = f"{0.0 - math.degrees(curve.rotation):.3f}"
    sweep_flag = 0 if curve.sheet_ccw else 1
    span = curve.span()
    if curve.is_closed():
        start = curve.point_at(curve.start_angle)
        opposite = curve.point_at(curve.start_angle + math.pi)
        return (
            f"M {_pt(start)} A {rx} {ry} {rotation} 1 {sweep_flag} {_pt(opposite)} "
            f"A {rx} {ry} {rotation} 1 {sweep_flag} {_pt(start)}"
        )
    large = 1 if span > math.pi else 0
    return (
        f"M {_pt(curve.start)} A {rx} {ry} {rotation} {large} {sweep_flag} "
        f"{_pt(curve.end)}"
    )


def curve_to_path(curve: Curve2D) -> str:
    """SVG path data for one primitive."""
    if isinstance(curve, Line2D):
        return f"M {_pt(curve.start)} L {_pt(curve.end)}"
    if isinstance(curve, Arc2D):
        return _arc_path(curve)
    if isinstance(curve, Ellipse2D):
        return _ellipse_path(curve)
    if isinstance(curve, Polyline2D):
        head, *tail = curve.points
        return f"M {_pt(head)} " + " ".join(f"L {_pt(p)}" for p in tail)
    raise TypeError(f"Unsupported curve type: {type(curve).__name__}")


def to_svg_path(result: DrawingResult, visible_only: bool = False) -> List[str]:
    """
    One SVG path string per kept primitive, in emission order.

    For a section result the closed and open section curves come first (closed
    loops end with ``Z``), followed by every hatch stroke.
    """
    if isinstance(result, SectionResult):
        return _section_paths(result)
    return [
        curve_to_path(c)
        for c in result.curves
        if not (visible_only and c.line_class.is_hidden)
    ]


def _open_path(points) -> str:
    head, *tail = points
    return f"M {_pt(head)} " + " ".join(f"L {_pt(p)}" for p in tail)


def _closed_path(points) -> str:
    return _open_path(points) + " Z"


def _section_paths(result: SectionResult) -> List[str]:
    paths = []
    for curve in result.curves:
        paths.append(_closed_path(curve.points) if curve.is_closed else _open_path(curve.points))
    for segment in result.hatch_segments():
        paths.append(f"M {_pt(segment.start)} L {_pt(segment.end)}")
    return paths


def _path_element(d: str, line_class: LineClass) -> str:
    dash = line_class.svg_dash_array()
    dash_attr = f' stroke-dasharray="{dash}"' if dash else ""
    return (
        f'<path d="{d}" fill="none" stroke="black" '
        f'stroke-width="{line_class.stroke_width()}"{dash_attr}/>'
    )


def _section_elements(result: SectionResult) -> List[str]:
    pattern_id = result.pattern.svg_pattern_id()
    elements = []
    if result.pattern is HatchPattern.SOLID and result.regions:
        # one even-odd path so inner loops stay open
        d = " ".join(_closed_path(r.boundary) for r in result.regions)
        elements.append(
            f'<path class="{pattern_id}" d="{d}" fill="#555" '
            f'fill-rule="evenodd" stroke="none"/>'
        )
    n_curves = len(result.curves)
    for i, d in enumerate(to_svg_path(result)):
        if i < n_curves:
            elements.append(_path_element(d, result.curves[i].line_class))
        else:
            elements.append(
                f'<path class="{pattern_id}" d="{d}" fill="none" stroke="#555" '
                f'stroke-width="{HATCH_STROKE_WIDTH}"/>'
            )
    return elements


def to_svg_document(
    result: DrawingResult,
    visible_only: bool = False,
    margin: float = 5.0,
    title: str = "",
) -> str:
    """
    Standalone SVG document in model units (mm).

    Hidden lines are dashed; stroke widths follow the line class. Section hatch
    elements carry the pattern's SVG id as their class.
    """
    box = result.bounding_box.expand(margin)
    view_box = f"{box.min_x:.3f} {0.0 - box.max_y:.3f} {box.width:.3f} {box.height:.3f}"

    elements = []
    if isinstance(result, SectionResult):
        elements.extend(_section_elements(result))
    else:
        kept = [c for c in result.curves if not (visible_only and c.line_class.is_hidden)]
        for curve in kept:
            elements.append(_path_element(curve_to_path(curve), curve.line_class))

    body = "\n  ".join(elements)
    title = title or result.label
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<svg width="{box.width:.3f}mm" height="{box.height:.3f}mm" viewBox="{view_box}"
     xmlns="http://www.w3.org/2000/svg">
  <title>{title}</title>
  {body}
</svg>
"""
