"""
DXF output for projection and section results using ezdxf.
"""

import logging
import math
from typing import Optional, Union

import ezdxf
from ezdxf import units
from ezdxf.document import Drawing

from rapiddraft.config import HatchPattern
from rapiddraft.constants import DEFAULT_HATCH_ANGLE, DEFAULT_HATCH_SPACING, TWO_PI
from rapiddraft.curves import Arc2D, Curve2D, Ellipse2D, Line2D, Polyline2D
from rapiddraft.results import ProjectionResult, SectionResult

logger = logging.getLogger(__name__)

VISIBLE_LAYER = "VISIBLE"
HIDDEN_LAYER = "HIDDEN"
SECTION_LAYER = "SECTION"
HATCH_LAYER = "HATCH"

# name -> (ACI color, linetype)
LAYERS = {
    VISIBLE_LAYER: (7, "CONTINUOUS"),
    HIDDEN_LAYER: (8, "DASHED"),
    SECTION_LAYER: (7, "CONTINUOUS"),
    HATCH_LAYER: (9, "CONTINUOUS"),
}


def new_document() -> Drawing:
    doc = ezdxf.new(dxfversion="R2010", setup=True)
    doc.units = units.MM
    for name, (color, linetype) in LAYERS.items():
        if name not in doc.layers:
            doc.layers.add(name, color=color, linetype=linetype)
    return doc


def add_curve(msp, curve: Curve2D, layer: str) -> None:
    attribs = {"layer": layer}
    if isinstance(curve, Line2D):
        msp.add_line(curve.start, curve.end, dxfattribs=attribs)
    elif isinstance(curve, Arc2D):
        if curve.is_closed():
            msp.add_circle(curve.center, curve.radius, dxfattribs=attribs)
            return
        # DXF arcs always run counter-clockwise
        start, end = curve.start_angle, curve.end_angle
        if not curve.sheet_ccw:
            start, end = end, start
        msp.add_arc(
            curve.center,
            curve.radius,
            math.degrees(start),
            math.degrees(end),
            dxfattribs=attribs,
        )
    elif isinstance(curve, Ellipse2D):
        ratio = curve.minor_radius / curve.major_radius
        major_axis = (
            curve.major_radius * math.cos(curve.rotation),
            curve.major_radius * math.sin(curve.rotation),
        )
        if curve.is_closed():
            start, end = 0.0, TWO_PI
        elif curve.sheet_ccw:
            start, end = curve.start_angle, curve.end_angle
        else:
            start, end = curve.end_angle, curve.start_angle
        msp.add_ellipse(
            curve.center,
            major_axis=major_axis,
            ratio=ratio,
            start_param=start,
            end_param=end,
            dxfattribs=attribs,
        )
    elif isinstance(curve, Polyline2D):
        msp.add_lwpolyline(curve.points, format="xy", dxfattribs=attribs)
    else:
        raise TypeError(f"Unsupported curve type: {type(curve).__name__}")


def projection_to_dxf(
    result: ProjectionResult, doc: Optional[Drawing] = None, visible_only: bool = False
) -> Drawing:
    doc = doc or new_document()
    msp = doc.modelspace()
    for curve in result.curves:
        if curve.line_class.is_hidden:
            if visible_only:
                continue
            add_curve(msp, curve, HIDDEN_LAYER)
        else:
            add_curve(msp, curve, VISIBLE_LAYER)
    return doc


def add_pattern_hatch(msp, result: SectionResult):
    """
    One HATCH entity over every closed region, filled with the DXF library
    pattern of the result's hatch. Inner loops become holes by odd parity.
    """
    hatch_config = result.hatch
    hatch = msp.add_hatch(dxfattribs={"layer": HATCH_LAYER})
    if result.pattern is not HatchPattern.SOLID:
        # library patterns are defined at the default angle and spacing
        hatch.set_pattern_fill(
            result.pattern.dxf_pattern_name(),
            angle=hatch_config.angle_deg - DEFAULT_HATCH_ANGLE,
            scale=hatch_config.spacing / DEFAULT_HATCH_SPACING,
        )
    for region in result.regions:
        hatch.paths.add_polyline_path(region.boundary, is_closed=True)
    return hatch


def section_to_dxf(
    result: SectionResult, doc: Optional[Drawing] = None, native_hatch: bool = False
) -> Drawing:
    """
    Section outlines on the SECTION layer and hatching on the HATCH layer.

    Stroke patterns are written as the computed LINE strokes, or as one
    pattern-filled HATCH entity when ``native_hatch`` is set. A solid pattern
    is always a HATCH entity.
    """
    doc = doc or new_document()
    msp = doc.modelspace()
    for curve in result.curves:
        msp.add_lwpolyline(
            curve.points,
            format="xy",
            close=curve.is_closed,
            dxfattribs={"layer": SECTION_LAYER},
        )
    pattern = result.pattern
    filled = pattern is HatchPattern.SOLID or (
        native_hatch and pattern is not HatchPattern.NONE
    )
    if filled and result.regions:
        add_pattern_hatch(msp, result)
        return doc
    for segment in result.hatch_segments():
        msp.add_line(segment.start, segment.end, dxfattribs={"layer": HATCH_LAYER})
    return doc


def to_dxf(
    result: Union[ProjectionResult, SectionResult],
    path: Optional[str] = None,
    visible_only: bool = False,
    native_hatch: bool = False,
) -> Drawing:
    """
    Write a projection or section to a DXF document.

    Args:
        result: Projection or section result
        path: If given, the document is saved there
        visible_only: Skip hidden-line primitives of a projection
        native_hatch: Write section hatching as a pattern-filled HATCH entity

    Returns:
        The ezdxf document
    """
    if isinstance(result, SectionResult):
        doc = section_to_dxf(result, native_hatch=native_hatch)
    else:
        doc = projection_to_dxf(result, visible_only=visible_only)
    if path is not None:
        doc.saveas(path)
        logger.info(f"Saved DXF to {path}")
    return doc
