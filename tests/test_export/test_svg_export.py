import math

import pytest

from rapiddraft.bbox import BoundingBox2D
from rapiddraft.config import HatchConfig, HatchPattern
from rapiddraft.curves import Arc2D, Ellipse2D, Line2D, LineClass, Polyline2D
from rapiddraft.export.svg import curve_to_path, to_svg_document, to_svg_path
from rapiddraft.results import HatchSegment, ProjectionResult, Region, SectionCurve, SectionResult
from rapiddraft.views import SectionPlane


def _projection(curves):
    box = BoundingBox2D.empty()
    for c in curves:
        box = box.include_curve(c)
    return ProjectionResult(curves=tuple(curves), bounding_box=box.or_zero(), label="FRONT")


def test_line_path_flips_y():
    assert curve_to_path(Line2D((0, 0), (10, 5))) == "M 0.000 0.000 L 10.000 -5.000"


def test_polyline_path():
    path = curve_to_path(Polyline2D(((0, 0), (1, 1), (2, 0))))
    assert path == "M 0.000 0.000 L 1.000 -1.000 L 2.000 0.000"


def test_full_circle_is_two_arcs():
    circle = Arc2D((0, 0), 2, 0.0, 0.0, (2, 0), (2, 0), full=True)
    path = curve_to_path(circle)
    assert path.count("A") == 2
    assert path.startswith("M 2.000 0.000")


def test_arc_sweep_flag_follows_direction():
    ccw = Arc2D((0, 0), 1, 0.0, math.pi / 2, (1, 0), (0, 1))
    cw = Arc2D((0, 0), 1, 0.0, math.pi / 2, (1, 0), (0, 1), axis_flipped=True)
    assert curve_to_path(ccw) == "M 1.000 0.000 A 1.000 1.000 0 0 0 0.000 -1.000"
    # clockwise from 0 to 90 degrees is the long way round
    assert curve_to_path(cw) == "M 1.000 0.000 A 1.000 1.000 0 1 1 0.000 -1.000"


def test_reversed_edge_keeps_its_sweep_flag():
    arc = Arc2D((0, 0), 1, 0.0, math.pi / 2, (1, 0), (0, 1), ccw=False)
    assert curve_to_path(arc) == "M 1.000 0.000 A 1.000 1.000 0 0 0 0.000 -1.000"


def test_arc_with_coincident_endpoints_is_drawn_as_circle():
    closed = Arc2D((0, 0), 1, math.pi, -math.pi, (-1, 0), (-1, 0))
    path = curve_to_path(closed)
    assert path == (
        "M 1.000 0.000 A 1.000 1.000 0 1 0 -1.000 0.000 "
        "A 1.000 1.000 0 1 0 1.000 0.000"
    )


def test_ellipse_path():
    ellipse = Ellipse2D((0, 0), 2, 1, 0.0, 0.0, math.pi / 2, (2, 0), (0, 1))
    assert curve_to_path(ellipse) == "M 2.000 0.000 A 2.000 1.000 0.000 0 0 0.000 -1.000"


def test_flipped_ellipse_runs_clockwise():
    # parameters 0..pi/2 on a -Z frame, stored negated
    ellipse = Ellipse2D(
        (0, 0), 2, 1, 0.0, 0.0, -math.pi / 2, (2, 0), (0, -1), axis_flipped=True
    )
    assert ellipse.point_at(ellipse.end_angle) == pytest.approx((0, -1))
    assert curve_to_path(ellipse) == "M 2.000 0.000 A 2.000 1.000 0.000 0 1 0.000 1.000"


def test_one_path_per_primitive_and_visibility_filter():
    result = _projection(
        [
            Line2D((0, 0), (1, 0)),
            Line2D((0, 1), (1, 1), LineClass.HIDDEN_SHARP),
            Line2D((0, 2), (1, 2), LineClass.VISIBLE_OUTLINE),
        ]
    )
    assert len(to_svg_path(result)) == 3
    visible = to_svg_path(result, visible_only=True)
    assert visible == ["M 0.000 0.000 L 1.000 0.000", "M 0.000 -2.000 L 1.000 -2.000"]


def test_section_paths():
    boundary = ((0, 0), (2, 0), (2, 2), (0, 2))
    section = SectionResult(
        plane=SectionPlane.horizontal(0),
        curves=(SectionCurve(boundary, is_closed=True), SectionCurve(((5, 5), (6, 5)), is_closed=False)),
        regions=(
            Region(boundary, 4.0, True, (HatchSegment((0, 1), (2, 1)),)),
        ),
        bounding_box=BoundingBox2D(0, 0, 6, 5),
    )
    paths = to_svg_path(section)
    assert len(paths) == 3
    assert paths[0].endswith("Z")
    assert not paths[1].endswith("Z")
    assert paths[2] == "M 0.000 -1.000 L 2.000 -1.000"


def test_document():
    result = _projection(
        [Line2D((0, 0), (10, 0)), Line2D((0, 5), (10, 5), LineClass.HIDDEN_SHARP)]
    )
    svg = to_svg_document(result, margin=1.0)
    assert svg.startswith("<?xml")
    assert 'viewBox="-1.000 -6.000 12.000 7.000"' in svg
    assert "<title>FRONT</title>" in svg
    assert svg.count("<path") == 2
    assert 'stroke-dasharray="4,2"' in svg
    assert 'stroke-width="0.25"' in svg

    visible_only = to_svg_document(result, visible_only=True)
    assert "stroke-dasharray" not in visible_only


def _square_section(hatch):
    boundary = ((0, 0), (2, 0), (2, 2), (0, 2))
    segments = (HatchSegment((0, 1), (2, 1)),) if hatch.stroke_angles() else ()
    return SectionResult(
        plane=SectionPlane.horizontal(0),
        curves=(SectionCurve(boundary, is_closed=True),),
        regions=(Region(boundary, 4.0, True, segments),),
        bounding_box=BoundingBox2D(0, 0, 2, 2),
        hatch=hatch,
    )


def test_section_document_names_the_hatch_pattern():
    svg = to_svg_document(_square_section(HatchConfig(pattern=HatchPattern.CROSS_HATCH)))
    assert svg.count('class="hatch-crosshatch"') == 1
    assert 'fill-rule="evenodd"' not in svg


def test_solid_section_is_filled():
    svg = to_svg_document(_square_section(HatchConfig(pattern=HatchPattern.SOLID)))
    assert 'class="hatch-solid"' in svg
    assert 'fill="#555" fill-rule="evenodd"' in svg
    assert "M 0.000 0.000 L 2.000 0.000 L 2.000 -2.000 L 0.000 -2.000 Z" in svg
