import math

import pytest

from rapiddraft.bbox import BoundingBox2D
from rapiddraft.config import HatchConfig, HatchPattern
from rapiddraft.section import SectionExtractor, section_shape, section_view
from rapiddraft.views import SectionPlane

MID_PLANE = SectionPlane((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), (0.0, 1.0, 0.0))


def _section(kernel, shape, plane=MID_PLANE, hatch=HatchConfig(45.0, 1.0)):
    return SectionExtractor(kernel).extract(shape, plane, hatch)


def test_cube_mid_section(kernel, fake):
    shape = fake.Shape(section=([fake.square_loop(10)], []))
    result = _section(kernel, shape)

    assert result.num_regions == 1
    (region,) = result.regions
    assert region.area == pytest.approx(100.0)
    assert region.is_outer
    assert region.boundary == ((-5, -5), (5, -5), (5, 5), (-5, 5))
    assert result.bounding_box.as_tuple() == (-5, -5, 5, 5)
    assert result.total_hatch_lines == len(region.hatch_segments) > 0
    for segment in region.hatch_segments:
        assert segment.length() <= 10 * math.sqrt(2) + 1e-9

    (curve,) = result.curves
    assert curve.is_closed and curve.is_outer
    assert result.label == "A-A"


def test_clockwise_loop_is_inner(kernel, fake):
    shape = fake.Shape(section=([fake.square_loop(4, ccw=False)], []))
    (region,) = _section(kernel, shape).regions
    assert not region.is_outer
    assert region.area == pytest.approx(16.0)


def test_open_wire_is_kept_without_hatching(kernel, fake):
    shape = fake.Shape(section=([], [[(0, 0, 0), (3, 0, 0), (3, 2, 0)]]))
    result = _section(kernel, shape)
    assert result.num_regions == 0
    assert result.total_hatch_lines == 0
    (curve,) = result.open_curves()
    assert curve.points == ((0, 0), (3, 0), (3, 2))
    assert result.bounding_box.as_tuple() == (0, 0, 3, 2)


def test_short_wires_are_dropped(kernel, fake):
    shape = fake.Shape(section=([[(0, 0, 0), (1, 0, 0)]], [[(5, 5, 0)]]))
    result = _section(kernel, shape)
    assert result.is_empty
    assert result.bounding_box == BoundingBox2D.zero()


def test_regions_share_global_hatch_phase(kernel, fake):
    left = [(-9, -1, 0), (-7, -1, 0), (-7, 1, 0), (-9, 1, 0)]
    right = [(7, -1, 0), (9, -1, 0), (9, 1, 0), (7, 1, 0)]
    shape = fake.Shape(section=([left, right], []))
    spacing = 0.3
    result = _section(kernel, shape, hatch=HatchConfig(0.0, spacing))

    assert result.num_regions == 2
    cx, cy = result.bounding_box.center
    assert (cx, cy) == (0.0, 0.0)
    for segment in result.hatch_segments():
        offset = (cy - segment.start[1]) / spacing
        assert offset == pytest.approx(round(offset), abs=1e-9)
    assert result.total_hatch_lines == sum(len(r.hatch_segments) for r in result.regions)


def test_points_are_projected_into_plane_frame(kernel, fake):
    # looking down: sheet x is -X, sheet y is +Y
    plane = SectionPlane.horizontal(5.0)
    shape = fake.Shape(section=([], [[(3, 2, 5), (1, 2, 5)]]))
    (curve,) = _section(kernel, shape, plane=plane).curves
    assert curve.points == (pytest.approx((-3, 2)), pytest.approx((-1, 2)))


def test_no_intersection(kernel, fake):
    result = _section(kernel, fake.Shape(section=None))
    assert result.is_empty
    assert result.plane is MID_PLANE
    assert result.bounding_box == BoundingBox2D.zero()


def test_kernel_failure_gives_empty_result(kernel, fake):
    shape = fake.Shape(section=([fake.square_loop(10)], []), fail_section=True)
    assert _section(kernel, shape).is_empty


def test_zero_normal_gives_empty_result(kernel, fake):
    plane = SectionPlane((0, 0, 0), (0, 0, 0))
    shape = fake.Shape(section=([fake.square_loop(10)], []))
    assert _section(kernel, shape, plane=plane).is_empty


def test_default_hatch(kernel, fake):
    shape = fake.Shape(section=([fake.square_loop(10)], []))
    result = section_shape(kernel, shape, MID_PLANE)
    segment = result.hatch_segments()[0]
    assert math.degrees(segment.angle()) == pytest.approx(45.0)


def test_horizontal_sections_are_labelled(kernel, fake):
    shape = fake.Shape(section=([fake.square_loop(10)], []))
    results = SectionExtractor(kernel).horizontal_sections(shape, [0.0, 1.0, 2.0])
    assert [r.label for r in results] == ["A-A", "B-B", "C-C"]
    assert [r.plane.origin[2] for r in results] == [0.0, 1.0, 2.0]


def test_to_json(kernel, fake):
    shape = fake.Shape(section=([fake.square_loop(10)], []))
    data = _section(kernel, shape).to_json()
    assert data["num_regions"] == 1
    assert data["num_curves"] == 1
    assert data["total_hatch_lines"] > 0


def test_cross_hatch_runs_two_passes(kernel, fake):
    shape = fake.Shape(section=([fake.square_loop(10)], []))
    first_pass = _section(kernel, shape, hatch=HatchConfig(45.0, 1.0))
    second_pass = _section(kernel, shape, hatch=HatchConfig(135.0, 1.0))
    cross = _section(kernel, shape, hatch=HatchConfig(45.0, 1.0, HatchPattern.CROSS_HATCH))

    angles = {round(math.degrees(s.angle()) % 180.0, 6) for s in cross.hatch_segments()}
    assert angles == {45.0, 135.0}
    assert cross.total_hatch_lines == (
        first_pass.total_hatch_lines + second_pass.total_hatch_lines
    )
    assert cross.pattern is HatchPattern.CROSS_HATCH


def test_solid_pattern_keeps_regions_without_strokes(kernel, fake):
    shape = fake.Shape(section=([fake.square_loop(10)], []))
    result = _section(kernel, shape, hatch=HatchConfig(pattern=HatchPattern.SOLID))
    assert result.num_regions == 1
    assert result.total_hatch_lines == 0
    assert result.pattern is HatchPattern.SOLID


def test_unhatched_section_view(kernel, fake):
    shape = fake.Shape(section=([fake.square_loop(10)], [[(0, 0, 0), (1, 0, 0)]]))
    result = _section(kernel, shape, hatch=None)
    assert result.hatch is None
    assert result.pattern is HatchPattern.NONE
    assert result.total_hatch_lines == 0
    (region,) = result.regions
    assert region.area == pytest.approx(100.0)
    assert len(result.curves) == 2
    assert result.to_json()["hatch"] is None

    view = section_view(kernel, shape, MID_PLANE)
    assert view.total_hatch_lines == 0
    assert view.bounding_box == result.bounding_box
