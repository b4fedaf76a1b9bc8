"""Section tests against the OpenCascade kernel."""

import math

import pytest

pytest.importorskip("OCP")

from OCP.BRepPrimAPI import BRepPrimAPI_MakeBox
from OCP.gp import gp_Pnt

from rapiddraft.config import HatchConfig
from rapiddraft.integrations.ocp import OpenCascadeOcpApp
from rapiddraft.views import SectionPlane


def make_cube(size: float):
    h = size / 2.0
    return BRepPrimAPI_MakeBox(gp_Pnt(-h, -h, -h), size, size, size).Shape()


def test_cube_mid_section():
    app = OpenCascadeOcpApp()
    plane = SectionPlane((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), (0.0, 1.0, 0.0))
    result = app.section(make_cube(10.0), plane, HatchConfig(45.0, 1.0))

    assert result.num_regions == 1
    (region,) = result.regions
    assert region.area == pytest.approx(100.0, abs=1e-6)
    assert len(region.boundary) == 4
    assert result.bounding_box.as_tuple() == pytest.approx((-5, -5, 5, 5), abs=1e-6)
    assert result.total_hatch_lines > 0
    for segment in result.hatch_segments():
        assert segment.length() <= 10 * math.sqrt(2) + 1e-6


def test_plane_missing_the_shape():
    app = OpenCascadeOcpApp()
    result = app.section(make_cube(10.0), SectionPlane.horizontal(50.0))
    assert result.is_empty
    assert result.num_regions == 0


def test_horizontal_sections():
    app = OpenCascadeOcpApp()
    cube = app.shape(make_cube(10.0))
    results = cube.horizontal_sections([-2.0, 0.0, 2.0])
    assert [r.label for r in results] == ["A-A", "B-B", "C-C"]
    assert all(r.num_regions == 1 for r in results)
