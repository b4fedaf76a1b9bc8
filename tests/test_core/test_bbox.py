import math

import pytest

from rapiddraft.bbox import BoundingBox2D
from rapiddraft.curves import Arc2D, Ellipse2D, Line2D


def test_empty_is_not_zero():
    empty = BoundingBox2D.empty()
    assert empty.is_empty
    assert not BoundingBox2D.zero().is_empty
    assert empty.or_zero() == BoundingBox2D.zero()
    assert empty.width == 0.0 and empty.height == 0.0


def test_include_points_is_a_fold():
    box = BoundingBox2D.empty()
    grown = box.include_points([(1, 2), (-3, 4), (0, -1)])
    assert box.is_empty
    assert grown.as_tuple() == (-3, -1, 1, 4)
    assert grown.width == 4 and grown.height == 5
    assert grown.center == (-1.0, 1.5)
    assert grown.diagonal == pytest.approx(math.hypot(4, 5))


def test_include_arc_uses_full_radius():
    arc = Arc2D(
        center=(1, 1),
        radius=2,
        start_angle=0.0,
        end_angle=math.pi / 2,
        start=(3, 1),
        end=(1, 3),
    )
    box = BoundingBox2D.empty().include_curve(arc)
    assert box.as_tuple() == (-1, -1, 3, 3)


def test_include_ellipse_uses_major_radius():
    ellipse = Ellipse2D(
        center=(0, 0),
        major_radius=3,
        minor_radius=1,
        rotation=0.0,
        start_angle=0.0,
        end_angle=2 * math.pi,
        start=(3, 0),
        end=(3, 0),
    )
    box = BoundingBox2D.empty().include_curve(ellipse)
    assert box.as_tuple() == (-3, -3, 3, 3)


def test_merge_ignores_empty():
    a = BoundingBox2D(0, 0, 1, 1)
    assert a.merge(BoundingBox2D.empty()) == a
    assert BoundingBox2D.empty().merge(a) == a
    assert a.merge(BoundingBox2D(2, -1, 3, 0)).as_tuple() == (0, -1, 3, 1)


def test_scaled_by_negative_factor_keeps_min_below_max():
    box = BoundingBox2D(1, 2, 3, 4).scaled(-2)
    assert box.as_tuple() == (-6, -8, -2, -4)


def test_expand_and_translate():
    box = BoundingBox2D(0, 0, 2, 2)
    assert box.expand(1).as_tuple() == (-1, -1, 3, 3)
    assert box.translated(5, -5).as_tuple() == (5, -5, 7, -3)
    assert BoundingBox2D.empty().expand(1).is_empty


def test_to_json():
    box = BoundingBox2D.from_points([Line2D((0, 0), (2, 1)).start, (2, 1)])
    assert box.to_json() == {"min": [0, 0], "max": [2, 1]}
