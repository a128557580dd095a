from __future__ import annotations

import numpy as np
import pytest

from railpath.geometry.planes import (
    DistancePlane,
    LineSpan,
    PointPlane,
    closest_point_on_line,
    closest_point_to_ray,
    distance_and_position,
    distance_from_line,
)

LINE = LineSpan(start=(1.0, 2.0, 3.0), end=(5.0, 2.0, 3.0))


def test_point_before_start_clips_to_start_exactly():
    p = (-3.0, 7.0, -1.0)
    assert np.array_equal(closest_point_on_line(LINE, p), LINE.start)
    distance, t = distance_and_position(LINE, p)
    assert t == 0.0
    assert distance == pytest.approx(np.linalg.norm(np.subtract(p, LINE.start)))


def test_point_after_end_clips_to_end_exactly():
    p = (9.0, -1.0, 3.0)
    assert np.array_equal(closest_point_on_line(LINE, p), LINE.end)
    distance, t = distance_and_position(LINE, p)
    assert t == 1.0
    assert distance == pytest.approx(5.0)


def test_point_between_planes_projects_perpendicular():
    p = (2.0, 5.0, 7.0)
    assert np.allclose(closest_point_on_line(LINE, p), (2.0, 2.0, 3.0))
    distance, t = distance_and_position(LINE, p)
    assert t == pytest.approx(0.25)
    assert distance == pytest.approx(5.0)
    assert distance_from_line(LINE, p) == pytest.approx(5.0)


def test_point_on_segment_has_zero_distance():
    distance, t = distance_and_position(LINE, (4.0, 2.0, 3.0))
    assert distance == pytest.approx(0.0)
    assert t == pytest.approx(0.75)


def test_zero_length_span_uses_start():
    line = LineSpan((1.0, 1.0, 1.0), (1.0, 1.0, 1.0))
    distance, t = distance_and_position(line, (1.0, 1.0, 4.0))
    assert distance == pytest.approx(3.0)
    assert t == 0.0
    assert np.array_equal(closest_point_on_line(line, (0.0, 0.0, 0.0)), line.start)


def test_span_planes_face_away_from_segment():
    start_plane, end_plane = LINE.planes()
    assert np.allclose(start_plane.normal, (-1.0, 0.0, 0.0))
    assert start_plane.d == pytest.approx(-1.0)
    assert np.allclose(end_plane.normal, (1.0, 0.0, 0.0))
    assert end_plane.d == pytest.approx(5.0)
    assert start_plane.signed_distance(LINE.lerp(0.5)) < 0
    assert end_plane.signed_distance(LINE.lerp(0.5)) < 0


def test_plane_conversions_round_trip():
    plane = PointPlane(point=(0.0, 0.0, 4.0), normal=(0.0, 0.0, 1.0))
    as_distance = plane.to_distance_plane()
    assert as_distance.d == pytest.approx(4.0)
    assert as_distance.to_point_plane() == plane


def test_plane_equality_uses_tolerance():
    a = DistancePlane(normal=(0.0, 1.0, 0.0), d=2.0)
    b = DistancePlane(normal=(0.0, 1.0, 1e-7), d=2.0 + 1e-7)
    c = DistancePlane(normal=(0.0, 1.0, 0.0), d=2.1)
    assert a == b
    assert a != c
    assert a.flipped() == DistancePlane(normal=(0.0, -1.0, 0.0), d=-2.0)
    assert a != PointPlane(point=(0.0, 2.0, 0.0), normal=(0.0, 1.0, 0.0))


def test_planes_are_not_hashable():
    with pytest.raises(TypeError):
        hash(DistancePlane(normal=(1.0, 0.0, 0.0), d=0.0))


def test_closest_point_to_ray():
    point = closest_point_to_ray((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), (3.0, 10.0, 0.0))
    assert np.allclose(point, (0.0, 10.0, 0.0))
    behind = closest_point_to_ray((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), (3.0, -10.0, 0.0))
    assert np.allclose(behind, (0.0, 0.0, 0.0))


def test_line_span_rejects_bad_coordinates():
    with pytest.raises(ValueError):
        LineSpan(start=(0.0, 0.0), end=(1.0, 0.0, 0.0))
