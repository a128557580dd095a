from __future__ import annotations

import pytest

from railpath.geometry.mapping import clamp01, in_range, map_clamped, map_range


def test_map_range():
    assert map_range(0.5, 0.0, 1.0, 10.0, 20.0) == pytest.approx(15.0)
    assert map_range(2.0, 0.0, 1.0, 10.0, 20.0) == pytest.approx(30.0)


def test_collapsed_ranges_map_to_zero():
    assert map_range(0.3, 1.0, 1.0, 0.0, 5.0) == 0.0
    assert map_range(0.3, 0.0, 1.0, 4.0, 4.0) == 0.0


def test_map_clamped_and_in_range():
    assert map_clamped(2.0, 0.0, 1.0, 10.0, 20.0) == pytest.approx(20.0)
    assert map_clamped(-1.0, 0.0, 1.0, 20.0, 10.0) == pytest.approx(20.0)
    assert in_range(7.5, 5.0, 10.0) == pytest.approx(0.5)
    assert in_range(7.5, 5.0, 5.0) == 0.0
    assert clamp01(1.5) == 1.0
    assert clamp01(-0.5) == 0.0
