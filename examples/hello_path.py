"""Minimal railpath model: one quadratic Bezier."""

from __future__ import annotations

from railpath import BezierSegment, Path


def build():
    """A single arch rising from the origin."""

    return Path([BezierSegment([(0, 0, 0), (5, 8, 0), (10, 0, 0)], line_steps=20)])
