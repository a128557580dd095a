"""Geometry core: Bezier evaluation, distance primitives, segments and paths."""

from __future__ import annotations

from .binomial import BinomialCache, binomial
from .bezier import bezier_position, bezier_tangent, sample_bezier
from .planes import (
    DistancePlane,
    LineSpan,
    PointPlane,
    closest_point_on_line,
    closest_point_to_ray,
    distance_and_position,
    distance_from_line,
)
from .transform import AffineTransform, SupportsTransform
from .segments import BezierSegment, LineSegment, PathSegment
from .path import NearestPoint, Path, PathDistanceInfo

__all__ = [
    "BinomialCache",
    "binomial",
    "bezier_position",
    "bezier_tangent",
    "sample_bezier",
    "PointPlane",
    "DistancePlane",
    "LineSpan",
    "closest_point_on_line",
    "closest_point_to_ray",
    "distance_and_position",
    "distance_from_line",
    "AffineTransform",
    "SupportsTransform",
    "LineSegment",
    "BezierSegment",
    "PathSegment",
    "Path",
    "PathDistanceInfo",
    "NearestPoint",
]
