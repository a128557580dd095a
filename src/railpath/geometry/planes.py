"""Closest point and distance queries against finite line segments.

A segment ``start -> end`` is bounded by two half-spaces perpendicular to it:
one facing backward through ``start`` and one facing forward through ``end``.
A query point on or beyond either plane is closest to that endpoint; anything
between them projects perpendicularly onto the segment.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from railpath.validation import require_vec3

PLANE_TOLERANCE = 1e-5
RAY_LENGTH = 100.0


@dataclass(frozen=True, eq=False)
class PointPlane:
    point: np.ndarray
    normal: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "point", require_vec3(self.point, "point"))
        object.__setattr__(self, "normal", require_vec3(self.normal, "normal"))

    def to_distance_plane(self) -> "DistancePlane":
        return DistancePlane(normal=self.normal, d=float(np.dot(self.point, self.normal)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PointPlane):
            return NotImplemented
        return bool(
            np.linalg.norm(self.normal - other.normal) <= PLANE_TOLERANCE
            and np.linalg.norm(self.point - other.point) <= PLANE_TOLERANCE
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PointPlane(point={self.point.tolist()}, normal={self.normal.tolist()})"


@dataclass(frozen=True, eq=False)
class DistancePlane:
    """Plane as a unit normal and its signed offset from the origin."""

    normal: np.ndarray
    d: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "normal", require_vec3(self.normal, "normal"))
        object.__setattr__(self, "d", float(self.d))

    def to_point_plane(self) -> PointPlane:
        return PointPlane(point=self.normal * self.d, normal=self.normal)

    def signed_distance(self, point: Sequence[float]) -> float:
        return float(np.dot(np.asarray(point, dtype=float), self.normal)) - self.d

    def flipped(self) -> "DistancePlane":
        return DistancePlane(normal=-self.normal, d=-self.d)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DistancePlane):
            return NotImplemented
        return bool(
            np.linalg.norm(self.normal - other.normal) <= PLANE_TOLERANCE
            and abs(self.d - other.d) <= PLANE_TOLERANCE
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"DistancePlane(normal={self.normal.tolist()}, d={self.d})"


@dataclass(frozen=True)
class LineSpan:
    """Finite world-space segment."""

    start: np.ndarray
    end: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", require_vec3(self.start, "start"))
        object.__setattr__(self, "end", require_vec3(self.end, "end"))

    @property
    def length(self) -> float:
        return float(np.linalg.norm(self.end - self.start))

    @property
    def direction(self) -> np.ndarray:
        delta = self.end - self.start
        norm = np.linalg.norm(delta)
        if norm == 0:
            return np.zeros(3, dtype=float)
        return delta / norm

    def lerp(self, t: float) -> np.ndarray:
        return self.start + (self.end - self.start) * float(t)

    def planes(self) -> tuple[DistancePlane, DistancePlane]:
        """Return the backward plane through ``start`` and the forward plane through ``end``."""

        normal = self.direction
        start_plane = PointPlane(point=self.start, normal=-normal).to_distance_plane()
        end_plane = PointPlane(point=self.end, normal=normal).to_distance_plane()
        return start_plane, end_plane


def distance_and_position(line: LineSpan, point: Sequence[float]) -> tuple[float, float]:
    """Return the distance from ``point`` to ``line`` and the parameter of the closest point."""

    p = require_vec3(point, "point")
    length = line.length
    if length == 0:
        return float(np.linalg.norm(line.start - p)), 0.0

    start_plane, end_plane = line.planes()
    if start_plane.signed_distance(p) >= 0.0:
        return float(np.linalg.norm(line.start - p)), 0.0
    if end_plane.signed_distance(p) >= 0.0:
        return float(np.linalg.norm(line.end - p)), 1.0

    # Between the planes: measure along the start plane's normal, flipped.
    along = start_plane.flipped().signed_distance(p)
    position = along / length
    return float(np.linalg.norm(p - line.lerp(position))), float(position)


def closest_point_on_line(line: LineSpan, point: Sequence[float]) -> np.ndarray:
    p = require_vec3(point, "point")
    if line.length == 0:
        return line.start.copy()
    start_plane, end_plane = line.planes()
    if start_plane.signed_distance(p) >= 0.0:
        return line.start.copy()
    if end_plane.signed_distance(p) >= 0.0:
        return line.end.copy()
    _, position = distance_and_position(line, p)
    return line.lerp(position)


def distance_from_line(line: LineSpan, point: Sequence[float]) -> float:
    distance, _ = distance_and_position(line, point)
    return distance


def closest_point_to_ray(origin: Sequence[float], direction: Sequence[float], point: Sequence[float]) -> np.ndarray:
    """Closest point on the first ``RAY_LENGTH`` units of a ray."""

    start = require_vec3(origin, "origin")
    heading = require_vec3(direction, "direction")
    return closest_point_on_line(LineSpan(start, start + heading * RAY_LENGTH), point)


__all__ = [
    "PLANE_TOLERANCE",
    "RAY_LENGTH",
    "PointPlane",
    "DistancePlane",
    "LineSpan",
    "closest_point_on_line",
    "distance_from_line",
    "distance_and_position",
    "closest_point_to_ray",
]
