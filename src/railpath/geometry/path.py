"""Ordered chains of line and Bezier segments addressed by a global parameter.

Each segment owns the share ``segment.length / exclusive_length`` of the
``[0, 1]`` parameter range, in insertion order. Cached lengths follow
structural changes (:meth:`Path.add_object`, :meth:`Path.remove_object`,
:meth:`Path.clear`); edits made directly on a segment are only picked up by
:meth:`Path.recalculate_length`.

A ``Path`` is not safe for concurrent mutation and query. Callers sharing one
across threads must serialize access themselves.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence

import numpy as np

from railpath.geometry.mapping import clamp01, map_range
from railpath.geometry.segments import MIN_SUBDIVISIONS, BezierSegment, LineSegment, PathSegment
from railpath.validation import ZeroLengthPathError, require_vec3

COARSE_SUBDIVISIONS = MIN_SUBDIVISIONS
DEFAULT_BEZIER_PRECISION = 0.5
BRACKET_EPSILON = 1e-5


@dataclass(frozen=True)
class PathDistanceInfo:
    point: np.ndarray
    distance: float
    local_t: float


@dataclass(frozen=True)
class NearestPoint:
    """Result of a nearest-point search over a path."""

    point: np.ndarray
    tangent: np.ndarray
    t: float
    distance: float
    segment_index: int


class Path:
    """Ordered, mutable sequence of path segments."""

    def __init__(self, segments: Iterable[PathSegment] = ()) -> None:
        self._segments: List[PathSegment] = []
        self._exclusive_length = 0.0
        self._inclusive_length = 0.0
        for segment in segments:
            self.add_object(segment)

    # -- collection -----------------------------------------------------

    @property
    def segments(self) -> tuple[PathSegment, ...]:
        return tuple(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[PathSegment]:
        return iter(self._segments)

    def add_object(self, segment: PathSegment) -> None:
        if not isinstance(segment, (LineSegment, BezierSegment)):
            raise TypeError(f"Expected a LineSegment or BezierSegment, got {type(segment).__name__}.")
        gap = 0.0
        if self._segments:
            gap = float(np.linalg.norm(segment.start - self._segments[-1].end))
        self._segments.append(segment)
        segment.recalculate_length()
        self._exclusive_length += segment.length
        self._inclusive_length += gap + segment.length

    def remove_object(self, segment: PathSegment) -> None:
        for index, existing in enumerate(self._segments):
            if existing is segment:
                del self._segments[index]
                self.recalculate_length()
                return
        raise ValueError("Segment is not part of this path.")

    def clear(self) -> None:
        self._segments.clear()
        self._exclusive_length = 0.0
        self._inclusive_length = 0.0

    # -- lengths --------------------------------------------------------

    @property
    def length(self) -> float:
        return self._exclusive_length

    @property
    def exclusive_length(self) -> float:
        """Distance actually traversed: the sum of segment lengths."""
        return self._exclusive_length

    @property
    def inclusive_length(self) -> float:
        """Exclusive length plus the gaps between consecutive segments."""
        return self._inclusive_length

    @property
    def length_is_stale(self) -> bool:
        current = sum(segment.length for segment in self._segments)
        return not np.isclose(current, self._exclusive_length, rtol=1e-9, atol=1e-12)

    def calculate_exclusive_length(self) -> float:
        return float(sum(segment.recalculate_length() for segment in self._segments))

    def calculate_inclusive_length(self) -> float:
        length = 0.0
        last_end = self._segments[0].position_at(0.0) if self._segments else None
        for segment in self._segments:
            length += float(np.linalg.norm(segment.position_at(0.0) - last_end))
            length += segment.recalculate_length()
            last_end = segment.position_at(1.0)
        return length

    def recalculate_length(self) -> None:
        self._inclusive_length = self.calculate_inclusive_length()
        self._exclusive_length = self.calculate_exclusive_length()

    def convert_length(self, length: float) -> float:
        """World-space length along the path as a fraction of the path."""
        return length / self._require_length()

    distance_to_t = convert_length

    def _require_length(self) -> float:
        if self._exclusive_length <= 0.0:
            raise ZeroLengthPathError("Path has zero length; cannot map a global parameter onto it.")
        return self._exclusive_length

    # -- parameter mapping ------------------------------------------------

    def local_parameter(self, t: float) -> tuple[int, float] | None:
        """Map global ``t`` to ``(segment_index, local_t)``, or ``None`` on a miss."""

        if not self._segments:
            return None
        total = self._require_length()
        t = clamp01(t)
        offset = 0.0
        for index, segment in enumerate(self._segments):
            span = segment.length / total
            if offset - BRACKET_EPSILON < t <= offset + span + BRACKET_EPSILON:
                return index, map_range(t, offset, offset + span, 0.0, 1.0)
            offset += span
        return None

    def _lookup(self, t: float, what: str) -> tuple[PathSegment, float] | None:
        found = self.local_parameter(t)
        if found is None:
            warnings.warn(
                f"Path could not resolve a {what} at t={t:.6g}; cached length is likely stale.",
                RuntimeWarning,
                stacklevel=3,
            )
            return None
        index, local_t = found
        return self._segments[index], local_t

    def position_at(self, t: float) -> np.ndarray:
        found = self._lookup(t, "position")
        if found is None:
            return np.zeros(3, dtype=float)
        segment, local_t = found
        return segment.position_at(local_t)

    def tangent_at(self, t: float) -> np.ndarray:
        found = self._lookup(t, "tangent")
        if found is None:
            return np.zeros(3, dtype=float)
        segment, local_t = found
        return segment.tangent_at(local_t)

    # -- nearest point ----------------------------------------------------

    def nearest(self, position: Sequence[float], bezier_precision: float = DEFAULT_BEZIER_PRECISION) -> NearestPoint:
        """Two-phase nearest-point search.

        Every segment is probed with a coarse subdivision first; the winning
        segment is then probed again with roughly one span per
        ``bezier_precision`` world units. An empty path yields a point at
        positive infinity.
        """

        if bezier_precision <= 0:
            raise ValueError("bezier_precision must be positive.")
        p = require_vec3(position, "position")
        if not self._segments:
            return NearestPoint(
                point=np.full(3, np.inf),
                tangent=np.zeros(3, dtype=float),
                t=0.0,
                distance=float("inf"),
                segment_index=-1,
            )
        total = self._require_length()

        best_distance = float("inf")
        best_index = 0
        best_offset = 0.0
        best_span = 0.0
        offset = 0.0
        for index, segment in enumerate(self._segments):
            span = segment.length / total
            distance, _ = segment.shortest_distance_from(p, COARSE_SUBDIVISIONS)
            if distance < best_distance:
                best_distance = distance
                best_index = index
                best_offset = offset
                best_span = span
            offset += span

        segment = self._segments[best_index]
        distance, local_t = segment.shortest_distance_from(p, segment.subdivisions_for(bezier_precision))
        return NearestPoint(
            point=segment.position_at(local_t),
            tangent=segment.tangent_at(local_t),
            t=best_offset + local_t * best_span,
            distance=distance,
            segment_index=best_index,
        )

    def get_t_from_position(
        self, position: Sequence[float], bezier_precision: float = DEFAULT_BEZIER_PRECISION
    ) -> float:
        return self.nearest(position, bezier_precision).t

    def get_nearest_point(
        self, position: Sequence[float], bezier_precision: float = DEFAULT_BEZIER_PRECISION
    ) -> np.ndarray:
        return self.nearest(position, bezier_precision).point

    def get_nearest_point_with_t(
        self, position: Sequence[float], bezier_precision: float = DEFAULT_BEZIER_PRECISION
    ) -> tuple[np.ndarray, float]:
        result = self.nearest(position, bezier_precision)
        return result.point, result.t

    def get_nearest_point_with_tangent(
        self, position: Sequence[float], bezier_precision: float = DEFAULT_BEZIER_PRECISION
    ) -> tuple[np.ndarray, np.ndarray]:
        result = self.nearest(position, bezier_precision)
        return result.point, result.tangent

    def get_nearest_position(
        self, position: Sequence[float], bezier_precision: float = DEFAULT_BEZIER_PRECISION
    ) -> np.ndarray:
        """Position on the path at the parameter nearest ``position``."""
        return self.position_at(self.get_t_from_position(position, bezier_precision))

    def calculate_distances(self, position: Sequence[float]) -> list[PathDistanceInfo]:
        p = require_vec3(position, "position")
        info: list[PathDistanceInfo] = []
        for segment in self._segments:
            distance, local_t = segment.shortest_distance_from(p, COARSE_SUBDIVISIONS)
            info.append(PathDistanceInfo(point=segment.position_at(local_t), distance=distance, local_t=local_t))
        return info

    # -- endpoints ----------------------------------------------------------

    @property
    def start(self) -> np.ndarray:
        if not self._segments:
            return np.zeros(3, dtype=float)
        return self._segments[0].start

    @property
    def end(self) -> np.ndarray:
        if not self._segments:
            return np.zeros(3, dtype=float)
        return self._segments[-1].end

    def set_start(self, point: Sequence[float]) -> None:
        if self._segments:
            self._segments[0].set_start(point)

    def set_end(self, point: Sequence[float]) -> None:
        if self._segments:
            self._segments[-1].set_end(point)

    # -- flat control point indexing -----------------------------------------

    @property
    def point_count(self) -> int:
        return sum(segment.point_count for segment in self._segments)

    def _locate_point(self, index: int) -> tuple[PathSegment, int]:
        if index >= 0:
            count = 0
            for segment in self._segments:
                if index < count + segment.point_count:
                    return segment, index - count
                count += segment.point_count
        raise IndexError(f"Control point index {index} out of range for {self.point_count} points.")

    def get_point(self, index: int) -> np.ndarray:
        segment, local_index = self._locate_point(index)
        return segment.get_point(local_index)

    def set_point(self, index: int, point: Sequence[float]) -> None:
        """Move a control point in world space; only the owning segment's length is refreshed."""
        segment, local_index = self._locate_point(index)
        segment.set_point(local_index, point)

    def get_affected_object_at(self, index: int) -> PathSegment:
        segment, _ = self._locate_point(index)
        return segment

    # -- export ---------------------------------------------------------------

    def sample(self, samples: int) -> np.ndarray:
        """Return ``samples`` world positions at evenly spaced global parameters."""

        if samples < 2:
            raise ValueError("sample requires at least two points.")
        return np.vstack([self.position_at(t) for t in np.linspace(0.0, 1.0, samples, endpoint=True)])

    def to_polyline(self, samples: int = 200):
        import pyvista as pv

        pts = self.sample(samples)
        n_pts = len(pts)
        cells = np.hstack(([n_pts], np.arange(n_pts)))
        return pv.PolyData(pts, lines=cells)

    def __repr__(self) -> str:
        return (
            f"Path(segments={len(self._segments)}, exclusive_length={self._exclusive_length:.6g}, "
            f"inclusive_length={self._inclusive_length:.6g})"
        )


__all__ = [
    "COARSE_SUBDIVISIONS",
    "DEFAULT_BEZIER_PRECISION",
    "BRACKET_EPSILON",
    "Path",
    "PathDistanceInfo",
    "NearestPoint",
]
