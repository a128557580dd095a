from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence, Union

import numpy as np

from railpath.geometry.bezier import bezier_position, bezier_tangent
from railpath.geometry.mapping import clamp01, map_range
from railpath.geometry.planes import LineSpan, distance_and_position
from railpath.geometry.transform import AffineTransform, SupportsTransform
from railpath.validation import DegenerateCurveError, require_points, require_vec3

DEFAULT_LINE_STEPS = 10
MIN_SUBDIVISIONS = 5


def _unit(vec: np.ndarray) -> np.ndarray:
    norm = np.linalg.norm(vec)
    if norm == 0 or not np.isfinite(norm):
        return np.zeros(3, dtype=float)
    return vec / norm


class _Segment(ABC):
    """Transform handling and cached length shared by every segment kind."""

    def __init__(self, transform: SupportsTransform | None) -> None:
        self._transform: SupportsTransform = transform if transform is not None else AffineTransform.identity()
        self._length = 0.0

    @property
    def transform(self) -> SupportsTransform:
        return self._transform

    @transform.setter
    def transform(self, value: SupportsTransform | None) -> None:
        self._transform = value if value is not None else AffineTransform.identity()
        self.recalculate_length()

    @property
    def length(self) -> float:
        return self._length

    @property
    def start(self) -> np.ndarray:
        return self.get_point(0)

    @property
    def end(self) -> np.ndarray:
        return self.get_point(self.point_count - 1)

    def set_start(self, point: Sequence[float]) -> None:
        self.set_point(0, point)

    def set_end(self, point: Sequence[float]) -> None:
        self.set_point(self.point_count - 1, point)

    def get_point(self, index: int) -> np.ndarray:
        """Control point ``index`` in world space."""
        return np.asarray(self._transform.transform_point(self.get_local_point(index)), dtype=float)

    def set_point(self, index: int, point: Sequence[float]) -> None:
        """Move control point ``index`` to a world-space position."""
        world = require_vec3(point, "point")
        self.set_local_point(index, self._transform.inverse_transform_point(world))

    def _check_index(self, index: int) -> int:
        if index < 0 or index >= self.point_count:
            raise IndexError(f"Control point index {index} out of range for {self.point_count} points.")
        return index

    def _world_direction(self, local: np.ndarray) -> np.ndarray:
        return _unit(np.asarray(self._transform.transform_direction(local), dtype=float))

    def subdivisions_for(self, precision: float) -> int:
        return 1

    # Provided by subclasses.
    point_count: int

    @abstractmethod
    def get_local_point(self, index: int) -> np.ndarray: ...

    @abstractmethod
    def set_local_point(self, index: int, point: Sequence[float]) -> None: ...

    @abstractmethod
    def recalculate_length(self) -> float: ...

    @abstractmethod
    def position_at(self, t: float) -> np.ndarray: ...

    @abstractmethod
    def tangent_at(self, t: float) -> np.ndarray: ...


class LineSegment(_Segment):
    """Straight segment between two local-space points."""

    point_count = 2

    def __init__(
        self,
        a: Sequence[float],
        b: Sequence[float],
        transform: SupportsTransform | None = None,
    ) -> None:
        super().__init__(transform)
        self._a = require_vec3(a, "a")
        self._b = require_vec3(b, "b")
        self.recalculate_length()

    @property
    def a(self) -> np.ndarray:
        return self._a.copy()

    @a.setter
    def a(self, value: Sequence[float]) -> None:
        self._a = require_vec3(value, "a")
        self.recalculate_length()

    @property
    def b(self) -> np.ndarray:
        return self._b.copy()

    @b.setter
    def b(self, value: Sequence[float]) -> None:
        self._b = require_vec3(value, "b")
        self.recalculate_length()

    def get_local_point(self, index: int) -> np.ndarray:
        return self.a if self._check_index(index) == 0 else self.b

    def set_local_point(self, index: int, point: Sequence[float]) -> None:
        if self._check_index(index) == 0:
            self.a = point
        else:
            self.b = point

    def calculate_length(self) -> float:
        return float(np.linalg.norm(self.get_point(1) - self.get_point(0)))

    def recalculate_length(self) -> float:
        self._length = self.calculate_length()
        return self._length

    def position_at(self, t: float) -> np.ndarray:
        t = clamp01(t)
        local = self._a + (self._b - self._a) * t
        return np.asarray(self._transform.transform_point(local), dtype=float)

    def tangent_at(self, t: float) -> np.ndarray:
        return self._world_direction(self._b - self._a)

    def span(self) -> LineSpan:
        return LineSpan(self.start, self.end)

    def shortest_distance_from(self, point: Sequence[float], subdivisions: int = 1) -> tuple[float, float]:
        """Exact distance and local parameter; ``subdivisions`` is ignored."""
        return distance_and_position(self.span(), point)

    def __repr__(self) -> str:
        return f"LineSegment(a={self._a.tolist()}, b={self._b.tolist()}, length={self._length:.6g})"


class BezierSegment(_Segment):
    """Bezier curve over local-space control points.

    The cached ``length`` is the length of a polyline through ``line_steps + 1``
    evenly spaced parameters. Two control points describe a straight line.
    """

    def __init__(
        self,
        points: Sequence[Sequence[float]],
        line_steps: int = DEFAULT_LINE_STEPS,
        transform: SupportsTransform | None = None,
    ) -> None:
        super().__init__(transform)
        self._points = self._validate_points(points)
        self._line_steps = self._validate_line_steps(line_steps)
        self.recalculate_length()

    @staticmethod
    def _validate_points(points: Sequence[Sequence[float]]) -> np.ndarray:
        pts = require_points(points, "Control points")
        if len(pts) < 2:
            raise DegenerateCurveError("A Bezier segment requires at least two control points.")
        return pts

    @staticmethod
    def _validate_line_steps(line_steps: int) -> int:
        steps = int(line_steps)
        if steps < 1:
            raise ValueError("line_steps must be >= 1.")
        return steps

    @property
    def points(self) -> np.ndarray:
        """Local-space control points (a copy; assign to replace them)."""
        return self._points.copy()

    @points.setter
    def points(self, value: Sequence[Sequence[float]]) -> None:
        self._points = self._validate_points(value)
        self.recalculate_length()

    @property
    def line_steps(self) -> int:
        return self._line_steps

    @line_steps.setter
    def line_steps(self, value: int) -> None:
        self._line_steps = self._validate_line_steps(value)
        self.recalculate_length()

    @property
    def degree(self) -> int:
        return len(self._points) - 1

    @property
    def point_count(self) -> int:  # type: ignore[override]
        return len(self._points)

    def get_local_point(self, index: int) -> np.ndarray:
        return self._points[self._check_index(index)].copy()

    def set_local_point(self, index: int, point: Sequence[float]) -> None:
        self._points[self._check_index(index)] = require_vec3(point, "point")
        self.recalculate_length()

    def _local_position(self, t: float) -> np.ndarray:
        if self.degree == 1:
            return self._points[0] + (self._points[1] - self._points[0]) * t
        return bezier_position(self._points, t)

    def position_at(self, t: float) -> np.ndarray:
        return np.asarray(self._transform.transform_point(self._local_position(clamp01(t))), dtype=float)

    def tangent_at(self, t: float) -> np.ndarray:
        if self.degree == 1:
            return self._world_direction(self._points[1] - self._points[0])
        return self._world_direction(bezier_tangent(self._points, clamp01(t)))

    def sample(self, steps: int | None = None) -> np.ndarray:
        """World-space polyline through ``steps + 1`` evenly spaced parameters."""

        steps = self._line_steps if steps is None else max(int(steps), 1)
        return np.vstack([self.position_at(i / steps) for i in range(steps + 1)])

    def approximate_length(self, steps: int) -> float:
        pts = self.sample(steps)
        return float(np.linalg.norm(np.diff(pts, axis=0), axis=1).sum())

    def recalculate_length(self) -> float:
        self._length = self.approximate_length(self._line_steps)
        return self._length

    def subdivisions_for(self, precision: float) -> int:
        return max(int(self._length / precision), MIN_SUBDIVISIONS)

    def shortest_distance_from(self, point: Sequence[float], subdivisions: int) -> tuple[float, float]:
        """Distance from ``point`` to the curve sampled as ``subdivisions`` straight spans.

        The returned parameter is only as precise as the sampling.
        """

        p = require_vec3(point, "point")
        subdivisions = max(int(subdivisions), 1)
        pts = self.sample(subdivisions)
        shortest = float("inf")
        shortest_t = 0.0
        for i in range(subdivisions):
            distance, span_t = distance_and_position(LineSpan(pts[i], pts[i + 1]), p)
            if distance < shortest:
                shortest = distance
                shortest_t = map_range(span_t, 0.0, 1.0, i / subdivisions, (i + 1) / subdivisions)
        return shortest, shortest_t

    def __repr__(self) -> str:
        return f"BezierSegment(degree={self.degree}, line_steps={self._line_steps}, length={self._length:.6g})"


PathSegment = Union[LineSegment, BezierSegment]


__all__ = ["DEFAULT_LINE_STEPS", "MIN_SUBDIVISIONS", "LineSegment", "BezierSegment", "PathSegment"]
