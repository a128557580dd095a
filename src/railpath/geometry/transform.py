"""Transform handles that place segment control points in world space."""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

import numpy as np


@runtime_checkable
class SupportsTransform(Protocol):
    """What a host scene node must provide for a segment attached to it."""

    def transform_point(self, point: Sequence[float]) -> np.ndarray: ...

    def inverse_transform_point(self, point: Sequence[float]) -> np.ndarray: ...

    def transform_direction(self, vector: Sequence[float]) -> np.ndarray: ...


def _normalize_axis(axis: Sequence[float]) -> np.ndarray:
    vec = np.asarray(axis, dtype=float).reshape(3)
    norm = np.linalg.norm(vec)
    if norm == 0:
        raise ValueError("Rotation axis must be non-zero.")
    return vec / norm


def _translation_matrix(offset: Sequence[float]) -> np.ndarray:
    dx, dy, dz = np.asarray(offset, dtype=float).reshape(3)
    mat = np.eye(4)
    mat[:3, 3] = [dx, dy, dz]
    return mat


class AffineTransform:
    """Local-to-world transform stored as a 4x4 homogeneous matrix."""

    def __init__(self, matrix: Sequence[Sequence[float]] | np.ndarray | None = None) -> None:
        mat = np.eye(4) if matrix is None else np.asarray(matrix, dtype=float)
        if mat.shape != (4, 4):
            raise ValueError("Transform matrix must be 4x4.")
        if not np.all(np.isfinite(mat)):
            raise ValueError("Transform matrix must be finite.")
        self._matrix = mat.copy()
        self._inverse: np.ndarray | None = None

    @classmethod
    def identity(cls) -> "AffineTransform":
        return cls()

    @classmethod
    def from_translation(cls, offset: Sequence[float]) -> "AffineTransform":
        return cls(_translation_matrix(offset))

    @classmethod
    def from_rotation(
        cls,
        axis: Sequence[float],
        angle_deg: float,
        origin: Sequence[float] = (0.0, 0.0, 0.0),
    ) -> "AffineTransform":
        x, y, z = _normalize_axis(axis)
        angle_rad = np.deg2rad(angle_deg)
        c = np.cos(angle_rad)
        s = np.sin(angle_rad)
        C = 1.0 - c
        rot = np.array(
            [
                [x * x * C + c, x * y * C - z * s, x * z * C + y * s, 0.0],
                [y * x * C + z * s, y * y * C + c, y * z * C - x * s, 0.0],
                [z * x * C - y * s, z * y * C + x * s, z * z * C + c, 0.0],
                [0.0, 0.0, 0.0, 1.0],
            ],
            dtype=float,
        )
        center = np.asarray(origin, dtype=float).reshape(3)
        return cls(_translation_matrix(center) @ rot @ _translation_matrix(-center))

    @classmethod
    def from_scale(cls, factors: Sequence[float] | float) -> "AffineTransform":
        scale = np.broadcast_to(np.asarray(factors, dtype=float), (3,))
        if np.any(scale == 0):
            raise ValueError("Scale factors must be non-zero.")
        mat = np.eye(4)
        mat[0, 0], mat[1, 1], mat[2, 2] = scale
        return cls(mat)

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix.copy()

    def inverse(self) -> "AffineTransform":
        return AffineTransform(self._inverse_matrix())

    def transform_point(self, point: Sequence[float]) -> np.ndarray:
        vec = np.asarray(point, dtype=float).reshape(3)
        return self._matrix[:3, :3] @ vec + self._matrix[:3, 3]

    def inverse_transform_point(self, point: Sequence[float]) -> np.ndarray:
        inv = self._inverse_matrix()
        vec = np.asarray(point, dtype=float).reshape(3)
        return inv[:3, :3] @ vec + inv[:3, 3]

    def transform_direction(self, vector: Sequence[float]) -> np.ndarray:
        return self._matrix[:3, :3] @ np.asarray(vector, dtype=float).reshape(3)

    def transform_points(self, points: Sequence[Sequence[float]] | np.ndarray) -> np.ndarray:
        pts = np.asarray(points, dtype=float).reshape(-1, 3)
        verts = np.hstack([pts, np.ones((pts.shape[0], 1), dtype=float)])
        return (self._matrix @ verts.T).T[:, :3]

    def _inverse_matrix(self) -> np.ndarray:
        if self._inverse is None:
            try:
                self._inverse = np.linalg.inv(self._matrix)
            except np.linalg.LinAlgError as exc:
                raise ValueError("Transform is not invertible.") from exc
        return self._inverse

    def __matmul__(self, other: "AffineTransform") -> "AffineTransform":
        if not isinstance(other, AffineTransform):
            return NotImplemented
        return AffineTransform(self._matrix @ other._matrix)

    def __repr__(self) -> str:
        return f"AffineTransform({self._matrix.tolist()})"


__all__ = ["SupportsTransform", "AffineTransform"]
