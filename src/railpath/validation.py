from __future__ import annotations

from typing import Sequence

import numpy as np


class ValidationError(ValueError):
    """Raised when validation constraints are violated."""


class DegenerateCurveError(ValidationError):
    """Raised when a curve has too few control points to define a shape."""


class ZeroLengthPathError(ValidationError):
    """Raised when a global parameter is mapped onto a path with no length."""


def require_vec3(value: Sequence[float], label: str) -> np.ndarray:
    try:
        arr = np.asarray(value, dtype=float).reshape(3)
    except Exception as exc:
        raise ValueError(f"{label} must be a 3D coordinate.") from exc
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{label} must be finite.")
    return arr


def require_points(values: Sequence[Sequence[float]], label: str) -> np.ndarray:
    try:
        arr = np.asarray(values, dtype=float)
    except Exception as exc:
        raise ValueError(f"{label} must be a sequence of 3D coordinates.") from exc
    if arr.size == 0:
        return np.zeros((0, 3), dtype=float)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"{label} must be Nx3 points.")
    if np.any(~np.isfinite(arr)):
        raise ValueError(f"{label} contain invalid values.")
    return arr.copy()
