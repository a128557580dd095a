"""Bernstein-basis evaluation of Bezier curves of any degree.

Degrees 2 and 3 use hand-expanded terms; higher degrees fall back to the
general Bernstein sum with coefficients from :mod:`railpath.geometry.binomial`.
Fewer than three control points do not describe a curve here and evaluate to
the zero vector.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from railpath.geometry.binomial import binomial

# Minimum distance kept between t and either end of [0, 1] in the general derivative.
TANGENT_EPSILON = 1e-10


def _as_points(points: Sequence[Sequence[float]] | np.ndarray) -> np.ndarray:
    return np.asarray(points, dtype=float).reshape(-1, 3)


def _normalized(vec: np.ndarray) -> np.ndarray:
    norm = np.linalg.norm(vec)
    if norm == 0 or not np.isfinite(norm):
        return np.zeros(3, dtype=float)
    return vec / norm


def bezier_position(points: Sequence[Sequence[float]] | np.ndarray, t: float) -> np.ndarray:
    """Evaluate the curve at ``t``. ``t`` is not clamped."""

    pts = _as_points(points)
    n = len(pts) - 1
    if n <= 1:
        return np.zeros(3, dtype=float)

    t = float(t)
    mt = 1.0 - t
    if n == 2:
        return pts[0] * (mt * mt) + pts[1] * (2.0 * mt * t) + pts[2] * (t * t)
    if n == 3:
        t2 = t * t
        mt2 = mt * mt
        return pts[0] * (mt2 * mt) + pts[1] * (3.0 * mt2 * t) + pts[2] * (3.0 * mt * t2) + pts[3] * (t2 * t)

    result = np.zeros(3, dtype=float)
    for k in range(n + 1):
        result += pts[k] * (binomial(n, k) * mt ** (n - k) * t**k)
    return result


def bezier_tangent(points: Sequence[Sequence[float]] | np.ndarray, t: float) -> np.ndarray:
    """Return the unit tangent at ``t``, or the zero vector if it is undefined."""

    pts = _as_points(points)
    n = len(pts) - 1
    if n <= 1:
        return np.zeros(3, dtype=float)

    t = float(t)
    if n == 2:
        mt = 1.0 - t
        return _normalized(2.0 * mt * (pts[1] - pts[0]) + 2.0 * t * (pts[2] - pts[1]))
    if n == 3:
        mt = 1.0 - t
        return _normalized(
            3.0 * mt * mt * (pts[1] - pts[0]) + 6.0 * mt * t * (pts[2] - pts[1]) + 3.0 * t * t * (pts[3] - pts[2])
        )

    # d/dt of C(n,k) (1-t)^(n-k) t^k written over (t - 1): near t == 1 the
    # division cancels, and near t == 0 t^(k-1) overflows for k == 0.
    if abs(t - 1.0) < TANGENT_EPSILON:
        t = 1.0 - TANGENT_EPSILON
    elif abs(t) < TANGENT_EPSILON:
        t = TANGENT_EPSILON
    mt = 1.0 - t
    result = np.zeros(3, dtype=float)
    for k in range(n + 1):
        term = binomial(n, k) * mt ** (n - k) * t ** (k - 1) * (n * t - k) / (t - 1.0)
        result += pts[k] * term
    return _normalized(result)


def sample_bezier(points: Sequence[Sequence[float]] | np.ndarray, samples: int) -> np.ndarray:
    samples = max(int(samples), 2)
    pts = _as_points(points)
    return np.vstack([bezier_position(pts, t) for t in np.linspace(0.0, 1.0, samples, endpoint=True)])


__all__ = ["TANGENT_EPSILON", "bezier_position", "bezier_tangent", "sample_bezier"]
