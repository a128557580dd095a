from __future__ import annotations

import numpy as np


def is_unit(vec, tol: float = 1e-4) -> bool:
    norm = float(np.linalg.norm(vec))
    return bool(np.isfinite(norm) and abs(norm - 1.0) <= tol)


def bezier_derivative(points, t: float) -> np.ndarray:
    """Analytic derivative via the hodograph: n * sum((P[k+1] - P[k]) * B(n-1, k))."""
    from math import comb

    pts = np.asarray(points, dtype=float)
    n = len(pts) - 1
    result = np.zeros(3)
    for k in range(n):
        result += n * (pts[k + 1] - pts[k]) * comb(n - 1, k) * (1 - t) ** (n - 1 - k) * t**k
    return result


def direction(vec) -> np.ndarray:
    vec = np.asarray(vec, dtype=float)
    return vec / np.linalg.norm(vec)


def load_model_path(model_path):
    """Load a model module and return the Path its build() produces."""
    from railpath.cli import _path_factory_from_module

    return _path_factory_from_module(model_path)()
