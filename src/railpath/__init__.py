"""railpath – composable 3D line and Bezier paths."""

from __future__ import annotations

from .geometry import AffineTransform, BezierSegment, LineSegment, NearestPoint, Path
from .validation import DegenerateCurveError, ValidationError, ZeroLengthPathError

__all__ = [
    "__version__",
    "AffineTransform",
    "BezierSegment",
    "LineSegment",
    "NearestPoint",
    "Path",
    "ValidationError",
    "DegenerateCurveError",
    "ZeroLengthPathError",
]

__version__ = "0.1.0"
