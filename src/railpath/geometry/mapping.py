from __future__ import annotations


def map_range(value: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """Linearly remap ``value`` from ``[in_min, in_max]`` onto ``[out_min, out_max]``.

    A collapsed input or output range maps everything to 0.0.
    """

    in_span = in_max - in_min
    out_span = out_max - out_min
    if in_span == 0.0 or out_span == 0.0:
        return 0.0
    return out_min + (value - in_min) / in_span * out_span


def map_clamped(value: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    low, high = min(out_min, out_max), max(out_min, out_max)
    return min(max(map_range(value, in_min, in_max, out_min, out_max), low), high)


def in_range(value: float, range_min: float, range_max: float) -> float:
    """Fraction of the way ``value`` lies between ``range_min`` and ``range_max``."""

    span = range_max - range_min
    if span == 0.0:
        return 0.0
    return (value - range_min) / span


def clamp01(value: float) -> float:
    return min(max(float(value), 0.0), 1.0)


__all__ = ["map_range", "map_clamped", "in_range", "clamp01"]
