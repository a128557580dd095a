"""Segments attached to transformed nodes.

Control points stay in each node's local space; lengths, positions and
nearest-point queries are all in world space.

Run with:
  railpath sample docs/examples/transforms/transform_example.py --count 8
"""

from __future__ import annotations

from railpath import AffineTransform, BezierSegment, LineSegment, Path


def build():
    lifted = AffineTransform.from_translation((0.0, 0.0, 2.0))
    turned = AffineTransform.from_translation((4.0, 0.0, 2.0)) @ AffineTransform.from_rotation((0.0, 0.0, 1.0), 90.0)
    return Path(
        [
            LineSegment((0.0, 0.0, 0.0), (4.0, 0.0, 0.0), transform=lifted),
            BezierSegment([(0.0, 0.0, 0.0), (2.0, 0.0, 0.0), (4.0, 2.0, 0.0)], line_steps=24, transform=turned),
        ]
    )


if __name__ == "__main__":
    path = build()
    for i in range(9):
        print(f"{i / 8:.3f}", path.position_at(i / 8))
