"""Two-line path with a right-angle corner.

Run with:
  railpath info docs/examples/paths/path_example.py
"""

from __future__ import annotations

from railpath import LineSegment, Path


def build():
    return Path(
        [
            LineSegment((0.0, 0.0, 0.0), (10.0, 0.0, 0.0)),
            LineSegment((10.0, 0.0, 0.0), (10.0, 10.0, 0.0)),
        ]
    )


if __name__ == "__main__":
    path = build()
    print("Length:", round(path.length, 3))
    print("Corner:", path.position_at(0.5))
