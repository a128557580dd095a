"""Line leading into a cubic and a quintic Bezier, with a gap before the last curve."""

from __future__ import annotations

from railpath import BezierSegment, LineSegment, Path


def build():
    segments = [
        LineSegment((-4.0, 0.0, 0.0), (0.0, 0.0, 0.0)),
        BezierSegment(
            [(0.0, 0.0, 0.0), (2.0, 3.0, 0.0), (5.0, 3.0, 1.0), (7.0, 0.0, 1.0)],
            line_steps=32,
        ),
        BezierSegment(
            [(8.0, 0.0, 1.0), (9.0, -2.0, 1.0), (11.0, -2.0, 2.0), (12.0, 1.0, 2.0), (14.0, 2.0, 3.0), (16.0, 0.0, 3.0)],
            line_steps=48,
        ),
    ]
    return Path(segments)


if __name__ == "__main__":
    import pyvista as pv

    polyline = build().to_polyline(samples=300)
    plotter = pv.Plotter()
    plotter.add_mesh(polyline, color="#9aa6bf", line_width=3)
    plotter.show()
