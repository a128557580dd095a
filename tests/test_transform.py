from __future__ import annotations

import numpy as np
import pytest

from railpath.geometry.transform import AffineTransform, SupportsTransform


def test_identity_is_noop():
    tf = AffineTransform.identity()
    assert np.allclose(tf.transform_point((1.0, 2.0, 3.0)), (1.0, 2.0, 3.0))
    assert isinstance(tf, SupportsTransform)


def test_translation_moves_points_not_directions():
    tf = AffineTransform.from_translation((1.0, 2.0, 3.0))
    assert np.allclose(tf.transform_point((0.0, 0.0, 0.0)), (1.0, 2.0, 3.0))
    assert np.allclose(tf.transform_direction((1.0, 0.0, 0.0)), (1.0, 0.0, 0.0))


def test_rotation_about_z_90():
    tf = AffineTransform.from_rotation((0.0, 0.0, 1.0), 90.0)
    assert np.allclose(tf.transform_point((1.0, 0.0, 0.0)), (0.0, 1.0, 0.0), atol=1e-9)


def test_rotation_about_origin_point():
    tf = AffineTransform.from_rotation((0.0, 0.0, 1.0), 180.0, origin=(1.0, 0.0, 0.0))
    assert np.allclose(tf.transform_point((2.0, 0.0, 0.0)), (0.0, 0.0, 0.0), atol=1e-9)


def test_inverse_round_trip():
    tf = (
        AffineTransform.from_translation((3.0, -1.0, 2.0))
        @ AffineTransform.from_rotation((1.0, 1.0, 0.0), 33.0)
        @ AffineTransform.from_scale((2.0, 0.5, 1.5))
    )
    p = np.array([0.3, -4.0, 2.5])
    assert np.allclose(tf.inverse_transform_point(tf.transform_point(p)), p)
    assert np.allclose((tf @ tf.inverse()).matrix, np.eye(4), atol=1e-9)


def test_transform_points_matches_single_point():
    tf = AffineTransform.from_rotation((0.0, 1.0, 0.0), 45.0) @ AffineTransform.from_translation((1.0, 0.0, 0.0))
    pts = np.array([[0.0, 0.0, 0.0], [1.0, 2.0, 3.0]])
    batch = tf.transform_points(pts)
    assert np.allclose(batch[1], tf.transform_point(pts[1]))


def test_invalid_transforms_rejected():
    with pytest.raises(ValueError):
        AffineTransform(np.eye(3))
    with pytest.raises(ValueError):
        AffineTransform.from_rotation((0.0, 0.0, 0.0), 10.0)
    with pytest.raises(ValueError):
        AffineTransform.from_scale((1.0, 0.0, 1.0))
