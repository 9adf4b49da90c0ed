"""Tests for geometry utilities."""

import pytest
import math
import numpy as np
from graphview.geom import (
    Point, Affine, TransformError,
    as_point, distance, device_to_model, model_to_device
)
from graphview.graph import Node


class TestPoint:
    """Test Point class."""

    def test_create_point(self):
        """Test point creation."""
        p = Point(3.5, 4.2)
        assert p.x == 3.5
        assert p.y == 4.2

    def test_default_point(self):
        """Test default point at origin."""
        p = Point()
        assert p.x == 0.0
        assert p.y == 0.0

    def test_unpack(self):
        """Test point unpacks to (x, y)."""
        x, y = Point(1, 2)
        assert (x, y) == (1, 2)

    def test_as_point(self):
        """Test coercion from point-likes."""
        assert as_point((1, 2)) == Point(1, 2)
        assert as_point({'x': 3, 'y': 4}) == Point(3, 4)
        assert as_point(Node('a', x=5, y=6)) == Point(5, 6)


class TestDistance:
    """Test distance function."""

    def test_distance(self):
        assert distance(Point(0, 0), Point(3, 4)) == 5.0

    def test_distance_same_point(self):
        assert distance((2, 2), (2, 2)) == 0.0


class TestAffine:
    """Test Affine transform."""

    def test_identity(self):
        """Test identity leaves points unchanged."""
        p = Affine.identity().apply(Point(3, -4))
        assert p == Point(3, -4)

    def test_coefficients_order(self):
        """Test SVG matrix(a, b, c, d, e, f) order."""
        t = Affine(1, 2, 3, 4, 5, 6)
        assert t.coefficients() == (1, 2, 3, 4, 5, 6)
        # x' = a x + c y + e, y' = b x + d y + f
        p = t.apply(Point(1, 1))
        assert p.x == 1 + 3 + 5
        assert p.y == 2 + 4 + 6

    def test_translate_scale(self):
        """Test translation and scaling."""
        assert Affine.translation(5, -2).apply((1, 1)) == Point(6, -1)
        assert Affine.scaling(2).apply((1, 3)) == Point(2, 6)
        assert Affine.scaling(2, 3).apply((1, 1)) == Point(2, 3)

    def test_rotation(self):
        """Test rotation by 90 degrees."""
        p = Affine.rotation(90).apply((1, 0))
        assert p.x == pytest.approx(0, abs=1e-12)
        assert p.y == pytest.approx(1)

    def test_compose(self):
        """Test composition applies the right operand first."""
        t = Affine.translation(10, 0) @ Affine.scaling(2)
        assert t.apply((1, 1)) == Point(12, 2)

    def test_from_matrix(self):
        """Test creation from a numpy matrix."""
        m = np.array([[2.0, 0.0, 1.0], [0.0, 3.0, 2.0]])
        t = Affine.from_matrix(m)
        assert t.coefficients() == (2, 0, 0, 3, 1, 2)

    def test_from_matrix_bad_shape(self):
        with pytest.raises(ValueError):
            Affine.from_matrix(np.zeros((2, 2)))

    def test_inverse(self):
        """Test inverse undoes the transform."""
        t = Affine(2, 0.5, -1, 3, 7, -4)
        p = t.inverse().apply(t.apply((1.5, -2.5)))
        assert p.x == pytest.approx(1.5)
        assert p.y == pytest.approx(-2.5)

    def test_zero_scale_not_invertible(self):
        """Test degenerate scale raises TransformError."""
        t = Affine.scaling(0)
        assert not t.is_invertible()
        with pytest.raises(TransformError):
            t.inverse()

    def test_collapsed_axes_not_invertible(self):
        """Test a transform mapping the plane onto a line."""
        with pytest.raises(TransformError):
            Affine(1, 2, 2, 4, 0, 0).inverse()

    def test_transform_error_is_value_error(self):
        assert issubclass(TransformError, ValueError)

    def test_apply_vector_ignores_translation(self):
        t = Affine(2, 0, 0, 2, 100, 100)
        v = t.apply_vector(1, -1)
        assert v == Point(2, -2)


class TestCoordinateMapping:
    """Test device/model coordinate mapping."""

    def test_device_to_model(self):
        """Test mapping through a scaled and translated surface."""
        ctm = Affine(2, 0, 0, 2, 100, 50)
        p = device_to_model(120, 70, ctm)
        assert p.x == pytest.approx(10)
        assert p.y == pytest.approx(10)

    @pytest.mark.parametrize("ctm", [
        Affine.identity(),
        Affine(0.5, 0, 0, 0.5, -30, 12),
        Affine.rotation(33) @ Affine.scaling(1.7, 0.4),
        Affine(1e-3, 0, 0, 1e-3, 5, 5),
    ])
    def test_round_trip(self, ctm):
        """Test device_to_model(model_to_device(p)) recovers p."""
        for p in [Point(0, 0), Point(12.5, -7.25), Point(-300, 420)]:
            q = device_to_model(*model_to_device(p, ctm), ctm)
            assert q.x == pytest.approx(p.x, abs=1e-6)
            assert q.y == pytest.approx(p.y, abs=1e-6)

    def test_degenerate_transform(self):
        """Test mapping through a non-invertible transform fails."""
        with pytest.raises(TransformError):
            device_to_model(1, 1, Affine.scaling(0))

    def test_non_finite_transform(self):
        """Test NaN coefficients count as non-invertible."""
        with pytest.raises(TransformError):
            device_to_model(1, 1, Affine(math.nan, 0, 0, 1, 0, 0))
