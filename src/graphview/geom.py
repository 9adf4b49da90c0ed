"""
Geometric utilities for the graph view.

This module provides the 2D point primitive, distances, and the affine
transform used to map pointer positions between device space (screen
pixels) and model space (the coordinates the graph is defined in).
"""

from __future__ import annotations

from typing import Union
import math
import numpy as np


class TransformError(ValueError):
    """Raised when a transform cannot be inverted (degenerate scale)."""
    pass


class Point:
    """2D point."""

    def __init__(self, x: float = 0.0, y: float = 0.0):
        self.x = x
        self.y = y

    def __iter__(self):
        yield self.x
        yield self.y

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __repr__(self) -> str:
        return f"Point({self.x!r}, {self.y!r})"


PointLike = Union[Point, tuple, list, dict]


def as_point(p: PointLike) -> Point:
    """
    Coerce a point-like value to a Point.

    Accepts anything with x and y attributes (e.g. nodes), {'x', 'y'}
    dicts and (x, y) pairs.
    """
    if isinstance(p, Point):
        return p
    if isinstance(p, dict):
        return Point(p['x'], p['y'])
    if hasattr(p, 'x') and hasattr(p, 'y'):
        return Point(p.x, p.y)
    x, y = p
    return Point(x, y)


def distance(a: PointLike, b: PointLike) -> float:
    """Euclidean distance between two point-likes."""
    a = as_point(a)
    b = as_point(b)
    return math.hypot(b.x - a.x, b.y - a.y)


class Affine:
    """
    2D affine transform.

    Stored as a 3x3 homogeneous matrix. The six free coefficients follow
    the SVG matrix(a, b, c, d, e, f) order:

        | a c e |
        | b d f |
        | 0 0 1 |
    """

    # Determinants below this are treated as singular
    EPSILON = 1e-12

    def __init__(
        self,
        a: float = 1.0, b: float = 0.0,
        c: float = 0.0, d: float = 1.0,
        e: float = 0.0, f: float = 0.0
    ):
        self.m = np.array([
            [a, c, e],
            [b, d, f],
            [0.0, 0.0, 1.0]
        ], dtype=float)

    @classmethod
    def from_matrix(cls, m: np.ndarray) -> Affine:
        """Create a transform from a 3x3 (or 2x3) matrix."""
        m = np.asarray(m, dtype=float)
        if m.shape not in ((3, 3), (2, 3)):
            raise ValueError(f"expected a 3x3 or 2x3 matrix, got shape {m.shape}")
        return cls(m[0, 0], m[1, 0], m[0, 1], m[1, 1], m[0, 2], m[1, 2])

    @classmethod
    def identity(cls) -> Affine:
        return cls()

    @classmethod
    def translation(cls, tx: float, ty: float) -> Affine:
        return cls(e=tx, f=ty)

    @classmethod
    def scaling(cls, sx: float, sy: Union[float, None] = None) -> Affine:
        return cls(a=sx, d=sx if sy is None else sy)

    @classmethod
    def rotation(cls, degrees: float) -> Affine:
        r = math.radians(degrees)
        cos_r = math.cos(r)
        sin_r = math.sin(r)
        return cls(cos_r, sin_r, -sin_r, cos_r)

    def coefficients(self) -> tuple[float, float, float, float, float, float]:
        """Get (a, b, c, d, e, f)."""
        m = self.m
        return (m[0, 0], m[1, 0], m[0, 1], m[1, 1], m[0, 2], m[1, 2])

    def determinant(self) -> float:
        return float(self.m[0, 0] * self.m[1, 1] - self.m[0, 1] * self.m[1, 0])

    def is_invertible(self) -> bool:
        det = self.determinant()
        return math.isfinite(det) and abs(det) >= self.EPSILON

    def compose(self, other: Affine) -> Affine:
        """
        Compose with another transform.

        The result applies `other` first, then self.
        """
        return Affine.from_matrix(self.m @ other.m)

    def __matmul__(self, other: Affine) -> Affine:
        return self.compose(other)

    def inverse(self) -> Affine:
        """
        Get the inverse transform.

        Raises:
            TransformError: If the transform is not invertible
        """
        if not self.is_invertible():
            raise TransformError(
                f"transform is not invertible (determinant {self.determinant()!r})"
            )
        return Affine.from_matrix(np.linalg.inv(self.m))

    def apply(self, p: PointLike) -> Point:
        """Transform a point."""
        p = as_point(p)
        x, y, _ = self.m @ np.array([p.x, p.y, 1.0])
        return Point(float(x), float(y))

    def apply_vector(self, dx: float, dy: float) -> Point:
        """Transform a direction vector (ignores translation)."""
        x, y = self.m[:2, :2] @ np.array([dx, dy])
        return Point(float(x), float(y))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Affine):
            return NotImplemented
        return bool(np.array_equal(self.m, other.m))

    def __repr__(self) -> str:
        return "Affine(%r, %r, %r, %r, %r, %r)" % self.coefficients()


def device_to_model(x: float, y: float, screen_ctm: Affine) -> Point:
    """
    Map a device-space point into model space.

    Args:
        x, y: Pointer position in device (client) coordinates
        screen_ctm: Current model-to-device transform of the drawing surface

    Returns:
        The model-space point

    Raises:
        TransformError: If screen_ctm is not invertible
    """
    return screen_ctm.inverse().apply(Point(x, y))


def model_to_device(p: PointLike, screen_ctm: Affine) -> Point:
    """Map a model-space point into device space."""
    return screen_ctm.apply(p)
