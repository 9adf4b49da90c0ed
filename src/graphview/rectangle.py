"""
Rectangles and viewport geometry.

This module provides the axis-aligned rectangle used for the visible region
of model space, the viewport computation from a camera state, and the
viewBox-to-device transform a drawing surface applies.
"""

from __future__ import annotations

from typing import Any, Iterable
import math

from .geom import Point, Affine, TransformError


class Rectangle:
    """Axis-aligned rectangle."""

    def __init__(self, x: float, X: float, y: float, Y: float):
        """
        Initialize rectangle.

        Args:
            x: Left edge
            X: Right edge
            y: Top edge (minimum y)
            Y: Bottom edge (maximum y)
        """
        self.x = x
        self.X = X
        self.y = y
        self.Y = Y

    @staticmethod
    def empty() -> Rectangle:
        """Create an empty rectangle."""
        inf = float('inf')
        return Rectangle(inf, -inf, inf, -inf)

    def is_empty(self) -> bool:
        return self.x > self.X or self.y > self.Y

    def cx(self) -> float:
        """Get x center."""
        return (self.x + self.X) / 2.0

    def cy(self) -> float:
        """Get y center."""
        return (self.y + self.Y) / 2.0

    def width(self) -> float:
        """Get width."""
        return self.X - self.x

    def height(self) -> float:
        """Get height."""
        return self.Y - self.y

    def contains(self, p: Point) -> bool:
        """Test whether a point lies inside or on the boundary."""
        return self.x <= p.x <= self.X and self.y <= p.y <= self.Y

    def union(self, r: Rectangle) -> Rectangle:
        """Get union with another rectangle."""
        return Rectangle(
            min(self.x, r.x),
            max(self.X, r.X),
            min(self.y, r.y),
            max(self.Y, r.Y)
        )

    def inflate(self, pad: float) -> Rectangle:
        """
        Inflate rectangle by padding.

        Args:
            pad: Padding amount

        Returns:
            Inflated rectangle
        """
        return Rectangle(self.x - pad, self.X + pad, self.y - pad, self.Y + pad)

    def view_box(self) -> list[float]:
        """Get [min_x, min_y, width, height]."""
        return [self.x, self.y, self.width(), self.height()]

    @staticmethod
    def from_view_box(view_box: Iterable[float]) -> Rectangle:
        min_x, min_y, w, h = view_box
        return Rectangle(min_x, min_x + w, min_y, min_y + h)

    def __repr__(self) -> str:
        return f"Rectangle({self.x!r}, {self.X!r}, {self.y!r}, {self.Y!r})"


def viewport(view_state: Any, dimensions: Any) -> Rectangle:
    """
    Compute the visible region of model space.

    The region is centred on the camera centre and is
    base_width * zoom wide and base_height * zoom high.

    Args:
        view_state: Object with center_x, center_y and zoom
        dimensions: Object with base_width and base_height

    Raises:
        ValueError: If zoom is not positive
    """
    zoom = view_state.zoom
    if not zoom > 0:
        raise ValueError(f"zoom must be positive, got {zoom!r}")

    w = dimensions.base_width * zoom
    h = dimensions.base_height * zoom
    x = view_state.center_x - w / 2.0
    y = view_state.center_y - h / 2.0
    return Rectangle(x, x + w, y, y + h)


def view_box(view_state: Any, dimensions: Any) -> list[float]:
    """Get the viewport as an SVG viewBox list [min_x, min_y, width, height]."""
    return viewport(view_state, dimensions).view_box()


def viewbox_transform(
    box: Iterable[float],
    width: float,
    height: float,
    offset: tuple[float, float] = (0.0, 0.0)
) -> Affine:
    """
    Model-to-device transform for a surface showing a viewBox.

    Mirrors SVG's preserveAspectRatio="xMidYMid meet": the box is scaled
    uniformly to fit the surface and centred along the slack axis.

    Args:
        box: [min_x, min_y, width, height] in model units
        width, height: Surface size in device pixels
        offset: Device position of the surface's top-left corner

    Returns:
        Affine mapping model space to device space

    Raises:
        TransformError: If the box or surface has no area
    """
    min_x, min_y, bw, bh = box
    if not (bw > 0 and bh > 0 and width > 0 and height > 0):
        raise TransformError(
            f"degenerate viewBox {list(box)!r} on a {width!r}x{height!r} surface"
        )
    if not all(math.isfinite(v) for v in (min_x, min_y, bw, bh)):
        raise TransformError(f"non-finite viewBox {list(box)!r}")

    s = min(width / bw, height / bh)
    tx = offset[0] + (width - bw * s) / 2.0 - min_x * s
    ty = offset[1] + (height - bh * s) / 2.0 - min_y * s
    return Affine(s, 0.0, 0.0, s, tx, ty)


def bounds(nodes: Iterable[Any], pad: float = 0.0) -> Rectangle:
    """
    Bounding rectangle of node positions.

    Args:
        nodes: Objects with x and y
        pad: Padding added on every side (typically the node radius)

    Returns:
        The enclosing rectangle, or an empty rectangle for no nodes
    """
    r = Rectangle.empty()
    for n in nodes:
        r = r.union(Rectangle(n.x, n.x, n.y, n.y))
    if r.is_empty():
        return r
    return r.inflate(pad)
