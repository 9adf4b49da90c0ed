"""
Edge geometry: label placement and arrow clipping.

A directed edge is drawn from the source centre to a point short of the
target centre, so that an arrowhead marker at the line's end meets the
target circle's boundary with a fixed gap whatever the edge angle.
"""

from __future__ import annotations

import math

from .geom import Point, PointLike, as_point


class EdgeGeometry:
    """
    Drawable geometry of one edge.

    Attributes:
        sx, sy: Line start (source centre)
        ex, ey: Line end (target centre, or the clipped arrow end)
        mx, my: Midpoint of the unclipped edge
        angle: Direction of the unclipped edge in degrees
    """

    def __init__(
        self,
        sx: float, sy: float,
        ex: float, ey: float,
        mx: float, my: float,
        angle: float
    ):
        self.sx = sx
        self.sy = sy
        self.ex = ex
        self.ey = ey
        self.mx = mx
        self.my = my
        self.angle = angle

    def start(self) -> Point:
        return Point(self.sx, self.sy)

    def end(self) -> Point:
        return Point(self.ex, self.ey)

    def midpoint(self) -> Point:
        return Point(self.mx, self.my)

    def path(self) -> str:
        """SVG path data for the line."""
        return f"M{self.sx},{self.sy} L{self.ex},{self.ey}"

    def __repr__(self) -> str:
        return (
            f"EdgeGeometry(({self.sx}, {self.sy}) -> ({self.ex}, {self.ey}), "
            f"angle={self.angle})"
        )


def edge_angle(dx: float, dy: float) -> float:
    """Direction of the vector (dx, dy) in degrees, in (-180, 180]."""
    return math.atan2(dy, dx) * 180.0 / math.pi


def clip_to_target(
    sx: float, sy: float,
    ex: float, ey: float,
    gap: float
) -> Point:
    """
    Pull the end of a segment back towards its start.

    The returned point lies on the line through start and end, at distance
    gap from end. A zero-length segment is returned unchanged.

    Args:
        sx, sy: Segment start
        ex, ey: Segment end
        gap: Distance to cut from the end

    Returns:
        The new end point
    """
    dx = ex - sx
    dy = ey - sy
    length = math.sqrt(dx * dx + dy * dy)
    if length == 0:
        return Point(ex, ey)

    al = length - gap
    return Point(sx + dx / length * al, sy + dy / length * al)


def edge_geometry(
    source: PointLike,
    target: PointLike,
    directed: bool,
    node_radius: float,
    arrow_gap: float
) -> EdgeGeometry:
    """
    Compute the geometry for an edge between two node positions.

    Args:
        source: Source node (or position)
        target: Target node (or position)
        directed: Whether to clip the end for an arrowhead
        node_radius: Node circle radius
        arrow_gap: Gap between arrowhead and node boundary

    Returns:
        EdgeGeometry with midpoint and angle from the unclipped edge
    """
    s = as_point(source)
    t = as_point(target)
    sx, sy = s.x, s.y
    ex, ey = t.x, t.y

    mx = (sx + ex) / 2
    my = (sy + ey) / 2
    dx = ex - sx
    dy = ey - sy
    angle = edge_angle(dx, dy)

    if directed:
        end = clip_to_target(sx, sy, ex, ey, node_radius + arrow_gap)
        ex, ey = end.x, end.y

    return EdgeGeometry(sx, sy, ex, ey, mx, my, angle)
