"""
Pointer hit-testing against node circles.
"""

from __future__ import annotations

from typing import Optional, Sequence
from enum import IntEnum
import numpy as np

from .geom import PointLike, as_point
from .graph import Node


class HitPolicy(IntEnum):
    """
    Which node wins when several circles contain the point.

    - first: first match in node list order. This is the default.
    - topmost: last match in node list order, i.e. the node drawn on top.
    """
    first = 0
    topmost = 1


def hits(p: PointLike, nodes: Sequence[Node], node_radius: float) -> np.ndarray:
    """
    Indices of all nodes whose centre is within node_radius of p.

    The boundary counts as a hit. Indices are in node list order.
    """
    if len(nodes) == 0:
        return np.empty(0, dtype=int)

    p = as_point(p)
    xy = np.array([[n.x, n.y] for n in nodes], dtype=float)
    d = np.hypot(xy[:, 0] - p.x, xy[:, 1] - p.y)
    return np.flatnonzero(d <= node_radius)


def find_node_at(
    p: PointLike,
    nodes: Sequence[Node],
    node_radius: float,
    policy: HitPolicy = HitPolicy.first
) -> Optional[Node]:
    """
    Find the node under a model-space point.

    Args:
        p: Model-space point
        nodes: Nodes in draw order
        node_radius: Hit radius
        policy: Tie-break for overlapping nodes

    Returns:
        The matching node, or None when the point misses every node
    """
    idx = hits(p, nodes, node_radius)
    if len(idx) == 0:
        return None
    if policy == HitPolicy.topmost:
        return nodes[idx[-1]]
    return nodes[idx[0]]
