"""
Node dragging.

The drag controller is a two-state machine:

    idle --pointer down on a node--> dragging(node_id)
    dragging --pointer up--> idle

While dragging, pointer moves become move requests for the grabbed node.
Anything that does not grab a node is forwarded to a fallback pointer
handler (normally the camera, which pans).
"""

from __future__ import annotations

from typing import Any, Optional, Protocol
from enum import IntEnum
import warnings

from .geom import Affine, Point, device_to_model
from .graph import MoveResult
from .hittest import HitPolicy, find_node_at


class DragWarning(UserWarning):
    """Warning about a move request the graph rejected."""
    pass


class DragState(IntEnum):
    idle = 0
    dragging = 1


class PointerHandler(Protocol):
    """Anything that reacts to pointer events in device coordinates."""

    def handle_pointer_down(self, x: float, y: float, screen_ctm: Optional[Affine] = None) -> None:
        ...

    def handle_pointer_move(self, x: float, y: float, screen_ctm: Optional[Affine] = None) -> None:
        ...

    def handle_pointer_up(self) -> None:
        ...


class NodeMover(Protocol):
    """Graph-side contract the controller needs."""

    nodes: list

    def request_node_move(self, id: Any, point: Point) -> MoveResult:
        ...


class DragController:
    """
    Tracks the grabbed node across pointer down/move/up.

    The controller never writes node fields; it issues move requests to the
    graph, which validates and applies them.
    """

    def __init__(
        self,
        graph: NodeMover,
        dimensions,
        fallback: Optional[PointerHandler] = None,
        policy: HitPolicy = HitPolicy.first
    ):
        """
        Args:
            graph: Node owner accepting move requests
            dimensions: Object providing node_radius (the hit radius)
            fallback: Handler for gestures that do not grab a node
            policy: Tie-break for overlapping nodes
        """
        self.graph = graph
        self.dimensions = dimensions
        self.fallback = fallback
        self.policy = policy
        self.state = DragState.idle
        self.node_id: Any = None
        self.last_result: Optional[MoveResult] = None

    @property
    def dragging(self) -> bool:
        return self.state == DragState.dragging

    def handle_pointer_down(self, x: float, y: float, screen_ctm: Affine) -> None:
        """
        Grab the node under the pointer, or hand the event to the fallback.

        Raises:
            TransformError: If screen_ctm is not invertible
        """
        p = device_to_model(x, y, screen_ctm)
        node = find_node_at(p, self.graph.nodes, self.dimensions.node_radius, self.policy)

        if node is None:
            self._release()
            if self.fallback is not None:
                self.fallback.handle_pointer_down(x, y, screen_ctm)
            return

        self.state = DragState.dragging
        self.node_id = node.id

    def handle_pointer_move(self, x: float, y: float, screen_ctm: Affine) -> None:
        """
        Move the grabbed node to the pointer, or hand the event to the fallback.

        Raises:
            TransformError: If screen_ctm is not invertible while dragging
        """
        if not self.dragging:
            if self.fallback is not None:
                self.fallback.handle_pointer_move(x, y, screen_ctm)
            return

        p = device_to_model(x, y, screen_ctm)
        result = self.graph.request_node_move(self.node_id, p)
        self.last_result = result
        if not result:
            warnings.warn(
                f"move of node {self.node_id!r} rejected: {result.reason}",
                DragWarning,
                stacklevel=2
            )

    def handle_pointer_up(self) -> None:
        """Release any grabbed node and let the fallback end its gesture."""
        self._release()
        if self.fallback is not None:
            self.fallback.handle_pointer_up()

    def _release(self) -> None:
        self.state = DragState.idle
        self.node_id = None
