"""
Graph model consumed by the view.

Nodes and edges are owned by the graph; the view only reads them and asks
for position changes through Graph.request_node_move(), which validates the
request and reports the outcome as a MoveResult.
"""

from __future__ import annotations

from typing import Optional, Callable, Union, Any, TypedDict
from enum import IntEnum
import math

from .geom import Point, PointLike, as_point


class NodeLookupError(LookupError):
    """Raised when a node id does not resolve in the graph."""
    pass


class GraphEventType(IntEnum):
    """
    The graph fires one event type:
    - change: a node moved, a node or edge was removed, or a visited
      flag flipped.
      Owners re-render in response.
    """
    change = 0


class GraphEvent(TypedDict, total=False):
    """Event dictionary passed to graph listeners."""
    type: GraphEventType
    node: Optional[Any]
    edge: Optional[Any]


class InputNode(TypedDict, total=False):
    """
    Input node specification.

    Attributes:
        id: Unique identifier within the graph
        x: x coordinate in model space
        y: y coordinate in model space
        weight: Numeric label shown when the graph is weighted
        visited: Highlight flag set by an external algorithm stepper
    """
    id: Any
    x: float
    y: float
    weight: float
    visited: bool


class Node:
    """Graph node with a mutable model-space position."""

    def __init__(self, id: Any = None, **kwargs):
        self.id = id
        self.x: float = kwargs.get('x', 0.0)
        self.y: float = kwargs.get('y', 0.0)
        self.weight: Optional[float] = kwargs.get('weight')
        self.visited: bool = kwargs.get('visited', False)

        # Copy over any additional properties
        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)

    def __repr__(self) -> str:
        return f"Node({self.id!r}, x={self.x!r}, y={self.y!r})"


class Edge:
    """
    Edge between two nodes.

    Attributes:
        source: Source node id
        target: Target node id
        weight: Numeric label shown when the graph is weighted
        visited: Highlight flag set by an external algorithm stepper
    """

    def __init__(
        self,
        source: Any,
        target: Any,
        weight: Optional[float] = None,
        visited: bool = False,
        **kwargs
    ):
        self.source = source
        self.target = target
        self.weight = weight
        self.visited = visited

        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)

    def key(self) -> str:
        """Get a string key in format "source-target"."""
        return f"{self.source}-{self.target}"

    def __repr__(self) -> str:
        return f"Edge({self.source!r}, {self.target!r})"


class MoveResult:
    """
    Outcome of a node move request.

    Truthy when the move was accepted. A rejected result carries a
    human-readable reason.
    """

    def __init__(self, accepted: bool, reason: str = ''):
        self.accepted = accepted
        self.reason = reason

    @classmethod
    def accept(cls) -> MoveResult:
        return cls(True)

    @classmethod
    def reject(cls, reason: str) -> MoveResult:
        return cls(False, reason)

    def __bool__(self) -> bool:
        return self.accepted

    def __repr__(self) -> str:
        if self.accepted:
            return "MoveResult.accept()"
        return f"MoveResult.reject({self.reason!r})"


class Dimensions:
    """
    Layout geometry constants, all in model units.

    Attributes:
        base_width: Width of the viewport at zoom 1
        base_height: Height of the viewport at zoom 1
        node_radius: Radius of node circles, also the hit-test radius
        arrow_gap: Extra distance between an arrowhead and the node boundary
        node_weight_gap: Horizontal gap between a node circle and its weight
        edge_weight_gap: Perpendicular offset of an edge weight label
    """

    def __init__(
        self,
        base_width: float = 320.0,
        base_height: float = 320.0,
        node_radius: float = 12.0,
        arrow_gap: float = 4.0,
        node_weight_gap: float = 4.0,
        edge_weight_gap: float = 4.0
    ):
        self.base_width = base_width
        self.base_height = base_height
        self.node_radius = node_radius
        self.arrow_gap = arrow_gap
        self.node_weight_gap = node_weight_gap
        self.edge_weight_gap = edge_weight_gap

        for name in ('base_width', 'base_height'):
            v = getattr(self, name)
            if not (math.isfinite(v) and v > 0):
                raise ValueError(f"{name} must be positive and finite, got {v!r}")
        for name in ('node_radius', 'arrow_gap', 'node_weight_gap', 'edge_weight_gap'):
            v = getattr(self, name)
            if not (math.isfinite(v) and v >= 0):
                raise ValueError(f"{name} must be non-negative and finite, got {v!r}")

    @classmethod
    def coerce(cls, d: Union[Dimensions, dict]) -> Dimensions:
        """Accept either a Dimensions instance or a dict of its fields."""
        if isinstance(d, Dimensions):
            return d
        return cls(**d)

    def __repr__(self) -> str:
        return (
            f"Dimensions(base_width={self.base_width!r}, base_height={self.base_height!r}, "
            f"node_radius={self.node_radius!r}, arrow_gap={self.arrow_gap!r}, "
            f"node_weight_gap={self.node_weight_gap!r}, edge_weight_gap={self.edge_weight_gap!r})"
        )


class Options:
    """Rendering toggles that apply to the whole graph."""

    def __init__(self, directed: bool = False, weighted: bool = False):
        self.directed = directed
        self.weighted = weighted

    @classmethod
    def coerce(cls, o: Union[Options, dict]) -> Options:
        if isinstance(o, Options):
            return o
        return cls(**o)

    def __repr__(self) -> str:
        return f"Options(directed={self.directed!r}, weighted={self.weighted!r})"


class Graph:
    """
    Ordered collection of nodes and edges.

    Node order is draw order. Edges reference nodes by id; an edge whose
    endpoints do not resolve is a data error that surfaces when the edge
    is looked up.

    `nodes` is the source of truth. The id index is a cache of positions in
    that list and is rebuilt whenever it disagrees with it, so owners may
    edit `nodes` directly as well as through add_node/remove_node.
    """

    def __init__(
        self,
        nodes: Optional[list[Union[Node, dict]]] = None,
        edges: Optional[list[Union[Edge, dict]]] = None
    ):
        self.nodes: list[Node] = []
        self.edges: list[Edge] = []
        self._index: dict[Any, int] = {}
        self.event: Optional[dict] = None

        for n in nodes or []:
            self.add_node(n)
        for e in edges or []:
            self.add_edge(e)

    def on(self, e: Union[GraphEventType, str], listener: Callable[[Optional[GraphEvent]], None]) -> Graph:
        """
        Subscribe a listener to an event.

        Args:
            e: Event type (GraphEventType enum or string name)
            listener: Function to call when event fires

        Returns:
            self for method chaining
        """
        if self.event is None:
            self.event = {}

        if isinstance(e, str):
            e = GraphEventType[e]
        self.event.setdefault(e, []).append(listener)

        return self

    def off(self, e: Union[GraphEventType, str], listener: Callable[[Optional[GraphEvent]], None]) -> Graph:
        """
        Unsubscribe every registration of a listener from an event.

        Unknown listeners are ignored.
        """
        if isinstance(e, str):
            e = GraphEventType[e]
        if self.event and e in self.event:
            self.event[e] = [l for l in self.event[e] if l != listener]
        return self

    def trigger(self, e: GraphEvent) -> None:
        """Call every listener registered for the event's type."""
        if self.event and e['type'] in self.event:
            for listener in list(self.event[e['type']]):
                listener(e)

    def _reindex(self) -> None:
        self._index = {n.id: i for i, n in enumerate(self.nodes)}

    def _lookup(self, id: Any) -> Optional[Node]:
        """Resolve an id against `nodes`, refreshing a stale index on a miss."""
        i = self._index.get(id)
        if i is not None and i < len(self.nodes) and self.nodes[i].id == id:
            return self.nodes[i]

        self._reindex()
        i = self._index.get(id)
        return None if i is None else self.nodes[i]

    def add_node(self, node: Union[Node, dict, Any] = None, **kwargs) -> Node:
        """
        Add a node.

        Accepts a Node, an InputNode dict, or an id plus keyword properties.

        Raises:
            ValueError: If a node with the same id already exists
        """
        if isinstance(node, dict):
            node = Node(**node)
        elif not isinstance(node, Node):
            node = Node(node, **kwargs)

        if len(self._index) != len(self.nodes):
            self._reindex()
        if node.id in self._index and self._lookup(node.id) is not None:
            raise ValueError(f"duplicate node id {node.id!r}")

        self.nodes.append(node)
        self._index[node.id] = len(self.nodes) - 1
        return node

    def remove_node(self, id: Any, remove_edges: bool = True) -> Node:
        """
        Remove a node.

        Args:
            id: Node id
            remove_edges: Also drop the edges that reference the node

        Returns:
            The removed node

        Raises:
            NodeLookupError: If no node has the id
        """
        node = self.find_node(id)
        self.nodes.remove(node)
        self._reindex()
        if remove_edges:
            self.edges = [e for e in self.edges if e.source != id and e.target != id]
        self.trigger({'type': GraphEventType.change, 'node': node})
        return node

    def add_edge(self, edge: Union[Edge, dict, Any], target: Any = None, **kwargs) -> Edge:
        """
        Add an edge.

        Accepts an Edge, a dict of Edge fields, or source and target ids plus
        keyword properties. Endpoints are not checked here.
        """
        if isinstance(edge, dict):
            edge = Edge(**edge)
        elif not isinstance(edge, Edge):
            edge = Edge(edge, target, **kwargs)

        self.edges.append(edge)
        return edge

    def remove_edge(self, source: Any, target: Any) -> Edge:
        """
        Remove the first edge from source to target.

        Raises:
            LookupError: If there is no such edge
        """
        edge = self.find_edge(source, target)
        self.edges.remove(edge)
        self.trigger({'type': GraphEventType.change, 'edge': edge})
        return edge

    def find_node(self, id: Any) -> Node:
        """
        Look up a node by id.

        Raises:
            NodeLookupError: If no node has the id
        """
        node = self._lookup(id)
        if node is None:
            raise NodeLookupError(f"no node with id {id!r}")
        return node

    def find_edge(self, source: Any, target: Any) -> Edge:
        """
        Look up the first edge from source to target.

        Raises:
            LookupError: If there is no such edge
        """
        for e in self.edges:
            if e.source == source and e.target == target:
                return e
        raise LookupError(f"no edge {source!r}-{target!r}")

    def request_node_move(self, id: Any, point: PointLike) -> MoveResult:
        """
        Ask the graph to move a node.

        The request is rejected when the id is unknown or a coordinate is not
        finite. Accepted moves update the node and fire a change event.

        Args:
            id: Node id
            point: New model-space position

        Returns:
            MoveResult describing the outcome
        """
        node = self._lookup(id)
        if node is None:
            return MoveResult.reject(f"no node with id {id!r}")

        p = as_point(point)
        if not (math.isfinite(p.x) and math.isfinite(p.y)):
            return MoveResult.reject(f"non-finite position ({p.x!r}, {p.y!r})")

        node.x = p.x
        node.y = p.y
        self.trigger({'type': GraphEventType.change, 'node': node})
        return MoveResult.accept()

    def update_node(self, id: Any, point: PointLike) -> None:
        """
        Move a node, raising instead of returning a rejection.

        Raises:
            NodeLookupError: If no node has the id
            ValueError: If the position is not finite
        """
        result = self.request_node_move(id, point)
        if not result:
            if self._lookup(id) is None:
                raise NodeLookupError(result.reason)
            raise ValueError(result.reason)

    def visit_node(self, id: Any, visited: bool = True) -> None:
        """Set a node's visited flag."""
        node = self.find_node(id)
        node.visited = visited
        self.trigger({'type': GraphEventType.change, 'node': node})

    def visit_edge(self, source: Any, target: Any, visited: bool = True) -> None:
        """Set the visited flag on the edge from source to target."""
        edge = self.find_edge(source, target)
        edge.visited = visited
        self.trigger({'type': GraphEventType.change, 'edge': edge})

    def positions(self) -> list[Point]:
        """Get node positions in node order."""
        return [Point(n.x, n.y) for n in self.nodes]
