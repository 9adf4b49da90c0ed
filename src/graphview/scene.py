"""
Scene building.

A scene is an ordered tree of vector primitives (groups, lines, circles,
text) tagged with style classes. Children are listed in draw order: later
primitives are painted over earlier ones.

Draw order rules:
- all edges before all nodes
- edges are stably sorted so visited edges come last, keeping their
  highlight on top; edges with equal visited flags keep graph order
- nodes keep graph order
"""

from __future__ import annotations

from typing import Any, Iterator, Optional, Union

from .edges import EdgeGeometry, edge_geometry
from .graph import Dimensions, Edge, Graph, Node, Options


def classes(*names: Any) -> list[str]:
    """Collect truthy class names, dropping False/None/''."""
    return [n for n in names if n]


class Primitive:
    """Base for scene primitives."""

    def __init__(self, classes: Optional[list[str]] = None, key: Any = None):
        self.classes: list[str] = list(classes or [])
        self.key = key

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def walk(self) -> Iterator[Primitive]:
        """Yield this primitive and its descendants in draw order."""
        yield self


class Line(Primitive):
    """Straight segment from (x1, y1) to (x2, y2)."""

    def __init__(self, x1: float, y1: float, x2: float, y2: float, **kwargs):
        super().__init__(**kwargs)
        self.x1 = x1
        self.y1 = y1
        self.x2 = x2
        self.y2 = y2

    def path(self) -> str:
        return f"M{self.x1},{self.y1} L{self.x2},{self.y2}"


class Circle(Primitive):
    def __init__(self, r: float, cx: float = 0.0, cy: float = 0.0, **kwargs):
        super().__init__(**kwargs)
        self.r = r
        self.cx = cx
        self.cy = cy


class Text(Primitive):
    """
    Text label.

    Attributes:
        text: Label content
        x, y: Offset from the parent group origin (applied after rotation)
        rotate: Rotation in degrees about the parent origin, or None
    """

    def __init__(self, text: Any, x: float = 0.0, y: float = 0.0, rotate: Optional[float] = None, **kwargs):
        super().__init__(**kwargs)
        self.text = '' if text is None else str(text)
        self.x = x
        self.y = y
        self.rotate = rotate


class Group(Primitive):
    """Container translated to (tx, ty)."""

    def __init__(self, children: Optional[list[Primitive]] = None, tx: float = 0.0, ty: float = 0.0, **kwargs):
        super().__init__(**kwargs)
        self.children: list[Primitive] = list(children or [])
        self.tx = tx
        self.ty = ty

    def walk(self) -> Iterator[Primitive]:
        yield self
        for c in self.children:
            yield from c.walk()


class EdgeGroup(Group):
    """Group for one edge; keeps the edge and its computed geometry."""

    def __init__(self, edge: Edge, geometry: EdgeGeometry, **kwargs):
        super().__init__(**kwargs)
        self.edge = edge
        self.geometry = geometry


class NodeGroup(Group):
    """Group for one node, translated to the node position."""

    def __init__(self, node: Node, **kwargs):
        super().__init__(tx=node.x, ty=node.y, **kwargs)
        self.node = node


class Scene:
    """
    Renderable scene for one pass.

    Attributes:
        view_box: [min_x, min_y, width, height] of the visible region, or None
        directed: Whether directed edges need arrow markers
        edges: Edge groups in draw order
        nodes: Node groups in draw order
    """

    def __init__(
        self,
        edges: list[EdgeGroup],
        nodes: list[NodeGroup],
        view_box: Optional[list[float]] = None,
        directed: bool = False
    ):
        self.edges = edges
        self.nodes = nodes
        self.view_box = view_box
        self.directed = directed

    @property
    def children(self) -> list[Group]:
        return [*self.edges, *self.nodes]

    def walk(self) -> Iterator[Primitive]:
        """Yield every primitive in draw order."""
        for c in self.children:
            yield from c.walk()

    def edge_order(self) -> list[Edge]:
        return [g.edge for g in self.edges]

    def node_order(self) -> list[Node]:
        return [g.node for g in self.nodes]


def sort_edges(edges: list[Edge]) -> list[Edge]:
    """
    Order edges for drawing: unvisited first, visited last.

    Python's sort is stable, so edges with the same flag keep their order.
    The input list is left untouched.
    """
    return sorted(edges, key=lambda e: bool(e.visited))


def build_edge(edge: Edge, graph: Graph, options: Options, dimensions: Dimensions) -> EdgeGroup:
    """
    Build the primitives for one edge.

    Raises:
        NodeLookupError: If source or target is not in the graph
    """
    source = graph.find_node(edge.source)
    target = graph.find_node(edge.target)
    g = edge_geometry(source, target, options.directed, dimensions.node_radius, dimensions.arrow_gap)

    children: list[Primitive] = [
        Line(g.sx, g.sy, g.ex, g.ey, classes=classes('line', options.directed and 'directed'))
    ]
    if options.weighted:
        label = Text(edge.weight, y=-dimensions.edge_weight_gap, rotate=g.angle, classes=['weight'])
        children.append(Group([label], tx=g.mx, ty=g.my))

    return EdgeGroup(
        edge, g,
        children=children,
        classes=classes('edge', edge.visited and 'visited'),
        key=edge.key()
    )


def build_node(node: Node, options: Options, dimensions: Dimensions) -> NodeGroup:
    children: list[Primitive] = [
        Circle(dimensions.node_radius, classes=['circle']),
        Text(node.id, classes=['id'])
    ]
    if options.weighted:
        children.append(Text(node.weight, x=dimensions.node_radius + dimensions.node_weight_gap, classes=['weight']))

    return NodeGroup(
        node,
        children=children,
        classes=classes('node', node.visited and 'visited'),
        key=node.id
    )


def build_scene(
    graph: Graph,
    options: Union[Options, dict, None] = None,
    dimensions: Union[Dimensions, dict, None] = None,
    view_box: Optional[list[float]] = None
) -> Scene:
    """
    Assemble the primitives for a render pass.

    Args:
        graph: Graph to draw
        options: Directed/weighted toggles
        dimensions: Layout geometry constants
        view_box: Visible region to record on the scene

    Returns:
        Scene with edge groups followed by node groups

    Raises:
        NodeLookupError: If an edge references a node that does not exist
    """
    options = Options.coerce(options if options is not None else {})
    dimensions = Dimensions.coerce(dimensions if dimensions is not None else {})

    edges = [build_edge(e, graph, options, dimensions) for e in sort_edges(graph.edges)]
    nodes = [build_node(n, options, dimensions) for n in graph.nodes]
    return Scene(edges, nodes, view_box=view_box, directed=options.directed)
