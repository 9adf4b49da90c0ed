"""
Interactive graph renderer.

GraphRenderer ties a graph to a camera, a drag controller and the scene
builder:
- pointer events in device coordinates go to the drag controller, which
  falls back to the camera for panning
- wheel events zoom the camera
- graph changes and camera moves mark the scene stale and fire a render
  event; render() rebuilds it
"""

from __future__ import annotations

from typing import Optional, Callable, Union, Any, TypedDict
from enum import IntEnum

from .camera import Camera, ViewState
from .drag import DragController
from .geom import Affine, Point, device_to_model
from .graph import Dimensions, Graph, GraphEventType, Options
from .hittest import HitPolicy
from .rectangle import Rectangle, bounds, viewbox_transform, viewport
from .scene import Scene, build_scene
from .svg import to_svg


class RenderEventType(IntEnum):
    """
    The renderer fires one event type:
    - render: the scene is stale; hosts should call render() and redraw
    """
    render = 0


class RenderEvent(TypedDict, total=False):
    type: RenderEventType
    source: Any


class GraphRenderer:
    """
    Main interface for drawing and interacting with a graph.

    Configuration uses get-or-set methods: called with no argument they
    return the current value, called with a value they set it and return
    self for chaining.
    """

    def __init__(
        self,
        graph: Optional[Graph] = None,
        options: Union[Options, dict, None] = None,
        dimensions: Union[Dimensions, dict, None] = None,
        view_state: Optional[ViewState] = None
    ):
        self._graph = graph if graph is not None else Graph()
        self._options = Options.coerce(options if options is not None else {})
        self._dimensions = Dimensions.coerce(dimensions if dimensions is not None else {})
        self._size: list[float] = [self._dimensions.base_width, self._dimensions.base_height]
        self._offset: tuple[float, float] = (0.0, 0.0)
        self._scene: Optional[Scene] = None
        self.event: Optional[dict] = None

        self.camera = Camera(view_state)
        self.drag_controller = DragController(self._graph, self._dimensions, fallback=self.camera)

        self._graph.on(GraphEventType.change, self._on_change)
        self.camera.on('change', self._on_change)

    def on(self, e: Union[RenderEventType, str], listener: Callable[[Optional[RenderEvent]], None]) -> GraphRenderer:
        """
        Subscribe a listener to an event.

        Returns:
            self for method chaining
        """
        if self.event is None:
            self.event = {}
        if isinstance(e, str):
            e = RenderEventType[e]
        self.event.setdefault(e, []).append(listener)
        return self

    def trigger(self, e: RenderEvent) -> None:
        if self.event and e['type'] in self.event:
            for listener in list(self.event[e['type']]):
                listener(e)

    def _on_change(self, e: dict) -> None:
        self.invalidate(e)

    def invalidate(self, source: Any = None) -> None:
        """Mark the scene stale and notify render listeners."""
        self._scene = None
        self.trigger({'type': RenderEventType.render, 'source': source})

    def graph(self, g: Optional[Graph] = None) -> Union[Graph, GraphRenderer]:
        """Get or set the graph."""
        if g is None:
            return self._graph
        self._graph.off(GraphEventType.change, self._on_change)
        self._graph = g
        self.drag_controller.graph = g
        self.drag_controller.handle_pointer_up()
        g.off(GraphEventType.change, self._on_change)
        g.on(GraphEventType.change, self._on_change)
        self.invalidate()
        return self

    def options(self, o: Union[Options, dict, None] = None) -> Union[Options, GraphRenderer]:
        """Get or set the directed/weighted options."""
        if o is None:
            return self._options
        self._options = Options.coerce(o)
        self.invalidate()
        return self

    def dimensions(self, d: Union[Dimensions, dict, None] = None) -> Union[Dimensions, GraphRenderer]:
        """Get or set the layout geometry constants."""
        if d is None:
            return self._dimensions
        self._dimensions = Dimensions.coerce(d)
        self.drag_controller.dimensions = self._dimensions
        self.invalidate()
        return self

    def size(self, x: Optional[list[float]] = None) -> Union[list[float], GraphRenderer]:
        """
        Get or set the surface size in device pixels [width, height].

        Defaults to the base dimensions.
        """
        if x is None:
            return self._size
        width, height = x
        if not (width > 0 and height > 0):
            raise ValueError(f"surface size must be positive, got {list(x)!r}")
        self._size = [width, height]
        return self

    def offset(self, x: Optional[tuple[float, float]] = None) -> Union[tuple[float, float], GraphRenderer]:
        """Get or set the device position of the surface's top-left corner."""
        if x is None:
            return self._offset
        self._offset = (x[0], x[1])
        return self

    def hit_policy(self, p: Optional[HitPolicy] = None) -> Union[HitPolicy, GraphRenderer]:
        """Get or set how overlapping nodes are resolved on pointer down."""
        if p is None:
            return self.drag_controller.policy
        self.drag_controller.policy = HitPolicy(p)
        return self

    @property
    def view_state(self) -> ViewState:
        return self.camera.view_state

    def viewport(self) -> Rectangle:
        return viewport(self.camera.view_state, self._dimensions)

    def view_box(self) -> list[float]:
        return self.viewport().view_box()

    def screen_ctm(self) -> Affine:
        """Current model-to-device transform of the surface."""
        return viewbox_transform(self.view_box(), self._size[0], self._size[1], self._offset)

    def to_model(self, x: float, y: float) -> Point:
        """Map a device point to model space with the current transform."""
        return device_to_model(x, y, self.screen_ctm())

    def handle_pointer_down(self, x: float, y: float) -> None:
        self.drag_controller.handle_pointer_down(x, y, self.screen_ctm())

    def handle_pointer_move(self, x: float, y: float) -> None:
        self.drag_controller.handle_pointer_move(x, y, self.screen_ctm())

    def handle_pointer_up(self) -> None:
        self.drag_controller.handle_pointer_up()

    def handle_wheel(self, delta_y: float) -> None:
        self.camera.handle_wheel(delta_y)

    def zoom_to_fit(self) -> GraphRenderer:
        """Centre the camera on the graph and zoom to show every node."""
        r = bounds(self._graph.nodes, self._dimensions.node_radius)
        self.camera.zoom_to_fit(r, self._dimensions)
        return self

    def render(self) -> Scene:
        """
        Get the scene for the current state, rebuilding it if stale.

        Raises:
            NodeLookupError: If an edge references a missing node
        """
        if self._scene is None:
            self._scene = build_scene(self._graph, self._options, self._dimensions, self.view_box())
        return self._scene

    def to_svg(self) -> str:
        """Render and serialize to an SVG document."""
        return to_svg(self.render(), self._size[0], self._size[1])
