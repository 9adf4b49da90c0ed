"""
graphview: interactive 2D graph diagrams

Geometry and interaction engine for drawing a node/edge graph with
draggable nodes, clipped arrowheads, weight labels and a pan/zoom camera.
"""

__version__ = "0.1.0"

from .geom import Point, Affine, TransformError, distance, device_to_model, model_to_device
from .graph import Node, Edge, Graph, Dimensions, Options, MoveResult, NodeLookupError, GraphEventType
from .rectangle import Rectangle, viewport, view_box, viewbox_transform, bounds
from .hittest import HitPolicy, find_node_at
from .edges import EdgeGeometry, edge_geometry
from .camera import Camera, ViewState, ZoomWarning
from .drag import DragController, DragState, DragWarning, PointerHandler
from .scene import Scene, build_scene
from .svg import to_svg
from .renderer import GraphRenderer, RenderEventType

__all__ = [
    'Point', 'Affine', 'TransformError', 'distance', 'device_to_model', 'model_to_device',
    'Node', 'Edge', 'Graph', 'Dimensions', 'Options', 'MoveResult', 'NodeLookupError', 'GraphEventType',
    'Rectangle', 'viewport', 'view_box', 'viewbox_transform', 'bounds',
    'HitPolicy', 'find_node_at',
    'EdgeGeometry', 'edge_geometry',
    'Camera', 'ViewState', 'ZoomWarning',
    'DragController', 'DragState', 'DragWarning', 'PointerHandler',
    'Scene', 'build_scene',
    'to_svg',
    'GraphRenderer', 'RenderEventType',
]
