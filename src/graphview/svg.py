"""
SVG output for scenes.

Serializes a Scene into standalone SVG markup. Directed edge lines get an
arrowhead marker; visited edges use a separate marker so the arrowhead
picks up the highlight style.
"""

from __future__ import annotations

from typing import Optional
import xml.etree.ElementTree as ET

from .scene import Circle, Group, Line, Primitive, Scene, Text

SVG_NS = "http://www.w3.org/2000/svg"

MARKER_ARROW = "markerArrow"
MARKER_ARROW_VISITED = "markerArrowVisited"

# Triangle with its tip at (4, 2), referenced at its centre
ARROW_PATH = "M0,0 L0,4 L4,2 L0,0"


def fmt(v: float) -> str:
    """
    Compact number formatting for attributes.

    Keeps 12 significant digits, enough for sub-1e-4 coordinates at deep
    zoom while hiding float noise such as 83.99999999999999.
    """
    s = "%.12g" % v
    return '0' if s == '-0' else s


def _set_classes(el: ET.Element, p: Primitive) -> None:
    if p.classes:
        el.set('class', ' '.join(p.classes))


def _marker(defs: ET.Element, id: str, visited: bool) -> None:
    m = ET.SubElement(defs, 'marker', {
        'id': id,
        'markerWidth': '4',
        'markerHeight': '4',
        'refX': '2',
        'refY': '2',
        'orient': 'auto'
    })
    ET.SubElement(m, 'path', {
        'd': ARROW_PATH,
        'class': 'arrow visited' if visited else 'arrow'
    })


def _emit(parent: ET.Element, p: Primitive, visited: bool) -> None:
    if isinstance(p, Group):
        el = ET.SubElement(parent, 'g')
        _set_classes(el, p)
        if p.tx or p.ty:
            el.set('transform', f"translate({fmt(p.tx)},{fmt(p.ty)})")
        visited = visited or p.has_class('visited')
        for c in p.children:
            _emit(el, c, visited)
    elif isinstance(p, Line):
        el = ET.SubElement(parent, 'path', {'d': f"M{fmt(p.x1)},{fmt(p.y1)} L{fmt(p.x2)},{fmt(p.y2)}"})
        _set_classes(el, p)
        if p.has_class('directed'):
            marker = MARKER_ARROW_VISITED if visited else MARKER_ARROW
            el.set('marker-end', f"url(#{marker})")
    elif isinstance(p, Circle):
        el = ET.SubElement(parent, 'circle', {'r': fmt(p.r)})
        if p.cx or p.cy:
            el.set('cx', fmt(p.cx))
            el.set('cy', fmt(p.cy))
        _set_classes(el, p)
    elif isinstance(p, Text):
        el = ET.SubElement(parent, 'text')
        _set_classes(el, p)
        if p.x:
            el.set('x', fmt(p.x))
        if p.y:
            el.set('y', fmt(p.y))
        if p.rotate is not None:
            el.set('transform', f"rotate({fmt(p.rotate)})")
        el.text = p.text
    else:
        raise TypeError(f"cannot serialize {type(p).__name__}")


def to_element(scene: Scene, width: Optional[float] = None, height: Optional[float] = None) -> ET.Element:
    """
    Build the SVG element tree for a scene.

    Args:
        scene: Scene to serialize
        width, height: Optional surface size attributes

    Returns:
        The root <svg> element
    """
    root = ET.Element('svg', {'xmlns': SVG_NS, 'class': 'graph'})
    if scene.view_box is not None:
        root.set('viewBox', ' '.join(fmt(v) for v in scene.view_box))
    if width is not None:
        root.set('width', fmt(width))
    if height is not None:
        root.set('height', fmt(height))

    defs = ET.SubElement(root, 'defs')
    _marker(defs, MARKER_ARROW, visited=False)
    _marker(defs, MARKER_ARROW_VISITED, visited=True)

    for c in scene.children:
        _emit(root, c, False)
    return root


def to_svg(scene: Scene, width: Optional[float] = None, height: Optional[float] = None) -> str:
    """Serialize a scene to an SVG document string."""
    return ET.tostring(to_element(scene, width, height), encoding='unicode')
