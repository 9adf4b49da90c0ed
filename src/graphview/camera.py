"""
Camera state and the pan/zoom pointer strategy.

The camera owns the view state (centre and zoom). It is the fallback
pointer handler: pointer gestures that do not grab a node pan the view.
"""

from __future__ import annotations

from typing import Optional, Callable, Union
from enum import IntEnum
import warnings

from .geom import Affine
from .rectangle import Rectangle


class ZoomWarning(UserWarning):
    """Warning about a zoom level outside the camera's range."""
    pass


class CameraEventType(IntEnum):
    """
    The camera fires one event type:
    - change: the centre or zoom changed
    """
    change = 0


class ViewState:
    """
    Camera state.

    Attributes:
        center_x, center_y: Model-space point at the centre of the view
        zoom: Viewport scale; the view spans base size * zoom model units
    """

    def __init__(self, center_x: float = 0.0, center_y: float = 0.0, zoom: float = 1.0):
        if not zoom > 0:
            raise ValueError(f"zoom must be positive, got {zoom!r}")
        self.center_x = center_x
        self.center_y = center_y
        self.zoom = zoom

    def __repr__(self) -> str:
        return f"ViewState({self.center_x!r}, {self.center_y!r}, zoom={self.zoom!r})"


class Camera:
    """
    Pan/zoom pointer strategy.

    Pointer down starts a pan, pointer move shifts the centre so the model
    point under the pointer stays under it, pointer up ends the pan.
    """

    def __init__(
        self,
        view_state: Optional[ViewState] = None,
        zoom_min: float = 1.0 / 20,
        zoom_max: float = 20.0
    ):
        if not 0 < zoom_min <= zoom_max:
            raise ValueError(f"invalid zoom range [{zoom_min!r}, {zoom_max!r}]")
        self.view_state = view_state if view_state is not None else ViewState()
        self.zoom_min = zoom_min
        self.zoom_max = zoom_max
        self._last: Optional[tuple[float, float]] = None
        self.event: Optional[dict] = None

    def on(self, e: Union[CameraEventType, str], listener: Callable[[dict], None]) -> Camera:
        """Subscribe a listener to an event."""
        if self.event is None:
            self.event = {}
        if isinstance(e, str):
            e = CameraEventType[e]
        self.event.setdefault(e, []).append(listener)
        return self

    def off(self, e: Union[CameraEventType, str], listener: Callable[[dict], None]) -> Camera:
        """Unsubscribe every registration of a listener from an event."""
        if isinstance(e, str):
            e = CameraEventType[e]
        if self.event and e in self.event:
            self.event[e] = [l for l in self.event[e] if l != listener]
        return self

    def trigger(self, e: dict) -> None:
        if self.event and e['type'] in self.event:
            for listener in list(self.event[e['type']]):
                listener(e)

    def _changed(self) -> None:
        self.trigger({'type': CameraEventType.change, 'view_state': self.view_state})

    @property
    def panning(self) -> bool:
        return self._last is not None

    def handle_pointer_down(self, x: float, y: float, screen_ctm: Optional[Affine] = None) -> None:
        self._last = (x, y)

    def handle_pointer_move(self, x: float, y: float, screen_ctm: Optional[Affine] = None) -> None:
        """
        Pan by the pointer delta since the last event.

        The device delta is mapped to model units through the inverse of
        screen_ctm; without a transform, one device pixel is taken to be
        zoom model units.
        """
        if self._last is None:
            return

        dx = x - self._last[0]
        dy = y - self._last[1]
        self._last = (x, y)
        if dx == 0 and dy == 0:
            return

        if screen_ctm is not None:
            d = screen_ctm.inverse().apply_vector(dx, dy)
            mdx, mdy = d.x, d.y
        else:
            mdx = dx * self.view_state.zoom
            mdy = dy * self.view_state.zoom

        self.view_state.center_x -= mdx
        self.view_state.center_y -= mdy
        self._changed()

    def handle_pointer_up(self) -> None:
        self._last = None

    def clamp_zoom(self, zoom: float) -> float:
        return min(max(zoom, self.zoom_min), self.zoom_max)

    def zoom_by(self, factor: float) -> None:
        """
        Multiply the zoom by factor, clamped to [zoom_min, zoom_max].

        Raises:
            ValueError: If factor is not positive
        """
        if not factor > 0:
            raise ValueError(f"zoom factor must be positive, got {factor!r}")
        zoom = self.clamp_zoom(self.view_state.zoom * factor)
        if zoom != self.view_state.zoom:
            self.view_state.zoom = zoom
            self._changed()

    def handle_wheel(self, delta_y: float) -> None:
        """Zoom out for positive wheel deltas, in for negative ones."""
        self.zoom_by(1.01 ** delta_y)

    def pan_to(self, x: float, y: float) -> None:
        self.view_state.center_x = x
        self.view_state.center_y = y
        self._changed()

    def zoom_to_fit(self, rect: Rectangle, dimensions) -> None:
        """
        Centre on rect and pick the smallest zoom that shows all of it.

        An empty rectangle leaves the camera unchanged. A zoom outside the
        camera's range is clamped with a ZoomWarning.
        """
        if rect.is_empty():
            return

        zoom = max(rect.width() / dimensions.base_width, rect.height() / dimensions.base_height)
        clamped = self.clamp_zoom(zoom)
        if clamped != zoom:
            warnings.warn(
                f"zoom {zoom!r} needed to fit {rect!r} is outside "
                f"[{self.zoom_min!r}, {self.zoom_max!r}]; using {clamped!r}",
                ZoomWarning,
                stacklevel=2
            )

        self.view_state.center_x = rect.cx()
        self.view_state.center_y = rect.cy()
        self.view_state.zoom = clamped
        self._changed()
