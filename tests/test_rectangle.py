"""Tests for rectangle module."""

import pytest
from graphview.rectangle import Rectangle, viewport, view_box, viewbox_transform, bounds
from graphview.camera import ViewState
from graphview.graph import Dimensions, Node
from graphview.geom import Point, TransformError, device_to_model


class TestRectangle:
    """Test Rectangle class."""

    def test_create_rectangle(self):
        """Test rectangle creation."""
        r = Rectangle(0, 10, 0, 5)
        assert r.x == 0
        assert r.X == 10
        assert r.y == 0
        assert r.Y == 5

    def test_empty_rectangle(self):
        """Test empty rectangle creation."""
        r = Rectangle.empty()
        assert r.x == float('inf')
        assert r.X == -float('inf')
        assert r.is_empty()

    def test_center(self):
        """Test center calculation."""
        r = Rectangle(0, 10, 0, 20)
        assert r.cx() == 5
        assert r.cy() == 10

    def test_dimensions(self):
        """Test width and height."""
        r = Rectangle(0, 10, 0, 5)
        assert r.width() == 10
        assert r.height() == 5

    def test_contains(self):
        r = Rectangle(0, 10, 0, 10)
        assert r.contains(Point(5, 5))
        assert r.contains(Point(10, 0))
        assert not r.contains(Point(11, 5))

    def test_union(self):
        """Test rectangle union."""
        u = Rectangle(0, 10, 0, 10).union(Rectangle(5, 15, 5, 15))
        assert (u.x, u.X, u.y, u.Y) == (0, 15, 0, 15)

    def test_inflate(self):
        """Test rectangle inflation."""
        r = Rectangle(0, 10, 0, 10).inflate(2)
        assert (r.x, r.X, r.y, r.Y) == (-2, 12, -2, 12)

    def test_view_box_round_trip(self):
        r = Rectangle.from_view_box([1, 2, 3, 4])
        assert r.view_box() == [1, 2, 3, 4]


class TestViewport:
    """Test viewport computation."""

    def test_centered_at_zoom_one(self):
        """Test unit zoom gives the base size centred on the camera."""
        dims = Dimensions(base_width=320, base_height=240)
        assert view_box(ViewState(0, 0, 1), dims) == [-160, -120, 320, 240]

    def test_zoom_scales_size(self):
        """Test zoom scales the size about the centre."""
        dims = Dimensions(base_width=100, base_height=50)
        r = viewport(ViewState(10, 20, 2), dims)
        assert r.width() == 200
        assert r.height() == 100
        assert r.cx() == 10
        assert r.cy() == 20
        assert r.view_box() == [-90, -30, 200, 100]

    def test_zoom_in(self):
        dims = Dimensions(base_width=100, base_height=100)
        r = viewport(ViewState(0, 0, 0.5), dims)
        assert r.view_box() == [-25, -25, 50, 50]

    @pytest.mark.parametrize("zoom", [0, -1])
    def test_non_positive_zoom(self, zoom):
        """Test zoom <= 0 is rejected."""
        class State:
            center_x = 0
            center_y = 0

        s = State()
        s.zoom = zoom
        with pytest.raises(ValueError):
            viewport(s, Dimensions())


class TestViewboxTransform:
    """Test viewBox to device transform."""

    def test_exact_fit(self):
        """Test a box matching the surface aspect fills it."""
        t = viewbox_transform([-50, -50, 100, 100], 200, 200)
        assert t.apply((-50, -50)) == Point(0, 0)
        assert t.apply((50, 50)) == Point(200, 200)

    def test_letterbox_centres(self):
        """Test slack on the wider axis is split evenly (xMidYMid meet)."""
        t = viewbox_transform([0, 0, 100, 100], 300, 100)
        assert t.apply((0, 0)) == Point(100, 0)
        assert t.apply((100, 100)) == Point(200, 100)

    def test_offset(self):
        t = viewbox_transform([0, 0, 10, 10], 10, 10, offset=(5, 7))
        assert t.apply((0, 0)) == Point(5, 7)

    def test_maps_back(self):
        """Test device centre maps to box centre."""
        t = viewbox_transform([-160, -160, 320, 320], 640, 480)
        p = device_to_model(320, 240, t)
        assert p.x == pytest.approx(0)
        assert p.y == pytest.approx(0)

    @pytest.mark.parametrize("box,w,h", [
        ([0, 0, 0, 10], 100, 100),
        ([0, 0, 10, 10], 0, 100),
    ])
    def test_degenerate(self, box, w, h):
        with pytest.raises(TransformError):
            viewbox_transform(box, w, h)


class TestBounds:
    """Test node bounds."""

    def test_bounds(self):
        nodes = [Node('a', x=0, y=5), Node('b', x=10, y=-5)]
        r = bounds(nodes, pad=2)
        assert (r.x, r.X, r.y, r.Y) == (-2, 12, -7, 7)

    def test_no_nodes(self):
        assert bounds([]).is_empty()
