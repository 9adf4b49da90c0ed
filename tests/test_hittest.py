"""Tests for hit-testing."""

import pytest
import math
from graphview.hittest import HitPolicy, find_node_at, hits
from graphview.graph import Node
from graphview.geom import Point


class TestFindNodeAt:
    """Test find_node_at."""

    def test_hit(self):
        nodes = [Node('a', x=10, y=10)]
        assert find_node_at(Point(12, 11), nodes, 5) is nodes[0]

    def test_miss(self):
        """Test a miss returns None rather than raising."""
        nodes = [Node('a', x=10, y=10)]
        assert find_node_at(Point(20, 20), nodes, 5) is None

    def test_boundary_inclusive(self):
        """Test a point exactly at node_radius counts as a hit."""
        nodes = [Node('a', x=0, y=0)]
        assert find_node_at(Point(3, 4), nodes, 5) is nodes[0]
        assert find_node_at(Point(3, 4.001), nodes, 5) is None

    def test_empty(self):
        assert find_node_at(Point(0, 0), [], 5) is None

    def test_zero_radius(self):
        nodes = [Node('a', x=1, y=1)]
        assert find_node_at(Point(1, 1), nodes, 0) is nodes[0]
        assert find_node_at(Point(1, 1.5), nodes, 0) is None

    def test_overlap_first_wins(self):
        """Test overlapping nodes resolve to the first in list order."""
        nodes = [Node('a', x=0, y=0), Node('b', x=2, y=0), Node('c', x=1, y=0)]
        # Closest is 'c', but 'a' comes first
        assert find_node_at(Point(1, 0), nodes, 5).id == 'a'

    def test_overlap_skips_non_matching(self):
        nodes = [Node('far', x=100, y=100), Node('b', x=2, y=0), Node('c', x=1, y=0)]
        assert find_node_at(Point(1, 0), nodes, 5).id == 'b'

    def test_overlap_topmost(self):
        """Test the topmost policy picks the node drawn last."""
        nodes = [Node('a', x=0, y=0), Node('b', x=2, y=0), Node('far', x=100, y=0)]
        assert find_node_at(Point(1, 0), nodes, 5, HitPolicy.topmost).id == 'b'

    def test_coincident_nodes(self):
        nodes = [Node('a', x=5, y=5), Node('b', x=5, y=5)]
        assert find_node_at((5, 5), nodes, 1).id == 'a'
        assert find_node_at((5, 5), nodes, 1, HitPolicy.topmost).id == 'b'

    @pytest.mark.parametrize("px,py", [(0, 0), (4, 0), (0, -4.9), (3.5, 3.5), (6, 0)])
    def test_matches_distance(self, px, py):
        """Test the result agrees with the distance criterion."""
        nodes = [Node('a', x=0, y=0)]
        expected = math.hypot(px, py) <= 5
        assert (find_node_at(Point(px, py), nodes, 5) is not None) == expected


class TestHits:
    """Test hits index list."""

    def test_indices_in_order(self):
        nodes = [Node(i, x=float(i), y=0) for i in range(6)]
        assert list(hits(Point(2, 0), nodes, 1)) == [1, 2, 3]

    def test_no_hits(self):
        assert list(hits(Point(0, 0), [Node('a', x=9, y=9)], 1)) == []
