"""Tests for the force-directed layout."""

import random

import pytest

from graph import Graph, compute_layout, generate_random_graph, layout_force_directed


class TestForceLayout:
    """compute_layout() / layout_force_directed()."""

    def test_positions_stay_inside_margins(self):
        g = generate_random_graph(10, 0.5, rng=random.Random(2))
        for x, y in compute_layout(g, iterations=50, bounds=(600, 400), margin=50):
            assert 50 <= x <= 550
            assert 50 <= y <= 350

    def test_deterministic(self):
        g = generate_random_graph(6, 0.4, rng=random.Random(11))
        assert compute_layout(g) == compute_layout(g)

    def test_zero_iterations_only_clamps(self):
        g = Graph.from_adjacency_lists([[1], []], radius=10, center=(300, 200))
        positions = compute_layout(g, iterations=0)
        assert positions == [v.position for v in g.vertices]

    def test_coincident_vertices_do_not_blow_up(self):
        g = Graph()
        g.add_vertex(300, 200)
        g.add_vertex(300, 200)
        g.add_edge(0, 1)
        for x, y in compute_layout(g, iterations=20):
            assert 50 <= x <= 550
            assert 50 <= y <= 350

    def test_repulsion_pushes_unconnected_vertices_apart(self):
        g = Graph()
        g.add_vertex(290, 200)
        g.add_vertex(310, 200)
        (x0, _), (x1, _) = compute_layout(g, iterations=30)
        assert x1 - x0 > 20

    def test_empty_graph(self):
        assert compute_layout(Graph()) == []

    def test_layout_returns_new_graph(self):
        g = generate_random_graph(5, 0.3, rng=random.Random(4))
        laid_out = layout_force_directed(g, iterations=10)
        assert laid_out is not g
        assert laid_out.edges == g.edges
        assert laid_out.vertex_count() == g.vertex_count()


def _two_vertices(a, b, connected=False):
    g = Graph()
    g.add_vertex(*a)
    g.add_vertex(*b)
    if connected:
        g.add_edge(0, 1)
    return g


class TestExactPositions:
    """Hand-computed positions on a 600x400 canvas with margin 50 (k² = 75000)."""

    def test_repulsion_with_cooling(self):
        # both displacements exceed the 10-unit cap: 0.9 * 10 then 0.45 * 10
        g = _two_vertices((290, 200), (310, 200))
        positions = compute_layout(g, iterations=2)
        assert positions == [pytest.approx((276.5, 200.0)), pytest.approx((323.5, 200.0))]

    def test_attraction_beats_repulsion_when_far(self):
        # d = 480: attraction d²/k ≈ 841.3 against doubled repulsion 2·k²/d = 312.5
        g = _two_vertices((60, 200), (540, 200), connected=True)
        positions = compute_layout(g, iterations=1)
        assert positions == [pytest.approx((69.0, 200.0)), pytest.approx((531.0, 200.0))]

    def test_repulsion_beats_attraction_when_close(self):
        # d = 200: doubled repulsion 750 against attraction ≈ 146.1
        g = _two_vertices((200, 200), (400, 200), connected=True)
        positions = compute_layout(g, iterations=1)
        assert positions == [pytest.approx((191.0, 200.0)), pytest.approx((409.0, 200.0))]

    def test_clamped_to_margin(self):
        g = _two_vertices((52, 200), (60, 200))
        positions = compute_layout(g, iterations=1)
        assert positions == [pytest.approx((50.0, 200.0)), pytest.approx((69.0, 200.0))]
