"""Tests for the Eulerian path trace (Hierholzer)."""

from graph import EdgeState, Graph, VertexState
from algorithms import find_eulerian_path


def _directed(lists):
    return Graph.from_adjacency_lists(lists, directed=True)


def _uses_every_edge_once(graph, path):
    remaining = [(e.source, e.target) for e in graph.edges]
    for a, b in zip(path, path[1:]):
        remaining.remove((a, b))
    return not remaining


class TestEulerianFound:
    """Graphs that have an Eulerian path or circuit."""

    def test_four_cycle_is_a_circuit(self):
        g = _directed([[1], [2], [3], [0]])
        result = find_eulerian_path(g)
        assert result.found
        assert result.path_or_cycle == (0, 1, 2, 3, 0)
        assert "circuit" in result.final_step.description

    def test_cycle_path_length(self):
        for n in range(2, 8):
            g = _directed([[(i + 1) % n] for i in range(n)])
            path = find_eulerian_path(g).path_or_cycle
            assert len(path) == n + 1
            assert path[0] == path[-1]

    def test_path_into_a_loop(self):
        # A→B, B→C, C→D, D→B: in = [0, 2, 1, 1], out = [1, 1, 1, 1]
        g = _directed([[1], [2], [3], [1]])
        in_degree, out_degree = g.degrees()
        assert in_degree == [0, 2, 1, 1]
        assert out_degree == [1, 1, 1, 1]

        result = find_eulerian_path(g)
        assert result.found
        assert result.path_or_cycle == (0, 1, 2, 3, 1)
        assert result.final_step.description == "Eulerian path found: A → B → C → D → B"
        assert _uses_every_edge_once(g, result.path_or_cycle)

    def test_parallel_edges(self):
        g = _directed([[1, 1], [0]])
        result = find_eulerian_path(g)
        assert result.found
        assert result.path_or_cycle == (0, 1, 0, 1)
        assert _uses_every_edge_once(g, result.path_or_cycle)

    def test_starts_at_plus_one_vertex(self):
        g = _directed([[], [0]])
        result = find_eulerian_path(g)
        assert result.path_or_cycle == (1, 0)
        assert result.steps[1].description == "Degree conditions satisfied. Starting vertex: B"

    def test_final_step_highlights(self):
        g = _directed([[1], [2], [0]])
        final = find_eulerian_path(g).final_step
        assert final.is_final
        assert final.path == (0, 1, 2, 0)
        assert final.edge_states() == [EdgeState.HIGHLIGHTED] * 3
        assert final.vertex_states() == [VertexState.HIGHLIGHTED] * 3

    def test_intermediate_steps_grow_path(self):
        g = _directed([[1], [2], [0]])
        steps = find_eulerian_path(g).steps
        moves = [s for s in steps if s.description.startswith("Moving from")]
        adds = [s for s in steps if s.description.startswith("Adding vertex")]
        assert len(moves) == 3
        assert len(adds) == 4
        assert [len(s.path) for s in adds] == [1, 2, 3, 4]
        assert [s.step_number for s in steps] == list(range(len(steps)))


class TestEulerianNotFound:
    """Graphs that fail the degree check or the traversal."""

    def test_degree_imbalance_stops_early(self):
        # A has out-degree 2 and in-degree 0
        g = _directed([[1, 2], [], []])
        result = find_eulerian_path(g)
        assert not result.found
        assert result.path_or_cycle is None
        assert len(result.steps) == 2
        final = result.final_step
        assert final.is_final
        assert final.description == "No Eulerian path exists: vertex A has in-degree 0 and out-degree 2"
        assert final.vertices[0].state is VertexState.HIGHLIGHTED
        assert not any(s.description.startswith("Moving from") for s in result.steps)

    def test_two_start_candidates(self):
        g = _directed([[1], [], [3], []])
        result = find_eulerian_path(g)
        assert not result.found
        assert len(result.steps) == 2
        assert "conditions not satisfied" in result.final_step.description

    def test_disconnected_balanced_components(self):
        g = _directed([[1], [0], [3], [2]])
        result = find_eulerian_path(g)
        assert not result.found
        assert result.final_step.description == (
            "Not all edges could be traversed. The graph may be disconnected."
        )

    def test_no_edges(self):
        g = _directed([[], []])
        result = find_eulerian_path(g)
        assert not result.found
        assert result.final_step.description == "No Eulerian path exists: the graph has no edges"

    def test_input_graph_untouched(self):
        g = _directed([[1], [2], [0]])
        before = g.to_dict()
        find_eulerian_path(g)
        assert g.to_dict() == before
