"""Shared fixtures for the graph trace engine tests."""

import pytest

from graph import Graph


@pytest.fixture
def directed_triangle():
    """A → B → C → A."""
    return Graph.from_adjacency_lists([[1], [2], [0]], directed=True)


@pytest.fixture
def undirected_triangle():
    """A — B — C — A, given as symmetric adjacency lists."""
    return Graph.from_adjacency_lists([[1, 2], [0, 2], [0, 1]], directed=False)


@pytest.fixture
def directed_dag():
    """A → B, A → C, B → C."""
    return Graph.from_adjacency_lists([[1, 2], [2], []], directed=True)


@pytest.fixture
def undirected_path():
    """A — B — C, no cycle."""
    return Graph.from_adjacency_lists([[1], [0, 2], [1]], directed=False)
