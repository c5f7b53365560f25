"""
generator.py — Random Graph Generator
=====================================
Builds a connected random graph, directed or undirected.

    g = generate_random_graph(7, 0.3, directed=True, allow_cycles=True,
                              rng=random.Random(42))

Steps:
  1. Place vertices evenly on a circle (the force layout refines this).
  2. Hamiltonian backbone 0 → 1 → … → N-1 so the graph is connected.
  3. Every remaining ordered pair (i, j) gets an edge with probability
     `edge_probability`.  Self-loops and duplicates are skipped; a
     directed acyclic request also skips every j < i.
  4. Directed + allow_cycles: a coin flip decides whether one explicit
     back edge is planted.  This only makes a cycle likely, it does not
     guarantee one.

All randomness comes from the injected `rng`, so a seeded
`random.Random` reproduces the exact same graph.
"""

import random
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from loguru import logger

from graph.graph import Graph, circle_positions


def generate_random_graph(
    vertex_count: int = 7,
    edge_probability: float = 0.3,
    directed: bool = True,
    allow_cycles: bool = True,
    radius: float = 220,
    center: Tuple[float, float] = (400, 250),
    rng: Optional[random.Random] = None,
) -> Graph:
    if vertex_count < 1:
        raise ValueError(f"vertex_count must be at least 1, got {vertex_count}")
    if not 0.0 <= edge_probability <= 1.0:
        raise ValueError(f"edge_probability must lie in [0, 1], got {edge_probability}")
    rng = rng or random.Random()

    g = Graph(directed=directed)
    for x, y in circle_positions(vertex_count, radius, center):
        g.add_vertex(x, y)

    # connectivity backbone
    for i in range(vertex_count - 1):
        g.add_edge(i, i + 1)

    # random edges
    for i in range(vertex_count):
        for j in range(vertex_count):
            if i == j or g.has_edge(i, j):
                continue
            if directed and not allow_cycles and j < i:
                continue
            if rng.random() < edge_probability:
                g.add_edge(i, j)

    # nudge towards at least one cycle
    planted = None
    if directed and allow_cycles and vertex_count >= 3 and rng.random() > 0.5:
        src = rng.randrange(2, vertex_count)
        dst = rng.randrange(0, src)
        if not g.has_edge(src, dst):
            g.add_edge(src, dst)
            planted = (src, dst)

    logger.debug(
        f"Generated graph: {vertex_count} vertices, {g.edge_count()} edges, "
        f"directed={directed}, allow_cycles={allow_cycles}, back_edge={planted}"
    )
    return g


# ---------------------------------------------------------------------------
# Presets — one per problem page
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class GraphPreset:
    key:              str
    vertex_count:     int
    edge_probability: float
    directed:         bool
    allow_cycles:     bool = True
    algorithm:        str  = ""      # registry key the preset is meant for


PRESETS: Dict[str, GraphPreset] = {
    "directed-cycle":   GraphPreset("directed-cycle",   7, 0.3, directed=True,  algorithm="cycle_directed"),
    "undirected-cycle": GraphPreset("undirected-cycle", 7, 0.3, directed=False, algorithm="cycle_undirected"),
    # denser, so that balanced degrees show up now and then
    "eulerian-path":    GraphPreset("eulerian-path",    6, 0.6, directed=True,  algorithm="eulerian_path"),
}


def generate_preset(
    key: str,
    radius: float = 180,
    center: Tuple[float, float] = (300, 200),
    rng: Optional[random.Random] = None,
) -> Graph:
    preset = PRESETS.get(key)
    if preset is None:
        raise ValueError(f"Unknown preset: {key}")
    return generate_random_graph(
        vertex_count=preset.vertex_count,
        edge_probability=preset.edge_probability,
        directed=preset.directed,
        allow_cycles=preset.allow_cycles,
        radius=radius,
        center=center,
        rng=rng,
    )
