"""
layout.py — Force-Directed Layout
=================================
Fruchterman–Reingold style relaxation that spreads vertices out so the
graph is legible on the canvas.

    k        = sqrt(usable_area / N)          optimal distance
    repulse  = k² / d                         every pair of vertices
    attract  = d² / k                         along every edge
    cooling  = 0.9 · (1 - iter / iterations)
    max step = 10 units per iteration

Pure transform: the input graph is never touched and there is no
randomness, so identical input gives identical output.
"""

import math
from typing import List, Tuple

from loguru import logger

from graph.graph import Graph

MAX_DISPLACEMENT = 10.0
COINCIDENT_DISTANCE = 0.1


def compute_layout(
    graph: Graph,
    iterations: int = 50,
    bounds: Tuple[float, float] = (600, 400),
    margin: float = 50,
) -> List[Tuple[float, float]]:
    """Run the simulation and return the final (x, y) for every vertex."""
    width, height = bounds
    xs = [v.x for v in graph.vertices]
    ys = [v.y for v in graph.vertices]
    n = len(xs)
    if n == 0:
        return []

    k = math.sqrt((width - 2 * margin) * (height - 2 * margin) / n)
    edges = [(e.source, e.target) for e in graph.edges]

    for it in range(iterations):
        disp_x = [0.0] * n
        disp_y = [0.0] * n

        # repulsion between all pairs
        for i in range(n):
            for j in range(n):
                if i == j:
                    continue
                dx = xs[j] - xs[i]
                dy = ys[j] - ys[i]
                d = math.hypot(dx, dy) or COINCIDENT_DISTANCE
                force = k * k / d
                fx = dx / d * force
                fy = dy / d * force
                disp_x[i] -= fx
                disp_y[i] -= fy
                disp_x[j] += fx
                disp_y[j] += fy

        # attraction along edges
        for i, j in edges:
            dx = xs[j] - xs[i]
            dy = ys[j] - ys[i]
            d = math.hypot(dx, dy) or COINCIDENT_DISTANCE
            force = d * d / k
            fx = dx / d * force
            fy = dy / d * force
            disp_x[i] += fx
            disp_y[i] += fy
            disp_x[j] -= fx
            disp_y[j] -= fy

        # cool, clamp, keep inside the canvas
        factor = 0.9 * (1 - it / iterations)
        for i in range(n):
            d = math.hypot(disp_x[i], disp_y[i]) or COINCIDENT_DISTANCE
            step = min(d, MAX_DISPLACEMENT)
            xs[i] += disp_x[i] / d * step * factor
            ys[i] += disp_y[i] / d * step * factor
            xs[i] = max(margin, min(width - margin, xs[i]))
            ys[i] = max(margin, min(height - margin, ys[i]))

    logger.debug(f"Force layout: {n} vertices, {len(edges)} edges, {iterations} iterations, k={k:.1f}")
    return list(zip(xs, ys))


def layout_force_directed(
    graph: Graph,
    iterations: int = 50,
    bounds: Tuple[float, float] = (600, 400),
    margin: float = 50,
) -> Graph:
    """Same as compute_layout, but returns a new Graph with the positions applied."""
    return graph.with_positions(compute_layout(graph, iterations, bounds, margin))
