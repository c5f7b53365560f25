"""
eulerian.py — Eulerian Path (Hierholzer)
========================================
Finds a trail that uses every edge of a directed graph exactly once.

Precondition (degree balance), with diff = out_degree - in_degree:
  • no vertex has |diff| > 1
  • either every diff is 0               → Eulerian circuit, start anywhere
    or exactly one +1 and exactly one -1  → path from the +1 vertex

Passing the precondition is not enough: two separate balanced edge
components pass it too.  After the walk every edge must have been
consumed, otherwise there is no Eulerian path.

Hierholzer's walk runs on an explicit stack: follow (and remove) an
unused edge while there is one; when stuck, pop the vertex onto the
path.  The path comes out reversed.

The result lists vertices, not edges: a trail over N edges has N+1
entries, and a circuit repeats its start at the end (a directed 3-cycle
gives A → B → C → A).
"""

from typing import List, Optional

from loguru import logger

from graph import EdgeState, Graph, VertexState
from algorithms.step import AlgorithmResult, TraceRecorder


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def EULERIAN_PATH(G):",                                     # 0
    "    compute in[v], out[v] for every v",                     # 1
    "    if some |out[v] - in[v]| > 1: return NONE",             # 2
    "    if #(+1) and #(-1) are not both 0 or both 1: return NONE",  # 3
    "    start ← the +1 vertex, else any v with out[v] > 0",     # 4
    "    stack ← [start]; path ← []",                            # 5
    "    while stack is not empty:",                             # 6
    "        u ← stack.top()",                                   # 7
    "        if u has an unused edge u→v:",                      # 8
    "            remove u→v; stack.push(v)",                     # 9
    "        else:",                                             # 10
    "            path.append(stack.pop())",                      # 11
    "    if unused edges remain: return NONE",                   # 12
    "    return reverse(path)",                                  # 13
]


def find_eulerian_path(graph: Graph) -> AlgorithmResult:
    n = graph.vertex_count()
    in_degree, out_degree = graph.degrees()
    rec = TraceRecorder(graph.vertices, graph.edges)

    rec.snapshot("Starting Eulerian path detection", line=1)

    # --- degree balance ---
    start: Optional[int] = None
    plus_one = minus_one = 0
    for v in range(n):
        diff = out_degree[v] - in_degree[v]
        if diff > 1 or diff < -1:
            rec.mark_vertex(v, VertexState.HIGHLIGHTED)
            rec.snapshot(
                f"No Eulerian path exists: vertex {rec.label(v)} has in-degree {in_degree[v]} "
                f"and out-degree {out_degree[v]}",
                current_vertex=v, line=2, is_final=True,
            )
            return rec.result(found=False)
        if diff == 1:
            plus_one += 1
            start = v
        elif diff == -1:
            minus_one += 1

    if not ((plus_one == 0 and minus_one == 0) or (plus_one == 1 and minus_one == 1)):
        for v in range(n):
            if out_degree[v] != in_degree[v]:
                rec.mark_vertex(v, VertexState.HIGHLIGHTED)
        rec.snapshot(
            f"No Eulerian path exists: in-degree and out-degree conditions not satisfied "
            f"({plus_one} vertices with one extra outgoing edge, "
            f"{minus_one} with one extra incoming edge)",
            line=3, is_final=True,
        )
        return rec.result(found=False)

    if graph.edge_count() == 0:
        rec.snapshot("No Eulerian path exists: the graph has no edges", line=3, is_final=True)
        return rec.result(found=False)

    if start is None:
        start = next(v for v in range(n) if out_degree[v] > 0)

    rec.snapshot(
        f"Degree conditions satisfied. Starting vertex: {rec.label(start)}",
        current_vertex=start, line=4,
    )

    # --- Hierholzer ---
    remaining = [graph.incident(v) for v in range(n)]
    stack: List[int] = [start]
    path:  List[int] = []
    used:  List[int] = []

    while stack:
        u = stack[-1]
        if remaining[u]:
            v, edge_idx = remaining[u].pop()
            rec.mark_edge(edge_idx, EdgeState.DISCOVERY)
            rec.mark_vertex(u, VertexState.VISITING)
            rec.snapshot(
                f"Moving from vertex {rec.label(u)} to {rec.label(v)}",
                current_vertex=u, path=path[::-1] if path else None, line=9,
            )
            stack.append(v)
            used.append(edge_idx)
        else:
            stack.pop()
            rec.mark_vertex(u, VertexState.VISITED)
            path.append(u)
            rec.snapshot(
                f"Adding vertex {rec.label(u)} to the path",
                current_vertex=u, path=path[::-1], line=11,
            )

    path.reverse()

    # --- every edge consumed? ---
    if any(remaining[v] for v in range(n)):
        rec.snapshot(
            "Not all edges could be traversed. The graph may be disconnected.",
            line=12, is_final=True,
        )
        logger.debug(f"Eulerian walk from {start} left edges unused in {graph!r}")
        return rec.result(found=False)

    for edge_idx in used:
        rec.mark_edge(edge_idx, EdgeState.HIGHLIGHTED)
    for v in path:
        rec.mark_vertex(v, VertexState.HIGHLIGHTED)

    kind = "circuit" if path[0] == path[-1] else "path"
    rec.snapshot(
        f"Eulerian path found: {rec.labels(path)}"
        + (" (a circuit: it ends where it started)" if kind == "circuit" else ""),
        path=path, line=13, is_final=True,
    )
    logger.debug(f"Eulerian {kind} over {len(path) - 1} edges found in {len(rec.steps)} steps")
    return rec.result(found=True, path_or_cycle=path)
