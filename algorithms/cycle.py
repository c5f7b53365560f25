"""
cycle.py — Cycle Detection
==========================
Two DFS variants, each recording a full trace.

Directed  — three-colour DFS.  WHITE = untouched, GRAY = on the current
            DFS path, BLACK = finished.  An edge into a GRAY vertex is a
            back edge and closes a cycle.
Undirected — DFS that carries the parent.  The edge straight back to the
            parent is skipped; any other edge into an already visited
            vertex closes a cycle.

Both use an explicit stack of frames instead of Python recursion, which
keeps deep graphs clear of the recursion limit while visiting vertices
in exactly the order the recursive version would.

Steps are recorded at:
  1. Start
  2. Enter a vertex                  →  VISITING
  3. Examine an edge                 →  DISCOVERY
  4. Tree / cross / parent edge      →  TREE / CROSS / BACK
  5. Cycle found                     →  cycle edges CYCLE, vertices HIGHLIGHTED
  6. Finish a vertex                 →  VISITED
  7. No cycle                        →  terminal step
"""

from enum import Enum
from typing import List, Optional, Tuple

from loguru import logger

from graph import Edge, EdgeState, Graph, VertexState
from algorithms.step import AlgorithmResult, TraceRecorder


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
DIRECTED_PSEUDOCODE: List[str] = [
    "def DETECT_CYCLE(G):",                              # 0
    "    color[v] ← WHITE for every v",                  # 1
    "    for each vertex s in G:",                       # 2
    "        if color[s] = WHITE and DFS(s): return",    # 3
    "    return NO CYCLE",                               # 4
    "def DFS(u):",                                       # 5
    "    color[u] ← GRAY",                               # 6
    "    for each v in adj(u):",                         # 7
    "        if color[v] = GRAY: return CYCLE",          # 8
    "        if color[v] = WHITE:",                      # 9
    "            parent[v] ← u; DFS(v)",                 # 10
    "    color[u] ← BLACK",                              # 11
]

UNDIRECTED_PSEUDOCODE: List[str] = [
    "def DETECT_CYCLE(G):",                              # 0
    "    visited ← {}",                                  # 1
    "    for each vertex s in G:",                       # 2
    "        if s not visited and DFS(s, NONE): return", # 3
    "    return NO CYCLE",                               # 4
    "def DFS(u, parent):",                               # 5
    "    visited.add(u)",                                # 6
    "    for each v in adj(u):",                         # 7
    "        if v = parent: continue",                   # 8
    "        if v in visited: return CYCLE",             # 9
    "        DFS(v, u)",                                 # 10
    "    finished(u)",                                   # 11
]


class Color(Enum):
    WHITE = 0
    GRAY  = 1
    BLACK = 2


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def detect_cycle(graph: Graph, directed: Optional[bool] = None) -> AlgorithmResult:
    """Run the directed or undirected detector (defaults to graph.directed)."""
    if directed is None:
        directed = graph.directed
    if directed:
        return detect_directed_cycle(graph)
    return detect_undirected_cycle(graph)


# ---------------------------------------------------------------------------
# Directed
# ---------------------------------------------------------------------------
def detect_directed_cycle(graph: Graph) -> AlgorithmResult:
    n           = graph.vertex_count()
    adj         = [graph.incident(v) for v in range(n)]
    color       = [Color.WHITE] * n
    parent:      List[Optional[int]] = [None] * n
    parent_edge: List[Optional[int]] = [None] * n
    rec         = TraceRecorder(graph.vertices, graph.edges)

    rec.snapshot("Starting cycle detection in the directed graph", line=1)

    for root in range(n):
        if color[root] is not Color.WHITE:
            continue

        _enter(rec, root, line=6)
        color[root] = Color.GRAY
        stack: List[List[int]] = [[root, 0]]     # [vertex, next neighbour index]

        while stack:
            frame = stack[-1]
            u, i = frame
            if i >= len(adj[u]):
                color[u] = Color.BLACK
                rec.mark_vertex(u, VertexState.VISITED)
                rec.snapshot(f"Finished exploring vertex {rec.label(u)}", current_vertex=u, line=11)
                stack.pop()
                continue

            frame[1] += 1
            v, edge_idx = adj[u][i]
            rec.mark_edge(edge_idx, EdgeState.DISCOVERY)
            rec.snapshot(
                f"Checking neighbor {rec.label(v)} of vertex {rec.label(u)}",
                current_vertex=u, line=7,
            )

            if color[v] is Color.GRAY:
                cycle = _walk_parents(parent, u, v)
                cycle_edges = [parent_edge[w] for w in cycle[1:]] + [edge_idx]
                _highlight_cycle(rec, cycle, cycle_edges)
                rec.snapshot(
                    f"Cycle detected! Found a back edge from {rec.label(u)} to {rec.label(v)}: "
                    f"{rec.labels(cycle + [cycle[0]])}",
                    current_vertex=u, cycle_path=cycle, line=8, is_final=True,
                )
                logger.debug(f"Directed cycle found after {len(rec.steps)} steps: {cycle}")
                return rec.result(found=True, path_or_cycle=cycle)

            if color[v] is Color.WHITE:
                parent[v]      = u
                parent_edge[v] = edge_idx
                rec.mark_edge(edge_idx, EdgeState.TREE)
                _enter(rec, v, line=10)
                color[v] = Color.GRAY
                stack.append([v, 0])
            else:
                rec.mark_edge(edge_idx, EdgeState.CROSS)
                rec.snapshot(
                    f"Vertex {rec.label(v)} is already fully explored, "
                    f"so edge {rec.label(u)} → {rec.label(v)} cannot close a cycle",
                    current_vertex=u, line=9,
                )

    rec.snapshot("No cycle found in the graph", line=4, is_final=True)
    logger.debug(f"No directed cycle in {graph!r} ({len(rec.steps)} steps)")
    return rec.result(found=False)


# ---------------------------------------------------------------------------
# Undirected
# ---------------------------------------------------------------------------
def detect_undirected_cycle(graph: Graph) -> AlgorithmResult:
    n            = graph.vertex_count()
    display      = undirected_display_edges(graph.edges)
    adj          = _undirected_incidence(n, display)
    visited      = [False] * n
    parent:      List[Optional[int]] = [None] * n
    parent_edge: List[Optional[int]] = [None] * n
    rec          = TraceRecorder(graph.vertices, display)

    rec.snapshot("Starting cycle detection in the undirected graph", line=1)

    for root in range(n):
        if visited[root]:
            continue

        _enter(rec, root, line=6)
        visited[root] = True
        stack: List[List[int]] = [[root, 0]]

        while stack:
            frame = stack[-1]
            u, i = frame
            if i >= len(adj[u]):
                rec.mark_vertex(u, VertexState.VISITED)
                rec.snapshot(f"Finished exploring vertex {rec.label(u)}", current_vertex=u, line=11)
                stack.pop()
                continue

            frame[1] += 1
            v, edge_idx = adj[u][i]

            if v == parent[u]:
                rec.mark_edge(edge_idx, EdgeState.BACK)
                rec.snapshot(
                    f"Skipping edge {rec.label(u)} — {rec.label(v)}: "
                    f"{rec.label(v)} is the parent of {rec.label(u)}",
                    current_vertex=u, line=8,
                )
                rec.mark_edge(edge_idx, EdgeState.TREE)
                continue

            rec.mark_edge(edge_idx, EdgeState.DISCOVERY)
            rec.snapshot(
                f"Checking neighbor {rec.label(v)} of vertex {rec.label(u)}",
                current_vertex=u, line=7,
            )

            if visited[v]:
                cycle = _walk_parents(parent, u, v)
                cycle_edges = [parent_edge[w] for w in cycle[1:]] + [edge_idx]
                _highlight_cycle(rec, cycle, cycle_edges)
                rec.snapshot(
                    f"Cycle detected! Found a back edge from {rec.label(u)} to {rec.label(v)}: "
                    f"{rec.labels(cycle + [cycle[0]])}",
                    current_vertex=u, cycle_path=cycle, line=9, is_final=True,
                )
                logger.debug(f"Undirected cycle found after {len(rec.steps)} steps: {cycle}")
                return rec.result(found=True, path_or_cycle=cycle)

            parent[v]      = u
            parent_edge[v] = edge_idx
            rec.mark_edge(edge_idx, EdgeState.TREE)
            _enter(rec, v, line=10)
            visited[v] = True
            stack.append([v, 0])

    rec.snapshot("No cycle found in the graph", line=4, is_final=True)
    logger.debug(f"No undirected cycle in {graph!r} ({len(rec.steps)} steps)")
    return rec.result(found=False)


def undirected_display_edges(edges) -> List[Edge]:
    """One bidirectional edge per unordered vertex pair, first occurrence wins."""
    seen = set()
    result: List[Edge] = []
    for e in edges:
        undirected = Edge(source=e.source, target=e.target, weight=e.weight, bidirectional=True)
        if undirected.display_key in seen:
            continue
        seen.add(undirected.display_key)
        result.append(undirected)
    return result


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _undirected_incidence(n: int, edges: List[Edge]) -> List[List[Tuple[int, int]]]:
    adj: List[List[Tuple[int, int]]] = [[] for _ in range(n)]
    for idx, e in enumerate(edges):
        adj[e.source].append((e.target, idx))
        if e.source != e.target:
            adj[e.target].append((e.source, idx))
    return adj


def _enter(rec: TraceRecorder, u: int, line: int) -> None:
    rec.mark_vertex(u, VertexState.VISITING)
    rec.snapshot(f"Exploring vertex {rec.label(u)}", current_vertex=u, line=line)


def _walk_parents(parent: List[Optional[int]], current: int, ancestor: int) -> List[int]:
    """[ancestor, …, current] following parent links up from current."""
    chain = [current]
    node = current
    while node != ancestor:
        node = parent[node]
        chain.append(node)
    chain.reverse()
    return chain


def _highlight_cycle(rec: TraceRecorder, cycle: List[int], edge_indices: List[int]) -> None:
    for v in cycle:
        rec.mark_vertex(v, VertexState.HIGHLIGHTED)
    for idx in edge_indices:
        rec.mark_edge(idx, EdgeState.CYCLE)
