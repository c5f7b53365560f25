"""
graph.py — Graph Container
==========================
Single source of truth for a graph.  Generators build it, the layout
repositions it, algorithms read it.

Responsibilities:
  1. Append-only construction                (add_vertex / add_edge)
  2. Adjacency queries                       (adjacency, incident, degrees, …)
  3. Import from JSON document / adjacency lists / adjacency text
  4. Serialisation round-trip                (to_dict / from_dict)

Design decisions:
  - Vertices and edges live in lists; a vertex's id IS its index.
  - A private adjacency list `_adj[v] → [(neighbour, edge_index), …]` is
    maintained incrementally by add_edge and is never handed out, so it
    can never drift away from `edges`.  `adjacency` returns a copy.
  - Bidirectional edges register both directions; directed edges only
    `source → target`.
  - No deletions.  The engine only ever builds fresh graphs.
"""

import math
from collections import Counter
from typing import Dict, List, Optional, Sequence, Tuple

from graph.vertex import Vertex, VertexState
from graph.edge import Edge


class GraphFormatError(ValueError):
    """A user-supplied graph document could not be turned into a Graph."""


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# ---------------------------------------------------------------------------
# Circle placement — shared by the generator and every importer
# ---------------------------------------------------------------------------
def circle_positions(
    count: int,
    radius: float = 220,
    center: Tuple[float, float] = (400, 250),
) -> List[Tuple[float, float]]:
    cx, cy = center
    positions = []
    for i in range(count):
        angle = 2 * math.pi * i / count
        positions.append((cx + radius * math.cos(angle), cy + radius * math.sin(angle)))
    return positions


class Graph:
    """
    Attributes:
        directed   : bool – graph-level directedness (default for new edges)
        vertices   : tuple of Vertex, index == id
        edges      : tuple of Edge, insertion order
        _adj       : [[(neighbour_id, edge_index), …], …]
    """

    def __init__(self, directed: bool = True):
        self.directed:  bool                          = directed
        self._vertices: List[Vertex]                  = []
        self._edges:    List[Edge]                    = []
        self._adj:      List[List[Tuple[int, int]]]   = []

    # ==================================================================
    # CONSTRUCTION
    # ==================================================================
    def add_vertex(self, x: float = 0.0, y: float = 0.0, label: Optional[str] = None) -> Vertex:
        vertex = Vertex(id=len(self._vertices), x=x, y=y, label=label or "")
        self._vertices.append(vertex)
        self._adj.append([])
        return vertex

    def add_edge(
        self,
        source: int,
        target: int,
        weight: Optional[float] = None,
        bidirectional: Optional[bool] = None,
    ) -> Edge:
        n = len(self._vertices)
        if not (0 <= source < n and 0 <= target < n):
            raise ValueError(f"edge {source}→{target} references a vertex outside 0..{n - 1}")
        if bidirectional is None:
            bidirectional = not self.directed

        edge = Edge(source=source, target=target, weight=weight, bidirectional=bidirectional)
        index = len(self._edges)
        self._edges.append(edge)
        # maintain adjacency
        self._adj[source].append((target, index))
        if bidirectional and source != target:
            self._adj[target].append((source, index))
        return edge

    def with_positions(self, positions: Sequence[Tuple[float, float]]) -> "Graph":
        """New Graph with the same structure and the given vertex positions."""
        if len(positions) != len(self._vertices):
            raise ValueError(f"expected {len(self._vertices)} positions, got {len(positions)}")
        g = Graph(directed=self.directed)
        g._vertices = [v.moved_to(x, y) for v, (x, y) in zip(self._vertices, positions)]
        g._edges    = list(self._edges)
        g._adj      = [list(pairs) for pairs in self._adj]
        return g

    # ==================================================================
    # READ-ONLY VIEWS
    # ==================================================================
    @property
    def vertices(self) -> Tuple[Vertex, ...]:
        return tuple(self._vertices)

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return tuple(self._edges)

    @property
    def adjacency(self) -> List[List[int]]:
        """Out-neighbours per vertex, in insertion order.  A fresh copy."""
        return [[nbr for nbr, _ in pairs] for pairs in self._adj]

    def incident(self, vertex_id: int) -> List[Tuple[int, int]]:
        """[(neighbour_id, edge_index)] for every edge leaving vertex_id."""
        return list(self._adj[vertex_id])

    def has_edge(self, a: int, b: int) -> bool:
        return any(nbr == b for nbr, _ in self._adj[a])

    def degrees(self) -> Tuple[List[int], List[int]]:
        """(in_degree, out_degree) per vertex, counted over the adjacency list."""
        n = len(self._vertices)
        in_degree  = [0] * n
        out_degree = [0] * n
        for v, pairs in enumerate(self._adj):
            out_degree[v] = len(pairs)
            for nbr, _ in pairs:
                in_degree[nbr] += 1
        return in_degree, out_degree

    def check_invariants(self) -> bool:
        """Re-derive adjacency from edges and compare with the cached one."""
        derived: List[List[Tuple[int, int]]] = [[] for _ in self._vertices]
        for idx, e in enumerate(self._edges):
            derived[e.source].append((e.target, idx))
            if e.bidirectional and e.source != e.target:
                derived[e.target].append((e.source, idx))
        ids_dense = all(v.id == i for i, v in enumerate(self._vertices))
        return ids_dense and derived == self._adj

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "directed": self.directed,
            "vertices": [v.to_dict() for v in self._vertices],
            "edges":    [e.to_dict() for e in self._edges],
        }

    @classmethod
    def from_dict(cls, data: dict, max_vertices: Optional[int] = None) -> "Graph":
        """
        Build a Graph from a JSON document, validating it as user input.

            {"directed": true,
             "vertices": [{"id": 0, "x": 100, "y": 100, "name": "A"}, …],
             "edges":    [{"from": 0, "to": 1}, …]}

        Vertices must carry dense ids 0..N-1 (any order); edges must
        reference existing ids.  Raises GraphFormatError otherwise.
        """
        if not isinstance(data, dict):
            raise GraphFormatError("Invalid format: expected a JSON object")

        raw_vertices = data.get("vertices")
        if not isinstance(raw_vertices, list):
            raise GraphFormatError('Invalid format: "vertices" must be an array')
        if not raw_vertices:
            raise GraphFormatError("Graph must have at least one vertex")
        if max_vertices is not None and len(raw_vertices) > max_vertices:
            raise GraphFormatError(f"Graph can have at most {max_vertices} vertices")

        vertices: Dict[int, Vertex] = {}
        for raw in raw_vertices:
            if not isinstance(raw, dict) or not _is_int(raw.get("id")):
                raise GraphFormatError("Each vertex must have a numeric id")
            try:
                v = Vertex.from_dict(raw)
            except (TypeError, ValueError) as exc:
                raise GraphFormatError(f"Invalid vertex {raw.get('id')}: {exc}") from exc
            if v.id in vertices:
                raise GraphFormatError(f"Duplicate vertex id {v.id}")
            vertices[v.id] = v
        if sorted(vertices) != list(range(len(vertices))):
            raise GraphFormatError("Vertex ids must be consecutive integers starting at 0")

        raw_edges = data.get("edges", [])
        if not isinstance(raw_edges, list):
            raise GraphFormatError('Invalid format: "edges" must be an array')

        directed = data.get("directed", True)
        if not isinstance(directed, bool):
            raise GraphFormatError('Invalid format: "directed" must be true or false')
        g = cls(directed=directed)
        for i in range(len(vertices)):
            v = vertices[i]
            g._vertices.append(v.with_state(VertexState.UNVISITED))
            g._adj.append([])

        for raw in raw_edges:
            if not isinstance(raw, dict) or "from" not in raw or "to" not in raw:
                raise GraphFormatError('Each edge must have "from" and "to"')
            if not all(_is_int(raw[end]) for end in ("from", "to")):
                raise GraphFormatError(f"Edge endpoints must be integer vertex ids: {raw}")
            try:
                e = Edge.from_dict(raw)
            except (TypeError, ValueError) as exc:
                raise GraphFormatError(f"Invalid edge {raw}: {exc}") from exc
            if e.source not in vertices or e.target not in vertices:
                raise GraphFormatError(f"Edge references non-existent vertex: {e.source} → {e.target}")
            bidirectional = e.bidirectional if "bidirectional" in raw else not directed
            g.add_edge(e.source, e.target, weight=e.weight, bidirectional=bidirectional)
        return g

    # ==================================================================
    # IMPORTERS
    # ==================================================================
    @classmethod
    def from_adjacency_lists(
        cls,
        lists: Sequence[Sequence[int]],
        directed: bool = True,
        radius: float = 220,
        center: Tuple[float, float] = (400, 250),
    ) -> "Graph":
        """
        Build from raw adjacency lists, vertices laid out on a circle.

        Directed: one edge per entry, so `adjacency` reproduces the input.
        Undirected: `i → j` and `j → i` collapse into one bidirectional
        edge; an entry whose mirror is missing still gets an edge.
        """
        g = cls(directed=directed)
        for x, y in circle_positions(len(lists), radius, center):
            g.add_vertex(x, y)

        if directed:
            for i, nbrs in enumerate(lists):
                for j in nbrs:
                    g.add_edge(i, j, bidirectional=False)
            return g

        awaiting_mirror: Counter = Counter()
        for i, nbrs in enumerate(lists):
            for j in nbrs:
                if i == j:
                    g.add_edge(i, j, bidirectional=True)
                elif awaiting_mirror[(j, i)] > 0:
                    awaiting_mirror[(j, i)] -= 1
                else:
                    g.add_edge(i, j, bidirectional=True)
                    awaiting_mirror[(i, j)] += 1
        return g

    @classmethod
    def from_adjacency_text(
        cls,
        text: str,
        directed: bool = True,
        radius: float = 220,
        center: Tuple[float, float] = (400, 250),
    ) -> "Graph":
        """
        Parse a simple text adjacency list.

        Supported formats (one vertex per line):
            A: B C D            → A connects to B, C, D
            A: B(3) C(7)        → A→B weight 3, A→C weight 7
            0 -> 1,2,3          → alternate arrow syntax

        Vertex ids are assigned in order of first appearance; the text
        tokens become labels.  Undirected input lists each edge once.
        """
        order: List[str] = []
        entries: List[Tuple[str, str, Optional[float]]] = []

        def intern(token: str) -> None:
            if token not in order:
                order.append(token)

        for lineno, line in enumerate(text.strip().splitlines(), start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if ":" in line:
                parts = line.split(":", 1)
            elif "→" in line:
                parts = line.split("→", 1)
            elif "->" in line:
                parts = line.split("->", 1)
            else:
                raise GraphFormatError(f"Line {lineno}: expected 'vertex: neighbours'")

            src = parts[0].strip()
            if not src:
                raise GraphFormatError(f"Line {lineno}: missing source vertex")
            intern(src)

            for token in parts[1].replace(",", " ").split():
                weight: Optional[float] = None
                if "(" in token and token.endswith(")"):
                    tgt, w_str = token[:-1].split("(", 1)
                    try:
                        weight = float(w_str)
                    except ValueError as exc:
                        raise GraphFormatError(f"Line {lineno}: bad weight '{w_str}'") from exc
                else:
                    tgt = token
                intern(tgt)
                entries.append((src, tgt, weight))

        if not order:
            raise GraphFormatError("Graph must have at least one vertex")

        g = cls(directed=directed)
        for label, (x, y) in zip(order, circle_positions(len(order), radius, center)):
            g.add_vertex(x, y, label=label)

        seen = set()
        for src, tgt, weight in entries:
            a, b = order.index(src), order.index(tgt)
            key = (a, b) if directed else (min(a, b), max(a, b))
            if key in seen:
                continue
            seen.add(key)
            g.add_edge(a, b, weight=weight)
        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def vertex_count(self) -> int:
        return len(self._vertices)

    def edge_count(self) -> int:
        return len(self._edges)

    def __repr__(self) -> str:
        return f"Graph(vertices={self.vertex_count()}, edges={self.edge_count()}, directed={self.directed})"
