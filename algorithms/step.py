"""
step.py — Algorithm Step Snapshot
==================================
Every algorithm records a list of Step objects.  A Step is a complete,
frozen-in-time picture of the graph that the visualizer can render on
its own:

    • Every vertex with its state (unvisited / visiting / visited / …)
    • Every edge with its state (discovery / tree / back / cycle / …)
    • The vertex being processed right now
    • The cycle or (partial) path found so far
    • Which line of pseudocode is executing
    • A plain-English description of what just happened

Design decisions:
  - Step is a frozen dataclass holding tuples.  It never points at
    another Step, so the player can jump to any index in O(1) and play
    backwards for free.
  - Vertex and Edge are immutable themselves, so consecutive Steps share
    the objects that did not change instead of deep-copying the world.
  - TraceRecorder is the mutable scratch-pad the algorithm writes to;
    `snapshot()` freezes its current state into a new Step.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from graph import Edge, EdgeState, Vertex, VertexState


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number     : 0-based index of this step in the trace.
        vertices        : Every vertex, index == id.
        edges           : Every displayed edge.
        description     : Human-readable narration of what just happened.
        current_vertex  : Id of the vertex being processed right now.
        cycle_path      : Cycle found so far (cycle detection only).
        path            : Path built so far (Eulerian path only).
        pseudocode_line : 0-based index of the pseudocode line executing now.
        is_final        : True on the very last step.
    """

    step_number:     int                          = 0
    vertices:        Tuple[Vertex, ...]           = ()
    edges:           Tuple[Edge, ...]             = ()
    description:     str                          = ""
    current_vertex:  Optional[int]                = None
    cycle_path:      Optional[Tuple[int, ...]]    = None
    path:            Optional[Tuple[int, ...]]    = None
    pseudocode_line: int                          = 0
    is_final:        bool                         = False

    def vertex_states(self) -> List[VertexState]:
        return [v.state for v in self.vertices]

    def edge_states(self) -> List[EdgeState]:
        return [e.state for e in self.edges]

    def to_dict(self) -> dict:
        return {
            "step_number":     self.step_number,
            "vertices":        [v.to_dict() for v in self.vertices],
            "edges":           [e.to_dict() for e in self.edges],
            "description":     self.description,
            "current_vertex":  self.current_vertex,
            "cycle_path":      list(self.cycle_path) if self.cycle_path is not None else None,
            "path":            list(self.path) if self.path is not None else None,
            "pseudocode_line": self.pseudocode_line,
            "is_final":        self.is_final,
        }


@dataclass(frozen=True)
class AlgorithmResult:
    """Outcome of one algorithm run: the answer plus the full trace."""

    found:         bool
    path_or_cycle: Optional[Tuple[int, ...]]
    steps:         Tuple[Step, ...]

    @property
    def final_step(self) -> Optional[Step]:
        return self.steps[-1] if self.steps else None

    def to_dict(self) -> dict:
        return {
            "found":         self.found,
            "path_or_cycle": list(self.path_or_cycle) if self.path_or_cycle is not None else None,
            "steps":         [s.to_dict() for s in self.steps],
        }


# ---------------------------------------------------------------------------
# Recorder the algorithms write to
# ---------------------------------------------------------------------------
class TraceRecorder:
    """
    Holds the current world state and freezes it into Steps.

    Usage inside an algorithm:
        rec = TraceRecorder(graph.vertices, graph.edges)
        rec.mark_vertex(0, VertexState.VISITING)
        rec.snapshot("Exploring vertex A", current_vertex=0, line=2)
        …
        return rec.result(found=True, path_or_cycle=[0, 1, 2])
    """

    def __init__(self, vertices: Iterable[Vertex], edges: Iterable[Edge]):
        self._vertices: List[Vertex] = [v.with_state(VertexState.UNVISITED) for v in vertices]
        self._edges:    List[Edge]   = [e.with_state(EdgeState.NORMAL) for e in edges]
        self.steps:     List[Step]   = []

    # -- mutation of the working state --
    def mark_vertex(self, vertex_id: int, state: VertexState) -> None:
        self._vertices[vertex_id] = self._vertices[vertex_id].with_state(state)

    def mark_edge(self, edge_index: int, state: EdgeState) -> None:
        self._edges[edge_index] = self._edges[edge_index].with_state(state)

    def label(self, vertex_id: int) -> str:
        return self._vertices[vertex_id].label

    def labels(self, vertex_ids: Sequence[int]) -> str:
        return " → ".join(self.label(v) for v in vertex_ids)

    # -- freezing --
    def snapshot(
        self,
        description: str,
        current_vertex: Optional[int] = None,
        cycle_path: Optional[Sequence[int]] = None,
        path: Optional[Sequence[int]] = None,
        line: int = 0,
        is_final: bool = False,
    ) -> Step:
        step = Step(
            step_number=len(self.steps),
            vertices=tuple(self._vertices),
            edges=tuple(self._edges),
            description=description,
            current_vertex=current_vertex,
            cycle_path=tuple(cycle_path) if cycle_path is not None else None,
            path=tuple(path) if path is not None else None,
            pseudocode_line=line,
            is_final=is_final,
        )
        self.steps.append(step)
        return step

    def result(self, found: bool, path_or_cycle: Optional[Sequence[int]] = None) -> AlgorithmResult:
        return AlgorithmResult(
            found=found,
            path_or_cycle=tuple(path_or_cycle) if path_or_cycle is not None else None,
            steps=tuple(self.steps),
        )
