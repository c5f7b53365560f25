"""
vertex.py — Graph Vertex
========================
A vertex is a value: id, position, display label and visual state.

Design decisions:
  - Frozen.  Once a vertex lands inside a Step it can never change; an
    algorithm that wants to "mark" a vertex builds a new one with
    `with_state()`.  Unchanged vertices are shared between steps.
  - Equality and hashing use `id` only, so a VISITED copy of vertex 3 is
    still "vertex 3" in a set or dict.
  - Labels follow the A, B, … Z, AA, AB, … spreadsheet scheme.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple


# ---------------------------------------------------------------------------
# Vertex State Enum — maps 1-to-1 with the visual encoding palette
# ---------------------------------------------------------------------------
class VertexState(Enum):
    UNVISITED   = "unvisited"     # default grey
    VISITING    = "visiting"      # amber — on the DFS / traversal stack
    VISITED     = "visited"       # green — fully explored
    HIGHLIGHTED = "highlighted"   # accent — member of the found cycle / path, or degree-imbalance flag
    PROCESSED   = "processed"     # blue — fully explored, secondary pass


def vertex_label(index: int) -> str:
    """0 → 'A', 25 → 'Z', 26 → 'AA', 27 → 'AB', …"""
    if index < 0:
        raise ValueError(f"vertex index must be non-negative, got {index}")
    label = ""
    n = index + 1
    while n > 0:
        n, rem = divmod(n - 1, 26)
        label = chr(65 + rem) + label
    return label


# ---------------------------------------------------------------------------
# Vertex
# ---------------------------------------------------------------------------
@dataclass(frozen=True, eq=False)
class Vertex:
    """
    Attributes:
        id     : Dense integer id, equal to the vertex's index in Graph.vertices.
        x, y   : Canvas coordinates.
        label  : Human-readable name shown on the canvas.
        state  : Current VertexState for visual encoding.
    """

    id:    int
    x:     float       = 0.0
    y:     float       = 0.0
    label: str         = ""
    state: VertexState = VertexState.UNVISITED

    def __post_init__(self):
        if not self.label:
            object.__setattr__(self, "label", vertex_label(self.id))

    # ------------------------------------------------------------------
    # Copy-on-write helpers
    # ------------------------------------------------------------------
    def with_state(self, state: VertexState) -> "Vertex":
        if state is self.state:
            return self
        return replace(self, state=state)

    def moved_to(self, x: float, y: float) -> "Vertex":
        return replace(self, x=x, y=y)

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":    self.id,
            "x":     self.x,
            "y":     self.y,
            "label": self.label,
            "state": self.state.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Vertex":
        return cls(
            id=int(data["id"]),
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            label=data.get("label") or data.get("name") or "",
            state=VertexState(data.get("state", "unvisited")),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Vertex(id={self.id}, label={self.label}, state={self.state.value}, pos=({self.x:.2f},{self.y:.2f}))"

    def __eq__(self, other) -> bool:
        return isinstance(other, Vertex) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
