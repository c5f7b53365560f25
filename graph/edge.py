"""
edge.py — Graph Edge
====================
Connects two vertices. Carries an optional weight and its own visual
state so the renderer can colour-code edges as Discovery / Back / Cycle …
exactly as the algorithm touches them.

Design decisions:
  - `source` and `target` are vertex ids, NOT Vertex references.
    This keeps edges serialisable and avoids circular references.
    On the wire they are called `from` / `to`.
  - Frozen, like Vertex: a state change produces a new Edge.
  - `bidirectional` is True only for edges created as undirected pairs;
    such an edge is traversable both ways.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple


# ---------------------------------------------------------------------------
# Edge State Enum — visual encoding for the renderer
# ---------------------------------------------------------------------------
class EdgeState(Enum):
    NORMAL      = "normal"        # thin, neutral grey
    DISCOVERY   = "discovery"     # the edge being examined RIGHT NOW
    BACK        = "back"          # edge to an ancestor that is not reported as a cycle
    CROSS       = "cross"         # edge into an already finished subtree
    CYCLE       = "cycle"         # confirmed member of the detected cycle
    TREE        = "tree"          # DFS tree edge
    HIGHLIGHTED = "highlighted"   # confirmed member of the final path


# ---------------------------------------------------------------------------
# Edge
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Edge:
    """
    Attributes:
        source        : Id of the tail vertex.
        target        : Id of the head vertex.
        state         : EdgeState for visual encoding.
        weight        : Optional numeric cost (None for unweighted graphs).
        bidirectional : If True, traversal works in both directions.
    """

    source:        int
    target:        int
    state:         EdgeState       = EdgeState.NORMAL
    weight:        Optional[float] = None
    bidirectional: bool            = False

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def with_state(self, state: EdgeState) -> "Edge":
        if state is self.state:
            return self
        return replace(self, state=state)

    @property
    def display_key(self) -> Tuple[int, int]:
        """Identity for display: unordered pair if bidirectional, else ordered."""
        if self.bidirectional:
            return (min(self.source, self.target), max(self.source, self.target))
        return (self.source, self.target)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        data = {
            "from":          self.source,
            "to":            self.target,
            "state":         self.state.value,
            "bidirectional": self.bidirectional,
        }
        if self.weight is not None:
            data["weight"] = self.weight
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        weight = data.get("weight")
        return cls(
            source=int(data["from"]),
            target=int(data["to"]),
            state=EdgeState(data.get("state", "normal")),
            weight=float(weight) if weight is not None else None,
            bidirectional=bool(data.get("bidirectional", False)),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        arrow = " ↔ " if self.bidirectional else " → "
        return f"Edge({self.source}{arrow}{self.target}, w={self.weight}, state={self.state.value})"
