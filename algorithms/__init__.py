"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the engine knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "cycle_directed": AlgoInfo(key, label, fn, pseudocode, …),
        …
    }

Every `fn` takes a Graph and returns an AlgorithmResult.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from graph import Graph
from algorithms.step     import Step, AlgorithmResult, TraceRecorder
from algorithms.cycle    import (
    detect_cycle,
    detect_directed_cycle,
    detect_undirected_cycle,
    DIRECTED_PSEUDOCODE   as _dir_pc,
    UNDIRECTED_PSEUDOCODE as _und_pc,
)
from algorithms.eulerian import find_eulerian_path, PSEUDOCODE as _euler_pc


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                                  # registry key, e.g. "cycle_directed"
    label:            str                                  # human label
    fn:               Callable[[Graph], AlgorithmResult]
    pseudocode:       List[str]
    directed:         bool      = True                     # kind of graph it expects
    tags:             List[str] = field(default_factory=list)
    complexity_time:  str       = ""
    complexity_space: str       = ""
    description:      str       = ""                       # one-liner for the UI card
    preset:           str       = ""                       # generator preset that suits it

    def to_dict(self) -> dict:
        return {
            "key":              self.key,
            "label":            self.label,
            "pseudocode":       list(self.pseudocode),
            "directed":         self.directed,
            "tags":             list(self.tags),
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
            "preset":           self.preset,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "cycle_directed": AlgoInfo(
        key="cycle_directed", label="Cycle Detection (Directed)",
        fn=detect_directed_cycle, pseudocode=_dir_pc, directed=True,
        tags=["cycle", "dfs", "three-colouring"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Three-colour DFS. An edge into a GRAY vertex is a back edge and closes a cycle.",
        preset="directed-cycle",
    ),

    "cycle_undirected": AlgoInfo(
        key="cycle_undirected", label="Cycle Detection (Undirected)",
        fn=detect_undirected_cycle, pseudocode=_und_pc, directed=False,
        tags=["cycle", "dfs"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="DFS that skips the edge back to the parent. Any other visited neighbour closes a cycle.",
        preset="undirected-cycle",
    ),

    "eulerian_path": AlgoInfo(
        key="eulerian_path", label="Eulerian Path (Hierholzer)",
        fn=find_eulerian_path, pseudocode=_euler_pc, directed=True,
        tags=["path", "hierholzer", "degree-balance"],
        complexity_time="O(V + E)", complexity_space="O(E)",
        description="Checks in/out degree balance, then walks and removes edges, backtracking when stuck.",
        preset="eulerian-path",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "Step",
    "AlgorithmResult",
    "TraceRecorder",
    "detect_cycle",
    "detect_directed_cycle",
    "detect_undirected_cycle",
    "find_eulerian_path",
]
