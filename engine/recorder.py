"""
recorder.py — Run Recorder & Analytics
========================================
Runs one algorithm on one graph, keeps the complete AlgorithmResult and
computes the analytics card the UI shows next to the player.

Usage:
    rec = Recorder()
    rec.run(algo_key="cycle_directed", graph=g)   # computes the whole trace
    metrics = rec.get_metrics()                   # the analytics card
    player  = rec.player()                        # cursor over rec.steps
    rec.export()                                  # serialisable snapshot
"""

import sys
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from loguru import logger

from graph import EdgeState, Graph, VertexState
from algorithms import AlgoInfo, AlgorithmResult, get_algorithm
from algorithms.step import Step
from engine.player import TracePlayer


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:         str   = ""
    algo_label:       str   = ""
    found:            bool  = False
    result_length:    int   = 0          # vertices in the cycle / path
    total_steps:      int   = 0
    vertices_touched: int   = 0          # vertices no longer UNVISITED at the end
    edges_touched:    int   = 0          # edges no longer NORMAL at the end
    wall_time_ms:     float = 0.0
    memory_bytes:     int   = 0          # approx size of the step buffer


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        result  : The AlgorithmResult of the last run.
        metrics : RunMetrics of the last run.
    """

    def __init__(self):
        self.result:  Optional[AlgorithmResult] = None
        self.metrics: Optional[RunMetrics]      = None

        self._algo_info: Optional[AlgoInfo] = None
        self._graph:     Optional[Graph]    = None

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------
    def run(self, algo_key: str, graph: Graph) -> RunMetrics:
        """Compute the full trace for `algo_key` on `graph`."""
        info = get_algorithm(algo_key)
        if info is None:
            raise ValueError(f"Unknown algorithm: {algo_key}")

        self._algo_info = info
        self._graph     = graph

        start = time.monotonic()
        self.result = info.fn(graph)
        wall_ms = (time.monotonic() - start) * 1000

        self.metrics = self._compute_metrics(wall_ms)
        logger.debug(
            f"{info.key}: found={self.metrics.found}, steps={self.metrics.total_steps}, "
            f"{self.metrics.wall_time_ms} ms"
        )
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    @property
    def steps(self) -> List[Step]:
        return list(self.result.steps) if self.result else []

    def player(self) -> TracePlayer:
        """A fresh TracePlayer positioned on step 0 of the recorded trace."""
        return TracePlayer(self.steps)

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "graph":    self._graph.to_dict() if self._graph else {},
            "metrics":  asdict(self.metrics) if self.metrics else {},
            "result":   self.result.to_dict() if self.result else {},
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info   = self._algo_info
        result = self.result
        last   = result.final_step if result else None

        vertices_touched = 0
        edges_touched    = 0
        if last is not None:
            vertices_touched = sum(1 for v in last.vertices if v.state is not VertexState.UNVISITED)
            edges_touched    = sum(1 for e in last.edges if e.state is not EdgeState.NORMAL)

        # approximate memory: sizeof the steps buffer
        mem = sys.getsizeof(result.steps) if result else 0
        for s in (result.steps if result else ()):
            mem += sys.getsizeof(s) + sys.getsizeof(s.vertices) + sys.getsizeof(s.edges)

        return RunMetrics(
            algo_key=info.key if info else "",
            algo_label=info.label if info else "",
            found=bool(result and result.found),
            result_length=len(result.path_or_cycle) if result and result.path_or_cycle else 0,
            total_steps=len(result.steps) if result else 0,
            vertices_touched=vertices_touched,
            edges_touched=edges_touched,
            wall_time_ms=round(wall_ms, 2),
            memory_bytes=mem,
        )
