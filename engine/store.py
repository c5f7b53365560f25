"""
store.py — In-process Workspace Store
=====================================
A dense graph plus a trace of hundreds of Steps is far too big for a
cookie session, so the web layer keeps each visitor's working state
(graph, recorder, player) here and puts only the token in the session.

Bounded LRU: the least recently used workspace is dropped once
`max_entries` is exceeded.  Nothing is persisted.
"""

import secrets
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Optional, Tuple

from graph import Graph
from engine.player import TracePlayer
from engine.recorder import Recorder


@dataclass
class Workspace:
    graph:    Optional[Graph]       = None
    recorder: Optional[Recorder]    = None
    player:   Optional[TracePlayer] = None

    def set_graph(self, graph: Graph) -> None:
        """A new graph invalidates the recorded run."""
        self.graph = graph
        self.clear_run()

    def load_run(self, recorder: Recorder) -> TracePlayer:
        self.recorder = recorder
        self.player   = recorder.player()
        return self.player

    def clear_run(self) -> None:
        self.recorder = None
        self.player   = None


class WorkspaceStore:
    def __init__(self, max_entries: int = 128):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._items: "OrderedDict[str, Workspace]" = OrderedDict()
        self._lock = threading.Lock()

    def create(self) -> Tuple[str, Workspace]:
        token = secrets.token_urlsafe(16)
        ws = Workspace()
        with self._lock:
            self._items[token] = ws
            while len(self._items) > self.max_entries:
                self._items.popitem(last=False)
        return token, ws

    def get(self, token: Optional[str]) -> Optional[Workspace]:
        if not token:
            return None
        with self._lock:
            ws = self._items.get(token)
            if ws is not None:
                self._items.move_to_end(token)
            return ws

    def discard(self, token: Optional[str]) -> None:
        if not token:
            return
        with self._lock:
            self._items.pop(token, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
