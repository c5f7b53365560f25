"""
engine/
-------
Playback & recording layer.

    from engine import TracePlayer, Recorder, WorkspaceStore
"""

from engine.player   import TracePlayer, PlayerState, SPEED_PRESETS, slider_to_delay
from engine.recorder import Recorder, RunMetrics
from engine.store    import Workspace, WorkspaceStore

__all__ = [
    "TracePlayer",
    "PlayerState",
    "SPEED_PRESETS",
    "slider_to_delay",
    "Recorder",
    "RunMetrics",
    "Workspace",
    "WorkspaceStore",
]
