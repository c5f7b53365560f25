"""
player.py — Trace Playback
==========================
The TracePlayer owns a cursor into a fully computed list of Steps and
exposes a play/pause/next/prev/seek/speed API.  The trace is never
recomputed: every navigation call only moves the cursor.

State machine:
    IDLE  →  load()  →  PAUSED
    PAUSED  →  play()   →  PLAYING
    PLAYING →  pause()  →  PAUSED
    PLAYING →  (last step reached) → FINISHED
    any     →  reset()  →  IDLE

Thread safety:
  Not thread-safe.  Drive it from one thread (the UI timer).
"""

import time
from enum import Enum
from typing import Callable, List, Optional, Sequence

from algorithms.step import Step


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlayerState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (seconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   2.0,
    "medium": 1.0,
    "fast":   0.3,
    "turbo":  0.1,
}

MIN_DELAY = 0.02


def slider_to_delay(value: float) -> float:
    """Speed slider 0..100 → seconds between steps (2.1 s down to 0.1 s)."""
    value = max(0.0, min(100.0, value))
    return (2100 - value * 20) / 1000


# ---------------------------------------------------------------------------
# TracePlayer
# ---------------------------------------------------------------------------
class TracePlayer:
    """
    Attributes:
        state       : Current PlayerState.
        steps       : The trace being played.
        current_idx : Index into `steps` that is currently displayed.
        speed       : Seconds between auto-advance ticks.
        on_step     : Optional callback(Step) fired every time the current step changes.
    """

    def __init__(
        self,
        steps: Optional[Sequence[Step]] = None,
        on_step: Optional[Callable[[Step], None]] = None,
    ):
        self.steps:       List[Step]   = []
        self.current_idx: int          = -1
        self.state:       PlayerState  = PlayerState.IDLE
        self.speed:       float        = SPEED_PRESETS["medium"]
        self.on_step:     Optional[Callable[[Step], None]] = on_step

        self._last_tick:  float = 0.0

        if steps:
            self.load(steps)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, steps: Sequence[Step]) -> None:
        """Attach a trace and show its first step."""
        self.steps = list(steps)
        if not self.steps:
            self.reset()
            return
        self.state = PlayerState.PAUSED
        self._goto(0)

    def reset(self) -> None:
        """Back to IDLE; call load() again."""
        self.steps       = []
        self.current_idx = -1
        self.state       = PlayerState.IDLE

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Advance one step.  Returns False if already at the end."""
        if self.current_idx >= len(self.steps) - 1:
            if self.steps:
                self.state = PlayerState.FINISHED
            return False
        self._goto(self.current_idx + 1)
        if self.current_idx == len(self.steps) - 1 and self.state == PlayerState.PLAYING:
            self.state = PlayerState.FINISHED
        return True

    def prev_step(self) -> bool:
        """Rewind one step.  Returns False if already at the start."""
        if self.current_idx <= 0:
            return False
        self._goto(self.current_idx - 1)
        if self.state == PlayerState.FINISHED:
            self.state = PlayerState.PAUSED
        return True

    def goto_step(self, idx: int) -> bool:
        """Jump to an arbitrary step index."""
        if not 0 <= idx < len(self.steps):
            return False
        self._goto(idx)
        if self.state == PlayerState.FINISHED and idx < len(self.steps) - 1:
            self.state = PlayerState.PAUSED
        return True

    def rewind(self) -> None:
        """Jump back to step 0."""
        if self.steps:
            self._goto(0)
            self.state = PlayerState.PAUSED

    def jump_to_end(self) -> None:
        if self.steps:
            self._goto(len(self.steps) - 1)
            self.state = PlayerState.FINISHED

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self, now: Optional[float] = None) -> None:
        if self.state in (PlayerState.IDLE, PlayerState.FINISHED):
            return
        self.state      = PlayerState.PLAYING
        self._last_tick = time.monotonic() if now is None else now

    def pause(self) -> None:
        if self.state == PlayerState.PLAYING:
            self.state = PlayerState.PAUSED

    def toggle_play(self, now: Optional[float] = None) -> None:
        if self.state == PlayerState.PLAYING:
            self.pause()
        else:
            self.play(now)

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> bool:
        """
        Call periodically.  If playing and `speed` seconds have passed
        since the last advance, moves one step forward.  Returns True if
        a step was taken.
        """
        if self.state != PlayerState.PLAYING:
            return False
        now = time.monotonic() if now is None else now
        if now - self._last_tick < self.speed:
            return False
        self._last_tick = now
        return self.next_step()

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        if preset not in SPEED_PRESETS:
            raise ValueError(f"Unknown speed preset: {preset}")
        self.speed = SPEED_PRESETS[preset]

    def set_speed_value(self, seconds: float) -> None:
        self.speed = max(MIN_DELAY, seconds)

    def set_speed_slider(self, value: float) -> None:
        self.speed = slider_to_delay(value)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step(self) -> Optional[Step]:
        if 0 <= self.current_idx < len(self.steps):
            return self.steps[self.current_idx]
        return None

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def is_finished(self) -> bool:
        return self.state == PlayerState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state == PlayerState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _goto(self, idx: int) -> None:
        self.current_idx = idx
        if self.on_step is not None:
            self.on_step(self.steps[idx])
