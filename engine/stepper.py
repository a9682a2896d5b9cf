"""
stepper.py — Step-by-Step Playback Engine
==========================================
The Stepper is the ONLY object a UI interacts with during a run.
It owns one materialised trace (List[Step]) and a cursor into it, and
exposes a clean play/pause/next/prev/speed API.  Every time the cursor
lands on a step, `on_step(step)` fires and the step is logged.

State machine:
    IDLE     →  load()         →  PAUSED
    PAUSED   →  play()         →  PLAYING
    PLAYING  →  pause()        →  PAUSED
    PLAYING  →  (last step)    →  FINISHED
    PAUSED   →  next_step onto last → FINISHED
    FINISHED →  prev/goto/rewind → PAUSED
    any      →  reset()        →  IDLE

Timing:
    interval = base delay of the speed preset / speed multiplier,
    never shorter than MIN_INTERVAL (50 ms).

Threading:
  This class is NOT thread-safe.  One Stepper per trace, driven from
  one thread: call tick() from your event loop / timer, or run() for a
  blocking loop that checks the PLAYING flag before every tick.
"""

import time
from enum import Enum
from typing import Callable, List, Optional, Sequence

from algorithms.step import Step
from engine.logs import get_logger


logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (seconds per step at multiplier 1)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1.0,    # teaching mode
    "medium": 0.4,
    "fast":   0.15,   # demo mode
    "turbo":  0.05,
}

DEFAULT_SPEED = "medium"
MIN_INTERVAL  = 0.05

# step kinds shown as successes in the run log
SUCCESS_KINDS = {"found", "mark-sorted", "complete", "insert"}


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state       : Current StepperState.
        steps       : The loaded trace (never mutated).
        current_idx : Index into `steps` that is currently displayed.
        speed       : Name of the active speed preset.
        multiplier  : Playback speed multiplier (> 0).
        on_step     : Optional callback(Step) fired every time the cursor
                      moves.  The UI hooks its re-render here.
    """

    def __init__(self, on_step: Optional[Callable[[Step], None]] = None):
        self.steps:       List[Step]   = []
        self.current_idx: int          = -1
        self.state:       StepperState = StepperState.IDLE
        self.speed:       str          = DEFAULT_SPEED
        self.multiplier:  float        = 1.0
        self.on_step:     Optional[Callable[[Step], None]] = on_step

        # for auto-play timing
        self._last_tick:  float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, steps: Sequence[Step]) -> None:
        """Attach a materialised trace and show its first step."""
        if not steps:
            raise ValueError("Cannot load an empty trace.")
        self.steps       = list(steps)
        self.current_idx = -1
        self.state       = StepperState.PAUSED
        logger.info("Loaded %d steps", len(self.steps))
        self._goto(0)

    def reset(self) -> None:
        """Back to IDLE; caller must load() again."""
        self.steps       = []
        self.current_idx = -1
        self.state       = StepperState.IDLE
        logger.info("Visualization reset")

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Advance one step forward.  Returns False if already at end."""
        if not self.steps:
            return False
        if self.current_idx >= len(self.steps) - 1:
            self._finish()
            return False
        self._goto(self.current_idx + 1)
        if self.current_idx == len(self.steps) - 1:
            self._finish()
        return True

    def prev_step(self) -> bool:
        """Rewind one step.  Returns False if already at start."""
        if self.current_idx <= 0:
            return False
        self._resume_paused()
        self._goto(self.current_idx - 1)
        return True

    def goto_step(self, idx: int) -> bool:
        """Jump to an arbitrary step index."""
        if isinstance(idx, bool) or not isinstance(idx, int) or not 0 <= idx < len(self.steps):
            return False
        self._resume_paused()
        self._goto(idx)
        return True

    def rewind(self) -> None:
        """Jump back to step 0."""
        if not self.steps:
            return
        self._resume_paused()
        self._goto(0)

    def jump_to_end(self) -> None:
        """Jump to the final step."""
        if not self.steps:
            return
        self._goto(len(self.steps) - 1)
        self._finish()

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.state in (StepperState.IDLE, StepperState.FINISHED, StepperState.PLAYING):
            return
        self.state      = StepperState.PLAYING
        self._last_tick = time.monotonic()
        logger.info("Animation started")

    def pause(self) -> None:
        if self.state != StepperState.PLAYING:
            return
        self.state = StepperState.PAUSED
        logger.warning("Animation paused")

    def toggle_play(self) -> None:
        if self.state == StepperState.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> bool:
        """
        Call periodically (e.g. every 50 ms).  If playing and one
        interval has elapsed since the last tick, applies exactly one
        step.  Returns True if a step was taken.
        """
        if self.state != StepperState.PLAYING:
            return False
        now = time.monotonic() if now is None else now
        if now - self._last_tick < self.interval:
            return False
        self._last_tick = now
        return self.next_step()

    def run(self, sleep: Callable[[float], None] = time.sleep) -> int:
        """
        Blocking playback loop: wait one interval, then apply one step,
        until the trace ends or the state leaves PLAYING.  Returns the
        number of steps applied.
        """
        applied = 0
        while self.state == StepperState.PLAYING:
            sleep(self.interval)
            if self.state != StepperState.PLAYING:
                break
            if not self.next_step():
                break
            applied += 1
        return applied

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        if preset not in SPEED_PRESETS:
            raise ValueError(f"Unknown speed preset: {preset!r}")
        self.speed = preset

    def set_multiplier(self, multiplier: float) -> None:
        if isinstance(multiplier, bool) or not isinstance(multiplier, (int, float)) or multiplier <= 0:
            raise ValueError(f"Speed multiplier must be positive, got {multiplier!r}")
        self.multiplier = float(multiplier)
        logger.info("Playback speed set to %sx", multiplier)

    @property
    def interval(self) -> float:
        return max(MIN_INTERVAL, SPEED_PRESETS[self.speed] / self.multiplier)

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
        return self.state == StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state == StepperState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _finish(self) -> None:
        if self.state != StepperState.FINISHED:
            self.state = StepperState.FINISHED
            logger.info("Algorithm execution completed!", extra={"success": True})

    def _resume_paused(self) -> None:
        if self.state == StepperState.FINISHED:
            self.state = StepperState.PAUSED

    def _goto(self, idx: int) -> None:
        self.current_idx = idx
        step = self.steps[idx]
        self._log_step(step)
        if self.on_step:
            self.on_step(step)

    @staticmethod
    def _log_step(step: Step) -> None:
        kind = getattr(step.kind, "value", step.kind)
        logger.info("%s - %s", step.message, step.description, extra={"success": kind in SUCCESS_KINDS})
