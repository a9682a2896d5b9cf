"""
recorder.py — Run Recorder & Analytics
========================================
Generates a complete trace for one RunConfig, then computes the
analytics metrics the UI needs for the Analytics panel and Comparison
Mode.

Usage:
    rec = Recorder()
    rec.start(RunConfig("bubble-sort", data=[5, 3, 8, 1]))
    rec.run_to_completion()          # cursor to the end, metrics computed
    metrics = rec.get_metrics()      # the analytics card
    rec.export()                     # serialisable snapshot for save/replay

Comparison Mode:
    The UI holds two Recorders (say bubble vs insertion sort), runs both
    to completion on the SAME data, then calls compare(rec1, rec2).
"""

import sys
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional

from algorithms import AlgoInfo
from algorithms.errors import InvalidArgument
from algorithms.step import Step
from engine.config import RunConfig, generator_kwargs, validate, with_defaults
from engine.logs import get_logger
from engine.stepper import Stepper


logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass: what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:        str   = ""
    algo_label:      str   = ""
    category:        str   = ""
    total_steps:     int   = 0          # number of Steps generated
    comparisons:     int   = 0
    swaps:           int   = 0          # swap + shift steps
    collisions:      int   = 0          # keys that landed on an occupied bucket / slot
    probes:          int   = 0          # probe steps past occupied slots
    moves:           int   = 0          # Tower of Hanoi disk moves
    max_stack_depth: int   = 0          # deepest call-stack snapshot
    final_kind:      str   = ""         # kind of the terminal step
    wall_time_ms:    float = 0.0        # wall-clock time to generate the trace
    memory_bytes:    int   = 0          # approx size of the step buffer (via sys.getsizeof)


# ---------------------------------------------------------------------------
# ComparisonResult: side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_steps:       str = ""   # which algo needed fewer steps
    winner_comparisons: str = ""   # which algo compared fewer times


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        config  : The (normalised) RunConfig of the current run.
        steps   : Full list of Steps from the run.
        metrics : Computed RunMetrics (available after run_to_completion).
        stepper : The Stepper holding the trace, for live playback.
    """

    def __init__(self, on_step: Optional[Callable[[Step], None]] = None):
        self.config:  Optional[RunConfig]  = None
        self.steps:   List[Step]           = []
        self.metrics: Optional[RunMetrics] = None
        self.stepper: Optional[Stepper]    = None

        self._on_step:   Optional[Callable[[Step], None]] = on_step
        self._algo_info: Optional[AlgoInfo] = None
        self._gen_ms:    float              = 0.0

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, config: RunConfig) -> None:
        """Validate `config`, generate its trace and load it into a Stepper."""
        logger.info("Generating steps for %s...", config.algo_key)
        try:
            info   = validate(config)
            kwargs = generator_kwargs(config, info)
        except InvalidArgument as exc:
            logger.error("%s", exc)
            raise

        self.config     = with_defaults(config)
        self._algo_info = info
        self.metrics    = None
        if info.input_kind == "keys":
            logger.info("Using %s hash function with %s", kwargs["hash_function"],
                        "chaining" if info.key == "hash-chaining" else "linear probing")
        else:
            logger.info("Current data: [%s]", ", ".join(str(v) for v in config.data))

        started      = time.monotonic()
        self.steps   = info.fn(**kwargs)
        self._gen_ms = (time.monotonic() - started) * 1000
        logger.info("Generated %d animation steps", len(self.steps))

        self.stepper = Stepper(on_step=self._on_step)
        self.stepper.load(self.steps)

    def run_to_completion(self) -> RunMetrics:
        """Move the cursor to the last step and compute metrics."""
        if self.stepper is None:
            raise RuntimeError("Call start() first.")
        self.stepper.jump_to_end()
        self.metrics = self._compute_metrics(self._gen_ms)
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    @property
    def algo_info(self) -> Optional[AlgoInfo]:
        return self._algo_info

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        if self.config is None:
            raise RuntimeError("Call start() first.")
        return {
            "algo_key": self.config.algo_key,
            "config":   self.config.to_dict(),
            "metrics":  asdict(self.metrics) if self.metrics else {},
            "steps":    [s.to_dict() for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        last = self.steps[-1] if self.steps else None

        kinds       = [getattr(s.kind, "value", s.kind) for s in self.steps]
        comparisons = kinds.count("compare")
        if last is not None and getattr(last, "comparisons", None) is not None:
            comparisons = last.comparisons

        collisions = kinds.count("table-full")
        for s in self.steps:
            hash_step = getattr(s, "hash_step", None)
            if s.kind in ("insert-chaining", "insert-probing") and hash_step and hash_step.collision:
                collisions += 1

        depth = max((len(getattr(s, "call_stack", [])) for s in self.steps), default=0)

        # approximate memory: sizeof the steps buffer
        mem = sys.getsizeof(self.steps)
        for s in self.steps:
            mem += sys.getsizeof(s)

        return RunMetrics(
            algo_key=info.key if info else "",
            algo_label=info.label if info else "",
            category=info.category if info else "",
            total_steps=len(self.steps),
            comparisons=comparisons,
            swaps=kinds.count("swap") + kinds.count("shift"),
            collisions=collisions,
            probes=kinds.count("collision-probe") + kinds.count("probe"),
            moves=(getattr(last, "move_count", None) or 0) if last else 0,
            max_stack_depth=depth,
            final_kind=kinds[-1] if kinds else "",
            wall_time_ms=round(wall_ms, 2),
            memory_bytes=mem,
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val, l_key, r_key):
        if l_val == r_val:
            return "tie"
        return l_key if l_val < r_val else r_key

    return ComparisonResult(
        left=l,
        right=r,
        winner_steps      =winner(l.total_steps, r.total_steps, l.algo_label, r.algo_label),
        winner_comparisons=winner(l.comparisons, r.comparisons, l.algo_label, r.algo_label),
    )
