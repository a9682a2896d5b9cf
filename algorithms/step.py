"""
step.py - Algorithm Step Snapshot
==================================
Every algorithm is a generator that yields Step objects.
A Step is a frozen-in-time picture of everything a renderer needs
to draw one frame:

    • The working data (array, hash table, call stack, towers)
    • Which indices are being compared / swapped / shifted / sorted
    • Which line of pseudocode is executing right now
    • A one-line message, a short highlight and a longer description
      explaining *why* this step happened

Design decisions:
  - Each algorithm family gets its own Step subclass and its own closed
    kind Enum.  A renderer dispatches on `kind` and reads only the
    fields that family defines.
  - Steps are SNAPSHOTS.  StepBuilder deep-copies every snapshot value
    it is handed, so a generator can keep mutating its working list and
    no two Steps ever share a container.
  - `overlay` is a free-form dict for per-algorithm extras
    (current pass, minimum index, key being inserted, …).
"""

import copy
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Type


# ---------------------------------------------------------------------------
# Step kinds: one closed vocabulary per algorithm family
# ---------------------------------------------------------------------------
class SortKind(str, Enum):
    INITIALIZE       = "initialize"
    PASS_START       = "pass-start"
    COMPARE          = "compare"
    SWAP             = "swap"
    NO_SWAP          = "no-swap"
    NEW_MINIMUM      = "new-minimum"
    MARK_SORTED      = "mark-sorted"
    SELECT           = "select"
    SHIFT            = "shift"
    FOUND_POSITION   = "found-position"
    INSERT_BEGINNING = "insert-beginning"
    INSERT           = "insert"
    DIVIDE           = "divide"
    MERGE            = "merge"
    SELECT_PIVOT     = "select-pivot"
    PLACE_PIVOT      = "place-pivot"
    COMPLETE         = "complete"


class SearchKind(str, Enum):
    INITIALIZE    = "initialize"
    EXAMINE       = "examine"
    COMPARE       = "compare"
    CALCULATE_MID = "calculate-mid"
    EXAMINE_MID   = "examine-mid"
    SEARCH_LEFT   = "search-left"
    SEARCH_RIGHT  = "search-right"
    FOUND         = "found"
    NOT_FOUND     = "not-found"


class HashKind(str, Enum):
    INITIALIZE         = "initialize"
    HASH_COMPUTATION   = "hash-computation"
    HASH_RESULT        = "hash-result"
    COLLISION_DETECTED = "collision-detected"
    COLLISION_PROBE    = "collision-probe"
    INSERT_CHAINING    = "insert-chaining"
    INSERT_PROBING     = "insert-probing"
    TABLE_FULL         = "table-full"
    COMPLETE           = "complete"
    # lookup replay
    SEARCH_START       = "search-start"
    BUCKET_SCAN        = "bucket-scan"
    COMPARE            = "compare"
    PROBE              = "probe"
    FOUND              = "found"
    NOT_FOUND          = "not-found"


class RecursionKind(str, Enum):
    CALL           = "call"
    BASE_CASE      = "base-case"
    RETURN         = "return"
    MEMOIZED       = "memoized"
    INITIAL        = "initial"
    MOVE           = "move"
    RECURSIVE_CALL = "recursive-call"
    COMPLETE       = "complete"


# Kinds a trace of each family may end on.
TERMINAL_KINDS = {
    "sorting":   {SortKind.COMPLETE, SortKind.MERGE, SortKind.PLACE_PIVOT},
    "searching": {SearchKind.FOUND, SearchKind.NOT_FOUND},
    "hashing":   {HashKind.COMPLETE, HashKind.FOUND, HashKind.NOT_FOUND},
    "recursion": {RecursionKind.COMPLETE},
}


# ---------------------------------------------------------------------------
# Small value records carried inside snapshots
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Entry:
    """One key/value pair stored in a hash table slot or bucket."""
    key:   str
    value: str


@dataclass(frozen=True)
class Frame:
    """One active recursive invocation on the call stack."""
    argument: int
    depth:    int


@dataclass(frozen=True)
class Move:
    disk:   int
    source: str
    target: str


@dataclass(frozen=True)
class HashComputation:
    """
    How a key was turned into a table index.

    Attributes:
        key           : The key in string form.
        hash_value    : Raw number before reduction to a table index.
        index         : Final (or starting) table index.
        function      : Name of the hash function used.
        derivation    : Human-readable lines showing the arithmetic.
        initial_index : Index the hash function chose (probing only).
        current_probe : Slot being probed right now (probing only).
        probe_count   : Probes spent on this key so far.
        occupant      : Entry found in the probed slot, if any.
        collision     : True when the target bucket was already in use.
    """
    key:           str
    hash_value:    float                = 0
    index:         Optional[int]        = None
    function:      str                  = ""
    derivation:    Tuple[str, ...]      = ()
    initial_index: Optional[int]        = None
    current_probe: Optional[int]        = None
    probe_count:   int                  = 0
    occupant:      Optional[Entry]      = None
    collision:     bool                 = False


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Step:
    """
    Attributes:
        kind            : Family-specific kind Enum member (also a str).
        sequence_number : 1-based position of this step in its trace.
        message         : One-line present-tense description.
        highlight       : Short emphasis string.
        description     : Longer rationale for the step.
        pseudocode_line : 0-based index into the algorithm's PSEUDOCODE.
        overlay         : Free-form dict for algorithm-specific extras.
        is_final        : True on the very last step of the trace.
    """

    kind:            str            = ""
    sequence_number: int            = 0
    message:         str            = ""
    highlight:       str            = ""
    description:     str            = ""
    pseudocode_line: int            = 0
    overlay:         Dict[str, Any] = field(default_factory=dict)
    is_final:        bool           = False

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly copy; `kind` becomes its plain string value."""
        data = asdict(self)
        data["kind"] = self.kind.value if isinstance(self.kind, Enum) else self.kind
        return data


@dataclass(frozen=True)
class SortStep(Step):
    array:     List[Any]           = field(default_factory=list)
    comparing: List[int]           = field(default_factory=list)
    swapping:  List[int]           = field(default_factory=list)
    sorted:    List[int]           = field(default_factory=list)
    shifting:  List[int]           = field(default_factory=list)
    pivot:     Optional[int]       = None
    bounds:    Optional[List[int]] = None     # [lo, hi] of the active range
    merged:    List[int]           = field(default_factory=list)


@dataclass(frozen=True)
class SearchStep(Step):
    array:         List[Any]      = field(default_factory=list)
    target:        Any            = None
    current_index: Optional[int]  = None
    bounds:        List[int]      = field(default_factory=list)
    mid:           Optional[int]  = None
    value:         Any            = None
    is_match:      Optional[bool] = None
    comparison:    Optional[str]  = None      # "equal" | "less" | "greater"
    found_index:   Optional[int]  = None
    comparisons:   Optional[int]  = None


@dataclass(frozen=True)
class HashStep(Step):
    table:       List[Any]                 = field(default_factory=list)
    hash_step:   Optional[HashComputation] = None
    inserted:    Optional[int]             = None
    key:         Optional[str]             = None
    value:       Optional[str]             = None
    load_factor: Optional[float]           = None
    probes:      Optional[int]             = None
    found_index: Optional[int]             = None
    result:      Optional[str]             = None


@dataclass(frozen=True)
class RecursionStep(Step):
    call_stack:    List[Frame]                = field(default_factory=list)
    towers:        Optional[List[List[int]]]  = None
    move:          Optional[Move]             = None
    move_count:    Optional[int]              = None
    memo_snapshot: Optional[Dict[int, int]]   = None
    value:         Optional[int]              = None
    result:        Optional[int]              = None
    final_result:  Optional[int]              = None
    fib_tree:      bool                       = False
    depth:         Optional[int]              = None


# ---------------------------------------------------------------------------
# Convenience builder so algorithms don't have to spell out every kwarg
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Mutable scratch-pad that algorithms use to construct Steps cleanly.
    It also owns the trace's sequence counter, so nested recursive
    generators can share one builder and still number steps in order.

    Usage inside an algorithm generator:
        sb = StepBuilder(SortStep)
        sb.message     = "Comparing 5 and 3"
        sb.highlight   = "Compare elements at positions 0 and 1"
        sb.description = "5 > 3 - Need to swap"
        sb.pseudocode_line = 3
        yield sb.build(SortKind.COMPARE, array=result, comparing=[0, 1])
    """

    def __init__(self, step_cls: Type[Step] = Step):
        self.step_cls = step_cls
        self.step_no  = 0
        self.reset()

    def reset(self):
        self.message:         str            = ""
        self.highlight:       str            = ""
        self.description:     str            = ""
        self.pseudocode_line: int            = 0
        self.overlay:         Dict[str, Any] = {}

    def build(self, kind: Enum, is_final: bool = False, **snapshot: Any) -> Step:
        """Number, deep-copy and freeze the current scratch state."""
        for name in ("message", "highlight", "description"):
            if not getattr(self, name):
                raise ValueError(f"step '{getattr(kind, 'value', kind)}' has no {name}")
        self.step_no += 1
        step = self.step_cls(
            kind=kind,
            sequence_number=self.step_no,
            message=self.message,
            highlight=self.highlight,
            description=self.description,
            pseudocode_line=self.pseudocode_line,
            overlay=copy.deepcopy(self.overlay),
            is_final=is_final,
            **copy.deepcopy(snapshot),
        )
        self.reset()
        return step
