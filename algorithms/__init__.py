"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bubble-sort": AlgoInfo(key, label, category, fn, pseudocode, input_kind, …),
        …
    }

`fn` is always the *materialising* entry point (`*_steps`), so callers
get a complete List[Step] from one synchronous call.  `input_kind`
tells the caller layer which arguments to build:

    "array"         – fn(array)
    "array+target"  – fn(array, target)
    "keys"          – fn(keys, table_size, hash_function)
    "integer"       – fn(n)

Adding an algorithm is: write the generator, add one entry here.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.sorting   import (
    bubble_sort_steps,    BUBBLE_SORT_PSEUDOCODE,
    selection_sort_steps, SELECTION_SORT_PSEUDOCODE,
    insertion_sort_steps, INSERTION_SORT_PSEUDOCODE,
    merge_sort_steps,     MERGE_SORT_PSEUDOCODE,
    quick_sort_steps,     QUICK_SORT_PSEUDOCODE,
)
from algorithms.searching import (
    linear_search_steps, LINEAR_SEARCH_PSEUDOCODE,
    binary_search_steps, BINARY_SEARCH_PSEUDOCODE,
)
from algorithms.hashing   import (
    hash_with_chaining_steps,       CHAINING_PSEUDOCODE,
    hash_with_linear_probing_steps, PROBING_PSEUDOCODE,
)
from algorithms.recursion import (
    factorial_steps,      FACTORIAL_PSEUDOCODE,
    fibonacci_steps,      FIBONACCI_PSEUDOCODE,
    tower_of_hanoi_steps, HANOI_PSEUDOCODE,
)


CATEGORIES = ("sorting", "searching", "hashing", "recursion")


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                     # registry key, e.g. "bubble-sort"
    label:            str                     # human label, e.g. "Bubble Sort"
    category:         str                     # one of CATEGORIES
    fn:               Callable                # returns List[Step]
    pseudocode:       List[str]               # lines for the side-panel
    input_kind:       str                     # see module docstring
    tags:             List[str] = field(default_factory=list)
    complexity_time:  str       = ""          # e.g. "O(n²)"
    complexity_space: str       = ""          # e.g. "O(1)"
    description:      str       = ""          # one-liner for the UI card
    input_range:      Optional[Tuple[int, int]] = None   # inclusive, integer inputs only
    requires_sorted:  bool      = False       # caller must sort the array first


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bubble-sort": AlgoInfo(
        key="bubble-sort", label="Bubble Sort", category="sorting",
        fn=bubble_sort_steps, pseudocode=BUBBLE_SORT_PSEUDOCODE, input_kind="array",
        tags=["comparison", "in-place", "stable"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Repeatedly swaps adjacent out-of-order pairs; the largest value bubbles to the end.",
    ),

    "selection-sort": AlgoInfo(
        key="selection-sort", label="Selection Sort", category="sorting",
        fn=selection_sort_steps, pseudocode=SELECTION_SORT_PSEUDOCODE, input_kind="array",
        tags=["comparison", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Finds the minimum of the unsorted part and swaps it into place.",
    ),

    "insertion-sort": AlgoInfo(
        key="insertion-sort", label="Insertion Sort", category="sorting",
        fn=insertion_sort_steps, pseudocode=INSERTION_SORT_PSEUDOCODE, input_kind="array",
        tags=["comparison", "in-place", "stable", "adaptive"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Grows a sorted prefix by shifting larger values right and inserting each key.",
    ),

    "merge-sort": AlgoInfo(
        key="merge-sort", label="Merge Sort", category="sorting",
        fn=merge_sort_steps, pseudocode=MERGE_SORT_PSEUDOCODE, input_kind="array",
        tags=["comparison", "divide-and-conquer", "stable"],
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Splits the array in halves, sorts each, then merges them back in order.",
    ),

    "quick-sort": AlgoInfo(
        key="quick-sort", label="Quick Sort", category="sorting",
        fn=quick_sort_steps, pseudocode=QUICK_SORT_PSEUDOCODE, input_kind="array",
        tags=["comparison", "divide-and-conquer", "in-place"],
        complexity_time="O(n log n) avg, O(n²) worst", complexity_space="O(log n)",
        description="Lomuto partition around the last element, then recurse on each side.",
    ),

    "linear-search": AlgoInfo(
        key="linear-search", label="Linear Search", category="searching",
        fn=linear_search_steps, pseudocode=LINEAR_SEARCH_PSEUDOCODE, input_kind="array+target",
        tags=["sequential"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Checks each element from left to right until the target turns up.",
    ),

    "binary-search": AlgoInfo(
        key="binary-search", label="Binary Search", category="searching",
        fn=binary_search_steps, pseudocode=BINARY_SEARCH_PSEUDOCODE, input_kind="array+target",
        tags=["divide-and-conquer", "sorted-input"],
        complexity_time="O(log n)", complexity_space="O(1)",
        description="Halves a sorted range around its midpoint each round.",
        requires_sorted=True,
    ),

    "hash-chaining": AlgoInfo(
        key="hash-chaining", label="Hash Table (Chaining)", category="hashing",
        fn=hash_with_chaining_steps, pseudocode=CHAINING_PSEUDOCODE, input_kind="keys",
        tags=["hash-table", "separate-chaining"],
        complexity_time="O(1) avg", complexity_space="O(n + m)",
        description="Colliding keys share a bucket list.",
    ),

    "hash-probing": AlgoInfo(
        key="hash-probing", label="Hash Table (Linear Probing)", category="hashing",
        fn=hash_with_linear_probing_steps, pseudocode=PROBING_PSEUDOCODE, input_kind="keys",
        tags=["hash-table", "open-addressing"],
        complexity_time="O(1) avg", complexity_space="O(m)",
        description="Colliding keys walk forward to the next free slot.",
    ),

    "factorial": AlgoInfo(
        key="factorial", label="Factorial", category="recursion",
        fn=factorial_steps, pseudocode=FACTORIAL_PSEUDOCODE, input_kind="integer",
        tags=["call-stack"],
        complexity_time="O(n)", complexity_space="O(n)",
        description="n! = n × (n-1)!, unwinding from the base case.",
        input_range=(0, 8),
    ),

    "fibonacci": AlgoInfo(
        key="fibonacci", label="Fibonacci (Memoized)", category="recursion",
        fn=fibonacci_steps, pseudocode=FIBONACCI_PSEUDOCODE, input_kind="integer",
        tags=["call-stack", "memoization"],
        complexity_time="O(n)", complexity_space="O(n)",
        description="fib(n) = fib(n-1) + fib(n-2), caching every result.",
        input_range=(0, 10),
    ),

    "tower-hanoi": AlgoInfo(
        key="tower-hanoi", label="Tower of Hanoi", category="recursion",
        fn=tower_of_hanoi_steps, pseudocode=HANOI_PSEUDOCODE, input_kind="integer",
        tags=["towers"],
        complexity_time="O(2ⁿ)", complexity_space="O(n)",
        description="Move n disks from A to C, never placing a larger disk on a smaller one.",
        input_range=(1, 5),
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


def algorithms_by_category(category: str) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if a.category == category]


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


__all__ = [
    "AlgoInfo",
    "CATEGORIES",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_category",
    "algorithms_by_tag",
]
