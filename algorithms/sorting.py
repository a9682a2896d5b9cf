"""
sorting.py - Comparison Sorts
==============================
Generator-based bubble, selection, insertion, merge and quick sort.
Each generator copies its input on entry and yields a SortStep at every
micro-operation:

  • compare  – two indices are being compared
  • swap     – two indices were exchanged (snapshot shows the result)
  • shift    – insertion sort moved an element one slot right
  • divide / merge          – merge sort's split and conquer phases
  • select-pivot / place-pivot – quick sort's partition boundaries

Bubble, selection and insertion sort are bookended by `initialize` and
`complete`.  Merge and quick sort use a terser vocabulary: their first step already shows the untouched
array, and their last `merge` / `place-pivot` shows it sorted.  Pass
bookends=True to get the same bookends as the other three.

Ties never swap: bubble sort swaps on strict `>`, selection sort takes a
new minimum on strict `<`, insertion sort shifts on strict `>`, and merge
takes from the left half on `<=`.
"""

from dataclasses import replace
from typing import Any, Generator, List, Sequence

from algorithms.step import SortKind, SortStep, StepBuilder


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
BUBBLE_SORT_PSEUDOCODE: List[str] = [
    "def bubble_sort(a):",                       # 0
    "    for i in 0 … n-2:",                     # 1
    "        for j in 0 … n-2-i:",               # 2
    "            if a[j] > a[j+1]:",             # 3
    "                swap(a[j], a[j+1])",        # 4
    "        mark a[n-1-i] sorted",              # 5
    "    return a",                              # 6
]

SELECTION_SORT_PSEUDOCODE: List[str] = [
    "def selection_sort(a):",                    # 0
    "    for i in 0 … n-2:",                     # 1
    "        min ← i",                           # 2
    "        for j in i+1 … n-1:",               # 3
    "            if a[j] < a[min]:",             # 4
    "                min ← j",                   # 5
    "        if min ≠ i: swap(a[i], a[min])",    # 6
    "        mark a[i] sorted",                  # 7
    "    return a",                              # 8
]

INSERTION_SORT_PSEUDOCODE: List[str] = [
    "def insertion_sort(a):",                    # 0
    "    for i in 1 … n-1:",                     # 1
    "        key ← a[i]; j ← i-1",               # 2
    "        while j ≥ 0 and a[j] > key:",       # 3
    "            a[j+1] ← a[j]; j ← j-1",        # 4
    "        a[j+1] ← key",                      # 5
    "    return a",                              # 6
]

MERGE_SORT_PSEUDOCODE: List[str] = [
    "def merge_sort(a, lo, hi):",                # 0
    "    if lo < hi:",                           # 1
    "        mid ← (lo + hi) // 2",              # 2
    "        merge_sort(a, lo, mid)",            # 3
    "        merge_sort(a, mid+1, hi)",          # 4
    "        merge(a, lo, mid, hi)",             # 5
    "def merge(a, lo, mid, hi):",                # 6
    "    while both halves have elements:",      # 7
    "        take the smaller (left wins ties)", # 8
    "    copy what is left of either half",      # 9
]

QUICK_SORT_PSEUDOCODE: List[str] = [
    "def quick_sort(a, lo, hi):",                # 0
    "    if lo < hi:",                           # 1
    "        p ← partition(a, lo, hi)",          # 2
    "        quick_sort(a, lo, p-1)",            # 3
    "        quick_sort(a, p+1, hi)",            # 4
    "def partition(a, lo, hi):",                 # 5
    "    pivot ← a[hi]; i ← lo-1",               # 6
    "    for j in lo … hi-1:",                   # 7
    "        if a[j] < pivot:",                  # 8
    "            i ← i+1; swap(a[i], a[j])",     # 9
    "    swap(a[i+1], a[hi]); return i+1",       # 10
]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _join(values: Sequence[Any]) -> str:
    return ", ".join(str(v) for v in values)


def _ordinal(n: int) -> str:
    suffix = "th" if 10 <= n % 100 <= 20 else {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def _tail(n: int, count: int) -> List[int]:
    """The `count` right-most indices, right to left (bubble sort's sorted tail)."""
    return [n - 1 - k for k in range(count)]


def _mark_final(steps: Generator[SortStep, None, None]) -> Generator[SortStep, None, None]:
    """Re-yield `steps`, flagging the last one as final."""
    pending = None
    for step in steps:
        if pending is not None:
            yield pending
        pending = step
    if pending is not None:
        yield pending if pending.is_final else replace(pending, is_final=True)


def _already_sorted(sb: StepBuilder, result: List[Any], label: str, line: int) -> SortStep:
    sb.message         = f"{label} completed! Array is already sorted."
    sb.highlight       = f"Final result: [{_join(result)}]"
    sb.description     = f"An array of {len(result)} element(s) needs no comparisons"
    sb.pseudocode_line = line
    return sb.build(SortKind.COMPLETE, is_final=True, array=result, sorted=list(range(len(result))))


# ---------------------------------------------------------------------------
# Bubble sort
# ---------------------------------------------------------------------------
def bubble_sort(array: Sequence[Any]) -> Generator[SortStep, None, None]:
    result = list(array)
    n      = len(result)
    sb     = StepBuilder(SortStep)

    sb.message     = f"Starting Bubble Sort with array [{_join(result)}]"
    sb.highlight   = "Initial array - will bubble largest elements to the right"
    sb.description = "Bubble Sort compares adjacent elements and swaps them if they're in wrong order"
    yield sb.build(SortKind.INITIALIZE, array=result)

    for i in range(n - 1):
        sb.message         = f"Starting pass {i + 1}"
        sb.highlight       = f"Pass {i + 1}: Will find the {_ordinal(i + 1)} largest element"
        sb.description     = "Each pass bubbles the largest unsorted element to its correct position"
        sb.pseudocode_line = 1
        sb.overlay["current_pass"] = i + 1
        yield sb.build(SortKind.PASS_START, array=result, sorted=_tail(n, i))

        for j in range(n - i - 1):
            left, right  = result[j], result[j + 1]
            out_of_order = left > right
            sb.message         = f"Comparing {left} and {right}"
            sb.highlight       = f"Step {sb.step_no + 1}: Compare elements at positions {j} and {j + 1}"
            sb.description     = (
                f"{left} > {right} - Need to swap" if out_of_order
                else f"{left} ≤ {right} - No swap needed"
            )
            sb.pseudocode_line = 3
            sb.overlay["current_pass"] = i + 1
            yield sb.build(SortKind.COMPARE, array=result, comparing=[j, j + 1], sorted=_tail(n, i))

            if out_of_order:
                result[j], result[j + 1] = right, left
                sb.message         = f"Swapped {left} and {right}"
                sb.highlight       = f"Swapping because {right} < {left}"
                sb.description     = "Elements swapped - larger element moves right"
                sb.pseudocode_line = 4
                sb.overlay["current_pass"] = i + 1
                yield sb.build(SortKind.SWAP, array=result, swapping=[j, j + 1], sorted=_tail(n, i))

        settled = n - 1 - i
        sb.message         = f"Element {result[settled]} is now in its final position"
        sb.highlight       = f"Pass {i + 1} complete. Largest element bubbled to position {settled}"
        sb.description     = f"Position {settled} is now sorted with value {result[settled]}"
        sb.pseudocode_line = 5
        sb.overlay["current_pass"] = i + 1
        yield sb.build(SortKind.MARK_SORTED, array=result, sorted=_tail(n, i + 1))

    sb.message         = "Bubble Sort completed! Array is now sorted."
    sb.highlight       = f"Final result: [{_join(result)}]"
    sb.description     = "All elements are now in ascending order"
    sb.pseudocode_line = 6
    yield sb.build(SortKind.COMPLETE, is_final=True, array=result, sorted=list(range(n)))


# ---------------------------------------------------------------------------
# Selection sort
# ---------------------------------------------------------------------------
def selection_sort(array: Sequence[Any]) -> Generator[SortStep, None, None]:
    result = list(array)
    n      = len(result)
    sb     = StepBuilder(SortStep)

    sb.message     = f"Starting Selection Sort on array of {n} elements"
    sb.highlight   = "Selection sort finds the minimum element and places it at the beginning"
    sb.description = "Selection sort repeatedly finds the minimum element from unsorted portion"
    sb.overlay     = {"current_pass": 0, "min_index": None}
    yield sb.build(SortKind.INITIALIZE, array=result)

    for i in range(n - 1):
        min_index = i
        done      = list(range(i))

        sb.message         = f"Pass {i + 1}: Finding minimum in range [{i}, {n - 1}]"
        sb.highlight       = "Starting search for minimum element in unsorted portion"
        sb.description     = f"Assume element at index {i} is minimum: {result[i]}"
        sb.pseudocode_line = 2
        sb.overlay         = {"current_pass": i + 1, "min_index": i, "search_range": [i, n - 1]}
        yield sb.build(SortKind.PASS_START, array=result, sorted=done)

        for j in range(i + 1, n):
            sb.message         = f"Comparing current minimum {result[min_index]} with {result[j]}"
            sb.highlight       = f"Checking if {result[j]} < {result[min_index]}"
            sb.description     = "Looking for smaller element in remaining unsorted portion"
            sb.pseudocode_line = 4
            sb.overlay         = {"current_pass": i + 1, "min_index": min_index, "current_element": j}
            yield sb.build(SortKind.COMPARE, array=result, comparing=[min_index, j], sorted=done)

            if result[j] < result[min_index]:
                min_index = j
                sb.message         = f"New minimum found: {result[min_index]} at index {min_index}"
                sb.highlight       = f"{result[min_index]} is smaller than previous minimum"
                sb.description     = f"Update minimum index to {min_index}"
                sb.pseudocode_line = 5
                sb.overlay         = {"current_pass": i + 1, "min_index": min_index}
                yield sb.build(SortKind.NEW_MINIMUM, array=result, comparing=[min_index], sorted=done)

        if min_index != i:
            displaced = result[i]
            result[i], result[min_index] = result[min_index], result[i]
            sb.message         = f"Swapping minimum {result[i]} to position {i}"
            sb.highlight       = f"Moving {result[i]} from index {min_index} to sorted position {i}"
            sb.description     = f"Exchanged {displaced} (at {i}) with {result[i]} (at {min_index})"
            sb.pseudocode_line = 6
            sb.overlay         = {
                "current_pass": i + 1,
                "min_index": None,
                "swapped_values": {"from": displaced, "to": result[i]},
            }
            yield sb.build(SortKind.SWAP, array=result, swapping=[i, min_index], sorted=done)
        else:
            sb.message         = f"No swap needed - minimum {result[i]} already at position {i}"
            sb.highlight       = "Element is already in correct position"
            sb.description     = "Minimum element was already at the beginning of unsorted portion"
            sb.pseudocode_line = 6
            sb.overlay         = {"current_pass": i + 1, "min_index": None}
            yield sb.build(SortKind.NO_SWAP, array=result, sorted=done)

        sb.message         = f"Position {i} is now sorted with value {result[i]}"
        sb.highlight       = f"Sorted portion now includes {i + 1} element(s)"
        sb.description     = f"Element {result[i]} is in its final sorted position"
        sb.pseudocode_line = 7
        sb.overlay         = {"current_pass": i + 1, "min_index": None}
        yield sb.build(SortKind.MARK_SORTED, array=result, sorted=list(range(i + 1)))

    sb.message         = "Selection Sort completed! Array is now sorted."
    sb.highlight       = f"Final result: [{_join(result)}]"
    sb.description     = f"All elements are in ascending order after {max(n - 1, 0)} passes"
    sb.pseudocode_line = 8
    sb.overlay         = {"current_pass": n, "min_index": None}
    yield sb.build(SortKind.COMPLETE, is_final=True, array=result, sorted=list(range(n)))


# ---------------------------------------------------------------------------
# Insertion sort
# ---------------------------------------------------------------------------
def insertion_sort(array: Sequence[Any]) -> Generator[SortStep, None, None]:
    result = list(array)
    n      = len(result)
    sb     = StepBuilder(SortStep)

    sb.message     = f"Starting Insertion Sort on array of {n} elements"
    sb.highlight   = (
        f"First element {result[0]} is trivially sorted" if n
        else "Empty array - nothing to insert"
    )
    sb.description = "Insertion sort builds sorted array one element at a time"
    yield sb.build(SortKind.INITIALIZE, array=result, sorted=[0] if n else [])

    for i in range(1, n):
        key  = result[i]
        j    = i - 1
        done = list(range(i))

        sb.message         = f"Selecting element {key} at index {i} for insertion"
        sb.highlight       = f"Next element to insert into sorted portion: {key}"
        sb.description     = f"Will find correct position for {key} in sorted portion [0..{i - 1}]"
        sb.pseudocode_line = 2
        sb.overlay         = {"current_element": i, "key": key}
        yield sb.build(SortKind.SELECT, array=result, sorted=done)

        while j >= 0 and result[j] > key:
            sb.message         = f"Comparing {result[j]} > {key}"
            sb.highlight       = f"{result[j]} is greater than {key}, need to shift right"
            sb.description     = f"Element {result[j]} at position {j} is larger than key {key}"
            sb.pseudocode_line = 3
            sb.overlay         = {"current_element": i, "key": key, "compare_position": j}
            yield sb.build(SortKind.COMPARE, array=result, comparing=[j, j + 1], sorted=done)

            result[j + 1] = result[j]
            sb.message         = f"Shifting {result[j]} from position {j} to {j + 1}"
            sb.highlight       = "Making space for insertion by moving element right"
            sb.description     = f"Shift {result[j]} one position right to make room"
            sb.pseudocode_line = 4
            sb.overlay         = {"current_element": i, "key": key, "shift_from": j, "shift_to": j + 1}
            yield sb.build(SortKind.SHIFT, array=result, shifting=[j, j + 1], sorted=done)
            j -= 1

        if j >= 0:
            sb.message         = f"Found insertion position: {result[j]} <= {key}"
            sb.highlight       = f"{key} should be inserted at position {j + 1}"
            sb.description     = f"Element {result[j]} is not greater than {key}, so insert after it"
            sb.pseudocode_line = 3
            sb.overlay         = {"current_element": i, "key": key, "insert_position": j + 1}
            yield sb.build(SortKind.FOUND_POSITION, array=result, comparing=[j, j + 1], sorted=done)
        else:
            sb.message         = f"{key} is smallest, insert at beginning"
            sb.highlight       = f"{key} is smaller than all sorted elements"
            sb.description     = f"Key {key} is smaller than all elements in sorted portion"
            sb.pseudocode_line = 3
            sb.overlay         = {"current_element": i, "key": key, "insert_position": 0}
            yield sb.build(SortKind.INSERT_BEGINNING, array=result, sorted=done)

        result[j + 1] = key
        sb.message         = f"Inserted {key} at position {j + 1}"
        sb.highlight       = f"{key} is now in correct sorted position"
        sb.description     = f"Sorted portion extended to include {i + 1} elements"
        sb.pseudocode_line = 5
        sb.overlay         = {"insert_position": j + 1, "inserted_value": key}
        yield sb.build(SortKind.INSERT, array=result, sorted=list(range(i + 1)))

    sb.message         = "Insertion Sort completed! Array is now sorted."
    sb.highlight       = f"Final result: [{_join(result)}]"
    sb.description     = f"All elements inserted in correct positions through {max(n - 1, 0)} iterations"
    sb.pseudocode_line = 6
    yield sb.build(SortKind.COMPLETE, is_final=True, array=result, sorted=list(range(n)))


# ---------------------------------------------------------------------------
# Merge sort
# ---------------------------------------------------------------------------
def merge_sort(array: Sequence[Any], bookends: bool = False) -> Generator[SortStep, None, None]:
    result = list(array)
    n      = len(result)
    sb     = StepBuilder(SortStep)

    if n < 2:
        yield _already_sorted(sb, result, "Merge Sort", 1)
        return

    if bookends:
        sb.message     = f"Starting Merge Sort with array [{_join(result)}]"
        sb.highlight   = "Divide the array in halves until single elements remain"
        sb.description = "Merge sort splits recursively, then merges sorted halves back together"
        yield sb.build(SortKind.INITIALIZE, array=result)

    steps = _merge_sort(sb, result, 0, n - 1)
    yield from (steps if bookends else _mark_final(steps))

    if bookends:
        sb.message         = "Merge Sort completed! Array is now sorted."
        sb.highlight       = f"Final result: [{_join(result)}]"
        sb.description     = "Every half has been merged back into one sorted array"
        sb.pseudocode_line = 5
        yield sb.build(SortKind.COMPLETE, is_final=True, array=result, sorted=list(range(n)))


def _merge_sort(sb: StepBuilder, result: List[Any], lo: int, hi: int) -> Generator[SortStep, None, None]:
    if lo >= hi:
        return
    mid = (lo + hi) // 2

    sb.message         = f"Dividing array from {lo} to {hi}"
    sb.highlight       = "Divide phase: splitting array"
    sb.description     = f"Split [{lo}..{hi}] into [{lo}..{mid}] and [{mid + 1}..{hi}]"
    sb.pseudocode_line = 2
    yield sb.build(SortKind.DIVIDE, array=result, bounds=[lo, hi])

    yield from _merge_sort(sb, result, lo, mid)
    yield from _merge_sort(sb, result, mid + 1, hi)
    yield from _merge(sb, result, lo, mid, hi)

    sb.message         = f"Merged subarray from {lo} to {hi}"
    sb.highlight       = "Conquer phase: merging sorted subarrays"
    sb.description     = f"Positions {lo}..{hi} now hold [{_join(result[lo:hi + 1])}] in order"
    sb.pseudocode_line = 5
    yield sb.build(SortKind.MERGE, array=result, bounds=[lo, hi], merged=list(range(lo, hi + 1)))


def _merge(sb: StepBuilder, result: List[Any], lo: int, mid: int, hi: int) -> Generator[SortStep, None, None]:
    left  = result[lo:mid + 1]
    right = result[mid + 1:hi + 1]
    i = j = 0
    k = lo

    while i < len(left) and j < len(right):
        take_left = left[i] <= right[j]
        sb.message         = f"Comparing {left[i]} and {right[j]}"
        sb.highlight       = "Merging subarrays"
        sb.description     = (
            f"{left[i]} ≤ {right[j]} - take {left[i]} from the left half" if take_left
            else f"{left[i]} > {right[j]} - take {right[j]} from the right half"
        )
        sb.pseudocode_line = 8
        yield sb.build(SortKind.COMPARE, array=result, comparing=[lo + i, mid + 1 + j], bounds=[lo, hi])

        if take_left:
            result[k] = left[i]
            i += 1
        else:
            result[k] = right[j]
            j += 1
        k += 1

    for value in left[i:] + right[j:]:
        result[k] = value
        k += 1


# ---------------------------------------------------------------------------
# Quick sort (Lomuto partition, last element as pivot)
# ---------------------------------------------------------------------------
def quick_sort(array: Sequence[Any], bookends: bool = False) -> Generator[SortStep, None, None]:
    result = list(array)
    n      = len(result)
    sb     = StepBuilder(SortStep)

    if n < 2:
        yield _already_sorted(sb, result, "Quick Sort", 1)
        return

    if bookends:
        sb.message     = f"Starting Quick Sort with array [{_join(result)}]"
        sb.highlight   = "Partition around the last element, then recurse on each side"
        sb.description = "Quick sort places one pivot per partition in its final position"
        yield sb.build(SortKind.INITIALIZE, array=result)

    steps = _quick_sort(sb, result, 0, n - 1)
    yield from (steps if bookends else _mark_final(steps))

    if bookends:
        sb.message         = "Quick Sort completed! Array is now sorted."
        sb.highlight       = f"Final result: [{_join(result)}]"
        sb.description     = "Every pivot is in place and every partition is sorted"
        sb.pseudocode_line = 0
        yield sb.build(SortKind.COMPLETE, is_final=True, array=result, sorted=list(range(n)))


def _quick_sort(sb: StepBuilder, result: List[Any], low: int, high: int) -> Generator[SortStep, None, None]:
    if low < high:
        p = yield from _partition(sb, result, low, high)
        yield from _quick_sort(sb, result, low, p - 1)
        yield from _quick_sort(sb, result, p + 1, high)


def _partition(sb: StepBuilder, result: List[Any], low: int, high: int) -> Generator[SortStep, None, int]:
    pivot = result[high]
    i     = low - 1

    sb.message         = f"Selected pivot: {pivot}"
    sb.highlight       = f"Partitioning around pivot {pivot}"
    sb.description     = f"Elements in [{low}..{high - 1}] smaller than {pivot} move to its left"
    sb.pseudocode_line = 6
    yield sb.build(SortKind.SELECT_PIVOT, array=result, pivot=high, bounds=[low, high])

    for j in range(low, high):
        smaller = result[j] < pivot
        sb.message         = f"Comparing {result[j]} with pivot {pivot}"
        sb.highlight       = "Partitioning elements around pivot"
        sb.description     = (
            f"{result[j]} < {pivot} - belongs left of the pivot" if smaller
            else f"{result[j]} ≥ {pivot} - stays on the right side"
        )
        sb.pseudocode_line = 8
        yield sb.build(SortKind.COMPARE, array=result, comparing=[j, high], pivot=high, bounds=[low, high])

        if smaller:
            i += 1
            result[i], result[j] = result[j], result[i]
            sb.message         = f"Swapped {result[j]} and {result[i]}"
            sb.highlight       = "Moving smaller element to left of pivot"
            sb.description     = f"Smaller-than-pivot region now ends at index {i}"
            sb.pseudocode_line = 9
            yield sb.build(SortKind.SWAP, array=result, swapping=[i, j], pivot=high, bounds=[low, high])

    result[i + 1], result[high] = result[high], result[i + 1]
    sb.message         = f"Placed pivot {pivot} at position {i + 1}"
    sb.highlight       = "Pivot in final position"
    sb.description     = f"Everything left of index {i + 1} is smaller than {pivot}; everything right is not"
    sb.pseudocode_line = 10
    yield sb.build(SortKind.PLACE_PIVOT, array=result, pivot=i + 1, bounds=[low, high])
    return i + 1


# ---------------------------------------------------------------------------
# Materialised traces
# ---------------------------------------------------------------------------
def bubble_sort_steps(array: Sequence[Any]) -> List[SortStep]:
    return list(bubble_sort(array))


def selection_sort_steps(array: Sequence[Any]) -> List[SortStep]:
    return list(selection_sort(array))


def insertion_sort_steps(array: Sequence[Any]) -> List[SortStep]:
    return list(insertion_sort(array))


def merge_sort_steps(array: Sequence[Any], bookends: bool = False) -> List[SortStep]:
    return list(merge_sort(array, bookends=bookends))


def quick_sort_steps(array: Sequence[Any], bookends: bool = False) -> List[SortStep]:
    return list(quick_sort(array, bookends=bookends))
