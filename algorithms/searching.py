"""
searching.py - Linear & Binary Search
======================================
Generator-based search traces over an array and a target.

Linear search yields, per index:  examine → compare  (stops on first match)
Binary search yields, per round:  calculate-mid → examine-mid → compare
                                  → found | search-left | search-right

Binary search assumes the array is sorted ascending.  That is the
caller's job; the generator never re-sorts or checks.
"""

from typing import Any, Generator, List, Sequence

from algorithms.errors import InvalidArgument
from algorithms.step import SearchKind, SearchStep, StepBuilder


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
LINEAR_SEARCH_PSEUDOCODE: List[str] = [
    "def linear_search(a, target, start=0):",    # 0
    "    for i in start … n-1:",                  # 1
    "        if a[i] == target:",                 # 2
    "            return i",                       # 3
    "    return NOT FOUND",                       # 4
]

BINARY_SEARCH_PSEUDOCODE: List[str] = [
    "def binary_search(a, target):",              # 0
    "    left ← 0; right ← n-1",                  # 1
    "    while left ≤ right:",                    # 2
    "        mid ← (left + right) // 2",          # 3
    "        if a[mid] == target: return mid",    # 4
    "        elif a[mid] < target: left ← mid+1", # 5
    "        else: right ← mid-1",                # 6
    "    return NOT FOUND",                       # 7
]


# ---------------------------------------------------------------------------
# Linear search
# ---------------------------------------------------------------------------
def linear_search(
    array: Sequence[Any],
    target: Any,
    start_index: int = 0,
) -> Generator[SearchStep, None, None]:
    """
    Yields SearchStep snapshots while scanning left to right.

    Args:
        array       : Values to scan (copied, never mutated).
        target      : Value to look for.
        start_index : First index to examine.

    Yields:
        SearchStep – initialize, examine/compare per index, then found or not-found.
    """
    if isinstance(start_index, bool) or not isinstance(start_index, int) or start_index < 0:
        raise InvalidArgument(f"start_index must be a non-negative integer, got {start_index!r}")

    values  = list(array)
    n       = len(values)
    bounds  = [start_index, n - 1]
    scanned = max(n - start_index, 0)
    sb      = StepBuilder(SearchStep)

    sb.message     = f"Starting linear search for {target}"
    sb.highlight   = f"Searching through {scanned} elements sequentially"
    sb.description = "Linear search checks each element one by one from left to right"
    yield sb.build(SearchKind.INITIALIZE, array=values, target=target, bounds=bounds)

    for i in range(start_index, n):
        value = values[i]

        sb.message         = f"Examining element at index {i}"
        sb.highlight       = f"Current element: {value}"
        sb.description     = f"Checking if {value} equals target {target}"
        sb.pseudocode_line = 1
        yield sb.build(SearchKind.EXAMINE, array=values, target=target, bounds=bounds,
                       current_index=i, value=value)

        match = value == target
        sb.message         = f"Comparing: {value} {'==' if match else '!='} {target}"
        sb.highlight       = "Match found!" if match else "No match, continue searching"
        sb.description     = (
            f"Target found at position {i}" if match
            else f"{value} is not equal to {target}, move to next element"
        )
        sb.pseudocode_line = 2
        yield sb.build(SearchKind.COMPARE, array=values, target=target, bounds=bounds,
                       current_index=i, value=value, is_match=match)

        if match:
            comparisons = i - start_index + 1
            sb.message         = f"Target {target} found at index {i}"
            sb.highlight       = f"Search completed successfully in {comparisons} comparison(s)"
            sb.description     = f"Linear search found the target after examining {comparisons} elements"
            sb.pseudocode_line = 3
            yield sb.build(SearchKind.FOUND, is_final=True, array=values, target=target, bounds=bounds,
                           current_index=i, found_index=i, comparisons=comparisons)
            return

    sb.message         = f"Target {target} not found in array"
    sb.highlight       = f"Searched all {scanned} elements without finding target"
    sb.description     = f"Linear search completed after {scanned} comparisons with no match"
    sb.pseudocode_line = 4
    yield sb.build(SearchKind.NOT_FOUND, is_final=True, array=values, target=target, bounds=bounds,
                   comparisons=scanned)


# ---------------------------------------------------------------------------
# Binary search
# ---------------------------------------------------------------------------
def binary_search(array: Sequence[Any], target: Any) -> Generator[SearchStep, None, None]:
    values      = list(array)
    left, right = 0, len(values) - 1
    comparisons = 0
    sb          = StepBuilder(SearchStep)

    sb.message         = f"Starting binary search for {target}"
    sb.highlight       = f"Binary search requires sorted array - range [{left}, {right}]"
    sb.description     = "Binary search eliminates half the search space in each step"
    sb.pseudocode_line = 1
    yield sb.build(SearchKind.INITIALIZE, array=values, target=target, bounds=[left, right])

    while left <= right:
        mid   = (left + right) // 2
        value = values[mid]

        sb.message         = f"Calculating midpoint: floor(({left} + {right}) / 2) = {mid}"
        sb.highlight       = f"Midpoint at index {mid} divides search range"
        sb.description     = "Binary search always checks the middle element of current range"
        sb.pseudocode_line = 3
        sb.overlay["calculation"] = f"floor(({left} + {right}) / 2)"
        yield sb.build(SearchKind.CALCULATE_MID, array=values, target=target, bounds=[left, right], mid=mid)

        sb.message         = f"Examining middle element: array[{mid}] = {value}"
        sb.highlight       = f"Comparing {value} with target {target}"
        sb.description     = "This comparison will determine which half to search next"
        sb.pseudocode_line = 4
        yield sb.build(SearchKind.EXAMINE_MID, array=values, target=target, bounds=[left, right],
                       mid=mid, current_index=mid, value=value)

        comparisons += 1
        if value == target:
            comparison, symbol = "equal", "=="
            sb.highlight   = "Target found!"
            sb.description = f"Perfect match at index {mid}"
        elif value < target:
            comparison, symbol = "less", "<"
            sb.highlight   = "Target is in right half"
            sb.description = f"{value} < {target}, so target must be in right half"
        else:
            comparison, symbol = "greater", ">"
            sb.highlight   = "Target is in left half"
            sb.description = f"{value} > {target}, so target must be in left half"
        sb.message         = f"Comparison: {value} {symbol} {target}"
        sb.pseudocode_line = 4
        yield sb.build(SearchKind.COMPARE, array=values, target=target, bounds=[left, right], mid=mid,
                       current_index=mid, value=value, comparison=comparison,
                       is_match=comparison == "equal", comparisons=comparisons)

        if comparison == "equal":
            sb.message         = f"Target {target} found at index {mid}"
            sb.highlight       = f"Binary search completed successfully in {comparisons} comparison(s)"
            sb.description     = "Binary search is highly efficient: O(log n) time complexity"
            sb.pseudocode_line = 4
            yield sb.build(SearchKind.FOUND, is_final=True, array=values, target=target,
                           bounds=[left, right], mid=mid, found_index=mid, comparisons=comparisons)
            return

        if comparison == "less":
            left = mid + 1
            sb.message         = f"Eliminating left half: searching range [{left}, {right}]"
            sb.highlight       = f"Discarded {mid + 1} elements from left half"
            sb.description     = f"Since {value} < {target}, target cannot be in left half"
            sb.pseudocode_line = 5
            sb.overlay         = {"previous_mid": mid, "eliminated": [0, mid]}
            yield sb.build(SearchKind.SEARCH_RIGHT, array=values, target=target, bounds=[left, right])
        else:
            right = mid - 1
            sb.message         = f"Eliminating right half: searching range [{left}, {right}]"
            sb.highlight       = f"Discarded {len(values) - mid} elements from right half"
            sb.description     = f"Since {value} > {target}, target cannot be in right half"
            sb.pseudocode_line = 6
            sb.overlay         = {"previous_mid": mid, "eliminated": [mid, len(values) - 1]}
            yield sb.build(SearchKind.SEARCH_LEFT, array=values, target=target, bounds=[left, right])

    sb.message         = f"Target {target} not found in array"
    sb.highlight       = f"Binary search completed in {comparisons} comparison(s) - target not present"
    sb.description     = f"Search space exhausted: left ({left}) > right ({right})"
    sb.pseudocode_line = 7
    yield sb.build(SearchKind.NOT_FOUND, is_final=True, array=values, target=target,
                   bounds=[left, right], comparisons=comparisons)


# ---------------------------------------------------------------------------
# Materialised traces
# ---------------------------------------------------------------------------
def linear_search_steps(array: Sequence[Any], target: Any, start_index: int = 0) -> List[SearchStep]:
    return list(linear_search(array, target, start_index))


def binary_search_steps(array: Sequence[Any], target: Any) -> List[SearchStep]:
    return list(binary_search(array, target))
