import math

import pytest

from algorithms.errors import InvalidArgument
from algorithms.searching import binary_search_steps, linear_search_steps
from algorithms.step import SearchKind


def test_linear_search_finds_first_match():
    steps = linear_search_steps([4, 2, 7, 1], 7)
    found = steps[-1]
    assert found.kind == SearchKind.FOUND
    assert found.found_index == 2
    assert found.comparisons == 3
    assert len(steps) == 1 + 2 * 3 + 1


def test_linear_search_stops_at_first_duplicate():
    steps = linear_search_steps([5, 9, 9], 9)
    assert steps[-1].found_index == 1


def test_linear_search_not_found_counts_scanned_elements():
    steps = linear_search_steps([4, 2, 7, 1], 3)
    assert steps[-1].kind == SearchKind.NOT_FOUND
    assert steps[-1].comparisons == 4


def test_linear_search_respects_start_index():
    steps = linear_search_steps([4, 2, 7, 1], 4, start_index=2)
    assert steps[-1].kind == SearchKind.NOT_FOUND
    assert steps[-1].comparisons == 2
    examined = [s.current_index for s in steps if s.kind == SearchKind.EXAMINE]
    assert examined == [2, 3]


def test_linear_search_compare_steps_flag_matches():
    steps = linear_search_steps([1, 2], 2)
    compares = [s for s in steps if s.kind == SearchKind.COMPARE]
    assert [c.is_match for c in compares] == [False, True]


@pytest.mark.parametrize("start", [-1, 1.5, "0"])
def test_linear_search_rejects_bad_start_index(start):
    with pytest.raises(InvalidArgument):
        linear_search_steps([1, 2, 3], 2, start_index=start)


def test_binary_search_hits_on_first_midpoint():
    steps = binary_search_steps([1, 3, 5, 7, 9], 5)
    kinds = [s.kind for s in steps]
    assert kinds == [
        SearchKind.INITIALIZE,
        SearchKind.CALCULATE_MID,
        SearchKind.EXAMINE_MID,
        SearchKind.COMPARE,
        SearchKind.FOUND,
    ]
    assert steps[-1].found_index == 2
    assert steps[-1].comparisons == 1


def test_binary_search_narrows_right():
    steps = binary_search_steps([1, 3, 5, 7, 9], 9)
    rights = [s for s in steps if s.kind == SearchKind.SEARCH_RIGHT]
    assert [s.bounds for s in rights] == [[3, 4], [4, 4]]
    assert steps[-1].found_index == 4
    assert steps[-1].comparisons == 3


def test_binary_search_not_found_reports_crossed_bounds():
    steps = binary_search_steps([1, 3, 5, 7, 9], 4)
    last = steps[-1]
    assert last.kind == SearchKind.NOT_FOUND
    left, right = last.bounds
    assert left > right
    assert [s.comparison for s in steps if s.kind == SearchKind.COMPARE][0] == "greater"


def test_binary_search_on_empty_array():
    steps = binary_search_steps([], 1)
    assert [s.kind for s in steps] == [SearchKind.INITIALIZE, SearchKind.NOT_FOUND]
    assert steps[-1].comparisons == 0


@pytest.mark.parametrize("n", range(0, 34, 3))
def test_search_correctness_and_binary_bound(n):
    array = list(range(0, 2 * n, 2))
    bound = math.ceil(math.log2(n + 1))
    for target in range(-1, 2 * n + 1):
        present = target in array
        binary = binary_search_steps(array, target)[-1]
        linear = linear_search_steps(array, target)[-1]
        assert binary.comparisons <= bound
        assert (binary.kind == SearchKind.FOUND) == present
        assert (linear.kind == SearchKind.FOUND) == present
        if present:
            assert array[binary.found_index] == target
            assert linear.found_index == array.index(target)
