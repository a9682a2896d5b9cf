import pytest

from algorithms.sorting import (
    bubble_sort_steps,
    insertion_sort_steps,
    merge_sort_steps,
    quick_sort_steps,
    selection_sort_steps,
)
from algorithms.step import TERMINAL_KINDS, SortKind


ALL_SORTS = [
    bubble_sort_steps,
    selection_sort_steps,
    insertion_sort_steps,
    merge_sort_steps,
    quick_sort_steps,
]

ARRAYS = [
    [],
    [7],
    [2, 1],
    [5, 3, 8, 1],
    [64, 34, 25, 12, 22, 11, 90],
    [3, 3, 1, 3, 2, 1],
    [-4, 10, 0, -4, 7],
    list(range(8)),
    list(range(8, 0, -1)),
]


@pytest.mark.parametrize("sort", ALL_SORTS)
@pytest.mark.parametrize("array", ARRAYS)
def test_final_snapshot_is_sorted_permutation(sort, array):
    steps = sort(array)
    assert steps
    assert steps[-1].array == sorted(array)
    assert steps[-1].kind in TERMINAL_KINDS["sorting"]


@pytest.mark.parametrize("sort", ALL_SORTS)
@pytest.mark.parametrize("array", ARRAYS)
def test_swap_steps_exchange_exactly_their_pair(sort, array):
    steps = sort(array)
    for prev, step in zip(steps, steps[1:]):
        if step.kind != SortKind.SWAP:
            continue
        a, b = step.swapping
        expected = list(prev.array)
        expected[a], expected[b] = expected[b], expected[a]
        assert step.array == expected


@pytest.mark.parametrize("sort", ALL_SORTS)
def test_sequence_numbers_and_final_flag(sort):
    steps = sort([9, 4, 7, 1, 8])
    assert [s.sequence_number for s in steps] == list(range(1, len(steps) + 1))
    assert [s.is_final for s in steps] == [False] * (len(steps) - 1) + [True]
    assert all(s.message and s.highlight and s.description for s in steps)


@pytest.mark.parametrize("sort", ALL_SORTS)
def test_input_is_never_mutated(sort):
    data = [4, 2, 5, 1]
    steps = sort(data)
    assert data == [4, 2, 5, 1]
    steps[0].array.append(100)
    assert all(100 not in s.array for s in steps[1:])


@pytest.mark.parametrize("sort", [bubble_sort_steps, selection_sort_steps, quick_sort_steps])
def test_equal_values_never_swap(sort):
    steps = sort([2, 2, 2, 2])
    assert not [s for s in steps if s.kind == SortKind.SWAP]


@pytest.mark.parametrize("sort", [bubble_sort_steps, selection_sort_steps, insertion_sort_steps])
@pytest.mark.parametrize("array", [[], [7]])
def test_tiny_arrays_complete_without_comparisons(sort, array):
    steps = sort(array)
    assert steps[0].kind == SortKind.INITIALIZE
    assert steps[-1].kind == SortKind.COMPLETE
    assert not [s for s in steps if s.kind == SortKind.COMPARE]


def test_bubble_sort_first_inversion_is_swapped():
    steps = bubble_sort_steps([5, 3, 8, 1])
    kinds = [s.kind for s in steps[:4]]
    assert kinds == [SortKind.INITIALIZE, SortKind.PASS_START, SortKind.COMPARE, SortKind.SWAP]
    assert steps[2].comparing == [0, 1]
    assert steps[3].swapping == [0, 1]
    assert steps[3].array == [3, 5, 8, 1]
    assert steps[-1].array == [1, 3, 5, 8]
    assert steps[-1].sorted == [0, 1, 2, 3]


def test_selection_sort_reports_new_minimum_and_no_swap():
    steps = selection_sort_steps([1, 3, 2])
    kinds = [s.kind for s in steps]
    assert SortKind.NO_SWAP in kinds
    minimum = next(s for s in steps if s.kind == SortKind.NEW_MINIMUM)
    assert minimum.comparing == [2]
    assert minimum.overlay["min_index"] == 2


def test_insertion_sort_shifts_then_inserts_at_beginning():
    steps = insertion_sort_steps([3, 1])
    assert [s.kind for s in steps] == [
        SortKind.INITIALIZE,
        SortKind.SELECT,
        SortKind.COMPARE,
        SortKind.SHIFT,
        SortKind.INSERT_BEGINNING,
        SortKind.INSERT,
        SortKind.COMPLETE,
    ]
    assert steps[3].array == [3, 3]
    assert steps[5].array == [1, 3]


def test_insertion_sort_found_position_mid_array():
    steps = insertion_sort_steps([1, 3, 2])
    found = [s for s in steps if s.kind == SortKind.FOUND_POSITION]
    assert found[-1].overlay["insert_position"] == 1


def test_merge_sort_has_no_bookends_by_default():
    steps = merge_sort_steps([4, 1, 3, 2])
    assert steps[0].kind == SortKind.DIVIDE
    assert steps[0].bounds == [0, 3]
    assert steps[-1].kind == SortKind.MERGE
    assert steps[-1].merged == [0, 1, 2, 3]
    assert SortKind.INITIALIZE not in [s.kind for s in steps]


def test_merge_sort_bookends_on_request():
    steps = merge_sort_steps([4, 1, 3, 2], bookends=True)
    assert steps[0].kind == SortKind.INITIALIZE
    assert steps[0].array == [4, 1, 3, 2]
    assert steps[-1].kind == SortKind.COMPLETE
    assert sum(s.is_final for s in steps) == 1


def test_merge_sort_takes_left_on_ties():
    steps = merge_sort_steps([1, 1])
    compare = next(s for s in steps if s.kind == SortKind.COMPARE)
    assert compare.comparing == [0, 1]
    assert "take 1 from the left half" in compare.description


def test_quick_sort_partitions_around_last_element():
    steps = quick_sort_steps([3, 1, 2])
    assert steps[0].kind == SortKind.SELECT_PIVOT
    assert steps[0].pivot == 2
    placed = next(s for s in steps if s.kind == SortKind.PLACE_PIVOT)
    assert placed.pivot == 1
    assert placed.array == [1, 2, 3]


@pytest.mark.parametrize("sort", [merge_sort_steps, quick_sort_steps])
@pytest.mark.parametrize("array", [[], [7]])
def test_divide_and_conquer_sorts_still_yield_a_step_for_tiny_input(sort, array):
    steps = sort(array)
    assert len(steps) == 1
    assert steps[0].kind == SortKind.COMPLETE
    assert steps[0].is_final
