import pytest

from algorithms.step import Entry, HashStep, SortKind, SortStep, StepBuilder


def _narrate(sb, text="x"):
    sb.message = sb.highlight = sb.description = text


def test_build_numbers_steps_from_one():
    sb = StepBuilder(SortStep)
    steps = []
    for _ in range(3):
        _narrate(sb)
        steps.append(sb.build(SortKind.COMPARE, array=[1]))
    assert [s.sequence_number for s in steps] == [1, 2, 3]


def test_build_requires_narrative_fields():
    sb = StepBuilder(SortStep)
    sb.message = "only a message"
    with pytest.raises(ValueError):
        sb.build(SortKind.COMPARE)


def test_build_resets_scratch_state():
    sb = StepBuilder(SortStep)
    _narrate(sb)
    sb.pseudocode_line = 4
    sb.overlay["key"] = 3
    sb.build(SortKind.SELECT)
    assert sb.message == "" and sb.pseudocode_line == 0 and sb.overlay == {}


def test_snapshots_are_independent_copies():
    sb = StepBuilder(SortStep)
    working = [3, 1, 2]
    _narrate(sb)
    first = sb.build(SortKind.INITIALIZE, array=working)
    working[0] = 99
    _narrate(sb)
    second = sb.build(SortKind.SWAP, array=working)
    assert first.array == [3, 1, 2]
    assert second.array == [99, 1, 2]
    assert first.array is not second.array


def test_to_dict_flattens_kind_and_records():
    sb = StepBuilder(HashStep)
    _narrate(sb, "inserted")
    step = sb.build(SortKind.INSERT, is_final=True, table=[[Entry("a", "value_a")], []])
    data = step.to_dict()
    assert data["kind"] == "insert"
    assert data["table"] == [[{"key": "a", "value": "value_a"}], []]
    assert data["is_final"] is True
