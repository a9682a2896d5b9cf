import json
import logging

import pytest

from algorithms.errors import InvalidArgument
from engine.config import RunConfig
from engine.recorder import Recorder, RunMetrics, compare
from engine.stepper import StepperState


def _run(config):
    rec = Recorder()
    rec.start(config)
    rec.run_to_completion()
    return rec


def test_requires_start():
    rec = Recorder()
    with pytest.raises(RuntimeError):
        rec.run_to_completion()
    with pytest.raises(RuntimeError):
        rec.export()


def test_start_loads_a_paused_stepper():
    rec = Recorder()
    rec.start(RunConfig("bubble-sort", data=[5, 3, 8, 1]))
    assert rec.stepper.state == StepperState.PAUSED
    assert rec.stepper.current_idx == 0
    assert rec.metrics is None


def test_bubble_sort_metrics():
    rec = _run(RunConfig("bubble-sort", data=[5, 3, 8, 1]))
    m = rec.metrics
    assert m.algo_key == "bubble-sort"
    assert m.algo_label == "Bubble Sort"
    assert m.category == "sorting"
    assert m.total_steps == 18
    assert m.comparisons == 6
    assert m.swaps == 4
    assert m.final_kind == "complete"
    assert m.memory_bytes > 0
    assert rec.stepper.is_finished


def test_insertion_sort_counts_shifts_as_swaps():
    m = _run(RunConfig("insertion-sort", data=[3, 2, 1])).metrics
    assert m.swaps == 3


def test_search_comparisons_come_from_the_final_step():
    m = _run(RunConfig("linear-search", input_value=12)).metrics
    assert m.comparisons == 4
    assert m.final_kind == "found"


def test_chaining_collisions():
    m = _run(RunConfig("hash-chaining", data=[])).metrics
    assert m.collisions == 1
    assert m.probes == 0


def test_probing_collisions_and_probes():
    m = _run(RunConfig("hash-probing", data=[])).metrics
    assert m.collisions == 1
    assert m.probes == 4


def test_recursion_metrics():
    assert _run(RunConfig("factorial", input_value=5)).metrics.max_stack_depth == 5
    assert _run(RunConfig("tower-hanoi", input_value=3)).metrics.moves == 7


def test_invalid_config_is_logged_and_raised(caplog):
    rec = Recorder()
    with caplog.at_level(logging.INFO):
        with pytest.raises(InvalidArgument):
            rec.start(RunConfig("factorial", input_value=42))
    assert "Please enter a number between 0 and 8" in caplog.text
    assert rec.stepper is None


def test_generation_is_logged(caplog):
    with caplog.at_level(logging.INFO):
        _run(RunConfig("hash-chaining", data=[1, 2]))
    assert "Using modulo hash function with chaining" in caplog.text
    assert "animation steps" in caplog.text


def test_export_is_json_serialisable():
    rec = _run(RunConfig("fibonacci", input_value=4))
    exported = rec.export()
    assert exported["algo_key"] == "fibonacci"
    assert exported["config"]["input_value"] == 4
    assert exported["metrics"]["total_steps"] == len(exported["steps"])
    assert exported["steps"][-1]["kind"] == "complete"
    json.dumps(exported)


def test_compare_picks_fewer_steps_and_comparisons():
    data = [1, 2, 3, 4, 5]
    bubble = _run(RunConfig("bubble-sort", data=data))
    insertion = _run(RunConfig("insertion-sort", data=data))
    result = compare(bubble, insertion)
    assert result.left.algo_label == "Bubble Sort"
    assert result.winner_steps == "Insertion Sort"
    assert result.winner_comparisons == "Insertion Sort"


def test_compare_identical_runs_ties():
    left = _run(RunConfig("quick-sort"))
    right = _run(RunConfig("quick-sort"))
    result = compare(left, right)
    assert result.winner_steps == "tie"
    assert result.winner_comparisons == "tie"


def test_compare_without_metrics_uses_empty_cards():
    result = compare(Recorder(), Recorder())
    assert result.left == RunMetrics()
    assert result.winner_steps == "tie"


def test_compare_lower_count_wins_on_either_side():
    data = [1, 2, 3, 4, 5]
    insertion = _run(RunConfig("insertion-sort", data=data))
    bubble = _run(RunConfig("bubble-sort", data=data))
    result = compare(insertion, bubble)
    assert result.winner_steps == "Insertion Sort"
    assert result.winner_comparisons == "Insertion Sort"
