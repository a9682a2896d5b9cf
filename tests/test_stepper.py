import logging
import time

import pytest

from algorithms.sorting import bubble_sort_steps
from engine.logs import RunLogHandler
from engine.stepper import MIN_INTERVAL, Stepper, StepperState


@pytest.fixture
def steps():
    return bubble_sort_steps([3, 1, 2])


@pytest.fixture
def stepper(steps):
    s = Stepper()
    s.load(steps)
    return s


def test_load_shows_first_step(steps):
    seen = []
    s = Stepper(on_step=seen.append)
    s.load(steps)
    assert s.state == StepperState.PAUSED
    assert s.current_idx == 0
    assert seen == [steps[0]]


def test_load_rejects_empty_trace():
    with pytest.raises(ValueError):
        Stepper().load([])


def test_navigation_is_plain_indexing(stepper, steps):
    assert stepper.next_step()
    assert stepper.current_step is steps[1]
    assert stepper.prev_step()
    assert stepper.current_step is steps[0]
    assert not stepper.prev_step()
    assert stepper.goto_step(3)
    assert stepper.current_step is steps[3]
    assert not stepper.goto_step(len(steps))
    assert not stepper.goto_step(-1)
    assert stepper.current_idx == 3


def test_revisiting_an_index_republishes_the_same_step(steps):
    seen = []
    s = Stepper(on_step=seen.append)
    s.load(steps)
    s.goto_step(2)
    s.goto_step(2)
    assert seen[-1] is seen[-2] is steps[2]


def test_next_past_end_finishes(stepper, steps):
    stepper.goto_step(len(steps) - 1)
    assert not stepper.next_step()
    assert stepper.is_finished


def test_next_onto_last_step_finishes():
    s = Stepper()
    s.load(bubble_sort_steps([2, 1]))
    while s.current_idx < s.total_steps - 2:
        assert s.next_step()
        assert s.state == StepperState.PAUSED
    assert s.next_step()
    assert s.current_step.is_final
    assert s.is_finished


def test_stepping_back_from_finished_pauses(stepper):
    stepper.jump_to_end()
    assert stepper.is_finished
    stepper.prev_step()
    assert stepper.state == StepperState.PAUSED


def test_rewind_keeps_trace(stepper, steps):
    stepper.jump_to_end()
    stepper.rewind()
    assert stepper.current_idx == 0
    assert stepper.total_steps == len(steps)
    assert stepper.state == StepperState.PAUSED


def test_reset_returns_to_idle(stepper):
    stepper.reset()
    assert stepper.state == StepperState.IDLE
    assert stepper.current_step is None
    stepper.play()
    assert stepper.state == StepperState.IDLE


def test_pause_keeps_cursor(stepper):
    stepper.play()
    stepper.next_step()
    stepper.pause()
    assert stepper.state == StepperState.PAUSED
    assert stepper.current_idx == 1


def test_toggle_play(stepper):
    stepper.toggle_play()
    assert stepper.is_playing
    stepper.toggle_play()
    assert stepper.state == StepperState.PAUSED


def test_tick_waits_one_interval(stepper):
    stepper.set_speed("slow")
    stepper.play()
    start = time.monotonic()
    assert not stepper.tick(now=start)
    assert stepper.current_idx == 0
    assert stepper.tick(now=start + 1.1)
    assert stepper.current_idx == 1
    assert not stepper.tick(now=start + 1.6)
    assert stepper.tick(now=start + 2.5)
    assert stepper.current_idx == 2


def test_tick_does_nothing_while_paused(stepper):
    assert not stepper.tick(now=time.monotonic() + 60)
    assert stepper.current_idx == 0


def test_tick_onto_last_step_finishes(steps):
    s = Stepper()
    s.load(steps)
    s.goto_step(len(steps) - 2)
    s.play()
    assert s.tick(now=time.monotonic() + 60)
    assert s.is_finished
    assert s.current_step.is_final


def test_interval_scales_with_multiplier_and_is_floored(stepper):
    stepper.set_speed("slow")
    stepper.set_multiplier(2)
    assert stepper.interval == pytest.approx(0.5)
    stepper.set_speed("turbo")
    stepper.set_multiplier(4)
    assert stepper.interval == MIN_INTERVAL


@pytest.mark.parametrize("bad", [0, -1, "fast", True])
def test_multiplier_must_be_positive(stepper, bad):
    with pytest.raises(ValueError):
        stepper.set_multiplier(bad)


def test_unknown_speed_preset(stepper):
    with pytest.raises(ValueError):
        stepper.set_speed("warp")


def test_run_plays_to_the_end(stepper, steps):
    slept = []
    stepper.set_speed("fast")
    stepper.play()
    applied = stepper.run(sleep=slept.append)
    assert applied == len(steps) - 1
    assert stepper.is_finished
    assert slept == [stepper.interval] * applied


def test_run_stops_when_paused_between_ticks(steps):
    s = Stepper()
    s.load(steps)
    s.on_step = lambda step: s.pause() if step.sequence_number == 3 else None
    s.play()
    applied = s.run(sleep=lambda _: None)
    assert applied == 2
    assert s.current_idx == 2
    assert s.state == StepperState.PAUSED


def test_completion_is_logged(stepper, caplog):
    with caplog.at_level(logging.INFO):
        stepper.jump_to_end()
    assert "Algorithm execution completed!" in caplog.text


def test_run_log_tags_success_steps(steps):
    log = RunLogHandler(capacity=5)
    engine_logger = logging.getLogger("engine")
    engine_logger.addHandler(log)
    try:
        s = Stepper()
        s.load(steps)
        s.jump_to_end()
    finally:
        engine_logger.removeHandler(log)
    entries = log.entries()
    assert len(entries) <= 5
    assert entries[-1] == {
        "message": "Algorithm execution completed!",
        "level": "success",
        "timestamp": entries[-1]["timestamp"],
    }
    assert entries[-2]["message"].startswith("Bubble Sort completed!")
    assert entries[-2]["level"] == "success"
