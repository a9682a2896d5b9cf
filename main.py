"""
main.py — Algorithm Step Visualizer Flask App
===============================================
The JSON API that powers the visualizer front end.

Routes:
  GET  /api/algorithms         – registry listing (labels, pseudocode, ranges)
  GET  /api/hash-functions     – hash function names + aliases
  POST /api/run                – generate a trace for {algo_key, data, input_value, hash_config}
  POST /api/step/next          – advance one step
  POST /api/step/prev          – rewind one step
  POST /api/step/goto          – jump to step {index}
  POST /api/step/rewind        – back to step 0
  POST /api/step/end           – jump to the final step
  POST /api/play               – toggle play/pause
  POST /api/tick               – apply one step if playing and the interval elapsed
  POST /api/config/speed       – {speed: preset} and/or {multiplier: x}
  GET  /api/state              – cursor, total, playback state, current step
  GET  /api/logs               – last five log entries of this session's run
  POST /api/reset              – drop this session's run and its log
  POST /api/compare            – run two configs to completion, compare metrics
  POST /api/hash/compare       – spread of the same keys under each hash function

State management:
  Recorders live in the in-memory RUNS dict keyed by a run id stored in
  the Flask session, one active run per browser session.  RUNS and the
  per-run logs in RUN_LOGS hold at most MAX_RUNS entries; the oldest
  run is evicted first, and /api/reset drops one explicitly.
"""

import logging
import os
import secrets
import sys
import threading
import uuid
from collections import OrderedDict
from dataclasses import asdict

from flask import Flask, g, jsonify, request, session

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from algorithms import list_algorithms
from algorithms.errors import InvalidArgument
from algorithms.hash_functions import HASH_FUNCTION_ALIASES, HASH_FUNCTIONS, compare_hash_functions
from engine import Recorder, RunConfig, RunLogHandler, compare, get_logger
from engine.config import DEFAULT_TABLE_SIZE, SAMPLE_KEYS, HashConfig


app = Flask(__name__)
app.secret_key = secrets.token_hex(32)

logger = get_logger("visualizer")

# In-memory stores keyed by session run id, oldest evicted past MAX_RUNS
MAX_RUNS = 64
RUNS     = OrderedDict()    # run id -> Recorder
RUN_LOGS = OrderedDict()    # run id -> RunLogHandler (recent-activity panel)

ENGINE_LOGGER = logging.getLogger("engine")


def _remember(store: OrderedDict, run_id: str, value):
    store[run_id] = value
    store.move_to_end(run_id)
    while len(store) > MAX_RUNS:
        evicted, _ = store.popitem(last=False)
        logger.info("Evicted run %s", evicted)
    return value


def _forget(run_id: str) -> None:
    RUNS.pop(run_id, None)
    RUN_LOGS.pop(run_id, None)


class _RequestLogForwarder(logging.Handler):
    """Copies engine records logged by one request thread into a run's log."""

    def __init__(self, target: RunLogHandler):
        super().__init__(target.level)
        self.target = target
        self.thread = threading.get_ident()

    def emit(self, record: logging.LogRecord) -> None:
        if record.thread == self.thread:
            self.target.emit(record)


# ---------------------------------------------------------------------------
# Per-run log capture
# ---------------------------------------------------------------------------
@app.before_request
def attach_run_log():
    run_id = session.get("run_id")
    if run_id is None and request.endpoint == "api_run":
        run_id = session["run_id"] = uuid.uuid4().hex
    if run_id is None:
        return
    run_log = RUN_LOGS.get(run_id) or _remember(RUN_LOGS, run_id, RunLogHandler())
    g.log_forwarder = _RequestLogForwarder(run_log)
    ENGINE_LOGGER.addHandler(g.log_forwarder)


def _detach_run_log() -> None:
    forwarder = g.pop("log_forwarder", None)
    if forwarder is not None:
        ENGINE_LOGGER.removeHandler(forwarder)


@app.after_request
def detach_run_log(response):
    _detach_run_log()
    return response


@app.teardown_request
def detach_run_log_on_error(exc=None):
    _detach_run_log()


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------
@app.errorhandler(InvalidArgument)
def handle_invalid_argument(exc: InvalidArgument):
    logger.warning("Rejected request to %s: %s", request.path, exc)
    return jsonify({"error": str(exc)}), 400


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def _body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidArgument("request body must be a JSON object")
    return data


def current_recorder() -> Recorder:
    rec = RUNS.get(session.get("run_id"))
    if rec is None or rec.stepper is None:
        raise InvalidArgument("No active run; POST /api/run first")
    return rec


def get_state(rec: Recorder) -> dict:
    """Return the run's playback state as a dict."""
    stepper = rec.stepper
    step    = stepper.current_step
    return {
        "algo_key":     rec.config.algo_key,
        "current_step": stepper.current_idx,
        "total_steps":  stepper.total_steps,
        "state":        stepper.state.value,
        "speed":        stepper.speed,
        "multiplier":   stepper.multiplier,
        "interval":     stepper.interval,
        "step":         step.to_dict() if step else None,
    }


def _algo_card(info) -> dict:
    return {
        "key":              info.key,
        "label":            info.label,
        "category":         info.category,
        "input_kind":       info.input_kind,
        "pseudocode":       info.pseudocode,
        "tags":             info.tags,
        "complexity_time":  info.complexity_time,
        "complexity_space": info.complexity_space,
        "description":      info.description,
        "input_range":      list(info.input_range) if info.input_range else None,
        "requires_sorted":  info.requires_sorted,
    }


# ---------------------------------------------------------------------------
# API: Catalogue
# ---------------------------------------------------------------------------
@app.route("/api/algorithms", methods=["GET"])
def api_algorithms():
    return jsonify({"algorithms": [_algo_card(a) for a in list_algorithms()]})


@app.route("/api/hash-functions", methods=["GET"])
def api_hash_functions():
    return jsonify({
        "functions": list(HASH_FUNCTIONS),
        "aliases":   HASH_FUNCTION_ALIASES,
        "defaults":  HashConfig().to_dict(),
    })


# ---------------------------------------------------------------------------
# API: Run Algorithm
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    config = RunConfig.from_dict(_body())

    rec = Recorder()
    rec.start(config)

    _remember(RUNS, session["run_id"], rec)

    payload = get_state(rec)
    payload["config"] = rec.config.to_dict()
    return jsonify(payload)


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    rec = current_recorder()
    if not rec.stepper.next_step():
        return jsonify({"error": "Already at last step", **get_state(rec)}), 400
    return jsonify(get_state(rec))


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    rec = current_recorder()
    if not rec.stepper.prev_step():
        return jsonify({"error": "Already at first step", **get_state(rec)}), 400
    return jsonify(get_state(rec))


@app.route("/api/step/goto", methods=["POST"])
def api_step_goto():
    rec = current_recorder()
    idx = _body().get("index", 0)
    if not rec.stepper.goto_step(idx):
        return jsonify({"error": "Invalid step index", **get_state(rec)}), 400
    return jsonify(get_state(rec))


@app.route("/api/step/rewind", methods=["POST"])
def api_step_rewind():
    rec = current_recorder()
    rec.stepper.rewind()
    return jsonify(get_state(rec))


@app.route("/api/step/end", methods=["POST"])
def api_step_end():
    rec = current_recorder()
    rec.stepper.jump_to_end()
    return jsonify(get_state(rec))


# ---------------------------------------------------------------------------
# API: Playback
# ---------------------------------------------------------------------------
@app.route("/api/play", methods=["POST"])
def api_play():
    rec = current_recorder()
    rec.stepper.toggle_play()
    return jsonify(get_state(rec))


@app.route("/api/tick", methods=["POST"])
def api_tick():
    rec   = current_recorder()
    taken = rec.stepper.tick()
    return jsonify({"advanced": taken, **get_state(rec)})


@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    rec  = current_recorder()
    data = _body()
    try:
        if "speed" in data:
            rec.stepper.set_speed(data["speed"])
        if "multiplier" in data:
            rec.stepper.set_multiplier(data["multiplier"])
    except ValueError as exc:
        raise InvalidArgument(str(exc)) from exc
    return jsonify(get_state(rec))


@app.route("/api/state", methods=["GET"])
def api_state():
    return jsonify(get_state(current_recorder()))


@app.route("/api/logs", methods=["GET"])
def api_logs():
    run_log = RUN_LOGS.get(session.get("run_id"))
    return jsonify({"logs": run_log.entries() if run_log else []})


@app.route("/api/reset", methods=["POST"])
def api_reset():
    run_id = session.pop("run_id", None)
    if run_id is not None:
        _forget(run_id)
    return jsonify({"reset": run_id is not None})


# ---------------------------------------------------------------------------
# API: Comparison Mode
# ---------------------------------------------------------------------------
@app.route("/api/compare", methods=["POST"])
def api_compare():
    data = _body()
    if "left" not in data or "right" not in data:
        raise InvalidArgument("compare needs both 'left' and 'right' run configs")

    recorders = []
    for side in ("left", "right"):
        rec = Recorder()
        rec.start(RunConfig.from_dict(data[side]))
        rec.run_to_completion()
        recorders.append(rec)

    return jsonify(asdict(compare(*recorders)))


@app.route("/api/hash/compare", methods=["POST"])
def api_hash_compare():
    data   = _body()
    keys   = data.get("keys") or SAMPLE_KEYS
    config = HashConfig(table_size=data.get("table_size", DEFAULT_TABLE_SIZE)).normalised()
    names  = data.get("functions")
    if names is not None and not isinstance(names, list):
        raise InvalidArgument("functions must be a list of names")
    if not isinstance(keys, list):
        raise InvalidArgument("keys must be a list")

    report = compare_hash_functions(keys, config.table_size, names)
    return jsonify({"table_size": config.table_size, "functions": report})


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    print("=" * 60)
    print("  Algorithm Step Visualizer")
    print("  Starting Flask server...")
    print("  Open http://localhost:5000/api/algorithms")
    print("=" * 60)
    app.run(debug=True, host="0.0.0.0", port=5000)
