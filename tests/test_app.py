import pytest

import main
from main import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def _run(client, **body):
    return client.post("/api/run", json=body)


def test_algorithm_catalogue(client):
    res = client.get("/api/algorithms")
    assert res.status_code == 200
    cards = res.get_json()["algorithms"]
    assert len(cards) == 12
    factorial = next(c for c in cards if c["key"] == "factorial")
    assert factorial["input_range"] == [0, 8]
    assert factorial["pseudocode"]


def test_hash_function_listing(client):
    body = client.get("/api/hash-functions").get_json()
    assert "djb2" in body["functions"]
    assert body["aliases"]["sum"] == "modulo"
    assert body["defaults"] == {"table_size": 7, "hash_function": "modulo"}


def test_run_returns_first_step(client):
    res = _run(client, algo_key="bubble-sort", data=[5, 3, 8, 1])
    assert res.status_code == 200
    body = res.get_json()
    assert body["current_step"] == 0
    assert body["total_steps"] == 18
    assert body["state"] == "paused"
    assert body["step"]["kind"] == "initialize"
    assert body["config"]["data"] == [5, 3, 8, 1]


def test_step_navigation(client):
    _run(client, algo_key="linear-search", data=[4, 2, 7, 1], input_value=7)
    assert client.post("/api/step/next").get_json()["current_step"] == 1
    assert client.post("/api/step/prev").get_json()["current_step"] == 0
    assert client.post("/api/step/prev").status_code == 400

    res = client.post("/api/step/goto", json={"index": 2})
    assert res.get_json()["step"]["kind"] == "compare"
    assert client.post("/api/step/goto", json={"index": 99}).status_code == 400

    end = client.post("/api/step/end").get_json()
    assert end["state"] == "finished"
    assert end["step"]["kind"] == "found"
    assert end["step"]["found_index"] == 2
    assert end["step"]["comparisons"] == 3
    assert client.post("/api/step/next").status_code == 400

    rewound = client.post("/api/step/rewind").get_json()
    assert rewound["current_step"] == 0
    assert rewound["state"] == "paused"


def test_state_requires_a_run(client):
    res = client.get("/api/state")
    assert res.status_code == 400
    assert "No active run" in res.get_json()["error"]


def test_invalid_run_is_a_bad_request(client):
    res = _run(client, algo_key="factorial", input_value=9)
    assert res.status_code == 400
    assert res.get_json()["error"] == "Please enter a number between 0 and 8"
    assert _run(client, algo_key="nope").status_code == 400


def test_play_tick_and_speed(client):
    _run(client, algo_key="tower-hanoi", input_value=2)
    assert client.post("/api/play").get_json()["state"] == "playing"

    speed = client.post("/api/config/speed", json={"speed": "turbo", "multiplier": 2}).get_json()
    assert speed["speed"] == "turbo"
    assert speed["interval"] == pytest.approx(0.05)

    tick = client.post("/api/tick").get_json()
    assert isinstance(tick["advanced"], bool)

    assert client.post("/api/play").get_json()["state"] == "paused"
    assert client.post("/api/config/speed", json={"speed": "warp"}).status_code == 400
    assert client.post("/api/config/speed", json={"multiplier": 0}).status_code == 400


def test_hashing_run_serialises_tables(client):
    body = _run(client, algo_key="hash-chaining", data=[], hash_config={"table_size": 5}).get_json()
    assert body["config"]["hash_config"]["table_size"] == 5
    end = client.post("/api/step/end").get_json()
    assert end["step"]["kind"] == "complete"
    assert sum(len(bucket) for bucket in end["step"]["table"]) == 6


def test_logs_keep_last_five(client):
    _run(client, algo_key="selection-sort")
    client.post("/api/step/end")
    logs = client.get("/api/logs").get_json()["logs"]
    assert 0 < len(logs) <= 5
    assert logs[-1]["level"] == "success"


def test_compare_endpoint(client):
    res = client.post("/api/compare", json={
        "left": {"algo_key": "bubble-sort", "data": [1, 2, 3]},
        "right": {"algo_key": "bubble-sort", "data": [1, 2, 3]},
    })
    assert res.status_code == 200
    body = res.get_json()
    assert body["winner_steps"] == "tie"
    assert body["left"]["algo_key"] == "bubble-sort"


def test_compare_needs_both_sides(client):
    assert client.post("/api/compare", json={"left": {"algo_key": "bubble-sort"}}).status_code == 400


def test_hash_compare_endpoint(client):
    res = client.post("/api/hash/compare", json={"keys": ["ab", "ba"], "table_size": 5, "functions": ["modulo"]})
    body = res.get_json()
    assert body["table_size"] == 5
    assert body["functions"]["modulo"]["collisions"] == 1


def test_hash_compare_clamps_table_size(client):
    body = client.post("/api/hash/compare", json={"table_size": 1000}).get_json()
    assert body["table_size"] == 7
    assert len(body["functions"]) == 5


def _run_id(client):
    with client.session_transaction() as sess:
        return sess.get("run_id")


def test_run_store_evicts_oldest_sessions(monkeypatch):
    monkeypatch.setattr(main, "MAX_RUNS", 3)
    run_ids = []
    for _ in range(5):
        fresh = app.test_client()
        assert _run(fresh, algo_key="bubble-sort", data=[2, 1]).status_code == 200
        run_ids.append(_run_id(fresh))
    assert list(main.RUNS) == run_ids[-3:]
    assert len(main.RUN_LOGS) <= 3
    assert run_ids[0] not in main.RUN_LOGS


def test_reset_drops_the_session_run(client):
    _run(client, algo_key="bubble-sort", data=[2, 1])
    run_id = _run_id(client)
    assert run_id in main.RUNS

    assert client.post("/api/reset").get_json() == {"reset": True}
    assert run_id not in main.RUNS
    assert run_id not in main.RUN_LOGS
    assert _run_id(client) is None
    assert client.get("/api/state").status_code == 400
    assert client.get("/api/logs").get_json()["logs"] == []
    assert client.post("/api/reset").get_json() == {"reset": False}


def test_logs_are_kept_per_session(client):
    _run(client, algo_key="bubble-sort", data=[2, 1])
    other = app.test_client()
    _run(other, algo_key="factorial", input_value=3)

    mine = [e["message"] for e in client.get("/api/logs").get_json()["logs"]]
    theirs = [e["message"] for e in other.get("/api/logs").get_json()["logs"]]
    assert mine and theirs
    assert not any("factorial" in m for m in mine)
    assert any("factorial" in m for m in theirs)
    assert app.test_client().get("/api/logs").get_json()["logs"] == []
