"""Tests for API endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from orbit.api.sessions import get_session_store
from orbit.main import app

client = TestClient(app)

ABC = [
    {"id": "a", "name": "Alice", "closeness": 10.0},
    {"id": "b", "name": "Bob", "closeness": 5.0},
    {"id": "c", "name": "Charlie", "closeness": 0.0},
]
DANA = {"id": "d", "name": "Dana"}


def _start(**overrides) -> dict:
    body = {"friends": ABC, "candidate": DANA, **overrides}
    response = client.post("/api/rating/sessions", json=body)
    assert response.status_code == 200, response.text
    return response.json()


def _answer(session_id: str, result: str) -> dict:
    response = client.post(f"/api/rating/sessions/{session_id}/answer", json={"result": result})
    assert response.status_code == 200, response.text
    return response.json()


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["open_sessions"] == 0
    assert data["env"]


# ---------------------------------------------------------------------------
# Icons
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "closeness, shape, color",
    [(1.0, "dot", "blue"), (6.0, "hexagon", "green"), (9.5, "star12", "red"), (42, "star12", "red")],
)
def test_classify(closeness, shape, color):
    response = client.post("/api/icons/classify", json={"closeness": closeness})
    assert response.status_code == 200
    data = response.json()
    assert data["shape"] == shape
    assert data["color"] == color
    assert data["token"] == f"{shape}-{color}"
    assert 12 <= data["size"] <= 24


def test_classify_label():
    data = client.post("/api/icons/classify", json={"closeness": 7.04}).json()
    assert data["label"] == "7.0"


# ---------------------------------------------------------------------------
# Orbit layout
# ---------------------------------------------------------------------------


def test_rings_empty():
    response = client.post("/api/orbit/rings", json={"scores": [], "width": 800, "height": 600})
    assert response.status_code == 200
    assert response.json() == {"radii": [], "thresholds": []}


def test_rings_single():
    data = client.post("/api/orbit/rings", json={"scores": [5], "width": 800, "height": 600}).json()
    assert data == {"radii": [28.0], "thresholds": [10.0]}


def test_rings_full():
    data = client.post(
        "/api/orbit/rings", json={"scores": [1, 5, 9], "width": 800, "height": 600}
    ).json()
    assert len(data["radii"]) == 20
    assert data["radii"][0] == pytest.approx(28.0)
    assert data["radii"][-1] == pytest.approx(260.0)
    assert data["thresholds"][-1] == pytest.approx(10.0)


def test_rings_smoothed():
    data = client.post(
        "/api/orbit/rings",
        json={"scores": [1, 9], "width": 800, "height": 600, "previous_thresholds": [5.0] * 20},
    ).json()
    assert data["thresholds"][0] == pytest.approx(0.28 * 0.5 + 0.72 * 5.0)


def test_rings_degenerate_viewport():
    data = client.post("/api/orbit/rings", json={"scores": [1, 9], "width": 0, "height": 600}).json()
    assert data == {"radii": [], "thresholds": []}


def test_positions():
    layout = client.post(
        "/api/orbit/rings", json={"scores": [10, 0], "width": 800, "height": 600}
    ).json()
    response = client.post(
        "/api/orbit/positions",
        json={
            "friends": [{"id": "near", "closeness": 10}, {"id": "far", "closeness": 0}],
            "layout": layout,
            "width": 800,
            "height": 600,
        },
    )
    assert response.status_code == 200
    positions = response.json()["positions"]
    assert [p["id"] for p in positions] == ["near", "far"]
    assert [p["ring"] for p in positions] == [0, 19]


def test_positions_rejects_out_of_range_score():
    response = client.post(
        "/api/orbit/positions",
        json={
            "friends": [{"id": "x", "closeness": 11}],
            "layout": {"radii": [28.0], "thresholds": [10.0]},
            "width": 800,
            "height": 600,
        },
    )
    assert response.status_code == 422


def test_layout_round_trip():
    response = client.post(
        "/api/orbit/layout",
        json={
            "friends": [{"id": f"f{i}", "closeness": i} for i in range(11)],
            "width": 1024,
            "height": 768,
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert len(data["layout"]["radii"]) == 20
    assert [p["id"] for p in data["positions"]] == [f"f{i}" for i in range(11)]
    for pos in data["positions"]:
        assert 0 <= pos["x"] <= 1024
        assert 0 <= pos["y"] <= 768


# ---------------------------------------------------------------------------
# Rating sessions
# ---------------------------------------------------------------------------


def test_first_friend_resolves_immediately():
    data = _start(friends=[])
    assert data["status"] == "resolved"
    assert data["pivot"] is None
    result = data["result"]
    assert result["comparisons_used"] == 0
    assert [(f["id"], f["closeness"]) for f in result["friends"]] == [("d", 10.0)]
    assert len(get_session_store()) == 0


def test_step_by_step_insertion():
    data = _start()
    assert data["status"] == "comparing"
    assert data["pivot"]["id"] == "b"
    assert data["max_comparisons"] == 3
    session_id = data["session_id"]

    data = _answer(session_id, "more_close")
    assert data["pivot"]["id"] == "a"
    assert data["comparisons_used"] == 1

    data = _answer(session_id, "less_close")
    assert data["status"] == "resolved"
    result = data["result"]
    assert [f["id"] for f in result["friends"]] == ["a", "d", "b", "c"]
    assert [f["closeness"] for f in result["friends"]] == pytest.approx([10, 20 / 3, 10 / 3, 0])
    assert result["pivots_visited"] == ["b", "a"]
    assert [c["result"] for c in result["comparisons"]] == ["more_close", "less_close"]
    assert client.get(f"/api/rating/sessions/{session_id}").status_code == 404


def test_tie_joins_pivot_group():
    data = _start()
    result = _answer(data["session_id"], "tie")["result"]
    assert result["tied_with"] == "b"
    scores = {f["id"]: f["closeness"] for f in result["friends"]}
    assert scores == {"a": 10.0, "b": 5.0, "d": 5.0, "c": 0.0}
    icons = {f["id"]: f["icon_key"]["shape"] for f in result["friends"]}
    assert icons["d"] == icons["b"]


def test_budget_override_exhausts():
    data = _start(max_comparisons=1)
    data = _answer(data["session_id"], "less_close")
    assert data["status"] == "resolved"
    assert data["result"]["insert_index"] == 2


def test_get_session():
    data = _start()
    response = client.get(f"/api/rating/sessions/{data['session_id']}")
    assert response.status_code == 200
    assert response.json()["pivot"]["id"] == "b"
    assert client.get("/api/health").json()["open_sessions"] == 1


def test_cancel_session():
    data = _start()
    response = client.delete(f"/api/rating/sessions/{data['session_id']}")
    assert response.status_code == 200
    assert response.json()["status"] == "cancelled"
    assert response.json()["result"] is None
    assert len(get_session_store()) == 0


def test_unknown_session():
    assert client.get("/api/rating/sessions/nope").status_code == 404
    answer = client.post("/api/rating/sessions/nope/answer", json={"result": "tie"})
    assert answer.status_code == 404
    assert client.delete("/api/rating/sessions/nope").status_code == 404


def test_bad_answer_value():
    data = _start()
    response = client.post(
        f"/api/rating/sessions/{data['session_id']}/answer", json={"result": "maybe"}
    )
    assert response.status_code == 422


@pytest.mark.parametrize(
    "overrides",
    [
        {"candidate": {"id": "a"}},
        {"max_comparisons": 0},
        {"smoothing_factor": 1.5},
        {"friends": list(reversed(ABC))},
    ],
)
def test_start_rejected(overrides):
    body = {"friends": ABC, "candidate": DANA, **overrides}
    response = client.post("/api/rating/sessions", json=body)
    assert response.status_code == 422
    assert len(get_session_store()) == 0


def test_session_limit_evicts_oldest(monkeypatch):
    store = get_session_store()
    monkeypatch.setattr(store, "max_sessions", 2)
    first = _start()["session_id"]
    _start()
    _start()
    assert len(store) == 2
    assert store.get(first) is None


def test_ranking_error_message_returned():
    response = client.post("/api/rating/sessions", json={"friends": ABC, "candidate": {"id": "b"}})
    assert response.status_code == 422
    assert response.json()["detail"] == "candidate 'b' is already ranked"


def test_answer_after_resolution_is_gone():
    data = _start(friends=[{"id": "a", "closeness": 10.0}])
    session_id = data["session_id"]
    _answer(session_id, "tie")
    again = client.post(f"/api/rating/sessions/{session_id}/answer", json={"result": "tie"})
    assert again.status_code == 404
