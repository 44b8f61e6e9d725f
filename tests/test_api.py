import pytest
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient

from api import dependencies
from api.dependencies import get_db
from api.main import app
from database.exceptions import DatabaseError, NotFoundError
from models import Group, GroupKind, Match, Side
from conftest import build_snapshot


# ================================================================
# Fixtures
# ================================================================

def _snapshot():
    pair = Group(id="g1", name="Pair One", kind=GroupKind.PAIR, player_ids=["a", "b"])
    match = Match(id="m1", round_id="r1",
                  side_a=Side(label="Ann", player_ids=["a"]),
                  side_b=Side(label="Bob", player_ids=["b"]))
    return build_snapshot(
        {"a": 10, "b": 10},
        [
            {"id": "r1", "round_no": 1, "cards": {"a": [4] * 18, "b": [5] * 18}},
            {"id": "r2", "round_no": 2},
        ],
        enabled=True,
        groups=[pair],
        matches=[match],
    )


@pytest.fixture
def fake_db():
    manager = MagicMock()
    manager.load_tour_snapshot = AsyncMock(side_effect=lambda tour_id: _snapshot())
    manager.save_round_players = AsyncMock(side_effect=lambda rows: len(list(rows)))
    app.dependency_overrides[get_db] = lambda: manager
    yield manager
    app.dependency_overrides.clear()


@pytest.fixture
def client(fake_db):
    return TestClient(app)


# ================================================================
# Health
# ================================================================

def test_health_without_pool_is_degraded(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "degraded", "database": False}


# ================================================================
# Leaderboards
# ================================================================

def test_tour_leaderboard(client):
    resp = client.get("/api/tours/t1/leaderboard")
    assert resp.status_code == 200
    body = resp.json()
    assert body["tour_name"] == "Spring Tour"
    assert [row["label"] for row in body["rows"]] == ["A", "B"]
    assert body["rows"][0]["per_round"] == {"r1": 46, "r2": None}


def test_tour_leaderboard_rejects_bad_best_n(client):
    assert client.get("/api/tours/t1/leaderboard?best_n=0").status_code == 422


def test_unknown_tour_is_404(client, fake_db):
    fake_db.load_tour_snapshot.side_effect = NotFoundError("missing")
    assert client.get("/api/tours/nope/leaderboard").status_code == 404


def test_group_leaderboard_defaults_to_best_ball_for_pairs(client):
    resp = client.get("/api/tours/t1/leaderboard/groups?kind=pair")
    assert resp.status_code == 200
    rows = resp.json()["rows"]
    assert rows[0]["label"] == "Pair One"
    assert rows[0]["total"] == 46

    resp = client.get("/api/tours/t1/leaderboard/groups?kind=team")
    assert resp.json()["rows"] == []


def test_eclectic(client):
    resp = client.get("/api/tours/t1/leaderboard/eclectic")
    assert resp.status_code == 200
    assert resp.json()["rows"][0]["stats"]["holes_played"] == 18


def test_round_winners(client):
    resp = client.get("/api/tours/t1/rounds/r1/winners")
    assert resp.status_code == 200
    body = resp.json()
    assert body["cutoff_position"] == 1
    assert [w["label"] for w in body["winners"]] == ["A"]

    assert client.get("/api/tours/t1/rounds/zz/winners").status_code == 404


# ================================================================
# Matches
# ================================================================

def test_round_matches(client):
    resp = client.get("/api/tours/t1/rounds/r1/matches")
    assert resp.status_code == 200
    match = resp.json()["matches"][0]
    assert match["is_final"] is True
    assert match["final_text"] == "Ann def Bob 10 & 8"


def test_match_points(client):
    resp = client.get("/api/tours/t1/matches/points")
    assert resp.status_code == 200
    assert [(r["label"], r["total"]) for r in resp.json()["rows"]] == [("Ann", 1.0), ("Bob", 0.0)]


# ================================================================
# Handicaps
# ================================================================

def test_handicap_preview(client):
    resp = client.get("/api/tours/t1/handicaps")
    assert resp.status_code == 200
    body = resp.json()
    assert body["enabled"] is True
    second = body["rounds"][1]
    assert second["handicaps"] == {"a": 7, "b": 13}


def test_handicap_commit_writes_rows(client, fake_db):
    resp = client.post("/api/tours/t1/handicaps/recalculate")
    assert resp.status_code == 200
    body = resp.json()
    assert body["rows_written"] == 4
    assert body["halted_at_round"] == "r2"
    assert body["handicaps"]["r2"] == {"a": 7, "b": 13}
    fake_db.save_round_players.assert_awaited_once()


def test_handicap_commit_conflict_when_running(client, monkeypatch):
    busy = MagicMock()
    busy.locked.return_value = True
    monkeypatch.setitem(dependencies._tour_locks, "t1", busy)
    assert client.post("/api/tours/t1/handicaps/recalculate").status_code == 409


def test_handicap_commit_database_failure(client, fake_db):
    fake_db.save_round_players.side_effect = DatabaseError("boom")
    resp = client.post("/api/tours/t1/handicaps/recalculate")
    assert resp.status_code == 500
    assert "DatabaseError" in resp.json()["detail"]


def test_appleby_preview_and_refused_apply(client, fake_db):
    resp = client.get("/api/tours/t1/appleby")
    assert resp.status_code == 200
    assert resp.json()["can_update"] is False

    resp = client.post("/api/tours/t1/appleby/apply")
    assert resp.status_code == 400
    fake_db.save_round_players.assert_not_awaited()


def test_recalculation_lock_released_after_commit(client):
    assert client.post("/api/tours/t1/handicaps/recalculate").status_code == 200
    assert "t1" not in dependencies._tour_locks


@pytest.mark.asyncio
async def test_recalculation_lock_refuses_second_caller():
    async with dependencies.tour_recalculation_lock("t9"):
        with pytest.raises(dependencies.RecalculationInProgress):
            async with dependencies.tour_recalculation_lock("t9"):
                pass
        assert "t9" in dependencies._tour_locks
    assert "t9" not in dependencies._tour_locks
