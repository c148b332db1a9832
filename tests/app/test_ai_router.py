"""Unit tests for the opponent AI router (/api/ai/*).

Uses FastAPI TestClient against a minimal app holding a real MatchRegistry;
no server needed.
"""
from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.config import Settings
from app.matches import MatchRegistry
from app.routers.ai import router
from arena.comms.event_bus import EventBus


HEAVY = {"unit_type": "heavy-tank", "position": [200, 120], "hp": 1000}


def _make_app(with_registry: bool = True, bus: EventBus | None = None) -> FastAPI:
    app = FastAPI()
    app.include_router(router)
    app.state.matches = MatchRegistry(Settings(), bus=bus) if with_registry else None
    return app


@pytest.fixture
def client():
    return TestClient(_make_app())


@pytest.mark.unit
class TestCreateMatch:
    def test_create_named(self, client):
        resp = client.post("/api/ai/matches", json={"match_id": "m1"})
        assert resp.status_code == 200
        assert resp.json() == {"match_id": "m1", "mode": "cycle"}

    def test_create_generates_id(self, client):
        resp = client.post("/api/ai/matches", json={})
        assert resp.json()["match_id"].startswith("match-")

    def test_duplicate_is_409(self, client):
        client.post("/api/ai/matches", json={"match_id": "m1"})
        resp = client.post("/api/ai/matches", json={"match_id": "m1"})
        assert resp.status_code == 409

    def test_503_without_registry(self):
        client = TestClient(_make_app(with_registry=False))
        assert client.post("/api/ai/matches", json={}).status_code == 503

    def test_list(self, client):
        client.post("/api/ai/matches", json={"match_id": "a"})
        client.post("/api/ai/matches", json={"match_id": "b"})
        ids = {m["match_id"] for m in client.get("/api/ai/matches").json()["matches"]}
        assert ids == {"a", "b"}


@pytest.mark.unit
class TestTick:
    def test_push_then_defend(self, client):
        client.post("/api/ai/matches", json={"match_id": "m1"})

        resp = client.post("/api/ai/matches/m1/tick", json={"time": 10.0, "elixir": 8})
        assert resp.status_code == 200
        data = resp.json()
        assert data["mode"] == "push"
        assert data["last_push_start"] == 10.0
        assert data["elixir_investment"] == 0

        resp = client.post("/api/ai/matches/m1/tick", json={
            "time": 10.5, "elixir": 8, "opposing_units": [HEAVY],
        })
        data = resp.json()
        assert data["mode"] == "defend"
        assert data["last_mode_change"] == 10.5
        assert data["assessment"]["top_unit_type"] == "heavy-tank"
        assert [h["to"] for h in data["history"]] == ["push", "defend"]

    def test_push_held_by_own_heavy(self, client):
        client.post("/api/ai/matches", json={"match_id": "m1"})
        client.post("/api/ai/matches/m1/tick", json={"time": 6.0, "elixir": 8})
        resp = client.post("/api/ai/matches/m1/tick", json={
            "time": 15.0, "own_units": [{"unit_type": "giant"}],
        })
        assert resp.json()["mode"] == "push"
        resp = client.post("/api/ai/matches/m1/tick", json={
            "time": 15.5, "own_units": [{"unit_type": "giant", "alive": False}],
        })
        assert resp.json()["mode"] == "cycle"

    def test_match_towers_used(self, client):
        knight = {"unit_type": "knight", "position": [210, 110], "hp": 250}
        client.post("/api/ai/matches", json={"match_id": "default"})
        client.post("/api/ai/matches", json={
            "match_id": "far", "towers": [{"position": [2000, 2000], "name": "solo"}],
        })
        tick = {"time": 1.0, "opposing_units": [knight]}

        # Standard towers: 5 + hp 1 + left 3 + king 1
        resp = client.post("/api/ai/matches/default/tick", json=tick)
        assert resp.json()["mode"] == "defend"

        # Far from the solo tower: 5 + hp 1 only
        resp = client.post("/api/ai/matches/far/tick", json=tick)
        assert resp.json()["mode"] == "cycle"
        assert resp.json()["last_threat"] == 6

    def test_payload_towers_override(self, client):
        client.post("/api/ai/matches", json={"match_id": "m1"})
        resp = client.post("/api/ai/matches/m1/tick", json={
            "time": 1.0, "opposing_units": [HEAVY], "towers": [],
        })
        assert resp.json()["mode"] == "defend"

    def test_unknown_match_404(self, client):
        resp = client.post("/api/ai/matches/nope/tick", json={"time": 1.0})
        assert resp.status_code == 404

    def test_malformed_body_422(self, client):
        client.post("/api/ai/matches", json={"match_id": "m1"})
        resp = client.post("/api/ai/matches/m1/tick", json={"elixir": 3})
        assert resp.status_code == 422

    @pytest.mark.parametrize("body", [
        '{"time": Infinity, "elixir": 3}',
        '{"time": NaN}',
        '{"time": 1.0, "elixir": Infinity}',
        '{"time": 1.0, "opposing_units": [{"unit_type": "giant", "position": [200, NaN], "hp": 900}]}',
        '{"time": 1.0, "towers": [{"position": [Infinity, 100]}]}',
    ])
    def test_non_finite_numbers_422(self, client, body):
        client.post("/api/ai/matches", json={"match_id": "m1"})
        resp = client.post(
            "/api/ai/matches/m1/tick",
            content=body,
            headers={"content-type": "application/json"},
        )
        assert resp.status_code == 422

        data = client.get("/api/ai/matches/m1").json()
        assert data["ticks"] == 0
        assert data["last_mode_change"] == 0.0
        resp = client.post("/api/ai/matches/m1/tick", json={"time": 6.0, "elixir": 7})
        assert resp.status_code == 200
        assert resp.json()["mode"] == "push"

    def test_mode_change_published(self):
        bus = EventBus()
        q = bus.subscribe("ai_mode_changed")
        client = TestClient(_make_app(bus=bus))
        client.post("/api/ai/matches", json={"match_id": "m1"})
        client.post("/api/ai/matches/m1/tick", json={"time": 6.0, "elixir": 9})
        msg = q.get_nowait()
        assert msg["data"]["controller"] == "m1"
        assert msg["data"]["to"] == "push"


@pytest.mark.unit
class TestTelemetryAndDelete:
    def test_get(self, client):
        client.post("/api/ai/matches", json={"match_id": "m1"})
        data = client.get("/api/ai/matches/m1").json()
        assert data["match_id"] == "m1"
        assert data["mode"] == "cycle"
        assert data["ticks"] == 0

    def test_get_unknown(self, client):
        assert client.get("/api/ai/matches/nope").status_code == 404

    def test_delete(self, client):
        client.post("/api/ai/matches", json={"match_id": "m1"})
        resp = client.delete("/api/ai/matches/m1")
        assert resp.json() == {"status": "deleted", "match_id": "m1"}
        assert client.get("/api/ai/matches/m1").status_code == 404

    def test_delete_unknown(self, client):
        assert client.delete("/api/ai/matches/nope").status_code == 404


@pytest.mark.unit
class TestArchetypes:
    def test_lists_registry(self, client):
        data = client.get("/api/ai/archetypes").json()["archetypes"]
        ids = [a["type_id"] for a in data]
        assert ids == sorted(ids)
        assert {"giant", "megaknight", "knight", "heavy-tank", "skeleton"} <= set(ids)

    def test_entry_fields(self, client):
        data = client.get("/api/ai/archetypes").json()["archetypes"]
        giant = next(a for a in data if a["type_id"] == "giant")
        assert giant == {
            "type_id": "giant",
            "display_name": "Giant",
            "icon": "G",
            "role": "tank",
            "hitpoints": 1200,
            "elixir_cost": 5,
            "threat_weight": 8,
            "push_archetype": True,
            "tank": True,
            "swarm": False,
        }

    def test_swarm_flag(self, client):
        data = client.get("/api/ai/archetypes").json()["archetypes"]
        swarm = {a["type_id"] for a in data if a["swarm"]}
        assert swarm == {"skeleton", "swarm"}

    def test_available_without_registry(self):
        client = TestClient(_make_app(with_registry=False))
        assert client.get("/api/ai/archetypes").status_code == 200
