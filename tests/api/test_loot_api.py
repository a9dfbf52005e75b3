"""보상 API 통합 테스트

TestClient + in-memory SQLite + 고정 난수.
"""

import random

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event as sa_event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.api.loot import router as loot_router
from src.core.event_bus import EventBus
from src.db.models import Base
from src.services.loot_service import LootService


class FixedRandom(random.Random):
    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


def _make_client(value: float):
    db_engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @sa_event.listens_for(db_engine, "connect")
    def _set_fk(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(db_engine)
    session_factory = sessionmaker(bind=db_engine)
    db = session_factory()

    app = FastAPI()
    app.include_router(loot_router)
    app.state.loot_service = LootService(db, EventBus(), rng=FixedRandom(value))
    return TestClient(app), db


@pytest.fixture()
def lucky_client():
    """모든 판정 성공"""
    client, db = _make_client(0.0)
    yield client
    db.close()


@pytest.fixture()
def unlucky_client():
    """모든 판정 실패"""
    client, db = _make_client(0.95)
    yield client
    db.close()


# ── Sessions ──────────────────────────────────────────────────


class TestSessionEndpoints:
    def test_create(self, unlucky_client):
        resp = unlucky_client.post("/loot/sessions", json={"session_id": "s1", "level": 3})
        assert resp.status_code == 201
        data = resp.json()
        assert data["session_id"] == "s1"
        assert data["hero"]["level"] == 3
        assert data["inventory"] == {}
        assert data["rings_remaining"] == 13

    def test_create_duplicate(self, unlucky_client):
        unlucky_client.post("/loot/sessions", json={"session_id": "s1"})
        resp = unlucky_client.post("/loot/sessions", json={"session_id": "s1"})
        assert resp.status_code == 409

    def test_create_invalid_level(self, unlucky_client):
        resp = unlucky_client.post("/loot/sessions", json={"session_id": "s1", "level": 0})
        assert resp.status_code == 422

    def test_get_missing(self, unlucky_client):
        resp = unlucky_client.get("/loot/sessions/ghost")
        assert resp.status_code == 404

    def test_travel(self, unlucky_client):
        unlucky_client.post("/loot/sessions", json={"session_id": "s1"})
        resp = unlucky_client.post("/loot/sessions/s1/travel", json={"distance": 20})
        assert resp.status_code == 200
        assert resp.json()["distance"] == 20

    def test_travel_negative(self, unlucky_client):
        unlucky_client.post("/loot/sessions", json={"session_id": "s1"})
        resp = unlucky_client.post("/loot/sessions/s1/travel", json={"distance": -3})
        assert resp.status_code == 422

    def test_travel_missing_session(self, unlucky_client):
        resp = unlucky_client.post("/loot/sessions/ghost/travel", json={"distance": 1})
        assert resp.status_code == 404


# ── Loot ──────────────────────────────────────────────────────


class TestLootEndpoints:
    def test_inspect_found(self, lucky_client):
        lucky_client.post("/loot/sessions", json={"session_id": "s1"})
        resp = lucky_client.post("/loot/sessions/s1/inspect")
        assert resp.status_code == 200
        data = resp.json()
        assert data["found"] is True
        assert data["gold"] == 50
        assert data["items"]["potion"] == 3

        state = lucky_client.get("/loot/sessions/s1").json()
        assert state["gold"] == 50
        assert state["hero"]["sword"] == {"kind": "sword", "level": 1}
        assert state["rings_remaining"] == 12

    def test_inspect_nothing(self, unlucky_client):
        unlucky_client.post("/loot/sessions", json={"session_id": "s1"})
        resp = unlucky_client.post("/loot/sessions/s1/inspect")
        assert resp.status_code == 200
        assert resp.json() == {"found": False, "items": {}, "gold": 0}

    def test_inspect_missing_session(self, unlucky_client):
        resp = unlucky_client.post("/loot/sessions/ghost/inspect")
        assert resp.status_code == 404

    def test_battle_no_gold(self, lucky_client):
        lucky_client.post("/loot/sessions", json={"session_id": "s1"})
        resp = lucky_client.post("/loot/sessions/s1/battle")
        assert resp.status_code == 200
        assert resp.json()["found"] is True
        assert resp.json()["gold"] == 0

    def test_defeat_returns_tombstone(self, lucky_client):
        lucky_client.post("/loot/sessions", json={"session_id": "s1"})
        lucky_client.post("/loot/sessions/s1/travel", json={"distance": 5})
        lucky_client.post("/loot/sessions/s1/inspect")

        resp = lucky_client.post("/loot/sessions/s1/defeat")
        assert resp.status_code == 200
        data = resp.json()
        assert data["gold"] == 300
        assert data["sword"] == {"kind": "sword", "level": 5}
        assert len(data["items"]) == 4

        state = lucky_client.get("/loot/sessions/s1").json()
        assert state["distance"] == 0
        assert state["gold"] == 0
        assert state["inventory"] == {}


# ── Use item ──────────────────────────────────────────────────


class TestUseEndpoint:
    def test_use_potion(self, lucky_client):
        lucky_client.post("/loot/sessions", json={"session_id": "s1"})
        lucky_client.post("/loot/sessions/s1/inspect")
        resp = lucky_client.post("/loot/sessions/s1/use", json={"item": "potion"})
        assert resp.status_code == 200
        assert resp.json()["message"] == "+0hp"

    def test_use_not_held(self, unlucky_client):
        unlucky_client.post("/loot/sessions", json={"session_id": "s1"})
        resp = unlucky_client.post("/loot/sessions/s1/use", json={"item": "ether"})
        assert resp.status_code == 400

    def test_use_unknown_item(self, unlucky_client):
        unlucky_client.post("/loot/sessions", json={"session_id": "s1"})
        resp = unlucky_client.post("/loot/sessions/s1/use", json={"item": "excalibur"})
        assert resp.status_code == 400

    def test_use_missing_session(self, unlucky_client):
        resp = unlucky_client.post("/loot/sessions/ghost/use", json={"item": "potion"})
        assert resp.status_code == 404


# ── Tombstone ─────────────────────────────────────────────────


class TestTombstoneEndpoint:
    def test_tombstone_after_defeat(self, lucky_client):
        lucky_client.post("/loot/sessions", json={"session_id": "s1"})
        lucky_client.post("/loot/sessions/s1/travel", json={"distance": 5})
        lucky_client.post("/loot/sessions/s1/inspect")
        lucky_client.post("/loot/sessions/s1/defeat")

        resp = lucky_client.get("/loot/sessions/s1/tombstones/5")
        assert resp.status_code == 200
        data = resp.json()
        assert data["gold"] == 300
        assert data["sword"] == {"kind": "sword", "level": 5}

    def test_no_tombstone(self, unlucky_client):
        unlucky_client.post("/loot/sessions", json={"session_id": "s1"})
        resp = unlucky_client.get("/loot/sessions/s1/tombstones/5")
        assert resp.status_code == 404

    def test_recovered_tombstone_gone(self, lucky_client):
        lucky_client.post("/loot/sessions", json={"session_id": "s1"})
        lucky_client.post("/loot/sessions/s1/inspect")
        lucky_client.post("/loot/sessions/s1/defeat")
        lucky_client.post("/loot/sessions/s1/inspect")

        resp = lucky_client.get("/loot/sessions/s1/tombstones/0")
        assert resp.status_code == 404
