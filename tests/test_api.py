"""API route tests — orders, bots, state views, control and config endpoints."""

import logging
import time

import pytest
from fastapi.testclient import TestClient

from orderbot.api.app import create_app
from orderbot.config import EngineConfig
from orderbot.utils.logging import setup_logging
from tests.helpers.dispatch_bench import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def client(clock):
    """Client with the tick source stopped; ticks are driven via /control/step."""
    app = create_app(EngineConfig(log_level="WARNING"), clock=clock, autostart=False)
    with TestClient(app) as client:
        yield client


class TestOrders:

    def test_submit_returns_id(self, client):
        resp = client.post("/api/v1/orders", params={"priority": "standard"})
        assert resp.status_code == 201
        data = resp.json()
        assert data["order_id"] == 1
        assert data["priority"] == "standard"
        assert data["version"] == 1

    def test_vip_alias(self, client):
        resp = client.post("/api/v1/orders", params={"priority": "vip"})
        assert resp.json()["priority"] == "expedited"

    def test_invalid_priority(self, client):
        resp = client.post("/api/v1/orders", params={"priority": "urgent"})
        assert resp.status_code == 422

    def test_expedited_listed_first(self, client):
        client.post("/api/v1/orders", params={"priority": "standard"})
        client.post("/api/v1/orders", params={"priority": "standard"})
        client.post("/api/v1/orders", params={"priority": "expedited"})
        pending = client.get("/api/v1/state").json()["pending"]
        assert [o["id"] for o in pending] == [3, 1, 2]
        assert pending[0]["name"] == "Filet-O-Fish (VIP)"
        assert all(o["state"] == "queued" for o in pending)


class TestBots:

    def test_add_and_remove(self, client):
        resp = client.post("/api/v1/bots")
        assert resp.status_code == 201
        assert resp.json()["bot_id"] == 1
        client.post("/api/v1/bots")

        resp = client.delete("/api/v1/bots")
        assert resp.json()["status"] == "ok"
        assert resp.json()["bot_id"] == 2

    def test_remove_empty_is_noop(self, client):
        resp = client.delete("/api/v1/bots")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "noop"
        assert body["bot_id"] is None


class TestLifecycle:

    def test_full_order_flow(self, client, clock):
        client.post("/api/v1/bots")
        client.post("/api/v1/orders", params={"priority": "standard"})
        client.post("/api/v1/orders", params={"priority": "expedited"})

        resp = client.post("/api/v1/control/step")
        assert resp.json()["changed"] is True

        state = client.get("/api/v1/state").json()
        assert state["pending"][0]["id"] == 2
        assert state["pending"][0]["state"] == "in_progress"
        assert state["bots"][0]["order_id"] == 2
        assert state["bots"][0]["order_expedited"] is True
        assert state["bots"][0]["remaining_seconds"] == 10
        assert state["active_bots"] == 1

        clock.now = 4_000
        state = client.get("/api/v1/state").json()
        assert state["bots"][0]["progress"] == pytest.approx(40.0)
        assert state["pending"][0]["progress"] == pytest.approx(40.0)
        assert state["bots"][0]["remaining_seconds"] == 6

        resp = client.post("/api/v1/control/step")
        assert resp.json()["changed"] is False

        clock.now = 10_000
        client.post("/api/v1/control/step")
        state = client.get("/api/v1/state").json()
        assert [o["id"] for o in state["completed"]] == [2]
        assert state["completed"][0]["completed_at"] == 10_000
        # Freed in the same tick and immediately re-used.
        assert state["bots"][0]["order_id"] == 1

        resp = client.delete("/api/v1/bots")
        assert resp.json()["bot_id"] == 1
        state = client.get("/api/v1/state").json()
        assert state["pending"][0]["state"] == "queued"
        assert state["bots"] == []
        assert state["idle_bots"] == 0

    def test_events_feed(self, client):
        client.post("/api/v1/bots")
        client.post("/api/v1/orders", params={"priority": "standard"})
        client.post("/api/v1/control/step")
        events = client.get("/api/v1/state", params={"since_version": 3}).json()["events"]
        assert [e["category"] for e in events] == ["assign"]
        assert events[0]["order_id"] == 1
        assert events[0]["bot_id"] == 1

    def test_stats(self, client):
        client.post("/api/v1/bots")
        client.post("/api/v1/orders", params={"priority": "standard"})
        client.post("/api/v1/orders", params={"priority": "standard"})
        client.post("/api/v1/control/step")
        stats = client.get("/api/v1/stats").json()
        assert stats["total_orders"] == 2
        assert stats["queued"] == 1
        assert stats["in_progress"] == 1
        assert stats["completed"] == 0
        assert stats["bots"] == 1
        assert stats["running"] is False


class TestControl:

    def test_start_stop(self, client):
        assert client.post("/api/v1/control/pause").json()["status"] == "error"
        assert client.post("/api/v1/control/start").json()["status"] == "ok"
        assert client.post("/api/v1/control/start").json()["status"] == "noop"
        assert client.get("/api/v1/stats").json()["running"] is True
        assert client.post("/api/v1/control/pause").json()["status"] == "ok"
        assert client.get("/api/v1/stats").json()["paused"] is True
        assert client.post("/api/v1/control/resume").json()["status"] == "ok"
        assert client.post("/api/v1/control/stop").json()["status"] == "ok"
        assert client.get("/api/v1/stats").json()["running"] is False

    def test_crashed_source_reported(self, client):
        def broken_clock() -> int:
            raise RuntimeError("clock failure")

        manager = client.app.state.engine_manager
        manager._clock = broken_clock
        client.post("/api/v1/control/start")
        deadline = time.monotonic() + 2.0
        while manager.running and time.monotonic() < deadline:
            time.sleep(0.01)

        stats = client.get("/api/v1/stats").json()
        assert stats["running"] is False
        assert "clock failure" in stats["last_error"]
        # The dead source no longer blocks a restart.
        manager._clock = lambda: 0
        assert client.post("/api/v1/control/start").json()["status"] == "ok"
        assert client.get("/api/v1/stats").json()["last_error"] is None

    def test_reset(self, client):
        client.post("/api/v1/bots")
        client.post("/api/v1/orders", params={"priority": "standard"})
        resp = client.post("/api/v1/control/reset")
        assert resp.json()["version"] == 0
        state = client.get("/api/v1/state").json()
        assert state["pending"] == []
        assert state["bots"] == []

    def test_unknown_action(self, client):
        assert client.post("/api/v1/control/explode").status_code == 422

    def test_speed(self, client):
        resp = client.post("/api/v1/speed", params={"tps": 20})
        assert resp.json()["status"] == "ok"
        assert client.get("/api/v1/config").json()["tick_rate"] == pytest.approx(0.05)


class TestConfig:

    def test_config(self, client):
        cfg = client.get("/api/v1/config").json()
        assert cfg["processing_time_ms"] == 10_000
        assert cfg["tick_interval"] == pytest.approx(0.1)
        assert cfg["check_invariants"] is True


def test_requests_without_engine_get_503():
    # No lifespan: the manager dependency was never installed.
    app = create_app(EngineConfig(log_level="WARNING"), autostart=False)
    resp = TestClient(app).get("/api/v1/stats")
    assert resp.status_code == 503


def test_access_log_quieted():
    setup_logging("DEBUG")
    assert logging.getLogger("uvicorn.access").level == logging.WARNING
    setup_logging("ERROR", quiet=("orderbot.test",))
    assert logging.getLogger("orderbot.test").level == logging.ERROR
    setup_logging("WARNING")
