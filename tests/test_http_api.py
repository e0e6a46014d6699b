import pytest
from fastapi.testclient import TestClient

from conftest import Recorder, make_producer
from randpub.http_api import make_app
from randpub.streaming import StreamHub


@pytest.fixture
def producer():
    return make_producer(min_interval=5.0, max_interval=10.0)


@pytest.fixture
def client(producer):
    with TestClient(make_app(producer, StreamHub(), [Recorder()])) as c:
        yield c
        c.post("/api/producer", json={"action": "stop"})


def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_state_before_start(client):
    assert client.get("/api/state").json() == {"state": "idle", "subscribers": 0}


def test_start_attaches_hub_and_consumers(client):
    r = client.post("/api/producer", json={"action": "start"})
    assert r.status_code == 200
    assert r.json() == {"ok": True, "state": "running"}
    assert client.get("/api/state").json() == {"state": "running", "subscribers": 2}


def test_double_start_conflicts(client):
    client.post("/api/producer", json={"action": "start"})
    r = client.post("/api/producer", json={"action": "START"})
    assert r.status_code == 409
    assert r.json()["ok"] is False


def test_stop_then_restart(client):
    client.post("/api/producer", json={"action": "start"})
    r = client.post("/api/producer", json={"action": "stop"})
    assert r.json() == {"ok": True, "state": "stopped"}
    assert client.get("/api/state").json() == {"state": "stopped", "subscribers": 0}

    r = client.post("/api/producer", json={"action": "start"})
    assert r.json()["state"] == "running"
    assert client.get("/api/state").json()["subscribers"] == 2


def test_invalid_action(client):
    r = client.post("/api/producer", json={"action": "pause"})
    assert r.status_code == 400
    assert r.json() == {"ok": False, "error": "invalid action"}


def test_missing_body_is_rejected(client):
    assert client.post("/api/producer", json={}).status_code == 422
