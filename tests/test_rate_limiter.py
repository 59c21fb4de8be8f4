"""
Tests for the sliding-window rate limiter
"""

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from campus_events.api.errors import register_exception_handlers
from campus_events.core.rate_limiter import InMemoryRateLimitStore, RateLimiter


class FakeClock:
    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return InMemoryRateLimitStore(clock=clock)


def test_store_allows_up_to_limit(store):
    results = [store.hit("ip:1", 60, 3) for _ in range(4)]

    assert [r.allowed for r in results] == [True, True, True, False]
    assert [r.remaining for r in results] == [2, 1, 0, 0]


def test_store_window_slides(store, clock):
    store.hit("ip:1", 60, 1)
    assert not store.hit("ip:1", 60, 1).allowed

    clock.advance(60)
    assert store.hit("ip:1", 60, 1).allowed


def test_store_keys_are_independent(store):
    store.hit("ip:1", 60, 1)

    assert store.hit("ip:2", 60, 1).allowed


def test_sweep_drops_expired_keys(store, clock):
    store.hit("ip:1", 60, 5)
    clock.advance(30)
    store.hit("ip:2", 60, 5)
    clock.advance(31)

    assert store.sweep(60) == 1


@pytest.fixture
def limited_client(store):
    app = FastAPI()
    register_exception_handlers(app)
    limiter = RateLimiter(store, max_requests=2, window_seconds=60, key_prefix="test")

    @app.get("/ping", dependencies=[Depends(limiter)])
    async def ping():
        return {"ok": True}

    return TestClient(app)


def test_exceeding_limit_returns_429(limited_client):
    first = limited_client.get("/ping")
    assert first.status_code == 200
    assert first.headers["RateLimit-Limit"] == "2"
    assert first.headers["RateLimit-Remaining"] == "1"

    limited_client.get("/ping")
    blocked = limited_client.get("/ping")

    assert blocked.status_code == 429
    assert blocked.headers["Retry-After"] == "60"
    body = blocked.json()
    assert body["success"] is False
    assert body["errors"]["limit"] == 2
    assert body["errors"]["remaining"] == 0
    assert "reset_time" in body["errors"]


def test_requests_allowed_again_after_window(limited_client, clock):
    for _ in range(2):
        limited_client.get("/ping")
    assert limited_client.get("/ping").status_code == 429

    clock.advance(61)
    assert limited_client.get("/ping").status_code == 200


def test_forwarded_for_header_sets_key(limited_client):
    for _ in range(2):
        limited_client.get("/ping", headers={"X-Forwarded-For": "10.0.0.1"})

    assert limited_client.get("/ping", headers={"X-Forwarded-For": "10.0.0.1"}).status_code == 429
    assert limited_client.get("/ping", headers={"X-Forwarded-For": "10.0.0.2"}).status_code == 200


def test_login_route_is_rate_limited(client):
    payload = {"identifier": "nobody", "password": "whatever"}
    statuses = [client.post("/api/auth/login", json=payload).status_code for _ in range(6)]

    assert statuses == [401] * 5 + [429]
