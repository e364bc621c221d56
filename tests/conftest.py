# tests/conftest.py
import pytest
import redis
import requests
from fastapi.testclient import TestClient

from spotify_proxy.config.settings import Settings
from spotify_proxy.main import create_app

SHARED_SECRET = "portfolio-secret"
ORIGIN = "https://portfolio.example"


class FakeKVStore:
    def __init__(self, data=None, fail_reads=False, fail_writes=False):
        self.data = dict(data or {})
        self.ttls = {}
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    def get(self, key):
        if self.fail_reads:
            return None
        return self.data.get(key)

    def put(self, key, value, ttl_sec=None):
        if self.fail_writes:
            raise redis.ConnectionError("down")
        self.data[key] = value
        self.ttls[key] = ttl_sec


class FakeResponse:
    def __init__(self, status_code=200, json_data=None, text=None):
        self.status_code = status_code
        self._json = json_data
        self.text = text

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._json is None:
            raise ValueError("No JSON body")
        return self._json


class FakeSpotify:
    """Stands in for requests.post (token endpoint) and requests.get (player API)."""

    def __init__(self):
        self.token_response = FakeResponse(200, {"access_token": "fresh-token", "expires_in": 3600})
        self.player_response = FakeResponse(204)
        self.token_calls = []
        self.player_calls = []

    def post(self, url, data=None, headers=None, timeout=None):
        self.token_calls.append({"url": url, "data": data, "headers": headers})
        if isinstance(self.token_response, Exception):
            raise self.token_response
        return self.token_response

    def get(self, url, headers=None, timeout=None):
        self.player_calls.append({"url": url, "headers": headers})
        if isinstance(self.player_response, Exception):
            raise self.player_response
        return self.player_response


@pytest.fixture
def settings():
    return Settings(
        client_id="cid",
        client_secret="csecret",
        shared_secret=SHARED_SECRET,
        cors_allow_origins=["*"],
    )


@pytest.fixture
def store():
    return FakeKVStore()


@pytest.fixture
def spotify(monkeypatch):
    fake = FakeSpotify()
    monkeypatch.setattr(requests, "post", fake.post)
    monkeypatch.setattr(requests, "get", fake.get)
    return fake


@pytest.fixture
def client(settings, store, spotify):
    app = create_app(settings, store=store)
    return TestClient(app)


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Basic {SHARED_SECRET}", "Origin": ORIGIN}
