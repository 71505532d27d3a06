import sys
import time
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from LookerUserBulkDelete.LookerDeleteConfig import DeleteConfig

BASE_URL = "https://looker.example.com"


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        return self._payload


class FakeLooker:
    """Stands in for requests.Session against a tiny in-memory Looker API."""

    def __init__(self, plans=(), users=(), expiresIn=3600, loginStatus=200, failDeletes=(), failPagesOf=None):
        self.plans = list(plans)
        self.users = list(users)
        self.expiresIn = expiresIn
        self.loginStatus = loginStatus
        self.failDeletes = set(failDeletes)
        self.failPagesOf = failPagesOf
        self.logins = 0
        self.deleted = []
        self.calls = []

    def request(self, method, url, headers=None, params=None, data=None, **_kwargs):
        assert url.startswith(f"{BASE_URL}/api/4.0/")
        endpoint = url[len(f"{BASE_URL}/api/4.0/"):]
        self.calls.append((method, endpoint, params, headers, data))

        if endpoint == "login":
            self.logins += 1
            if self.loginStatus != 200:
                return FakeResponse(self.loginStatus, text="bad credentials")
            return FakeResponse(payload={"access_token": f"token-{self.logins}", "expires_in": self.expiresIn})

        assert headers["Authorization"].startswith("token ")

        if method == "GET" and endpoint in ("scheduled_plans", "users/search"):
            if endpoint == self.failPagesOf:
                return FakeResponse(500, text="server error")
            source = self.plans if endpoint == "scheduled_plans" else self.users
            offset = int(params["offset"])
            return FakeResponse(payload=source[offset:offset + int(params["limit"])])

        if method == "DELETE" and endpoint.startswith("users/"):
            userId = int(endpoint.split("/")[1])
            if userId in self.failDeletes:
                return FakeResponse(404, text="not found")
            self.deleted.append(userId)
            return FakeResponse(204)

        raise AssertionError(f"unexpected request {method} {endpoint}")

    def endpoints(self, method=None):
        return [call[1] for call in self.calls if method is None or call[0] == method]


def makeConfig(**overrides):
    values = {
        "baseUrl": BASE_URL,
        "clientId": "client-id",
        "clientSecret": "client-secret",
        "callsPerSecond": 1000,
    }
    values.update(overrides)
    return DeleteConfig(**values)


def makeUsers(ids):
    return [{"id": userId, "display_name": f"User {userId}", "email": f"user{userId}@example.com"} for userId in ids]


@pytest.fixture(autouse=True)
def sleeps(monkeypatch):
    recorded = []
    monkeypatch.setattr(time, "sleep", recorded.append)
    return recorded
