"""Pytest shared fixtures for the management client tests."""
import json
import pathlib
import sys
from datetime import datetime, timedelta
from types import SimpleNamespace
from urllib.parse import urlparse

# Add project root to Python path (scripts/ is not an installed package)
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from authing_admin.core.management import ManagementClient, TokenCache

TEST_HOST = "https://authing.test"
TEST_POOL = "pool-1"
TEST_SECRET = "secret-1"


# ─────────────────────────────────────────────────────────────────────────────
# Network stand-ins
# ─────────────────────────────────────────────────────────────────────────────
class _StubResponse:
    def __init__(self, payload, status_code: int = 200):
        if isinstance(payload, bytes):
            self.content = payload
        elif isinstance(payload, str):
            self.content = payload.encode("utf-8")
        else:
            self.content = json.dumps(payload).encode("utf-8")
        self.status_code = status_code
        self.text = self.content.decode("utf-8")

    def json(self):
        return json.loads(self.content)


def _operation_name(body) -> str:
    """Return the GraphQL operation name of a posted body ('' for REST bodies)."""
    if not isinstance(body, dict) or "query" not in body:
        return ""
    head = body["query"].split("(", 1)[0].split("{", 1)[0]
    return head.split()[-1]


class FakeSession:
    """Replays canned payloads keyed by GraphQL operation or REST route, recording every call."""

    def __init__(self):
        self.calls = []
        self._graphql = {}
        self._rest = {}

    def on_graphql(self, operation: str, payload, status_code: int = 200) -> None:
        self._graphql[operation] = (payload, status_code)

    def on(self, method: str, path: str, payload, status_code: int = 200) -> None:
        self._rest[(method.upper(), path)] = (payload, status_code)

    def request(self, method, url, **kwargs):
        call = SimpleNamespace(method=method, url=url, path=urlparse(url).path, **kwargs)
        call.operation = _operation_name(kwargs.get("json"))
        self.calls.append(call)

        if call.operation:
            payload, status = self._graphql.get(call.operation, ({"data": {}}, 200))
        else:
            key = (method.upper(), call.path)
            if key not in self._rest:
                raise AssertionError(f"Unexpected request {method} {url}")
            payload, status = self._rest[key]

        if isinstance(payload, Exception):
            raise payload
        if callable(payload):
            payload = payload(call)
        return _StubResponse(payload, status)

    def calls_for(self, operation: str):
        return [c for c in self.calls if c.operation == operation]

    @property
    def exchange_calls(self):
        return self.calls_for("accessToken")

    @property
    def api_calls(self):
        return [c for c in self.calls if c.operation != "accessToken"]


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: datetime = datetime(2026, 1, 1, 12, 0, 0)):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


def access_token_payload(token: str = "tok-abc", exp=None):
    body = {"accessToken": token}
    if exp is not None:
        body["exp"] = exp
    return {"data": {"accessToken": body}}


@pytest.fixture
def fake_http():
    session = FakeSession()
    session.on_graphql("accessToken", access_token_payload())
    return session


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def client(fake_http, clock):
    return ManagementClient(TEST_POOL, TEST_SECRET, TEST_HOST, http=fake_http, cache=TokenCache(clock=clock))
