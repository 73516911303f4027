from pathlib import Path
import sys

import pytest

# Ensure project root is on sys.path before tests import modules
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from linkbio.apigateway import GatewaySettings, build_container, create_app  # noqa: E402
from linkbio.authservice import AuthConfig  # noqa: E402


class FakeClock:
    """Deterministic clock for TOTP steps and token expiry."""

    def __init__(self, start: int = 1_700_000_000):
        self.now = start

    def now_utc_ts(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def auth_config():
    return AuthConfig(
        JWT_SECRET="test-access-secret-please-ignore-000",
        JWT_REFRESH_SECRET="test-refresh-secret-please-ignore-00",
        BCRYPT_ROUNDS=4,
    )


@pytest.fixture
def gateway_settings():
    return GatewaySettings(RATE_LIMIT_ENABLED=False)


@pytest.fixture
def container(auth_config, clock):
    return build_container(auth_config, clock=clock)


@pytest.fixture
def app(gateway_settings, container):
    return create_app(gateway_settings, container=container)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def signup(client):
    """Register a user over HTTP; returns (body, auth headers)."""
    def _signup(username="alice", email=None, password="secret1"):
        email = email or f"{username}@example.com"
        res = client.post("/api/auth/register", json={"username": username, "email": email, "password": password})
        assert res.status_code == 201, res.text
        body = res.json()
        return body, {"Authorization": f"Bearer {body['token']}"}
    return _signup
