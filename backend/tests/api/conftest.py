"""Route test fixtures — ASGI client with fake upstreams injected as dependencies.

Invariants:
    - Every test gets fresh fake upstreams and a fresh response cache
    - Real OrchestratorClient/OffchainClient are used: only the transport is faked,
      so upstream error translation runs exactly as in production

Design Decisions:
    - raise_app_exceptions=False: the catch-all handler's 500 envelope is asserted
      instead of the exception surfacing in the test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from bff.api.dependencies import (
    get_offchain_client,
    get_orchestrator_client,
    get_response_cache,
)
from bff.infrastructure.offchain_client import OffchainClient
from bff.infrastructure.orchestrator_client import OrchestratorClient
from bff.infrastructure.response_cache import ResponseCache
from bff.main import app

from tests.fake_upstream import FakeUpstream, make_token


@pytest.fixture
def orchestrator():
    return FakeUpstream()


@pytest.fixture
def offchain():
    return FakeUpstream()


@pytest.fixture
def cache():
    return ResponseCache(ttl_seconds=30)


@pytest.fixture
async def client(orchestrator, offchain, cache):
    """FastAPI test client with upstream clients and cache overridden."""
    orchestrator_client = OrchestratorClient(
        "http://orchestrator.test", transport=orchestrator.transport(),
    )
    offchain_client = OffchainClient(
        "http://offchain.test", transport=offchain.transport(),
    )
    app.dependency_overrides[get_orchestrator_client] = lambda: orchestrator_client
    app.dependency_overrides[get_offchain_client] = lambda: offchain_client
    app.dependency_overrides[get_response_cache] = lambda: cache

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    await orchestrator_client.aclose()
    await offchain_client.aclose()


@pytest.fixture
def token():
    return make_token()


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}
