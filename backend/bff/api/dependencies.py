"""Route Dependencies — Auth Guard and injected upstream clients / response cache.

Invariants:
    - require_auth rejects before any handler logic runs (absent header, bad format,
      invalid signature, expired credential: each with its own message)
    - Verified claims and the raw credential attached to request.state
    - optional_auth never rejects: any failure proceeds unauthenticated
    - No database lookup: verification is stateless

Design Decisions:
    - Clients and cache live on app.state (created in lifespan), exposed through
      dependencies so tests override them with app.dependency_overrides
"""

import logging

from fastapi import Depends, Header, Request

from bff.config import Settings, get_settings
from bff.core.domain_types import AuthContext
from bff.core.errors import BffError
from bff.core.verify_token import extract_bearer_token, verify_token
from bff.infrastructure.offchain_client import OffchainClient
from bff.infrastructure.orchestrator_client import OrchestratorClient
from bff.infrastructure.response_cache import ResponseCache

logger = logging.getLogger(__name__)


def _from_state(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise RuntimeError(f"{name} not initialized")
    return value


def get_orchestrator_client(request: Request) -> OrchestratorClient:
    return _from_state(request, "orchestrator_client")


def get_offchain_client(request: Request) -> OffchainClient:
    return _from_state(request, "offchain_client")


def get_response_cache(request: Request) -> ResponseCache:
    return _from_state(request, "response_cache")


async def require_auth(
    request: Request,
    authorization: str | None = Header(None),
    settings: Settings = Depends(get_settings),
) -> AuthContext:
    """Reject the request unless it carries a valid bearer credential."""
    token = extract_bearer_token(authorization)
    identity = verify_token(token, settings.jwt_secret, settings.jwt_algorithm)
    auth = AuthContext(identity=identity, token=token)
    request.state.identity = identity
    request.state.token = token
    return auth


async def optional_auth(
    request: Request,
    authorization: str | None = Header(None),
    settings: Settings = Depends(get_settings),
) -> AuthContext | None:
    """Same check as require_auth, but anonymous on any failure."""
    if not authorization:
        return None
    try:
        return await require_auth(request, authorization, settings)
    except BffError as e:
        logger.info(
            f"Proceeding unauthenticated: {e.message}",
            extra={"path": request.url.path},
        )
        return None
