"""Auth Routes — credential exchange, registration, wallet linking.

Invariants:
    - Local validation runs before any Orchestrator call (400 on failure)
    - Login reshapes the Orchestrator's flat payload into {token, user}
    - Registration success relayed with 201
"""

import logging

from fastapi import APIRouter, Depends, Header, status

from bff.api.dependencies import get_orchestrator_client, require_auth
from bff.core.domain_types import AuthContext
from bff.core.errors import UnauthorizedError
from bff.core.validation import (
    validate_login,
    validate_user_registration,
    validate_wallet_address,
)
from bff.core.verify_token import NO_HEADER_MESSAGE
from bff.infrastructure.orchestrator_client import OrchestratorClient
from bff.schemas.auth import (
    AuthResponse,
    LoginRequest,
    OrchestratorLogin,
    RegisterRequest,
    WalletUpdateRequest,
)
from bff.services.upstream_payloads import parse_record

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    orchestrator: OrchestratorClient = Depends(get_orchestrator_client),
):
    """Exchange email/password for a token plus the user profile."""
    credentials = body.model_dump()
    validate_login(credentials)
    payload = await orchestrator.login(credentials)
    login_result = parse_record(OrchestratorLogin, payload, orchestrator.service_name)
    return AuthResponse.from_orchestrator(login_result)


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    orchestrator: OrchestratorClient = Depends(get_orchestrator_client),
):
    """Validate and forward a new account to the Orchestrator."""
    user_data = body.model_dump(exclude_none=True)
    validate_user_registration(user_data)
    return await orchestrator.register(user_data)


@router.put("/wallet")
async def update_wallet(
    body: WalletUpdateRequest,
    auth: AuthContext = Depends(require_auth),
    orchestrator: OrchestratorClient = Depends(get_orchestrator_client),
):
    """Link a wallet address to the caller's account."""
    validate_wallet_address(body.walletAddress)
    result = await orchestrator.update_wallet(
        auth.identity.subject_id, body.walletAddress, auth.token,
    )
    logger.info(
        "Wallet updated", extra={"user_id": auth.identity.subject_id},
    )
    return result


@router.get("/me")
async def me(authorization: str | None = Header(None)):
    """Header presence check only; claims are decoded client-side."""
    if not authorization:
        raise UnauthorizedError(NO_HEADER_MESSAGE)
    parts = authorization.split(" ")
    if len(parts) < 2 or not parts[1]:
        raise UnauthorizedError("No token provided")
    return {
        "message": "Use the JWT payload to get user information",
        "hint": "Decode the JWT on the frontend to extract userId, email, and role",
    }
