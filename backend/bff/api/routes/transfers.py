"""Transfer Routes — initiation, on-chain actions, status, and listings.

Invariants:
    - /configure and /initiate share one handler (ownership + identity + approvers)
    - /approve, /accept, /execute are pure proxies to the Offchain API
    - Static paths (/my, /pending, /property/...) registered before /{transferId}/status
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from bff.api.dependencies import (
    get_offchain_client,
    get_orchestrator_client,
    get_response_cache,
    require_auth,
)
from bff.config import Settings, get_settings
from bff.core.domain_types import AuthContext
from bff.infrastructure.offchain_client import OffchainClient
from bff.infrastructure.orchestrator_client import OrchestratorClient
from bff.infrastructure.response_cache import ResponseCache
from bff.schemas.transfer import TransferRequest
from bff.services import transfer_aggregation
from bff.services.transfer_initiation import initiate_transfer

router = APIRouter(prefix="/transfers", tags=["transfers"])


@router.post("/configure")
@router.post("/initiate")
async def configure_transfer(
    body: TransferRequest,
    auth: AuthContext = Depends(require_auth),
    orchestrator: OrchestratorClient = Depends(get_orchestrator_client),
    offchain: OffchainClient = Depends(get_offchain_client),
    cache: ResponseCache = Depends(get_response_cache),
    settings: Settings = Depends(get_settings),
):
    """Configure an on-chain transfer of a property the caller owns."""
    return await initiate_transfer(
        orchestrator, offchain, cache, auth, body,
        default_approver=settings.default_approver_address,
    )


@router.post("/approve")
async def approve_transfer(
    payload: dict[str, Any] = Body(...),
    auth: AuthContext = Depends(require_auth),
    offchain: OffchainClient = Depends(get_offchain_client),
    cache: ResponseCache = Depends(get_response_cache),
):
    return await transfer_aggregation.relay_transfer_action(
        offchain.approve_transfer, cache, payload,
    )


@router.post("/accept")
async def accept_transfer(
    payload: dict[str, Any] = Body(...),
    auth: AuthContext = Depends(require_auth),
    offchain: OffchainClient = Depends(get_offchain_client),
    cache: ResponseCache = Depends(get_response_cache),
):
    return await transfer_aggregation.relay_transfer_action(
        offchain.accept_transfer, cache, payload,
    )


@router.post("/execute")
async def execute_transfer(
    payload: dict[str, Any] = Body(...),
    auth: AuthContext = Depends(require_auth),
    offchain: OffchainClient = Depends(get_offchain_client),
    cache: ResponseCache = Depends(get_response_cache),
):
    return await transfer_aggregation.relay_transfer_action(
        offchain.execute_transfer, cache, payload,
    )


@router.get("/my")
async def my_transfers(
    auth: AuthContext = Depends(require_auth),
    orchestrator: OrchestratorClient = Depends(get_orchestrator_client),
):
    """Transfers of the caller's properties; [] when the Orchestrator can't answer."""
    return await transfer_aggregation.list_user_transfers(orchestrator, auth)


@router.get("/pending")
async def pending_transfers(
    auth: AuthContext = Depends(require_auth),
    orchestrator: OrchestratorClient = Depends(get_orchestrator_client),
    offchain: OffchainClient = Depends(get_offchain_client),
):
    """Ledger transfers involving the caller's wallet that still await a party."""
    return await transfer_aggregation.list_pending_transfers(orchestrator, offchain, auth)


@router.get("/property/{matriculaId}")
async def property_transfer_history(
    matriculaId: str,
    orchestrator: OrchestratorClient = Depends(get_orchestrator_client),
):
    return await transfer_aggregation.list_property_transfers(orchestrator, matriculaId)


@router.get("/{transferId}/status")
async def transfer_status(
    transferId: str,
    orchestrator: OrchestratorClient = Depends(get_orchestrator_client),
    offchain: OffchainClient = Depends(get_offchain_client),
    cache: ResponseCache = Depends(get_response_cache),
):
    """DB status merged with ledger state; ledger-only when the DB has no record."""
    return await transfer_aggregation.get_transfer_status(
        orchestrator, offchain, cache, transferId,
    )
