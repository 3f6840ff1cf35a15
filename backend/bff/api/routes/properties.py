"""Property Routes — DB listings enriched with ledger state.

Invariants:
    - /my and /register require a valid bearer credential
    - /{matriculaId}/full returns 200 with ledger defaults when the ledger is down
    - /owner/{walletAddress} rejects malformed addresses before calling the ledger
    - /search declared before /{matriculaId}/full-style paths (static segments first)
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status

from bff.api.dependencies import (
    get_offchain_client,
    get_orchestrator_client,
    get_response_cache,
    optional_auth,
    require_auth,
)
from bff.core.domain_types import AuthContext
from bff.infrastructure.offchain_client import OffchainClient
from bff.infrastructure.orchestrator_client import OrchestratorClient
from bff.infrastructure.response_cache import ResponseCache
from bff.schemas.property import PropertyFull, PropertySearchPage, PropertySummary
from bff.services import property_aggregation

router = APIRouter(prefix="/properties", tags=["properties"])


@router.get("/my", response_model=list[PropertySummary])
async def my_properties(
    auth: AuthContext = Depends(require_auth),
    orchestrator: OrchestratorClient = Depends(get_orchestrator_client),
    offchain: OffchainClient = Depends(get_offchain_client),
):
    """Caller's properties with per-item ledger enrichment."""
    return await property_aggregation.list_user_properties(orchestrator, offchain, auth)


@router.get("/search", response_model=PropertySearchPage)
async def search_properties(
    query: str | None = Query(None),
    type: str | None = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100, alias="pageSize"),
    auth: AuthContext | None = Depends(optional_auth),
    orchestrator: OrchestratorClient = Depends(get_orchestrator_client),
):
    """Search registered properties; authenticated callers forward their credential."""
    return await property_aggregation.search_properties(
        orchestrator, query, type, page, page_size,
        token=auth.token if auth else None,
    )


@router.get("/owner/{walletAddress}")
async def properties_by_owner(
    walletAddress: str,
    offchain: OffchainClient = Depends(get_offchain_client),
):
    """Ledger listing of properties held by a wallet."""
    return await property_aggregation.list_properties_by_owner(offchain, walletAddress)


@router.get("/{matriculaId}/full", response_model=PropertyFull)
async def property_full(
    matriculaId: str,
    orchestrator: OrchestratorClient = Depends(get_orchestrator_client),
    offchain: OffchainClient = Depends(get_offchain_client),
    cache: ResponseCache = Depends(get_response_cache),
):
    """DB metadata merged with ledger state for one matrícula."""
    return await property_aggregation.get_property_full(
        orchestrator, offchain, cache, matriculaId,
    )


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register_property(
    property_data: dict[str, Any] = Body(...),
    auth: AuthContext = Depends(require_auth),
    orchestrator: OrchestratorClient = Depends(get_orchestrator_client),
    cache: ResponseCache = Depends(get_response_cache),
):
    """Forward a property registration with the caller's credential."""
    return await property_aggregation.register_property(
        orchestrator, cache, property_data, auth,
    )
