"""Property Aggregation — DB property records enriched with ledger state.

Invariants:
    - Orchestrator failure fails the request (DB is the system of record for existence)
    - Ledger failure never fails the request: the item carries null/default ledger fields
    - Fan-out enrichment runs concurrently; one failed item never affects the others
    - Only fully-enriched detail views are cached (degraded views are not)

Design Decisions:
    - Each enrichment coroutine catches its own BffError, so asyncio.gather
      never sees an exception and never cancels siblings
"""

import asyncio
import logging
from typing import Any

from bff.core.domain_types import AuthContext, MatriculaId, WalletAddress
from bff.core.errors import BadRequestError, BffError
from bff.core.merge_property import merge_property_full, to_property_summary
from bff.core.paginate import paginate
from bff.core.validation import (
    check_property_type,
    check_wallet_address,
    validate_property_registration,
)
from bff.infrastructure.offchain_client import OffchainClient
from bff.infrastructure.orchestrator_client import OrchestratorClient
from bff.infrastructure.response_cache import ResponseCache, property_key
from bff.schemas.property import (
    ChainPropertyRecord,
    Pagination,
    PropertyFull,
    PropertyRecord,
    PropertySearchPage,
    PropertySummary,
)
from bff.services.upstream_payloads import parse_optional, parse_record

logger = logging.getLogger(__name__)


async def fetch_chain_property(
    offchain: OffchainClient, matricula_id: MatriculaId,
) -> ChainPropertyRecord | None:
    """Best-effort ledger lookup: None when the Offchain API fails."""
    try:
        payload = await offchain.get_property(matricula_id)
    except BffError as e:
        logger.warning(
            f"Ledger lookup failed for property {matricula_id}: {e.message}",
            extra={"matricula_id": matricula_id, "error_code": e.code},
        )
        return None
    return parse_optional(ChainPropertyRecord, payload, offchain.service_name)


async def list_user_properties(
    orchestrator: OrchestratorClient,
    offchain: OffchainClient,
    auth: AuthContext,
) -> list[PropertySummary]:
    """Caller's DB properties, each enriched concurrently with its ledger record."""
    payload = await orchestrator.get_user_properties(
        auth.identity.subject_id, auth.token,
    )
    records = [
        parse_record(PropertyRecord, item, orchestrator.service_name)
        for item in payload
    ]
    if not records:
        return []

    async def enrich(record: PropertyRecord) -> PropertySummary:
        chain = await fetch_chain_property(offchain, str(record.matriculaId))
        return to_property_summary(record, chain)

    return list(await asyncio.gather(*(enrich(r) for r in records)))


async def get_property_full(
    orchestrator: OrchestratorClient,
    offchain: OffchainClient,
    cache: ResponseCache,
    matricula_id: MatriculaId,
) -> dict[str, Any]:
    """DB metadata (required) merged with ledger state (best effort)."""
    key = property_key(matricula_id)
    cached = cache.get(key)
    if cached is not None:
        return cached

    db_payload = await orchestrator.get_property_metadata(matricula_id)
    db = parse_record(PropertyRecord, db_payload, orchestrator.service_name)
    chain = await fetch_chain_property(offchain, matricula_id)

    view: PropertyFull = merge_property_full(matricula_id, db, chain)
    body = view.model_dump()
    if chain is not None:
        cache.set(key, body)
    return body


async def search_properties(
    orchestrator: OrchestratorClient,
    query: str | None,
    property_type: str | None,
    page: int,
    page_size: int,
    token: str | None = None,
) -> PropertySearchPage:
    """Orchestrator search results with client-facing names, paginated locally."""
    violation = check_property_type(property_type)
    if violation:
        raise BadRequestError(violation, errors=[violation])

    payload = await orchestrator.search_properties(query, property_type, token)
    summaries = [
        to_property_summary(
            parse_record(PropertyRecord, item, orchestrator.service_name), None,
        )
        for item in payload
    ]
    data, meta = paginate(summaries, page, page_size)
    return PropertySearchPage(
        query=query,
        type=property_type,
        data=data,
        pagination=Pagination(**meta),
    )


async def register_property(
    orchestrator: OrchestratorClient,
    cache: ResponseCache,
    property_data: dict[str, Any],
    auth: AuthContext,
) -> Any:
    """Validate required fields, forward the body verbatim with the caller's credential."""
    validate_property_registration(property_data)
    result = await orchestrator.register_property(property_data, auth.token)
    cache.invalidate(property_key(str(property_data["matriculaId"])))
    logger.info(
        "Property registered",
        extra={
            "matricula_id": str(property_data["matriculaId"]),
            "user_id": auth.identity.subject_id,
        },
    )
    return result


async def list_properties_by_owner(offchain: OffchainClient, wallet_address: WalletAddress) -> Any:
    """Ledger listing for a wallet; the address is checked before any upstream call."""
    violation = check_wallet_address(wallet_address)
    if violation:
        raise BadRequestError(violation, errors=[violation])
    return await offchain.get_properties_by_owner(wallet_address)
