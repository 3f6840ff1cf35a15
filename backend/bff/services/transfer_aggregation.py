"""Transfer Aggregation — transfer status merge, listings, and on-chain action relays.

Invariants:
    - Status: DB lookup first; DB failure falls back to the ledger record verbatim
    - Status: ledger failure after a DB hit degrades to DB values (never 5xx)
    - Fallback is attempted exactly once; if the ledger also fails, its error propagates
    - /my listing degrades to [] when either Orchestrator call fails
    - Listings skip items that are not objects and treat a non-list payload as []
    - Every relayed on-chain action invalidates cached transfer and property views

Design Decisions:
    - Fallback catches any BffError from the DB lookup, not only NotFoundError:
      a transfer can exist on-chain before the Orchestrator has recorded it, and
      the Orchestrator answers unknown ids inconsistently (404 or 400)
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from bff.core.domain_types import AuthContext, MatriculaId, TransferId
from bff.core.errors import BffError
from bff.core.merge_transfer import filter_by_matricula, is_pending, merge_transfer_status
from bff.infrastructure.offchain_client import OffchainClient
from bff.infrastructure.orchestrator_client import OrchestratorClient
from bff.infrastructure.response_cache import ResponseCache, property_key, transfer_key
from bff.schemas.auth import UserRecord
from bff.schemas.transfer import ChainTransferRecord, TransferRecord
from bff.services.upstream_payloads import parse_optional, parse_record

logger = logging.getLogger(__name__)


def records(payload: Any) -> list[dict]:
    """Object items of an upstream list payload; anything else is dropped."""
    if not isinstance(payload, list):
        return []
    return [item for item in payload if isinstance(item, dict)]


async def get_transfer_status(
    orchestrator: OrchestratorClient,
    offchain: OffchainClient,
    cache: ResponseCache,
    transfer_id: TransferId,
) -> Any:
    """Merged DB + ledger status, or the ledger record alone when the DB has none."""
    key = transfer_key(transfer_id)
    cached = cache.get(key)
    if cached is not None:
        return cached

    try:
        db_payload = await orchestrator.get_transfer_status(transfer_id)
    except BffError as e:
        logger.info(
            f"Transfer {transfer_id} not available from Orchestrator ({e.message}), "
            "falling back to ledger",
            extra={"transfer_id": transfer_id, "error_code": e.code},
        )
        return await offchain.get_transfer(transfer_id)

    db = parse_record(TransferRecord, db_payload, orchestrator.service_name)
    chain = await fetch_chain_transfer(offchain, transfer_id)
    body = merge_transfer_status(transfer_id, db, chain).model_dump()
    if chain is not None:
        cache.set(key, body)
    return body


async def fetch_chain_transfer(
    offchain: OffchainClient, transfer_id: TransferId,
) -> ChainTransferRecord | None:
    try:
        payload = await offchain.get_transfer(transfer_id)
    except BffError as e:
        logger.warning(
            f"Ledger lookup failed for transfer {transfer_id}: {e.message}",
            extra={"transfer_id": transfer_id, "error_code": e.code},
        )
        return None
    return parse_optional(ChainTransferRecord, payload, offchain.service_name)


async def list_user_transfers(
    orchestrator: OrchestratorClient, auth: AuthContext,
) -> list[dict]:
    """Transfers touching any property the caller owns in the DB."""
    try:
        properties = await orchestrator.get_user_properties(
            auth.identity.subject_id, auth.token,
        )
        transfers = await orchestrator.get_all_transfers(auth.token)
    except BffError as e:
        logger.warning(
            f"Could not list transfers for user {auth.identity.subject_id}: {e.message}",
            extra={"user_id": auth.identity.subject_id, "error_code": e.code},
        )
        return []
    matricula_ids = [
        p["matriculaId"] for p in records(properties)
        if p.get("matriculaId") is not None
    ]
    return filter_by_matricula(records(transfers), matricula_ids)


async def list_property_transfers(
    orchestrator: OrchestratorClient, matricula_id: MatriculaId,
) -> dict[str, Any]:
    """Transfer history for one matrícula, as recorded by the Orchestrator."""
    transfers = await orchestrator.get_all_transfers()
    return {
        "matriculaId": matricula_id,
        "history": filter_by_matricula(records(transfers), [matricula_id]),
    }


async def resolve_caller_wallet(
    orchestrator: OrchestratorClient, auth: AuthContext,
) -> str | None:
    """Wallet address on file for the caller, or None when none is linked."""
    payload = await orchestrator.get_user(auth.identity.subject_id, auth.token)
    user = parse_record(UserRecord, payload, orchestrator.service_name)
    return user.walletAddress or None


async def list_pending_transfers(
    orchestrator: OrchestratorClient,
    offchain: OffchainClient,
    auth: AuthContext,
) -> list[dict]:
    """Ledger transfers involving the caller's wallet that have not reached a final status."""
    wallet = await resolve_caller_wallet(orchestrator, auth)
    if wallet is None:
        return []
    transfers = await offchain.get_transfers_by_wallet(wallet)
    return [t for t in records(transfers) if is_pending(t)]


async def relay_transfer_action(
    action: Callable[[dict[str, Any]], Awaitable[Any]],
    cache: ResponseCache,
    payload: dict[str, Any],
) -> Any:
    """Forward an approve/accept/execute body to the ledger and drop stale views."""
    result = await action(payload)
    transfer_id = payload.get("transferId")
    if transfer_id is not None:
        cache.invalidate(transfer_key(str(transfer_id)))
    else:
        cache.invalidate("transfer:")
    matricula_id = payload.get("matriculaId")
    if matricula_id is not None:
        cache.invalidate(property_key(str(matricula_id)))
    else:
        cache.invalidate("property:")
    return result
