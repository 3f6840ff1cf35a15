"""Transfer Initiation — ownership check, buyer identity registration, on-chain configure.

Invariants:
    - Body shape validated before any upstream call (400)
    - Caller without a linked wallet → 400; caller not the recorded owner → 403
      (wallet comparison is case-insensitive)
    - Buyer identity registered on-chain before configure; registration failure → 500
    - Empty or unreachable approver registry → default approver (logged as warning);
      registry entries that are not well-formed wallets are dropped
    - No compensation: if configure fails after identity registration, the
      registration stays (known gap, surfaced as the configure error)

Design Decisions:
    - Default approver over hard failure: availability over strictness while
      the approver registry is transiently empty; the address may be stale
    - Identity verification failure treated as "not verified": registration is
      idempotent, so registering an already-known wallet is harmless
"""

import logging
from typing import Any

from bff.core.domain_types import AuthContext, WalletAddress
from bff.core.errors import (
    BadRequestError,
    BffError,
    ErrorContext,
    ForbiddenError,
    InternalError,
)
from bff.core.validation import is_valid_wallet_address, validate_transfer_request
from bff.infrastructure.offchain_client import OffchainClient
from bff.infrastructure.orchestrator_client import OrchestratorClient
from bff.infrastructure.response_cache import ResponseCache, property_key
from bff.schemas.property import PropertyRecord
from bff.schemas.transfer import ApproverRecord, TransferRequest
from bff.services.transfer_aggregation import resolve_caller_wallet
from bff.services.upstream_payloads import parse_optional, parse_record

logger = logging.getLogger(__name__)

NO_WALLET_MESSAGE = "Link a wallet to your account before initiating a transfer"
NOT_OWNER_MESSAGE = "Only the property owner can initiate a transfer"
IDENTITY_REGISTRATION_FAILED = "Failed to register buyer identity on-chain"


async def initiate_transfer(
    orchestrator: OrchestratorClient,
    offchain: OffchainClient,
    cache: ResponseCache,
    auth: AuthContext,
    body: TransferRequest,
    default_approver: str,
) -> Any:
    """Configure an on-chain transfer of a property the caller owns."""
    validate_transfer_request(body.model_dump())
    matricula_id = str(body.matriculaId)
    buyer = body.to

    seller = await resolve_caller_wallet(orchestrator, auth)
    if seller is None:
        raise BadRequestError(NO_WALLET_MESSAGE)

    property_payload = await orchestrator.get_property_metadata(matricula_id)
    record = parse_record(PropertyRecord, property_payload, orchestrator.service_name)
    if not record.proprietario or record.proprietario.lower() != seller.lower():
        logger.warning(
            f"User {auth.identity.subject_id} is not the owner of {matricula_id}",
            extra={"user_id": auth.identity.subject_id, "matricula_id": matricula_id},
        )
        raise ForbiddenError(NOT_OWNER_MESSAGE)

    await ensure_identity_registered(offchain, buyer)
    approvers = await active_approvers(offchain, default_approver)

    result = await offchain.configure_transfer({
        "matriculaId": body.matriculaId,
        "from": seller,
        "to": buyer,
        "approvers": approvers,
    })
    cache.invalidate(property_key(matricula_id))
    cache.invalidate("transfer:")
    logger.info(
        "Transfer configured",
        extra={"matricula_id": matricula_id, "user_id": auth.identity.subject_id},
    )
    return result


async def ensure_identity_registered(offchain: OffchainClient, wallet: WalletAddress) -> None:
    """Register the wallet's on-chain identity unless it is already verified."""
    try:
        verification = await offchain.verify_identity(wallet)
        verified = bool(verification.get("isVerified"))
    except BffError as e:
        logger.warning(f"Identity verification failed for {wallet}: {e.message}")
        verified = False
    if verified:
        return
    try:
        await offchain.register_identity(wallet)
    except BffError as e:
        logger.error(
            f"Identity registration failed for {wallet}: {e.message}",
            extra={"error_code": e.code},
        )
        raise InternalError(
            IDENTITY_REGISTRATION_FAILED, ErrorContext(service=offchain.service_name),
        ) from e


async def active_approvers(offchain: OffchainClient, default_approver: str) -> list[str]:
    """Addresses of active approvers, or [default_approver] when none can be fetched."""
    try:
        payload = await offchain.get_approvers()
    except BffError as e:
        logger.warning(f"Approver registry unavailable, using default: {e.message}")
        return [default_approver]
    if not isinstance(payload, list):
        logger.warning(
            f"Approver registry returned {type(payload).__name__}, expected a list",
            extra={"service": offchain.service_name},
        )
        payload = []
    addresses = []
    for item in payload:
        if isinstance(item, str):
            address = item
        else:
            approver = parse_optional(ApproverRecord, item, offchain.service_name)
            if approver is None or not approver.active:
                continue
            address = approver.address
        if is_valid_wallet_address(address):
            addresses.append(address)
    if not addresses:
        logger.warning("Approver registry returned no active approvers, using default")
        return [default_approver]
    return addresses
