"""Offchain Client — ledger reads/writes (properties, transfers, identities, approvers).

Invariants:
    - Longer timeout than the Orchestrator: ledger operations wait for confirmations
    - register_identity is idempotent: an "already registered" rejection is success
    - verify_identity unwraps the upstream {data: {...}} envelope and always
      returns a dict (empty when the record is null or not an object)

Design Decisions:
    - "Already registered" detected from the upstream message (Portuguese "já"
      or English "already"): the Offchain API has no dedicated error code for it
"""

import logging
from typing import Any

import httpx

from bff.core.domain_types import MatriculaId, TransferId, WalletAddress
from bff.core.errors import BffError
from bff.infrastructure.upstream_client import UpstreamClient

logger = logging.getLogger(__name__)

_ALREADY_REGISTERED_MARKERS = ("já", "already")


def _is_already_registered(error: BffError) -> bool:
    if error.http_status >= 500:
        return False
    message = error.message.lower()
    return any(marker in message for marker in _ALREADY_REGISTERED_MARKERS)


class OffchainClient(UpstreamClient):
    """HTTP client for the Offchain (blockchain) API."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
        country_code: int = 76,
    ):
        super().__init__("Blockchain", base_url, timeout_seconds, transport)
        self.country_code = country_code

    # Properties

    async def get_properties_by_owner(self, wallet_address: WalletAddress) -> list[dict]:
        return await self.get(f"/api/properties/owner/{wallet_address}") or []

    async def get_property(self, matricula_id: MatriculaId) -> dict:
        return await self.get(f"/api/properties/{matricula_id}")

    # Transfers

    async def get_transfer(self, transfer_id: TransferId) -> dict:
        return await self.get(f"/api/transfers/{transfer_id}")

    async def get_transfers_by_wallet(self, wallet_address: WalletAddress) -> list[dict]:
        return await self.get(f"/api/transfers/wallet/{wallet_address}") or []

    async def get_approvers(self) -> list[dict]:
        return await self.get("/api/approvers") or []

    async def configure_transfer(self, transfer_data: dict[str, Any]) -> dict:
        return await self.post("/api/transfers/configure", transfer_data)

    async def approve_transfer(self, approval_data: dict[str, Any]) -> dict:
        return await self.post("/api/transfers/approve", approval_data)

    async def accept_transfer(self, accept_data: dict[str, Any]) -> dict:
        return await self.post("/api/transfers/accept", accept_data)

    async def execute_transfer(self, execute_data: dict[str, Any]) -> dict:
        return await self.post("/api/transfers/execute", execute_data)

    # Identity

    async def register_identity(self, wallet_address: WalletAddress) -> dict:
        """Register a wallet in the identity registry; already registered is not an error."""
        try:
            return await self.post(
                "/api/identity/register",
                {"walletAddress": wallet_address, "countryCode": self.country_code},
            )
        except BffError as e:
            if _is_already_registered(e):
                logger.info(f"Identity already registered for {wallet_address}")
                return {"success": True, "alreadyRegistered": True}
            raise

    async def verify_identity(self, wallet_address: WalletAddress) -> dict:
        """Verification record for a wallet; {} when the upstream sends no usable object."""
        payload = await self.get(f"/api/identity/{wallet_address}/verify")
        if isinstance(payload, dict) and "data" in payload:
            payload = payload["data"]
        return payload if isinstance(payload, dict) else {}

    async def health_check(self) -> dict:
        return await self.get("/health")
