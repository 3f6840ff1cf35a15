"""Orchestrator Client — relational-data service of record (users, properties, transfers).

Invariants:
    - Every method returns the decoded upstream body or raises a BffError
      (translation lives in UpstreamClient)
    - Caller's bearer credential forwarded whenever the route has one
"""

from typing import Any

import httpx

from bff.core.domain_types import MatriculaId, TransferId, WalletAddress
from bff.infrastructure.upstream_client import UpstreamClient


class OrchestratorClient(UpstreamClient):
    """HTTP client for the Core Orchestrator service."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__("Orchestrator", base_url, timeout_seconds, transport)

    # Users

    async def login(self, credentials: dict[str, Any]) -> dict:
        return await self.post("/api/users/login", credentials)

    async def register(self, user_data: dict[str, Any]) -> dict:
        return await self.post("/api/users/register", user_data)

    async def get_user(self, user_id: str, token: str | None = None) -> dict:
        return await self.get(f"/api/users/{user_id}", token=token)

    async def update_wallet(
        self, user_id: str, wallet_address: WalletAddress, token: str | None = None,
    ) -> dict:
        return await self.put(
            f"/api/users/{user_id}/wallet",
            {"walletAddress": wallet_address},
            token=token,
        )

    # Properties

    async def get_user_properties(self, user_id: str, token: str | None = None) -> list[dict]:
        return await self.get(f"/api/properties/user/{user_id}", token=token) or []

    async def get_property_metadata(self, matricula_id: MatriculaId) -> dict:
        return await self.get(f"/api/properties/by-matricula/{matricula_id}")

    async def register_property(self, property_data: dict[str, Any], token: str) -> dict:
        return await self.post("/api/properties/register", property_data, token=token)

    async def search_properties(
        self,
        query: str | None = None,
        property_type: str | None = None,
        token: str | None = None,
    ) -> list[dict]:
        params = {
            k: v for k, v in (("query", query), ("tipo", property_type))
            if v is not None
        }
        return await self.get("/api/properties/search", token=token, params=params) or []

    # Transfers

    async def get_transfer_status(self, transfer_id: TransferId) -> dict:
        return await self.get(f"/api/property-transfers/{transfer_id}/status")

    async def get_all_transfers(self, token: str | None = None) -> list[dict]:
        return await self.get("/api/property-transfers", token=token) or []

    async def health_check(self) -> dict:
        return await self.get("/api/health")
