"""Health & Readiness Probes — liveness/readiness plus upstream health fan-out.

Invariants:
    - GET /health probes both upstreams concurrently; 200 "healthy" only when both answer,
      503 "degraded" otherwise (body still lists each service)
    - GET /health/ready and /health/live return 200 whenever the process is up

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from the
      load balancer; neither depends on upstreams so a down upstream never
      cascades into BFF restarts
"""

import asyncio
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from bff.api.dependencies import get_offchain_client, get_orchestrator_client
from bff.core.errors import BffError
from bff.infrastructure.offchain_client import OffchainClient
from bff.infrastructure.orchestrator_client import OrchestratorClient
from bff.infrastructure.upstream_client import UpstreamClient

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


async def _probe(client: UpstreamClient) -> str:
    try:
        await client.health_check()
    except BffError as e:
        logger.warning(
            f"{client.service_name} health check failed: {e.message}",
            extra={"service": client.service_name},
        )
        return "unhealthy"
    return "healthy"


@router.get("")
async def health_check(
    orchestrator: OrchestratorClient = Depends(get_orchestrator_client),
    offchain: OffchainClient = Depends(get_offchain_client),
):
    """BFF status plus the status of each upstream service."""
    orchestrator_status, offchain_status = await asyncio.gather(
        _probe(orchestrator), _probe(offchain),
    )
    overall = (
        "healthy"
        if orchestrator_status == offchain_status == "healthy"
        else "degraded"
    )
    return JSONResponse(
        status_code=(
            status.HTTP_200_OK if overall == "healthy"
            else status.HTTP_503_SERVICE_UNAVAILABLE
        ),
        content={
            "status": overall,
            "services": {
                "bff": {
                    "status": "healthy",
                    "timestamp": datetime.now(timezone.utc).isoformat(),
                },
                "orchestrator": {
                    "status": orchestrator_status,
                    "url": orchestrator.base_url,
                },
                "offchainApi": {
                    "status": offchain_status,
                    "url": offchain.base_url,
                },
            },
        },
    )


@router.get("/ready")
async def readiness_check():
    """Readiness probe: ready to accept traffic."""
    return {"status": "ready"}


@router.get("/live")
async def liveness_check():
    """Liveness probe: alive even when dependencies are down."""
    return {"status": "alive"}
