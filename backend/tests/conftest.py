"""Root conftest — shared test configuration."""

import os

# Ensure tests never talk to real upstreams or use a real secret
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("ORCHESTRATOR_URL", "http://orchestrator.test")
os.environ.setdefault("OFFCHAIN_API_URL", "http://offchain.test")
os.environ.setdefault("ALLOWED_ORIGINS", "http://localhost:5173,http://app.test")
os.environ.setdefault(
    "DEFAULT_APPROVER_ADDRESS", "0x00000000000000000000000000000000000000aa",
)
