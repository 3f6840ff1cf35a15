"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded in code paths)
    - get_settings() is cached (lru_cache): single instance per process
    - Offchain timeout is longer than Orchestrator timeout (ledger calls are slower)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - ALLOWED_ORIGINS stays a comma-separated string in the environment (NoDecode)
      so deployments can reuse the value they already pass to the frontend
"""

from functools import lru_cache
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Server
    host: str = "0.0.0.0"
    port: int = 4000
    environment: str = "development"

    # Upstream services
    orchestrator_url: str = "http://localhost:8080"
    orchestrator_timeout_seconds: float = 30.0
    offchain_api_url: str = "http://localhost:3000"
    offchain_api_timeout_seconds: float = 60.0

    # Credential verification
    jwt_secret: str = "your-super-secret-jwt-key-change-in-production"
    jwt_algorithm: str = "HS256"

    # API
    allowed_origins: Annotated[list[str], NoDecode] = ["http://localhost:5173"]

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def split_origins(cls, v):
        """ALLOWED_ORIGINS=http://a,http://b → ["http://a", "http://b"]."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # Response cache (0 disables caching)
    cache_ttl_seconds: float = 30.0

    # Transfers
    # Fallback approver when the registry is empty or unreachable
    default_approver_address: str = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
    identity_country_code: int = 76  # Brazil

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
