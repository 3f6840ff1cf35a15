"""Auth Schemas — login/registration bodies and the reshaped login response.

Invariants:
    - Request fields are optional at the schema level: presence and format are
      checked by core/validation.py so the 400 messages stay per-field
    - AuthResponse nests the Orchestrator's flat login payload under user
"""

from pydantic import BaseModel, ConfigDict


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class RegisterRequest(BaseModel):
    """Registration body: unknown fields are forwarded to the Orchestrator."""
    model_config = ConfigDict(extra="allow")

    name: str | None = None
    email: str | None = None
    cpf: str | None = None
    password: str | None = None
    walletAddress: str | None = None


class WalletUpdateRequest(BaseModel):
    walletAddress: str | None = None


class OrchestratorLogin(BaseModel):
    """Flat login payload returned by the Orchestrator."""
    model_config = ConfigDict(extra="ignore")

    token: str
    id: int | str
    name: str | None = None
    email: str | None = None
    cpf: str | None = None
    walletAddress: str | None = None
    role: str | None = None
    active: bool | None = None
    createdAt: str | None = None


class AuthUser(BaseModel):
    id: int | str
    name: str | None
    email: str | None
    cpf: str | None
    walletAddress: str | None
    role: str | None
    active: bool | None
    createdAt: str | None


class AuthResponse(BaseModel):
    token: str
    user: AuthUser

    @classmethod
    def from_orchestrator(cls, login: OrchestratorLogin) -> "AuthResponse":
        return cls(
            token=login.token,
            user=AuthUser(
                id=login.id,
                name=login.name,
                email=login.email,
                cpf=login.cpf,
                walletAddress=login.walletAddress,
                role=login.role,
                active=login.active,
                createdAt=login.createdAt,
            ),
        )


class UserRecord(BaseModel):
    """Orchestrator user record: only what the BFF needs to resolve a wallet."""
    model_config = ConfigDict(extra="ignore")

    id: int | str
    name: str | None = None
    email: str | None = None
    walletAddress: str | None = None
