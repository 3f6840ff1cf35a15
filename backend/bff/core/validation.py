"""Input Validation — superficial shape checks applied before any upstream call.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - check_* functions return a message on violation, None on success
    - validate_* functions raise BadRequestError carrying every per-field message
    - A request that fails here never reaches an upstream client

Design Decisions:
    - Presence means truthy (empty string, null, 0 and [] count as missing):
      matches what the Orchestrator itself rejects
    - CPF compared after stripping non-digits: clients send masked input (123.456.789-09)
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from bff.core.domain_types import PropertyType
from bff.core.errors import BadRequestError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
CPF_PATTERN = re.compile(r"^\d{11}$")
WALLET_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")

REGISTER_USER_FIELDS = ("name", "email", "cpf", "password")
REGISTER_PROPERTY_FIELDS = (
    "matriculaId", "folha", "comarca", "endereco",
    "metragem", "proprietario", "tipo",
)


def missing_fields(data: Mapping[str, Any], required: Sequence[str]) -> list[str]:
    """Names of required fields that are absent or empty."""
    return [name for name in required if not data.get(name)]


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and bool(EMAIL_PATTERN.fullmatch(value))


def normalize_cpf(value: str) -> str:
    """Strip mask characters, keeping digits only."""
    return re.sub(r"\D", "", value)


def is_valid_cpf(value: Any) -> bool:
    return isinstance(value, str) and bool(CPF_PATTERN.fullmatch(normalize_cpf(value)))


def is_valid_wallet_address(value: Any) -> bool:
    return isinstance(value, str) and bool(WALLET_PATTERN.fullmatch(value))


def check_email(value: Any) -> str | None:
    if not is_valid_email(value):
        return "Invalid email format"
    return None


def check_cpf(value: Any) -> str | None:
    if not is_valid_cpf(value):
        return "Invalid CPF format. Must be 11 digits"
    return None


def check_wallet_address(value: Any) -> str | None:
    if not is_valid_wallet_address(value):
        return "Invalid wallet address format"
    return None


def check_property_type(value: str | None) -> str | None:
    """Optional filter: None passes, anything else must be a PropertyType."""
    if value is None:
        return None
    if value not in {t.value for t in PropertyType}:
        allowed = ", ".join(t.value for t in PropertyType)
        return f"Invalid property type. Expected one of: {allowed}"
    return None


def require_fields(data: Mapping[str, Any], required: Sequence[str]) -> None:
    """Raise BadRequestError listing every missing required field."""
    missing = missing_fields(data, required)
    if missing:
        raise BadRequestError(
            "Missing required fields",
            errors=[f"{name} is required" for name in missing],
        )


def _raise_on_violations(violations: list[str | None]) -> None:
    """First violation becomes the message; all of them become errors."""
    found = [v for v in violations if v is not None]
    if found:
        raise BadRequestError(found[0], errors=found)


def validate_login(data: Mapping[str, Any]) -> None:
    missing = missing_fields(data, ("email", "password"))
    if missing:
        raise BadRequestError(
            "Email and password are required",
            errors=[f"{name} is required" for name in missing],
        )


def validate_user_registration(data: Mapping[str, Any]) -> None:
    """Required fields first, then email / CPF / optional wallet formats."""
    require_fields(data, REGISTER_USER_FIELDS)
    violations = [check_email(data["email"]), check_cpf(data["cpf"])]
    if data.get("walletAddress"):
        violations.append(check_wallet_address(data["walletAddress"]))
    _raise_on_violations(violations)


def validate_wallet_address(value: Any) -> None:
    """Wallet given in a body field: required and well-formed."""
    if not value:
        raise BadRequestError(
            "Wallet address is required", errors=["walletAddress is required"],
        )
    _raise_on_violations([check_wallet_address(value)])


def validate_property_registration(data: Mapping[str, Any]) -> None:
    require_fields(data, REGISTER_PROPERTY_FIELDS)


def validate_transfer_request(data: Mapping[str, Any]) -> None:
    """Initiation needs the matrícula id and a well-formed buyer wallet."""
    require_fields(data, ("matriculaId", "to"))
    _raise_on_violations([check_wallet_address(data["to"])])
