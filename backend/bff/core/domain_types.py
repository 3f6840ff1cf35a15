"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - IdentityClaims is immutable: extracted once per request, never mutated
    - All valid states encoded as Enums: no raw string matching

Design Decisions:
    - NewType over dataclass wrappers for identifiers: zero runtime cost
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

WalletAddress = NewType("WalletAddress", str)
MatriculaId = NewType("MatriculaId", str)
TransferId = NewType("TransferId", str)


@dataclass(frozen=True)
class IdentityClaims:
    """Claims extracted from a verified bearer credential."""
    subject_id: str
    email: str | None
    role: str | None


@dataclass(frozen=True)
class AuthContext:
    """Verified identity plus the raw credential for forwarding upstream."""
    identity: IdentityClaims
    token: str


# ─── Enums ───────────────────────────────────────────────────────

class PropertyType(str, Enum):
    """Property classification as recorded by the Orchestrator (tipo)."""
    URBANO = "URBANO"
    RURAL = "RURAL"
    LITORAL = "LITORAL"


class RegularStatus(str, Enum):
    """Client-facing rendering of the DB isRegular flag."""
    REGULAR = "REGULAR"
    IRREGULAR = "IRREGULAR"


class ChainPropertyStatus(str, Enum):
    """Default status used when the ledger record is unavailable."""
    PENDING = "pending"


# Statuses after which a transfer no longer awaits any party
FINAL_TRANSFER_STATUSES = frozenset({
    "EXECUTED", "COMPLETED", "CANCELLED", "REJECTED", "EXPIRED",
})
