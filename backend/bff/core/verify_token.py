"""Bearer Credential Verification — stateless signature + expiry check.

Invariants:
    - No IO: validity is a function of the signature, the shared secret and the clock
    - Expired credentials → "Token expired"; every other failure → "Invalid token"
    - Header parsing accepts exactly two space-separated parts, the first being "Bearer"

Design Decisions:
    - python-jose verifies exp by default; ExpiredSignatureError is checked
      before the generic JWTError because it is a subclass
    - subject read from userId (Orchestrator-issued claim), falling back to sub
"""

from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt

from bff.core.domain_types import IdentityClaims
from bff.core.errors import UnauthorizedError

NO_HEADER_MESSAGE = "No authorization header provided"
BAD_FORMAT_MESSAGE = "Invalid authorization header format. Expected: Bearer <token>"
EXPIRED_MESSAGE = "Token expired"
INVALID_MESSAGE = "Invalid token"


def extract_bearer_token(authorization: str | None) -> str:
    """Return the credential from an Authorization header value."""
    if not authorization:
        raise UnauthorizedError(NO_HEADER_MESSAGE)
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise UnauthorizedError(BAD_FORMAT_MESSAGE)
    return parts[1]


def verify_token(token: str, secret: str, algorithm: str = "HS256") -> IdentityClaims:
    """Verify signature and expiry, then extract identity claims."""
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except ExpiredSignatureError as e:
        raise UnauthorizedError(EXPIRED_MESSAGE) from e
    except JWTError as e:
        raise UnauthorizedError(INVALID_MESSAGE) from e
    return claims_from_payload(payload)


def claims_from_payload(payload: Any) -> IdentityClaims:
    """Map a decoded payload to IdentityClaims; a payload without subject is invalid."""
    if not isinstance(payload, dict):
        raise UnauthorizedError(INVALID_MESSAGE)
    subject = payload.get("userId", payload.get("sub"))
    if subject is None or subject == "":
        raise UnauthorizedError(INVALID_MESSAGE)
    return IdentityClaims(
        subject_id=str(subject),
        email=payload.get("email"),
        role=payload.get("role"),
    )
