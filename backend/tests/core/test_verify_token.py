"""Bearer Verification — header parsing and stateless token checks.

Tests:
    - Absent header, wrong scheme, extra parts each rejected with their own message
    - Expired vs invalid signature distinguished
    - Claims extracted from userId (or sub), email, role
"""

from datetime import timedelta

import pytest

from bff.core.errors import UnauthorizedError
from bff.core.verify_token import (
    BAD_FORMAT_MESSAGE,
    EXPIRED_MESSAGE,
    INVALID_MESSAGE,
    NO_HEADER_MESSAGE,
    claims_from_payload,
    extract_bearer_token,
    verify_token,
)

from tests.fake_upstream import TEST_SECRET, make_token


def test_missing_header_rejected():
    with pytest.raises(UnauthorizedError) as exc:
        extract_bearer_token(None)
    assert exc.value.message == NO_HEADER_MESSAGE
    assert exc.value.http_status == 401


@pytest.mark.parametrize("header", [
    "Token abc", "Bearer", "Bearer a b", "bearer abc", "Bearer ",
])
def test_malformed_header_rejected(header):
    with pytest.raises(UnauthorizedError) as exc:
        extract_bearer_token(header)
    assert exc.value.message == BAD_FORMAT_MESSAGE


def test_well_formed_header_returns_credential():
    assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"


def test_valid_token_yields_claims():
    claims = verify_token(make_token(), TEST_SECRET)
    assert claims.subject_id == "42"
    assert claims.email == "owner@example.com"
    assert claims.role == "USER"


def test_expired_token_reports_expired():
    token = make_token(expires_in=timedelta(hours=-1))
    with pytest.raises(UnauthorizedError) as exc:
        verify_token(token, TEST_SECRET)
    assert exc.value.message == EXPIRED_MESSAGE


def test_wrong_secret_reports_invalid():
    token = make_token(secret="someone-else")
    with pytest.raises(UnauthorizedError) as exc:
        verify_token(token, TEST_SECRET)
    assert exc.value.message == INVALID_MESSAGE


def test_garbage_token_reports_invalid():
    with pytest.raises(UnauthorizedError) as exc:
        verify_token("not-a-jwt", TEST_SECRET)
    assert exc.value.message == INVALID_MESSAGE


def test_numeric_user_id_is_stringified():
    claims = claims_from_payload({"userId": 7, "email": "a@b.com", "role": "ADMIN"})
    assert claims.subject_id == "7"


def test_sub_used_when_user_id_absent():
    assert claims_from_payload({"sub": "99"}).subject_id == "99"


def test_payload_without_subject_is_invalid():
    with pytest.raises(UnauthorizedError) as exc:
        claims_from_payload({"email": "a@b.com"})
    assert exc.value.message == INVALID_MESSAGE
