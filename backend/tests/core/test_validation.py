"""Input Validation — verifies local shape checks and their 400 envelopes.

Tests:
    - Presence treats empty/null/0 as missing
    - Email, CPF (masked or not), wallet address patterns
    - validate_* raise BadRequestError with every per-field message
"""

import pytest

from bff.core.errors import BadRequestError
from bff.core.validation import (
    check_property_type,
    is_valid_cpf,
    is_valid_email,
    is_valid_wallet_address,
    missing_fields,
    validate_login,
    validate_property_registration,
    validate_transfer_request,
    validate_user_registration,
    validate_wallet_address,
)

VALID_WALLET = "0xAbCdEf0123456789abcdef0123456789ABCDEF01"


def test_missing_fields_treats_empty_values_as_missing():
    data = {"name": "", "email": None, "cpf": "123", "folha": 0}
    assert missing_fields(data, ["name", "email", "cpf", "folha", "password"]) == [
        "name", "email", "folha", "password",
    ]


@pytest.mark.parametrize("email", ["a@b.com", "first.last@sub.example.org"])
def test_valid_emails(email):
    assert is_valid_email(email)


@pytest.mark.parametrize("email", [
    "a@b", "ab.com", "a b@c.com", "a@b .com", "a@b.com\n", None, 42,
])
def test_invalid_emails(email):
    assert not is_valid_email(email)


def test_cpf_accepts_masked_and_plain_eleven_digits():
    assert is_valid_cpf("12345678909")
    assert is_valid_cpf("123.456.789-09")


@pytest.mark.parametrize("cpf", ["1234567890", "123456789012", "abc", None])
def test_cpf_rejects_wrong_length_or_type(cpf):
    assert not is_valid_cpf(cpf)


def test_wallet_address_accepts_mixed_case_hex():
    assert is_valid_wallet_address(VALID_WALLET)


@pytest.mark.parametrize("wallet", [
    "0x123",                                          # too short
    VALID_WALLET + "0",                               # too long
    "0xZZcdEf0123456789abcdef0123456789ABCDEF01",     # non-hex
    "AbCdEf0123456789abcdef0123456789ABCDEF0123",     # missing prefix
    VALID_WALLET + "\n",                              # trailing newline
    None,
])
def test_wallet_address_rejects_malformed(wallet):
    assert not is_valid_wallet_address(wallet)


def test_validate_login_requires_both_fields():
    with pytest.raises(BadRequestError) as exc:
        validate_login({"email": "a@b.com"})
    assert exc.value.message == "Email and password are required"
    assert exc.value.errors == ["password is required"]


def test_validate_user_registration_lists_missing_fields():
    with pytest.raises(BadRequestError) as exc:
        validate_user_registration({"email": "a@b.com"})
    assert exc.value.message == "Missing required fields"
    assert exc.value.errors == [
        "name is required", "cpf is required", "password is required",
    ]


def test_validate_user_registration_collects_format_violations():
    with pytest.raises(BadRequestError) as exc:
        validate_user_registration({
            "name": "A", "email": "bad", "cpf": "1", "password": "x",
            "walletAddress": "0x1",
        })
    assert exc.value.message == "Invalid email format"
    assert exc.value.errors == [
        "Invalid email format",
        "Invalid CPF format. Must be 11 digits",
        "Invalid wallet address format",
    ]


def test_validate_user_registration_accepts_valid_data_without_wallet():
    validate_user_registration({
        "name": "A", "email": "a@b.com", "cpf": "123.456.789-09", "password": "x",
    })


def test_validate_wallet_address_requires_value():
    with pytest.raises(BadRequestError) as exc:
        validate_wallet_address(None)
    assert exc.value.message == "Wallet address is required"


def test_validate_property_registration_lists_all_missing():
    with pytest.raises(BadRequestError) as exc:
        validate_property_registration({"matriculaId": 1, "folha": 2})
    assert exc.value.errors == [
        "comarca is required", "endereco is required", "metragem is required",
        "proprietario is required", "tipo is required",
    ]


def test_validate_transfer_request_checks_buyer_wallet():
    with pytest.raises(BadRequestError) as exc:
        validate_transfer_request({"matriculaId": 1, "to": "0x12"})
    assert exc.value.message == "Invalid wallet address format"


def test_check_property_type():
    assert check_property_type(None) is None
    assert check_property_type("RURAL") is None
    assert check_property_type("CASTLE").startswith("Invalid property type")
