"""Auth Routes + Auth Guard — end-to-end through the ASGI app with faked upstreams.

Tests:
    - Login reshapes the flat Orchestrator payload into {token, user}
    - Local validation failures answer 400 without calling the Orchestrator
    - Orchestrator rejections pass through with their own message/status
    - Guard rejections: absent header, bad format, invalid, expired
"""

from datetime import timedelta

from tests.fake_upstream import OWNER_WALLET, make_token, request_json

VALID_REGISTRATION = {
    "name": "Ana Souza",
    "email": "ana@example.com",
    "cpf": "123.456.789-09",
    "password": "s3cret!",
}


# Login


async def test_login_reshapes_orchestrator_payload(client, orchestrator):
    orchestrator.on("POST", "/api/users/login", json={
        "token": "t", "id": 1, "name": "A", "email": "a@b.com", "role": "USER",
        "active": True, "createdAt": "2024-01-01", "passwordHash": "never-exposed",
    })
    response = await client.post("/auth/login", json={"email": "a@b.com", "password": "x"})
    assert response.status_code == 200
    assert response.json() == {
        "token": "t",
        "user": {
            "id": 1, "name": "A", "email": "a@b.com", "cpf": None,
            "walletAddress": None, "role": "USER", "active": True,
            "createdAt": "2024-01-01",
        },
    }
    assert request_json(orchestrator.calls[0]) == {"email": "a@b.com", "password": "x"}


async def test_login_missing_password_never_reaches_orchestrator(client, orchestrator):
    response = await client.post("/auth/login", json={"email": "a@b.com"})
    assert response.status_code == 400
    assert response.json() == {
        "message": "Email and password are required",
        "statusCode": 400,
        "errors": ["password is required"],
    }
    assert orchestrator.calls == []


async def test_login_rejection_passed_through(client, orchestrator):
    orchestrator.on("POST", "/api/users/login", status=401, json={
        "message": "Credenciais inválidas",
    })
    response = await client.post("/auth/login", json={"email": "a@b.com", "password": "bad"})
    assert response.status_code == 401
    assert response.json() == {"message": "Credenciais inválidas", "statusCode": 401}


async def test_login_orchestrator_down_is_503(client, orchestrator):
    orchestrator.fail("POST", "/api/users/login")
    response = await client.post("/auth/login", json={"email": "a@b.com", "password": "x"})
    assert response.status_code == 503
    assert response.json() == {
        "message": "Orchestrator service is unavailable", "statusCode": 503,
    }


# Register


async def test_register_forwards_and_returns_201(client, orchestrator):
    orchestrator.on("POST", "/api/users/register", status=201, json={"id": 7})
    response = await client.post("/auth/register", json=VALID_REGISTRATION)
    assert response.status_code == 201
    assert response.json() == {"id": 7}
    assert request_json(orchestrator.calls[0]) == VALID_REGISTRATION


async def test_register_missing_fields_lists_each(client, orchestrator):
    response = await client.post("/auth/register", json={"email": "ana@example.com"})
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Missing required fields"
    assert body["errors"] == ["name is required", "cpf is required", "password is required"]
    assert orchestrator.calls == []


async def test_register_bad_formats(client, orchestrator):
    response = await client.post("/auth/register", json={
        **VALID_REGISTRATION, "email": "not-an-email", "cpf": "123",
    })
    assert response.status_code == 400
    assert response.json()["errors"] == [
        "Invalid email format", "Invalid CPF format. Must be 11 digits",
    ]
    assert orchestrator.calls == []


async def test_register_duplicate_passed_through(client, orchestrator):
    orchestrator.on("POST", "/api/users/register", status=409, json={
        "message": "Email já cadastrado",
    })
    response = await client.post("/auth/register", json=VALID_REGISTRATION)
    assert response.status_code == 409
    assert response.json()["message"] == "Email já cadastrado"


# Wallet


async def test_update_wallet_uses_caller_identity(client, orchestrator, auth_headers, token):
    orchestrator.on("PUT", "/api/users/42/wallet", json={"id": 42, "walletAddress": OWNER_WALLET})
    response = await client.put(
        "/auth/wallet", json={"walletAddress": OWNER_WALLET}, headers=auth_headers,
    )
    assert response.status_code == 200
    sent = orchestrator.calls_to("PUT", "/api/users/42/wallet")[0]
    assert request_json(sent) == {"walletAddress": OWNER_WALLET}
    assert sent.headers["Authorization"] == f"Bearer {token}"


async def test_update_wallet_rejects_malformed_address(client, orchestrator, auth_headers):
    response = await client.put(
        "/auth/wallet", json={"walletAddress": "0x123"}, headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid wallet address format"
    assert orchestrator.calls == []


async def test_update_wallet_rejects_trailing_newline(client, orchestrator, auth_headers):
    response = await client.put(
        "/auth/wallet", json={"walletAddress": OWNER_WALLET + "\n"}, headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid wallet address format"
    assert orchestrator.calls == []


async def test_update_wallet_requires_address(client, auth_headers):
    response = await client.put("/auth/wallet", json={}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Wallet address is required"


# Guard


async def test_guard_absent_header(client, orchestrator):
    response = await client.put("/auth/wallet", json={"walletAddress": OWNER_WALLET})
    assert response.status_code == 401
    assert response.json() == {
        "message": "No authorization header provided", "statusCode": 401,
    }
    assert orchestrator.calls == []


async def test_guard_bad_format(client):
    response = await client.get("/properties/my", headers={"Authorization": "Token abc"})
    assert response.status_code == 401
    assert response.json()["message"] == (
        "Invalid authorization header format. Expected: Bearer <token>"
    )


async def test_guard_invalid_signature(client):
    token = make_token(secret="not-the-gateway-secret")
    response = await client.get("/properties/my", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"


async def test_guard_expired(client):
    token = make_token(expires_in=timedelta(minutes=-5))
    response = await client.get("/properties/my", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["message"] == "Token expired"


# Me


async def test_me_returns_decode_hint(client, auth_headers):
    response = await client.get("/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {
        "message": "Use the JWT payload to get user information",
        "hint": "Decode the JWT on the frontend to extract userId, email, and role",
    }


async def test_me_without_header(client):
    response = await client.get("/auth/me")
    assert response.status_code == 401
    assert response.json()["message"] == "No authorization header provided"


async def test_me_without_token(client):
    response = await client.get("/auth/me", headers={"Authorization": "Bearer"})
    assert response.status_code == 401
    assert response.json()["message"] == "No token provided"
