"""End-to-end tests for invitation-based registration and login."""

import pytest

from swimclub.infrastructure.auth import jwt_service

INVITATIONS = "/api/v1/invitations"
REGISTER = "/api/v1/register"
LOGIN = "/api/v1/auth/login"


def auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def issue_invitation(client, admin_token, email, role="supporter") -> dict:
    response = await client.post(
        INVITATIONS, json={"emails": [email], "role": role}, headers=auth(admin_token)
    )
    assert response.json()["success"] == [email]
    listing = await client.get(INVITATIONS, headers=auth(admin_token))
    return next(item for item in listing.json() if item["email"] == email)


@pytest.mark.asyncio
async def test_invited_athlete_registers_and_logs_in(client, admin_token):
    invitation = await issue_invitation(client, admin_token, "swimmer@example.com", "athlete")

    verify = await client.post(
        f"{INVITATIONS}/verify",
        json={"token": invitation["token"], "email": "swimmer@example.com"},
    )
    assert verify.json()["invitation"]["role"] == "athlete"

    response = await client.post(
        REGISTER,
        json={
            "token": invitation["token"],
            "email": "swimmer@example.com",
            "password": "freestyle-50m",
            "displayName": "Sam",
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["email"] == "swimmer@example.com"
    assert body["role"] == "athlete"
    assert body["expiresIn"] > 0
    claims = jwt_service.validate_access_token(body["token"])
    assert claims["user_id"] == body["userId"]
    assert claims["role"] == "athlete"

    listing = await client.get(INVITATIONS, headers=auth(admin_token))
    record = listing.json()[0]
    assert record["status"] == "accepted"
    assert record["acceptedBy"] == body["userId"]

    login = await client.post(
        LOGIN, json={"email": "swimmer@example.com", "password": "freestyle-50m"}
    )
    assert login.status_code == 200
    assert login.json()["user"] == {
        "id": body["userId"],
        "email": "swimmer@example.com",
        "role": "athlete",
        "displayName": "Sam",
    }


@pytest.mark.asyncio
async def test_registration_link_works_once(client, admin_token):
    invitation = await issue_invitation(client, admin_token, "swimmer@example.com")
    payload = {
        "token": invitation["token"],
        "email": "swimmer@example.com",
        "password": "freestyle-50m",
    }

    first = await client.post(REGISTER, json=payload)
    second = await client.post(REGISTER, json=payload)

    assert first.status_code == 201
    assert first.json()["role"] == "supporter"
    assert second.status_code == 404
    assert second.json()["message"] == "Invalid or expired invitation"

    verify = await client.post(
        f"{INVITATIONS}/verify",
        json={"token": invitation["token"], "email": "swimmer@example.com"},
    )
    assert verify.json()["valid"] is False


@pytest.mark.asyncio
async def test_registered_member_cannot_be_invited_again(client, admin_token):
    invitation = await issue_invitation(client, admin_token, "swimmer@example.com")
    await client.post(
        REGISTER,
        json={
            "token": invitation["token"],
            "email": "swimmer@example.com",
            "password": "freestyle-50m",
        },
    )

    response = await client.post(
        INVITATIONS, json={"emails": ["swimmer@example.com"]}, headers=auth(admin_token)
    )

    assert response.json()["failed"] == [
        {"email": "swimmer@example.com", "reason": "User already exists"}
    ]


@pytest.mark.asyncio
async def test_register_with_wrong_email(client, admin_token):
    invitation = await issue_invitation(client, admin_token, "swimmer@example.com")

    response = await client.post(
        REGISTER,
        json={
            "token": invitation["token"],
            "email": "someone-else@example.com",
            "password": "freestyle-50m",
        },
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_register_rejects_short_password(client, admin_token):
    invitation = await issue_invitation(client, admin_token, "swimmer@example.com")

    response = await client.post(
        REGISTER,
        json={"token": invitation["token"], "email": "swimmer@example.com", "password": "short"},
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_login_with_wrong_password(client, admin_token):
    invitation = await issue_invitation(client, admin_token, "swimmer@example.com")
    await client.post(
        REGISTER,
        json={
            "token": invitation["token"],
            "email": "swimmer@example.com",
            "password": "freestyle-50m",
        },
    )

    response = await client.post(
        LOGIN, json={"email": "swimmer@example.com", "password": "backstroke-100m"}
    )

    assert response.status_code == 401
    assert response.json() == {"error": "Authentication failed", "message": "Invalid credentials"}


@pytest.mark.asyncio
async def test_login_unknown_user(client):
    response = await client.post(
        LOGIN, json={"email": "ghost@example.com", "password": "whatever"}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["service"] == "SwimClub"
