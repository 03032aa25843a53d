"""
ProfileDesk Backend — Signup / Login / Me Endpoint Tests
=========================================================

What we test:
    ✅ signup returns 201, a token and a user view without a password
    ✅ duplicate email → 409; bad name/email/password → 400
    ✅ wrong password and unknown email give the identical 401 body
    ✅ /me accepts "Bearer <token>" and a raw token
    ✅ /me without a token, with a bad token or an expired one → 401
    ✅ /me for an account deleted after issuance → 404
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import delete

from helpers import signup
from profiledesk.models.account import Account


class TestSignup:

    @pytest.mark.asyncio
    async def test_signup_success(self, test_client):
        response = await signup(test_client)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User created"
        assert body["token"]
        assert body["user"]["name"] == "Ann"
        assert body["user"]["email"] == "ann@mail.com"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "name, email, password",
        [("Ann", "ann@mail.com", "secret123"), ("Bob Smith", "BOB@Mail.com", "123456")],
    )
    async def test_user_view_never_contains_password(self, test_client, name, email, password):
        response = await signup(test_client, name=name, email=email, password=password)

        assert response.status_code == 201
        user = response.json()["user"]
        assert not any("password" in key for key in user)
        assert password not in response.text

    @pytest.mark.asyncio
    async def test_email_is_normalized(self, test_client):
        response = await signup(test_client, email="  Ann@Mail.COM ")
        assert response.status_code == 201
        assert response.json()["user"]["email"] == "ann@mail.com"

    @pytest.mark.asyncio
    async def test_duplicate_email_conflict(self, test_client):
        await signup(test_client)
        response = await signup(test_client, name="Other", email="ANN@mail.com")

        assert response.status_code == 409
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Email already in use"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload, bad_field",
        [
            ({"name": "   ", "email": "ann@mail.com", "password": "secret123"}, "name"),
            ({"name": "Ann", "email": "not-an-email", "password": "secret123"}, "email"),
            ({"name": "Ann", "email": "ann@mail.com", "password": "12345"}, "password"),
            ({"email": "ann@mail.com", "password": "secret123"}, "name"),
        ],
    )
    async def test_signup_validation(self, test_client, payload, bad_field):
        response = await test_client.post("/signup", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert bad_field in [err["field"] for err in body["errors"]]


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_success(self, test_client):
        await signup(test_client)
        response = await test_client.post(
            "/login", json={"email": "ann@mail.com", "password": "secret123"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login success"
        assert body["token"]
        assert "password" not in body["user"]
        assert "password_hash" not in body["user"]

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_are_indistinguishable(self, test_client):
        await signup(test_client)

        wrong_password = await test_client.post(
            "/login", json={"email": "ann@mail.com", "password": "wrong-pass"}
        )
        unknown_email = await test_client.post(
            "/login", json={"email": "nobody@mail.com", "password": "secret123"}
        )

        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.json()["message"] == unknown_email.json()["message"] == "Invalid credentials"
        assert wrong_password.json()["error"] == unknown_email.json()["error"]

    @pytest.mark.asyncio
    async def test_login_validation(self, test_client):
        response = await test_client.post("/login", json={"email": "ann@mail.com", "password": ""})
        assert response.status_code == 400


class TestMe:

    @pytest.mark.asyncio
    async def test_me_with_bearer_token(self, test_client):
        token = (await signup(test_client)).json()["token"]

        response = await test_client.get("/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "ann@mail.com"

    @pytest.mark.asyncio
    async def test_me_with_raw_token(self, test_client):
        token = (await signup(test_client)).json()["token"]

        response = await test_client.get("/me", headers={"Authorization": token})

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_me_without_token(self, test_client):
        response = await test_client.get("/me")

        assert response.status_code == 401
        assert response.json()["message"] == "No token provided"

    @pytest.mark.asyncio
    async def test_me_with_invalid_token(self, test_client):
        response = await test_client.get("/me", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid/Expired token"

    @pytest.mark.asyncio
    async def test_me_with_expired_token(self, test_client, app):
        user_id = (await signup(test_client)).json()["user"]["id"]
        issuer = app.state.context.token_issuer
        token = issuer.issue(
            uuid.UUID(user_id),
            "ann@mail.com",
            now=datetime.now(timezone.utc) - timedelta(days=2),
        )

        response = await test_client.get("/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid/Expired token"

    @pytest.mark.asyncio
    async def test_me_for_deleted_account(self, test_client, app):
        token = (await signup(test_client)).json()["token"]
        async with app.state.context.session_factory() as session:
            await session.execute(delete(Account))
            await session.commit()

        response = await test_client.get("/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"
