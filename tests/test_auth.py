# =============================================================================
# tests/test_auth.py - Authentication Tests
# =============================================================================
# Login, token issuing and the bearer-token guard.
# =============================================================================

import pytest
from jose import jwt

from app.config import settings
from lib.security import create_access_token, decode_access_token, hash_password, verify_password

USERS = "/api/v1/users"
AUTH = "/api/v1/auth"
ORDERS = "/api/v1/orders"

CREDENTIALS = {"email": "ana@example.com", "password": "s3cret-pass"}


@pytest.fixture
def registered(client):
    response = client.post(USERS, json={"fullName": "Ana Lima", **CREDENTIALS})
    assert response.status_code == 201
    return response.json()


class TestPasswords:
    """Tests for password hashing."""

    def test_hash_roundtrip(self):
        hashed = hash_password("s3cret-pass")

        assert hashed != "s3cret-pass"
        assert verify_password("s3cret-pass", hashed)
        assert not verify_password("wrong-pass", hashed)


class TestTokens:
    """Tests for access-token signing."""

    def test_claims(self):
        claims = decode_access_token(create_access_token("user-1", email="a@b.co"))

        assert claims["sub"] == "user-1"
        assert claims["email"] == "a@b.co"
        assert claims["exp"] > claims["iat"]


class TestLogin:
    """POST /api/v1/auth"""

    def test_login_issues_token(self, client, registered):
        response = client.post(AUTH, json=CREDENTIALS)

        assert response.status_code == 200
        body = response.json()
        assert body["tokenType"] == "Bearer"
        assert body["expiresIn"] == settings.access_token_expire_seconds
        assert decode_access_token(body["token"])["sub"] == registered["id"]

    def test_email_is_case_insensitive(self, client, registered):
        response = client.post(AUTH, json={**CREDENTIALS, "email": "ANA@example.com"})
        assert response.status_code == 200

    def test_wrong_password(self, client, registered):
        response = client.post(AUTH, json={**CREDENTIALS, "password": "not-the-password"})

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_CREDENTIALS"

    def test_unknown_email(self, client):
        response = client.post(AUTH, json=CREDENTIALS)
        assert response.status_code == 401

    def test_issued_token_opens_protected_routes(self, client, registered):
        token = client.post(AUTH, json=CREDENTIALS).json()["token"]

        response = client.get(ORDERS, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200

    def test_me(self, client, registered):
        token = client.post(AUTH, json=CREDENTIALS).json()["token"]

        response = client.get(f"{AUTH}/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json() == registered
        assert "password" not in response.json()


class TestBearerGuard:
    """The guard in front of protected routers."""

    def test_missing_header(self, client):
        response = client.get(ORDERS)

        assert response.status_code == 401
        assert response.json()["code"] == "NOT_AUTHENTICATED"

    def test_wrong_scheme(self, client):
        response = client.get(ORDERS, headers={"Authorization": "Basic dXNlcjpwYXNz"})
        assert response.status_code == 401

    def test_garbage_token(self, client):
        response = client.get(ORDERS, headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_TOKEN"

    def test_expired_token(self, client):
        token = create_access_token("user-1", expires_in=-60)

        response = client.get(ORDERS, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["code"] == "TOKEN_EXPIRED"

    def test_token_signed_with_other_key(self, client):
        token = jwt.encode(
            {"sub": "user-1", "aud": "rental-api", "iat": 0, "exp": 4102444800},
            "some-other-secret-key",
            algorithm="HS256",
        )

        response = client.get(ORDERS, headers={"Authorization": f"Bearer {token}"})

        assert response.json()["code"] == "INVALID_TOKEN"

    def test_token_without_subject(self, client):
        token = jwt.encode(
            {"aud": "rental-api", "iat": 0, "exp": 4102444800},
            settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )

        response = client.get(ORDERS, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
