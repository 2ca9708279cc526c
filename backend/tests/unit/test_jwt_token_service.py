"""Unit tests for JWT access tokens."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from car_inventory.domain.entities import User, UserRole
from car_inventory.domain.exceptions import InvalidTokenError, TokenExpiredError
from car_inventory.infrastructure.security import JWTTokenService, PasslibPasswordHasher

SECRET = "unit-test-secret-key-for-hs256-signing"


@pytest.fixture
def user() -> User:
    return User(email="admin@example.com", name="Admin", password_hash="x", role=UserRole.ADMIN)


def test_round_trip_carries_identity(user: User):
    tokens = JWTTokenService(secret=SECRET)

    identity = tokens.verify_access_token(tokens.create_access_token(user))

    assert identity.id == user.id
    assert identity.email == user.email
    assert identity.is_admin


def test_token_claims(user: User):
    token = JWTTokenService(secret=SECRET, expires_minutes=60).create_access_token(user)

    payload = jwt.decode(token, SECRET, algorithms=["HS256"])

    assert payload["sub"] == user.id
    assert payload["role"] == "admin"
    assert payload["exp"] - payload["iat"] == 3600


def test_expired_token(user: User):
    tokens = JWTTokenService(secret=SECRET, expires_minutes=-5)

    with pytest.raises(TokenExpiredError):
        tokens.verify_access_token(tokens.create_access_token(user))


def test_token_signed_with_other_secret(user: User):
    token = JWTTokenService(secret="another-secret-key-for-hs256-signing").create_access_token(user)

    with pytest.raises(InvalidTokenError):
        JWTTokenService(secret=SECRET).verify_access_token(token)


def test_token_missing_role_claim(user: User):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": user.id, "email": user.email, "iat": now, "exp": now + timedelta(minutes=5)},
        SECRET,
        algorithm="HS256",
    )

    with pytest.raises(InvalidTokenError):
        JWTTokenService(secret=SECRET).verify_access_token(token)


def test_token_with_unknown_role(user: User):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {
            "sub": user.id,
            "email": user.email,
            "role": "superuser",
            "iat": now,
            "exp": now + timedelta(minutes=5),
        },
        SECRET,
        algorithm="HS256",
    )

    with pytest.raises(InvalidTokenError):
        JWTTokenService(secret=SECRET).verify_access_token(token)


def test_password_hasher_verifies_only_the_right_password():
    hasher = PasslibPasswordHasher()
    hashed = hasher.hash("Password123")

    assert hasher.verify("Password123", hashed)
    assert not hasher.verify("Password124", hashed)
    assert not hasher.verify("Password123", "not-a-hash")
