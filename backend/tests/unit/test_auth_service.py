"""Unit tests for the AuthService."""

from dataclasses import replace

import pytest

from car_inventory.application.interfaces import UserRepository
from car_inventory.application.schemas import LoginRequest, RegisterRequest
from car_inventory.application.services import AuthService
from car_inventory.domain.entities import User, UserRole
from car_inventory.domain.exceptions import (
    AccountDisabledError,
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidCredentialsError,
    InvalidTokenError,
)
from car_inventory.infrastructure.security import JWTTokenService, PasslibPasswordHasher


class FakeUserRepository(UserRepository):
    """In-memory fake repository for unit testing."""

    def __init__(self):
        self.users: dict[str, User] = {}

    async def get_by_id(self, user_id: str) -> User | None:
        return self.users.get(user_id)

    async def get_by_email(self, email: str) -> User | None:
        return next((u for u in self.users.values() if u.email == email.lower()), None)

    async def create(self, user: User) -> User:
        self.users[user.id] = user
        return user


@pytest.fixture
def repository() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def service(repository: FakeUserRepository) -> AuthService:
    return AuthService(
        repository,
        PasslibPasswordHasher(),
        JWTTokenService(secret="unit-test-secret-key-for-hs256-signing"),
    )


def _register(email: str = "jane@example.com", password: str = "Password123") -> RegisterRequest:
    return RegisterRequest(email=email, password=password, name="Jane Doe")


@pytest.mark.asyncio
async def test_register_hashes_password_and_issues_token(
    service: AuthService, repository: FakeUserRepository
):
    result = await service.register(_register())

    assert result.user.role == UserRole.USER
    assert result.user.password_hash != "Password123"
    assert result.token
    assert service.verify_token(result.token).id == result.user.id
    assert result.user.id in repository.users


@pytest.mark.asyncio
async def test_register_duplicate_email(service: AuthService):
    await service.register(_register())

    with pytest.raises(DuplicateEntityError):
        await service.register(_register(email="JANE@example.com"))


@pytest.mark.asyncio
async def test_login_with_valid_credentials(service: AuthService):
    registered = await service.register(_register())

    result = await service.login(LoginRequest(email="jane@example.com", password="Password123"))

    assert result.user.id == registered.user.id
    assert service.verify_token(result.token).email == "jane@example.com"


@pytest.mark.asyncio
async def test_login_wrong_password(service: AuthService):
    await service.register(_register())

    with pytest.raises(InvalidCredentialsError):
        await service.login(LoginRequest(email="jane@example.com", password="Wrong1234"))


@pytest.mark.asyncio
async def test_login_unknown_email(service: AuthService):
    with pytest.raises(InvalidCredentialsError):
        await service.login(LoginRequest(email="ghost@example.com", password="Password123"))


@pytest.mark.asyncio
async def test_login_disabled_account(service: AuthService, repository: FakeUserRepository):
    result = await service.register(_register())
    repository.users[result.user.id] = replace(result.user, is_active=False)

    with pytest.raises(AccountDisabledError):
        await service.login(LoginRequest(email="jane@example.com", password="Password123"))


def test_verify_token_rejects_garbage(service: AuthService):
    with pytest.raises(InvalidTokenError):
        service.verify_token("not-a-jwt")


@pytest.mark.asyncio
async def test_get_profile_missing_user(service: AuthService):
    with pytest.raises(EntityNotFoundError):
        await service.get_profile("missing")


def test_register_request_accepts_minimal_strong_password():
    assert RegisterRequest(email="A@B.co", password="Abc123", name="Al").email == "a@b.co"


@pytest.mark.parametrize("password", ["Ab1", "alllowercase1", "ALLUPPERCASE1", "NoDigitsHere"])
def test_register_request_enforces_password_rule(password):
    with pytest.raises(ValueError):
        RegisterRequest(email="a@b.co", password=password, name="Al")
