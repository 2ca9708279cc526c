"""Authentication Service — registration, login and token verification."""

import logging
from dataclasses import dataclass

from car_inventory.application.interfaces import PasswordHasher, TokenService, UserRepository
from car_inventory.application.schemas.auth import LoginRequest, RegisterRequest
from car_inventory.domain.entities import AuthenticatedUser, User
from car_inventory.domain.exceptions import (
    AccountDisabledError,
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidCredentialsError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    user: User
    token: str


class AuthService:
    def __init__(
        self,
        repository: UserRepository,
        password_hasher: PasswordHasher,
        token_service: TokenService,
    ) -> None:
        self._repository = repository
        self._hasher = password_hasher
        self._tokens = token_service

    async def register(self, data: RegisterRequest) -> AuthResult:
        if await self._repository.get_by_email(data.email) is not None:
            raise DuplicateEntityError("User", "email", data.email)

        user = User(
            email=data.email,
            name=data.name,
            password_hash=self._hasher.hash(data.password),
        )
        created = await self._repository.create(user)
        logger.info("Registered user %s", created.id)
        return AuthResult(user=created, token=self._tokens.create_access_token(created))

    async def login(self, data: LoginRequest) -> AuthResult:
        """Check credentials and issue a fresh token.

        Unknown email and wrong password raise the same error.
        """
        user = await self._repository.get_by_email(data.email)
        if user is None or not self._hasher.verify(data.password, user.password_hash):
            logger.warning("Failed login attempt for %s", data.email)
            raise InvalidCredentialsError()
        if not user.is_active:
            logger.warning("Login attempt on disabled account %s", user.id)
            raise AccountDisabledError()

        logger.info("User %s logged in", user.id)
        return AuthResult(user=user, token=self._tokens.create_access_token(user))

    def verify_token(self, token: str) -> AuthenticatedUser:
        return self._tokens.verify_access_token(token)

    async def get_profile(self, user_id: str) -> User:
        user = await self._repository.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError("User", user_id)
        return user
