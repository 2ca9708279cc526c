"""HS256 access tokens issued and verified with PyJWT."""

import logging
from datetime import datetime, timedelta, timezone

import jwt

from car_inventory.application.interfaces import TokenService
from car_inventory.domain.entities import AuthenticatedUser, User, UserRole
from car_inventory.domain.exceptions import InvalidTokenError, TokenExpiredError

logger = logging.getLogger(__name__)

_REQUIRED_CLAIMS = ["sub", "email", "role", "exp", "iat"]


class JWTTokenService(TokenService):
    """Issues and verifies access tokens.

    Claims: ``sub`` (user id), ``email``, ``role``, ``iat`` and ``exp``.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expires_minutes: int = 1440):
        self._secret = secret
        self._algorithm = algorithm
        self._expires = timedelta(minutes=expires_minutes)

    def create_access_token(self, user: User) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user.id,
            "email": user.email,
            "role": user.role.value,
            "iat": now,
            "exp": now + self._expires,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify_access_token(self, token: str) -> AuthenticatedUser:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": _REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError()
        except jwt.InvalidTokenError as exc:
            logger.debug("Rejected access token: %s", exc)
            raise InvalidTokenError()

        try:
            return AuthenticatedUser(
                id=str(payload["sub"]),
                email=str(payload["email"]),
                role=UserRole(payload["role"]),
            )
        except ValueError:
            raise InvalidTokenError("Invalid token role")
