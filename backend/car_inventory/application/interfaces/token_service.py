"""Abstract interface (port) for access-token issuance and verification."""

from abc import ABC, abstractmethod

from car_inventory.domain.entities import AuthenticatedUser, User


class TokenService(ABC):

    @abstractmethod
    def create_access_token(self, user: User) -> str:
        ...

    @abstractmethod
    def verify_access_token(self, token: str) -> AuthenticatedUser:
        """Decode a token.

        Raises:
            TokenExpiredError: the token's ``exp`` has passed.
            InvalidTokenError: signature, structure or claims are invalid.
        """
        ...
