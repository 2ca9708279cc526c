"""Abstract repository interface (port) for user accounts."""

from abc import ABC, abstractmethod

from car_inventory.domain.entities import User


class UserRepository(ABC):

    @abstractmethod
    async def get_by_id(self, user_id: str) -> User | None:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:
        """Lookup by (lower-cased) email."""
        ...

    @abstractmethod
    async def create(self, user: User) -> User:
        ...
