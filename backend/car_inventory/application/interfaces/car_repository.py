"""Abstract repository interface (port) for Car persistence."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from car_inventory.domain.entities import Car, CarFilters, CarStats, PageRequest


class CarRepository(ABC):
    """Port for car persistence — implemented in the infrastructure layer.

    Every read only sees active (not soft-deleted) rows.
    Mutations on active rows are single conditional statements so that two
    concurrent callers can never both observe and change the same active row.
    """

    @abstractmethod
    async def get_active(self, car_id: str) -> Car | None:
        """Retrieve an active car by id."""
        ...

    @abstractmethod
    async def list_active(self, filters: CarFilters, page: PageRequest) -> list[Car]:
        """Retrieve one window of active cars matching ``filters``."""
        ...

    @abstractmethod
    async def count_active(self, filters: CarFilters) -> int:
        """Count active cars matching ``filters`` (ignoring the window)."""
        ...

    @abstractmethod
    async def search_active(self, term: str, limit: int) -> list[Car]:
        """Substring match on brand, model or color, newest first."""
        ...

    @abstractmethod
    async def create(self, car: Car) -> Car:
        """Persist a new car and return it."""
        ...

    @abstractmethod
    async def update_active(
        self,
        car_id: str,
        changes: dict[str, Any],
        *,
        expected_photo: str | None,
    ) -> Car | None:
        """Apply ``changes`` only if the car is active and still holds ``expected_photo``.

        Returns the updated car, or None when the guard did not match.
        """
        ...

    @abstractmethod
    async def soft_delete(
        self,
        car_id: str,
        deleted_at: datetime,
        *,
        expected_photo: str | None,
    ) -> Car | None:
        """Mark an active car deleted and clear its photo reference.

        Guarded like ``update_active``. Returns None if no active car matched.
        """
        ...

    @abstractmethod
    async def hard_delete(self, car_id: str) -> Car | None:
        """Remove a car regardless of state. Returns the removed car or None."""
        ...

    @abstractmethod
    async def get_stats(self) -> CarStats:
        """Counts over all rows and averages over active rows."""
        ...

    @abstractmethod
    async def commit(self) -> None:
        """Make pending changes durable."""
        ...
