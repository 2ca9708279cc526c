"""Abstract repository interface (port) for the brand/model catalog."""

from abc import ABC, abstractmethod

from car_inventory.domain.entities import CatalogBrand


class CatalogRepository(ABC):

    @abstractmethod
    async def list_active(self) -> list[CatalogBrand]:
        """Active brands ordered by name."""
        ...

    @abstractmethod
    async def get_by_brand(self, brand: str, *, active_only: bool = False) -> CatalogBrand | None:
        """Case-insensitive exact lookup by brand name."""
        ...

    @abstractmethod
    async def count(self) -> int:
        ...

    @abstractmethod
    async def create(self, catalog: CatalogBrand) -> CatalogBrand:
        ...

    @abstractmethod
    async def update(self, catalog: CatalogBrand) -> CatalogBrand:
        ...
