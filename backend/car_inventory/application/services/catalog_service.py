"""Catalog Service — brands, models and selectable model years."""

import logging
from datetime import datetime, timezone

from car_inventory.application.interfaces import CatalogRepository
from car_inventory.application.schemas.catalog import CatalogUpsertRequest
from car_inventory.domain.entities import CatalogBrand, CatalogModel
from car_inventory.domain.exceptions import DuplicateEntityError, EntityNotFoundError

logger = logging.getLogger(__name__)

FIRST_CATALOG_YEAR = 1990

DEFAULT_CATALOGS: dict[str, list[str]] = {
    "Ford": ["Focus", "Fusion", "Mustang", "Explorer", "F-150", "Escape"],
    "Honda": ["Civic", "Accord", "CR-V", "Pilot", "Fit", "Odyssey"],
    "Toyota": ["Corolla", "Camry", "RAV4", "Highlander", "Tacoma", "Prius"],
    "Chevrolet": ["Spark", "Aveo", "Cruze", "Malibu", "Equinox", "Tahoe"],
    "Nissan": ["Versa", "Sentra", "Altima", "Maxima", "Rogue", "Pathfinder"],
    "Volkswagen": ["Jetta", "Passat", "Tiguan", "Atlas", "Golf", "Beetle"],
    "Mazda": ["Mazda2", "Mazda3", "Mazda6", "CX-3", "CX-5", "CX-9"],
    "BMW": ["Serie 1", "Serie 3", "Serie 5", "X1", "X3", "X5"],
}


class CatalogService:
    """Reference data for listing forms. Not enforced against car records."""

    def __init__(self, repository: CatalogRepository):
        self._repository = repository

    async def list_catalogs(self) -> list[CatalogBrand]:
        return await self._repository.list_active()

    async def list_brands(self) -> list[str]:
        return [c.brand for c in await self._repository.list_active()]

    async def list_models(self, brand: str) -> list[str]:
        catalog = await self._repository.get_by_brand(brand.strip(), active_only=True)
        if catalog is None:
            raise EntityNotFoundError("Brand", brand)
        return catalog.active_model_names()

    def list_years(self) -> list[int]:
        """Newest first, from next year down to ``FIRST_CATALOG_YEAR``."""
        latest = datetime.now(timezone.utc).year + 1
        return list(range(latest, FIRST_CATALOG_YEAR - 1, -1))

    async def upsert_catalog(self, data: CatalogUpsertRequest) -> tuple[CatalogBrand, bool]:
        """Create a brand or replace its models. Returns ``(catalog, created)``."""
        existing = await self._repository.get_by_brand(data.brand)
        if existing is not None:
            existing.replace_models(data.models)
            updated = await self._repository.update(existing)
            logger.info("Replaced models of brand %s (%d models)", updated.brand, len(updated.models))
            return updated, False

        catalog = CatalogBrand(
            brand=data.brand,
            models=[CatalogModel(name=m) for m in data.models if m.strip()],
        )
        created = await self._repository.create(catalog)
        logger.info("Created brand %s", created.brand)
        return created, True

    async def add_model(self, brand: str, model: str) -> CatalogBrand:
        catalog = await self._repository.get_by_brand(brand.strip())
        if catalog is None:
            raise EntityNotFoundError("Brand", brand)
        if catalog.has_model(model):
            raise DuplicateEntityError("Model", "name", model.strip())

        catalog.add_model(model)
        return await self._repository.update(catalog)

    async def initialize_catalogs(self) -> int:
        """Upsert every default brand, restoring its default models.

        Returns how many brands were newly created.
        """
        added = 0
        for brand, models in DEFAULT_CATALOGS.items():
            _, created = await self.upsert_catalog(
                CatalogUpsertRequest(brand=brand, models=models)
            )
            if created:
                added += 1

        logger.info("Loaded %d default catalog brands (%d new)", len(DEFAULT_CATALOGS), added)
        return added

    async def seed_if_empty(self) -> bool:
        if await self._repository.count() > 0:
            return False
        await self.initialize_catalogs()
        return True
