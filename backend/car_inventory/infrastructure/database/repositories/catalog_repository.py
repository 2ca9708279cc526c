"""Concrete repository implementation for the brand/model catalog."""

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from car_inventory.application.interfaces import CatalogRepository
from car_inventory.domain.entities import CatalogBrand, CatalogModel
from car_inventory.domain.exceptions import DuplicateEntityError
from car_inventory.infrastructure.database.models import CatalogBrandModel
from car_inventory.infrastructure.database.repositories.store_errors import store_errors


class SQLAlchemyCatalogRepository(CatalogRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: CatalogBrandModel) -> CatalogBrand:
        return CatalogBrand(
            id=model.id,
            brand=model.brand,
            models=[
                CatalogModel(name=m["name"], is_active=m.get("is_active", True))
                for m in model.models or []
            ],
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _models_json(entity: CatalogBrand) -> list[dict]:
        return [{"name": m.name, "is_active": m.is_active} for m in entity.models]

    async def list_active(self) -> list[CatalogBrand]:
        stmt = (
            select(CatalogBrandModel)
            .where(CatalogBrandModel.is_active.is_(True))
            .order_by(CatalogBrandModel.brand.asc())
        )
        with store_errors("catalog list"):
            result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def get_by_brand(self, brand: str, *, active_only: bool = False) -> CatalogBrand | None:
        stmt = select(CatalogBrandModel).where(
            func.lower(CatalogBrandModel.brand) == brand.strip().lower()
        )
        if active_only:
            stmt = stmt.where(CatalogBrandModel.is_active.is_(True))
        with store_errors("catalog get"):
            result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def count(self) -> int:
        with store_errors("catalog count"):
            result = await self._session.execute(select(func.count(CatalogBrandModel.id)))
        return result.scalar_one()

    async def create(self, catalog: CatalogBrand) -> CatalogBrand:
        model = CatalogBrandModel(
            id=catalog.id,
            brand=catalog.brand,
            models=self._models_json(catalog),
            is_active=catalog.is_active,
            created_at=catalog.created_at,
            updated_at=catalog.updated_at,
        )
        self._session.add(model)
        try:
            with store_errors("catalog create"):
                await self._session.flush()
        except IntegrityError as exc:
            raise DuplicateEntityError("Brand", "brand", catalog.brand) from exc
        return self._to_entity(model)

    async def update(self, catalog: CatalogBrand) -> CatalogBrand:
        model = await self._session.get(CatalogBrandModel, catalog.id)
        if model is None:
            raise ValueError(f"Catalog brand {catalog.id} not found in database")
        # JSON columns are not mutation-tracked; assign a new list
        model.models = self._models_json(catalog)
        model.is_active = catalog.is_active
        model.updated_at = catalog.updated_at
        with store_errors("catalog update"):
            await self._session.flush()
        return self._to_entity(model)
