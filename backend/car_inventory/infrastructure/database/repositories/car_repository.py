"""Concrete repository implementation for Car backed by SQLAlchemy."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import case, delete, func, or_, select, update
from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from car_inventory.application.interfaces import CarRepository
from car_inventory.domain.entities import (
    Car,
    CarFilters,
    CarStats,
    PageRequest,
    SortOrder,
)
from car_inventory.infrastructure.database.models import CarModel
from car_inventory.infrastructure.database.repositories.store_errors import store_errors

_cars = CarModel.__table__


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes for timezone-aware columns
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _contains(column, term: str):
    """Case-insensitive literal substring match."""
    return column.ilike(f"%{_escape_like(term)}%", escape="\\")


def _photo_matches(expected: str | None):
    if expected is None:
        return _cars.c.photo.is_(None)
    return _cars.c.photo == expected


class SQLAlchemyCarRepository(CarRepository):
    """Implements the CarRepository port using SQLAlchemy async sessions.

    Conditional writes go through Core ``UPDATE``/``DELETE ... RETURNING``
    so the guard and the write are one statement.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: CarModel) -> Car:
        """Map ORM model → domain entity."""
        return Car(
            id=model.id,
            brand=model.brand,
            model=model.model,
            year=model.year,
            price=model.price,
            odometer=model.odometer,
            color=model.color,
            email=model.email,
            phone=model.phone,
            photo=model.photo,
            created_by=model.created_by,
            is_deleted=model.is_deleted,
            deleted_at=_as_utc(model.deleted_at),
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    def _row_to_entity(self, row: RowMapping | None) -> Car | None:
        """Map a ``RETURNING`` row (transient, never added to the session)."""
        if row is None:
            return None
        return self._to_entity(CarModel(**row))

    def _to_model(self, entity: Car) -> CarModel:
        """Map domain entity → ORM model (for creation)."""
        return CarModel(
            id=entity.id,
            brand=entity.brand,
            model=entity.model,
            year=entity.year,
            price=entity.price,
            odometer=entity.odometer,
            color=entity.color,
            email=entity.email,
            phone=entity.phone,
            photo=entity.photo,
            created_by=entity.created_by,
            is_deleted=entity.is_deleted,
            deleted_at=entity.deleted_at,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    # ── Query building ──────────────────────────────────────────────

    def _active(self, stmt: Select) -> Select:
        return stmt.where(CarModel.is_deleted.is_(False))

    def _filtered(self, stmt: Select, filters: CarFilters) -> Select:
        stmt = self._active(stmt)
        if filters.brand is not None:
            stmt = stmt.where(_contains(CarModel.brand, filters.brand))
        if filters.model is not None:
            stmt = stmt.where(_contains(CarModel.model, filters.model))
        if filters.color is not None:
            stmt = stmt.where(_contains(CarModel.color, filters.color))
        if filters.year is not None:
            stmt = stmt.where(CarModel.year == filters.year)
        if filters.min_price is not None:
            stmt = stmt.where(CarModel.price >= filters.min_price)
        if filters.max_price is not None:
            stmt = stmt.where(CarModel.price <= filters.max_price)
        return stmt

    # ── Reads ───────────────────────────────────────────────────────

    async def get_active(self, car_id: str) -> Car | None:
        # populate_existing: a re-read after a missed guard must see fresh values
        stmt = (
            self._active(select(CarModel))
            .where(CarModel.id == car_id)
            .execution_options(populate_existing=True)
        )
        with store_errors("get"):
            result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_active(self, filters: CarFilters, page: PageRequest) -> list[Car]:
        sort_column = getattr(CarModel, page.sort_by.value)
        ordering = sort_column.asc() if page.sort_order == SortOrder.ASC else sort_column.desc()

        stmt = (
            self._filtered(select(CarModel), filters)
            .order_by(ordering, CarModel.id.asc())
            .offset(page.offset)
            .limit(page.limit)
        )
        with store_errors("list"):
            result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def count_active(self, filters: CarFilters) -> int:
        stmt = self._filtered(select(func.count(CarModel.id)), filters)
        with store_errors("count"):
            result = await self._session.execute(stmt)
        return result.scalar_one()

    async def search_active(self, term: str, limit: int) -> list[Car]:
        stmt = (
            self._active(select(CarModel))
            .where(
                or_(
                    _contains(CarModel.brand, term),
                    _contains(CarModel.model, term),
                    _contains(CarModel.color, term),
                )
            )
            .order_by(CarModel.created_at.desc(), CarModel.id.asc())
            .limit(limit)
        )
        with store_errors("search"):
            result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def get_stats(self) -> CarStats:
        is_active = CarModel.is_deleted.is_(False)
        stmt = select(
            func.count(CarModel.id),
            func.coalesce(func.sum(case((CarModel.is_deleted.is_(True), 1), else_=0)), 0),
            func.avg(case((is_active, CarModel.price))),
            func.avg(case((is_active, CarModel.odometer))),
        )
        with store_errors("stats"):
            result = await self._session.execute(stmt)
        total, deleted, avg_price, avg_km = result.one()

        return CarStats(
            total=int(total),
            deleted=int(deleted),
            active=int(total) - int(deleted),
            average_price=float(avg_price) if avg_price is not None else 0.0,
            average_km=float(avg_km) if avg_km is not None else 0.0,
        )

    # ── Writes ──────────────────────────────────────────────────────

    async def create(self, car: Car) -> Car:
        model = self._to_model(car)
        self._session.add(model)
        with store_errors("create"):
            await self._session.flush()
        return self._to_entity(model)

    async def update_active(
        self,
        car_id: str,
        changes: dict[str, Any],
        *,
        expected_photo: str | None,
    ) -> Car | None:
        stmt = (
            update(_cars)
            .where(
                _cars.c.id == car_id,
                _cars.c.is_deleted.is_(False),
                _photo_matches(expected_photo),
            )
            .values(**changes)
            .returning(*_cars.c)
        )
        with store_errors("update"):
            result = await self._session.execute(stmt)
        return self._row_to_entity(result.mappings().one_or_none())

    async def soft_delete(
        self,
        car_id: str,
        deleted_at: datetime,
        *,
        expected_photo: str | None,
    ) -> Car | None:
        stmt = (
            update(_cars)
            .where(
                _cars.c.id == car_id,
                _cars.c.is_deleted.is_(False),
                _photo_matches(expected_photo),
            )
            .values(is_deleted=True, deleted_at=deleted_at, updated_at=deleted_at, photo=None)
            .returning(*_cars.c)
        )
        with store_errors("soft delete"):
            result = await self._session.execute(stmt)
        return self._row_to_entity(result.mappings().one_or_none())

    async def hard_delete(self, car_id: str) -> Car | None:
        stmt = delete(_cars).where(_cars.c.id == car_id).returning(*_cars.c)
        with store_errors("hard delete"):
            result = await self._session.execute(stmt)
        return self._row_to_entity(result.mappings().one_or_none())

    async def commit(self) -> None:
        with store_errors("commit"):
            await self._session.commit()
