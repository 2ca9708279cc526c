"""Application service (use case) for the car inventory lifecycle."""

import logging
from datetime import datetime, timezone

from car_inventory.application.interfaces import CarRepository, PhotoStorage
from car_inventory.application.schemas.car import CarCreate, CarUpdate
from car_inventory.domain.entities import (
    Car,
    CarFilters,
    CarPage,
    CarStats,
    PageRequest,
    PaginationInfo,
)
from car_inventory.domain.exceptions import (
    AssetCleanupError,
    BadRequestError,
    ConcurrentModificationError,
    EntityNotFoundError,
)

logger = logging.getLogger(__name__)

SEARCH_RESULT_LIMIT = 20

# Conditional writes are guarded on the photo that was read; a concurrent
# photo change makes the guard miss and the write is retried on fresh state.
MAX_WRITE_ATTEMPTS = 3


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CarService:
    """Orchestrates listing, lifecycle transitions and photo reconciliation.

    Record changes are committed before any photo file is touched, and a
    photo that cannot be deleted is logged, never raised. Uploads belonging
    to a create/update that fails are removed again so they cannot orphan.
    """

    def __init__(self, repository: CarRepository, photo_storage: PhotoStorage):
        self._repository = repository
        self._photo_storage = photo_storage

    # ── Queries ──────────────────────────────────────────────────────

    async def list_cars(
        self,
        filters: CarFilters | None = None,
        page: PageRequest | None = None,
    ) -> CarPage:
        filters = (filters or CarFilters()).normalized()
        page = page or PageRequest()

        data = await self._repository.list_active(filters, page)
        total = await self._repository.count_active(filters)
        return CarPage(data=data, pagination=PaginationInfo.build(page, total))

    async def get_car(self, car_id: str) -> Car:
        car = await self._repository.get_active(car_id)
        if car is None:
            raise EntityNotFoundError("Car", car_id)
        return car

    async def search_cars(self, term: str | None) -> list[Car]:
        term = (term or "").strip()
        if not term:
            raise BadRequestError("Search term is required")
        return await self._repository.search_active(term, SEARCH_RESULT_LIMIT)

    async def get_stats(self) -> CarStats:
        return await self._repository.get_stats()

    # ── Lifecycle ────────────────────────────────────────────────────

    async def create_car(
        self,
        data: CarCreate,
        *,
        photo: str | None = None,
        created_by: str | None = None,
    ) -> Car:
        now = _utcnow()
        try:
            car = Car(
                **data.model_dump(),
                photo=photo,
                created_by=created_by,
                created_at=now,
                updated_at=now,
            )
            car.validate()
            created = await self._repository.create(car)
            await self._repository.commit()
        except Exception:
            await self._discard_upload(photo)
            raise

        logger.info("Created car %s (%s %s %s)", created.id, created.brand, created.model, created.year)
        return created

    async def update_car(
        self,
        car_id: str,
        data: CarUpdate,
        *,
        photo: str | None = None,
    ) -> Car:
        """Merge the provided fields over an active car.

        When ``photo`` replaces a different photo, the previous file is
        released once the new state is committed.
        """
        changes = data.model_dump(exclude_none=True)
        if photo is not None:
            changes["photo"] = photo

        try:
            updated, previous_photo = await self._write_update(car_id, changes)
            await self._repository.commit()
        except Exception:
            await self._discard_upload(photo)
            raise

        logger.info("Updated car %s (fields: %s)", car_id, ", ".join(sorted(changes)) or "-")
        if photo is not None and previous_photo and previous_photo != photo:
            await self._release_photo(previous_photo)
        return updated

    async def delete_car(self, car_id: str) -> Car:
        """Soft delete. A second call on the same id raises EntityNotFoundError."""
        for _ in range(MAX_WRITE_ATTEMPTS):
            current = await self.get_car(car_id)
            deleted = await self._repository.soft_delete(
                car_id, _utcnow(), expected_photo=current.photo
            )
            if deleted is not None:
                break
        else:
            raise ConcurrentModificationError("Car", car_id)

        await self._repository.commit()
        logger.info("Soft-deleted car %s", car_id)
        if current.photo:
            await self._release_photo(current.photo)
        return deleted

    async def purge_car(self, car_id: str) -> None:
        """Hard delete, regardless of soft-delete state."""
        removed = await self._repository.hard_delete(car_id)
        if removed is None:
            raise EntityNotFoundError("Car", car_id)

        await self._repository.commit()
        logger.info("Purged car %s", car_id)
        if removed.photo:
            await self._release_photo(removed.photo)

    # ── Photos ───────────────────────────────────────────────────────

    async def store_photo(
        self, content: bytes, filename: str, content_type: str | None = None
    ) -> str:
        return await self._photo_storage.store(content, filename, content_type)

    def photo_url(self, car: Car) -> str | None:
        if not car.photo:
            return None
        return self._photo_storage.resolve_url(car.photo)

    # ── Internals ────────────────────────────────────────────────────

    async def _write_update(self, car_id: str, changes: dict) -> tuple[Car, str | None]:
        for _ in range(MAX_WRITE_ATTEMPTS):
            current = await self.get_car(car_id)
            merged = current.merged(changes)
            merged.validate()

            # write the normalised values (trimmed text, lower-cased email)
            normalised = {name: getattr(merged, name) for name in changes}
            updated = await self._repository.update_active(
                car_id,
                {**normalised, "updated_at": _utcnow()},
                expected_photo=current.photo,
            )
            if updated is not None:
                return updated, current.photo
            logger.debug("Conditional update on car %s missed, re-reading", car_id)

        raise ConcurrentModificationError("Car", car_id)

    async def _discard_upload(self, photo: str | None) -> None:
        if photo is not None:
            await self._release_photo(photo)

    async def _release_photo(self, identifier: str) -> None:
        try:
            removed = await self._photo_storage.delete(identifier)
        except AssetCleanupError as exc:
            logger.warning("Photo cleanup failed: %s", exc)
            return
        except Exception:
            logger.exception("Unexpected error while deleting photo %s", identifier)
            return

        if removed:
            logger.info("Deleted photo %s", identifier)
        else:
            logger.info("Photo %s was already gone", identifier)
