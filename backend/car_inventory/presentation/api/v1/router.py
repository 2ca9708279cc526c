"""API router — every v1 endpoint router under ``/api/v1``."""

from fastapi import APIRouter

from car_inventory.presentation.api.v1.endpoints.health import router as health_router
from car_inventory.presentation.api.v1.endpoints.auth import router as auth_router
from car_inventory.presentation.api.v1.endpoints.cars import router as cars_router
from car_inventory.presentation.api.v1.endpoints.photos import router as photos_router
from car_inventory.presentation.api.v1.endpoints.catalogs import router as catalogs_router

router = APIRouter(prefix="/api/v1")
router.include_router(health_router)
router.include_router(auth_router)
router.include_router(cars_router)
router.include_router(photos_router)
router.include_router(catalogs_router)
