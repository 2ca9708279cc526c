"""Brand/model catalog endpoints. Reads are public, writes need a token."""

from fastapi import APIRouter, Depends, HTTPException, status

from car_inventory.application.schemas.catalog import (
    AddModelRequest,
    BrandListResponse,
    CatalogBrandResponse,
    CatalogListResponse,
    CatalogUpsertRequest,
    ModelListResponse,
    YearListResponse,
)
from car_inventory.application.services import CatalogService
from car_inventory.domain.entities import AuthenticatedUser
from car_inventory.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from car_inventory.infrastructure.dependencies import get_catalog_service, get_current_user

router = APIRouter(prefix="/catalogs", tags=["Catalogs"])


@router.get("", response_model=CatalogListResponse)
async def list_catalogs(
    service: CatalogService = Depends(get_catalog_service),
) -> CatalogListResponse:
    catalogs = await service.list_catalogs()
    return CatalogListResponse(
        catalogs=[CatalogBrandResponse.model_validate(c, from_attributes=True) for c in catalogs]
    )


@router.get("/brands", response_model=BrandListResponse)
async def list_brands(
    service: CatalogService = Depends(get_catalog_service),
) -> BrandListResponse:
    return BrandListResponse(brands=await service.list_brands())


@router.get("/models/{brand}", response_model=ModelListResponse)
async def list_models(
    brand: str,
    service: CatalogService = Depends(get_catalog_service),
) -> ModelListResponse:
    try:
        models = await service.list_models(brand)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ModelListResponse(brand=brand, models=models)


@router.get("/years", response_model=YearListResponse)
async def list_years(
    service: CatalogService = Depends(get_catalog_service),
) -> YearListResponse:
    return YearListResponse(years=service.list_years())


@router.post("", response_model=CatalogBrandResponse, status_code=status.HTTP_201_CREATED)
async def upsert_catalog(
    data: CatalogUpsertRequest,
    _user: AuthenticatedUser = Depends(get_current_user),
    service: CatalogService = Depends(get_catalog_service),
) -> CatalogBrandResponse:
    """Create a brand, or replace the models of an existing one."""
    catalog, _created = await service.upsert_catalog(data)
    return CatalogBrandResponse.model_validate(catalog, from_attributes=True)


@router.post("/{brand}/models", response_model=CatalogBrandResponse)
async def add_model(
    brand: str,
    data: AddModelRequest,
    _user: AuthenticatedUser = Depends(get_current_user),
    service: CatalogService = Depends(get_catalog_service),
) -> CatalogBrandResponse:
    try:
        catalog = await service.add_model(brand, data.model)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return CatalogBrandResponse.model_validate(catalog, from_attributes=True)


@router.post("/initialize", status_code=status.HTTP_201_CREATED)
async def initialize_catalogs(
    _user: AuthenticatedUser = Depends(get_current_user),
    service: CatalogService = Depends(get_catalog_service),
) -> dict:
    """Load the default brands, restoring their default models."""
    added = await service.initialize_catalogs()
    return {"message": "Default catalogs loaded", "added": added}
