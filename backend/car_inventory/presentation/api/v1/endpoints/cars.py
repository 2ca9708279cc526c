"""Car inventory endpoints — listing, lifecycle and search."""

import logging

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    Query,
    UploadFile,
    status,
)
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from car_inventory.config import get_settings
from car_inventory.application.schemas.car import (
    CarCreate,
    CarDeletedResponse,
    CarPageResponse,
    CarResponse,
    CarStatsResponse,
    CarUpdate,
    PaginationResponse,
)
from car_inventory.application.services import CarService
from car_inventory.domain.entities import (
    AuthenticatedUser,
    Car,
    CarFilters,
    CarSortField,
    PageRequest,
    SortOrder,
)
from car_inventory.domain.entities.car import MAX_FILTER_YEAR, MAX_PAGE_LIMIT, MAX_PRICE
from car_inventory.domain.exceptions import (
    BadRequestError,
    ConflictError,
    EntityNotFoundError,
    EntityValidationError,
)
from car_inventory.infrastructure.dependencies import (
    get_car_service,
    get_current_user,
    require_role,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cars", tags=["Cars"])


# ── Helpers ──────────────────────────────────────────────────────────

def _to_response(car: Car, service: CarService) -> CarResponse:
    response = CarResponse.model_validate(car, from_attributes=True)
    return response.model_copy(update={"photo_url": service.photo_url(car)})


def _parse_form(schema: type[BaseModel], fields: dict) -> BaseModel:
    """Validate multipart form fields against a DTO; failures become a 422."""
    try:
        return schema(**fields)
    except ValidationError as e:
        raise RequestValidationError(
            e.errors(include_url=False, include_context=False)
        ) from e


async def _store_upload(photo: UploadFile | None, service: CarService) -> str | None:
    if photo is None or not photo.filename:
        return None
    limit = get_settings().max_upload_size_bytes
    # never buffer more than one byte past the limit
    content = await photo.read(limit + 1)
    if len(content) > limit:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"photo exceeds the maximum size of {limit} bytes",
        )
    try:
        return await service.store_photo(content, photo.filename, photo.content_type)
    except EntityValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


# ── Queries ──────────────────────────────────────────────────────────

@router.get("", response_model=CarPageResponse)
async def list_cars(
    brand: str | None = Query(None, description="Substring match on brand"),
    model: str | None = Query(None, description="Substring match on model"),
    year: int | None = Query(None, ge=0, le=MAX_FILTER_YEAR, description="Exact model year"),
    min_price: int | None = Query(None, ge=0, le=MAX_PRICE),
    max_price: int | None = Query(None, ge=0, le=MAX_PRICE),
    color: str | None = Query(None, description="Substring match on color"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=MAX_PAGE_LIMIT),
    sort_by: CarSortField = Query(CarSortField.CREATED_AT),
    sort_order: SortOrder = Query(SortOrder.DESC),
    _user: AuthenticatedUser = Depends(get_current_user),
    service: CarService = Depends(get_car_service),
) -> CarPageResponse:
    """Retrieve a filtered, sorted page of active cars."""
    filters = CarFilters(
        brand=brand,
        model=model,
        year=year,
        min_price=min_price,
        max_price=max_price,
        color=color,
    )
    try:
        result = await service.list_cars(
            filters,
            PageRequest(page=page, limit=limit, sort_by=sort_by, sort_order=sort_order),
        )
    except EntityValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return CarPageResponse(
        data=[_to_response(car, service) for car in result.data],
        pagination=PaginationResponse.model_validate(result.pagination, from_attributes=True),
    )


@router.get("/stats", response_model=CarStatsResponse)
async def get_stats(
    _user: AuthenticatedUser = Depends(get_current_user),
    service: CarService = Depends(get_car_service),
) -> CarStatsResponse:
    stats = await service.get_stats()
    return CarStatsResponse.model_validate(stats, from_attributes=True)


@router.get("/search", response_model=list[CarResponse])
async def search_cars(
    q: str | None = Query(None, description="Matched against brand, model and color"),
    _user: AuthenticatedUser = Depends(get_current_user),
    service: CarService = Depends(get_car_service),
) -> list[CarResponse]:
    try:
        cars = await service.search_cars(q)
    except BadRequestError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return [_to_response(car, service) for car in cars]


@router.get("/{car_id}", response_model=CarResponse)
async def get_car(
    car_id: str,
    _user: AuthenticatedUser = Depends(get_current_user),
    service: CarService = Depends(get_car_service),
) -> CarResponse:
    """Retrieve a single active car by ID."""
    try:
        car = await service.get_car(car_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(car, service)


# ── Lifecycle ────────────────────────────────────────────────────────

@router.post("", response_model=CarResponse, status_code=status.HTTP_201_CREATED)
async def create_car(
    brand: str = Form(...),
    model: str = Form(...),
    year: int = Form(...),
    price: int = Form(...),
    odometer: int = Form(...),
    email: str = Form(...),
    phone: str = Form(...),
    color: str | None = Form(None),
    photo: UploadFile | None = File(None),
    user: AuthenticatedUser = Depends(get_current_user),
    service: CarService = Depends(get_car_service),
) -> CarResponse:
    """Create a listing from a multipart form with an optional photo."""
    data = _parse_form(
        CarCreate,
        {
            "brand": brand,
            "model": model,
            "year": year,
            "price": price,
            "odometer": odometer,
            "email": email,
            "phone": phone,
            "color": color,
        },
    )
    photo_id = await _store_upload(photo, service)
    try:
        car = await service.create_car(data, photo=photo_id, created_by=user.id)
    except EntityValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _to_response(car, service)


@router.put("/{car_id}", response_model=CarResponse)
async def update_car(
    car_id: str,
    brand: str | None = Form(None),
    model: str | None = Form(None),
    year: int | None = Form(None),
    price: int | None = Form(None),
    odometer: int | None = Form(None),
    email: str | None = Form(None),
    phone: str | None = Form(None),
    color: str | None = Form(None),
    photo: UploadFile | None = File(None),
    _user: AuthenticatedUser = Depends(get_current_user),
    service: CarService = Depends(get_car_service),
) -> CarResponse:
    """Partially update an active car; a new photo replaces the old one."""
    data = _parse_form(
        CarUpdate,
        {
            "brand": brand,
            "model": model,
            "year": year,
            "price": price,
            "odometer": odometer,
            "email": email,
            "phone": phone,
            "color": color,
        },
    )
    photo_id = await _store_upload(photo, service)
    try:
        car = await service.update_car(car_id, data, photo=photo_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except EntityValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return _to_response(car, service)


@router.delete("/{car_id}", response_model=CarDeletedResponse)
async def delete_car(
    car_id: str,
    _user: AuthenticatedUser = Depends(get_current_user),
    service: CarService = Depends(get_car_service),
) -> CarDeletedResponse:
    """Soft-delete a car. Deleting it again returns 404."""
    try:
        car = await service.delete_car(car_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return CarDeletedResponse(id=car.id, deleted_at=car.deleted_at)


@router.delete("/{car_id}/purge", status_code=status.HTTP_204_NO_CONTENT)
async def purge_car(
    car_id: str,
    _admin: AuthenticatedUser = Depends(require_role("admin")),
    service: CarService = Depends(get_car_service),
) -> None:
    """Permanently remove a car, deleted or not."""
    try:
        await service.purge_car(car_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
