"""Pydantic DTOs (Data Transfer Objects) for the Car feature."""

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field

from car_inventory.domain.entities.car import (
    MAX_EMAIL_LENGTH,
    MAX_ODOMETER,
    MAX_PRICE,
    MAX_TEXT_LENGTH,
    MIN_ODOMETER,
    MIN_YEAR,
    max_year,
)

EMAIL_PATTERN = r"^\S+@\S+\.\S+$"
PHONE_PATTERN = r"^\d{10}$"


def _check_year(value: int) -> int:
    if value > max_year():
        raise ValueError(f"year must be between {MIN_YEAR} and {max_year()}")
    return value


# Upper bound moves with the calendar, so it cannot be a static Field constraint
ModelYear = Annotated[int, AfterValidator(_check_year)]


class CarCreate(BaseModel):
    """Schema for creating a new car listing."""

    brand: str = Field(..., min_length=1, max_length=MAX_TEXT_LENGTH, examples=["Toyota"])
    model: str = Field(..., min_length=1, max_length=MAX_TEXT_LENGTH, examples=["Corolla"])
    year: ModelYear = Field(..., ge=MIN_YEAR, examples=[2020])
    price: int = Field(..., ge=0, le=MAX_PRICE, examples=[250000])
    odometer: int = Field(..., ge=MIN_ODOMETER, le=MAX_ODOMETER, examples=[15000])
    color: str | None = Field(None, max_length=MAX_TEXT_LENGTH, examples=["Red"])
    email: str = Field(
        ..., max_length=MAX_EMAIL_LENGTH, pattern=EMAIL_PATTERN, examples=["seller@example.com"]
    )
    phone: str = Field(..., pattern=PHONE_PATTERN, examples=["1234567890"])

    model_config = {"str_strip_whitespace": True}


class CarUpdate(BaseModel):
    """Schema for updating an existing car — all fields optional."""

    brand: str | None = Field(None, min_length=1, max_length=MAX_TEXT_LENGTH)
    model: str | None = Field(None, min_length=1, max_length=MAX_TEXT_LENGTH)
    year: ModelYear | None = Field(None, ge=MIN_YEAR)
    price: int | None = Field(None, ge=0, le=MAX_PRICE)
    odometer: int | None = Field(None, ge=MIN_ODOMETER, le=MAX_ODOMETER)
    color: str | None = Field(None, max_length=MAX_TEXT_LENGTH)
    email: str | None = Field(None, max_length=MAX_EMAIL_LENGTH, pattern=EMAIL_PATTERN)
    phone: str | None = Field(None, pattern=PHONE_PATTERN)

    model_config = {"str_strip_whitespace": True}


class CarResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    brand: str
    model: str
    year: int
    price: int
    odometer: int
    color: str | None
    email: str
    phone: str
    photo: str | None
    photo_url: str | None = None
    created_by: str | None
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None
    is_deleted: bool

    model_config = {"from_attributes": True}


class PaginationResponse(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int

    model_config = {"from_attributes": True}


class CarPageResponse(BaseModel):
    data: list[CarResponse]
    pagination: PaginationResponse


class CarDeletedResponse(BaseModel):
    id: str
    deleted_at: datetime


class CarStatsResponse(BaseModel):
    total: int
    deleted: int
    active: int
    average_price: float
    average_km: float

    model_config = {"from_attributes": True}
