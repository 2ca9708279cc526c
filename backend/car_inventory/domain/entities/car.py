"""Domain entities for the car inventory — records, query parameters and results."""

import math
import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4

from car_inventory.domain.exceptions import EntityValidationError

MIN_YEAR = 1900
MIN_ODOMETER = 100
MAX_ODOMETER = 10_000_000
MAX_PRICE = 1_000_000_000_000
MAX_FILTER_YEAR = 9999
MAX_EMAIL_LENGTH = 255
MAX_TEXT_LENGTH = 50
MAX_PAGE_LIMIT = 100

_EMAIL_RE = re.compile(r"^\S+@\S+\.\S+$")
_PHONE_RE = re.compile(r"^\d{10}$")

# Fields a caller may change through an update; everything else is server-owned.
UPDATABLE_FIELDS = frozenset(
    {"brand", "model", "year", "price", "odometer", "color", "email", "phone", "photo"}
)


def max_year() -> int:
    """Latest accepted model year (next calendar year)."""
    return datetime.now(timezone.utc).year + 1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _require_int(name: str, value: Any, minimum: int, maximum: int | None = None) -> None:
    # bool is an int subclass; floats are never truncated
    if isinstance(value, bool) or not isinstance(value, int):
        raise EntityValidationError(name, "must be an integer")
    if value < minimum:
        raise EntityValidationError(name, f"must be >= {minimum}")
    if maximum is not None and value > maximum:
        raise EntityValidationError(name, f"must be <= {maximum}")


def _require_text(name: str, value: Any, *, required: bool = True) -> None:
    if value is None:
        if required:
            raise EntityValidationError(name, "is required")
        return
    if not isinstance(value, str):
        raise EntityValidationError(name, "must be a string")
    if required and not value.strip():
        raise EntityValidationError(name, "is required")
    if len(value) > MAX_TEXT_LENGTH:
        raise EntityValidationError(name, f"must be at most {MAX_TEXT_LENGTH} characters")


@dataclass
class Car:
    """A single listing in the inventory.

    ``is_deleted`` hides the record from every default read and mutation path;
    only a hard delete can still reach it.
    """

    brand: str
    model: str
    year: int
    price: int
    odometer: int
    email: str
    phone: str
    color: str | None = None
    photo: str | None = None
    id: str = field(default_factory=lambda: str(uuid4()))
    created_by: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    deleted_at: datetime | None = None
    is_deleted: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.brand, str):
            self.brand = self.brand.strip()
        if isinstance(self.model, str):
            self.model = self.model.strip()
        if isinstance(self.color, str):
            self.color = self.color.strip() or None
        if isinstance(self.email, str):
            self.email = self.email.strip().lower()
        if isinstance(self.phone, str):
            self.phone = self.phone.strip()

    def validate(self) -> None:
        """Reject malformed field values with ``EntityValidationError``."""
        _require_text("brand", self.brand)
        _require_text("model", self.model)
        _require_int("year", self.year, MIN_YEAR, max_year())
        _require_int("price", self.price, 0, MAX_PRICE)
        _require_int("odometer", self.odometer, MIN_ODOMETER, MAX_ODOMETER)
        _require_text("color", self.color, required=False)
        if (
            not isinstance(self.email, str)
            or len(self.email) > MAX_EMAIL_LENGTH
            or not _EMAIL_RE.match(self.email)
        ):
            raise EntityValidationError("email", "must be a valid email address")
        if not isinstance(self.phone, str) or not _PHONE_RE.match(self.phone):
            raise EntityValidationError("phone", "must be exactly 10 digits")

    def merged(self, changes: dict[str, Any]) -> "Car":
        """Return a copy with ``changes`` applied over the current values."""
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise EntityValidationError(sorted(unknown)[0], "cannot be updated")
        return replace(self, **changes)


@dataclass(frozen=True)
class CarFilters:
    """Optional listing filters. Blank strings count as absent."""

    brand: str | None = None
    model: str | None = None
    year: int | None = None
    min_price: int | None = None
    max_price: int | None = None
    color: str | None = None

    def normalized(self) -> "CarFilters":
        """Blank text becomes absent; numeric bounds are range-checked."""
        for name, value, maximum in (
            ("year", self.year, MAX_FILTER_YEAR),
            ("min_price", self.min_price, MAX_PRICE),
            ("max_price", self.max_price, MAX_PRICE),
        ):
            if value is not None:
                _require_int(name, value, 0, maximum)
        return CarFilters(
            brand=_blank_to_none(self.brand),
            model=_blank_to_none(self.model),
            year=self.year,
            min_price=self.min_price,
            max_price=self.max_price,
            color=_blank_to_none(self.color),
        )


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class CarSortField(str, Enum):
    PRICE = "price"
    YEAR = "year"
    ODOMETER = "odometer"
    CREATED_AT = "created_at"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class PageRequest:
    """Window and ordering for a paginated listing."""

    page: int = 1
    limit: int = 10
    sort_by: CarSortField = CarSortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC

    def __post_init__(self) -> None:
        _require_int("page", self.page, 1)
        _require_int("limit", self.limit, 1, MAX_PAGE_LIMIT)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class PaginationInfo:
    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, request: PageRequest, total: int) -> "PaginationInfo":
        return cls(
            page=request.page,
            limit=request.limit,
            total=total,
            total_pages=math.ceil(total / request.limit),
        )


@dataclass(frozen=True)
class CarPage:
    """One window of a filtered listing plus its pagination metadata."""

    data: list[Car]
    pagination: PaginationInfo


@dataclass(frozen=True)
class CarStats:
    """Aggregate figures; averages cover active records only."""

    total: int
    deleted: int
    active: int
    average_price: float
    average_km: float
