from .car import (
    Car,
    CarFilters,
    CarPage,
    CarSortField,
    CarStats,
    PageRequest,
    PaginationInfo,
    SortOrder,
)
from .catalog import CatalogBrand, CatalogModel
from .user import AuthenticatedUser, User, UserRole

__all__ = [
    "Car",
    "CarFilters",
    "CarPage",
    "CarSortField",
    "CarStats",
    "PageRequest",
    "PaginationInfo",
    "SortOrder",
    "CatalogBrand",
    "CatalogModel",
    "AuthenticatedUser",
    "User",
    "UserRole",
]
