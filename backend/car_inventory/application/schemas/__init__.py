from .auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    TokenPayloadResponse,
    TokenVerifyRequest,
    TokenVerifyResponse,
    UserResponse,
)
from .car import (
    CarCreate,
    CarDeletedResponse,
    CarPageResponse,
    CarResponse,
    CarStatsResponse,
    CarUpdate,
    PaginationResponse,
)
from .catalog import (
    AddModelRequest,
    BrandListResponse,
    CatalogBrandResponse,
    CatalogListResponse,
    CatalogModelSchema,
    CatalogUpsertRequest,
    ModelListResponse,
    YearListResponse,
)

__all__ = [
    "AuthResponse",
    "LoginRequest",
    "RegisterRequest",
    "TokenPayloadResponse",
    "TokenVerifyRequest",
    "TokenVerifyResponse",
    "UserResponse",
    "CarCreate",
    "CarDeletedResponse",
    "CarPageResponse",
    "CarResponse",
    "CarStatsResponse",
    "CarUpdate",
    "PaginationResponse",
    "AddModelRequest",
    "BrandListResponse",
    "CatalogBrandResponse",
    "CatalogListResponse",
    "CatalogModelSchema",
    "CatalogUpsertRequest",
    "ModelListResponse",
    "YearListResponse",
]
