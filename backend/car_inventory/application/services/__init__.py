from .auth_service import AuthResult, AuthService
from .car_service import CarService
from .catalog_service import CatalogService

__all__ = [
    "AuthResult",
    "AuthService",
    "CarService",
    "CatalogService",
]
