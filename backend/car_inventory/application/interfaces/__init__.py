from .car_repository import CarRepository
from .catalog_repository import CatalogRepository
from .user_repository import UserRepository
from .photo_storage import PhotoStorage
from .password_hasher import PasswordHasher
from .token_service import TokenService

__all__ = [
    "CarRepository",
    "CatalogRepository",
    "UserRepository",
    "PhotoStorage",
    "PasswordHasher",
    "TokenService",
]
