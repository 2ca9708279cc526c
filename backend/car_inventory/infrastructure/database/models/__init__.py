from .car import CarModel
from .catalog import CatalogBrandModel
from .user import UserModel

__all__ = [
    "CarModel",
    "CatalogBrandModel",
    "UserModel",
]
