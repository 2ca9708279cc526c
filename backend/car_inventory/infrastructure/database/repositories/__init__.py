from .car_repository import SQLAlchemyCarRepository
from .catalog_repository import SQLAlchemyCatalogRepository
from .user_repository import SQLAlchemyUserRepository

__all__ = [
    "SQLAlchemyCarRepository",
    "SQLAlchemyCatalogRepository",
    "SQLAlchemyUserRepository",
]
