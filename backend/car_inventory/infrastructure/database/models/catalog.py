"""SQLAlchemy ORM model for the brand/model catalog."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from car_inventory.infrastructure.database.base import Base


class CatalogBrandModel(Base):
    """ORM model — maps to the 'catalog_brands' table.

    ``models`` holds ``[{"name": ..., "is_active": ...}, ...]``.
    """

    __tablename__ = "catalog_brands"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    brand: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    models: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<CatalogBrandModel(brand='{self.brand}')>"
