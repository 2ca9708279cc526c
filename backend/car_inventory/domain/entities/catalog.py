"""Domain entity — reference catalog of brands and their models."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4


@dataclass
class CatalogModel:
    name: str
    is_active: bool = True


@dataclass
class CatalogBrand:
    """A brand with its model list.

    Car listings match brand/model as free text, so nothing here is enforced
    as a foreign key against the inventory.
    """

    brand: str
    models: list[CatalogModel] = field(default_factory=list)
    is_active: bool = True
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def active_model_names(self) -> list[str]:
        return sorted(m.name for m in self.models if m.is_active)

    def has_model(self, name: str) -> bool:
        wanted = name.strip().lower()
        return any(m.name.lower() == wanted for m in self.models)

    def replace_models(self, names: list[str]) -> None:
        """Replace the model list with ``names`` (all active) and re-activate the brand."""
        self.models = [CatalogModel(name=n.strip()) for n in names if n.strip()]
        self.is_active = True
        self.updated_at = datetime.now(timezone.utc)

    def add_model(self, name: str) -> None:
        self.models.append(CatalogModel(name=name.strip()))
        self.updated_at = datetime.now(timezone.utc)
