"""Abstract interface (port) for the car photo asset store."""

from abc import ABC, abstractmethod
from pathlib import Path


class PhotoStorage(ABC):
    """Stores photo bytes under opaque identifiers.

    Identifiers are plain base filenames. Implementations must reject any
    identifier that would resolve outside their storage root.
    """

    @abstractmethod
    async def store(self, content: bytes, filename: str, content_type: str | None = None) -> str:
        """Persist an upload and return its identifier."""
        ...

    @abstractmethod
    async def delete(self, identifier: str) -> bool:
        """Delete an asset. Returns False if it was already gone.

        Raises:
            AssetCleanupError: the asset exists but could not be removed, or
                the identifier is not a safe asset name.
        """
        ...

    @abstractmethod
    def resolve_path(self, identifier: str) -> Path:
        """Absolute path of an asset inside the storage root."""
        ...

    @abstractmethod
    def resolve_url(self, identifier: str) -> str:
        """Public URL the API serves the asset from."""
        ...
