"""Serves stored car photos."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse

from car_inventory.application.interfaces import PhotoStorage
from car_inventory.domain.exceptions import InvalidAssetPathError
from car_inventory.infrastructure.dependencies import get_photo_storage

router = APIRouter(prefix="/photos", tags=["Photos"])


@router.get("/{filename}")
async def get_photo(
    filename: str,
    storage: PhotoStorage = Depends(get_photo_storage),
) -> FileResponse:
    try:
        path = storage.resolve_path(filename)
    except InvalidAssetPathError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if not path.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Photo not found")
    return FileResponse(path)
