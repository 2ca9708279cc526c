"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator, Awaitable, Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from car_inventory.config import get_settings
from car_inventory.application.interfaces import PhotoStorage, TokenService
from car_inventory.application.services import AuthService, CarService, CatalogService
from car_inventory.domain.entities import AuthenticatedUser
from car_inventory.domain.exceptions import (
    InvalidTokenError,
    PermissionDeniedError,
    TokenExpiredError,
)
from car_inventory.infrastructure.database.session import get_db_session
from car_inventory.infrastructure.database.repositories import (
    SQLAlchemyCarRepository,
    SQLAlchemyCatalogRepository,
    SQLAlchemyUserRepository,
)
from car_inventory.infrastructure.security import JWTTokenService, PasslibPasswordHasher
from car_inventory.infrastructure.storage.local_photo_storage import LocalPhotoStorage

bearer_scheme = HTTPBearer(auto_error=False)


def get_photo_storage() -> PhotoStorage:
    settings = get_settings()
    return LocalPhotoStorage(
        upload_dir=settings.upload_dir,
        url_prefix=settings.photo_url_prefix,
        max_size=settings.max_upload_size_bytes,
    )


def get_token_service() -> TokenService:
    settings = get_settings()
    return JWTTokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_minutes=settings.jwt_expires_minutes,
    )


async def get_car_service(
    session: AsyncSession = Depends(get_db_session),
    photo_storage: PhotoStorage = Depends(get_photo_storage),
) -> AsyncGenerator[CarService, None]:
    """Provides a CarService with its repository and photo storage wired up."""
    repository = SQLAlchemyCarRepository(session)
    yield CarService(repository, photo_storage)


async def get_catalog_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[CatalogService, None]:
    """Provides a CatalogService instance with its repository wired up."""
    repository = SQLAlchemyCatalogRepository(session)
    yield CatalogService(repository)


async def get_auth_service(
    session: AsyncSession = Depends(get_db_session),
    token_service: TokenService = Depends(get_token_service),
) -> AsyncGenerator[AuthService, None]:
    """Provides an AuthService with user storage, hashing and tokens wired up."""
    repository = SQLAlchemyUserRepository(session)
    yield AuthService(repository, PasslibPasswordHasher(), token_service)


# ── Authentication ──────────────────────────────────────────────────


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    token_service: TokenService = Depends(get_token_service),
) -> AuthenticatedUser:
    """Extract and verify the bearer token.

    Usage in routes:
        @router.get("/protected")
        async def protected(user: AuthenticatedUser = Depends(get_current_user)):
            ...
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return token_service.verify_access_token(credentials.credentials)
    except TokenExpiredError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    except InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


def _ensure_role(user: AuthenticatedUser, roles: tuple[str, ...]) -> None:
    if user.role.value not in roles:
        raise PermissionDeniedError(roles)


def require_role(*roles: str) -> Callable[..., Awaitable[AuthenticatedUser]]:
    """Dependency factory: the current user must hold one of ``roles``."""

    async def _check_role(
        user: AuthenticatedUser = Depends(get_current_user),
    ) -> AuthenticatedUser:
        try:
            _ensure_role(user, roles)
        except PermissionDeniedError as e:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
        return user

    return _check_role
