"""Registration, login and token endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from car_inventory.application.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    TokenPayloadResponse,
    TokenVerifyRequest,
    TokenVerifyResponse,
    UserResponse,
)
from car_inventory.application.services import AuthResult, AuthService
from car_inventory.domain.entities import AuthenticatedUser
from car_inventory.domain.exceptions import (
    AuthenticationError,
    DuplicateEntityError,
    EntityNotFoundError,
)
from car_inventory.infrastructure.dependencies import get_auth_service, get_current_user

router = APIRouter(prefix="/auth", tags=["Auth"])


def _to_auth_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(
        user=UserResponse.model_validate(result.user, from_attributes=True),
        token=result.token,
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    try:
        result = await service.register(data)
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return _to_auth_response(result)


@router.post("/login", response_model=AuthResponse)
async def login(
    data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    try:
        result = await service.login(data)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _to_auth_response(result)


@router.get("/profile", response_model=UserResponse)
async def get_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    try:
        profile = await service.get_profile(user.id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return UserResponse.model_validate(profile, from_attributes=True)


@router.post("/verify", response_model=TokenVerifyResponse)
async def verify_token(
    data: TokenVerifyRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenVerifyResponse:
    try:
        identity = service.verify_token(data.token)
    except AuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    return TokenVerifyResponse(
        valid=True,
        payload=TokenPayloadResponse.model_validate(identity, from_attributes=True),
    )
