from .jwt_token_service import JWTTokenService
from .password_hasher import PasslibPasswordHasher

__all__ = [
    "JWTTokenService",
    "PasslibPasswordHasher",
]
