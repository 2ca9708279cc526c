"""Password hashing backed by passlib."""

from passlib.context import CryptContext

from car_inventory.application.interfaces import PasswordHasher


class PasslibPasswordHasher(PasswordHasher):
    def __init__(self, schemes: tuple[str, ...] = ("pbkdf2_sha256",)):
        self._context = CryptContext(schemes=list(schemes), deprecated="auto")

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return self._context.verify(password, password_hash)
        except (ValueError, TypeError):
            # unrecognised or malformed stored hash
            return False
