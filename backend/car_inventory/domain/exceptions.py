"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class EntityValidationError(Exception):
    """Raised when input reaching the domain is malformed or out of range."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class InvalidPhotoError(EntityValidationError):
    """Raised when an uploaded photo has an unsupported type or size."""

    def __init__(self, message: str):
        super().__init__("photo", message)


class InvalidAssetPathError(EntityValidationError):
    """Raised when an asset identifier would resolve outside the asset root."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__("photo", f"invalid asset identifier '{identifier}'")


class BadRequestError(Exception):
    """Raised when a required parameter is present but semantically empty."""


class ConflictError(Exception):
    """Base class for uniqueness and concurrent-modification conflicts."""


class DuplicateEntityError(ConflictError):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class ConcurrentModificationError(ConflictError):
    """Raised when an entity keeps changing underneath a conditional update."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(
            f"{entity_type} with id '{entity_id}' was modified concurrently, retry the request"
        )


class StoreUnavailableError(Exception):
    """Raised when the persistent store times out or cannot be reached.

    Transient: callers may retry. The service layer never retries internally.
    """


class AssetCleanupError(Exception):
    """Raised by photo storage when an asset cannot be deleted.

    Never propagated out of a record operation; the car service logs it.
    """

    def __init__(self, identifier: str, reason: str):
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"Could not delete asset '{identifier}': {reason}")


class AuthenticationError(Exception):
    """Base class for authentication failures (HTTP 401)."""


class InvalidCredentialsError(AuthenticationError):
    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class AccountDisabledError(AuthenticationError):
    def __init__(self) -> None:
        super().__init__("Account is disabled")


class InvalidTokenError(AuthenticationError):
    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message)


class TokenExpiredError(InvalidTokenError):
    def __init__(self) -> None:
        super().__init__("Token has expired")


class PermissionDeniedError(Exception):
    """Raised when an authenticated user lacks the required role."""

    def __init__(self, required_roles: tuple[str, ...]):
        self.required_roles = required_roles
        super().__init__(f"Requires one of roles: {', '.join(required_roles)}")
