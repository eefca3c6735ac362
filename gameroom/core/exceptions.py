"""Custom exceptions shared across layers. The API layer maps each of these to an error response."""


class GameRoomError(Exception):
    """Top-level exception for anything the service refuses to do."""


class ValidationError(GameRoomError):
    """A required field is missing or empty."""


class NotFoundError(GameRoomError):
    """No record stored under the requested identifier."""


class AuthorizationError(GameRoomError):
    """Caller lacks the required role (owner, member or sender)."""


class MissingIdentityError(AuthorizationError):
    """Request arrived without any caller identity."""


class ConflictError(GameRoomError):
    """Request clashes with the current state (e.g. member already present)."""


class DuplicateKeyError(ConflictError):
    """Identifier already taken in the store."""


class StoreError(GameRoomError):
    """Underlying persistence operation failed."""
