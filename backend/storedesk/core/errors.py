"""Error taxonomy shared by services and the API layer."""

from fastapi import status


class StoreDeskError(Exception):
    """Base exception for all storedesk errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(StoreDeskError):
    """No credential was supplied."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class Forbidden(StoreDeskError):
    """Credential is invalid, or the role may not perform the action."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFound(StoreDeskError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InvalidInput(StoreDeskError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class InvalidStatus(InvalidInput):
    def __init__(self, value: str, allowed: list[str]):
        self.value = value
        self.allowed = allowed
        super().__init__(f"Invalid status '{value}'. Allowed: {', '.join(allowed)}")


class Conflict(StoreDeskError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class Unavailable(StoreDeskError):
    """The database (or another backing service) cannot be reached."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Service temporarily unavailable, please retry"


# ── Token errors (raised by core.security, mapped to Forbidden by core.deps) ──
class AuthError(StoreDeskError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid token"


class TokenExpired(AuthError):
    default_message = "Token has expired"


class InvalidToken(AuthError):
    default_message = "Token is malformed or has an invalid signature"
