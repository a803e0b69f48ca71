"""Domain exceptions raised by services and rendered by the API layer"""

from fastapi import status


class BlueChainError(Exception):
    """Base exception for all BlueChain service errors"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "An internal server error occurred"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationError(BlueChainError):
    """No session, or the session could not be verified"""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class AuthorizationError(BlueChainError):
    """Valid session but the caller's role may not perform the operation"""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Insufficient permissions"


class ValidationError(BlueChainError):
    """Malformed or missing input"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"

    def __init__(self, message: str = None, field: str = None):
        self.field = field
        super().__init__(message)


class NotFoundError(BlueChainError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ConflictError(BlueChainError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource conflict"


class RateLimitError(BlueChainError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_message = "Too many requests"


class StoreError(BlueChainError):
    """Database failure; the driver's message is passed through verbatim"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class StorageServiceError(BlueChainError):
    """Object storage (S3) failure"""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Media storage is unavailable"
