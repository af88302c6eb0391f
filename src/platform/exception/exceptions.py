from typing import Any


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io

    `error_code` is a stable machine-readable kind surfaced next to the message,
    `context` carries extra response fields (e.g. the conflicting reservation id).
    """

    error_code: str = 'error'

    def __init__(
        self, message: str, status_code: int = 500, *, context: dict[str, Any] | None = None
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.context = context or {}
        super().__init__(message)


class DomainError(CustomBaseError):
    error_code = 'domain_error'

    def __init__(self, message: str, status_code: int = 400, **kwargs: Any) -> None:
        super().__init__(message, status_code, **kwargs)


class ForbiddenError(CustomBaseError):
    error_code = 'forbidden'

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, 403, **kwargs)


class NotFoundError(CustomBaseError):
    error_code = 'not_found'

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, 404, **kwargs)


class ConflictError(CustomBaseError):
    """Also raised by repositories when a storage constraint rejects a write"""

    error_code = 'conflict'

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, 409, **kwargs)


class AuthenticationError(CustomBaseError):
    error_code = 'unauthenticated'

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, 401, **kwargs)
