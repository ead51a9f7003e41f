class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, code: str) -> None:
        self.message = message
        self.code = code
        super().__init__(message)


class AuthRequiredError(CustomBaseError):
    def __init__(self, message: str = 'AUTH_REQUIRED') -> None:
        super().__init__(message, 'AUTH_REQUIRED')


class AdminRequiredError(CustomBaseError):
    def __init__(self, message: str = 'ADMIN_REQUIRED') -> None:
        super().__init__(message, 'ADMIN_REQUIRED')


class InvalidFormatError(CustomBaseError):
    def __init__(self, message: str = 'INVALID_FORMAT') -> None:
        super().__init__(message, 'INVALID_FORMAT')


class InvalidCommandError(CustomBaseError):
    def __init__(self, message: str = 'INVALID_COMMAND') -> None:
        super().__init__(message, 'INVALID_COMMAND')


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 'NOT_FOUND')


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 'CONFLICT')


class ValidationFailedError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 'VALIDATION_FAILED')


class ExpiredWindowError(CustomBaseError):
    def __init__(self, message: str = 'Showtime has already started') -> None:
        super().__init__(message, 'EXPIRED_WINDOW')


class SeatOutOfRangeError(ValidationFailedError, IndexError):
    """Raised by the seat grid for coordinates outside its bounds (never clamped)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str = 'Invalid credentials') -> None:
        super().__init__(message, 'AUTHENTICATION_FAILED')


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 'FORBIDDEN')
