"""
Application error taxonomy.

Each error carries the HTTP status used by the REST surface and a short
machine-readable code exposed as a GraphQL error extension.
"""
from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    message: str = "Request failed"

    def __init__(self, message: str = None):
        self.message = message or self.message
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return type(self).__name__

    @property
    def extensions(self) -> dict:
        return {"code": self.code}


class DuplicateEmail(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Email already in use"


class InvalidCredentials(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials"


class AuthenticationRequired(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Authentication required"


class AccessDenied(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Access denied"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class InvalidTimeRange(AppError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    message = "End time must be after start time"


class InvalidInput(AppError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    message = "Invalid input"


class RateLimited(AppError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    message = "Too many requests. Please try again later."


# Location prefixes FastAPI adds in front of the field name
_REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def format_validation_error(errors: list) -> str:
    """Render the first pydantic error as 'Invalid <field>: <message>'."""
    if not errors:
        return InvalidInput.message
    error = errors[0]
    loc = error.get("loc") or ()
    if loc and loc[0] in _REQUEST_LOCATIONS:
        loc = loc[1:]
    field = ".".join(str(part) for part in loc) or "request"
    return f"Invalid {field}: {error.get('msg', 'invalid value')}"
