"""Errors raised by the service layer.

Each error carries the HTTP status the API answers with, so routes can
translate them without knowing the concrete type.
"""

from typing import Optional


class ServiceError(Exception):
    """Failure raised by a service; routes map ``status_code`` onto the response."""

    status_code = 500
    default_message = "Service error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(ServiceError):
    """The resource does not exist or belongs to another user."""

    status_code = 404

    def __init__(self, resource: str, resource_id: Optional[str] = None):
        message = f"{resource} not found"
        if resource_id is not None:
            message += f": {resource_id}"
        super().__init__(message)


class ValidationError(ServiceError):
    status_code = 400
    default_message = "Invalid input"


class AuthenticationError(ServiceError):
    status_code = 401
    default_message = "Authentication required"


class AuthorizationError(ServiceError):
    status_code = 403
    default_message = "Not authorized"


class ConflictError(ServiceError):
    status_code = 409
    default_message = "Resource already exists"


class DatabaseError(ServiceError):
    default_message = "Database error"
