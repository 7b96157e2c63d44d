# backend/exceptions.py
"""
Application exceptions.

Raised by the service layer and the token dependency; translated into HTTP
responses by the handlers registered in ``main.register_exception_handlers``.
Services never build responses themselves.
"""

from typing import Iterable, List, Optional


class DelegationAppError(Exception):
    status_code: int = 500
    message: str = "Server error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationFailed(DelegationAppError):
    """Missing or malformed input (400). Carries the offending field names."""

    status_code = 400
    message = "Missing fields"

    def __init__(self, fields: Iterable[str] = (), message: Optional[str] = None):
        self.fields: List[str] = list(fields)
        super().__init__(message)


class MissingToken(DelegationAppError):
    status_code = 401
    message = "No token provided"


class InvalidToken(DelegationAppError):
    status_code = 403
    message = "Invalid token"


class InvalidCredentials(DelegationAppError):
    # Same outward response whether the email is unknown or the password wrong
    status_code = 401
    message = "Invalid credentials"


class InvalidCurrentPassword(DelegationAppError):
    status_code = 401
    message = "Invalid current password"


class EmailAlreadyExists(DelegationAppError):
    status_code = 409
    message = "Email already exists"


class NotFound(DelegationAppError):
    status_code = 404

    def __init__(self, resource: str = "Resource"):
        self.resource = resource
        super().__init__(f"{resource} not found")
