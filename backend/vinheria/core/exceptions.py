"""
Typed failures raised by the core services.

Each error carries the HTTP status and the message that is safe to show to
the caller. Routes never build these messages themselves; the handlers
registered in main.py translate them.
"""

from fastapi import status


class VinheriaError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    detail: str = "Request failed"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class DuplicateIdentity(VinheriaError):
    detail = "Email already registered"


class InvalidInput(VinheriaError):
    detail = "Invalid input"


class InvalidAccessToken(VinheriaError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid access token"


class InvalidCredentials(VinheriaError):
    # Same message for unknown email and wrong password
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid credentials"


class NotFound(VinheriaError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found"


class InvalidSession(VinheriaError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Session is missing or expired"


class LoginRequired(VinheriaError):
    """Raised by the access gate dependency; answered with a redirect"""
    status_code = status.HTTP_303_SEE_OTHER
    detail = "Login required"

    def __init__(self, location: str):
        self.location = location
        super().__init__()
