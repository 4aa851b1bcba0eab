"""
Application exceptions.

HTTP-facing errors subclass HTTPException and carry a {code, message} detail.
Store-level failures are plain exceptions and surface as 500s.
"""
from typing import Optional
from fastapi import HTTPException, status


class AppHTTPException(HTTPException):
    code: str = "ERROR"
    status_code_default: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(
            status_code=status_code or self.status_code_default,
            detail={"code": self.code, "message": message},
        )
        self.message = message


class NotFound(AppHTTPException):
    code = "NOT_FOUND"
    status_code_default = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} not found")


class ValidationFailed(AppHTTPException):
    code = "INVALID_REQUEST"
    status_code_default = status.HTTP_400_BAD_REQUEST


class AlreadyExists(AppHTTPException):
    code = "ALREADY_EXISTS"
    status_code_default = status.HTTP_409_CONFLICT

    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} already exists")


class AlreadyActivated(AppHTTPException):
    code = "ALREADY_ACTIVATED"
    status_code_default = status.HTTP_409_CONFLICT

    def __init__(self):
        super().__init__("Postcard has already been activated")


class UpstreamAuthError(AppHTTPException):
    """The identity provider rejected or failed a handshake step."""

    code = "UPSTREAM_AUTH_ERROR"
    status_code_default = status.HTTP_502_BAD_GATEWAY

    def __init__(self, stage: str, message: str, status_code: Optional[int] = None):
        super().__init__(message, status_code=status_code)
        self.stage = stage


class NotAuthenticated(AppHTTPException):
    code = "NOT_AUTHENTICATED"
    status_code_default = status.HTTP_401_UNAUTHORIZED

    def __init__(self):
        super().__init__("Not authenticated")


class SessionExpired(AppHTTPException):
    code = "SESSION_EXPIRED"
    status_code_default = status.HTTP_401_UNAUTHORIZED

    def __init__(self):
        super().__init__("Session expired or invalid")


class StoreFailure(Exception):
    """The database did not confirm a write."""


class DataIntegrityError(Exception):
    """A joined row is missing data its constraints guarantee."""
