"""
Route dependencies for endpoints that need a signed-in user.

SessionMiddleware has already resolved the bearer token; these only decide
between "no token" and "token that no longer maps to a session".
"""
from fastapi import Depends, Request
from fastapi.security import HTTPBearer
from app.core.exceptions import NotAuthenticated, SessionExpired
from app.schema.user import UserRead

# Documents the Authorization header in OpenAPI; errors are raised below
bearer_scheme = HTTPBearer(
    scheme_name="Bearer",
    description="Token returned by POST /api/auth/twitter/callback",
    auto_error=False,
)


def session_token(request: Request, _=Depends(bearer_scheme)) -> str:
    if not request.state.token:
        raise NotAuthenticated()
    return request.state.token


def current_user(request: Request, token: str = Depends(session_token)) -> UserRead:
    """The user snapshot stored at login."""
    if not request.state.session:
        raise SessionExpired()
    return UserRead.model_validate(request.state.session)
