"""Authentication dependencies.

Credentials come as the ``userId`` and ``password`` query parameters, or as
``userId`` plus an ``Authorization: Bearer <user token>`` header.
"""

from typing import Optional

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..core.services import AuthenticatedUser, UserService


class UserTokenBearer(HTTPBearer):
    """Optional bearer token carrying the user token issued at signup."""

    def __init__(self):
        super().__init__(auto_error=False)

    async def __call__(self, request: Request) -> Optional[str]:
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)
        if credentials and credentials.scheme.lower() == "bearer":
            return credentials.credentials
        return None


def get_user_service(request: Request) -> UserService:
    """User service built by the app factory."""
    return request.app.state.user_service


async def get_current_user(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    password: Optional[str] = Query(default=None),
    token: Optional[str] = Depends(UserTokenBearer()),
    user_service: UserService = Depends(get_user_service),
) -> AuthenticatedUser:
    """Authenticate the request; the password wins when both are given."""
    auth_service = user_service.auth_service
    if password is None and token is not None:
        return await auth_service.authenticate_token(user_id, token)
    return await auth_service.authenticate_password(user_id, password)
