"""Signup and login endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import PlainTextResponse

from ..core.services import UserService
from ..middleware.auth import get_user_service

router = APIRouter(tags=["authentication"])


@router.get("/signup", response_class=PlainTextResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    password: Optional[str] = Query(default=None),
    user_service: UserService = Depends(get_user_service),
):
    """Create an account and serve its user token."""
    token = await user_service.signup(user_id, password)
    return PlainTextResponse(token, status_code=status.HTTP_201_CREATED)


@router.get("/login", response_class=PlainTextResponse)
async def login(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    password: Optional[str] = Query(default=None),
    user_service: UserService = Depends(get_user_service),
):
    """Serve the user token of an existing account."""
    token = await user_service.login(user_id, password)
    return PlainTextResponse(token)
