"""User listing and identity endpoints."""

from typing import List

from fastapi import APIRouter, Depends

from ..core.schemas.users import WhoAmIResponse
from ..core.services import AuthenticatedUser, UserService
from ..middleware.auth import get_current_user, get_user_service

router = APIRouter(tags=["users"])


@router.get("/users", response_model=List[str])
async def list_users(
    current_user: AuthenticatedUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    """List every known user id."""
    return await user_service.list_all_ids(current_user)


@router.get("/me", response_model=WhoAmIResponse)
async def who_am_i(
    current_user: AuthenticatedUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    """Identity and sharing lists of the caller."""
    return await user_service.who_am_i(current_user)
