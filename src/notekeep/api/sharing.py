"""Sharing endpoint."""

from fastapi import APIRouter, Depends, status

from ..core.schemas.sharing import ShareRequest, ShareResult
from ..core.services import AuthenticatedUser, UserService
from ..middleware.auth import get_current_user, get_user_service

router = APIRouter(tags=["sharing"])


@router.post("/share", response_model=ShareResult, status_code=status.HTTP_201_CREATED)
async def share_note(
    request: ShareRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    """Share the caller's note with other users."""
    return await user_service.share(current_user, request.from_user_id, request.to)
