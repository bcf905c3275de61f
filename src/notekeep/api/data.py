"""Note payload endpoints."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from ..core.errors import InvalidInputError
from ..core.schemas.common import SuccessResponse
from ..core.services import AuthenticatedUser, UserService
from ..middleware.auth import get_current_user, get_user_service

router = APIRouter(prefix="/data", tags=["data"])


@router.put("", response_model=SuccessResponse)
async def put_data(
    request: Request,
    current_user: AuthenticatedUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    """Store the request body as the caller's note."""
    body = await request.body()
    try:
        data = body.decode("utf-8")
    except UnicodeDecodeError:
        raise InvalidInputError("Note must be UTF-8 text", field="body") from None

    await user_service.put_payload(current_user, data)
    return SuccessResponse(message="Data saved")


@router.delete("", response_model=SuccessResponse)
async def delete_data(
    current_user: AuthenticatedUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    """Remove the caller's note."""
    await user_service.clear_payload(current_user)
    return SuccessResponse(message="Data cleared")


@router.get("/{target_id}", response_class=PlainTextResponse)
async def get_data(
    target_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    """Serve a user's note."""
    payload = await user_service.get_payload(current_user, target_id)
    return PlainTextResponse(payload)
