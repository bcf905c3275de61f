"""Sharing service implementation."""

from typing import List

from ..errors import (
    ForbiddenError,
    InvalidInputError,
    NotekeepError,
    NotFoundError,
    ShareIncompleteError,
)
from ..logging import get_logger
from ..models.user import UserRecord
from ..repositories.user_repository import UserRepository
from ..schemas.sharing import ShareResult
from .context import AuthenticatedUser
from .interfaces import ISharingService

logger = get_logger("services.sharing")


class SharingService(ISharingService):
    """Sharing service implementation.

    A share touches one file per user and is not atomic across them.
    Updates run in a fixed order, owner first then recipients in request
    order, so an interrupted share leaves a predictable state and the
    error names the record that failed.
    """

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def share(
        self, caller: AuthenticatedUser, owner_id: str, recipient_ids: List[str]
    ) -> ShareResult:
        """Share owner's note with other users (set union, idempotent).

        Recipients without an account are still added to the owner's list;
        only the write on their side is skipped, since they have no record.
        """
        if caller.user_id != owner_id:
            logger.warning(
                f"User '{caller.user_id}' tried to share the note of '{owner_id}'"
            )
            raise ForbiddenError("Only the owner can share their note")

        if not await self.user_repo.exists(owner_id):
            raise NotFoundError(f"User '{owner_id}' not found")

        recipients = self._dedupe(recipient_ids)
        unknown = [
            recipient_id
            for recipient_id in recipients
            if recipient_id != owner_id and not await self.user_repo.exists(recipient_id)
        ]
        for recipient_id in unknown:
            logger.warning(f"Sharing with unknown user '{recipient_id}'")

        applied: List[str] = []

        def _add_recipients(owner: UserRecord) -> None:
            for recipient_id in recipients:
                owner.add_recipient(recipient_id)

        await self._apply(owner_id, owner_id, _add_recipients, applied)

        def _add_owner(recipient: UserRecord) -> None:
            recipient.add_accessible_note(owner_id)

        for recipient_id in recipients:
            if recipient_id in unknown:
                continue
            await self._apply(owner_id, recipient_id, _add_owner, applied)

        logger.info(
            f"User '{owner_id}' shared their note",
            extra={"recipients": recipients, "unknown": unknown},
        )
        return ShareResult(owner_id=owner_id, shared_with=recipients, unknown=unknown)

    @staticmethod
    def _dedupe(recipient_ids: List[str]) -> List[str]:
        recipients: List[str] = []
        for recipient_id in recipient_ids:
            if not recipient_id:
                raise InvalidInputError("Recipient id cannot be empty", field="to")
            if recipient_id not in recipients:
                recipients.append(recipient_id)
        return recipients

    async def _apply(self, owner_id: str, user_id: str, change, applied: List[str]) -> None:
        try:
            await self.user_repo.update(user_id, change)
        except NotekeepError as e:
            logger.error(
                f"Share from '{owner_id}' interrupted at '{user_id}'",
                extra={"applied": list(applied), "error_code": e.code},
            )
            raise ShareIncompleteError(owner_id, user_id, applied, e.message) from e
        applied.append(user_id)
