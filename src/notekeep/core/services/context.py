"""Per-request authentication context."""

from dataclasses import dataclass

from ..models.user import UserRecord


@dataclass(frozen=True)
class AuthenticatedUser:
    """Handle on the record resolved for the current request.

    Passed explicitly to every service call that needs a caller; it is
    never stored between requests.
    """

    record: UserRecord
    method: str = "password"

    @property
    def user_id(self) -> str:
        return self.record.id
