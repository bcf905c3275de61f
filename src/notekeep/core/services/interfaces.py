"""
Service interfaces for Notekeep.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..schemas.sharing import ShareResult
from ..schemas.users import WhoAmIResponse
from .context import AuthenticatedUser


class IAuthService(ABC):
    """Authentication gate in front of every data access."""

    @abstractmethod
    async def authenticate_password(self, user_id: str, password: Optional[str]) -> AuthenticatedUser:
        """Resolve a user from id and password."""
        pass

    @abstractmethod
    async def authenticate_token(self, user_id: str, token: Optional[str]) -> AuthenticatedUser:
        """Resolve a user from id and bearer token."""
        pass


class ISharingService(ABC):
    """Keeps noteRecipients and accessibleNotes symmetric."""

    @abstractmethod
    async def share(
        self, caller: AuthenticatedUser, owner_id: str, recipient_ids: List[str]
    ) -> ShareResult:
        """Share owner's note with recipients."""
        pass


class IUserService(ABC):
    """Operations exposed to the transport layer."""

    @abstractmethod
    async def signup(self, user_id: str, password: Optional[str]) -> str:
        """Create an account and return its user token."""
        pass

    @abstractmethod
    async def login(self, user_id: str, password: Optional[str]) -> str:
        """Return the user token stored at signup."""
        pass

    @abstractmethod
    async def get_payload(self, caller: AuthenticatedUser, target_id: str) -> str:
        """Read a user's note."""
        pass

    @abstractmethod
    async def put_payload(self, caller: AuthenticatedUser, data: str) -> None:
        """Store the caller's note."""
        pass

    @abstractmethod
    async def clear_payload(self, caller: AuthenticatedUser) -> None:
        """Remove the caller's note."""
        pass

    @abstractmethod
    async def list_all_ids(self, caller: AuthenticatedUser) -> List[str]:
        """List every known user id."""
        pass

    @abstractmethod
    async def share(
        self, caller: AuthenticatedUser, owner_id: str, recipient_ids: List[str]
    ) -> ShareResult:
        """Share the caller's note."""
        pass

    @abstractmethod
    async def who_am_i(self, caller: AuthenticatedUser) -> WhoAmIResponse:
        """Public view of the caller's record."""
        pass
