"""
User record model - one durable record per user.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserRecord(BaseModel):
    """Durable per-user record.

    Field aliases are the keys used in the JSON files on disk, so records
    written by the original notepad server keep loading.
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    id: str = Field(min_length=1)
    password_hash: str = Field(alias="hashed_password")
    token: Optional[str] = None

    # None means "no note saved yet", "" is a saved empty note
    payload: Optional[str] = Field(default=None, alias="data")

    # outbound view: users this user shared their note with
    note_recipients: List[str] = Field(default_factory=list, alias="noteRecipients")
    # inbound view: users whose notes this user may read
    accessible_notes: List[str] = Field(default_factory=list, alias="accessibleNotes")

    def __repr__(self) -> str:
        return f"<UserRecord(id='{self.id}')>"

    @property
    def has_payload(self) -> bool:
        return self.payload is not None

    def add_recipient(self, user_id: str) -> bool:
        """Add user_id to note_recipients; False if it was already there."""
        if user_id in self.note_recipients:
            return False
        self.note_recipients = [*self.note_recipients, user_id]
        return True

    def add_accessible_note(self, owner_id: str) -> bool:
        """Add owner_id to accessible_notes; False if it was already there."""
        if owner_id in self.accessible_notes:
            return False
        self.accessible_notes = [*self.accessible_notes, owner_id]
        return True

    def to_storage(self) -> dict:
        """Serialize for disk, dropping absent optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
