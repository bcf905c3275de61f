"""User-facing views of a record. Never carry the password hash or token."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from ..models.user import UserRecord


class WhoAmIResponse(BaseModel):
    """Identity and sharing lists of the authenticated user."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    note_recipients: List[str] = Field(default_factory=list, alias="noteRecipients")
    accessible_notes: List[str] = Field(default_factory=list, alias="accessibleNotes")

    @classmethod
    def from_record(cls, record: UserRecord) -> "WhoAmIResponse":
        return cls(
            id=record.id,
            note_recipients=list(record.note_recipients),
            accessible_notes=list(record.accessible_notes),
        )
