"""
Sharing schemas.

The request body keeps the original wire format: {"from": id, "to": [ids]}.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ShareRequest(BaseModel):
    """Owner shares their note with recipients."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"example": {"from": "bob", "to": ["alice"]}},
    )

    from_user_id: str = Field(alias="from", min_length=1, description="Note owner")
    to: List[str] = Field(description="Recipient user ids")


class ShareResult(BaseModel):
    """Outcome of a share request."""

    owner_id: str
    shared_with: List[str] = Field(default_factory=list, description="Recipients added to the owner's list")
    unknown: List[str] = Field(default_factory=list, description="Recipients with no account yet")
