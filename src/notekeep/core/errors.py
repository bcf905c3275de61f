"""Error hierarchy - typed exceptions for every failure the record store can report.

Client errors (4xx) are user-correctable; server errors (5xx) signal store
integrity or I/O trouble. The API layer turns all of them into a structured
response, none of them stops the process.
"""

from typing import Any, Optional


class NotekeepError(Exception):
    """Base exception for all Notekeep errors."""

    def __init__(
        self,
        message: str,
        code: str,
        http_status: int = 500,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status
        self.details = details or {}

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {"error": self.code, "message": self.message, "details": self.details}


# ─── Client errors (400-level) ───────────────────────────────────

class InvalidInputError(NotekeepError):
    """Missing or malformed request field."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, "INVALID_INPUT", 400, {"field": field} if field else None)
        self.field = field


class NotFoundError(NotekeepError):
    """Unknown user, or user without a stored payload."""

    def __init__(self, message: str = "Not found"):
        super().__init__(message, "NOT_FOUND", 404)


class ConflictError(NotekeepError):
    """User id already taken."""

    def __init__(self, user_id: str):
        super().__init__(f"User '{user_id}' already exists", "CONFLICT", 409)
        self.user_id = user_id


class InvalidCredentialsError(NotekeepError):
    """Wrong password or token."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, "INVALID_CREDENTIALS", 401)


class ForbiddenError(NotekeepError):
    """Authenticated user acting on someone else's behalf."""

    def __init__(self, message: str):
        super().__init__(message, "FORBIDDEN", 401)


# ─── Server errors (500-level) ───────────────────────────────────

class CorruptRecordError(NotekeepError):
    """Durable record exists but cannot be parsed."""

    def __init__(self, user_id: str, resource: str, reason: str):
        super().__init__(
            f"Corrupted record for user '{user_id}' in {resource}: {reason}",
            "CORRUPT_RECORD",
            500,
            {"user_id": user_id, "resource": resource},
        )
        self.user_id = user_id
        self.resource = resource


class StoreUnavailableError(NotekeepError):
    """Reading or writing a record failed at the I/O level."""

    def __init__(self, operation: str, resource: str, reason: str):
        super().__init__(
            f"Storage {operation} failed for {resource}: {reason}",
            "STORE_UNAVAILABLE",
            500,
            {"operation": operation, "resource": resource},
        )
        self.operation = operation
        self.resource = resource


class ShareIncompleteError(NotekeepError):
    """A share stopped half-way; lists which records were already updated."""

    def __init__(self, owner_id: str, failed_id: str, applied: list[str], reason: str):
        super().__init__(
            f"Sharing from '{owner_id}' failed while updating '{failed_id}': {reason}",
            "SHARE_INCOMPLETE",
            500,
            {"owner_id": owner_id, "failed_id": failed_id, "applied": list(applied)},
        )
        self.owner_id = owner_id
        self.failed_id = failed_id
        self.applied = list(applied)


class ConfigurationError(NotekeepError):
    """Settings the service cannot start with."""

    def __init__(self, setting: str, reason: str):
        super().__init__(
            f"Invalid setting '{setting}': {reason}",
            "CONFIGURATION_ERROR",
            500,
            {"setting": setting},
        )
        self.setting = setting


class TokenIssuanceError(NotekeepError):
    """External token issuer could not produce a user token."""

    def __init__(self, user_id: str, reason: str):
        super().__init__(
            f"Could not generate a user token for '{user_id}': {reason}",
            "TOKEN_ISSUANCE_FAILED",
            500,
        )
