"""
Pydantic schemas for API requests and responses.
"""

from .common import ErrorResponse, HealthCheckResponse, SuccessResponse
from .sharing import ShareRequest, ShareResult
from .users import WhoAmIResponse

__all__ = [
    "ShareRequest",
    "ShareResult",
    "WhoAmIResponse",
    "ErrorResponse",
    "SuccessResponse",
    "HealthCheckResponse",
]
