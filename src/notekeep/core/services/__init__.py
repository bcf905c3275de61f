"""
Service layer interfaces and implementations.
"""

from .interfaces import IAuthService, ISharingService, IUserService

from .auth_service import AuthService
from .context import AuthenticatedUser
from .sharing_service import SharingService
from .user_service import UserService

__all__ = [
    # Interfaces
    "IAuthService",
    "ISharingService",
    "IUserService",

    # Implementations
    "AuthenticatedUser",
    "AuthService",
    "SharingService",
    "UserService",
]
