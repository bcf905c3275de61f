"""Middleware for authentication and other cross-cutting concerns."""

from .auth import UserTokenBearer, get_current_user, get_user_service

__all__ = ["get_current_user", "get_user_service", "UserTokenBearer"]
