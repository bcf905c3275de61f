"""Repository layer for data access."""

from .user_repository import UserRepository, storage_key

__all__ = ["UserRepository", "storage_key"]
