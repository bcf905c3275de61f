"""
Data models for Notekeep.

    - UserRecord: the single durable record kept per user (credentials,
      token, note payload and sharing lists)
"""

from .user import UserRecord

__all__ = ["UserRecord"]
