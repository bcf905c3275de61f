"""
Notekeep Backend - user record store for an end-to-end encrypted notepad

Keeps one record per user (password hash, user token, note payload and the
two sharing lists) and serves them over a small HTTP API.

Version: 1.0.0
"""

__version__ = "1.0.0"
