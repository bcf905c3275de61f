"""API routers for Notekeep."""

from .auth import router as auth_router
from .data import router as data_router
from .health import router as health_router
from .sharing import router as sharing_router
from .users import router as users_router

__all__ = ["auth_router", "data_router", "users_router", "sharing_router", "health_router"]
