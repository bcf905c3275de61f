# Main application entry point
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import auth_router, data_router, health_router, sharing_router, users_router
from .api.error_handlers import register_error_handlers
from .config import DEV_TRUSTCHAIN_PRIVATE_KEY, Settings, get_settings
from .core.errors import ConfigurationError
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .core.repositories import UserRepository
from .core.services import UserService
from .security import TokenIssuer

logger = get_logger("main")


def check_settings(settings: Settings) -> None:
    """Refuse to start without a way to sign user tokens."""
    if not settings.trustchain_private_key:
        raise ConfigurationError("trustchain_private_key", "must not be empty")
    if (
        settings.trustchain_private_key == DEV_TRUSTCHAIN_PRIVATE_KEY
        and settings.environment != "development"
    ):
        logger.warning(
            "Using the development trustchain key",
            extra={"environment": settings.environment},
        )


def create_app(
    settings: Optional[Settings] = None,
    token_issuer: Optional[TokenIssuer] = None,
) -> FastAPI:
    """Build the application around one explicitly constructed store."""
    settings = settings or get_settings()
    check_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Starting Notekeep application",
            extra={
                "version": settings.app_version,
                "environment": settings.environment,
                "storage_dir": str(settings.storage_dir),
            },
        )
        yield
        logger.info("Shutting down Notekeep application")

    app = FastAPI(
        title=settings.app_name,
        description="User records, authentication and note sharing for the notepad demo",
        version=settings.app_version,
        lifespan=lifespan,
    )

    user_repository = UserRepository(settings.storage_dir)
    app.state.settings = settings
    app.state.user_repository = user_repository
    app.state.user_service = UserService(user_repository, settings, token_issuer)

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(auth_router)
    app.include_router(data_router)
    app.include_router(users_router)
    app.include_router(sharing_router)
    app.include_router(health_router)

    @app.get("/")
    async def root():
        return {"message": settings.app_name, "version": settings.app_version}

    return app


def run() -> None:
    """Run the server with uvicorn."""
    import uvicorn

    settings = get_settings()
    setup_logging(settings)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
