"""
App configuration - using pydantic settings for env vars
"""

import re
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_UNSAFE_PATH_CHARS = re.compile(r"[/\\]")

# only good for local runs; set TRUSTCHAIN_PRIVATE_KEY anywhere else
DEV_TRUSTCHAIN_PRIVATE_KEY = "dev-trustchain-key-change-in-production"


class Settings(BaseSettings):
    """App settings - loads from .env file"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # basic app stuff
    app_name: str = Field(default="Notekeep API")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)  # set to True for dev

    # server config
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)
    reload: bool = Field(default=False)

    # storage
    data_path: str = Field(default="./data", description="Root folder of the user records")

    # user token issuance
    trustchain_id: str = Field(default="local-trustchain", description="Trustchain ID")
    trustchain_private_key: str = Field(
        default=DEV_TRUSTCHAIN_PRIVATE_KEY, description="Secret used to sign user tokens"
    )
    token_algorithm: str = Field(default="HS256", description="User token signing algorithm")

    # CORS
    cors_origins: list[str] = Field(default=["*"], description="CORS allowed origins")
    cors_allow_credentials: bool = Field(default=False, description="CORS allow credentials")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s", description="Log format"
    )
    log_dir: str = Field(default="logs", description="Folder for rotating log files")
    log_to_file: bool = Field(default=True, description="Write rotating log files")

    # Environment
    environment: str = Field(default="development", description="Environment name")

    @property
    def storage_dir(self) -> Path:
        """One data folder per trustchain, like the original demo server."""
        return Path(self.data_path) / _UNSAFE_PATH_CHARS.sub("_", self.trustchain_id)


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings."""
    return settings
