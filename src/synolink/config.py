# Settings — environment-driven configuration for the SynoLink server.
# Created: 2026-10-12

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """SynoLink settings.

    Every field can be set through a ``SYNO_*`` environment variable or a
    ``.env`` file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="SYNO_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    host: str = Field(default="localhost", description="NAS host name or address")
    port: int = Field(default=5000, description="NAS DSM HTTP port")

    # Read but not used automatically; login is an explicit tool call.
    username: str = Field(
        default="",
        validation_alias="SYNO_USER",
    )
    password: SecretStr = Field(
        default=SecretStr(""),
        validation_alias="SYNO_PASS",
    )

    poll_interval: float = Field(
        default=0.5, gt=0, description="Seconds between search status polls"
    )
    request_timeout: float | None = Field(
        default=None,
        validation_alias="SYNO_TIMEOUT",
        description="HTTP timeout in seconds (unset = wait indefinitely)",
    )
    log_level: str = Field(default="INFO")

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}/webapi"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once."""
    return Settings()
