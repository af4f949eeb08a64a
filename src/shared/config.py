"""Environment-driven settings using pydantic-settings."""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class SharedConfig(BaseSettings):
    """Base configuration shared by every entry point."""
    log_level: str = Field(default="warning", validation_alias="LOG_LEVEL")

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }


class UpdaterSettings(SharedConfig):
    """Environment overrides for the update command."""
    root: str | None = Field(default=None, validation_alias="GT_ROOT")
    install_path: str | None = Field(
        default=None, validation_alias="GT_INSTALL_PATH"
    )
    config_path: str | None = Field(
        default=None, validation_alias="GT_UPDATE_CONFIG"
    )
