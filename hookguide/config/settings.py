"""hookguide configuration via environment / .env file."""

from __future__ import annotations

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="HOOKGUIDE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Guidance sources ---
    GUIDANCE_DIRS: list[str] = []
    INCLUDE_BUILTIN: bool = True
    STRICT_LOADING: bool = False

    # --- Activation ---
    COMMAND_PREFIX: str = "/"

    # --- Logging ---
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    @field_validator("COMMAND_PREFIX")
    @classmethod
    def _check_prefix(cls, v: str) -> str:
        if not v or any(c.isspace() for c in v):
            raise ValueError("COMMAND_PREFIX must be non-empty and contain no whitespace")
        return v

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


settings = Settings()
