"""Configuration management using pydantic-settings."""
import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    app_name: str = "fastapi-gravatar"

    # Server settings
    backend_host: str = "localhost"
    backend_port: int = 8000
    frontend_port: int = 3000

    # Gravatar presets. GRAVATAR_PRESETS is parsed as JSON, e.g.
    # {"small": {"size": 40, "d": "identicon"}}
    gravatar_default_preset: Optional[str] = None
    gravatar_presets: dict[str, Any] = {}
    gravatar_presets_file: Optional[Path] = None

    # HTTP timeout for base64 conversion, in seconds
    gravatar_timeout: int = 5

    def gravatar_config(self) -> dict[str, Any]:
        """Return the preset configuration mapping consumed by Image.

        Presets from ``gravatar_presets_file`` are loaded first; presets of the
        same name given through the environment take precedence.
        """
        presets: dict[str, Any] = {}
        if self.gravatar_presets_file is not None:
            presets.update(json.loads(self.gravatar_presets_file.read_text(encoding="utf-8")))
        presets.update(self.gravatar_presets)
        return {
            "default_preset": self.gravatar_default_preset,
            "presets": presets,
        }


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
