"""Application settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """CLI and REPL settings, read from ITGL_* environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ITGL_",
        case_sensitive=False,
        extra="ignore",
    )

    home: str | None = Field(default=None)
    show_constraints: bool = Field(default=False)
    prompt: str = Field(default="# ")

    def resolve_home(self) -> Path:
        if self.home:
            return Path(self.home).expanduser().resolve()
        return (Path.home() / ".itgl").resolve()

    @property
    def history_file(self) -> Path:
        return self.resolve_home() / "history"


def load_settings(**overrides: Any) -> Settings:
    """Load settings, letting explicit keyword arguments win over the environment."""
    return Settings(**{k: v for k, v in overrides.items() if v is not None})
