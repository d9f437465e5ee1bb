"""Core configuration.

- Centralizes environment variables (pydantic-settings) away from the CLI.
- Adapters (HTTP client, `go list` runner) read their knobs from here.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "goimportgraph"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "goimportgraph"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "goimportgraph"
    return Path.home() / ".config" / "goimportgraph"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Application settings.

    Every field can be set through a `GOIMPORTGRAPH_*` environment variable or
    a `.env` file; CLI flags take precedence when given.
    """

    model_config = SettingsConfigDict(
        env_prefix="GOIMPORTGRAPH_",
        extra="ignore",
        case_sensitive=False,
        # Project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per lookup request (seconds).",
    )
    user_agent: str = Field(
        default="goimportgraph/0.1",
        min_length=1,
        description="User-Agent sent with go-get lookups.",
    )
    max_concurrency: int = Field(
        default=1,
        ge=1,
        le=64,
        description="Modules resolved in parallel (1 = strictly sequential).",
    )
    go_binary: str = Field(
        default="go",
        min_length=1,
        description="Name of the Go executable looked up in PATH.",
    )
