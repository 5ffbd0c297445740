"""Configuration settings with TOML and environment variable support."""

import os
from pathlib import Path
from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from wiki.core.categories import DEFAULT_BASE_URL


# =============================================================================
# Configuration Models
# =============================================================================


class RenderSettings(BaseModel):
    """Rendering surface and settle tuning."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    settle_delay: float = Field(3.0, ge=0, alias="settle-delay")
    navigation_timeout: float = Field(30.0, gt=0, alias="navigation-timeout")
    stability_interval: float = Field(0.5, ge=0, alias="stability-interval")
    settle_timeout: float = Field(10.0, ge=0, alias="settle-timeout")
    headless: bool = True
    user_agent: str | None = Field(None, alias="user-agent")

    @property
    def navigation_timeout_ms(self) -> int:
        return int(self.navigation_timeout * 1000)


# =============================================================================
# Settings Class (pydantic-settings)
# =============================================================================


class Settings(BaseSettings):
    """Application settings loaded from wiki.toml and environment variables.

    Precedence order:
    1. Environment variables (with WIKI_ prefix)
    2. wiki.toml file (see _find_config_file for search order)
    3. Default values

    Example environment variables:
        WIKI_VERBOSE=true
        WIKI_JSON_LOGS=true
        WIKI_RENDERER=static
        WIKI_DB_PATH=~/wiki.db
        WIKI_RENDER__SETTLE_DELAY=5
    """

    verbose: bool = False
    json_logs: bool = False
    db_path: str | None = Field(None, alias="db-path")
    base_url: str = DEFAULT_BASE_URL
    renderer: Literal["browser", "static"] = "browser"
    fetch_timeout: float = Field(120.0, gt=0)

    render: RenderSettings = Field(default_factory=RenderSettings)

    model_config = SettingsConfigDict(
        env_prefix="WIKI_",
        env_nested_delimiter="__",
        extra="ignore",
        populate_by_name=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        """Customize settings sources to include TOML file."""
        config_file = _find_config_file()
        if config_file:
            return (
                init_settings,
                env_settings,
                _WikiTomlSettingsSource(settings_cls, config_file),
            )
        return (init_settings, env_settings)

    # Application constants (not configurable)
    REQUEST_TIMEOUT: ClassVar[int] = 15

    def get_db_path(self) -> Path:
        """Get favorites database path.

        Priority: config > env var > XDG default
        """
        if self.db_path:
            return Path(self.db_path).expanduser()

        if env_path := os.getenv("WIKI_DB_PATH"):
            return Path(env_path).expanduser()

        data_home = os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share")
        db_dir = Path(data_home) / "wiki"
        db_dir.mkdir(parents=True, exist_ok=True)
        return db_dir / "wiki.db"


# =============================================================================
# TOML Settings Source
# =============================================================================


class _WikiTomlSettingsSource:
    """Custom settings source that reads from [wiki] section in TOML."""

    def __init__(self, settings_cls: type[BaseSettings], toml_file: Path):
        self.settings_cls = settings_cls
        self.toml_file = toml_file

    def __call__(self) -> dict:
        import tomllib

        with open(self.toml_file, "rb") as f:
            data = tomllib.load(f)

        return data.get("wiki", {})


def _find_config_file() -> Path | None:
    """Find wiki.toml in standard locations.

    Search order:
    1. WIKI_CONFIG environment variable
    2. ./wiki.toml (current directory)
    3. $XDG_CONFIG_HOME/wiki/wiki.toml or ~/.config/wiki/wiki.toml
    4. ~/.wiki.toml (home directory)

    Returns:
        First existing config file path, or None if not found.
    """
    if env_path := os.getenv("WIKI_CONFIG"):
        path = Path(env_path).expanduser()
        if path.exists():
            return path

    path = Path.cwd() / "wiki.toml"
    if path.exists():
        return path

    config_home = os.getenv("XDG_CONFIG_HOME", Path.home() / ".config")
    path = Path(config_home) / "wiki" / "wiki.toml"
    if path.exists():
        return path

    path = Path.home() / ".wiki.toml"
    if path.exists():
        return path

    return None
