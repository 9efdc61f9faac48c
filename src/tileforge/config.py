"""Application configuration with pydantic-settings + TOML."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict, TomlConfigSettingsSource


def _default_config_dir() -> Path:
    return Path.home() / ".tileforge"


class TimelineSettings(BaseSettings):
    """Sampling defaults for the ``timeline`` command."""

    step_ms: int = Field(default=45, gt=0)
    duration_ms: int = Field(default=1000, gt=0)


class AppConfig(BaseSettings):
    """Root application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TILEFORGE_",
        env_nested_delimiter="__",
    )

    assets_dir: Path = Field(default_factory=Path.cwd)
    log_level: str = "WARNING"
    timeline: TimelineSettings = Field(default_factory=TimelineSettings)

    @classmethod
    def settings_customise_sources(cls, settings_cls, **kwargs):  # type: ignore[override]
        toml_path = _default_config_dir() / "config.toml"
        sources = (
            kwargs.get("init_settings"),
            kwargs.get("env_settings"),
        )
        if toml_path.exists():
            sources = (*sources, TomlConfigSettingsSource(settings_cls, toml_file=toml_path))
        return (*sources, kwargs.get("dotenv_settings"), kwargs.get("file_secret_settings"))


def load_config() -> AppConfig:
    """Load application config from the environment and optional TOML file."""
    return AppConfig()
