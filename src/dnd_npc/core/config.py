"""Configuration management for the D&D NPC generator.

This module provides centralized configuration management using
pydantic-settings, supporting environment variables, .env files, and
runtime overrides.

Example:
    >>> from dnd_npc.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.storage.max_npcs
    100

Environment Variables:
    DND_NPC_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    DND_NPC_DATA_TABLES_PATH: Directory holding the JSON tables
    DND_NPC_GENERATION_DUPLICATE_RETRY_CAP: Draw attempts before a duplicate is accepted
    DND_NPC_STORAGE_LIBRARY_PATH: SQLite file for the NPC library
    DND_NPC_STORAGE_MAX_NPCS: Library capacity
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dnd_npc.core.constants import DEFAULT_LIBRARY_CAPACITY, MAX_DUPLICATE_RETRIES
from dnd_npc.core.exceptions import ConfigurationError


class DataSettings(BaseSettings):
    """Configuration for the static data tables.

    Attributes:
        tables_path: Directory containing the JSON tables. None selects
            the tables bundled with the package.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_NPC_DATA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    tables_path: Path | None = Field(
        default=None,
        description="Directory with JSON tables (None = bundled)",
    )

    @field_validator("tables_path", mode="after")
    @classmethod
    def ensure_directory(cls, value: Path | None) -> Path | None:
        """Reject a tables path that is not an existing directory.

        Raises:
            ConfigurationError: If the path does not point at a directory.
        """
        if value is not None and not value.is_dir():
            raise ConfigurationError(
                f"Tables path is not a directory: {value}",
                config_key="tables_path",
            )
        return value


class GenerationSettings(BaseSettings):
    """Configuration for the generation engine.

    Attributes:
        duplicate_retry_cap: Random draws attempted before a duplicate
            behavior name is accepted.
        default_tier: Tier used when the caller does not pick one.
        include_spell_actions: Whether spell actions are derived for
            text export.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_NPC_GENERATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    duplicate_retry_cap: int = Field(
        default=MAX_DUPLICATE_RETRIES,
        ge=1,
        le=20,
        description="Draw attempts before accepting a duplicate",
    )
    default_tier: Literal["Novice", "Trained", "Veteran", "Elite", "Legendary"] = Field(
        default="Novice",
        description="Tier used when none is selected",
    )
    include_spell_actions: bool = Field(
        default=True,
        description="Derive spell actions for text export",
    )


class StorageSettings(BaseSettings):
    """Configuration for the NPC library.

    Attributes:
        library_path: Path to the SQLite library file.
        max_npcs: Maximum number of NPCs the library accepts.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_NPC_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    library_path: Path = Field(
        default=Path.home() / ".dnd_npc" / "library.db",
        description="Path to the SQLite NPC library",
    )
    max_npcs: int = Field(
        default=DEFAULT_LIBRARY_CAPACITY,
        ge=1,
        le=1000,
        description="Library capacity",
    )

    @field_validator("library_path", mode="after")
    @classmethod
    def ensure_parent_exists(cls, value: Path) -> Path:
        """Ensure the library directory exists, creating it if necessary."""
        value.parent.mkdir(parents=True, exist_ok=True)
        return value


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        data: Data table settings.
        generation: Generation engine settings.
        storage: NPC library settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_NPC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="D&D NPC Generator",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    data: DataSettings = Field(default_factory=DataSettings)
    generation: GenerationSettings = Field(default_factory=GenerationSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "DataSettings",
    "GenerationSettings",
    "StorageSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
