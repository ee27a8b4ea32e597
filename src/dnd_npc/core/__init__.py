"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        DndNpcError: Base exception for all application errors.
        TableLoadError: Static table could not be read or validated.
        GenerationError: Generation cannot start (e.g. no races loaded).
        StorageError: NPC library failure.
        ConfigurationError: Configuration-related errors.
        ValidationError: Caller input that cannot be interpreted.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        configure_from_settings: Set up logging at the configured level.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
        bound_context: Scope log context to a block.
"""

from __future__ import annotations

from dnd_npc.core.config import (
    DataSettings,
    GenerationSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from dnd_npc.core.exceptions import (
    ConfigurationError,
    DndNpcError,
    GenerationError,
    StorageError,
    TableLoadError,
    ValidationError,
)
from dnd_npc.core.logging import (
    bind_context,
    bound_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "DndNpcError",
    "TableLoadError",
    "GenerationError",
    "StorageError",
    "ConfigurationError",
    "ValidationError",
    # Configuration
    "Settings",
    "DataSettings",
    "GenerationSettings",
    "StorageSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
    "bound_context",
]
