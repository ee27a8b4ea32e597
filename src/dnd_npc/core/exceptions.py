"""Custom exception hierarchy for the D&D NPC generator.

All exceptions inherit from DndNpcError, enabling unified error handling
at the application boundary while preserving domain-specific context.

The generation engine itself never raises for bad table content or
unknown ids: those are coerced to defaults. The exceptions below belong
to the collaborators around it (table loading, configuration, storage)
and to caller input that cannot be interpreted at all.

Example:
    >>> from dnd_npc.core.exceptions import TableLoadError
    >>> raise TableLoadError("Malformed table", table_name="races")
"""

from __future__ import annotations

from typing import Any


class DndNpcError(Exception):
    """Base exception for all NPC generator errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


def _with_context(details: dict[str, Any] | None, **context: Any) -> dict[str, Any]:
    """Copy of ``details`` plus every context value that is not None."""
    merged = dict(details or {})
    merged.update({key: value for key, value in context.items() if value is not None})
    return merged


# =============================================================================
# Data Domain Exceptions
# =============================================================================


class TableLoadError(DndNpcError):
    """Raised when a static data table cannot be read or validated.

    This covers missing files, malformed JSON and records that do not
    match the table schema.
    """

    def __init__(
        self,
        message: str,
        *,
        table_name: str | None = None,
        source_file: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize table load error with table context.

        Args:
            message: Human-readable error description.
            table_name: Logical name of the table (e.g. 'archetypes').
            source_file: Path of the file that failed to load.
            details: Optional dictionary containing additional error context.
        """
        super().__init__(
            message,
            details=_with_context(details, table_name=table_name, source_file=source_file),
        )


# =============================================================================
# Generation Domain Exceptions
# =============================================================================


class GenerationError(DndNpcError):
    """Raised when generation cannot start at all.

    Unknown tiers and archetypes are coerced, so this only fires when
    the tables offer nothing to pick from (e.g. a random race requested
    from a table holding no races).
    """


class StorageError(DndNpcError):
    """Raised (or reported) when the NPC library cannot be read or written."""

    def __init__(
        self,
        message: str,
        *,
        npc_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize storage error with record context.

        Args:
            message: Human-readable error description.
            npc_id: Identifier of the NPC involved.
            details: Optional dictionary containing additional error context.
        """
        super().__init__(message, details=_with_context(details, npc_id=npc_id))


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(DndNpcError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        super().__init__(message, details=_with_context(details, config_key=config_key))


class ValidationError(DndNpcError):
    """Raised when caller input cannot be interpreted."""

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        super().__init__(
            message,
            details=_with_context(details, field_name=field_name, invalid_value=invalid_value),
        )


__all__ = [
    "DndNpcError",
    "TableLoadError",
    "GenerationError",
    "StorageError",
    "ConfigurationError",
    "ValidationError",
]
