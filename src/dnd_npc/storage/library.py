"""SQLite-backed NPC library.

Saved NPCs are stored as JSON documents, newest first, up to a fixed
capacity. Storage is best effort: every public method logs and reports
failures through its return value instead of raising.

Storage location: ~/.dnd_npc/library.db
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Generator

from pydantic import ValidationError as PydanticValidationError

from dnd_npc.core.config import Settings, get_settings
from dnd_npc.core.constants import DEFAULT_LIBRARY_CAPACITY
from dnd_npc.core.exceptions import StorageError
from dnd_npc.core.logging import get_logger
from dnd_npc.models.npc import NPCRecord


logger = get_logger(__name__)


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class SaveResult:
    """Outcome of NPCLibrary.save().

    Attributes:
        success: Whether the NPC was written.
        error: Human-readable reason when it was not.
    """

    success: bool
    error: str | None = None


# =============================================================================
# Library Class
# =============================================================================


class NPCLibrary:
    """Capacity-limited store of generated NPCs.

    Saving an NPC whose id is already stored replaces it in place and
    keeps its position; saving a new NPC puts it first. New NPCs are
    refused once the library holds ``max_npcs`` entries.

    Example:
        >>> library = NPCLibrary(tmp_path / "library.db", max_npcs=2)
        >>> library.save(npc).success
        True
        >>> library.count()
        1
    """

    SCHEMA_VERSION = 1

    def __init__(self, db_path: str | Path | None = None, *, max_npcs: int | None = None) -> None:
        """Initialize the library.

        Args:
            db_path: Path to the database file. If None, uses the default location.
            max_npcs: Capacity. Defaults to 100.
        """
        self.db_path = Path(db_path) if db_path is not None else self._get_default_path()
        self._max_npcs = max_npcs if max_npcs is not None else DEFAULT_LIBRARY_CAPACITY

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._init_schema()
        except (OSError, sqlite3.Error) as exc:
            logger.warning("NPC library unavailable", path=str(self.db_path), error=str(exc))
        else:
            logger.info("NPC library initialized", path=str(self.db_path), capacity=self._max_npcs)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> NPCLibrary:
        """Create a library at the configured path and capacity."""
        settings = settings or get_settings()
        return cls(settings.storage.library_path, max_npcs=settings.storage.max_npcs)

    @staticmethod
    def _get_default_path() -> Path:
        """Get default database path."""
        return Path.home() / ".dnd_npc" / "library.db"

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with proper cleanup."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY
                )
            """)
            # position grows with every insert; the newest NPC has the largest.
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS npcs (
                    id TEXT PRIMARY KEY,
                    position INTEGER NOT NULL,
                    name TEXT NOT NULL,
                    npc_json TEXT NOT NULL,
                    saved_at TEXT NOT NULL
                )
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_npcs_position
                ON npcs(position DESC)
            """)
            cursor.execute(
                "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
                (self.SCHEMA_VERSION,),
            )

    # =========================================================================
    # Queries
    # =========================================================================

    def get_all(self) -> list[NPCRecord]:
        """All saved NPCs, most recently added first.

        Rows that no longer validate are skipped with a warning.
        """
        try:
            with self._get_connection() as conn:
                rows = conn.execute(
                    "SELECT id, npc_json FROM npcs ORDER BY position DESC"
                ).fetchall()
        except sqlite3.Error as exc:
            logger.warning("Error reading NPC library", error=str(exc))
            return []

        npcs: list[NPCRecord] = []
        for row in rows:
            npc = self._decode(row["id"], row["npc_json"])
            if npc is not None:
                npcs.append(npc)
        return npcs

    def get_by_id(self, npc_id: str) -> NPCRecord | None:
        """A saved NPC by id, or None."""
        try:
            with self._get_connection() as conn:
                row = conn.execute(
                    "SELECT id, npc_json FROM npcs WHERE id = ?", (npc_id,)
                ).fetchone()
        except sqlite3.Error as exc:
            logger.warning("Error reading NPC library", npc_id=npc_id, error=str(exc))
            return None
        return self._decode(row["id"], row["npc_json"]) if row else None

    def exists(self, npc_id: str) -> bool:
        """Whether an NPC with this id is saved."""
        try:
            with self._get_connection() as conn:
                row = conn.execute("SELECT 1 FROM npcs WHERE id = ?", (npc_id,)).fetchone()
        except sqlite3.Error as exc:
            logger.warning("Error reading NPC library", npc_id=npc_id, error=str(exc))
            return False
        return row is not None

    def count(self) -> int:
        """Number of saved NPCs."""
        try:
            with self._get_connection() as conn:
                return conn.execute("SELECT COUNT(*) FROM npcs").fetchone()[0]
        except sqlite3.Error as exc:
            logger.warning("Error reading NPC library", error=str(exc))
            return 0

    def is_full(self) -> bool:
        """Whether the library has reached capacity."""
        return self.count() >= self._max_npcs

    def max_capacity(self) -> int:
        """The library's capacity."""
        return self._max_npcs

    # =========================================================================
    # Mutations
    # =========================================================================

    def save(self, npc: NPCRecord) -> SaveResult:
        """Save an NPC, updating it in place when its id is already stored.

        Args:
            npc: The NPC to save.

        Returns:
            SaveResult; ``success`` is False when the library is full or
            the write failed.
        """
        npc_json = npc.model_dump_json()
        now = datetime.now().isoformat()

        try:
            with self._get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    "UPDATE npcs SET name = ?, npc_json = ?, saved_at = ? WHERE id = ?",
                    (npc.name, npc_json, now, npc.id),
                )
                if cursor.rowcount == 0:
                    total = cursor.execute("SELECT COUNT(*) FROM npcs").fetchone()[0]
                    if total >= self._max_npcs:
                        error = StorageError(
                            f"Library is full. Maximum {self._max_npcs} NPCs allowed. "
                            "Please delete some NPCs to save new ones.",
                            npc_id=npc.id,
                        )
                        logger.warning("NPC library full", npc_id=npc.id, capacity=self._max_npcs)
                        return SaveResult(success=False, error=error.message)

                    position = cursor.execute(
                        "SELECT COALESCE(MAX(position), 0) + 1 FROM npcs"
                    ).fetchone()[0]
                    cursor.execute(
                        """
                        INSERT INTO npcs (id, position, name, npc_json, saved_at)
                        VALUES (?, ?, ?, ?, ?)
                        """,
                        (npc.id, position, npc.name, npc_json, now),
                    )
        except sqlite3.Error as exc:
            error = StorageError("Failed to save NPC to storage.", npc_id=npc.id)
            logger.warning(error.message, npc_id=npc.id, error=str(exc))
            return SaveResult(success=False, error=error.message)

        logger.info("NPC saved", npc_id=npc.id, name=npc.name)
        return SaveResult(success=True)

    def remove(self, npc_id: str) -> bool:
        """Delete an NPC.

        Returns:
            True if deleted, False if not found or the write failed.
        """
        try:
            with self._get_connection() as conn:
                cursor = conn.execute("DELETE FROM npcs WHERE id = ?", (npc_id,))
                deleted = cursor.rowcount > 0
        except sqlite3.Error as exc:
            logger.warning("Error deleting NPC", npc_id=npc_id, error=str(exc))
            return False

        if deleted:
            logger.info("NPC deleted", npc_id=npc_id)
        return deleted

    def clear_all(self) -> bool:
        """Delete every saved NPC."""
        try:
            with self._get_connection() as conn:
                conn.execute("DELETE FROM npcs")
        except sqlite3.Error as exc:
            logger.warning("Error clearing NPC library", error=str(exc))
            return False
        logger.info("NPC library cleared")
        return True

    @staticmethod
    def _decode(npc_id: str, npc_json: str) -> NPCRecord | None:
        try:
            return NPCRecord.model_validate_json(npc_json)
        except PydanticValidationError as exc:
            logger.warning("Skipping unreadable NPC", npc_id=npc_id, error=str(exc))
            return None


__all__ = [
    "SaveResult",
    "NPCLibrary",
]
