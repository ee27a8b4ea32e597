"""JSON table loader.

Reads the static tables from a directory (the bundled ``tables/``
directory by default) and validates them into one immutable GameTables.
Every file holds a single top-level object; list tables keep their rows
under a key named after the table, e.g. ``{"races": [...]}``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from dnd_npc.core.config import Settings, get_settings
from dnd_npc.core.exceptions import TableLoadError
from dnd_npc.core.logging import get_logger
from dnd_npc.models.enums import Alignment
from dnd_npc.models.tables import GameTables


logger = get_logger(__name__)

BUNDLED_TABLES_PATH = Path(__file__).parent / "tables"

# Tables without which no NPC can be generated.
REQUIRED_TABLES: tuple[str, ...] = ("races", "archetypes", "traits", "actions", "reactions")

# Tables that only enrich the output; a missing file yields an empty table.
OPTIONAL_TABLES: tuple[str, ...] = ("faces", "spells", "conditions")


class TableLoader:
    """Loads and validates the static data tables.

    Example:
        >>> tables = TableLoader().load()
        >>> [race.label for race in tables.races][:2]
        ['Human', 'Elf']
    """

    def __init__(self, tables_path: str | Path | None = None) -> None:
        """Initialize the loader.

        Args:
            tables_path: Directory holding the JSON tables. If None, the
                bundled tables are used.
        """
        self.tables_path = Path(tables_path) if tables_path is not None else BUNDLED_TABLES_PATH

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> TableLoader:
        """Create a loader for the configured tables directory."""
        settings = settings or get_settings()
        return cls(settings.data.tables_path)

    def load(self) -> GameTables:
        """Read every table and build a GameTables.

        Returns:
            Validated, immutable tables.

        Raises:
            TableLoadError: If a required file is missing, is not valid
                JSON, or does not match the table schema.
        """
        logger.info("Loading tables", path=str(self.tables_path))

        raw: dict[str, Any] = {}
        for table in REQUIRED_TABLES:
            raw[table] = self._read_rows(table, required=True)
        for table in OPTIONAL_TABLES:
            raw[table] = self._read_rows(table, required=False)

        raw["names"] = {}
        for race in raw["races"]:
            if not isinstance(race, dict):
                continue
            name_file = race.get("nameFile") or race.get("name_file")
            if name_file and race.get("id"):
                raw["names"][race["id"]] = self._read_json(name_file, table_name="names")
        raw["physical"] = self._read_json("physical_sentences.json", table_name="physical")
        raw["psych"] = {
            alignment.value: self._read_json(
                f"psych_{alignment.value.lower()}.json", table_name="psych"
            ).get("sentences", [])
            for alignment in Alignment
        }

        try:
            tables = GameTables.model_validate(raw)
        except PydanticValidationError as exc:
            raise TableLoadError(
                f"Tables failed validation: {exc.error_count()} error(s)",
                source_file=str(self.tables_path),
                details={"errors": [err["loc"] for err in exc.errors()][:5]},
            ) from exc

        logger.info(
            "Tables loaded",
            races=len(tables.races),
            archetypes=len(tables.archetypes),
            traits=len(tables.traits),
            actions=len(tables.actions),
            reactions=len(tables.reactions),
            spells=len(tables.spells),
        )
        return tables

    def _read_rows(self, table: str, *, required: bool) -> list[Any]:
        path = self.tables_path / f"{table}.json"
        if not required and not path.exists():
            logger.debug("Optional table missing", table=table, path=str(path))
            return []
        data = self._read_json(path.name, table_name=table)
        rows = data.get(table, [])
        if not isinstance(rows, list):
            raise TableLoadError(
                f"Table '{table}' must hold a list under key '{table}'",
                table_name=table,
                source_file=str(path),
            )
        return rows

    def _read_json(self, filename: str, *, table_name: str) -> dict[str, Any]:
        path = self.tables_path / filename
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except OSError as exc:
            raise TableLoadError(
                f"Cannot read table file: {path}",
                table_name=table_name,
                source_file=str(path),
            ) from exc
        except json.JSONDecodeError as exc:
            raise TableLoadError(
                f"Invalid JSON in table file: {exc.msg} (line {exc.lineno})",
                table_name=table_name,
                source_file=str(path),
            ) from exc

        if not isinstance(data, dict):
            raise TableLoadError(
                "Table file must contain a JSON object",
                table_name=table_name,
                source_file=str(path),
            )
        return data


def load_tables(tables_path: str | Path | None = None) -> GameTables:
    """Load tables from a directory, or the bundled tables."""
    return TableLoader(tables_path).load()


__all__ = [
    "BUNDLED_TABLES_PATH",
    "REQUIRED_TABLES",
    "OPTIONAL_TABLES",
    "TableLoader",
    "load_tables",
]
