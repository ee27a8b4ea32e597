"""Tests for the JSON table loader."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from dnd_npc.core.exceptions import TableLoadError
from dnd_npc.data.loader import BUNDLED_TABLES_PATH, TableLoader, load_tables
from dnd_npc.models.enums import Alignment, ArchetypeId


class TestBundledTables:
    """Tests against the tables shipped with the package."""

    def test_loads(self) -> None:
        """Test every required table has rows."""
        tables = TableLoader().load()

        assert tables.races
        assert {a.id for a in tables.archetypes} == set(ArchetypeId)
        assert tables.traits
        assert tables.actions
        assert tables.reactions
        assert tables.spells
        assert tables.conditions

    def test_name_files_loaded(self) -> None:
        """Test each race's name file is read."""
        tables = load_tables()
        for race in tables.races:
            names = tables.names_for(race.id)
            assert names.male_first
            assert names.last

    def test_psych_for_every_alignment(self) -> None:
        """Test each alignment has sentences."""
        tables = load_tables(BUNDLED_TABLES_PATH)
        assert all(tables.psych[alignment] for alignment in Alignment)

    def test_camel_case_fields(self) -> None:
        """Test camelCase keys populate snake_case fields."""
        tables = load_tables()
        assert tables.get_race("dwarf").short_legged is True
        assert tables.get_archetype("martial").save_profs is not None


class TestCustomDirectory:
    """Tests against a directory of hand-written tables."""

    def test_minimal_tables(self, tables_dir: Path) -> None:
        """Test a minimal directory loads with empty optional tables."""
        tables = TableLoader(tables_dir).load()

        assert [r.id for r in tables.races] == ["human", "dwarf"]
        assert tables.names_for("dwarf").nicknames == ("Ironfoot",)
        assert tables.reactions == ()
        assert tables.faces == ()
        assert tables.spells == ()
        assert tables.physical.by_race["Dwarf"] == ("Bearded.",)

    def test_from_settings(self, tables_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the configured directory is used."""
        monkeypatch.setenv("DND_NPC_DATA_TABLES_PATH", str(tables_dir))
        assert TableLoader.from_settings().tables_path == tables_dir

    def test_missing_required_file(self, tables_dir: Path) -> None:
        """Test a missing required table raises."""
        (tables_dir / "traits.json").unlink()

        with pytest.raises(TableLoadError) as exc_info:
            TableLoader(tables_dir).load()

        assert exc_info.value.details["table_name"] == "traits"

    def test_invalid_json(self, tables_dir: Path) -> None:
        """Test malformed JSON raises."""
        (tables_dir / "actions.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(TableLoadError, match="Invalid JSON"):
            TableLoader(tables_dir).load()

    def test_rows_must_be_list(self, tables_dir: Path) -> None:
        """Test a table whose rows are not a list raises."""
        (tables_dir / "races.json").write_text(json.dumps({"races": {}}), encoding="utf-8")

        with pytest.raises(TableLoadError):
            TableLoader(tables_dir).load()

    def test_top_level_must_be_object(self, tables_dir: Path) -> None:
        """Test a table file holding a bare list raises."""
        (tables_dir / "traits.json").write_text("[]", encoding="utf-8")

        with pytest.raises(TableLoadError, match="JSON object"):
            TableLoader(tables_dir).load()

    def test_schema_error(self, tables_dir: Path) -> None:
        """Test rows that do not match the schema raise."""
        (tables_dir / "archetypes.json").write_text(
            json.dumps({"archetypes": [{"id": "wizard", "label": "Wizard"}]}),
            encoding="utf-8",
        )

        with pytest.raises(TableLoadError, match="failed validation"):
            TableLoader(tables_dir).load()
