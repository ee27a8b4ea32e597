"""Integration tests for the NPC library.

Tests saving, updating, ordering, capacity and persistence.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

from dnd_npc.engine.generator import NPCGenerator
from dnd_npc.models.npc import NPCRecord
from dnd_npc.storage.library import NPCLibrary


class TestLibraryPersistence:
    """Test NPC library persistence."""

    def test_save_and_get(self, library: NPCLibrary, sample_npc: NPCRecord) -> None:
        """Save an NPC and read it back."""
        result = library.save(sample_npc)

        assert result.success is True
        assert result.error is None
        loaded = library.get_by_id(sample_npc.id)
        assert loaded is not None
        assert loaded.model_dump() == sample_npc.model_dump()
        assert library.exists(sample_npc.id)
        assert library.count() == 1

    def test_newest_first(self, library: NPCLibrary, generator: NPCGenerator) -> None:
        """NPCs come back most recently added first."""
        npcs = [generator.generate() for _ in range(3)]
        for npc in npcs:
            library.save(npc)

        assert [n.id for n in library.get_all()] == [n.id for n in reversed(npcs)]

    def test_update_in_place(self, library: NPCLibrary, generator: NPCGenerator) -> None:
        """Saving an existing id replaces it without moving it."""
        first, second = generator.generate(), generator.generate()
        library.save(first)
        library.save(second)

        first.notes = "Runs the tavern."
        assert library.save(first).success

        saved = library.get_all()
        assert [n.id for n in saved] == [second.id, first.id]
        assert saved[1].notes == "Runs the tavern."
        assert library.count() == 2

    def test_capacity(self, small_library: NPCLibrary, generator: NPCGenerator) -> None:
        """A full library refuses new NPCs but still accepts updates."""
        first, second, third = (generator.generate() for _ in range(3))
        assert small_library.save(first).success
        assert small_library.save(second).success
        assert small_library.is_full()

        result = small_library.save(third)
        assert result.success is False
        assert result.error == (
            "Library is full. Maximum 2 NPCs allowed. Please delete some NPCs to save new ones."
        )
        assert not small_library.exists(third.id)

        first.notes = "Updated."
        assert small_library.save(first).success
        assert small_library.max_capacity() == 2

    def test_remove_and_clear(self, library: NPCLibrary, generator: NPCGenerator) -> None:
        """Remove one NPC, then clear the rest."""
        npcs = [generator.generate() for _ in range(3)]
        for npc in npcs:
            library.save(npc)

        assert library.remove(npcs[0].id) is True
        assert library.remove(npcs[0].id) is False
        assert library.count() == 2

        assert library.clear_all() is True
        assert library.get_all() == []

    def test_persists_across_instances(self, tmp_path: Path, sample_npc: NPCRecord) -> None:
        """A second library over the same file sees saved NPCs."""
        path = tmp_path / "shared.db"
        NPCLibrary(path).save(sample_npc)

        reopened = NPCLibrary(path)
        assert [n.id for n in reopened.get_all()] == [sample_npc.id]

    def test_unreadable_rows_skipped(self, library: NPCLibrary, sample_npc: NPCRecord) -> None:
        """Rows that no longer validate are skipped."""
        library.save(sample_npc)
        with sqlite3.connect(library.db_path) as conn:
            conn.execute(
                "INSERT INTO npcs (id, position, name, npc_json, saved_at) VALUES (?, ?, ?, ?, ?)",
                ("broken", 99, "Broken", '{"name": 1}', "2024-01-01T00:00:00"),
            )

        assert [n.id for n in library.get_all()] == [sample_npc.id]
        assert library.get_by_id("broken") is None

    def test_from_settings(self, isolated_library_path: Path) -> None:
        """The configured path and capacity are used."""
        library = NPCLibrary.from_settings()

        assert library.db_path == isolated_library_path
        assert library.max_capacity() == 100

    def test_unwritable_location(self, tmp_path: Path, sample_npc: NPCRecord) -> None:
        """Storage failures are reported, not raised."""
        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")
        library = NPCLibrary(blocker / "npcs.db")

        result = library.save(sample_npc)
        assert result.success is False
        assert result.error == "Failed to save NPC to storage."
        assert library.get_all() == []
        assert library.count() == 0
