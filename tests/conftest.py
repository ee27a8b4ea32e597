"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the D&D NPC generator test suite.
"""

from __future__ import annotations

import random
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator

    from dnd_npc.engine.dice import DiceSimulator
    from dnd_npc.engine.generator import NPCGenerator
    from dnd_npc.engine.stats import StatEngine
    from dnd_npc.models.npc import NPCRecord
    from dnd_npc.models.tables import GameTables
    from dnd_npc.storage.library import NPCLibrary


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from dnd_npc.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def isolated_library_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the configured library file into the test's temp directory."""
    library_path = tmp_path / "settings" / "library.db"
    monkeypatch.setenv("DND_NPC_STORAGE_LIBRARY_PATH", str(library_path))
    return library_path


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "DND_NPC_DEBUG": "true",
        "DND_NPC_LOG_LEVEL": "DEBUG",
        "DND_NPC_GENERATION_DUPLICATE_RETRY_CAP": "7",
        "DND_NPC_STORAGE_MAX_NPCS": "25",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Table Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def tables() -> GameTables:
    """Provide the bundled tables, loaded once per test session."""
    from dnd_npc.data.loader import TableLoader

    return TableLoader().load()


@pytest.fixture
def sample_template_data() -> dict[str, Any]:
    """Provide raw (camelCase) data for one attack template.

    Returns:
        Dictionary in the JSON table format.
    """
    return {
        "name": "Warhammer",
        "tags": ["martial", "any"],
        "text": "Melee Weapon Attack: {toHit} to hit. Hit: {damage} bludgeoning damage.",
        "attackAbility": "STR",
        "damageByTier": {"Novice": "1d8", "Veteran": "2d8"},
    }


@pytest.fixture
def tables_dir(tmp_path: Path) -> Path:
    """Write a minimal but complete set of JSON tables to a temp directory.

    Returns:
        Directory containing the table files.
    """
    import json

    directory = tmp_path / "tables"
    directory.mkdir()

    files: dict[str, Any] = {
        "races.json": {
            "races": [
                {"id": "human", "label": "Human", "nameFile": "names_human.json"},
                {
                    "id": "dwarf",
                    "label": "Dwarf",
                    "nameFormat": "first_nickname_last",
                    "shortLegged": True,
                    "nameFile": "names_dwarf.json",
                },
            ]
        },
        "names_human.json": {"maleFirst": ["Tom"], "femaleFirst": ["Ann"], "last": ["Hale"]},
        "names_dwarf.json": {
            "maleFirst": ["Thorin"],
            "femaleFirst": ["Helja"],
            "last": ["Stonehammer"],
            "nicknames": ["Ironfoot"],
        },
        "archetypes.json": {
            "archetypes": [
                {"id": "martial", "label": "Martial", "primary": ["STR"], "secondary": ["CON"]},
            ]
        },
        "traits.json": {"traits": [{"name": "Brave", "tags": ["any"], "text": "Fearless."}]},
        "actions.json": {
            "actions": [
                {
                    "name": "Club",
                    "tags": ["any"],
                    "text": "{toHit} to hit, {damage}.",
                    "attackAbility": "STR",
                    "damage": "1d4",
                }
            ]
        },
        "reactions.json": {"reactions": []},
        "physical_sentences.json": {"generic": ["Plain."], "byRace": {"Dwarf": ["Bearded."]}},
        "psych_good.json": {"sentences": ["Kind."]},
        "psych_neutral.json": {"sentences": ["Aloof."]},
        "psych_evil.json": {"sentences": ["Cruel."]},
    }
    for filename, content in files.items():
        (directory / filename).write_text(json.dumps(content), encoding="utf-8")
    return directory


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def rng() -> random.Random:
    """Provide a seeded random source."""
    return random.Random(1234)


@pytest.fixture
def engine(tables: GameTables, rng: random.Random) -> StatEngine:
    """Provide a stat engine over the bundled tables."""
    from dnd_npc.engine.stats import StatEngine

    return StatEngine(tables, rng=rng)


@pytest.fixture
def generator(tables: GameTables, rng: random.Random) -> NPCGenerator:
    """Provide an NPC generator over the bundled tables."""
    from dnd_npc.engine.generator import NPCGenerator

    return NPCGenerator(tables, rng=rng)


@pytest.fixture
def simulator() -> DiceSimulator:
    """Provide a dice simulator."""
    from dnd_npc.engine.dice import DiceSimulator

    return DiceSimulator()


@pytest.fixture
def sample_npc(generator: NPCGenerator) -> NPCRecord:
    """Provide a generated Veteran martial human."""
    return generator.generate(
        {
            "sex": "Male",
            "race": {"id": "human", "label": "Human"},
            "alignment": "Neutral",
            "archetype": "martial",
            "tier": "Veteran",
        }
    )


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest.fixture
def library(tmp_path: Path) -> NPCLibrary:
    """Provide an empty NPC library in a temp directory."""
    from dnd_npc.storage.library import NPCLibrary

    return NPCLibrary(tmp_path / "library" / "npcs.db")


@pytest.fixture
def small_library(tmp_path: Path) -> NPCLibrary:
    """Provide an empty NPC library that holds at most two NPCs."""
    from dnd_npc.storage.library import NPCLibrary

    return NPCLibrary(tmp_path / "small" / "npcs.db", max_npcs=2)
