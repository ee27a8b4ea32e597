"""Tests for static table schemas."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from dnd_npc.models.enums import Ability, Alignment, ArchetypeId, BehaviorCategory, Tier
from dnd_npc.models.tables import (
    Archetype,
    BehaviorTemplate,
    GameTables,
    NameList,
    Race,
    SpellEntry,
)


class TestArchetype:
    """Tests for the Archetype schema."""

    def test_camel_case_fields(self) -> None:
        """Test camelCase JSON keys are accepted."""
        archetype = Archetype.model_validate(
            {
                "id": "rogue",
                "label": "Rogue",
                "primary": ["DEX"],
                "saveProfs": ["DEX", "INT"],
                "bonusDamageByTier": {"Veteran": "2d6"},
            }
        )
        assert archetype.id is ArchetypeId.ROGUE
        assert archetype.save_profs == (Ability.DEX, Ability.INT)
        assert archetype.bonus_damage_for(Tier.VETERAN) == "2d6"
        assert archetype.bonus_damage_for(Tier.NOVICE) is None

    @pytest.mark.parametrize(
        "save_profs",
        [["STR"], ["STR", "DEX", "CON"], ["STR", "STR"], []],
    )
    def test_invalid_save_profs_are_derived(self, save_profs: list[str]) -> None:
        """Test declared saves other than two distinct abilities are dropped."""
        archetype = Archetype(id="brute", label="Brute", save_profs=save_profs)
        assert archetype.save_profs is None

    def test_unknown_archetype_id_rejected(self) -> None:
        """Test archetype ids form a closed set."""
        with pytest.raises(ValidationError):
            Archetype(id="bard", label="Bard")


class TestBehaviorTemplate:
    """Tests for the BehaviorTemplate schema."""

    def test_from_json_data(self, sample_template_data: dict[str, Any]) -> None:
        """Test a template built from table data."""
        template = BehaviorTemplate.model_validate(sample_template_data)

        assert template.is_attack
        assert template.acting_ability is Ability.STR
        assert template.matches("martial")
        assert template.matches("any")
        assert not template.matches("caster")

    def test_tier_dice_win_over_flat_dice(self, sample_template_data: dict[str, Any]) -> None:
        """Test tier-specific dice are preferred over flat dice."""
        template = BehaviorTemplate.model_validate({**sample_template_data, "damage": "1d4"})

        assert template.damage_dice_for(Tier.VETERAN) == "2d8"
        assert template.damage_dice_for(Tier.ELITE) == "1d4"

    def test_save_ability_is_acting_ability(self) -> None:
        """Test save-based templates act with their save ability."""
        template = BehaviorTemplate(name="Roar", save_ability=Ability.CHA)

        assert not template.is_attack
        assert template.acting_ability is Ability.CHA
        assert template.damage_dice_for(Tier.NOVICE) is None


class TestGameTables:
    """Tests for GameTables lookups."""

    @pytest.fixture
    def small_tables(self) -> GameTables:
        """Provide a hand-built table set."""
        return GameTables(
            races=(Race(id="dwarf", label="Dwarf", short_legged=True),),
            names={"dwarf": NameList(male_first=("Thorin",), last=("Stonehammer",))},
            archetypes=(
                Archetype(id="martial", label="Martial"),
                Archetype(id="caster", label="Caster"),
            ),
            actions=(
                BehaviorTemplate(name="Club", tags=frozenset({"any"})),
                BehaviorTemplate(name="Staff", tags=frozenset({"caster"})),
            ),
            psych={Alignment.GOOD: ("Kind.",)},
            spells=(SpellEntry(name="Fire Bolt"),),
        )

    def test_get_archetype(self, small_tables: GameTables) -> None:
        """Test archetype lookup by id."""
        assert small_tables.get_archetype("CASTER").label == "Caster"
        assert small_tables.get_archetype(ArchetypeId.MARTIAL).label == "Martial"
        assert small_tables.get_archetype("bard") is None
        assert small_tables.get_archetype("cleric") is None

    def test_get_race_by_id_or_label(self, small_tables: GameTables) -> None:
        """Test race lookup accepts id or label."""
        assert small_tables.get_race("dwarf").label == "Dwarf"
        assert small_tables.get_race("DWARF").id == "dwarf"
        assert small_tables.get_race("Gnome") is None
        assert small_tables.get_race(None) is None

    def test_templates_and_wildcards(self, small_tables: GameTables) -> None:
        """Test category access and wildcard filtering."""
        assert len(small_tables.templates(BehaviorCategory.ACTIONS)) == 2
        assert [t.name for t in small_tables.wildcard_templates("actions")] == ["Club"]
        assert small_tables.templates("traits") == ()

    def test_names_for_unknown_race(self, small_tables: GameTables) -> None:
        """Test unknown races have empty name lists."""
        assert small_tables.names_for("elf") == NameList()
        assert small_tables.names_for("dwarf").male_first == ("Thorin",)

    def test_tables_are_frozen(self, small_tables: GameTables) -> None:
        """Test loaded tables cannot be reassigned."""
        with pytest.raises(ValidationError):
            small_tables.faces = ("x.png",)  # type: ignore[misc]

    def test_spell_level_bounds(self) -> None:
        """Test spell levels are limited to 0..9."""
        with pytest.raises(ValidationError):
            SpellEntry(name="Wish", level=10)
