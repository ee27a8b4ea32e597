"""Tests for derived statistics."""

from __future__ import annotations

import pytest

from dnd_npc.engine.derived import armor_class, hit_points, save_proficiencies, walking_speed
from dnd_npc.models.enums import Ability, ArchetypeId, Tier
from dnd_npc.models.tables import Archetype, Race
from dnd_npc.models.tiers import TIER_TABLE


class TestArmorClass:
    """Tests for armor class."""

    def test_veteran_martial(self) -> None:
        """Test tier base plus archetype adjustment."""
        assert armor_class(TIER_TABLE[Tier.VETERAN], ArchetypeId.MARTIAL) == 17

    def test_no_archetype(self) -> None:
        """Test a missing archetype adds nothing."""
        assert armor_class(TIER_TABLE[Tier.NOVICE], None) == 12

    @pytest.mark.parametrize("tier", list(Tier))
    @pytest.mark.parametrize("archetype_id", list(ArchetypeId))
    def test_always_in_range(self, tier: Tier, archetype_id: ArchetypeId) -> None:
        """Test AC is clamped to [10, 20] for every combination."""
        assert 10 <= armor_class(TIER_TABLE[tier], archetype_id) <= 20


class TestHitPoints:
    """Tests for hit points."""

    def test_formula(self) -> None:
        """Test base plus CON modifier times the multiplier."""
        assert hit_points(TIER_TABLE[Tier.VETERAN], 2) == 42
        assert hit_points(TIER_TABLE[Tier.VETERAN], -1) == 24

    def test_minimum_one(self) -> None:
        """Test hit points never drop below 1."""
        assert hit_points(TIER_TABLE[Tier.NOVICE], -20) == 1


class TestSpeed:
    """Tests for walking speed."""

    def test_short_legged(self) -> None:
        """Test short-legged races walk at 25 ft."""
        assert walking_speed(Race(id="dwarf", label="Dwarf", short_legged=True)) == 25

    def test_default(self) -> None:
        """Test everyone else walks at 30 ft."""
        assert walking_speed(Race(id="elf", label="Elf")) == 30
        assert walking_speed(None) == 30


class TestSaveProficiencies:
    """Tests for saving throw proficiency selection."""

    def test_declared_pair(self) -> None:
        """Test declared proficiencies are used verbatim."""
        archetype = Archetype(id="cleric", label="Cleric", save_profs=["WIS", "CHA"])
        assert save_proficiencies(archetype, {Ability.STR: 5}) == [Ability.WIS, Ability.CHA]

    def test_derived_from_highest(self) -> None:
        """Test the two highest modifiers win."""
        archetype = Archetype(id="brute", label="Brute")
        mods = {Ability.STR: 1, Ability.DEX: 0, Ability.CON: 3, Ability.INT: -1, Ability.WIS: 2}
        assert save_proficiencies(archetype, mods) == [Ability.CON, Ability.WIS]

    def test_ties_follow_key_order(self) -> None:
        """Test ties break by STR, DEX, CON, INT, WIS, CHA."""
        mods = {key: 0 for key in Ability}
        assert save_proficiencies(None, mods) == [Ability.STR, Ability.DEX]

        mods[Ability.CHA] = 2
        mods[Ability.WIS] = 2
        assert save_proficiencies(None, mods) == [Ability.WIS, Ability.CHA]

    def test_always_two_distinct(self) -> None:
        """Test exactly two distinct proficiencies."""
        profs = save_proficiencies(None, {Ability.DEX: 4})
        assert len(profs) == 2
        assert len(set(profs)) == 2
