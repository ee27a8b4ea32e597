"""Tests for ability score generation."""

from __future__ import annotations

import random

import pytest

from dnd_npc.engine.abilities import clamp, generate_ability_scores, score_range
from dnd_npc.models.enums import Ability, Tier
from dnd_npc.models.tables import Archetype, GameTables
from dnd_npc.models.tiers import TIER_TABLE


@pytest.fixture
def martial() -> Archetype:
    """Provide a STR-primary, CON-secondary archetype."""
    return Archetype(id="martial", label="Martial", primary=["STR"], secondary=["CON"])


class TestAboveNovice:
    """Tests for the flat boost rules."""

    def test_veteran_martial(self, martial: Archetype) -> None:
        """Test +4/+2 plus the Veteran boosts."""
        scores = generate_ability_scores(martial, TIER_TABLE[Tier.VETERAN], random.Random(0))

        assert scores[Ability.STR] == 16
        assert scores[Ability.CON] == 13
        assert scores[Ability.DEX] == 10

    def test_scores_clamped_to_twenty(self) -> None:
        """Test duplicated primaries never exceed 20."""
        archetype = Archetype(
            id="brute", label="Brute", primary=["STR", "STR", "STR"], secondary=[]
        )
        scores = generate_ability_scores(archetype, TIER_TABLE[Tier.LEGENDARY], random.Random(0))

        assert scores[Ability.STR] == 20

    def test_no_archetype_is_baseline(self) -> None:
        """Test a missing archetype leaves every score at 10."""
        scores = generate_ability_scores(None, TIER_TABLE[Tier.ELITE], random.Random(0))
        assert set(scores.values()) == {10}


class TestNovice:
    """Tests for the compressed Novice rules."""

    def test_single_primary_uses_first_secondary(self, martial: Archetype) -> None:
        """Test the 12 goes to the first secondary when there is one primary."""
        scores = generate_ability_scores(martial, TIER_TABLE[Tier.NOVICE], random.Random(0))

        assert scores[Ability.STR] == 14
        assert scores[Ability.CON] == 12
        assert all(8 <= value <= 14 for value in scores.values())

    def test_two_primaries(self) -> None:
        """Test one primary gets 14 and the other 12."""
        archetype = Archetype(id="brute", label="Brute", primary=["STR", "CON"])
        for seed in range(10):
            scores = generate_ability_scores(
                archetype, TIER_TABLE[Tier.NOVICE], random.Random(seed)
            )
            assert sorted([scores[Ability.STR], scores[Ability.CON]]) == [12, 14]

    def test_secondary_boost_not_applied(self) -> None:
        """Test untouched secondaries stay at 10 for Novice."""
        archetype = Archetype(
            id="rogue", label="Rogue", primary=["DEX"], secondary=["INT", "CHA"]
        )
        scores = generate_ability_scores(archetype, TIER_TABLE[Tier.NOVICE], random.Random(3))

        assert scores[Ability.DEX] == 14
        assert scores[Ability.INT] == 12
        assert scores[Ability.CHA] == 10


class TestScoreBounds:
    """Property tests over every tier and archetype."""

    def test_all_tiers_and_archetypes(self, tables: GameTables) -> None:
        """Test every score lies in the tier's range."""
        rng = random.Random(99)
        for archetype in tables.archetypes:
            for tier, info in TIER_TABLE.items():
                low, high = score_range(info)
                scores = generate_ability_scores(archetype, info, rng)
                assert set(scores) == set(Ability)
                assert all(low <= value <= high for value in scores.values()), (archetype.id, tier)

    def test_clamp(self) -> None:
        """Test clamp bounds both ends."""
        assert clamp(25, 8, 20) == 20
        assert clamp(3, 8, 20) == 8
        assert clamp(12, 8, 20) == 12
