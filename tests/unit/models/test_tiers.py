"""Tests for the tier table and tier enumeration."""

from __future__ import annotations

import pytest

from dnd_npc.models.enums import ArchetypeId, BehaviorCategory, Tier
from dnd_npc.models.tiers import ARCHETYPE_AC_ADJUST, TIER_TABLE, get_tier_info, tier_options


class TestTierTable:
    """Tests for the fixed tier scaling rows."""

    def test_every_tier_has_a_row(self) -> None:
        """Test the table is exhaustive over the enumeration."""
        assert set(TIER_TABLE) == set(Tier)
        for tier, info in TIER_TABLE.items():
            assert info.tier is tier

    def test_every_archetype_has_ac_adjustment(self) -> None:
        """Test the AC adjustment table is exhaustive."""
        assert set(ARCHETYPE_AC_ADJUST) == set(ArchetypeId)

    def test_veteran_row(self) -> None:
        """Test the Veteran row values."""
        info = TIER_TABLE[Tier.VETERAN]
        assert info.cr == "6"
        assert info.proficiency_bonus == 3
        assert info.hp_base == 30
        assert info.hp_per_con_mod == 6
        assert (info.traits, info.actions, info.reactions) == (2, 2, 1)
        assert info.multiattack == 2

    def test_only_novice_is_flagged(self) -> None:
        """Test the compressed Novice rules apply to Novice only."""
        assert [tier for tier, info in TIER_TABLE.items() if info.novice] == [Tier.NOVICE]

    def test_multiattack_counts(self) -> None:
        """Test multiattack counts per tier."""
        counts = {tier: info.multiattack for tier, info in TIER_TABLE.items()}
        assert counts == {
            Tier.NOVICE: 0,
            Tier.TRAINED: 2,
            Tier.VETERAN: 2,
            Tier.ELITE: 3,
            Tier.LEGENDARY: 3,
        }

    def test_proficiency_bonus_never_decreases(self) -> None:
        """Test that higher tiers never lose proficiency."""
        bonuses = [TIER_TABLE[tier].proficiency_bonus for tier in Tier]
        assert bonuses == sorted(bonuses)

    def test_rows_are_frozen(self) -> None:
        """Test that tier rows cannot be modified."""
        with pytest.raises(ValueError):
            TIER_TABLE[Tier.NOVICE].hp_base = 99  # type: ignore[misc]

    def test_count_for_category(self) -> None:
        """Test per-category counts."""
        info = TIER_TABLE[Tier.LEGENDARY]
        assert info.count_for(BehaviorCategory.TRAITS) == 3
        assert info.count_for(BehaviorCategory.ACTIONS) == 3
        assert info.count_for("reactions") == 2


class TestTierLookup:
    """Tests for tier coercion and options."""

    @pytest.mark.parametrize("label", ["Elite", "elite", "  ELITE "])
    def test_case_insensitive_lookup(self, label: str) -> None:
        """Test labels resolve regardless of case and whitespace."""
        assert get_tier_info(label).tier is Tier.ELITE

    @pytest.mark.parametrize("label", ["Godlike", "", None])
    def test_unknown_falls_back_to_novice(self, label: str | None) -> None:
        """Test unknown tiers coerce to Novice."""
        assert get_tier_info(label).tier is Tier.NOVICE

    def test_tier_options_in_order(self) -> None:
        """Test options are listed lowest tier first."""
        assert tier_options() == [
            Tier.NOVICE,
            Tier.TRAINED,
            Tier.VETERAN,
            Tier.ELITE,
            Tier.LEGENDARY,
        ]
