"""Tier scaling table and per-archetype armor adjustments.

Both tables are keyed by closed enumerations and are total: every Tier
and every ArchetypeId has exactly one row.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from dnd_npc.models.enums import ArchetypeId, Tier


ChallengeRating = Annotated[str, Field(pattern=r"^\d+(/\d+)?$", description="CR like '1/2', '6'")]


class TierConfig(BaseModel):
    """Fixed scaling values for one tier.

    Attributes:
        tier: The tier this row describes.
        cr: Challenge rating label.
        proficiency_bonus: Proficiency bonus.
        primary_boost: Extra points for each primary ability.
        secondary_boost: Extra points for each secondary ability.
        ac_base: Armor class before the archetype adjustment.
        hp_base: Hit points before the Constitution contribution.
        hp_per_con_mod: Hit points gained per point of CON modifier.
        traits: Number of traits selected.
        actions: Number of actions selected.
        reactions: Number of reactions selected.
        multiattack: Attacks named by the multiattack (0 = none).
        novice: Whether the compressed Novice score rules apply.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    tier: Tier
    cr: ChallengeRating
    proficiency_bonus: int = Field(ge=2, le=9)
    primary_boost: int = Field(ge=0)
    secondary_boost: int = Field(ge=0)
    ac_base: int
    hp_base: int = Field(ge=1)
    hp_per_con_mod: int = Field(ge=0)
    traits: int = Field(ge=0)
    actions: int = Field(ge=0)
    reactions: int = Field(ge=0)
    multiattack: int = Field(default=0, ge=0, le=3)
    novice: bool = False

    def count_for(self, category: str) -> int:
        """Number of entries required for a behavior category."""
        return {"traits": self.traits, "actions": self.actions, "reactions": self.reactions}[
            str(category)
        ]


TIER_TABLE: MappingProxyType[Tier, TierConfig] = MappingProxyType(
    {
        Tier.NOVICE: TierConfig(
            tier=Tier.NOVICE, cr="1/2", proficiency_bonus=2,
            primary_boost=0, secondary_boost=0,
            ac_base=12, hp_base=9, hp_per_con_mod=1,
            traits=1, actions=1, reactions=0,
            multiattack=0, novice=True,
        ),
        Tier.TRAINED: TierConfig(
            tier=Tier.TRAINED, cr="2", proficiency_bonus=2,
            primary_boost=1, secondary_boost=0,
            ac_base=13, hp_base=18, hp_per_con_mod=3,
            traits=1, actions=2, reactions=1,
            multiattack=2,
        ),
        Tier.VETERAN: TierConfig(
            tier=Tier.VETERAN, cr="6", proficiency_bonus=3,
            primary_boost=2, secondary_boost=1,
            ac_base=14, hp_base=30, hp_per_con_mod=6,
            traits=2, actions=2, reactions=1,
            multiattack=2,
        ),
        Tier.ELITE: TierConfig(
            tier=Tier.ELITE, cr="10", proficiency_bonus=4,
            primary_boost=3, secondary_boost=1,
            ac_base=15, hp_base=55, hp_per_con_mod=9,
            traits=2, actions=3, reactions=1,
            multiattack=3,
        ),
        Tier.LEGENDARY: TierConfig(
            tier=Tier.LEGENDARY, cr="15", proficiency_bonus=5,
            primary_boost=4, secondary_boost=2,
            ac_base=16, hp_base=90, hp_per_con_mod=12,
            traits=3, actions=3, reactions=2,
            multiattack=3,
        ),
    }
)

ARCHETYPE_AC_ADJUST: MappingProxyType[ArchetypeId, int] = MappingProxyType(
    {
        ArchetypeId.MARTIAL: 3,
        ArchetypeId.BRUTE: 1,
        ArchetypeId.SKIRMISHER: 1,
        ArchetypeId.ROGUE: 0,
        ArchetypeId.CASTER: -2,
        ArchetypeId.CLERIC: 2,
    }
)


def get_tier_info(tier: str | Tier | None) -> TierConfig:
    """Look up the scaling row for a tier, coercing unknown input to Novice."""
    return TIER_TABLE[Tier.coerce(tier)]


def tier_options() -> list[Tier]:
    """Tiers in ascending order, for populating selection controls."""
    return list(Tier)


__all__ = [
    "ChallengeRating",
    "TierConfig",
    "TIER_TABLE",
    "ARCHETYPE_AC_ADJUST",
    "get_tier_info",
    "tier_options",
]
