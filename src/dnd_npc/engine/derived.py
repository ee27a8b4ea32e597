"""Derived statistics: armor class, hit points, speed and saving throws."""

from __future__ import annotations

from dnd_npc.core.constants import (
    DEFAULT_SPEED,
    MAX_ARMOR_CLASS,
    MIN_ARMOR_CLASS,
    MIN_HIT_POINTS,
    SAVE_PROFICIENCY_COUNT,
    SHORT_LEGGED_SPEED,
)
from dnd_npc.engine.abilities import clamp
from dnd_npc.models.enums import Ability, ArchetypeId
from dnd_npc.models.npc import saving_throws_for
from dnd_npc.models.tables import Archetype, Race
from dnd_npc.models.tiers import ARCHETYPE_AC_ADJUST, TierConfig


def armor_class(tier_info: TierConfig, archetype_id: ArchetypeId | None) -> int:
    """Tier base plus the archetype adjustment, clamped to [10, 20]."""
    adjust = ARCHETYPE_AC_ADJUST[archetype_id] if archetype_id is not None else 0
    return clamp(tier_info.ac_base + adjust, MIN_ARMOR_CLASS, MAX_ARMOR_CLASS)


def hit_points(tier_info: TierConfig, con_mod: int) -> int:
    """Tier base plus CON modifier times the tier multiplier, at least 1."""
    return max(MIN_HIT_POINTS, tier_info.hp_base + con_mod * tier_info.hp_per_con_mod)


def walking_speed(race: Race | None) -> int:
    """25 ft. for short-legged races, 30 ft. otherwise."""
    if race is not None and race.short_legged:
        return SHORT_LEGGED_SPEED
    return DEFAULT_SPEED


def save_proficiencies(
    archetype: Archetype | None,
    mods: dict[Ability, int],
) -> list[Ability]:
    """The archetype's declared pair, else the two highest modifiers.

    Ties keep the stable STR, DEX, CON, INT, WIS, CHA order.
    """
    if archetype is not None and archetype.save_profs is not None:
        return list(archetype.save_profs)
    ranked = sorted(Ability.ordered(), key=lambda key: -mods.get(key, 0))
    return ranked[:SAVE_PROFICIENCY_COUNT]


def saving_throws(
    mods: dict[Ability, int],
    proficiencies: list[Ability],
    proficiency_bonus: int,
) -> dict[Ability, int]:
    """Modifier plus PB for proficient abilities, modifier otherwise."""
    return saving_throws_for(mods, proficiencies, proficiency_bonus)


__all__ = [
    "armor_class",
    "hit_points",
    "walking_speed",
    "save_proficiencies",
    "saving_throws",
]
