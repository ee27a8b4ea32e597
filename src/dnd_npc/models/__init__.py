"""Pydantic V2 schemas for the D&D NPC generator.

Submodules:
    enums: Closed enumerations (Ability, Tier, ArchetypeId, ...).
    tiers: Tier scaling table and archetype armor adjustments.
    tables: Static data table records (archetypes, templates, races, spells).
    npc: Generation outputs (StatBlock, NPCRecord) and criteria.
"""

from __future__ import annotations

from dnd_npc.models.enums import (
    Ability,
    Alignment,
    ArchetypeId,
    BehaviorCategory,
    ReferenceKind,
    Sex,
    Tier,
)
from dnd_npc.models.npc import (
    GenerationCriteria,
    NPCRecord,
    RaceChoice,
    ResolvedBehavior,
    RollPayload,
    StatBlock,
    ability_modifier,
    modifiers_for,
    saving_throws_for,
)
from dnd_npc.models.tables import (
    Archetype,
    BehaviorTemplate,
    ConditionEntry,
    GameTables,
    NameList,
    PhysicalSentences,
    Race,
    SpellEntry,
)
from dnd_npc.models.tiers import (
    ARCHETYPE_AC_ADJUST,
    TIER_TABLE,
    TierConfig,
    get_tier_info,
    tier_options,
)


__all__ = [
    # Enumerations
    "Ability",
    "Alignment",
    "ArchetypeId",
    "BehaviorCategory",
    "ReferenceKind",
    "Sex",
    "Tier",
    # Tiers
    "TierConfig",
    "TIER_TABLE",
    "ARCHETYPE_AC_ADJUST",
    "get_tier_info",
    "tier_options",
    # Tables
    "Archetype",
    "BehaviorTemplate",
    "ConditionEntry",
    "GameTables",
    "NameList",
    "PhysicalSentences",
    "Race",
    "SpellEntry",
    # NPC
    "GenerationCriteria",
    "NPCRecord",
    "RaceChoice",
    "ResolvedBehavior",
    "RollPayload",
    "StatBlock",
    "ability_modifier",
    "modifiers_for",
    "saving_throws_for",
]
