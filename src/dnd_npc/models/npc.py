"""Pydantic V2 schemas for generated NPCs.

StatBlock is the output of the stat engine; NPCRecord is the full
generated NPC (identity plus the stat block fields). Ability modifiers,
initiative and saving throws are computed fields so they can never drift
from the scores they are derived from.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field

from dnd_npc.core.constants import RANDOM_CHOICE, RECORD_VERSION
from dnd_npc.models.enums import Ability, Alignment, ArchetypeId, Sex, Tier
from dnd_npc.models.tiers import TierConfig


def ability_modifier(score: int) -> int:
    """Calculate an ability modifier, floor((score - 10) / 2)."""
    return (score - 10) // 2


def modifiers_for(scores: dict[Ability, int]) -> dict[Ability, int]:
    """Modifiers for every ability; missing scores read as 10."""
    return {key: ability_modifier(scores.get(key, 10)) for key in Ability.ordered()}


def saving_throws_for(
    mods: dict[Ability, int],
    proficiencies: list[Ability],
    proficiency_bonus: int,
) -> dict[Ability, int]:
    """Saving throw bonuses: modifier plus PB for proficient abilities."""
    return {
        key: mods.get(key, 0) + (proficiency_bonus if key in proficiencies else 0)
        for key in Ability.ordered()
    }


# =============================================================================
# Behaviors
# =============================================================================


class RollPayload(BaseModel):
    """Numbers needed to re-roll a resolved attack on demand.

    Attributes:
        attack_bonus: Bonus added to the d20 attack roll.
        damage_dice: Base damage dice (e.g. '2d6'), if any.
        bonus_dice: Archetype bonus damage dice, if any.
        damage_mod: Flat modifier added to damage.
    """

    model_config = ConfigDict(frozen=True)

    attack_bonus: int
    damage_dice: str | None = None
    bonus_dice: str | None = None
    damage_mod: int = 0


class ResolvedBehavior(BaseModel):
    """A trait, action or reaction with its placeholders substituted."""

    model_config = ConfigDict(frozen=True)

    name: str
    text: str
    roll: RollPayload | None = None


# =============================================================================
# Stat Block
# =============================================================================


class StatBlock(BaseModel):
    """Everything the stat engine computes for one archetype/tier/race.

    Attributes:
        archetype: Resolved archetype id (None when tables hold none).
        archetype_label: Display label for the archetype.
        tier: Resolved tier.
        tier_info: The tier's scaling row.
        ability_scores: Six ability scores.
        save_profs: The two saving throw proficiencies.
        ac: Armor class.
        hp: Hit points.
        speed: Walking speed in feet.
        traits: Resolved traits.
        actions: Resolved actions (multiattack first, when present).
        reactions: Resolved reactions.
    """

    model_config = ConfigDict(frozen=True)

    archetype: ArchetypeId | None
    archetype_label: str
    tier: Tier
    tier_info: TierConfig
    ability_scores: dict[Ability, int]
    save_profs: list[Ability]
    ac: int
    hp: int
    speed: int
    traits: list[ResolvedBehavior] = Field(default_factory=list)
    actions: list[ResolvedBehavior] = Field(default_factory=list)
    reactions: list[ResolvedBehavior] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ability_mods(self) -> dict[Ability, int]:
        return modifiers_for(self.ability_scores)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def initiative(self) -> int:
        return self.ability_mods[Ability.DEX]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def saving_throws(self) -> dict[Ability, int]:
        return saving_throws_for(
            self.ability_mods, self.save_profs, self.tier_info.proficiency_bonus
        )


# =============================================================================
# Generation Criteria
# =============================================================================


class RaceChoice(BaseModel):
    """A concrete race selection."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    label: str = Field(min_length=1)


RandomChoice = Literal["random"]


class GenerationCriteria(BaseModel):
    """What the caller asked for; every field may be 'random'."""

    model_config = ConfigDict(frozen=True)

    sex: Sex | RandomChoice = RANDOM_CHOICE
    race: RaceChoice | RandomChoice = RANDOM_CHOICE
    alignment: Alignment | RandomChoice = RANDOM_CHOICE
    archetype: str = RANDOM_CHOICE
    tier: str = Tier.NOVICE.value


# =============================================================================
# NPC Record
# =============================================================================


class NPCRecord(BaseModel):
    """A generated NPC: identity fields plus the stat block fields.

    The stat block fields are only ever replaced together through
    apply_stats().
    """

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    # Identity
    id: str = Field(default_factory=lambda: str(uuid4()))
    created_at: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    sex: Sex
    race: str
    race_id: str
    alignment: Alignment
    name: str
    physical_description: str = ""
    psych_description: str = ""
    face: str | None = None
    notes: str = ""
    version: int = RECORD_VERSION

    # Stat block
    tier: Tier = Tier.NOVICE
    archetype: ArchetypeId | None = None
    archetype_label: str = ""
    cr: str = "1/2"
    proficiency_bonus: int = 2
    armor_class: int = 10
    hit_points: int = 1
    speed: int = 30
    ability_scores: dict[Ability, int] = Field(
        default_factory=lambda: {key: 10 for key in Ability.ordered()}
    )
    saving_throw_proficiencies: list[Ability] = Field(default_factory=list)
    traits: list[ResolvedBehavior] = Field(default_factory=list)
    actions: list[ResolvedBehavior] = Field(default_factory=list)
    reactions: list[ResolvedBehavior] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ability_mods(self) -> dict[Ability, int]:
        return modifiers_for(self.ability_scores)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def initiative(self) -> int:
        return self.ability_mods[Ability.DEX]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def saving_throws(self) -> dict[Ability, int]:
        return saving_throws_for(
            self.ability_mods, self.saving_throw_proficiencies, self.proficiency_bonus
        )

    def apply_stats(self, block: StatBlock) -> None:
        """Replace every stat block field from a freshly computed block."""
        self.tier = block.tier
        self.archetype = block.archetype
        self.archetype_label = block.archetype_label
        self.cr = block.tier_info.cr
        self.proficiency_bonus = block.tier_info.proficiency_bonus
        self.armor_class = block.ac
        self.hit_points = block.hp
        self.speed = block.speed
        self.ability_scores = dict(block.ability_scores)
        self.saving_throw_proficiencies = list(block.save_profs)
        self.traits = list(block.traits)
        self.actions = list(block.actions)
        self.reactions = list(block.reactions)

    def is_proficient(self, ability: Ability) -> bool:
        """Whether the NPC adds PB to saves with this ability."""
        return ability in self.saving_throw_proficiencies


__all__ = [
    "ability_modifier",
    "modifiers_for",
    "saving_throws_for",
    "RollPayload",
    "ResolvedBehavior",
    "StatBlock",
    "RaceChoice",
    "GenerationCriteria",
    "NPCRecord",
]
