"""Pydantic V2 schemas for the static data tables.

The JSON tables use camelCase keys (``saveProfs``, ``attackAbility``,
``damageByTier``); every model accepts both camelCase and snake_case.
All models are frozen and use tuples for collections so a loaded
GameTables can be shared read-only between generation calls.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from dnd_npc.core.constants import WILDCARD_TAG
from dnd_npc.models.enums import Ability, Alignment, ArchetypeId, BehaviorCategory, Tier


class TableModel(BaseModel):
    """Base class for table records."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )


# =============================================================================
# Races & Identity
# =============================================================================


class Race(TableModel):
    """A playable race and its naming rules.

    Attributes:
        id: Stable race id (e.g. 'dwarf').
        label: Display label (e.g. 'Dwarf').
        name_format: 'first_last' or 'first_nickname_last'.
        short_legged: Whether the race walks at 25 ft.
        name_file: JSON file holding the race's name lists.
    """

    id: str = Field(min_length=1)
    label: str = Field(min_length=1)
    name_format: str = "first_last"
    short_legged: bool = False
    name_file: str | None = None


class NameList(TableModel):
    """Name parts for one race."""

    male_first: tuple[str, ...] = ()
    female_first: tuple[str, ...] = ()
    last: tuple[str, ...] = ()
    nicknames: tuple[str, ...] = ()


class PhysicalSentences(TableModel):
    """Physical description sentences, generic and per race label."""

    generic: tuple[str, ...] = ()
    by_race: dict[str, tuple[str, ...]] = Field(default_factory=dict)


# =============================================================================
# Archetypes & Behaviors
# =============================================================================


class Archetype(TableModel):
    """A combat role definition.

    Attributes:
        id: Archetype id.
        label: Display label.
        primary: Abilities that receive the large boost.
        secondary: Abilities that receive the small boost.
        save_profs: Declared saving throw proficiencies (exactly two) or
            None to derive them from the highest modifiers.
        tags: Descriptive tags.
        bonus_damage_by_tier: Extra damage dice added to resolved
            templates, keyed by tier.
    """

    id: ArchetypeId
    label: str
    primary: tuple[Ability, ...] = ()
    secondary: tuple[Ability, ...] = ()
    save_profs: tuple[Ability, Ability] | None = None
    tags: tuple[str, ...] = ()
    bonus_damage_by_tier: dict[Tier, str] = Field(default_factory=dict)

    @field_validator("save_profs", mode="before")
    @classmethod
    def require_two_distinct(cls, value: Any) -> Any:
        """Drop declared save proficiencies unless they name two distinct abilities."""
        if value is None:
            return None
        keys = list(value)
        if len(keys) != 2 or keys[0] == keys[1]:
            return None
        return keys

    def bonus_damage_for(self, tier: Tier) -> str | None:
        """Bonus damage dice at a tier, if any."""
        return self.bonus_damage_by_tier.get(tier) or None


class BehaviorTemplate(TableModel):
    """A tagged, placeholder-bearing trait, action or reaction.

    Attributes:
        name: Display name; duplicates are avoided within a category.
        tags: Archetype ids or the wildcard 'any'.
        text: Text with {toHit}, {dc}, {damage}, {pb} and {mod}
            placeholders.
        attack_ability: Ability used for attack rolls.
        save_ability: Ability used for the save DC.
        damage: Flat damage dice (e.g. '1d8').
        damage_by_tier: Damage dice keyed by tier; wins over ``damage``.
    """

    name: str = Field(min_length=1)
    tags: frozenset[str] = frozenset()
    text: str = ""
    attack_ability: Ability | None = None
    save_ability: Ability | None = None
    damage: str | None = None
    damage_by_tier: dict[Tier, str] = Field(default_factory=dict)

    @property
    def is_attack(self) -> bool:
        """Whether the template can be named by a multiattack."""
        return self.attack_ability is not None

    @property
    def acting_ability(self) -> Ability | None:
        """Ability whose modifier drives the resolved numbers."""
        return self.attack_ability or self.save_ability

    def matches(self, tag: str) -> bool:
        """Whether the template carries a tag."""
        return tag in self.tags

    def damage_dice_for(self, tier: Tier) -> str | None:
        """Tier-specific dice, else flat dice, else None."""
        return self.damage_by_tier.get(tier) or self.damage or None


# =============================================================================
# Reference Material
# =============================================================================


class SpellEntry(TableModel):
    """A spell the reference linker can recognise."""

    name: str = Field(min_length=1)
    level: int = Field(default=0, ge=0, le=9)
    school: str = ""
    casting_time: str = "1 action"
    description: str = ""


class ConditionEntry(TableModel):
    """A condition the reference linker can recognise."""

    name: str = Field(min_length=1)
    description: str = ""


# =============================================================================
# Aggregate
# =============================================================================


class GameTables(TableModel):
    """Every static table the engine and generator read.

    Instances are immutable and passed explicitly to the engine; nothing
    in the package caches them at module level.
    """

    races: tuple[Race, ...] = ()
    names: dict[str, NameList] = Field(default_factory=dict)
    archetypes: tuple[Archetype, ...] = ()
    traits: tuple[BehaviorTemplate, ...] = ()
    actions: tuple[BehaviorTemplate, ...] = ()
    reactions: tuple[BehaviorTemplate, ...] = ()
    physical: PhysicalSentences = Field(default_factory=PhysicalSentences)
    psych: dict[Alignment, tuple[str, ...]] = Field(default_factory=dict)
    faces: tuple[str, ...] = ()
    spells: tuple[SpellEntry, ...] = ()
    conditions: tuple[ConditionEntry, ...] = ()

    def templates(self, category: BehaviorCategory | str) -> tuple[BehaviorTemplate, ...]:
        """Templates for one behavior category."""
        return getattr(self, BehaviorCategory(category).value)

    def get_archetype(self, archetype_id: ArchetypeId | str | None) -> Archetype | None:
        """Find an archetype by id; None when unknown."""
        parsed = ArchetypeId.parse(archetype_id)
        if parsed is None:
            return None
        return next((a for a in self.archetypes if a.id == parsed), None)

    def get_race(self, race: str | None) -> Race | None:
        """Find a race by id or label, case-insensitively."""
        if not race:
            return None
        lookup = race.strip().lower()
        return next(
            (r for r in self.races if r.id.lower() == lookup or r.label.lower() == lookup),
            None,
        )

    def names_for(self, race_id: str) -> NameList:
        """Name lists for a race, empty when the race has none."""
        return self.names.get(race_id, NameList())

    def wildcard_templates(self, category: BehaviorCategory | str) -> list[BehaviorTemplate]:
        """Templates tagged with the wildcard tag."""
        return [t for t in self.templates(category) if t.matches(WILDCARD_TAG)]


__all__ = [
    "TableModel",
    "Race",
    "NameList",
    "PhysicalSentences",
    "Archetype",
    "BehaviorTemplate",
    "SpellEntry",
    "ConditionEntry",
    "GameTables",
]
