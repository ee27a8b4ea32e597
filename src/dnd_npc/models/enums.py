"""Enumeration types for the D&D NPC generator.

These closed enumerations back every table lookup in the engine: a tier
or archetype id that is not a member never reaches a lookup, it is
coerced first.
"""

from __future__ import annotations

from enum import StrEnum


class Ability(StrEnum):
    """The six D&D 5E ability scores, keyed by abbreviation."""

    STR = "STR"
    DEX = "DEX"
    CON = "CON"
    INT = "INT"
    WIS = "WIS"
    CHA = "CHA"

    @classmethod
    def ordered(cls) -> tuple[Ability, ...]:
        """Stable key order STR, DEX, CON, INT, WIS, CHA."""
        return tuple(cls)

    @classmethod
    def mental(cls) -> tuple[Ability, ...]:
        """Mental abilities in tie-break order."""
        return (cls.INT, cls.WIS, cls.CHA)


class Tier(StrEnum):
    """NPC power level, lowest first."""

    NOVICE = "Novice"
    TRAINED = "Trained"
    VETERAN = "Veteran"
    ELITE = "Elite"
    LEGENDARY = "Legendary"

    @classmethod
    def coerce(cls, value: str | Tier | None) -> Tier:
        """Resolve a tier label case-insensitively, falling back to Novice.

        Args:
            value: Tier member or label such as 'veteran'.

        Returns:
            The matching Tier, or Tier.NOVICE for unknown input.
        """
        if isinstance(value, Tier):
            return value
        if isinstance(value, str):
            lookup = value.strip().lower()
            for member in cls:
                if member.value.lower() == lookup:
                    return member
        return cls.NOVICE


class ArchetypeId(StrEnum):
    """Combat roles an NPC can be built around."""

    MARTIAL = "martial"
    BRUTE = "brute"
    SKIRMISHER = "skirmisher"
    ROGUE = "rogue"
    CASTER = "caster"
    CLERIC = "cleric"

    @property
    def is_pure_caster(self) -> bool:
        """Pure casters never receive a multiattack."""
        return self is ArchetypeId.CASTER

    @classmethod
    def parse(cls, value: str | ArchetypeId | None) -> ArchetypeId | None:
        """Resolve an archetype id case-insensitively.

        Returns:
            The matching member, or None when the value is unknown.
        """
        if isinstance(value, ArchetypeId):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return None
        return None


class BehaviorCategory(StrEnum):
    """Stat block sections filled from behavior templates."""

    TRAITS = "traits"
    ACTIONS = "actions"
    REACTIONS = "reactions"


class Sex(StrEnum):
    """NPC sex options offered by the generator."""

    MALE = "Male"
    FEMALE = "Female"


class Alignment(StrEnum):
    """Simplified three-way alignment used for personality sentences."""

    GOOD = "Good"
    NEUTRAL = "Neutral"
    EVIL = "Evil"


class ReferenceKind(StrEnum):
    """Kinds of names the reference index can match."""

    SPELL = "spell"
    CONDITION = "condition"


__all__ = [
    "Ability",
    "Tier",
    "ArchetypeId",
    "BehaviorCategory",
    "Sex",
    "Alignment",
    "ReferenceKind",
]
