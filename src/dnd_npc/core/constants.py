"""Application-wide constants for the D&D NPC generator.

This module defines the rule constants shared by the generation engine,
the dice simulator and the NPC library.
"""

from __future__ import annotations

# =============================================================================
# Ability Scores
# =============================================================================

BASE_ABILITY_SCORE = 10
"""Starting value for every ability before archetype and tier boosts."""

MIN_ABILITY_SCORE = 8
"""Lowest score a generated NPC may have."""

MAX_ABILITY_SCORE = 20
"""Highest score a generated NPC may have above the Novice tier."""

NOVICE_MAX_ABILITY_SCORE = 14
"""Highest score a Novice NPC may have."""

NOVICE_PRIMARY_SCORE = 14
"""Score given to the single highlighted Novice ability."""

NOVICE_SECONDARY_SCORE = 12
"""Score given to the second Novice ability."""

PRIMARY_ABILITY_BONUS = 4
"""Flat bonus for every archetype primary ability (non-Novice)."""

SECONDARY_ABILITY_BONUS = 2
"""Flat bonus for every archetype secondary ability (non-Novice)."""

# =============================================================================
# Derived Statistics
# =============================================================================

MIN_ARMOR_CLASS = 10
MAX_ARMOR_CLASS = 20

MIN_HIT_POINTS = 1

DEFAULT_SPEED = 30
"""Walking speed in feet for most races."""

SHORT_LEGGED_SPEED = 25
"""Walking speed in feet for races flagged short-legged."""

SAVE_DC_BASE = 8
"""Save DC is SAVE_DC_BASE + proficiency bonus + ability modifier."""

SAVE_PROFICIENCY_COUNT = 2
"""Number of saving throws an NPC is proficient in."""

# =============================================================================
# Behavior Selection
# =============================================================================

MAX_DUPLICATE_RETRIES = 5
"""Random draws attempted per slot before a duplicate name is accepted."""

WILDCARD_TAG = "any"
"""Template tag matching every archetype."""

MULTIATTACK_NAME = "Multiattack"

# =============================================================================
# Dice
# =============================================================================

MAX_DICE_ROLLED = 100_000
"""Dice a single expression may roll before the roll fails."""

# =============================================================================
# Identity
# =============================================================================

NICKNAME_NAME_FORMAT = "first_nickname_last"
"""Race name format that inserts a quoted nickname."""

RANDOM_CHOICE = "random"
"""Criteria sentinel requesting a random pick."""

# =============================================================================
# Storage
# =============================================================================

DEFAULT_LIBRARY_CAPACITY = 100
"""Maximum NPCs kept in the library."""

RECORD_VERSION = 1
"""Schema version stamped on generated NPC records."""


__all__ = [
    "BASE_ABILITY_SCORE",
    "MIN_ABILITY_SCORE",
    "MAX_ABILITY_SCORE",
    "NOVICE_MAX_ABILITY_SCORE",
    "NOVICE_PRIMARY_SCORE",
    "NOVICE_SECONDARY_SCORE",
    "PRIMARY_ABILITY_BONUS",
    "SECONDARY_ABILITY_BONUS",
    "MIN_ARMOR_CLASS",
    "MAX_ARMOR_CLASS",
    "MIN_HIT_POINTS",
    "DEFAULT_SPEED",
    "SHORT_LEGGED_SPEED",
    "SAVE_DC_BASE",
    "SAVE_PROFICIENCY_COUNT",
    "MAX_DUPLICATE_RETRIES",
    "WILDCARD_TAG",
    "MULTIATTACK_NAME",
    "MAX_DICE_ROLLED",
    "NICKNAME_NAME_FORMAT",
    "RANDOM_CHOICE",
    "DEFAULT_LIBRARY_CAPACITY",
    "RECORD_VERSION",
]
