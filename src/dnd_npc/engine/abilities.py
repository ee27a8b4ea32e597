"""Ability score generation from an archetype and a tier.

Above Novice every primary ability gets a flat +4 and every secondary a
flat +2, then the tier's boosts on top, clamped to [8, 20]. Novice NPCs
use a compressed range instead: one random primary at 14, one more
ability at 12, everything clamped to [8, 14]. The tier's secondary
boost is never applied at Novice.
"""

from __future__ import annotations

import random

from dnd_npc.core.constants import (
    BASE_ABILITY_SCORE,
    MAX_ABILITY_SCORE,
    MIN_ABILITY_SCORE,
    NOVICE_MAX_ABILITY_SCORE,
    NOVICE_PRIMARY_SCORE,
    NOVICE_SECONDARY_SCORE,
    PRIMARY_ABILITY_BONUS,
    SECONDARY_ABILITY_BONUS,
)
from dnd_npc.core.logging import get_logger
from dnd_npc.models.enums import Ability
from dnd_npc.models.npc import modifiers_for
from dnd_npc.models.tables import Archetype
from dnd_npc.models.tiers import TierConfig


logger = get_logger(__name__)


def clamp(value: int, low: int, high: int) -> int:
    """Clamp an integer into [low, high]."""
    return max(low, min(high, value))


def score_range(tier_info: TierConfig) -> tuple[int, int]:
    """Inclusive score bounds for a tier."""
    if tier_info.novice:
        return MIN_ABILITY_SCORE, NOVICE_MAX_ABILITY_SCORE
    return MIN_ABILITY_SCORE, MAX_ABILITY_SCORE


def generate_ability_scores(
    archetype: Archetype | None,
    tier_info: TierConfig,
    rng: random.Random,
) -> dict[Ability, int]:
    """Generate the six ability scores.

    Args:
        archetype: Archetype whose primary/secondary lists drive the
            boosts, or None for a baseline profile.
        tier_info: Scaling row of the target tier.
        rng: Random source (only used at Novice).

    Returns:
        Mapping with exactly the six ability keys.
    """
    scores = {key: BASE_ABILITY_SCORE for key in Ability.ordered()}
    low, high = score_range(tier_info)

    if archetype is not None:
        if tier_info.novice:
            _apply_novice_profile(scores, archetype, rng)
        else:
            for key in archetype.primary:
                scores[key] += PRIMARY_ABILITY_BONUS + tier_info.primary_boost
            for key in archetype.secondary:
                scores[key] += SECONDARY_ABILITY_BONUS + tier_info.secondary_boost

    clamped = {key: clamp(value, low, high) for key, value in scores.items()}
    logger.debug(
        "Ability scores generated",
        archetype=archetype.id if archetype else None,
        tier=tier_info.tier,
        scores={str(k): v for k, v in clamped.items()},
    )
    return clamped


def _apply_novice_profile(
    scores: dict[Ability, int],
    archetype: Archetype,
    rng: random.Random,
) -> None:
    if not archetype.primary:
        return

    highlighted = rng.choice(archetype.primary)
    scores[highlighted] = NOVICE_PRIMARY_SCORE

    others = [key for key in archetype.primary if key != highlighted]
    if others:
        second: Ability | None = others[0]
    else:
        second = next((key for key in archetype.secondary if key != highlighted), None)
    if second is not None:
        scores[second] = NOVICE_SECONDARY_SCORE


def ability_modifiers(scores: dict[Ability, int]) -> dict[Ability, int]:
    """Modifiers floor((score - 10) / 2), recomputed from the scores."""
    return modifiers_for(scores)


__all__ = [
    "clamp",
    "score_range",
    "generate_ability_scores",
    "ability_modifiers",
]
