"""Stat engine: the full archetype/tier/race to stat block computation.

compute_stats_for() is a pure recompute. It is used both when an NPC is
first generated and whenever its tier or archetype is changed later; in
both cases every engine field is produced from scratch.
"""

from __future__ import annotations

import random

from dnd_npc.core.config import Settings, get_settings
from dnd_npc.core.constants import MAX_DUPLICATE_RETRIES
from dnd_npc.core.logging import get_logger
from dnd_npc.engine.abilities import ability_modifiers, generate_ability_scores
from dnd_npc.engine.behaviors import BehaviorSelector
from dnd_npc.engine.derived import armor_class, hit_points, save_proficiencies, walking_speed
from dnd_npc.models.enums import Ability, ArchetypeId, Tier
from dnd_npc.models.npc import StatBlock
from dnd_npc.models.tables import Archetype, GameTables
from dnd_npc.models.tiers import get_tier_info


logger = get_logger(__name__)


def archetype_options(tables: GameTables) -> list[tuple[str, str]]:
    """(id, label) pairs for populating an archetype selector."""
    return [(archetype.id.value, archetype.label) for archetype in tables.archetypes]


class StatEngine:
    """Computes stat blocks from read-only tables.

    The engine holds no mutable state besides its random source, so one
    instance can serve any number of generation calls.

    Example:
        >>> engine = StatEngine(tables, rng=random.Random(42))
        >>> block = engine.compute_stats_for("martial", "Veteran", "Human")
        >>> block.tier_info.proficiency_bonus, block.tier_info.cr
        (3, '6')
    """

    def __init__(
        self,
        tables: GameTables,
        *,
        rng: random.Random | None = None,
        retry_cap: int = MAX_DUPLICATE_RETRIES,
    ) -> None:
        """Initialize the engine.

        Args:
            tables: Loaded tables; never modified.
            rng: Default random source. A fresh Random is used if omitted.
            retry_cap: Duplicate-avoidance retries per behavior slot.
        """
        self.tables = tables
        self.rng = rng or random.Random()
        self.selector = BehaviorSelector(tables, retry_cap=retry_cap)

    @classmethod
    def from_settings(
        cls,
        tables: GameTables,
        settings: Settings | None = None,
        *,
        rng: random.Random | None = None,
    ) -> StatEngine:
        """Create an engine configured from application settings."""
        settings = settings or get_settings()
        return cls(tables, rng=rng, retry_cap=settings.generation.duplicate_retry_cap)

    def resolve_archetype(self, archetype_id: ArchetypeId | str | None) -> Archetype | None:
        """Look up an archetype, falling back to the first one in the table."""
        archetype = self.tables.get_archetype(archetype_id)
        if archetype is not None:
            return archetype
        if not self.tables.archetypes:
            logger.warning("No archetypes loaded; using baseline profile", requested=archetype_id)
            return None
        fallback = self.tables.archetypes[0]
        logger.warning(
            "Unknown archetype coerced",
            requested=archetype_id,
            archetype=fallback.id.value,
        )
        return fallback

    def compute_stats_for(
        self,
        archetype_id: ArchetypeId | str | None,
        tier: Tier | str | None,
        race_label: str | None,
        *,
        rng: random.Random | None = None,
    ) -> StatBlock:
        """Compute a complete stat block.

        Args:
            archetype_id: Archetype id; unknown ids use the first archetype.
            tier: Tier or tier label; unknown labels use Novice.
            race_label: Race id or label, used for walking speed.
            rng: Random source for this call; the engine's own otherwise.

        Returns:
            A fully populated StatBlock.
        """
        rng = rng or self.rng
        tier_info = get_tier_info(tier)
        if isinstance(tier, str) and tier_info.tier.value.lower() != tier.strip().lower():
            logger.warning("Unknown tier coerced", requested=tier, tier=tier_info.tier.value)

        archetype = self.resolve_archetype(archetype_id)
        race = self.tables.get_race(race_label)

        scores = generate_ability_scores(archetype, tier_info, rng)
        mods = ability_modifiers(scores)
        profs = save_proficiencies(archetype, mods)
        chosen = self.selector.select(archetype, tier_info, mods, rng)

        block = StatBlock(
            archetype=archetype.id if archetype else None,
            archetype_label=archetype.label if archetype else "",
            tier=tier_info.tier,
            tier_info=tier_info,
            ability_scores=scores,
            save_profs=profs,
            ac=armor_class(tier_info, archetype.id if archetype else None),
            hp=hit_points(tier_info, mods[Ability.CON]),
            speed=walking_speed(race),
            traits=chosen.traits,
            actions=chosen.actions,
            reactions=chosen.reactions,
        )

        logger.debug(
            "Stat block computed",
            archetype=block.archetype,
            tier=block.tier.value,
            race=race_label,
            ac=block.ac,
            hp=block.hp,
        )
        return block


__all__ = [
    "StatEngine",
    "archetype_options",
]
