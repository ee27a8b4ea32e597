"""Behavior selection, multiattack synthesis and template resolution.

Selection draws a tier-sized set of templates per category from the
archetype's tagged pool (falling back to the wildcard pool), avoiding
duplicate names with a bounded number of retries. Resolution substitutes
a closed set of placeholders with numbers derived from the NPC's
modifiers and proficiency bonus:

    {toHit}   signed attack bonus (modifier + PB)
    {dc}      save DC (8 + PB + modifier)
    {damage}  damage expression ('1d8+3', or just '+3' with no dice)
    {pb}      proficiency bonus
    {mod}     signed acting modifier

Any other brace-delimited text is left untouched.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from dnd_npc.core.constants import (
    MAX_DUPLICATE_RETRIES,
    MULTIATTACK_NAME,
    SAVE_DC_BASE,
    WILDCARD_TAG,
)
from dnd_npc.core.logging import get_logger
from dnd_npc.engine.dice import build_damage_expression, format_signed
from dnd_npc.models.enums import Ability, ArchetypeId, BehaviorCategory, Tier
from dnd_npc.models.npc import ResolvedBehavior, RollPayload
from dnd_npc.models.tables import Archetype, BehaviorTemplate, GameTables
from dnd_npc.models.tiers import TierConfig


logger = get_logger(__name__)

PLACEHOLDERS: tuple[str, ...] = ("toHit", "dc", "damage", "pb", "mod")

COUNT_WORDS: dict[int, str] = {1: "one", 2: "two", 3: "three", 4: "four"}


# =============================================================================
# Template Resolution
# =============================================================================


@dataclass(frozen=True)
class ResolutionContext:
    """Numbers a template is resolved against.

    Attributes:
        tier: Tier used for tier-specific damage dice.
        proficiency_bonus: The NPC's proficiency bonus.
        ability_mods: The NPC's ability modifiers.
        archetype: Archetype supplying bonus damage dice, if any.
    """

    tier: Tier
    proficiency_bonus: int
    ability_mods: dict[Ability, int]
    archetype: Archetype | None = None

    def modifier_for(self, ability: Ability | None) -> int:
        """Modifier of an ability; absent abilities read as 0."""
        if ability is None:
            return 0
        return self.ability_mods.get(ability, 0)


def substitute_placeholders(text: str, values: dict[str, str]) -> str:
    """Replace each known ``{name}`` placeholder verbatim."""
    for name in PLACEHOLDERS:
        if name in values:
            text = text.replace("{" + name + "}", values[name])
    return text


def resolve_template(template: BehaviorTemplate, context: ResolutionContext) -> ResolvedBehavior:
    """Resolve one template into display text and an optional roll payload."""
    mod = context.modifier_for(template.acting_ability)
    pb = context.proficiency_bonus
    damage_dice = template.damage_dice_for(context.tier)
    bonus_dice = context.archetype.bonus_damage_for(context.tier) if context.archetype else None

    values = {
        "toHit": format_signed(mod + pb),
        "dc": str(SAVE_DC_BASE + pb + mod),
        "damage": build_damage_expression(damage_dice, bonus_dice, mod),
        "pb": str(pb),
        "mod": format_signed(mod),
    }

    roll = None
    if template.is_attack:
        roll = RollPayload(
            attack_bonus=mod + pb,
            damage_dice=damage_dice,
            bonus_dice=bonus_dice,
            damage_mod=mod,
        )

    return ResolvedBehavior(
        name=template.name,
        text=substitute_placeholders(template.text, values),
        roll=roll,
    )


# =============================================================================
# Multiattack
# =============================================================================


def join_names(names: list[str]) -> str:
    """'A', 'A and B', 'A, B, and C'."""
    if len(names) <= 2:
        return " and ".join(names)
    return ", ".join(names[:-1]) + f", and {names[-1]}"


def multiattack_text(names: list[str]) -> str:
    """Multiattack sentence stating a count that matches the names listed."""
    word = COUNT_WORDS.get(len(names), str(len(names)))
    return f"The NPC makes {word} attacks: {join_names(names)}."


# =============================================================================
# Selection
# =============================================================================


@dataclass
class SelectedBehaviors:
    """Resolved traits, actions and reactions for one NPC."""

    traits: list[ResolvedBehavior] = field(default_factory=list)
    actions: list[ResolvedBehavior] = field(default_factory=list)
    reactions: list[ResolvedBehavior] = field(default_factory=list)


class BehaviorSelector:
    """Chooses and resolves behavior templates from the loaded tables.

    Example:
        >>> selector = BehaviorSelector(tables)
        >>> chosen = selector.select(archetype, tier_info, mods, random.Random(7))
        >>> [a.name for a in chosen.actions]
        ['Multiattack', 'Longsword']
    """

    def __init__(self, tables: GameTables, *, retry_cap: int = MAX_DUPLICATE_RETRIES) -> None:
        """Initialize the selector.

        Args:
            tables: Loaded, read-only tables.
            retry_cap: Draws attempted per slot before a duplicate name
                is accepted.
        """
        self._tables = tables
        self.retry_cap = max(1, retry_cap)

    def candidate_pool(
        self,
        category: BehaviorCategory,
        archetype_id: ArchetypeId | None,
    ) -> list[BehaviorTemplate]:
        """Templates tagged with the archetype, else the wildcard pool."""
        templates = self._tables.templates(category)
        if archetype_id is not None:
            tagged = [t for t in templates if t.matches(archetype_id.value)]
            if tagged:
                return tagged
        return [t for t in templates if t.matches(WILDCARD_TAG)]

    def draw(
        self,
        category: BehaviorCategory,
        archetype_id: ArchetypeId | None,
        count: int,
        rng: random.Random,
    ) -> list[BehaviorTemplate]:
        """Draw ``count`` templates, avoiding duplicate names where possible.

        Each slot retries up to ``retry_cap`` draws before accepting a
        duplicate. Once every name in the tagged pool has been used the
        remaining slots draw from the wildcard pool.
        """
        if count <= 0:
            return []

        pool = self.candidate_pool(category, archetype_id)
        wildcard = self._tables.wildcard_templates(category)
        picked: list[BehaviorTemplate] = []
        used: set[str] = set()

        for _ in range(count):
            if pool is not wildcard and wildcard and all(t.name in used for t in pool):
                pool = wildcard
            if not pool:
                break

            choice = rng.choice(pool)
            attempts = 1
            while choice.name in used and attempts < self.retry_cap:
                choice = rng.choice(pool)
                attempts += 1

            picked.append(choice)
            used.add(choice.name)

        logger.debug(
            "Behaviors drawn",
            category=str(category),
            archetype=archetype_id,
            requested=count,
            names=[t.name for t in picked],
        )
        return picked

    def multiattack_names(
        self,
        selected_actions: list[BehaviorTemplate],
        archetype_id: ArchetypeId | None,
        attacks: int,
        rng: random.Random,
    ) -> list[str]:
        """Attack names for a multiattack, exactly ``attacks`` long.

        Names come from the selected attack-capable actions first, then
        the tagged (or wildcard) attack-capable pool, and are padded by
        repeating the first name. Empty when no attack exists at all.
        """
        names: list[str] = []
        for template in selected_actions:
            if template.is_attack and template.name not in names:
                names.append(template.name)

        if len(names) < attacks:
            pool = [t for t in self.candidate_pool(BehaviorCategory.ACTIONS, archetype_id) if t.is_attack]
            if not pool:
                pool = [
                    t for t in self._tables.wildcard_templates(BehaviorCategory.ACTIONS) if t.is_attack
                ]
            for template in rng.sample(pool, len(pool)):
                if len(names) >= attacks:
                    break
                if template.name not in names:
                    names.append(template.name)

        if not names:
            return []
        while len(names) < attacks:
            names.append(names[0])
        return names[:attacks]

    def select(
        self,
        archetype: Archetype | None,
        tier_info: TierConfig,
        ability_mods: dict[Ability, int],
        rng: random.Random,
    ) -> SelectedBehaviors:
        """Select and resolve every behavior category for one NPC."""
        archetype_id = archetype.id if archetype is not None else None
        context = ResolutionContext(
            tier=tier_info.tier,
            proficiency_bonus=tier_info.proficiency_bonus,
            ability_mods=ability_mods,
            archetype=archetype,
        )

        chosen: dict[BehaviorCategory, list[BehaviorTemplate]] = {
            category: self.draw(category, archetype_id, tier_info.count_for(category), rng)
            for category in BehaviorCategory
        }

        result = SelectedBehaviors(
            traits=[resolve_template(t, context) for t in chosen[BehaviorCategory.TRAITS]],
            actions=[resolve_template(t, context) for t in chosen[BehaviorCategory.ACTIONS]],
            reactions=[resolve_template(t, context) for t in chosen[BehaviorCategory.REACTIONS]],
        )

        wants_multiattack = (
            tier_info.multiattack > 0
            and tier_info.actions > 0
            and not (archetype_id is not None and archetype_id.is_pure_caster)
        )
        if wants_multiattack:
            names = self.multiattack_names(
                chosen[BehaviorCategory.ACTIONS], archetype_id, tier_info.multiattack, rng
            )
            if names:
                multiattack = ResolvedBehavior(name=MULTIATTACK_NAME, text=multiattack_text(names))
                result.actions = [multiattack, *result.actions][: tier_info.actions]
            else:
                logger.debug("No attack-capable actions for multiattack", archetype=archetype_id)

        return result


__all__ = [
    "PLACEHOLDERS",
    "COUNT_WORDS",
    "ResolutionContext",
    "SelectedBehaviors",
    "BehaviorSelector",
    "substitute_placeholders",
    "resolve_template",
    "join_names",
    "multiattack_text",
]
