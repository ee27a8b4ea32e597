"""Generation engine for the D&D NPC generator.

Submodules:
    abilities: Ability score generation per archetype and tier
    derived: Armor class, hit points, speed and saving throws
    behaviors: Trait/action/reaction selection, multiattack, placeholders
    dice: Roll-on-demand simulation (d20 library)
    references: Spell and condition cross-references, spell actions
    stats: StatEngine.compute_stats_for, the full stat block recompute
    generator: NPCGenerator, identity plus stat block
    formatting: Plain-text export

Example:
    >>> from dnd_npc.engine import NPCGenerator, DiceSimulator
    >>>
    >>> generator = NPCGenerator(tables)
    >>> npc = generator.generate({"archetype": "martial", "tier": "Veteran"})
    >>> attack = npc.actions[1]
    >>> DiceSimulator().roll_attack(attack.roll).result
    17
"""

from __future__ import annotations

# =============================================================================
# Stat Computation
# =============================================================================
from dnd_npc.engine.abilities import ability_modifiers, generate_ability_scores
from dnd_npc.engine.behaviors import (
    BehaviorSelector,
    ResolutionContext,
    SelectedBehaviors,
    multiattack_text,
    resolve_template,
    substitute_placeholders,
)
from dnd_npc.engine.derived import armor_class, hit_points, save_proficiencies, walking_speed
from dnd_npc.engine.stats import StatEngine, archetype_options

# =============================================================================
# Dice Rolling
# =============================================================================
from dnd_npc.engine.dice import (
    DiceSimulator,
    RollOutcome,
    format_signed,
    parse_dice_expression,
    roll_dice_expression,
)

# =============================================================================
# References & Generation
# =============================================================================
from dnd_npc.engine.formatting import export_text, format_for_clipboard
from dnd_npc.engine.generator import NPCGenerator, alignment_options, sex_options
from dnd_npc.engine.references import (
    ReferenceIndex,
    ReferenceMatch,
    SpellAction,
    SpellReferenceLinker,
)


__all__ = [
    # Stat computation
    "ability_modifiers",
    "generate_ability_scores",
    "armor_class",
    "hit_points",
    "save_proficiencies",
    "walking_speed",
    "BehaviorSelector",
    "ResolutionContext",
    "SelectedBehaviors",
    "multiattack_text",
    "resolve_template",
    "substitute_placeholders",
    "StatEngine",
    "archetype_options",
    # Dice
    "DiceSimulator",
    "RollOutcome",
    "format_signed",
    "parse_dice_expression",
    "roll_dice_expression",
    # References & generation
    "ReferenceIndex",
    "ReferenceMatch",
    "SpellAction",
    "SpellReferenceLinker",
    "NPCGenerator",
    "sex_options",
    "alignment_options",
    "format_for_clipboard",
    "export_text",
]
