"""Plain-text export of a generated NPC."""

from __future__ import annotations

from collections.abc import Sequence

from dnd_npc.core.config import Settings, get_settings
from dnd_npc.engine.dice import format_signed
from dnd_npc.engine.references import ReferenceIndex, SpellAction, SpellReferenceLinker
from dnd_npc.models.enums import Ability
from dnd_npc.models.npc import NPCRecord, ResolvedBehavior
from dnd_npc.models.tables import GameTables


def format_statline(npc: NPCRecord) -> str:
    """'Martial · Veteran · CR 6 · PB +3'."""
    label = npc.archetype_label or "No archetype"
    return f"{label} · {npc.tier.value} · CR {npc.cr} · PB {format_signed(npc.proficiency_bonus)}"


def format_saves_line(npc: NPCRecord) -> str:
    """Proficient saving throws in ability order, e.g. 'Saves: STR +6, CON +5'."""
    saves = npc.saving_throws
    parts = [
        f"{key.value} {format_signed(saves[key])}"
        for key in Ability.ordered()
        if npc.is_proficient(key)
    ]
    return "Saves: " + (", ".join(parts) if parts else "none")


def format_abilities_line(npc: NPCRecord) -> str:
    mods = npc.ability_mods
    return " | ".join(
        f"{key.value} {npc.ability_scores.get(key, 10)} ({format_signed(mods[key])})"
        for key in Ability.ordered()
    )


def _section(title: str, entries: Sequence[ResolvedBehavior]) -> list[str]:
    if not entries:
        return []
    return [f"{title}:", *(f"- {entry.name}. {entry.text}" for entry in entries)]


def format_for_clipboard(
    npc: NPCRecord,
    spell_actions: Sequence[SpellAction] = (),
) -> str:
    """Render an NPC as copyable plain text.

    Args:
        npc: The NPC to render.
        spell_actions: Derived spell actions to append, if any.

    Returns:
        Multi-line text: identity lines, then the stat block.
    """
    lines = [
        npc.name,
        f"Sex: {npc.sex.value} | Race: {npc.race} | Alignment: {npc.alignment.value}",
        f"Physical: {npc.physical_description}",
        f"Psych: {npc.psych_description}",
        "",
        format_statline(npc),
        (
            f"AC {npc.armor_class} | HP {npc.hit_points} | Speed {npc.speed} ft. | "
            f"Initiative {format_signed(npc.initiative)}"
        ),
        format_abilities_line(npc),
        format_saves_line(npc),
    ]
    lines += _section("Traits", npc.traits)
    lines += _section("Actions", npc.actions)
    lines += _section("Reactions", npc.reactions)
    if spell_actions:
        lines.append("Spells:")
        lines += [f"- {spell.name} ({spell.meta}). {spell.summary}" for spell in spell_actions]
    if npc.notes:
        lines += ["", f"Notes: {npc.notes}"]
    return "\n".join(lines)


def export_text(npc: NPCRecord, tables: GameTables, settings: Settings | None = None) -> str:
    """Clipboard text, with spell actions when the settings enable them."""
    settings = settings or get_settings()
    spell_actions: list[SpellAction] = []
    if settings.generation.include_spell_actions:
        linker = SpellReferenceLinker(ReferenceIndex.from_tables(tables))
        spell_actions = linker.spell_actions_for(npc)
    return format_for_clipboard(npc, spell_actions)


__all__ = [
    "format_statline",
    "format_saves_line",
    "format_abilities_line",
    "format_for_clipboard",
    "export_text",
]
