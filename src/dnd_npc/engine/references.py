"""Spell and condition cross-references in resolved ability text.

The index matches names case-insensitively on word boundaries and tries
longer names first, so 'Greater Invisibility' wins over 'Invisibility'
and 'Fire Bolt' never matches inside 'Fire Bolter'. For NPCs whose text
mentions spells, one spell action is synthesized per distinct spell.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from dnd_npc.core.constants import SAVE_DC_BASE
from dnd_npc.core.logging import get_logger
from dnd_npc.engine.dice import format_signed
from dnd_npc.models.enums import Ability, ArchetypeId, ReferenceKind
from dnd_npc.models.npc import NPCRecord, ResolvedBehavior, RollPayload
from dnd_npc.models.tables import ConditionEntry, GameTables, SpellEntry


logger = get_logger(__name__)

_ATTACK_PHRASE = re.compile(r"spell attack", re.IGNORECASE)
_SAVE_PHRASE = re.compile(r"saving throw", re.IGNORECASE)
_DICE_IN_TEXT = re.compile(r"\b\d+d\d+\b", re.IGNORECASE)
_FIRST_SENTENCE = re.compile(r"^(.+?[.!?])(?:\s|$)", re.DOTALL)

SPELLCASTING_DEFAULTS: dict[ArchetypeId, Ability] = {
    ArchetypeId.CLERIC: Ability.WIS,
    ArchetypeId.CASTER: Ability.INT,
    ArchetypeId.ROGUE: Ability.INT,
}


def normalize_key(name: str) -> str:
    """Lowercase with collapsed whitespace."""
    return " ".join(name.split()).lower()


@dataclass(frozen=True)
class IndexedName:
    """A name known to the index."""

    key: str
    name: str
    kind: ReferenceKind
    spell: SpellEntry | None = None
    condition: ConditionEntry | None = None


@dataclass(frozen=True)
class ReferenceMatch:
    """One occurrence of an indexed name in a piece of text.

    Attributes:
        name: Canonical name from the index.
        key: Normalized lookup key.
        kind: Spell or condition.
        start: Start offset in the scanned text.
        end: End offset in the scanned text.
        matched_text: The text as it appeared.
    """

    name: str
    key: str
    kind: ReferenceKind
    start: int
    end: int
    matched_text: str


@dataclass(frozen=True)
class SpellAction:
    """An action synthesized from a spell the NPC's text refers to."""

    name: str
    summary: str
    meta: str
    roll: RollPayload | None = None


class ReferenceIndex:
    """Case-insensitive, longest-first name index over spells and conditions.

    Example:
        >>> index = ReferenceIndex(spells, conditions)
        >>> [m.name for m in index.find("It casts fire bolt at a frightened foe.")]
        ['Fire Bolt', 'Frightened']
    """

    def __init__(
        self,
        spells: Iterable[SpellEntry] = (),
        conditions: Iterable[ConditionEntry] = (),
    ) -> None:
        entries: dict[str, IndexedName] = {}
        for condition in conditions:
            key = normalize_key(condition.name)
            entries[key] = IndexedName(
                key=key, name=condition.name, kind=ReferenceKind.CONDITION, condition=condition
            )
        # Spells shadow conditions that share a name.
        for spell in spells:
            key = normalize_key(spell.name)
            entries[key] = IndexedName(key=key, name=spell.name, kind=ReferenceKind.SPELL, spell=spell)

        self._entries = entries
        ordered = sorted(entries.values(), key=lambda entry: (-len(entry.key), entry.key))
        self._pattern: re.Pattern[str] | None = None
        if ordered:
            alternatives = "|".join(
                r"\s+".join(re.escape(part) for part in entry.name.split()) for entry in ordered
            )
            self._pattern = re.compile(rf"(?<!\w)(?:{alternatives})(?!\w)", re.IGNORECASE)

        logger.debug("Reference index built", names=len(entries))

    @classmethod
    def from_tables(cls, tables: GameTables) -> ReferenceIndex:
        """Build the index from loaded spell and condition tables."""
        return cls(tables.spells, tables.conditions)

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, name: str) -> IndexedName | None:
        """Find an indexed name by (case/whitespace-insensitive) name."""
        return self._entries.get(normalize_key(name))

    def find(self, text: str) -> list[ReferenceMatch]:
        """Every non-overlapping indexed name occurring in ``text``."""
        if self._pattern is None or not text:
            return []
        matches: list[ReferenceMatch] = []
        for found in self._pattern.finditer(text):
            entry = self._entries.get(normalize_key(found.group(0)))
            if entry is None:
                continue
            matches.append(
                ReferenceMatch(
                    name=entry.name,
                    key=entry.key,
                    kind=entry.kind,
                    start=found.start(),
                    end=found.end(),
                    matched_text=found.group(0),
                )
            )
        return matches


def spellcasting_ability(archetype_id: ArchetypeId | None, mods: dict[Ability, int]) -> Ability:
    """Cleric uses WIS, caster and rogue INT, anyone else their best mental ability.

    Ties among INT, WIS and CHA favor INT (then WIS).
    """
    if archetype_id is not None and archetype_id in SPELLCASTING_DEFAULTS:
        return SPELLCASTING_DEFAULTS[archetype_id]
    return max(Ability.mental(), key=lambda key: (mods.get(key, 0), -Ability.mental().index(key)))


def first_sentence(text: str) -> str:
    """The first sentence of a description, or the whole text."""
    stripped = text.strip()
    match = _FIRST_SENTENCE.match(stripped)
    return match.group(1).strip() if match else stripped


def level_label(level: int) -> str:
    """'Cantrip', '1st-level', '2nd-level', '3rd-level', '4th-level', ..."""
    if level <= 0:
        return "Cantrip"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(level, "th")
    return f"{level}{suffix}-level"


class SpellReferenceLinker:
    """Links resolved behavior text to spells and conditions."""

    def __init__(self, index: ReferenceIndex) -> None:
        self.index = index

    def references_for(self, entry: ResolvedBehavior) -> list[ReferenceMatch]:
        """References in one resolved entry's text."""
        return self.index.find(entry.text)

    def collect_spells(self, entries: Iterable[ResolvedBehavior]) -> list[SpellEntry]:
        """Distinct spells referenced by the entries, in first-seen order."""
        seen: set[str] = set()
        spells: list[SpellEntry] = []
        for entry in entries:
            for match in self.references_for(entry):
                if match.kind is not ReferenceKind.SPELL or match.key in seen:
                    continue
                indexed = self.index.lookup(match.key)
                if indexed is None or indexed.spell is None:
                    continue
                seen.add(match.key)
                spells.append(indexed.spell)
        return spells

    def build_spell_action(
        self,
        spell: SpellEntry,
        ability_mod: int,
        proficiency_bonus: int,
    ) -> SpellAction:
        """Summarize one spell as an action with a meta line and optional roll."""
        attack_bonus = ability_mod + proficiency_bonus
        is_attack = bool(_ATTACK_PHRASE.search(spell.description))
        is_save = bool(_SAVE_PHRASE.search(spell.description))

        meta_parts = [level_label(spell.level)]
        if spell.school:
            meta_parts[0] = f"{meta_parts[0]} {spell.school.lower()}"
        if spell.casting_time:
            meta_parts.append(spell.casting_time)
        if is_attack:
            meta_parts.append(f"Spell attack {format_signed(attack_bonus)}")
        elif is_save:
            meta_parts.append(f"Save DC {SAVE_DC_BASE + proficiency_bonus + ability_mod}")

        roll = None
        dice = _DICE_IN_TEXT.search(spell.description)
        if is_attack and dice:
            roll = RollPayload(attack_bonus=attack_bonus, damage_dice=dice.group(0))

        return SpellAction(
            name=spell.name,
            summary=first_sentence(spell.description),
            meta=" · ".join(meta_parts),
            roll=roll,
        )

    def spell_actions(
        self,
        entries: Sequence[ResolvedBehavior],
        archetype_id: ArchetypeId | None,
        ability_mods: dict[Ability, int],
        proficiency_bonus: int,
    ) -> list[SpellAction]:
        """One spell action per distinct spell referenced by the entries."""
        ability = spellcasting_ability(archetype_id, ability_mods)
        mod = ability_mods.get(ability, 0)
        actions = [
            self.build_spell_action(spell, mod, proficiency_bonus)
            for spell in self.collect_spells(entries)
        ]
        logger.debug(
            "Spell actions derived",
            archetype=archetype_id,
            ability=str(ability),
            spells=[a.name for a in actions],
        )
        return actions

    def spell_actions_for(self, npc: NPCRecord) -> list[SpellAction]:
        """Spell actions for every trait, action and reaction of an NPC."""
        return self.spell_actions(
            [*npc.traits, *npc.actions, *npc.reactions],
            npc.archetype,
            npc.ability_mods,
            npc.proficiency_bonus,
        )


__all__ = [
    "SPELLCASTING_DEFAULTS",
    "IndexedName",
    "ReferenceMatch",
    "SpellAction",
    "ReferenceIndex",
    "SpellReferenceLinker",
    "normalize_key",
    "spellcasting_ability",
    "first_sentence",
    "level_label",
]
