"""NPC generation: identity, flavor text and the stat block.

The generator resolves every 'random' criterion against the tables,
builds the name and descriptions, then hands archetype, tier and race to
the stat engine. All randomness flows through one random.Random, so a
seeded generator reproduces the same NPC.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Any, TypeVar

from pydantic import ValidationError as PydanticValidationError

from dnd_npc.core.config import Settings, get_settings
from dnd_npc.core.constants import NICKNAME_NAME_FORMAT, RANDOM_CHOICE
from dnd_npc.core.exceptions import GenerationError, ValidationError
from dnd_npc.core.logging import bound_context, get_logger
from dnd_npc.engine.stats import StatEngine
from dnd_npc.models.enums import Alignment, ArchetypeId, Sex, Tier
from dnd_npc.models.npc import GenerationCriteria, NPCRecord, RaceChoice
from dnd_npc.models.tables import GameTables


logger = get_logger(__name__)

T = TypeVar("T")


def sex_options() -> list[Sex]:
    """Sex options for populating selection controls."""
    return list(Sex)


def alignment_options() -> list[Alignment]:
    """Alignment options for populating selection controls."""
    return list(Alignment)


def random_pick(options: Sequence[T], rng: random.Random) -> T | None:
    """Pick one element, or None from an empty sequence."""
    if not options:
        return None
    return rng.choice(options)


class NPCGenerator:
    """Generates complete NPC records.

    Example:
        >>> generator = NPCGenerator(tables, rng=random.Random(3))
        >>> npc = generator.generate({"sex": "Female", "tier": "Elite"})
        >>> npc.sex, npc.tier
        (<Sex.FEMALE: 'Female'>, <Tier.ELITE: 'Elite'>)
    """

    def __init__(
        self,
        tables: GameTables,
        *,
        engine: StatEngine | None = None,
        rng: random.Random | None = None,
        default_tier: Tier | str = Tier.NOVICE,
    ) -> None:
        """Initialize the generator.

        Args:
            tables: Loaded tables shared with the stat engine.
            engine: Stat engine to use; one is built over ``tables`` if omitted.
            rng: Random source for identity and stats.
            default_tier: Tier used when criteria do not name one.
        """
        self.tables = tables
        self.default_tier = Tier.coerce(default_tier)
        self.rng = rng or random.Random()
        self.engine = engine or StatEngine(tables, rng=self.rng)

    @classmethod
    def from_settings(
        cls,
        tables: GameTables,
        settings: Settings | None = None,
        *,
        rng: random.Random | None = None,
    ) -> NPCGenerator:
        """Create a generator whose engine is configured from settings."""
        settings = settings or get_settings()
        rng = rng or random.Random()
        return cls(
            tables,
            engine=StatEngine.from_settings(tables, settings, rng=rng),
            rng=rng,
            default_tier=settings.generation.default_tier,
        )

    # -------------------------------------------------------------------------
    # Criteria Resolution
    # -------------------------------------------------------------------------

    def parse_criteria(
        self, criteria: GenerationCriteria | dict[str, Any] | None
    ) -> GenerationCriteria:
        """Validate raw criteria, filling in the default tier when absent.

        Raises:
            ValidationError: If a criterion cannot be interpreted (e.g. a
                concrete race without an id).
        """
        if isinstance(criteria, GenerationCriteria):
            return criteria
        criteria = dict(criteria or {})
        criteria.setdefault("tier", self.default_tier.value)
        try:
            return GenerationCriteria.model_validate(criteria)
        except PydanticValidationError as exc:
            first = exc.errors()[0] if exc.errors() else {}
            field = ".".join(str(part) for part in first.get("loc", ())) or None
            raise ValidationError(
                f"Invalid generation criteria: {first.get('msg', exc)}",
                field_name=field,
                invalid_value=first.get("input"),
            ) from exc

    def resolve_race(self, choice: RaceChoice | str, rng: random.Random) -> RaceChoice:
        """Concrete race for a criterion, picking from the table when random."""
        if isinstance(choice, RaceChoice):
            return choice
        race = random_pick(self.tables.races, rng)
        if race is None:
            raise GenerationError("Cannot pick a random race: no races are loaded")
        return RaceChoice(id=race.id, label=race.label)

    def resolve_archetype(self, value: str, rng: random.Random) -> ArchetypeId | str | None:
        """Concrete archetype id; unknown ids are left for the engine to coerce."""
        if value.strip().lower() != RANDOM_CHOICE:
            return value
        archetype = random_pick(self.tables.archetypes, rng)
        return archetype.id if archetype else None

    @staticmethod
    def resolve_tier(value: str, rng: random.Random) -> Tier | str:
        """Concrete tier; unknown labels are left for the engine to coerce."""
        if value.strip().lower() != RANDOM_CHOICE:
            return value
        return rng.choice(list(Tier))

    # -------------------------------------------------------------------------
    # Identity & Flavor
    # -------------------------------------------------------------------------

    def generate_name(self, race: RaceChoice, sex: Sex, rng: random.Random) -> str:
        """Build a name from the race's name lists.

        Races using the 'first_nickname_last' format get a quoted
        nickname between first and last name, e.g. 'Thorin "Ironfoot"
        Stonehammer'.
        """
        names = self.tables.names_for(race.id)
        first_names = names.male_first if sex is Sex.MALE else names.female_first
        first = random_pick(first_names, rng)
        last = random_pick(names.last, rng)

        parts = [first]
        race_info = self.tables.get_race(race.id)
        if race_info is not None and race_info.name_format == NICKNAME_NAME_FORMAT:
            nickname = random_pick(names.nicknames, rng)
            if nickname:
                parts.append(f'"{nickname}"')
        parts.append(last)
        return " ".join(part for part in parts if part) or race.label

    def physical_description(self, race_label: str, rng: random.Random) -> str:
        """A race-specific sentence when the table has one, else a generic one."""
        specific = self.tables.physical.by_race.get(race_label, ())
        sentence = random_pick(specific, rng) or random_pick(self.tables.physical.generic, rng)
        return sentence or ""

    def psych_description(self, alignment: Alignment, rng: random.Random) -> str:
        """A personality sentence matching the alignment."""
        return random_pick(self.tables.psych.get(alignment, ()), rng) or ""

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def generate(
        self,
        criteria: GenerationCriteria | dict[str, Any] | None = None,
        *,
        rng: random.Random | None = None,
    ) -> NPCRecord:
        """Generate a complete NPC.

        Args:
            criteria: Sex, race, alignment, archetype and tier, each
                concrete or 'random'. A dict is validated first.
            rng: Random source for this call; the generator's own otherwise.

        Returns:
            A new NPCRecord with identity and stat block filled in.

        Raises:
            ValidationError: If the criteria cannot be interpreted.
            GenerationError: If a random race is requested but none is loaded.
        """
        rng = rng or self.rng
        parsed = self.parse_criteria(criteria)

        sex = parsed.sex if isinstance(parsed.sex, Sex) else rng.choice(sex_options())
        race = self.resolve_race(parsed.race, rng)
        alignment = (
            parsed.alignment
            if isinstance(parsed.alignment, Alignment)
            else rng.choice(alignment_options())
        )

        npc = NPCRecord(
            sex=sex,
            race=race.label,
            race_id=race.id,
            alignment=alignment,
            name=self.generate_name(race, sex, rng),
            physical_description=self.physical_description(race.label, rng),
            psych_description=self.psych_description(alignment, rng),
            face=random_pick(self.tables.faces, rng),
        )

        archetype = self.resolve_archetype(parsed.archetype, rng)
        tier = self.resolve_tier(parsed.tier, rng)
        with bound_context(npc_id=npc.id):
            npc.apply_stats(self.engine.compute_stats_for(archetype, tier, race.label, rng=rng))
            logger.info(
                "NPC generated",
                name=npc.name,
                race=npc.race,
                archetype=npc.archetype,
                tier=npc.tier,
            )
        return npc

    def regenerate_stats(
        self,
        record: NPCRecord,
        *,
        archetype: ArchetypeId | str | None = None,
        tier: Tier | str | None = None,
        rng: random.Random | None = None,
    ) -> NPCRecord:
        """Recompute every stat block field of an existing NPC in place.

        Identity fields are untouched. Omitted arguments keep the
        record's current archetype or tier.

        Returns:
            The same record, updated.
        """
        rng = rng or self.rng
        archetype = archetype if archetype is not None else record.archetype
        tier = tier if tier is not None else record.tier

        with bound_context(npc_id=record.id):
            record.apply_stats(self.engine.compute_stats_for(archetype, tier, record.race, rng=rng))
            logger.info("NPC stats regenerated", archetype=record.archetype, tier=record.tier)
        return record


__all__ = [
    "NPCGenerator",
    "sex_options",
    "alignment_options",
    "random_pick",
]
