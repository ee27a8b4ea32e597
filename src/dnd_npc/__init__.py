"""D&D NPC Generator - procedural 5E NPC stat blocks.

Turns a race, an archetype (combat role) and a tier (power level) into a
complete, internally consistent stat block: ability scores, AC, HP,
saving throws, and resolved traits, actions and reactions. Identity and
flavor (name, descriptions) are generated around it.

- Tables are plain JSON, loaded once and shared read-only
- Tier and archetype are closed enumerations; unknown input is coerced
- Dice are rolled on demand with the d20 library

Example:
    >>> from dnd_npc import NPCGenerator, TableLoader, format_for_clipboard
    >>>
    >>> tables = TableLoader().load()
    >>> generator = NPCGenerator(tables)
    >>> npc = generator.generate({"archetype": "martial", "tier": "Veteran"})
    >>> print(format_for_clipboard(npc))
    >>>
    >>> # Change tier later: every stat is recomputed
    >>> generator.regenerate_stats(npc, tier="Elite")

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 schemas (tables, tiers, stat blocks, NPC records).
    data: JSON table loader and the bundled tables.
    engine: Stat engine, behavior selection, dice, references, generator.
    storage: SQLite NPC library.
"""

from __future__ import annotations

# Core
from dnd_npc.core.config import Settings, get_settings
from dnd_npc.core.exceptions import DndNpcError
from dnd_npc.core.logging import configure_logging, get_logger

# Models
from dnd_npc.models import (
    Ability,
    Alignment,
    ArchetypeId,
    GameTables,
    GenerationCriteria,
    NPCRecord,
    Sex,
    StatBlock,
    Tier,
    tier_options,
)

# Data, engine, storage
from dnd_npc.data import TableLoader, load_tables
from dnd_npc.engine import (
    DiceSimulator,
    NPCGenerator,
    ReferenceIndex,
    SpellReferenceLinker,
    StatEngine,
    alignment_options,
    archetype_options,
    export_text,
    format_for_clipboard,
    roll_dice_expression,
    sex_options,
)
from dnd_npc.storage import NPCLibrary, SaveResult

__version__ = "0.1.0"

__all__ = [
    # Core
    "Settings",
    "get_settings",
    "DndNpcError",
    "configure_logging",
    "get_logger",
    # Models
    "Ability",
    "Alignment",
    "ArchetypeId",
    "GameTables",
    "GenerationCriteria",
    "NPCRecord",
    "Sex",
    "StatBlock",
    "Tier",
    "tier_options",
    # Data
    "TableLoader",
    "load_tables",
    # Engine
    "DiceSimulator",
    "NPCGenerator",
    "ReferenceIndex",
    "SpellReferenceLinker",
    "StatEngine",
    "alignment_options",
    "archetype_options",
    "export_text",
    "format_for_clipboard",
    "roll_dice_expression",
    "sex_options",
    # Storage
    "NPCLibrary",
    "SaveResult",
]
