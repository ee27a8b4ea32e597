"""Storage module for the D&D NPC generator.

Provides SQLite-based storage for saved NPCs (the NPC library).
"""

from dnd_npc.storage.library import NPCLibrary, SaveResult

__all__ = [
    "NPCLibrary",
    "SaveResult",
]
