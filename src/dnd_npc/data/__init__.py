"""Static data tables and their loader.

The bundled JSON tables live in ``dnd_npc/data/tables``; point
``DND_NPC_DATA_TABLES_PATH`` at another directory to use custom tables.
"""

from dnd_npc.data.loader import BUNDLED_TABLES_PATH, TableLoader, load_tables

__all__ = [
    "BUNDLED_TABLES_PATH",
    "TableLoader",
    "load_tables",
]
