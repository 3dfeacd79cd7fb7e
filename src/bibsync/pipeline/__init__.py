"""Processing pipeline components."""

from .catalog import add_search_hit, find_entries, remove_entry
from .retrieve import RetrievalRouter, build_router
from .sync import SyncEngine, initialize_store, synchronize

__all__ = [
    # Sync
    "SyncEngine",
    "synchronize",
    "initialize_store",
    # Retrieval
    "RetrievalRouter",
    "build_router",
    # Catalog edits
    "add_search_hit",
    "find_entries",
    "remove_entry",
]
