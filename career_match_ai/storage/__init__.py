"""Storage exports. SupabaseStore lives in storage.supabase_store (needs the supabase package)."""

from .base import CatalogStore, MatchStore
from .memory_store import InMemoryStore

__all__ = ["CatalogStore", "MatchStore", "InMemoryStore"]
