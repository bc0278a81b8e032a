"""
Data access for GidroAtlas.

Includes:
- Object store (Supabase REST or local SQLite)
- Gemini chat client
"""

from loaders.store import ObjectStore, SupabaseStore, StoreError, create_store, get_store
from loaders.local_store import SQLiteStore
from loaders.gemini import GeminiClient, ChatTurn, ChatReply, get_gemini_client

__all__ = [
    # Store
    "ObjectStore",
    "SupabaseStore",
    "SQLiteStore",
    "StoreError",
    "create_store",
    "get_store",
    # Chat
    "GeminiClient",
    "ChatTurn",
    "ChatReply",
    "get_gemini_client",
]
