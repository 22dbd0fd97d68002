"""
Document storage layer.

Responsibilities:
- Define the collection-oriented store interface the services depend on.
- Provide an in-process store for development and tests.
- Provide a MongoDB-backed store for deployments (selected by ``MONGO_URI``).
- Stamp every document with ``id``, timestamps and a write ``version``.
"""
from __future__ import annotations

from ..config import DEFAULT_SETTINGS, Settings
from .base import DocumentStore
from .memory import InMemoryDocumentStore

USERS = "users"
RECIPES = "recipes"
AI_RECIPES = "ai_recipes"
COMPLAINTS = "complaints"

_store: DocumentStore | None = None


def build_store(settings: Settings = DEFAULT_SETTINGS) -> DocumentStore:
    if settings.mongo_uri:
        from .mongo import MongoDocumentStore

        return MongoDocumentStore(settings.mongo_uri, settings.mongo_db)
    return InMemoryDocumentStore()


def get_store() -> DocumentStore:
    """Return the process-wide store, creating it on first call."""
    global _store
    if _store is None:
        _store = build_store()
    return _store


def set_store(store: DocumentStore | None) -> None:
    global _store
    _store = store


__all__ = [
    "AI_RECIPES",
    "COMPLAINTS",
    "RECIPES",
    "USERS",
    "DocumentStore",
    "InMemoryDocumentStore",
    "build_store",
    "get_store",
    "set_store",
]
