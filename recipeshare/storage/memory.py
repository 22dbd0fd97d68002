from __future__ import annotations

import copy
import threading
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any

from bson import ObjectId

from ..errors import ConflictError
from .base import Document, DocumentStore, Filter, Sort


def _matches(doc: Document, query: Filter | None) -> bool:
    if not query:
        return True
    for key, expected in query.items():
        value = doc.get(key)
        if isinstance(expected, dict):
            if "$ne" in expected and value == expected["$ne"]:
                return False
            if "$in" in expected and value not in expected["$in"]:
                return False
        elif value != expected:
            return False
    return True


def _sort_key(value: Any) -> tuple[int, Any]:
    # None sorts first in ascending order, like MongoDB
    return (0, 0) if value is None else (1, value)


class InMemoryDocumentStore(DocumentStore):
    """Dict-backed store. Reads return deep copies so callers never share state."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, Document]] = defaultdict(dict)
        self._lock = threading.Lock()

    def insert(self, collection: str, doc: Document) -> Document:
        now = datetime.now(timezone.utc)
        stored = copy.deepcopy(doc)
        stored["id"] = str(ObjectId())
        stored["created_at"] = now
        stored["updated_at"] = now
        stored["version"] = 1
        with self._lock:
            self._collections[collection][stored["id"]] = stored
        return copy.deepcopy(stored)

    def get(self, collection: str, doc_id: str) -> Document | None:
        with self._lock:
            doc = self._collections[collection].get(doc_id)
            return copy.deepcopy(doc) if doc is not None else None

    def find_one(self, collection: str, query: Filter) -> Document | None:
        with self._lock:
            for doc in self._collections[collection].values():
                if _matches(doc, query):
                    return copy.deepcopy(doc)
        return None

    def find(self, collection: str, query: Filter | None = None, sort: Sort | None = None) -> list[Document]:
        with self._lock:
            docs = [copy.deepcopy(d) for d in self._collections[collection].values() if _matches(d, query)]
        # Apply sort keys last-to-first so the first key dominates
        for key, direction in reversed(sort or []):
            docs.sort(key=lambda d: _sort_key(d.get(key)), reverse=direction < 0)
        return docs

    def count(self, collection: str, query: Filter | None = None) -> int:
        with self._lock:
            return sum(1 for d in self._collections[collection].values() if _matches(d, query))

    def update(self, collection: str, doc_id: str, fields: Document) -> Document | None:
        with self._lock:
            doc = self._collections[collection].get(doc_id)
            if doc is None:
                return None
            doc.update(copy.deepcopy(fields))
            doc["updated_at"] = datetime.now(timezone.utc)
            doc["version"] = doc.get("version", 0) + 1
            return copy.deepcopy(doc)

    def replace(self, collection: str, doc: Document) -> Document | None:
        with self._lock:
            current = self._collections[collection].get(doc["id"])
            if current is None:
                return None
            if current.get("version") != doc.get("version"):
                raise ConflictError()
            stored = copy.deepcopy(doc)
            stored["created_at"] = current["created_at"]
            stored["updated_at"] = datetime.now(timezone.utc)
            stored["version"] = current["version"] + 1
            self._collections[collection][stored["id"]] = stored
            return copy.deepcopy(stored)

    def delete(self, collection: str, doc_id: str) -> bool:
        with self._lock:
            return self._collections[collection].pop(doc_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._collections.clear()
