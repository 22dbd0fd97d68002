from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

Document = dict[str, Any]
Filter = dict[str, Any]
Sort = list[tuple[str, int]]

ASCENDING = 1
DESCENDING = -1


class DocumentStore(ABC):
    """
    Minimal collection store.

    Documents are plain dicts keyed by a string ``id``. Filters are
    equality matches per field, plus ``{"$ne": value}`` and
    ``{"$in": [values]}`` operators. Every write bumps ``version`` and
    ``updated_at``.
    """

    @abstractmethod
    def insert(self, collection: str, doc: Document) -> Document:
        """Store a new document and return it with ``id``, timestamps and ``version`` set."""

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> Document | None:
        pass

    @abstractmethod
    def find_one(self, collection: str, query: Filter) -> Document | None:
        pass

    @abstractmethod
    def find(self, collection: str, query: Filter | None = None, sort: Sort | None = None) -> list[Document]:
        pass

    @abstractmethod
    def count(self, collection: str, query: Filter | None = None) -> int:
        pass

    @abstractmethod
    def update(self, collection: str, doc_id: str, fields: Document) -> Document | None:
        """Set ``fields`` on a document. Returns the updated document or ``None`` if absent."""

    @abstractmethod
    def replace(self, collection: str, doc: Document) -> Document | None:
        """
        Write back a whole document previously read from the store.

        The write only succeeds if the stored ``version`` still equals
        ``doc["version"]``; otherwise ``ConflictError`` is raised. Returns
        ``None`` if the document no longer exists.
        """

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> bool:
        pass

    @abstractmethod
    def clear(self) -> None:
        """Drop every collection."""
