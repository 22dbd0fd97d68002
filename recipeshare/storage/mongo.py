from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from pymongo import MongoClient, ReturnDocument

from ..errors import ConflictError
from .base import Document, DocumentStore, Filter, Sort

logger = logging.getLogger(__name__)


def _to_mongo_query(query: Filter | None) -> dict[str, Any]:
    if not query:
        return {}
    return {("_id" if k == "id" else k): v for k, v in query.items()}


def _sanitize(doc: dict[str, Any] | None) -> Document | None:
    if not doc:
        return None
    d = {**doc}
    d["id"] = str(d.pop("_id"))
    return d


class MongoDocumentStore(DocumentStore):
    """MongoDB store. Ids are stored as ObjectId hex strings in ``_id``."""

    def __init__(self, uri: str, db_name: str, client: MongoClient | None = None) -> None:
        self._client = client or MongoClient(uri, tz_aware=True)
        self._db = self._client[db_name]
        logger.info("Using MongoDB database %r", db_name)

    def insert(self, collection: str, doc: Document) -> Document:
        now = datetime.now(timezone.utc)
        stored = {k: v for k, v in doc.items() if k != "id"}
        stored.update({"_id": str(ObjectId()), "created_at": now, "updated_at": now, "version": 1})
        self._db[collection].insert_one(stored)
        return _sanitize(stored)

    def get(self, collection: str, doc_id: str) -> Document | None:
        return _sanitize(self._db[collection].find_one({"_id": doc_id}))

    def find_one(self, collection: str, query: Filter) -> Document | None:
        return _sanitize(self._db[collection].find_one(_to_mongo_query(query)))

    def find(self, collection: str, query: Filter | None = None, sort: Sort | None = None) -> list[Document]:
        cursor = self._db[collection].find(_to_mongo_query(query))
        if sort:
            cursor = cursor.sort(sort)
        return [_sanitize(d) for d in cursor]

    def count(self, collection: str, query: Filter | None = None) -> int:
        return self._db[collection].count_documents(_to_mongo_query(query))

    def update(self, collection: str, doc_id: str, fields: Document) -> Document | None:
        updated = self._db[collection].find_one_and_update(
            {"_id": doc_id},
            {"$set": {**fields, "updated_at": datetime.now(timezone.utc)}, "$inc": {"version": 1}},
            return_document=ReturnDocument.AFTER,
        )
        return _sanitize(updated)

    def replace(self, collection: str, doc: Document) -> Document | None:
        body = {k: v for k, v in doc.items() if k not in ("id", "version")}
        body["updated_at"] = datetime.now(timezone.utc)
        body["version"] = doc["version"] + 1
        result = self._db[collection].replace_one({"_id": doc["id"], "version": doc["version"]}, body)
        if result.matched_count == 0:
            if self._db[collection].count_documents({"_id": doc["id"]}) == 0:
                return None
            raise ConflictError()
        return {**body, "id": doc["id"]}

    def delete(self, collection: str, doc_id: str) -> bool:
        return self._db[collection].delete_one({"_id": doc_id}).deleted_count > 0

    def clear(self) -> None:
        for name in self._db.list_collection_names():
            self._db.drop_collection(name)
