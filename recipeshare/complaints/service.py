from __future__ import annotations

import logging
from typing import Any

from ..auth.users import account_summary
from ..errors import NotFoundError
from ..storage import COMPLAINTS, USERS
from ..storage.base import DESCENDING, DocumentStore
from .models import ComplaintCreate

logger = logging.getLogger(__name__)

_NEWEST_FIRST = [("created_at", DESCENDING)]


def file_complaint(store: DocumentStore, current: dict[str, Any], payload: ComplaintCreate) -> dict[str, Any]:
    return store.insert(COMPLAINTS, {
        "user_id": current["id"],
        "content": payload.content,
        "reference_url": payload.reference_url,
    })


def my_complaints(store: DocumentStore, current: dict[str, Any]) -> list[dict[str, Any]]:
    return store.find(COMPLAINTS, {"user_id": current["id"]}, sort=_NEWEST_FIRST)


def all_complaints(store: DocumentStore) -> list[dict[str, Any]]:
    """Every complaint, newest first, with the author's ``name`` and ``email``."""
    authors: dict[str, Any] = {}
    out = []
    for complaint in store.find(COMPLAINTS, sort=_NEWEST_FIRST):
        uid = complaint["user_id"]
        if uid not in authors:
            authors[uid] = account_summary(store.get(USERS, uid), "name", "email")
        out.append({**complaint, "user": authors[uid]})
    return out


def delete_complaint(store: DocumentStore, current: dict[str, Any], complaint_id: str) -> None:
    if not store.delete(COMPLAINTS, complaint_id):
        raise NotFoundError("Complaint not found")
    logger.info("Complaint %s removed by administrator %s", complaint_id, current["id"])
