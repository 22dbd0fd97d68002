from __future__ import annotations

import logging
from typing import Any

from ..config import DEFAULT_SETTINGS, Settings
from ..errors import BadRequestError, ForbiddenError, NotFoundError
from ..storage import USERS
from ..storage.base import DocumentStore
from .gate import ROLE_ADMIN, ROLE_USER, STATUS_ACTIVE, redact
from .models import ProfileUpdate, RegisterRequest, normalize_email
from .passwords import check_password_length, hash_password, verify_password
from .tokens import create_access_token

logger = logging.getLogger(__name__)


def account_summary(account: dict[str, Any] | None, *fields: str) -> dict[str, Any] | None:
    """Embed a referenced account's public ``fields`` (plus ``id``) in another document."""
    if account is None:
        return None
    return {"id": account["id"], **{f: account.get(f) for f in fields}}


def register(
    store: DocumentStore,
    payload: RegisterRequest,
    settings: Settings = DEFAULT_SETTINGS,
) -> tuple[dict[str, Any], str]:
    """Create a standard, active account. Returns ``(account, token)``."""
    if store.find_one(USERS, {"email": payload.email}):
        raise BadRequestError("Email already registered")
    if store.find_one(USERS, {"username": payload.username}):
        raise BadRequestError("Username already taken")

    account = store.insert(USERS, {
        "name": payload.name,
        "username": payload.username,
        "email": payload.email,
        "password_hash": hash_password(payload.password),
        "image": payload.image,
        "role": ROLE_USER,
        "status": STATUS_ACTIVE,
        "saved_recipes": [],
    })
    logger.info("Registered account %s (%s)", account["id"], account["username"])
    return redact(account), create_access_token(account["id"], settings)


def authenticate(store: DocumentStore, email: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns the redacted account or ``None``."""
    account = store.find_one(USERS, {"email": email})
    if account and verify_password(password, account.get("password_hash", "")):
        return redact(account)
    return None


def get_account(store: DocumentStore, account_id: str) -> dict[str, Any]:
    account = store.get(USERS, account_id)
    if account is None:
        raise NotFoundError("User not found")
    return redact(account)


def update_profile(
    store: DocumentStore,
    current: dict[str, Any],
    account_id: str,
    payload: ProfileUpdate,
) -> dict[str, Any]:
    if current["id"] != account_id:
        raise ForbiddenError("Not authorized")

    fields = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "username" in fields:
        if store.find_one(USERS, {"username": fields["username"], "id": {"$ne": account_id}}):
            raise BadRequestError("Username already taken")
    if "email" in fields:
        if store.find_one(USERS, {"email": fields["email"], "id": {"$ne": account_id}}):
            raise BadRequestError("Email already registered")

    updated = store.update(USERS, account_id, fields) if fields else store.get(USERS, account_id)
    if updated is None:
        raise NotFoundError("User not found")
    return redact(updated)


def seed_admin(store: DocumentStore, email: str, password: str, username: str = "admin") -> dict[str, Any]:
    """Create (or promote) the bootstrap administrator account."""
    email = normalize_email(email)
    check_password_length(password)
    existing = store.find_one(USERS, {"email": email})
    if existing:
        if existing.get("role") != ROLE_ADMIN:
            existing = store.update(USERS, existing["id"], {"role": ROLE_ADMIN, "status": STATUS_ACTIVE})
            logger.info("Promoted %s to administrator", email)
        return redact(existing)

    account = store.insert(USERS, {
        "name": "Administrator",
        "username": username,
        "email": email,
        "password_hash": hash_password(password),
        "image": None,
        "role": ROLE_ADMIN,
        "status": STATUS_ACTIVE,
        "saved_recipes": [],
    })
    logger.info("Seeded administrator account %s", email)
    return redact(account)
