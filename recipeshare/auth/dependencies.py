from __future__ import annotations

from fastapi import Depends, Request

from ..config import Settings, get_settings
from ..storage import get_store
from ..storage.base import DocumentStore
from .gate import ADMIN_GATE, USER_GATE, AccessContext


def require_user(
    request: Request,
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Raise 401 without a valid token, 403 if the account is suspended."""
    ctx = AccessContext(request.headers.get("Authorization"), store, settings)
    return USER_GATE.admit(ctx)


def require_admin(
    request: Request,
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Same as ``require_user``, plus 403 for non-admin accounts."""
    ctx = AccessContext(request.headers.get("Authorization"), store, settings)
    return ADMIN_GATE.admit(ctx)
