"""
Access gate
===========

Every protected request runs through an ordered chain of checks. Each check
receives the shared ``AccessContext`` and either fills in more of it or
raises. The user gate is:

1. ``require_token``      - a well-formed ``Bearer <token>`` header is present
2. ``verify_credential``  - signature and expiry are valid
3. ``resolve_account``    - the account named by the token still exists
4. ``reject_suspended``   - the account is not suspended

The admin gate is the user gate extended with ``require_admin_role``.
Suspension is checked on every request, so it takes effect immediately for
tokens that were issued before the account was suspended.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from ..config import DEFAULT_SETTINGS, Settings
from ..errors import ForbiddenError, UnauthorizedError
from ..storage import USERS
from ..storage.base import DocumentStore
from .tokens import decode_token

ROLE_USER = "user"
ROLE_ADMIN = "admin"
STATUS_ACTIVE = "active"
STATUS_SUSPENDED = "suspended"


@dataclass
class AccessContext:
    authorization: str | None
    store: DocumentStore
    settings: Settings = DEFAULT_SETTINGS
    token: str | None = None
    payload: dict[str, Any] | None = None
    account: dict[str, Any] | None = None


Check = Callable[[AccessContext], None]


def parse_bearer(authorization: str | None) -> str | None:
    """Return the token from ``Bearer <token>``, or ``None`` for anything else."""
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


def redact(account: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in account.items() if k != "password_hash"}


# ── Checks ───────────────────────────────────────────────────────────────


def require_token(ctx: AccessContext) -> None:
    ctx.token = parse_bearer(ctx.authorization)
    if ctx.token is None:
        raise UnauthorizedError("Not authorized, token missing")


def verify_credential(ctx: AccessContext) -> None:
    ctx.payload = decode_token(ctx.token, ctx.settings)


def resolve_account(ctx: AccessContext) -> None:
    account_id = ctx.payload.get("sub")
    account = ctx.store.get(USERS, account_id) if isinstance(account_id, str) else None
    if account is None:
        raise UnauthorizedError("User not found")
    ctx.account = redact(account)


def reject_suspended(ctx: AccessContext) -> None:
    if ctx.account.get("status") == STATUS_SUSPENDED:
        raise ForbiddenError("Your account has been blocked. Please contact support.")


def require_admin_role(ctx: AccessContext) -> None:
    if ctx.account.get("role") != ROLE_ADMIN:
        raise ForbiddenError("Admins only")


# ── Gate ─────────────────────────────────────────────────────────────────


class Gate:
    def __init__(self, checks: list[Check]) -> None:
        self.checks = list(checks)

    def extend(self, *checks: Check) -> Gate:
        """Return a new gate running this gate's checks followed by ``checks``."""
        return Gate(self.checks + list(checks))

    def admit(self, ctx: AccessContext) -> dict[str, Any]:
        """Run every check in order and return the redacted account."""
        for check in self.checks:
            check(ctx)
        return ctx.account


USER_GATE = Gate([require_token, verify_credential, resolve_account, reject_suspended])
ADMIN_GATE = USER_GATE.extend(require_admin_role)
