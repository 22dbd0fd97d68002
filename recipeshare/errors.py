"""
Error taxonomy shared by every service.

Services raise these; ``app.py`` turns them into JSON responses of the form
``{"detail": <message>, ...extra}`` with the matching status code.
"""
from __future__ import annotations

from typing import Any


class AppError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, **extra: Any) -> None:
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)

    def to_content(self) -> dict[str, Any]:
        return {"detail": self.message, **self.extra}


class BadRequestError(AppError):
    status_code = 400
    default_message = "Bad request"


class UnauthorizedError(AppError):
    status_code = 401
    default_message = "Not authorized"


class ForbiddenError(AppError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class ConflictError(AppError):
    status_code = 409
    default_message = "The resource was modified by another request, please retry"


class ServerError(AppError):
    status_code = 500
