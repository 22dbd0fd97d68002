from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, TypeAdapter, field_validator

from .passwords import check_password_length

_EMAIL = TypeAdapter(EmailStr)


def normalize_email(email: str) -> str:
    """Apply the same normalisation ``EmailStr`` fields get (domain lowercased)."""
    return _EMAIL.validate_python(email)


class RegisterRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=1)
    image: str | None = Field(default=None, description="URL returned by the asset host")

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, v: str) -> str:
        return check_password_length(v)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, v: str) -> str:
        return check_password_length(v)


class AuthResponse(BaseModel):
    user: dict[str, Any]
    token: str


class ProfileUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1, max_length=100)
    username: str | None = Field(default=None, min_length=1, max_length=50)
    email: EmailStr | None = None
    image: str | None = None


class RoleUpdate(BaseModel):
    role: Literal["user", "admin"]
