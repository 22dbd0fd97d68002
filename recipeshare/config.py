from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

_PACKAGE_DIR = Path(__file__).resolve().parent


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_str(name: str, default: str) -> str:
    """Like ``os.getenv`` but a blank value (``NAME=`` in .env) falls back to ``default``."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


@dataclass(frozen=True)
class Settings:
    jwt_secret: str = field(default_factory=lambda: _env_str("JWT_SECRET", "recipeshare-dev-secret-change-me"))
    jwt_algorithm: str = "HS256"
    token_ttl_days: int = field(default_factory=lambda: int(_env_str("TOKEN_TTL_DAYS", "7")))
    mongo_uri: str = field(default_factory=lambda: _env_str("MONGO_URI", ""))
    mongo_db: str = field(default_factory=lambda: _env_str("MONGO_DB", "recipeshare"))
    allow_self_review: bool = field(default_factory=lambda: _env_flag("ALLOW_SELF_REVIEW", True))
    admin_email: str = field(default_factory=lambda: _env_str("ADMIN_EMAIL", ""))
    admin_password: str = field(default_factory=lambda: os.getenv("ADMIN_PASSWORD", ""))
    upload_dir: Path = field(
        default_factory=lambda: Path(_env_str("UPLOAD_DIR", str(_PACKAGE_DIR / "static" / "uploads")))
    )
    upload_base_url: str = field(default_factory=lambda: _env_str("UPLOAD_BASE_URL", "/uploads"))
    log_level: str = field(default_factory=lambda: _env_str("LOG_LEVEL", "INFO"))


DEFAULT_SETTINGS = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the process-wide settings."""
    return DEFAULT_SETTINGS
