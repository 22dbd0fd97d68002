from __future__ import annotations

from pathlib import Path
from typing import Protocol


class CredentialStore(Protocol):
    def get(self) -> str | None: ...

    def set(self, token: str) -> None: ...

    def clear(self) -> None: ...


class MemoryCredentialStore:
    def __init__(self, token: str | None = None) -> None:
        self._token = token

    def get(self) -> str | None:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileCredentialStore:
    """Keeps the token in a single file, readable only by its owner."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def get(self) -> str | None:
        if not self.path.exists():
            return None
        token = self.path.read_text().strip()
        return token or None

    def set(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(token)
        self.path.chmod(0o600)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
