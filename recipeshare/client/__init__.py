"""
Python client for the RecipeShare API.

The session token lives in an injected ``CredentialStore`` so callers (and
tests) decide where it is kept.
"""
from .api import ApiError, RecipeShareClient
from .credentials import CredentialStore, FileCredentialStore, MemoryCredentialStore

__all__ = [
    "ApiError",
    "CredentialStore",
    "FileCredentialStore",
    "MemoryCredentialStore",
    "RecipeShareClient",
]
