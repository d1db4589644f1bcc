"""Persistent credential storage for killd.

Public API:
    CredentialStore -- Abstract base class
    JsonFileCredentialStore -- JSON file on the device's filesystem
    MemoryCredentialStore -- In-process store for development and tests
"""

from killd.storage.base import CredentialStore, CredentialStoreError
from killd.storage.json_file import JsonFileCredentialStore
from killd.storage.memory import MemoryCredentialStore

__all__ = [
    "CredentialStore",
    "CredentialStoreError",
    "JsonFileCredentialStore",
    "MemoryCredentialStore",
]
