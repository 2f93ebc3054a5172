"""Local persistence for settings, tasks, and notes."""

from .errors import PersistenceUnavailableError, StorageError
from .settings import (
    SETTINGS_KEY,
    load_duration_minutes,
    parse_duration_minutes,
    save_duration_minutes,
)
from .store import InMemoryStore, JsonFileStore, KeyValueStore

__all__ = [
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "PersistenceUnavailableError",
    "SETTINGS_KEY",
    "StorageError",
    "load_duration_minutes",
    "parse_duration_minutes",
    "save_duration_minutes",
]
