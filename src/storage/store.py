"""Key-value stores standing in for browser local storage."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Optional, Protocol

from .errors import PersistenceUnavailableError


class KeyValueStore(Protocol):
    def load(self, key: str) -> Optional[Any]:
        ...

    def save(self, key: str, value: Any) -> None:
        ...


class InMemoryStore:
    """Process-local store used when persistence is disabled or unavailable."""

    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._values: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.save(key, value)

    def load(self, key: str) -> Optional[Any]:
        raw = self._values.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def save(self, key: str, value: Any) -> None:
        # Serialize so callers cannot mutate stored values by reference.
        self._values[key] = json.dumps(value)


class JsonFileStore:
    """Stores all keys in a single JSON object file, replaced atomically on write."""

    def __init__(self, path: str | Path, logger: Optional[logging.Logger] = None):
        self._path = Path(path)
        self._logger = logger or logging.getLogger("storage")
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def load(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._read_locked().get(key)

    def save(self, key: str, value: Any) -> None:
        with self._lock:
            document = self._read_locked()
            document[key] = value
            self._write_locked(document)

    def _read_locked(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as error:
            raise PersistenceUnavailableError(
                f"Failed to read store {self._path}: {error}"
            ) from error

        try:
            document = json.loads(raw) if raw.strip() else {}
        except json.JSONDecodeError as error:
            self._logger.warning(
                "Ignoring unreadable store %s: %s",
                self._path,
                error,
            )
            return {}

        if not isinstance(document, dict):
            self._logger.warning("Ignoring store %s: root is not an object", self._path)
            return {}
        return document

    def _write_locked(self, document: dict[str, Any]) -> None:
        try:
            payload = json.dumps(document, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as error:
            raise PersistenceUnavailableError(
                f"Value is not JSON serializable: {error}"
            ) from error

        temp_name: Optional[str] = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                dir=str(self._path.parent),
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(temp_name, self._path)
            temp_name = None
        except OSError as error:
            raise PersistenceUnavailableError(
                f"Failed to write store {self._path}: {error}"
            ) from error
        finally:
            if temp_name is not None:
                try:
                    os.unlink(temp_name)
                except OSError:
                    self._logger.debug("Could not remove temp file %s", temp_name)
