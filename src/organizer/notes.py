"""Persisted freeform notes."""

from __future__ import annotations

import logging
from typing import Optional

from storage import KeyValueStore, PersistenceUnavailableError

NOTES_KEY = "zenfocus_notes"


class NotesPad:
    def __init__(self, store: KeyValueStore, logger: Optional[logging.Logger] = None):
        self._store = store
        self._logger = logger or logging.getLogger("organizer.notes")
        self._text = self._load()

    @property
    def text(self) -> str:
        return self._text

    def update(self, text: str) -> None:
        self._text = text if isinstance(text, str) else ""
        try:
            self._store.save(NOTES_KEY, self._text)
        except PersistenceUnavailableError as error:
            self._logger.warning("Failed to persist notes: %s", error)

    def _load(self) -> str:
        try:
            raw = self._store.load(NOTES_KEY)
        except PersistenceUnavailableError as error:
            self._logger.warning("Notes unavailable, starting empty: %s", error)
            return ""
        return raw if isinstance(raw, str) else ""
