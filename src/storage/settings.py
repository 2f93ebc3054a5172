"""Load/save of the persisted duration settings blob."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from .errors import PersistenceUnavailableError
from .store import KeyValueStore

SETTINGS_KEY = "zenfocus_settings"
SETTINGS_FIELDS: tuple[str, ...] = ("focus", "short", "long")
MIN_STORED_MINUTES = 1


def parse_duration_minutes(raw: Any) -> Optional[dict[str, int]]:
    """Validate a stored `{focus, short, long}` blob; return None when malformed."""
    if not isinstance(raw, Mapping):
        return None

    minutes: dict[str, int] = {}
    for field in SETTINGS_FIELDS:
        value = raw.get(field)
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        if value < MIN_STORED_MINUTES:
            return None
        minutes[field] = value
    return minutes


def load_duration_minutes(
    store: KeyValueStore,
    *,
    logger: Optional[logging.Logger] = None,
) -> Optional[dict[str, int]]:
    logger = logger or logging.getLogger("storage")
    try:
        raw = store.load(SETTINGS_KEY)
    except PersistenceUnavailableError as error:
        logger.warning("Duration settings unavailable, using defaults: %s", error)
        return None

    if raw is None:
        return None

    minutes = parse_duration_minutes(raw)
    if minutes is None:
        logger.warning("Ignoring malformed duration settings: %r", raw)
    return minutes


def save_duration_minutes(store: KeyValueStore, minutes: Mapping[str, int]) -> None:
    store.save(SETTINGS_KEY, {field: int(minutes[field]) for field in SETTINGS_FIELDS})
