"""Per-mode duration registry backed by persisted settings."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

from storage import (
    KeyValueStore,
    PersistenceUnavailableError,
    load_duration_minutes,
    save_duration_minutes,
)

from .constants import (
    DEFAULT_MODE_SECONDS,
    MIN_DURATION_MINUTES,
    MODE_FOCUS,
    SECONDS_PER_MINUTE,
    TIMER_MODES,
)

DurationListener = Callable[["DurationRegistry"], None]


class InvalidDurationError(ValueError):
    """Raised when a configured duration is below the one-minute minimum."""


@dataclass(frozen=True)
class SettingsUpdateResult:
    """Outcome of a settings update: the applied minutes and whether they were saved."""
    minutes: dict[str, int]
    persisted: bool


class DurationRegistry:
    """Holds the configured duration of each timer mode in seconds.

    Only `set_all` mutates the registry. Subscribers are notified after every
    successful update so dependent state can re-sync without reaching into
    the registry's internals.
    """

    def __init__(
        self,
        durations: Optional[Mapping[str, int]] = None,
        *,
        store: Optional[KeyValueStore] = None,
        defaults: Optional[Mapping[str, int]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._defaults = dict(DEFAULT_MODE_SECONDS)
        for mode in TIMER_MODES:
            if defaults and mode in defaults:
                self._defaults[mode] = _validate_seconds(defaults[mode], mode)
        self._seconds = dict(self._defaults)
        for mode in TIMER_MODES:
            if durations and mode in durations:
                self._seconds[mode] = _validate_seconds(durations[mode], mode)
        self._store = store
        self._logger = logger or logging.getLogger("focus_timer.durations")
        self._lock = threading.Lock()
        self._listeners: list[DurationListener] = []

    @classmethod
    def load(
        cls,
        store: KeyValueStore,
        *,
        defaults: Optional[Mapping[str, int]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> "DurationRegistry":
        """Build a registry from persisted minutes, falling back to defaults."""
        logger = logger or logging.getLogger("focus_timer.durations")
        minutes = load_duration_minutes(store, logger=logger)
        durations = None
        if minutes is not None:
            durations = {
                mode: value * SECONDS_PER_MINUTE for mode, value in minutes.items()
            }
            logger.info("Loaded duration settings: %s", minutes)
        return cls(durations, store=store, defaults=defaults, logger=logger)

    def get(self, mode: str) -> int:
        with self._lock:
            if mode in self._seconds:
                return self._seconds[mode]
        return self._defaults.get(mode, self._defaults[MODE_FOCUS])

    def seconds(self) -> dict[str, int]:
        with self._lock:
            return dict(self._seconds)

    def minutes(self) -> dict[str, int]:
        with self._lock:
            return {
                mode: self._seconds[mode] // SECONDS_PER_MINUTE for mode in TIMER_MODES
            }

    def subscribe(self, listener: DurationListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_all(self, focus: int, short: int, long: int) -> SettingsUpdateResult:
        """Replace all three durations (whole minutes) and persist them."""
        minutes = {
            "focus": _validate_minutes(focus, "focus"),
            "short": _validate_minutes(short, "short"),
            "long": _validate_minutes(long, "long"),
        }

        with self._lock:
            self._seconds = {
                mode: value * SECONDS_PER_MINUTE for mode, value in minutes.items()
            }

        persisted = self._persist(minutes)
        self._logger.info("Duration settings updated: %s", minutes)

        for listener in tuple(self._listeners):
            listener(self)

        return SettingsUpdateResult(minutes=minutes, persisted=persisted)

    def _persist(self, minutes: Mapping[str, int]) -> bool:
        if self._store is None:
            return False
        try:
            save_duration_minutes(self._store, minutes)
        except PersistenceUnavailableError as error:
            self._logger.warning(
                "Failed to persist duration settings; keeping them in memory: %s",
                error,
            )
            return False
        return True


def _validate_minutes(value: object, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidDurationError(f"{field} must be a whole number of minutes")
    if value < MIN_DURATION_MINUTES:
        raise InvalidDurationError(
            f"{field} must be at least {MIN_DURATION_MINUTES} minute, got: {value}"
        )
    return value


def _validate_seconds(value: object, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidDurationError(f"{field} must be a whole number of seconds")
    minimum = MIN_DURATION_MINUTES * SECONDS_PER_MINUTE
    if value < minimum:
        raise InvalidDurationError(
            f"{field} must be at least {minimum} seconds, got: {value}"
        )
    return value
