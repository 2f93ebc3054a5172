"""Focus timer state machine driven by a cancellable one-second tick."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Literal, Optional, Protocol

from .constants import (
    ACTION_PAUSE,
    ACTION_RESET,
    ACTION_START,
    ACTION_SWITCH_MODE,
    MODE_FOCUS,
    REASON_ALREADY_RUNNING,
    REASON_MODE_SWITCHED,
    REASON_NOT_RUNNING,
    REASON_NOTHING_REMAINING,
    REASON_PAUSED,
    REASON_RESET,
    REASON_STARTED,
    REASON_UNKNOWN_MODE,
    SECONDS_PER_MINUTE,
    TIMER_MODES,
)
from .durations import DurationRegistry
from .progress import progress

TimerMode = Literal["focus", "short", "long"]
TimerAction = Literal["start", "pause", "reset", "switch_mode"]


class TickHandle(Protocol):
    @property
    def active(self) -> bool:
        ...

    def cancel(self) -> None:
        ...


class TickSource(Protocol):
    def install(self, callback: Callable[[TickHandle], None]) -> TickHandle:
        ...


@dataclass(frozen=True)
class TimerSnapshot:
    """Immutable timer view handed to display sinks."""
    mode: TimerMode
    remaining_seconds: int
    duration_seconds: int
    is_running: bool

    @property
    def display(self) -> tuple[str, str]:
        minutes, seconds = divmod(max(0, self.remaining_seconds), SECONDS_PER_MINUTE)
        return f"{minutes:02d}", f"{seconds:02d}"

    @property
    def progress(self) -> float:
        return progress(self.remaining_seconds, self.duration_seconds)


@dataclass(frozen=True)
class TimerActionResult:
    """Result envelope returned after applying a timer action."""
    action: TimerAction
    accepted: bool
    reason: str
    snapshot: TimerSnapshot


DisplaySink = Callable[[TimerSnapshot], None]
CompletionSink = Callable[[], None]


class FocusTimer:
    """Single countdown timer cycling between focus and break modes.

    Idle when no tick handle is installed, running while one is. Ticks come
    from `tick_source` and must be delivered on the same control point as
    user actions; a tick from a cancelled or replaced handle is ignored.
    """

    def __init__(
        self,
        registry: DurationRegistry,
        tick_source: TickSource,
        *,
        on_change: Optional[DisplaySink] = None,
        notify: Optional[CompletionSink] = None,
        alert: Optional[CompletionSink] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._registry = registry
        self._tick_source = tick_source
        self._on_change = on_change
        self._notify = notify
        self._alert = alert
        self._logger = logger or logging.getLogger("focus_timer")
        self._lock = threading.RLock()

        self._mode: TimerMode = MODE_FOCUS
        self._total_seconds = registry.get(MODE_FOCUS)
        self._remaining_seconds = self._total_seconds
        self._tick_handle: Optional[TickHandle] = None

        self._unsubscribe = registry.subscribe(self._on_durations_changed)

    @property
    def is_running(self) -> bool:
        return self._tick_handle is not None

    def set_display_sink(self, on_change: Optional[DisplaySink]) -> None:
        self._on_change = on_change

    def snapshot(self) -> TimerSnapshot:
        with self._lock:
            return self._snapshot_locked()

    def start(self) -> TimerActionResult:
        with self._lock:
            if self._tick_handle is not None:
                return self._result_locked(ACTION_START, False, REASON_ALREADY_RUNNING)
            if self._remaining_seconds <= 0:
                self._logger.warning(
                    "Refusing to start %s timer with nothing remaining",
                    self._mode,
                )
                return self._result_locked(ACTION_START, False, REASON_NOTHING_REMAINING)

            self._install_tick_locked()
            self._logger.info(
                "Timer started: mode=%s remaining=%ss",
                self._mode,
                self._remaining_seconds,
            )
            self._publish_locked()
            return self._result_locked(ACTION_START, True, REASON_STARTED)

    def pause(self) -> TimerActionResult:
        with self._lock:
            if self._tick_handle is None:
                return self._result_locked(ACTION_PAUSE, False, REASON_NOT_RUNNING)

            self._cancel_tick_locked()
            self._logger.info(
                "Timer paused: mode=%s remaining=%ss",
                self._mode,
                self._remaining_seconds,
            )
            self._publish_locked()
            return self._result_locked(ACTION_PAUSE, True, REASON_PAUSED)

    def toggle(self) -> TimerActionResult:
        with self._lock:
            if self._tick_handle is not None:
                return self.pause()
            return self.start()

    def reset(self) -> TimerActionResult:
        with self._lock:
            self._rearm_locked(self._mode)
            self._logger.info(
                "Timer reset: mode=%s duration=%ss",
                self._mode,
                self._total_seconds,
            )
            self._publish_locked()
            return self._result_locked(ACTION_RESET, True, REASON_RESET)

    def switch_mode(self, mode: str) -> TimerActionResult:
        with self._lock:
            if mode not in TIMER_MODES:
                self._logger.warning("Ignoring unknown timer mode: %r", mode)
                return self._result_locked(ACTION_SWITCH_MODE, False, REASON_UNKNOWN_MODE)

            self._rearm_locked(mode)  # type: ignore[arg-type]
            self._logger.info(
                "Timer mode switched: mode=%s duration=%ss",
                self._mode,
                self._total_seconds,
            )
            self._publish_locked()
            return self._result_locked(ACTION_SWITCH_MODE, True, REASON_MODE_SWITCHED)

    def tick(self, handle: Optional[TickHandle] = None) -> Optional[TimerSnapshot]:
        """Advance the countdown by one second.

        Returns the new snapshot, or None when the tick was ignored (timer idle
        or `handle` is not the installed handle).
        """
        with self._lock:
            current = self._tick_handle
            if current is None:
                self._logger.debug("Ignoring tick while idle")
                return None
            if handle is not None and handle is not current:
                self._logger.debug("Ignoring tick from a stale handle")
                return None

            self._remaining_seconds = max(0, self._remaining_seconds - 1)
            if self._remaining_seconds > 0:
                self._publish_locked()
                return self._snapshot_locked()

            self._complete_locked()
            return self._snapshot_locked()

    def shutdown(self) -> None:
        with self._lock:
            self._cancel_tick_locked()
            self._unsubscribe()

    def _complete_locked(self) -> None:
        self._cancel_tick_locked()
        self._logger.info("Timer completed: mode=%s", self._mode)
        self._publish_locked()

        self._invoke_completion_sink(self._notify, "notification")
        self._invoke_completion_sink(self._alert, "alert")

        self._rearm_locked(self._mode)
        self._publish_locked()

    def _invoke_completion_sink(self, sink: Optional[CompletionSink], name: str) -> None:
        if sink is None:
            return
        try:
            sink()
        except Exception as error:
            self._logger.error("Completion %s failed: %s", name, error, exc_info=True)

    def _on_durations_changed(self, registry: DurationRegistry) -> None:
        with self._lock:
            if self._tick_handle is not None:
                return
            duration = registry.get(self._mode)
            if duration == self._total_seconds and duration == self._remaining_seconds:
                return
            self._total_seconds = duration
            self._remaining_seconds = duration
            self._logger.debug(
                "Timer re-synced to new duration: mode=%s duration=%ss",
                self._mode,
                duration,
            )
            self._publish_locked()

    def _rearm_locked(self, mode: TimerMode) -> None:
        self._cancel_tick_locked()
        self._mode = mode
        self._total_seconds = self._registry.get(mode)
        self._remaining_seconds = self._total_seconds

    def _install_tick_locked(self) -> None:
        self._cancel_tick_locked()
        self._tick_handle = self._tick_source.install(self.tick)

    def _cancel_tick_locked(self) -> None:
        handle = self._tick_handle
        self._tick_handle = None
        if handle is not None:
            handle.cancel()

    def _publish_locked(self) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change(self._snapshot_locked())
        except Exception as error:
            self._logger.error("Timer display update failed: %s", error, exc_info=True)

    def _snapshot_locked(self) -> TimerSnapshot:
        return TimerSnapshot(
            mode=self._mode,
            remaining_seconds=self._remaining_seconds,
            duration_seconds=self._total_seconds,
            is_running=self._tick_handle is not None,
        )

    def _result_locked(
        self,
        action: TimerAction,
        accepted: bool,
        reason: str,
    ) -> TimerActionResult:
        return TimerActionResult(
            action=action,
            accepted=accepted,
            reason=reason,
            snapshot=self._snapshot_locked(),
        )
