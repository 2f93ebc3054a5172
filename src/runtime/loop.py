"""Runtime orchestration loop: the single control point for commands and ticks."""

from __future__ import annotations

import datetime as dt
import logging
import threading
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Any, Callable, Optional

from focus_timer import DurationRegistry, FocusTimer, TimerSnapshot
from focus_timer.constants import ACTION_SYNC, REASON_STARTUP
from notify import CompletionNotifier
from organizer import NotesPad, TaskList
from server.service import UIServer

from .commands import RuntimeCommandDispatcher
from .messages import TIMER_COMPLETED_TEXT, timer_status_message
from .ticks import ThreadTickHandle, ThreadTickSource, TickCallback
from .ui import RuntimeUIPublisher

POLL_INTERVAL_SECONDS = 0.25


@dataclass(frozen=True)
class TickEvent:
    """Tick delivered from a tick thread, to be applied on the runtime loop."""
    callback: TickCallback
    handle: ThreadTickHandle


@dataclass(frozen=True)
class CommandEvent:
    """Decoded UI command received on the websocket server thread."""
    command: dict[str, Any]


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    registry: DurationRegistry
    tasks: TaskList
    notes: NotesPad
    notifier: Optional[CompletionNotifier]
    ui_server: Optional[UIServer]
    now_fn: Callable[[], dt.datetime] = dt.datetime.now


class RuntimeEngine:
    """Owns the timer and applies queued commands and ticks on one thread."""
    def __init__(self, bootstrap: RuntimeBootstrap):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger
        self._events: Queue[Any] = Queue()
        self._stop_requested = threading.Event()
        self._last_clock_text: Optional[str] = None

        self._ui = RuntimeUIPublisher(bootstrap.ui_server)
        notifier = bootstrap.notifier
        self._tick_source = ThreadTickSource(
            deliver=self._enqueue_tick,
            logger=logging.getLogger("runtime.ticks"),
        )
        self._timer = FocusTimer(
            bootstrap.registry,
            self._tick_source,
            on_change=self._publish_timer_change,
            notify=notifier.notify if notifier is not None else None,
            alert=self._publish_completion_alert,
            logger=logging.getLogger("focus_timer"),
        )
        self._dispatcher = RuntimeCommandDispatcher(
            logger=self._logger,
            timer=self._timer,
            registry=bootstrap.registry,
            tasks=bootstrap.tasks,
            notes=bootstrap.notes,
            ui=self._ui,
            today_fn=lambda: bootstrap.now_fn().date(),
        )

        if bootstrap.ui_server is not None:
            bootstrap.ui_server.set_command_handler(self.submit_command)

    @property
    def timer(self) -> FocusTimer:
        return self._timer

    def submit_command(self, command: dict[str, Any]) -> None:
        """Thread-safe entry point used by the UI server."""
        self._events.put(CommandEvent(command=command))

    def request_stop(self) -> None:
        self._stop_requested.set()

    def run(self) -> int:
        self._publish_startup_sync()
        self._logger.info("Ready: %s", timer_status_message(self._timer.snapshot()))

        try:
            while not self._stop_requested.is_set():
                self._publish_clock_if_changed()
                event = self._poll_event()
                if event is not None:
                    self._handle_event(event)
        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            return 1
        finally:
            self._shutdown()
        return 0

    def run_pending(self) -> int:
        """Apply every queued event without blocking; returns the number handled."""
        handled = 0
        while True:
            try:
                event = self._events.get_nowait()
            except Empty:
                return handled
            self._handle_event(event)
            handled += 1

    def _enqueue_tick(self, callback: TickCallback, handle: ThreadTickHandle) -> None:
        self._events.put(TickEvent(callback=callback, handle=handle))

    def _poll_event(self) -> Optional[Any]:
        try:
            return self._events.get(timeout=POLL_INTERVAL_SECONDS)
        except Empty:
            return None

    def _handle_event(self, event: Any) -> None:
        if isinstance(event, TickEvent):
            event.callback(event.handle)
            return

        if isinstance(event, CommandEvent):
            try:
                self._dispatcher.handle_command(event.command)
            except Exception as error:
                self._logger.error("UI command failed: %s", error, exc_info=True)
                self._ui.publish_error(f"Command failed: {error}")
            return

        self._logger.warning("Ignoring unknown event type: %s", type(event).__name__)

    def _publish_timer_change(self, snapshot: TimerSnapshot) -> None:
        self._ui.publish_timer_update(snapshot, action=ACTION_SYNC, accepted=True)

    def _publish_completion_alert(self) -> None:
        self._ui.publish_alert(TIMER_COMPLETED_TEXT)

    def _publish_startup_sync(self) -> None:
        registry = self._bootstrap.registry
        tasks = self._bootstrap.tasks
        self._ui.publish_settings(registry.minutes())
        self._ui.publish_timer_update(
            self._timer.snapshot(),
            action=ACTION_SYNC,
            accepted=True,
            reason=REASON_STARTUP,
        )
        self._ui.publish_tasks(tasks.tasks(), remaining=tasks.remaining_count())
        self._ui.publish_notes(self._bootstrap.notes.text)
        self._publish_clock_if_changed()

    def _publish_clock_if_changed(self) -> None:
        now = self._bootstrap.now_fn()
        clock_text = now.strftime("%Y-%m-%d %H:%M")
        if clock_text == self._last_clock_text:
            return
        self._last_clock_text = clock_text
        self._ui.publish_clock(now)

    def _shutdown(self) -> None:
        self._logger.info("Stopping timer...")
        self._timer.shutdown()
        self._tick_source.shutdown(timeout_seconds=1.0)

        ui_server = self._bootstrap.ui_server
        if ui_server is not None:
            self._logger.info("Stopping UI server...")
            try:
                ui_server.stop(timeout_seconds=5.0)
            except Exception as error:
                self._logger.error("Error stopping UI server: %s", error, exc_info=True)
