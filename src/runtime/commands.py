"""Dispatcher that applies web UI commands to the timer, settings, tasks, and notes."""

from __future__ import annotations

import datetime as dt
import logging
import math
import re
from typing import Any, Callable, Optional

from clock import shift_month
from contracts.command_contract import (
    COMMAND_CALENDAR_SHOW,
    COMMAND_FIELD,
    COMMAND_NAMES,
    COMMAND_NOTES_UPDATE,
    COMMAND_SETTINGS_SAVE,
    COMMAND_TASKS_ADD,
    COMMAND_TASKS_DELETE,
    COMMAND_TASKS_TOGGLE,
    COMMAND_TIMER_TOGGLE,
    TIMER_COMMAND_TO_ACTION,
)
from focus_timer import DurationRegistry, FocusTimer, InvalidDurationError, TimerActionResult
from focus_timer.constants import ACTION_PAUSE, ACTION_RESET, ACTION_START
from organizer import NotesPad, TaskList

from .messages import INVALID_SETTINGS_TEXT, timer_rejection_text
from .ui import RuntimeUIPublisher

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class RuntimeCommandDispatcher:
    """Routes decoded websocket commands to their handlers."""
    def __init__(
        self,
        *,
        logger: logging.Logger,
        timer: FocusTimer,
        registry: DurationRegistry,
        tasks: TaskList,
        notes: NotesPad,
        ui: RuntimeUIPublisher,
        today_fn: Optional[Callable[[], dt.date]] = None,
    ):
        self._logger = logger
        self._timer = timer
        self._registry = registry
        self._tasks = tasks
        self._notes = notes
        self._ui = ui
        self._today_fn = today_fn or dt.date.today

    def handle_command(self, command: Any) -> bool:
        """Apply one command; return False when it was rejected as malformed."""
        if not isinstance(command, dict):
            self._reject("Command must be a JSON object", command=None)
            return False
        name = command.get(COMMAND_FIELD)
        if not isinstance(name, str):
            self._reject("Command name missing", command=None)
            return False

        if name not in COMMAND_NAMES:
            self._logger.warning("Unsupported UI command: %s", name)
            self._reject(f"Unsupported command: {name}", command=name)
            return False

        self._logger.debug("Handling UI command: %s", name)
        if name == COMMAND_TIMER_TOGGLE:
            self._publish_timer_result(self._timer.toggle())
            return True
        if name in TIMER_COMMAND_TO_ACTION:
            return self._handle_timer_command(name, command)
        if name == COMMAND_SETTINGS_SAVE:
            return self._handle_settings_save(command)
        if name == COMMAND_TASKS_ADD:
            return self._handle_task_add(command)
        if name in (COMMAND_TASKS_TOGGLE, COMMAND_TASKS_DELETE):
            return self._handle_task_change(name, command)
        if name == COMMAND_NOTES_UPDATE:
            return self._handle_notes_update(command)
        if name == COMMAND_CALENDAR_SHOW:
            return self._handle_calendar_show(command)

        self._logger.error("No handler registered for UI command: %s", name)
        self._reject(f"Unsupported command: {name}", command=name)
        return False

    def _handle_timer_command(self, name: str, command: dict[str, Any]) -> bool:
        action = TIMER_COMMAND_TO_ACTION[name]
        if action == ACTION_START:
            result = self._timer.start()
        elif action == ACTION_PAUSE:
            result = self._timer.pause()
        elif action == ACTION_RESET:
            result = self._timer.reset()
        else:
            mode = command.get("mode")
            if not isinstance(mode, str):
                self._reject("timer.switch_mode requires a mode", command=name)
                return False
            result = self._timer.switch_mode(mode.strip().lower())
        self._publish_timer_result(result)
        return True

    def _publish_timer_result(self, result: TimerActionResult) -> None:
        # Accepted actions already reached the UI through the timer's display sink.
        if result.accepted:
            return
        self._ui.publish_timer_update(
            result.snapshot,
            action=result.action,
            accepted=False,
            reason=result.reason,
            message=timer_rejection_text(result.reason),
        )

    def _handle_settings_save(self, command: dict[str, Any]) -> bool:
        focus = _parse_minutes(command.get("focus"))
        short = _parse_minutes(command.get("short"))
        long = _parse_minutes(command.get("long"))
        try:
            if focus is None or short is None or long is None:
                raise InvalidDurationError("settings must be whole numbers of minutes")
            result = self._registry.set_all(focus, short, long)
        except InvalidDurationError as error:
            self._logger.info("Rejected duration settings: %s", error)
            self._ui.publish_error(INVALID_SETTINGS_TEXT, command=COMMAND_SETTINGS_SAVE)
            self._ui.publish_settings(self._registry.minutes())
            return False

        self._ui.publish_settings(result.minutes, persisted=result.persisted)
        return True

    def _handle_task_add(self, command: dict[str, Any]) -> bool:
        text = command.get("text")
        if not isinstance(text, str) or self._tasks.add(text) is None:
            return False
        self._publish_tasks()
        return True

    def _handle_task_change(self, name: str, command: dict[str, Any]) -> bool:
        task_id = _parse_int(command.get("id"))
        if task_id is None:
            self._reject(f"{name} requires a task id", command=name)
            return False

        if name == COMMAND_TASKS_TOGGLE:
            changed = self._tasks.toggle(task_id) is not None
        else:
            changed = self._tasks.delete(task_id)
        if changed:
            self._publish_tasks()
        return changed

    def _handle_notes_update(self, command: dict[str, Any]) -> bool:
        text = command.get("text")
        if not isinstance(text, str):
            self._reject("notes.update requires text", command=COMMAND_NOTES_UPDATE)
            return False
        self._notes.update(text)
        self._ui.publish_notes(self._notes.text)
        return True

    def _handle_calendar_show(self, command: dict[str, Any]) -> bool:
        offset = _parse_int(command.get("offset", 0))
        if offset is None:
            offset = 0
        today = self._today_fn()
        year, month = shift_month(today.year, today.month, offset)
        self._ui.publish_calendar(year, month, today=today)
        return True

    def _publish_tasks(self) -> None:
        self._ui.publish_tasks(self._tasks.tasks(), remaining=self._tasks.remaining_count())

    def _reject(self, message: str, *, command: Optional[str]) -> None:
        self._logger.warning("Rejected UI command: %s", message)
        payload: dict[str, Any] = {}
        if command:
            payload["command"] = command
        self._ui.publish_error(message, **payload)


def _parse_minutes(value: Any) -> Optional[int]:
    """Read a minutes field the way a number input is read: fractions are truncated.

    `5.5` and `"5.5"` both read as 5.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return int(match.group(1))
    return None


def _parse_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return None
