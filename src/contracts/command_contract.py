"""Canonical websocket command names sent by the web UI."""

from __future__ import annotations

from focus_timer.constants import (
    ACTION_PAUSE,
    ACTION_RESET,
    ACTION_START,
    ACTION_SWITCH_MODE,
)

COMMAND_FIELD = "command"

COMMAND_TIMER_TOGGLE = "timer.toggle"
COMMAND_TIMER_START = "timer.start"
COMMAND_TIMER_PAUSE = "timer.pause"
COMMAND_TIMER_RESET = "timer.reset"
COMMAND_TIMER_SWITCH_MODE = "timer.switch_mode"

COMMAND_SETTINGS_SAVE = "settings.save"

COMMAND_TASKS_ADD = "tasks.add"
COMMAND_TASKS_TOGGLE = "tasks.toggle"
COMMAND_TASKS_DELETE = "tasks.delete"

COMMAND_NOTES_UPDATE = "notes.update"

COMMAND_CALENDAR_SHOW = "calendar.show"

COMMAND_NAME_ORDER: tuple[str, ...] = (
    COMMAND_TIMER_TOGGLE,
    COMMAND_TIMER_START,
    COMMAND_TIMER_PAUSE,
    COMMAND_TIMER_RESET,
    COMMAND_TIMER_SWITCH_MODE,
    COMMAND_SETTINGS_SAVE,
    COMMAND_TASKS_ADD,
    COMMAND_TASKS_TOGGLE,
    COMMAND_TASKS_DELETE,
    COMMAND_NOTES_UPDATE,
    COMMAND_CALENDAR_SHOW,
)

COMMAND_NAMES: frozenset[str] = frozenset(COMMAND_NAME_ORDER)

TIMER_COMMAND_TO_ACTION: dict[str, str] = {
    COMMAND_TIMER_START: ACTION_START,
    COMMAND_TIMER_PAUSE: ACTION_PAUSE,
    COMMAND_TIMER_RESET: ACTION_RESET,
    COMMAND_TIMER_SWITCH_MODE: ACTION_SWITCH_MODE,
}
