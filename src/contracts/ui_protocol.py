"""Web UI websocket event constants."""

from __future__ import annotations

# Websocket event types
EVENT_HELLO = "hello"
EVENT_TIMER = "timer"
EVENT_SETTINGS = "settings"
EVENT_TASKS = "tasks"
EVENT_NOTES = "notes"
EVENT_CLOCK = "clock"
EVENT_CALENDAR = "calendar"
EVENT_ALERT = "alert"
EVENT_ERROR = "error"

STICKY_EVENT_TYPES: frozenset[str] = frozenset(
    {
        EVENT_TIMER,
        EVENT_SETTINGS,
        EVENT_TASKS,
        EVENT_NOTES,
        EVENT_CLOCK,
    }
)

STICKY_EVENT_ORDER: tuple[str, ...] = (
    EVENT_SETTINGS,
    EVENT_TIMER,
    EVENT_TASKS,
    EVENT_NOTES,
    EVENT_CLOCK,
)
