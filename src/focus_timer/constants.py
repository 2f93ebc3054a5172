"""Mode, action, and reason constants used by focus timer logic."""

from __future__ import annotations

MODE_FOCUS = "focus"
MODE_SHORT_BREAK = "short"
MODE_LONG_BREAK = "long"

TIMER_MODES: tuple[str, ...] = (MODE_FOCUS, MODE_SHORT_BREAK, MODE_LONG_BREAK)

DEFAULT_MODE_SECONDS: dict[str, int] = {
    MODE_FOCUS: 25 * 60,
    MODE_SHORT_BREAK: 5 * 60,
    MODE_LONG_BREAK: 15 * 60,
}

MIN_DURATION_MINUTES = 1
SECONDS_PER_MINUTE = 60
TICK_PERIOD_SECONDS = 1.0

ACTION_START = "start"
ACTION_PAUSE = "pause"
ACTION_RESET = "reset"
ACTION_SWITCH_MODE = "switch_mode"

ACTION_SYNC = "sync"

REASON_STARTED = "started"
REASON_PAUSED = "paused"
REASON_RESET = "reset"
REASON_MODE_SWITCHED = "mode_switched"
REASON_ALREADY_RUNNING = "already_running"
REASON_NOT_RUNNING = "not_running"
REASON_NOTHING_REMAINING = "nothing_remaining"
REASON_UNKNOWN_MODE = "unknown_mode"

REASON_STARTUP = "startup"
