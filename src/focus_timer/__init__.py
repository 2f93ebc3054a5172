from .constants import (
    DEFAULT_MODE_SECONDS,
    MODE_FOCUS,
    MODE_LONG_BREAK,
    MODE_SHORT_BREAK,
    TICK_PERIOD_SECONDS,
    TIMER_MODES,
)
from .durations import DurationRegistry, InvalidDurationError, SettingsUpdateResult
from .progress import progress
from .service import (
    FocusTimer,
    TickHandle,
    TickSource,
    TimerAction,
    TimerActionResult,
    TimerMode,
    TimerSnapshot,
)

__all__ = [
    "DEFAULT_MODE_SECONDS",
    "DurationRegistry",
    "FocusTimer",
    "InvalidDurationError",
    "MODE_FOCUS",
    "MODE_LONG_BREAK",
    "MODE_SHORT_BREAK",
    "SettingsUpdateResult",
    "TICK_PERIOD_SECONDS",
    "TIMER_MODES",
    "TickHandle",
    "TickSource",
    "TimerAction",
    "TimerActionResult",
    "TimerMode",
    "TimerSnapshot",
    "progress",
]
