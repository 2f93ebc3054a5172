"""User-facing status and alert text for timer flows."""

from __future__ import annotations

from focus_timer import MODE_FOCUS, MODE_LONG_BREAK, MODE_SHORT_BREAK, TimerSnapshot
from focus_timer.constants import (
    REASON_ALREADY_RUNNING,
    REASON_NOT_RUNNING,
    REASON_NOTHING_REMAINING,
    REASON_UNKNOWN_MODE,
)

MODE_LABELS: dict[str, str] = {
    MODE_FOCUS: "Focus",
    MODE_SHORT_BREAK: "Short Break",
    MODE_LONG_BREAK: "Long Break",
}

TIMER_COMPLETED_TEXT = "Timer Completed!"
INVALID_SETTINGS_TEXT = "Please enter valid times (minimum 1 minute)."


def format_duration(seconds: int) -> str:
    """Format a duration in seconds as `MM:SS`."""
    minutes, remainder = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{remainder:02d}"


def timer_status_message(snapshot: TimerSnapshot) -> str:
    label = MODE_LABELS.get(snapshot.mode, snapshot.mode)
    remaining = format_duration(snapshot.remaining_seconds)
    if snapshot.is_running:
        return f"{label} running ({remaining} remaining)"
    if snapshot.remaining_seconds < snapshot.duration_seconds:
        return f"{label} paused ({remaining} remaining)"
    return f"{label} ready ({remaining})"


def timer_rejection_text(reason: str) -> str:
    if reason == REASON_ALREADY_RUNNING:
        return "The timer is already running."
    if reason == REASON_NOT_RUNNING:
        return "The timer is not running."
    if reason == REASON_NOTHING_REMAINING:
        return "Nothing left on the timer. Reset it first."
    if reason == REASON_UNKNOWN_MODE:
        return "Unknown timer mode."
    return "That timer action is not possible right now."
