from __future__ import annotations

import datetime as dt
from typing import Any, Iterable, Mapping, Optional, Protocol

from clock import (
    WEEKDAY_HEADERS,
    format_clock,
    format_long_date,
    greeting_for_hour,
    month_grid,
    month_title,
)
from contracts.ui_protocol import (
    EVENT_ALERT,
    EVENT_CALENDAR,
    EVENT_CLOCK,
    EVENT_ERROR,
    EVENT_NOTES,
    EVENT_SETTINGS,
    EVENT_TASKS,
    EVENT_TIMER,
)
from focus_timer import TimerSnapshot
from organizer import Task

from .messages import timer_status_message


class UIServerLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...


class RuntimeUIPublisher:
    def __init__(self, ui_server: Optional[UIServerLike]):
        self._ui_server = ui_server

    def publish(self, event_type: str, **payload: Any) -> None:
        if self._ui_server:
            self._ui_server.publish(event_type, **payload)

    def publish_timer_update(
        self,
        snapshot: TimerSnapshot,
        *,
        action: str,
        accepted: Optional[bool] = None,
        reason: str = "",
        message: Optional[str] = None,
    ) -> None:
        minutes, seconds = snapshot.display
        payload: dict[str, Any] = {
            "action": action,
            "mode": snapshot.mode,
            "is_running": snapshot.is_running,
            "duration_seconds": snapshot.duration_seconds,
            "remaining_seconds": snapshot.remaining_seconds,
            "minutes": minutes,
            "seconds": seconds,
            "display": f"{minutes}:{seconds}",
            "progress": round(snapshot.progress, 4),
            "status": timer_status_message(snapshot),
        }
        if accepted is not None:
            payload["accepted"] = accepted
        if reason:
            payload["reason"] = reason
        if message:
            payload["message"] = message
        self.publish(EVENT_TIMER, **payload)

    def publish_settings(
        self,
        minutes: Mapping[str, int],
        *,
        persisted: Optional[bool] = None,
    ) -> None:
        payload: dict[str, Any] = {"minutes": dict(minutes)}
        if persisted is not None:
            payload["persisted"] = persisted
        self.publish(EVENT_SETTINGS, **payload)

    def publish_tasks(self, tasks: Iterable[Task], *, remaining: int) -> None:
        self.publish(
            EVENT_TASKS,
            tasks=[task.to_dict() for task in tasks],
            remaining=remaining,
            summary=f"{remaining} remaining",
        )

    def publish_notes(self, text: str) -> None:
        self.publish(EVENT_NOTES, text=text)

    def publish_clock(self, now: dt.datetime) -> None:
        self.publish(
            EVENT_CLOCK,
            time=format_clock(now),
            date=format_long_date(now),
            greeting=greeting_for_hour(now.hour),
        )

    def publish_calendar(self, year: int, month: int, *, today: dt.date) -> None:
        is_current_month = (today.year, today.month) == (year, month)
        self.publish(
            EVENT_CALENDAR,
            year=year,
            month=month,
            title=month_title(year, month),
            weekdays=list(WEEKDAY_HEADERS),
            weeks=month_grid(year, month),
            today=today.day if is_current_month else None,
        )

    def publish_alert(self, message: str) -> None:
        self.publish(EVENT_ALERT, message=message)

    def publish_error(self, message: str, **payload: Any) -> None:
        self.publish(EVENT_ERROR, message=message, **payload)
