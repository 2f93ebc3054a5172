"""Websocket event encoding, inbound command decoding, and sticky replay state."""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from typing import Any, Callable

from contracts.command_contract import COMMAND_FIELD
from contracts.ui_protocol import STICKY_EVENT_ORDER, STICKY_EVENT_TYPES

MAX_COMMAND_BYTES = 64 * 1024


class CommandDecodeError(ValueError):
    """Raised when an inbound websocket message is not a valid command."""


def make_event(
    event_type: str,
    *,
    now_fn: Callable[[], datetime] | None = None,
    **payload: Any,
) -> str:
    """Serialize an event payload with type and timestamp for websocket delivery."""
    now = now_fn() if now_fn is not None else datetime.now(timezone.utc)
    return json.dumps(
        {
            "type": event_type,
            "timestamp": now.isoformat(),
            **payload,
        }
    )


def decode_command(message: str | bytes) -> dict[str, Any]:
    """Decode a `{"command": ..., ...}` websocket message from the page."""
    if len(message) > MAX_COMMAND_BYTES:
        raise CommandDecodeError("Command message too large")
    if isinstance(message, bytes):
        try:
            message = message.decode("utf-8")
        except UnicodeDecodeError as error:
            raise CommandDecodeError("Command message is not UTF-8") from error

    try:
        payload = json.loads(message)
    except json.JSONDecodeError as error:
        raise CommandDecodeError(f"Command message is not JSON: {error}") from error

    if not isinstance(payload, dict):
        raise CommandDecodeError("Command message must be a JSON object")
    if not isinstance(payload.get(COMMAND_FIELD), str):
        raise CommandDecodeError(f"Command message requires a '{COMMAND_FIELD}' string")
    return payload


class StickyEventStore:
    """Latest event per sticky type, replayed to newly connected clients."""
    def __init__(self):
        self._events: dict[str, str] = {}
        self._lock = threading.Lock()

    def remember(self, event_type: str, message: str) -> None:
        if event_type not in STICKY_EVENT_TYPES:
            return
        with self._lock:
            self._events[event_type] = message

    def snapshot(self) -> list[str]:
        with self._lock:
            return [self._events[key] for key in STICKY_EVENT_ORDER if key in self._events]
