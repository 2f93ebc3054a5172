import datetime as dt
import logging
import re
import sys
import types
import unittest
from pathlib import Path

from contracts.command_contract import (
    COMMAND_NAME_ORDER,
    COMMAND_NAMES,
    TIMER_COMMAND_TO_ACTION,
)
from focus_timer import DurationRegistry, FocusTimer
from organizer import NotesPad, TaskList
from storage import InMemoryStore

# Import runtime modules without executing src/runtime/__init__.py.
_RUNTIME_DIR = Path(__file__).resolve().parents[2] / "src" / "runtime"
if "runtime" not in sys.modules:
    _pkg = types.ModuleType("runtime")
    _pkg.__path__ = [str(_RUNTIME_DIR)]  # type: ignore[attr-defined]
    sys.modules["runtime"] = _pkg

from runtime.commands import RuntimeCommandDispatcher
from runtime.ticks import ThreadTickSource
from runtime.ui import RuntimeUIPublisher

_INDEX_HTML = Path(__file__).resolve().parents[2] / "web_ui" / "zenfocus" / "index.html"
_PAGE_SEND = re.compile(r"send\('([a-z_]+\.[a-z_]+)'")

_SAMPLE_ARGS: dict[str, dict[str, object]] = {
    "timer.switch_mode": {"mode": "short"},
    "settings.save": {"focus": 25, "short": 5, "long": 15},
    "tasks.add": {"text": "review"},
    "tasks.toggle": {"id": 1},
    "tasks.delete": {"id": 1},
    "notes.update": {"text": "draft"},
    "calendar.show": {"offset": 1},
}


class _UIServerStub:
    def __init__(self):
        self.events: list[tuple[str, dict[str, object]]] = []

    def publish(self, event_type: str, **payload):
        self.events.append((event_type, payload))


class CommandContractConsistencyTests(unittest.TestCase):
    def test_command_name_order_has_no_duplicates(self) -> None:
        self.assertEqual(len(COMMAND_NAME_ORDER), len(set(COMMAND_NAME_ORDER)))
        self.assertEqual(set(COMMAND_NAME_ORDER), set(COMMAND_NAMES))

    def test_timer_actions_map_known_commands(self) -> None:
        self.assertLessEqual(set(TIMER_COMMAND_TO_ACTION), set(COMMAND_NAMES))

    def test_dispatcher_handles_every_command_name(self) -> None:
        ui_server = _UIServerStub()
        store = InMemoryStore()
        registry = DurationRegistry(store=store)
        timer = FocusTimer(registry, ThreadTickSource(period_seconds=3600))
        self.addCleanup(timer.shutdown)
        dispatcher = RuntimeCommandDispatcher(
            logger=logging.getLogger("test"),
            timer=timer,
            registry=registry,
            tasks=TaskList(store, clock_ms=lambda: 1),
            notes=NotesPad(store),
            ui=RuntimeUIPublisher(ui_server),
            today_fn=lambda: dt.date(2026, 10, 19),
        )

        for name in COMMAND_NAME_ORDER:
            with self.subTest(command=name):
                dispatcher.handle_command({"command": name, **_SAMPLE_ARGS.get(name, {})})

        unsupported = [
            payload
            for kind, payload in ui_server.events
            if kind == "error" and str(payload.get("message", "")).startswith("Unsupported")
        ]
        self.assertEqual([], unsupported)

    def test_page_only_sends_known_commands(self) -> None:
        sent = set(_PAGE_SEND.findall(_INDEX_HTML.read_text(encoding="utf-8")))

        self.assertTrue(sent)
        self.assertLessEqual(sent, set(COMMAND_NAMES))
        self.assertIn("timer.toggle", sent)
        self.assertIn("settings.save", sent)


if __name__ == "__main__":
    unittest.main()
