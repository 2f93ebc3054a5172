import datetime as dt
import logging
import sys
import types
import unittest
from pathlib import Path

from focus_timer import DurationRegistry, FocusTimer
from organizer import NotesPad, TaskList
from storage import InMemoryStore, SETTINGS_KEY

# Import runtime modules without executing src/runtime/__init__.py.
_RUNTIME_DIR = Path(__file__).resolve().parents[2] / "src" / "runtime"
if "runtime" not in sys.modules:
    _pkg = types.ModuleType("runtime")
    _pkg.__path__ = [str(_RUNTIME_DIR)]  # type: ignore[attr-defined]
    sys.modules["runtime"] = _pkg

from runtime.commands import RuntimeCommandDispatcher
from runtime.messages import INVALID_SETTINGS_TEXT
from runtime.ticks import ThreadTickSource
from runtime.ui import RuntimeUIPublisher


class _UIServerStub:
    def __init__(self):
        self.events: list[tuple[str, dict[str, object]]] = []

    def publish(self, event_type: str, **payload):
        self.events.append((event_type, payload))


class RuntimeCommandDispatcherTests(unittest.TestCase):
    def setUp(self) -> None:
        self.ui_server = _UIServerStub()
        self.ui = RuntimeUIPublisher(self.ui_server)
        self.store = InMemoryStore()
        self.registry = DurationRegistry(store=self.store)
        self.timer = FocusTimer(
            self.registry,
            ThreadTickSource(period_seconds=3600),
            on_change=lambda snapshot: self.ui.publish_timer_update(
                snapshot,
                action="sync",
                accepted=True,
            ),
        )
        self.addCleanup(self.timer.shutdown)
        self.tasks = TaskList(self.store, clock_ms=lambda: 1000)
        self.notes = NotesPad(self.store)
        self.dispatcher = RuntimeCommandDispatcher(
            logger=logging.getLogger("test"),
            timer=self.timer,
            registry=self.registry,
            tasks=self.tasks,
            notes=self.notes,
            ui=self.ui,
            today_fn=lambda: dt.date(2026, 10, 19),
        )

    def _last_event(self, event_type: str) -> dict[str, object]:
        for kind, payload in reversed(self.ui_server.events):
            if kind == event_type:
                return payload
        self.fail(f"Expected {event_type} event")

    def _event_types(self) -> list[str]:
        return [kind for kind, _ in self.ui_server.events]

    def test_toggle_starts_and_pauses_timer(self) -> None:
        self.assertTrue(self.dispatcher.handle_command({"command": "timer.toggle"}))
        self.assertTrue(self.timer.is_running)
        self.assertTrue(self._last_event("timer")["is_running"])

        self.assertTrue(self.dispatcher.handle_command({"command": "timer.toggle"}))
        self.assertFalse(self.timer.is_running)
        self.assertFalse(self._last_event("timer")["is_running"])

    def test_rejected_start_publishes_reason_and_message(self) -> None:
        self.dispatcher.handle_command({"command": "timer.start"})
        event_count = len(self.ui_server.events)

        self.dispatcher.handle_command({"command": "timer.start"})

        self.assertEqual(event_count + 1, len(self.ui_server.events))
        payload = self._last_event("timer")
        self.assertFalse(payload["accepted"])
        self.assertEqual("already_running", payload["reason"])
        self.assertEqual("The timer is already running.", payload["message"])

    def test_switch_mode_normalizes_mode_name(self) -> None:
        self.dispatcher.handle_command({"command": "timer.switch_mode", "mode": " LONG "})

        payload = self._last_event("timer")
        self.assertEqual("long", payload["mode"])
        self.assertEqual(900, payload["remaining_seconds"])
        self.assertEqual("15:00", payload["display"])

    def test_switch_mode_requires_mode(self) -> None:
        self.assertFalse(self.dispatcher.handle_command({"command": "timer.switch_mode"}))

        payload = self._last_event("error")
        self.assertEqual("timer.switch_mode", payload["command"])

    def test_switch_mode_rejects_unknown_mode(self) -> None:
        self.dispatcher.handle_command({"command": "timer.switch_mode", "mode": "nap"})

        payload = self._last_event("timer")
        self.assertFalse(payload["accepted"])
        self.assertEqual("unknown_mode", payload["reason"])

    def test_settings_save_applies_persists_and_resyncs_idle_timer(self) -> None:
        handled = self.dispatcher.handle_command(
            {"command": "settings.save", "focus": "50", "short": 10, "long": 20.0}
        )

        self.assertTrue(handled)
        self.assertEqual(
            {"minutes": {"focus": 50, "short": 10, "long": 20}, "persisted": True},
            self._last_event("settings"),
        )
        self.assertEqual({"focus": 50, "short": 10, "long": 20}, self.store.load(SETTINGS_KEY))
        self.assertEqual(3000, self._last_event("timer")["remaining_seconds"])

    def test_settings_save_truncates_fractional_minutes_for_any_encoding(self) -> None:
        for value in (5.5, "5.5", 5.9, "5.9 min"):
            with self.subTest(value=value):
                handled = self.dispatcher.handle_command(
                    {"command": "settings.save", "focus": 25, "short": value, "long": 15}
                )

                self.assertTrue(handled)
                self.assertEqual(5, self._last_event("settings")["minutes"]["short"])

    def test_settings_save_rejects_fraction_below_one_minute(self) -> None:
        for value in (0.5, "0.5", float("nan"), float("inf")):
            with self.subTest(value=value):
                handled = self.dispatcher.handle_command(
                    {"command": "settings.save", "focus": 25, "short": value, "long": 15}
                )

                self.assertFalse(handled)
                self.assertEqual(INVALID_SETTINGS_TEXT, self._last_event("error")["message"])

    def test_settings_save_rejects_invalid_minutes(self) -> None:
        for fields in (
            {"focus": 0, "short": 5, "long": 15},
            {"focus": "abc", "short": 5, "long": 15},
            {"focus": 25, "short": True, "long": 15},
            {"focus": 25, "short": 5},
        ):
            with self.subTest(fields=fields):
                self.ui_server.events.clear()

                handled = self.dispatcher.handle_command({"command": "settings.save", **fields})

                self.assertFalse(handled)
                self.assertEqual(["error", "settings"], self._event_types())
                error = self._last_event("error")
                self.assertEqual(INVALID_SETTINGS_TEXT, error["message"])
                self.assertEqual("settings.save", error["command"])
                self.assertEqual(
                    {"focus": 25, "short": 5, "long": 15},
                    self._last_event("settings")["minutes"],
                )

        self.assertIsNone(self.store.load(SETTINGS_KEY))
        self.assertEqual(1500, self.timer.snapshot().remaining_seconds)

    def test_task_commands_publish_updated_list(self) -> None:
        self.assertTrue(self.dispatcher.handle_command({"command": "tasks.add", "text": "plan"}))
        task_id = self.tasks.tasks()[0].id
        self.assertEqual("1 remaining", self._last_event("tasks")["summary"])

        self.assertTrue(
            self.dispatcher.handle_command({"command": "tasks.toggle", "id": str(task_id)})
        )
        payload = self._last_event("tasks")
        self.assertEqual(0, payload["remaining"])
        self.assertEqual(
            [{"id": task_id, "text": "plan", "completed": True}],
            payload["tasks"],
        )

        self.assertTrue(self.dispatcher.handle_command({"command": "tasks.delete", "id": task_id}))
        self.assertEqual([], self._last_event("tasks")["tasks"])

    def test_task_commands_without_effect_publish_nothing(self) -> None:
        self.assertFalse(self.dispatcher.handle_command({"command": "tasks.add", "text": "  "}))
        self.assertFalse(self.dispatcher.handle_command({"command": "tasks.delete", "id": 99}))
        self.assertEqual([], self.ui_server.events)

    def test_task_change_requires_id(self) -> None:
        self.assertFalse(self.dispatcher.handle_command({"command": "tasks.toggle", "id": "x"}))

        self.assertEqual("tasks.toggle", self._last_event("error")["command"])

    def test_notes_update_persists_and_publishes(self) -> None:
        self.assertTrue(
            self.dispatcher.handle_command({"command": "notes.update", "text": "draft"})
        )

        self.assertEqual({"text": "draft"}, self._last_event("notes"))
        self.assertEqual("draft", self.notes.text)

    def test_calendar_show_current_and_previous_month(self) -> None:
        self.dispatcher.handle_command({"command": "calendar.show"})
        current = self._last_event("calendar")
        self.assertEqual("October 2026", current["title"])
        self.assertEqual(19, current["today"])
        self.assertEqual([0, 0, 0, 0, 1, 2, 3], current["weeks"][0])

        self.dispatcher.handle_command({"command": "calendar.show", "offset": -1})
        previous = self._last_event("calendar")
        self.assertEqual((2026, 9), (previous["year"], previous["month"]))
        self.assertIsNone(previous["today"])

    def test_unsupported_and_malformed_commands_publish_errors(self) -> None:
        self.assertFalse(self.dispatcher.handle_command({"command": "timer.snooze"}))
        self.assertEqual("Unsupported command: timer.snooze", self._last_event("error")["message"])

        self.assertFalse(self.dispatcher.handle_command(["timer.start"]))
        self.assertEqual("Command must be a JSON object", self._last_event("error")["message"])

        self.assertFalse(self.dispatcher.handle_command({"mode": "focus"}))
        self.assertEqual("Command name missing", self._last_event("error")["message"])


if __name__ == "__main__":
    unittest.main()
