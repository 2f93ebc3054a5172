import threading
import unittest

from runtime.ticks import ThreadTickSource


class ThreadTickSourceTests(unittest.TestCase):
    def test_rejects_non_positive_period(self) -> None:
        with self.assertRaises(ValueError):
            ThreadTickSource(period_seconds=0)

    def test_delivers_ticks_until_cancelled(self) -> None:
        fired = threading.Event()
        seen = []

        def on_tick(handle) -> None:
            seen.append(handle)
            if len(seen) >= 3:
                handle.cancel()
                fired.set()

        source = ThreadTickSource(period_seconds=0.01)
        handle = source.install(on_tick)

        self.assertTrue(fired.wait(2.0))
        self.assertTrue(handle.join(2.0))
        self.assertEqual(3, len(seen))
        self.assertTrue(all(item is handle for item in seen))
        self.assertFalse(handle.active)

    def test_cancel_is_idempotent_and_stops_before_first_tick(self) -> None:
        seen = []
        source = ThreadTickSource(period_seconds=5.0)
        handle = source.install(seen.append)

        handle.cancel()
        handle.cancel()
        self.assertTrue(handle.join(2.0))

        self.assertEqual([], seen)

    def test_custom_delivery_receives_callback_and_handle(self) -> None:
        delivered = []
        done = threading.Event()

        def deliver(callback, handle) -> None:
            delivered.append((callback, handle))
            handle.cancel()
            done.set()

        def callback(handle) -> None:
            self.fail("callback must be left to the delivery function")

        source = ThreadTickSource(period_seconds=0.01, deliver=deliver)
        handle = source.install(callback)

        self.assertTrue(done.wait(2.0))
        self.assertEqual([(callback, handle)], delivered)

    def test_delivery_errors_are_logged_and_ticking_continues(self) -> None:
        calls = []
        done = threading.Event()

        def on_tick(handle) -> None:
            calls.append(handle)
            if len(calls) == 1:
                raise RuntimeError("display gone")
            handle.cancel()
            done.set()

        source = ThreadTickSource(period_seconds=0.01)
        with self.assertLogs("runtime.ticks", level="ERROR"):
            source.install(on_tick)
            self.assertTrue(done.wait(2.0))

        self.assertEqual(2, len(calls))

    def test_shutdown_cancels_and_joins_live_threads(self) -> None:
        source = ThreadTickSource(period_seconds=5.0)
        first = source.install(lambda handle: None)
        second = source.install(lambda handle: None)
        self.assertEqual({first, second}, set(source.live_handles()))

        source.shutdown(timeout_seconds=2.0)

        self.assertEqual((), source.live_handles())
        self.assertFalse(first.active)
        self.assertFalse(second.active)
        self.assertTrue(first.join(0))
        self.assertTrue(second.join(0))

    def test_handles_get_distinct_ids(self) -> None:
        source = ThreadTickSource(period_seconds=5.0)
        first = source.install(lambda handle: None)
        second = source.install(lambda handle: None)
        first.cancel()
        second.cancel()

        self.assertNotEqual(first.id, second.id)
        self.assertIn("cancelled", repr(first))


if __name__ == "__main__":
    unittest.main()
