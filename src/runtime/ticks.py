"""Threaded periodic tick source with idempotent, cancellable handles."""

from __future__ import annotations

import itertools
import logging
import threading
from typing import Callable, Optional

from focus_timer import TICK_PERIOD_SECONDS

TickCallback = Callable[["ThreadTickHandle"], None]
TickDelivery = Callable[[TickCallback, "ThreadTickHandle"], None]

_handle_ids = itertools.count(1)


class ThreadTickHandle:
    """Handle for one installed tick thread; `cancel` may be called any number of times."""
    def __init__(self, period_seconds: float):
        self.id = next(_handle_ids)
        self.period_seconds = period_seconds
        self._cancelled = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def active(self) -> bool:
        return not self._cancelled.is_set()

    def cancel(self) -> None:
        self._cancelled.set()

    def wait(self) -> bool:
        """Sleep one period; return True when cancelled meanwhile."""
        return self._cancelled.wait(self.period_seconds)

    def join(self, timeout_seconds: Optional[float] = None) -> bool:
        """Wait for the tick thread to exit; return True once it has stopped."""
        if self._thread is None:
            return True
        self._thread.join(timeout=timeout_seconds)
        return not self._thread.is_alive()

    def __repr__(self) -> str:
        state = "active" if self.active else "cancelled"
        return f"ThreadTickHandle(id={self.id}, {state})"


class ThreadTickSource:
    """Runs one daemon thread per installed handle, firing every `period_seconds`.

    Ticks are passed to `deliver`, which the runtime uses to marshal them onto
    its event queue; by default the callback is invoked on the tick thread.
    """

    def __init__(
        self,
        *,
        period_seconds: float = TICK_PERIOD_SECONDS,
        deliver: Optional[TickDelivery] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if period_seconds <= 0:
            raise ValueError("period_seconds must be greater than zero")
        self._period_seconds = float(period_seconds)
        self._deliver = deliver or _call_directly
        self._logger = logger or logging.getLogger("runtime.ticks")
        self._lock = threading.Lock()
        self._live: set[ThreadTickHandle] = set()

    def live_handles(self) -> tuple[ThreadTickHandle, ...]:
        with self._lock:
            return tuple(self._live)

    def install(self, callback: TickCallback) -> ThreadTickHandle:
        handle = ThreadTickHandle(self._period_seconds)
        thread = threading.Thread(
            target=self._run,
            args=(handle, callback),
            daemon=True,
            name=f"tick-{handle.id}",
        )
        handle._thread = thread
        with self._lock:
            self._live.add(handle)
        thread.start()
        self._logger.debug("Installed tick source %s", handle)
        return handle

    def shutdown(self, timeout_seconds: float = 1.0) -> None:
        """Cancel every live handle and wait for its thread to exit."""
        for handle in self.live_handles():
            handle.cancel()
            if not handle.join(timeout_seconds):
                self._logger.warning(
                    "Tick thread %s did not stop within %.1fs",
                    handle,
                    timeout_seconds,
                )

    def _run(self, handle: ThreadTickHandle, callback: TickCallback) -> None:
        try:
            while not handle.wait():
                try:
                    self._deliver(callback, handle)
                except Exception as error:
                    self._logger.error("Tick delivery failed: %s", error, exc_info=True)
        finally:
            with self._lock:
                self._live.discard(handle)
        self._logger.debug("Tick source stopped %s", handle)


def _call_directly(callback: TickCallback, handle: ThreadTickHandle) -> None:
    callback(handle)
