"""Manual tick source used to drive the timer deterministically in tests."""

from __future__ import annotations

from typing import Callable, Optional


class FakeTickHandle:
    def __init__(self, source: "FakeTickSource"):
        self._source = source
        self.cancelled = False

    @property
    def active(self) -> bool:
        return not self.cancelled

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        self._source.cancels += 1


class FakeTickSource:
    def __init__(self):
        self.installs = 0
        self.cancels = 0
        self.max_alive = 0
        self.handles: list[FakeTickHandle] = []
        self._callback: Optional[Callable[[FakeTickHandle], None]] = None

    @property
    def alive(self) -> int:
        return self.installs - self.cancels

    @property
    def current(self) -> Optional[FakeTickHandle]:
        return self.handles[-1] if self.handles else None

    def install(self, callback: Callable[[FakeTickHandle], None]) -> FakeTickHandle:
        handle = FakeTickHandle(self)
        self.installs += 1
        self.max_alive = max(self.max_alive, self.alive)
        self.handles.append(handle)
        self._callback = callback
        return handle

    def fire(self, times: int = 1) -> None:
        """Deliver ticks to the latest handle, as the periodic source would."""
        for _ in range(times):
            handle = self.current
            if handle is None or self._callback is None or not handle.active:
                return
            self._callback(handle)
