"""Completion notifier that plays a short beep when a countdown finishes."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import numpy as np

from .errors import NotificationError
from .tone import DEFAULT_SAMPLE_RATE_HZ, synthesize_beep


class AudioOutputLike(Protocol):
    def play(self, wav: np.ndarray, sample_rate_hz: int, blocking: bool = False) -> None:
        ...


class CompletionNotifier:
    """Best-effort completion sound; playback failures are logged, never raised."""
    def __init__(
        self,
        output: AudioOutputLike,
        *,
        frequency_hz: float = 880.0,
        duration_seconds: float = 0.3,
        volume: float = 0.4,
        sample_rate_hz: int = DEFAULT_SAMPLE_RATE_HZ,
        logger: Optional[logging.Logger] = None,
    ):
        self._output = output
        self._sample_rate_hz = sample_rate_hz
        self._logger = logger or logging.getLogger("notify")
        self._wav = synthesize_beep(
            frequency_hz=frequency_hz,
            duration_seconds=duration_seconds,
            volume=volume,
            sample_rate_hz=sample_rate_hz,
        )

    def notify(self) -> None:
        self._logger.debug(
            "Playing %d samples of completion tone at %d Hz",
            len(self._wav),
            self._sample_rate_hz,
        )
        try:
            self._output.play(self._wav, self._sample_rate_hz, blocking=False)
        except NotificationError as error:
            self._logger.error("Completion sound playback failed: %s", error)
