"""Completion beep synthesis."""

from __future__ import annotations

import numpy as np

from .errors import NotificationError

DEFAULT_SAMPLE_RATE_HZ = 44100


def synthesize_beep(
    *,
    frequency_hz: float = 880.0,
    duration_seconds: float = 0.3,
    volume: float = 0.4,
    sample_rate_hz: int = DEFAULT_SAMPLE_RATE_HZ,
    fade_seconds: float = 0.01,
) -> np.ndarray:
    """Return a mono float32 sine beep with short linear fades at both ends."""
    if frequency_hz <= 0:
        raise NotificationError("frequency_hz must be greater than zero")
    if duration_seconds <= 0:
        raise NotificationError("duration_seconds must be greater than zero")
    if sample_rate_hz <= 0:
        raise NotificationError("sample_rate_hz must be greater than zero")

    sample_count = max(1, int(round(duration_seconds * sample_rate_hz)))
    t = np.arange(sample_count, dtype=np.float32) / np.float32(sample_rate_hz)
    wav = np.sin(2.0 * np.pi * frequency_hz * t).astype(np.float32)

    # Fades avoid audible clicks at the buffer edges.
    fade_count = min(sample_count // 2, int(fade_seconds * sample_rate_hz))
    if fade_count > 0:
        ramp = np.linspace(0.0, 1.0, fade_count, dtype=np.float32)
        wav[:fade_count] *= ramp
        wav[-fade_count:] *= ramp[::-1]

    gain = float(min(1.0, max(0.0, volume)))
    return wav * np.float32(gain)
