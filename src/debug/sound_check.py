"""Diagnostic tool that plays the completion tone on the configured output device."""

import logging
import sys

from app_config import AppConfigurationError, load_app_config, resolve_config_path
from notify import NotificationError, synthesize_beep
from notify.tone import DEFAULT_SAMPLE_RATE_HZ


def setup_logging():
    """Configure console logging for the diagnostic tool."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
    )


def main():
    """List output devices, then play the configured completion tone once."""
    setup_logging()
    logger = logging.getLogger(__name__)

    try:
        settings = load_app_config(str(resolve_config_path())).notification
    except AppConfigurationError as e:
        print(f"Error: {e}")
        return 1

    try:
        from notify.output import SoundDeviceAudioOutput
    except (ImportError, OSError) as e:
        print(f"Error: sounddevice is unavailable: {e}")
        return 1

    print("=== Completion Sound Check ===\n")
    print(SoundDeviceAudioOutput.describe_devices())
    device = settings.output_device if settings.output_device is not None else "default"
    print(f"\nOutput device: {device}")
    print(
        f"Tone: {settings.frequency_hz:.0f} Hz for {settings.duration_seconds:.2f}s "
        f"at volume {settings.volume:.2f}"
    )

    output = SoundDeviceAudioOutput(
        output_device_index=settings.output_device,
        logger=logger,
    )
    try:
        wav = synthesize_beep(
            frequency_hz=settings.frequency_hz,
            duration_seconds=settings.duration_seconds,
            volume=settings.volume,
        )
        output.play(wav, DEFAULT_SAMPLE_RATE_HZ, blocking=True)
    except NotificationError as e:
        print(f"\nPlayback failed: {e}")
        return 1

    print("\nIf you heard a beep, the completion sound is working.")
    if not settings.enabled:
        print("Note: [notification] enabled = false, so the widget will stay silent.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
