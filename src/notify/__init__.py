"""Public exports for completion notification components."""

from .errors import NotificationError
from .service import AudioOutputLike, CompletionNotifier
from .tone import synthesize_beep

__all__ = [
    "AudioOutputLike",
    "CompletionNotifier",
    "NotificationError",
    "synthesize_beep",
]
