class NotificationError(Exception):
    """Raised when the completion sound cannot be produced or played."""
