class StorageError(Exception):
    """Base exception for local persistence."""


class PersistenceUnavailableError(StorageError):
    """Raised when the backing store cannot be read or written."""
