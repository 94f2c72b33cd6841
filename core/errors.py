class StorageError(Exception):
    """A persistence gateway call failed."""


class StartupError(StorageError):
    """Storage is unreachable or not initialized; the app must not start."""


__all__ = ["StorageError", "StartupError"]
