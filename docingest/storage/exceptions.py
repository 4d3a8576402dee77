class StorageError(Exception):
    """Raised when durable storage cannot be written, published or deleted."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path
