"""Exceptions raised by the collection managers."""


class ManagerError(Exception):
    """Base exception for collection manager errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class RecordValidationError(ManagerError):
    """Raised when a record is rejected before any store call is made."""

    def __init__(self, message: str, errors: list | None = None):
        self.errors = errors or []
        super().__init__(message)


class RecordNotFoundError(ManagerError):
    """Raised when an operation names a record that does not exist."""

    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"No {collection} record with id {record_id}")


class PostImportError(ManagerError):
    """Raised when a posts import file cannot be used."""


class LocalStorageError(ManagerError):
    """Raised when the local storage file cannot be read."""
