"""Errors raised by the repositories and the edit forms."""


class DataManagerError(Exception):
    """Base class for all errors of the application."""


class ValidationFailure(DataManagerError):
    """User input was rejected before anything was written."""

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field


class StorageError(DataManagerError):
    """Base class for errors reported by the storage layer."""


class StorageUnavailable(StorageError):
    """The database could not be reached or the query failed."""


class ConstraintViolation(StorageError):
    """A uniqueness, foreign key or check constraint rejected a write."""


class ReferentialIntegrityViolation(StorageError):
    """A delete was blocked because other rows still reference the row."""


class RecordNotFound(StorageError):
    """An update matched no row."""

    def __init__(self, table: str, record_id):
        super().__init__(f"No row in '{table}' with id {record_id}")
        self.table = table
        self.record_id = record_id
