"""Domain and application error types."""


class ValidationError(ValueError):
    """Raised when user input is rejected before reaching the core logic."""


class DuplicateNcfError(ValidationError):
    """Raised when an NCF is already used by another invoice."""


class NotFoundError(LookupError):
    """Raised when a referenced record does not exist."""


class RepositoryError(RuntimeError):
    """Raised when the persistence backend fails after retries."""


class BulkUpdateError(RuntimeError):
    """Raised when a bulk percentage rewrite stops part way through.

    Attributes:
        updated_count: Number of invoices written before the failure.
    """

    def __init__(self, message: str, updated_count: int) -> None:
        super().__init__(message)
        self.updated_count = updated_count


class BackupFormatError(ValueError):
    """Raised when a backup file cannot be read."""


__all__ = [
    "ValidationError",
    "DuplicateNcfError",
    "NotFoundError",
    "RepositoryError",
    "BulkUpdateError",
    "BackupFormatError",
]
