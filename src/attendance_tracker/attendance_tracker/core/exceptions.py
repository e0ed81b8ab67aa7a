class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or a document is malformed."""


class DuplicateEntryError(DomainError):
    """Raised when adding a value that already exists (e.g. a department name)."""


class ReferentialConstraintError(DomainError):
    """Raised when removing a value that is still referenced by an employee."""


class EmptyDatasetError(DomainError):
    """Raised when an export is requested on an empty collection."""


class NotFoundError(DomainError):
    """Raised when an update/delete targets an id that does not exist."""
