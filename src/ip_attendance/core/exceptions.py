class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AddressUnresolvable(DomainError):
    """Raised when no client address can be extracted from a request."""


class AuthorizationError(DomainError):
    """Raised when an admin-only action is attempted without a valid token."""


class StorageError(DomainError):
    """Base class for store failures."""


class TabularStoreWriteFailure(StorageError):
    """The spreadsheet could not be written. Never fails a submission."""


class TabularStoreReadFailure(StorageError):
    """The spreadsheet is missing or cannot be parsed."""


class DocumentStoreFailure(StorageError):
    """The JSON document could not be persisted. Fails the submission."""
