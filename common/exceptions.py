"""Domain-specific exceptions shared by the expense tracker server and client."""

class ValidationError(ValueError):
    """Raised when provided data does not meet validation requirements."""


class RecordNotFoundError(LookupError):
    """Raised when an expense record cannot be located."""


class PersistenceError(IOError):
    """Raised when the persistence layer encounters unrecoverable issues."""


class ApiError(RuntimeError):
    """Raised when a call to the remote expenses API fails for any reason."""
