"""Exception classes for the submission portal."""


class PortalError(Exception):
    """Base exception for all application-specific errors."""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PortalError):
    """One or more fields hold bad values. Nothing was written."""
    status_code = 422

    def __init__(self, errors: dict[str, str]):
        super().__init__("; ".join(f"{field}: {msg}" for field, msg in errors.items()))
        self.errors = errors


class ConflictError(PortalError):
    """The submission tuple is already recorded."""
    status_code = 409


class NotFoundError(PortalError):
    """A referenced record or stored file is absent."""
    status_code = 404


class NothingToExportError(NotFoundError):
    """A report was requested for an empty set of marks."""


class StoreError(PortalError):
    """The backing store was unreachable or rejected the call."""
    status_code = 503

    def __init__(self, message: str = "Service unavailable. Please try again later.", cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message} (cause: {type(self.cause).__name__}: {self.cause})"
        return self.message
