"""Domain errors raised by the service layer."""


class DomainError(Exception):
    """Base exception for business rule violations."""


class LeaveValidationError(DomainError):
    """A leave request operation was refused before anything was written.

    ``code`` is a stable machine-readable key; ``message`` is shown to the user.
    """

    def __init__(self, code: str, message: str, **context: object) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.context = context

    def to_dict(self) -> dict:
        return {"detail": self.message, "code": self.code, **self.context}


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class PermissionDeniedError(DomainError):
    """Raised when a role lacks the capability for an action."""


class DirectoryError(DomainError):
    """Raised when the backing store cannot be read or written."""
