"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Malformed input: bad identifier, empty content, bad page numbers."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found or no longer active."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ForbiddenError(DomainError):
    """Raised when the caller may not perform an operation."""

    def __init__(self, message: str):
        super().__init__(message)


class StorageError(DomainError):
    """Raised when the underlying store fails."""

    pass
