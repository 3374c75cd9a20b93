"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Malformed coordinates or content payload."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ForbiddenError(DomainError):
    """Raised when a caller attempts to remove content they don't own."""

    def __init__(self, resource: str, resource_id: str, requester_id: str):
        self.resource = resource
        self.resource_id = resource_id
        self.requester_id = requester_id
        super().__init__(
            f"{requester_id} is not allowed to delete {resource} {resource_id}"
        )


class RateLimitedError(DomainError):
    """Raised when an identity creates tags faster than allowed."""

    def __init__(self, identity: str, retry_after: float):
        self.identity = identity
        self.retry_after = retry_after
        super().__init__(
            f"Too many tags from {identity}, retry in {retry_after:.1f}s"
        )


class StoreUnavailableError(DomainError):
    """Transient failure of the backing store (timeout, lost connection)."""

    pass
