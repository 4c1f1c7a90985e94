"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error.

    Raised for missing or malformed input such as a post without url or
    content, or a comment shorter than the minimum length.
    """

    pass


class ConflictError(DomainError):
    """Raised when a write collides with an existing record.

    Vote repositories raise it for a second vote by the same user on the
    same item, which only happens if two toggles race past the row lock.
    """

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: object):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
