"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error (rejected before any store call)."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to delete content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to delete {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class BatchCommitError(DomainError):
    """Raised when an atomic write batch fails to commit.

    Nothing in the batch was applied.
    """

    pass


class DocumentNotFoundError(BatchCommitError):
    """Raised when a batch increments a document that no longer exists."""

    def __init__(self, collection: str, document_id: str):
        self.collection = collection
        self.document_id = document_id
        super().__init__(f"No document to update: {collection}/{document_id}")
