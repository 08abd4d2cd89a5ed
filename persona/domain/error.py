"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error.

    Carries field-level detail so callers can correct their input.
    """

    def __init__(self, message: str, details: dict[str, str] | None = None):
        self.details = details or {}
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class DuplicateVoteError(DomainError):
    """Raised when another active vote already holds the uniqueness slot.

    This happens when two submissions for the same
    (comment, voter, personality system) race between lookup and insert.
    Callers may retry the submission, which then takes the update path.
    """

    def __init__(self, comment_id: str, personality_system: str):
        self.comment_id = comment_id
        self.personality_system = personality_system
        super().__init__(
            f"Already voted on comment {comment_id} "
            f"for personality system {personality_system}"
        )


class VoteOperationError(DomainError):
    """Raised when a storage failure interrupts a vote operation."""

    def __init__(self, operation: str, entity: str, cause: Exception):
        self.operation = operation
        self.entity = entity
        self.cause = cause
        super().__init__(f"Failed to {operation} for {entity}: {cause}")
