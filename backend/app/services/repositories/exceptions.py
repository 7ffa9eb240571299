"""Repository-specific exceptions.

These exceptions give data access failures a meaning the review
workflow can act on, separate from raw database errors.
"""


class RepositoryError(Exception):
    """Base exception for repository operations."""


class NotFoundError(RepositoryError):
    """Product or review not found in database."""

    def __init__(self, entity_type: str, identifier: str | int):
        self.entity_type = entity_type
        self.identifier = identifier
        super().__init__(f"{entity_type} not found: {identifier}")


class DuplicateError(RepositoryError):
    """Row would violate a uniqueness rule (e.g. a second review by the same user)."""

    def __init__(self, entity_type: str, field: str, value: str | int):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}={value} already exists")
