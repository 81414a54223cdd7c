"""
Error taxonomy for the acquaintance graph.

"Not found" is an expected outcome inside the store (operations return None),
so PersonNotFoundError is only raised by the service layer. Dangling
connection references are never an error.
"""


class PeopleGraphError(Exception):
    """Base class for all people graph errors."""


class PersonNotFoundError(PeopleGraphError):
    """A requested or referenced person does not exist."""

    def __init__(self, name: str, message: str = "Person not found"):
        super().__init__(message)
        self.name = name
        self.message = message


class PersonConflictError(PeopleGraphError):
    """A person with the same name already exists."""

    def __init__(self, name: str, message: str = "Person already exists"):
        super().__init__(message)
        self.name = name
        self.message = message


# Name used by the store interface for duplicate inserts
ConflictError = PersonConflictError


class StoreFailureError(PeopleGraphError):
    """The underlying persistence layer failed. Never retried."""
