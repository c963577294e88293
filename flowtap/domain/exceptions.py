"""Domain-specific exceptions — framework-independent."""

from typing import Any


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class UnsupportedOperationError(Exception):
    """Raised when an operation is requested on a kind that does not offer it."""

    def __init__(self, kind: str, operation: str):
        self.kind = kind
        self.operation = operation
        super().__init__(f"'{operation}' is not available for {kind}")


class ApiError(Exception):
    """Raised by the transport when the remote API fails.

    ``status_code`` is the HTTP status, or 0 when no response was received.
    ``data`` holds the decoded response body when there was one.
    """

    def __init__(self, message: str, status_code: int, data: Any = None):
        self.message = message
        self.status_code = status_code
        self.data = data
        super().__init__(f"{status_code}: {message}")
