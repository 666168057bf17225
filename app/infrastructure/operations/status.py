"""Operation status enumeration.

Outcome classes shared by every AWS call and by the directory query layer.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        TRANSIENT_ERROR: Retryable failure (throttling, connection, 5xx)
        PERMANENT_ERROR: Non-retryable failure (validation, bad request)
        UNAUTHORIZED: The caller identity was rejected
        NOT_FOUND: Nothing matched; also used as the empty query result
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
