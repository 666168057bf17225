"""Error classifiers for AWS SDK exceptions.

Converts botocore exceptions into standardized OperationResult objects so the
retry decision lives in one place.

Usage:
    from infrastructure.operations.classifiers import classify_aws_error

    try:
        response = client.list_parents(ChildId=account_id)
    except Exception as exc:
        return classify_aws_error(exc)
"""

from botocore.exceptions import BotoCoreError, ClientError

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

THROTTLING_CODES = frozenset(
    {
        "Throttling",
        "ThrottlingException",
        "TooManyRequestsException",
        "RequestLimitExceeded",
        "ProvisionedThroughputExceededException",
        "RequestThrottled",
    }
)

SERVICE_UNAVAILABLE_CODES = frozenset(
    {
        "ServiceException",
        "ServiceUnavailable",
        "ServiceUnavailableException",
        "InternalFailure",
        "InternalServerError",
        "ConcurrentModificationException",
    }
)

UNAUTHORIZED_CODES = frozenset(
    {
        "AccessDenied",
        "AccessDeniedException",
        "UnauthorizedOperation",
        "InvalidClientTokenId",
        "ExpiredToken",
        "ExpiredTokenException",
    }
)

NOT_FOUND_CODES = frozenset(
    {
        "ResourceNotFoundException",
        "AccountNotFoundException",
        "ChildNotFoundException",
        "TargetNotFoundException",
        "AWS.SimpleQueueService.NonExistentQueue",
        "QueueDoesNotExist",
    }
)

VALIDATION_CODES = frozenset(
    {
        "ValidationException",
        "InvalidParameterException",
        "InvalidInputException",
        "BadRequestException",
    }
)


def _retry_after(exc: ClientError) -> int | None:
    headers = exc.response.get("ResponseMetadata", {}).get("HTTPHeaders", {})
    raw = exc.response.get("RetryAfter") or headers.get("retry-after")
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def classify_aws_error(exc: Exception) -> OperationResult:
    """Classify AWS SDK errors into OperationResult.

    Error Code Mapping:
    - Throttling codes and service-side failures: TRANSIENT_ERROR
    - Access denied / invalid or expired credentials: UNAUTHORIZED
    - Missing resources: NOT_FOUND
    - Validation failures: PERMANENT_ERROR
    - Other client errors: TRANSIENT_ERROR on HTTP 5xx, PERMANENT_ERROR otherwise
    - BotoCoreError (connection resets, read timeouts): TRANSIENT_ERROR
    - Anything else: PERMANENT_ERROR

    Args:
        exc: Exception raised while calling a boto3 client

    Returns:
        OperationResult with status, message, error_code and retry_after
    """
    if isinstance(exc, BotoCoreError):
        return OperationResult.transient_error(
            f"AWS connection error: {type(exc).__name__}: {exc}",
            error_code="CONNECTION_ERROR",
        )

    if not isinstance(exc, ClientError):
        return OperationResult.permanent_error(
            f"Unexpected error: {type(exc).__name__}: {exc}",
            error_code="UNEXPECTED_ERROR",
        )

    error = exc.response.get("Error", {})
    error_code = error.get("Code", "Unknown")
    message = error.get("Message", str(exc))

    if error_code in THROTTLING_CODES:
        return OperationResult.transient_error(
            message, error_code=error_code, retry_after=_retry_after(exc)
        )

    if error_code in SERVICE_UNAVAILABLE_CODES:
        return OperationResult.transient_error(message, error_code=error_code)

    if error_code in UNAUTHORIZED_CODES:
        return OperationResult.error(
            OperationStatus.UNAUTHORIZED, message, error_code=error_code
        )

    if error_code in NOT_FOUND_CODES:
        return OperationResult.error(
            OperationStatus.NOT_FOUND, message, error_code=error_code
        )

    if error_code in VALIDATION_CODES:
        return OperationResult.permanent_error(message, error_code=error_code)

    status_code = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode", 0)
    if status_code >= 500:
        return OperationResult.transient_error(message, error_code=error_code)

    return OperationResult.permanent_error(message, error_code=error_code)
