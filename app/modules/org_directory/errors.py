"""Errors for the org directory module."""

from typing import Any, Iterable, Optional, Sequence


class OrgDirectoryError(Exception):
    """Base class for every failure raised by the sync and query pipeline."""


class AuthorizationError(OrgDirectoryError):
    """The credential exchange was rejected (wrong external id or trust policy).

    Fatal for the whole crawl cycle; never retried within the cycle.
    """


class SourceApiError(OrgDirectoryError):
    """The source directory API failed after the client's bounded retries.

    Attributes:
        response: the OperationResult returned by the failing call
    """

    def __init__(self, message: str, response: Any = None):
        super().__init__(message)
        self.response = response


class UnresolvedHierarchyError(OrgDirectoryError):
    """An ancestor walk did not reach a root within the depth bound."""

    def __init__(self, entry_id: str, partial_path: Sequence[str], max_depth: int):
        super().__init__(
            f"no root reached for {entry_id} within {max_depth} hops "
            f"(walked: {', '.join(partial_path) or '-'})"
        )
        self.entry_id = entry_id
        self.partial_path = list(partial_path)
        self.max_depth = max_depth


class CodecError(OrgDirectoryError):
    """A tag set cannot be encoded or a flattened string cannot be decoded."""


class DispatchError(OrgDirectoryError):
    """The queue rejected some work units.

    Attributes:
        failed_ids: entry ids that were not enqueued
    """

    def __init__(self, message: str, failed_ids: Iterable[str]):
        super().__init__(message)
        self.failed_ids = list(failed_ids)


class QueryInputError(OrgDirectoryError):
    """A query parameter is malformed; reported to the caller as a 400."""


class CacheStoreError(OrgDirectoryError):
    """A cache store call failed.

    Attributes:
        response: the OperationResult returned by the failing call
    """

    def __init__(self, message: str, response: Optional[Any] = None):
        super().__init__(message)
        self.response = response


class InvocationTimeoutError(OrgDirectoryError):
    """The invocation's wall-clock budget ran out."""
