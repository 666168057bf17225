"""Invocation context binding for structured logging.

Every crawl cycle, work unit and HTTP request runs inside
`bind_request_context` so all log entries it emits carry the same
correlation id.

Usage:
    from infrastructure.logging import bind_request_context

    with bind_request_context(correlation_id=message_id, entry_id=account_id):
        logger.info("processing_work_unit")
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    request_path: Optional[str] = None,
    request_method: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind context to all logs emitted within the block.

    Args:
        correlation_id: Unique invocation identifier. Generated if omitted.
        request_path: HTTP request path, for query requests.
        request_method: HTTP method, for query requests.
        **extra_context: Additional key-value pairs (cycle_id, entry_id, ...).

    Yields:
        The correlation id in effect for the block.
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}

    if request_path is not None:
        context["request_path"] = request_path

    if request_method is not None:
        context["request_method"] = request_method

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["correlation_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def clear_request_context() -> None:
    """Clear all bound context, e.g. between warm Lambda invocations."""
    structlog.contextvars.clear_contextvars()
