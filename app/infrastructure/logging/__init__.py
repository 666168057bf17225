"""Structured logging infrastructure (structlog).

Public API:
    - configure_logging(): Initialize logging for the process
    - get_module_logger(): Get a logger for the calling module
    - bind_request_context(): Context manager for invocation-scoped logging
    - clear_request_context(): Clear all bound context

Example:
    from infrastructure.logging import configure_logging, get_module_logger

    configure_logging()
    logger = get_module_logger()
    logger.info("module_initialized")
"""

from infrastructure.logging.context import (
    bind_request_context,
    clear_request_context,
)
from infrastructure.logging.formatters import (
    SENSITIVE_PATTERNS,
    add_app_info,
    mask_sensitive_data,
    truncate_large_values,
)
from infrastructure.logging.setup import (
    configure_logging,
    get_module_logger,
)

__all__ = [
    "configure_logging",
    "get_module_logger",
    "bind_request_context",
    "clear_request_context",
    "add_app_info",
    "mask_sensitive_data",
    "truncate_large_values",
    "SENSITIVE_PATTERNS",
]
