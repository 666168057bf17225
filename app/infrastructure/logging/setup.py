"""Structlog configuration shared by the API process and the function handlers.

Usage:
    from infrastructure.logging import configure_logging, get_module_logger

    configure_logging()

    logger = get_module_logger()
    logger.info("event_name", key="value")
"""

import inspect
import logging
import sys
from typing import Any, List, Optional

import structlog
from structlog.stdlib import BoundLogger

from infrastructure.logging.formatters import (
    add_app_info,
    mask_sensitive_data,
    truncate_large_values,
)

APP_NAME = "aws-org-metadata"
SILENT_LEVEL = logging.CRITICAL + 1


def _is_test_environment() -> bool:
    return "pytest" in sys.modules


def _pipeline(app_version: str, is_production: bool) -> List[Any]:
    """Processors applied to every entry, renderer last."""
    callsite = structlog.processors.CallsiteParameterAdder(
        parameters=[
            structlog.processors.CallsiteParameter.FILENAME,
            structlog.processors.CallsiteParameter.LINENO,
            structlog.processors.CallsiteParameter.FUNC_NAME,
        ]
    )
    renderer = (
        structlog.processors.JSONRenderer()
        if is_production
        else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        callsite,
        add_app_info(APP_NAME, app_version),
        mask_sensitive_data(),
        truncate_large_values(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def _apply(processors: List[Any], level: int, force: bool = False) -> BoundLogger:
    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", level=level, force=force)
    return structlog.stdlib.get_logger()


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
    app_version: Optional[str] = None,
) -> BoundLogger:
    """Configure structured logging.

    Entries carry the bound invocation context (correlation id, stage, entry
    id), the callsite and the build version. Credential-like fields are
    redacted. Output is JSON in production and the console renderer
    elsewhere; under pytest everything is silenced.

    Args:
        log_level: Override for settings.LOG_LEVEL.
        is_production: Override for settings.is_production.
        app_version: Override for settings.GIT_SHA.

    Returns:
        Configured logger instance
    """
    if _is_test_environment():
        logging.root.setLevel(SILENT_LEVEL)
        return _apply(
            [
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            SILENT_LEVEL,
            force=True,
        )

    if log_level is None or is_production is None or app_version is None:
        # Deferred: providers imports the domain modules, which import this package.
        from infrastructure.services.providers import get_settings

        settings = get_settings()
        log_level = log_level or settings.LOG_LEVEL
        if is_production is None:
            is_production = settings.is_production
        app_version = app_version or settings.GIT_SHA

    return _apply(
        _pipeline(app_version, is_production),
        getattr(logging, log_level.upper(), logging.INFO),
    )


def get_module_logger() -> BoundLogger:
    """Logger bound to the calling module.

    Example:
        # In modules/org_directory/crawler.py
        logger = get_module_logger()
        # context: {"component": "crawler",
        #           "module_path": "modules.org_directory.crawler"}
    """
    base = structlog.stdlib.get_logger()
    current_frame = inspect.currentframe()
    caller = current_frame.f_back if current_frame is not None else None
    module = inspect.getmodule(caller) if caller is not None else None
    if module is None:
        return base.bind(component="unknown")

    return base.bind(
        component=module.__name__.rsplit(".", 1)[-1],
        module_path=module.__name__,
    )
