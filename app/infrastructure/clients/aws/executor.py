"""Base AWS client utilities for infrastructure clients.

Provides `get_boto3_client` and `execute_aws_api_call` with the
OperationResult pattern. This module never reads settings; configuration and
credentials arrive as parameters.
"""

import time
from typing import Any, Dict, List, Optional

import boto3  # type: ignore
import structlog
from botocore.client import BaseClient  # type: ignore

from infrastructure.clients.aws.credentials import Credentials
from infrastructure.operations.classifiers import classify_aws_error
from infrastructure.operations.result import OperationResult

logger = structlog.get_logger()


def get_boto3_client(
    service_name: str,
    session_config: Optional[Dict[str, Any]] = None,
    client_config: Optional[Dict[str, Any]] = None,
    credentials: Optional[Credentials] = None,
) -> BaseClient:
    """Create a boto3 client for the given service.

    Args:
        service_name: AWS service name (e.g., 'organizations')
        session_config: Optional boto3 session kwargs (e.g., region_name)
        client_config: Optional client kwargs (e.g., endpoint_url, config)
        credentials: Optional assumed-role credentials; the ambient
            credential chain is used when omitted

    Returns:
        botocore client instance
    """
    session_config = dict(session_config or {})
    client_config = client_config or {}

    if credentials is not None:
        session_config.update(credentials.as_session_kwargs())

    session = boto3.Session(**session_config)
    return session.client(service_name, **client_config)


def _calculate_retry_delay(attempt: int, backoff_factor: float = 0.5) -> float:
    return backoff_factor * (2**attempt)


def _call_api_once(
    service_name: str,
    method: str,
    keys: Optional[List[str]],
    credentials: Optional[Credentials],
    session_config: Optional[Dict[str, Any]],
    client_config: Optional[Dict[str, Any]],
    force_paginate: bool,
    kwargs: Dict[str, Any],
) -> Any:
    client = get_boto3_client(
        service_name,
        session_config=session_config,
        client_config=client_config,
        credentials=credentials,
    )

    if force_paginate:
        paginator = client.get_paginator(method)
        results: List[Any] = []
        for page in paginator.paginate(**kwargs):
            if keys:
                for k in keys:
                    if k in page and isinstance(page[k], list):
                        results.extend(page[k])
            else:
                for k, v in page.items():
                    if k == "ResponseMetadata":
                        continue
                    if isinstance(v, list):
                        results.extend(v)
        return results

    return getattr(client, method)(**kwargs)


def execute_aws_api_call(
    service_name: str,
    method: str,
    keys: Optional[List[str]] = None,
    credentials: Optional[Credentials] = None,
    session_config: Optional[Dict[str, Any]] = None,
    client_config: Optional[Dict[str, Any]] = None,
    max_retries: int = 3,
    force_paginate: bool = False,
    backoff_factor: float = 0.5,
    **kwargs,
) -> OperationResult:
    """Execute an AWS API call with retries and standardized results.

    Transient failures (throttling, service errors, connection errors) are
    retried up to `max_retries` times with exponential backoff
    `backoff_factor * 2**attempt`. Everything else returns immediately.

    Args:
        service_name: boto3 service name
        method: client method (snake_case operation name)
        keys: result keys to collect when paginating (e.g. ["Accounts"])
        credentials: assumed-role credentials, or None for the ambient chain
        session_config: boto3 Session kwargs
        client_config: client kwargs
        max_retries: retries after the first attempt for transient errors
        force_paginate: iterate the operation's paginator and return a list
        backoff_factor: base delay in seconds
        **kwargs: operation parameters

    Returns:
        OperationResult whose `data` is the raw response (or collected list)
    """
    mapped = OperationResult.permanent_error("no attempt made")

    for attempt in range(max_retries + 1):
        try:
            result = _call_api_once(
                service_name,
                method,
                keys,
                credentials,
                session_config,
                client_config,
                force_paginate,
                kwargs,
            )
            return OperationResult.success(
                data=result, message=f"{service_name}.{method} succeeded"
            )

        except Exception as e:  # pylint: disable=broad-except
            mapped = classify_aws_error(e)

            if mapped.is_retryable and attempt < max_retries:
                delay = _calculate_retry_delay(attempt, backoff_factor)
                logger.warning(
                    "aws_api_retry",
                    service=service_name,
                    method=method,
                    attempt=attempt + 1,
                    error_code=mapped.error_code,
                    error=str(e),
                    delay=delay,
                )
                time.sleep(delay)
                continue

            logger.error(
                "aws_api_error_final",
                service=service_name,
                method=method,
                attempts=attempt + 1,
                status=mapped.status.value,
                error_code=mapped.error_code,
                error=str(e),
            )
            return mapped

    return mapped
