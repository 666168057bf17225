"""SQS client for the work queue."""

from typing import Any, Dict, List

import structlog

from infrastructure.clients.aws.executor import execute_aws_api_call
from infrastructure.clients.aws.session_provider import SessionProvider
from infrastructure.operations.result import OperationResult

logger = structlog.get_logger()


class SqsClient:
    """Client for SQS operations.

    Args:
        session_provider: SessionProvider instance for configuration
    """

    def __init__(self, session_provider: SessionProvider) -> None:
        self._session_provider = session_provider
        self._service_name = "sqs"
        self._logger = logger.bind(component="sqs_client")

    def _call(self, method: str, **kwargs) -> OperationResult:
        client_kwargs = self._session_provider.build_client_kwargs()
        return execute_aws_api_call(
            self._service_name, method, **client_kwargs, **kwargs
        )

    def send_message_batch(
        self, queue_url: str, entries: List[Dict[str, Any]]
    ) -> OperationResult:
        """Send up to 10 messages.

        Returns:
            OperationResult whose data holds `Successful` and `Failed` lists
        """
        self._logger.debug("sending_message_batch", queue_url=queue_url, count=len(entries))
        return self._call("send_message_batch", QueueUrl=queue_url, Entries=entries)

    def receive_messages(
        self,
        queue_url: str,
        max_number_of_messages: int = 1,
        wait_time_seconds: int = 10,
        visibility_timeout: int | None = None,
    ) -> OperationResult:
        """Receive messages; data is the (possibly empty) list of messages."""
        params: Dict[str, Any] = {
            "QueueUrl": queue_url,
            "MaxNumberOfMessages": max_number_of_messages,
            "WaitTimeSeconds": wait_time_seconds,
        }
        if visibility_timeout is not None:
            params["VisibilityTimeout"] = visibility_timeout

        result = self._call("receive_message", **params)
        if not result.is_success:
            return result
        return OperationResult.success(data=(result.data or {}).get("Messages", []))

    def delete_message(self, queue_url: str, receipt_handle: str) -> OperationResult:
        """Acknowledge a message so it is not redelivered."""
        return self._call(
            "delete_message", QueueUrl=queue_url, ReceiptHandle=receipt_handle
        )

    def healthcheck(self, queue_url: str) -> OperationResult:
        """Lightweight health check: GetQueueAttributes, no retries."""
        return self._call(
            "get_queue_attributes",
            max_retries=0,
            QueueUrl=queue_url,
            AttributeNames=["ApproximateNumberOfMessages"],
        )
