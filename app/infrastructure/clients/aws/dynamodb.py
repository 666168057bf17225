"""DynamoDB client for AWS operations.

Low-level DynamoDB operations (attribute-value typed items) with consistent
error handling and OperationResult return types.
"""

from typing import Any, Dict, List

import structlog

from infrastructure.clients.aws.executor import execute_aws_api_call
from infrastructure.clients.aws.session_provider import SessionProvider
from infrastructure.operations.result import OperationResult

logger = structlog.get_logger()


class DynamoDBClient:
    """Client for DynamoDB operations.

    Uses the ambient credential chain of the running process; the cache
    table lives in the same account as the service.

    Args:
        session_provider: SessionProvider instance for configuration
    """

    def __init__(self, session_provider: SessionProvider) -> None:
        self._session_provider = session_provider
        self._service_name = "dynamodb"
        self._logger = logger.bind(component="dynamodb_client")

    def _call(self, method: str, **kwargs) -> OperationResult:
        client_kwargs = self._session_provider.build_client_kwargs()
        return execute_aws_api_call(
            self._service_name, method, **client_kwargs, **kwargs
        )

    def put_item(
        self, table_name: str, Item: Dict[str, Any], **kwargs
    ) -> OperationResult:
        """Put (create or replace) an item."""
        return self._call("put_item", TableName=table_name, Item=Item, **kwargs)

    def batch_get_item(
        self, table_name: str, Keys: List[Dict[str, Any]], **kwargs
    ) -> OperationResult:
        """Get up to 100 items by primary key in one call.

        Returns:
            OperationResult whose data is the raw response, including any
            `UnprocessedKeys` the caller must request again
        """
        return self._call(
            "batch_get_item",
            RequestItems={table_name: {"Keys": Keys}},
            **kwargs,
        )

    def query(
        self,
        table_name: str,
        KeyConditionExpression: str,
        paginate: bool = True,
        **kwargs,
    ) -> OperationResult:
        """Query a table or index.

        Args:
            table_name: Name of the DynamoDB table
            KeyConditionExpression: Key condition expression
            paginate: Collect the items of every page (data is a list).
                When False the single raw response is returned.
            **kwargs: IndexName, ExpressionAttributeValues, Limit, ...
        """
        if paginate:
            kwargs.update(keys=["Items"], force_paginate=True)
        return self._call(
            "query",
            TableName=table_name,
            KeyConditionExpression=KeyConditionExpression,
            **kwargs,
        )

    def scan(self, table_name: str, **kwargs) -> OperationResult:
        """Scan the whole table, collecting the items of every page."""
        return self._call(
            "scan",
            TableName=table_name,
            keys=["Items"],
            force_paginate=True,
            **kwargs,
        )

    def healthcheck(self, table_name: str) -> OperationResult:
        """Lightweight health check: DescribeTable, no retries."""
        return self._call("describe_table", max_retries=0, TableName=table_name)
