"""Organizations client for AWS operations.

Read-only access to the organization tree (accounts, parents, tags) with
consistent error handling and OperationResult return types. A client is bound
to the credential set of the invocation that created it.
"""

from typing import Optional

import structlog

from infrastructure.clients.aws.credentials import Credentials
from infrastructure.clients.aws.executor import execute_aws_api_call
from infrastructure.clients.aws.session_provider import SessionProvider
from infrastructure.operations.result import OperationResult

logger = structlog.get_logger()


class OrganizationsClient:
    """Client for AWS Organizations operations.

    Args:
        session_provider: SessionProvider instance for configuration
        credentials: Assumed-role credentials for the management account
        max_retries: Retries for transient failures per call
        backoff_factor: Base delay (seconds) between retries
    """

    def __init__(
        self,
        session_provider: SessionProvider,
        credentials: Optional[Credentials] = None,
        max_retries: int = 4,
        backoff_factor: float = 0.5,
    ) -> None:
        self._service_name = "organizations"
        self._session_provider = session_provider
        self._credentials = credentials
        self._max_retries = max_retries
        self._backoff_factor = backoff_factor
        self._logger = logger.bind(component="organizations_client")

    def _call(self, method: str, **kwargs) -> OperationResult:
        client_kwargs = self._session_provider.build_client_kwargs(self._credentials)
        kwargs.setdefault("max_retries", self._max_retries)
        kwargs.setdefault("backoff_factor", self._backoff_factor)
        return execute_aws_api_call(
            self._service_name, method, **client_kwargs, **kwargs
        )

    def list_accounts_page(self, next_token: Optional[str] = None) -> OperationResult:
        """Fetch one page of ListAccounts.

        Returns:
            OperationResult whose data is the raw page ({"Accounts": [...],
            "NextToken": ...})
        """
        params = {"NextToken": next_token} if next_token else {}
        return self._call("list_accounts", **params)

    def list_parents(self, child_id: str) -> OperationResult:
        """List the parents (root or OU) of an account or OU.

        Returns:
            OperationResult whose data is the raw response ({"Parents": [...]})
        """
        return self._call("list_parents", ChildId=child_id)

    def list_tags_for_resource(self, resource_id: str) -> OperationResult:
        """List all tags of an account, root or OU (all pages)."""
        return self._call(
            "list_tags_for_resource",
            keys=["Tags"],
            force_paginate=True,
            ResourceId=resource_id,
        )
