"""Organization tree crawler.

Enumerates accounts page by page and resolves each account's ancestor chain
through ListParents. All calls go through an OrganizationsClient bound to the
credentials of the current invocation; transient failures are retried there
with bounded exponential backoff.
"""

from typing import Any, Dict, Iterator, List, Optional

from infrastructure.clients.aws.organizations import OrganizationsClient
from infrastructure.logging import get_module_logger
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus
from modules.org_directory import tag_codec
from modules.org_directory.deadline import Deadline
from modules.org_directory.errors import (
    AuthorizationError,
    SourceApiError,
    UnresolvedHierarchyError,
)
from modules.org_directory.models import MAX_OU_LEVELS

logger = get_module_logger()

ROOT_PARENT_TYPE = "ROOT"


class OrgTreeCrawler:
    """Crawl the organization through the Organizations API.

    Args:
        organizations: Client bound to the invocation's credentials
        max_depth: Maximum ancestor hops before a walk is abandoned
        deadline: Optional invocation budget checked between calls
    """

    def __init__(
        self,
        organizations: OrganizationsClient,
        max_depth: int = MAX_OU_LEVELS,
        deadline: Optional[Deadline] = None,
    ) -> None:
        self._org = organizations
        self._max_depth = max_depth
        self._deadline = deadline or Deadline(None)

    def _unwrap(self, result: OperationResult, operation: str, subject: str) -> Any:
        if result.is_success:
            return result.data
        if result.status == OperationStatus.UNAUTHORIZED:
            raise AuthorizationError(f"{operation} denied for {subject}: {result.message}")
        raise SourceApiError(
            f"{operation} failed for {subject}: {result.message}", response=result
        )

    def _account_pages(self) -> Iterator[List[Dict[str, Any]]]:
        next_token: Optional[str] = None
        pages = 0
        while True:
            self._deadline.check("list_accounts")
            page = self._unwrap(
                self._org.list_accounts_page(next_token), "list_accounts", "organization"
            )
            pages += 1
            yield page.get("Accounts", [])

            next_token = page.get("NextToken")
            if not next_token:
                logger.info("account_listing_complete", pages=pages)
                return

    def list_all_entries(self) -> Iterator[str]:
        """Yield every account id, following NextToken until exhausted.

        The iterator is lazy, finite and cannot be restarted.

        Raises:
            SourceApiError: a page still failed after retries
            AuthorizationError: the assumed role may not list accounts
            InvocationTimeoutError: the crawl budget ran out
        """
        for accounts in self._account_pages():
            for account in accounts:
                yield account["Id"]

    def resolve_ancestor_path(self, entry_id: str) -> List[str]:
        """Walk parents from `entry_id` up to the root.

        Returns:
            Ancestor ids ordered root first, immediate parent last. The root
            is included; an entry without parents yields an empty path.

        Raises:
            UnresolvedHierarchyError: more than `max_depth` hops were needed
        """
        path: List[str] = []
        child_id = entry_id
        while True:
            self._deadline.check("list_parents")
            response = self._unwrap(
                self._org.list_parents(child_id), "list_parents", child_id
            )
            parents = response.get("Parents", [])
            if not parents:
                return path

            if len(path) >= self._max_depth:
                logger.error(
                    "ancestor_walk_unbounded",
                    entry_id=entry_id,
                    partial_path=path,
                    max_depth=self._max_depth,
                )
                raise UnresolvedHierarchyError(entry_id, path, self._max_depth)

            parent = parents[0]
            path.insert(0, parent["Id"])
            if parent.get("Type") == ROOT_PARENT_TYPE:
                return path
            child_id = parent["Id"]

    def describe_entry(self, entry_id: str) -> Dict[str, Any]:
        """Account detail (Id, Name, Email, Status, ...) read from ListAccounts.

        Pages are read until the account is found; DescribeAccount is never
        called.

        Returns:
            The account dict, or an empty dict if the organization has no
            such account
        """
        for accounts in self._account_pages():
            for account in accounts:
                if account.get("Id") == entry_id:
                    return account
        return {}

    def list_tags(self, entry_id: str) -> Dict[str, str]:
        """Tag mapping of an entry."""
        self._deadline.check("list_tags_for_resource")
        tags = self._unwrap(
            self._org.list_tags_for_resource(entry_id),
            "list_tags_for_resource",
            entry_id,
        )
        return tag_codec.tags_from_aws(tags)
