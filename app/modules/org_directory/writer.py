"""Cache writer: turns one work unit into one upserted cache record.

Steps per unit: assume the role, fetch account detail and tags, resolve the
OU path, flatten tags, put the denormalized item. Any failure before the put
propagates and nothing is written; the queue's redelivery governs the retry.
Re-processing the same id converges to the same record for an unchanged
source, which is what makes at-least-once delivery safe.
"""

from typing import Callable, Optional

from infrastructure.clients.aws.credentials import Credentials
from infrastructure.clients.aws.organizations import OrganizationsClient
from infrastructure.logging import get_module_logger
from modules.org_directory.credentials import CredentialBroker
from modules.org_directory.crawler import OrgTreeCrawler
from modules.org_directory.deadline import Deadline
from modules.org_directory.errors import SourceApiError
from modules.org_directory.models import MAX_OU_LEVELS, DirectoryEntry, WorkUnit
from modules.org_directory.store import DirectoryStore

logger = get_module_logger()

OrganizationsFactory = Callable[[Credentials], OrganizationsClient]


class CacheWriter:
    """Resolve and upsert directory entries.

    Args:
        broker: CredentialBroker; one assumption per processed unit
        organizations_factory: Builds an Organizations client for credentials
        store: DirectoryStore receiving the upserts
        max_depth: Maximum ancestor hops
    """

    def __init__(
        self,
        broker: CredentialBroker,
        organizations_factory: OrganizationsFactory,
        store: DirectoryStore,
        max_depth: int = MAX_OU_LEVELS,
    ) -> None:
        self._broker = broker
        self._organizations_factory = organizations_factory
        self._store = store
        self._max_depth = max_depth

    def build_entry(
        self, entry_id: str, deadline: Optional[Deadline] = None
    ) -> DirectoryEntry:
        """Fetch everything needed for one entry's record."""
        credentials = self._broker.obtain()
        crawler = OrgTreeCrawler(
            self._organizations_factory(credentials),
            max_depth=self._max_depth,
            deadline=deadline,
        )

        account = crawler.describe_entry(entry_id)
        if not account:
            raise SourceApiError(f"account {entry_id} is not listed in the organization")

        tags = crawler.list_tags(entry_id)
        ou_path = crawler.resolve_ancestor_path(entry_id)

        return DirectoryEntry(
            id=account.get("Id", entry_id),
            name=account.get("Name", ""),
            status=account.get("Status", ""),
            email_address=account.get("Email", ""),
            ou_path=ou_path,
            tags=tags,
        )

    def process(
        self, unit: WorkUnit, deadline: Optional[Deadline] = None
    ) -> DirectoryEntry:
        """Process one work unit end to end.

        Raises:
            AuthorizationError, SourceApiError, UnresolvedHierarchyError,
            CodecError, CacheStoreError, InvocationTimeoutError
        """
        log = logger.bind(entry_id=unit.entry_id, message_id=unit.message_id)
        log.info("processing_work_unit")

        entry = self.build_entry(unit.entry_id, deadline=deadline)
        item = entry.to_item()
        if deadline is not None:
            deadline.check("put_item")
        self._store.put(item)

        log.info(
            "entry_upserted",
            ou_depth=len(entry.ou_path),
            tag_count=len(entry.tags),
            status=entry.status,
        )
        return entry
