"""Sync pipeline stages composed from the directory components.

- run_crawl_cycle: assume the role, enumerate every entry, enqueue one unit each
- process_records: feed queue records to the cache writer, collecting failures
"""

from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from pydantic import ValidationError

from infrastructure.logging import get_module_logger
from modules.org_directory.credentials import CredentialBroker
from modules.org_directory.crawler import OrgTreeCrawler
from modules.org_directory.deadline import Deadline
from modules.org_directory.dispatcher import DispatchSummary, WorkQueueDispatcher
from modules.org_directory.errors import OrgDirectoryError
from modules.org_directory.models import MAX_OU_LEVELS, WorkUnit
from modules.org_directory.writer import CacheWriter, OrganizationsFactory

logger = get_module_logger()


@dataclass
class QueueRecord:
    """A received queue message, independent of the delivery mechanism."""

    message_id: str
    body: str
    receipt_handle: Optional[str] = None


@dataclass
class WriteSummary:
    """Outcome of one `process_records` call."""

    processed: List[str] = field(default_factory=list)
    failed_message_ids: List[str] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "processed": len(self.processed),
            "failed": len(self.failed_message_ids),
        }


def run_crawl_cycle(
    broker: CredentialBroker,
    organizations_factory: OrganizationsFactory,
    dispatcher: WorkQueueDispatcher,
    max_depth: int = MAX_OU_LEVELS,
    deadline: Optional[Deadline] = None,
) -> DispatchSummary:
    """One crawl cycle: credential exchange, enumeration and fan-out.

    Units enqueued before a failure stay enqueued; the next cycle re-enqueues
    everything anyway.

    Raises:
        AuthorizationError: the role assumption was rejected
        SourceApiError: listing accounts failed after retries
        InvocationTimeoutError: the crawl budget ran out
    """
    credentials = broker.obtain()
    crawler = OrgTreeCrawler(
        organizations_factory(credentials), max_depth=max_depth, deadline=deadline
    )
    summary = dispatcher.enqueue_all(crawler.list_all_entries())
    logger.info("crawl_cycle_complete", **summary.as_dict())
    return summary


def process_records(
    writer: CacheWriter,
    records: Iterable[QueueRecord],
    deadline_factory: Callable[[], Deadline] = lambda: Deadline(None),
) -> WriteSummary:
    """Process each record independently.

    A record that fails (malformed body or any pipeline error) is reported in
    `failed_message_ids` and left for redelivery; the others still proceed.
    """
    summary = WriteSummary()
    for record in records:
        log = logger.bind(message_id=record.message_id)
        try:
            unit = WorkUnit.from_message(
                record.body,
                message_id=record.message_id,
                receipt_handle=record.receipt_handle,
            )
            writer.process(unit, deadline=deadline_factory())
        except ValidationError as e:
            log.error("work_unit_malformed", error=str(e))
            summary.failed_message_ids.append(record.message_id)
        except OrgDirectoryError as e:
            log.error(
                "work_unit_failed",
                error_type=type(e).__name__,
                error=str(e),
            )
            summary.failed_message_ids.append(record.message_id)
        except Exception as e:  # pylint: disable=broad-except
            log.exception(
                "work_unit_failed",
                error_type=type(e).__name__,
                error=str(e),
            )
            summary.failed_message_ids.append(record.message_id)
        else:
            summary.processed.append(unit.entry_id)

    logger.info("work_units_processed", **summary.as_dict())
    return summary
