"""Function entrypoints for the crawl and cache write stages.

crawl_handler runs once per scheduled cycle. cache_writer_handler receives a
batch of queue records and reports the ones that failed through
``batchItemFailures`` so only those are redelivered.
"""

import json
import uuid
from functools import lru_cache
from typing import Any, Dict, List

from infrastructure.logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_module_logger,
)
from infrastructure.services.providers import (
    get_cache_writer,
    get_credential_broker,
    get_dispatcher,
    get_organizations_factory,
    get_settings,
)
from modules.org_directory.deadline import Deadline
from modules.org_directory.errors import OrgDirectoryError
from modules.org_directory.service import QueueRecord, process_records, run_crawl_cycle

logger = get_module_logger()


@lru_cache
def _init_logging() -> None:
    configure_logging()


def crawl_handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """Scheduled crawl: enumerate the organization and enqueue every entry.

    Authorization and listing failures end the cycle and are re-raised so the
    invocation is reported as failed.
    """
    _init_logging()
    clear_request_context()
    settings = get_settings().org_directory
    cycle_id = (event or {}).get("id") or str(uuid.uuid4())

    with bind_request_context(correlation_id=cycle_id, stage="crawl"):
        deadline = Deadline.for_invocation(settings.CRAWL_TIMEOUT_SECONDS, context)
        try:
            summary = run_crawl_cycle(
                get_credential_broker(),
                get_organizations_factory(),
                get_dispatcher(),
                max_depth=settings.MAX_OU_DEPTH,
                deadline=deadline,
            )
        except OrgDirectoryError as e:
            logger.error("crawl_cycle_failed", error_type=type(e).__name__, error=str(e))
            raise

    return {"statusCode": 200, "body": json.dumps(summary.as_dict())}


def _records_from_event(event: Dict[str, Any]) -> List[QueueRecord]:
    return [
        QueueRecord(
            message_id=record.get("messageId", ""),
            body=record.get("body", ""),
            receipt_handle=record.get("receiptHandle"),
        )
        for record in (event or {}).get("Records", [])
    ]


def cache_writer_handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """Process a batch of queue records, one cache upsert per record."""
    _init_logging()
    clear_request_context()
    settings = get_settings().org_directory
    records = _records_from_event(event)

    with bind_request_context(stage="cache_write", records=len(records)):
        summary = process_records(
            get_cache_writer(),
            records,
            deadline_factory=lambda: Deadline.for_invocation(
                settings.WRITE_TIMEOUT_SECONDS, context
            ),
        )

    return {
        "batchItemFailures": [
            {"itemIdentifier": message_id}
            for message_id in summary.failed_message_ids
        ]
    }
