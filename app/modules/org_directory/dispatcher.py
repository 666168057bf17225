"""Fan-out of discovered entries onto the work queue."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List

from infrastructure.clients.aws.sqs import SqsClient
from infrastructure.logging import get_module_logger
from modules.org_directory.errors import DispatchError
from modules.org_directory.models import WorkUnit

logger = get_module_logger()

SQS_MAX_BATCH_SIZE = 10


@dataclass
class DispatchSummary:
    """Outcome of one `enqueue_all` call."""

    submitted: int = 0
    batches: int = 0
    failed_ids: List[str] = field(default_factory=list)

    @property
    def enqueued(self) -> int:
        return self.submitted - len(self.failed_ids)

    def as_dict(self) -> Dict[str, object]:
        return {
            "submitted": self.submitted,
            "enqueued": self.enqueued,
            "batches": self.batches,
            "failed_ids": list(self.failed_ids),
        }


def _chunks(ids: Iterable[str], size: int) -> Iterator[List[str]]:
    batch: List[str] = []
    for entry_id in ids:
        batch.append(entry_id)
        if len(batch) == size:
            yield batch
            batch = []
    if batch:
        yield batch


class WorkQueueDispatcher:
    """Submit one WorkUnit per entry id, batched for the queue API.

    Rejected ids are logged and dropped for this cycle; the next scheduled
    crawl rediscovers them.

    Args:
        sqs: SqsClient
        queue_url: Work queue URL
        batch_size: Units per SendMessageBatch call (1..10)
    """

    def __init__(
        self, sqs: SqsClient, queue_url: str, batch_size: int = SQS_MAX_BATCH_SIZE
    ) -> None:
        if not 1 <= batch_size <= SQS_MAX_BATCH_SIZE:
            raise ValueError(f"batch_size must be between 1 and {SQS_MAX_BATCH_SIZE}")
        self._sqs = sqs
        self._queue_url = queue_url
        self._batch_size = batch_size

    def _send_batch(self, batch: List[str]) -> None:
        # Entry ids are only unique within one request; map them back to entries.
        token_to_id = {str(index): entry_id for index, entry_id in enumerate(batch)}
        entries = [
            {
                "Id": token,
                "MessageBody": WorkUnit(entry_id=entry_id).to_message_body(),
            }
            for token, entry_id in token_to_id.items()
        ]

        result = self._sqs.send_message_batch(self._queue_url, entries)
        if not result.is_success:
            raise DispatchError(
                f"send_message_batch failed: {result.message}", failed_ids=batch
            )

        failed = (result.data or {}).get("Failed", [])
        if failed:
            raise DispatchError(
                "queue rejected part of the batch",
                failed_ids=[token_to_id[f["Id"]] for f in failed if f["Id"] in token_to_id],
            )

    def enqueue_all(self, ids: Iterable[str]) -> DispatchSummary:
        """Enqueue every id; consumes `ids` lazily.

        Returns:
            DispatchSummary with the ids the queue did not accept
        """
        summary = DispatchSummary()
        for batch in _chunks(ids, self._batch_size):
            summary.batches += 1
            summary.submitted += len(batch)
            try:
                self._send_batch(batch)
            except DispatchError as e:
                logger.error(
                    "dispatch_batch_failed",
                    batch=summary.batches,
                    failed_ids=e.failed_ids,
                    error=str(e),
                )
                summary.failed_ids.extend(e.failed_ids)

        logger.info("dispatch_complete", **summary.as_dict())
        return summary
