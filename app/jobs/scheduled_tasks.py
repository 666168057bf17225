"""Long-running runner for hosts without a scheduler or queue trigger.

The crawl runs daily at CRAWL_SCHEDULE_TIME through `schedule`; a consumer
thread long-polls the work queue, processes each message and deletes it only
on success so failures reappear after the visibility timeout.
"""

import threading
import time
import uuid

import schedule

from infrastructure.clients.aws.sqs import SqsClient
from infrastructure.logging import configure_logging, get_module_logger
from infrastructure.services.providers import (
    get_aws_clients,
    get_cache_writer,
    get_settings,
)
from modules.org_directory.deadline import Deadline
from modules.org_directory.handlers import crawl_handler
from modules.org_directory.service import QueueRecord, WriteSummary, process_records
from modules.org_directory.writer import CacheWriter

logger = get_module_logger()


def safe_run(job):
    def wrapper(*args, **kwargs):
        try:
            job(*args, **kwargs)
        except Exception as e:  # pylint: disable=broad-except
            logger.error("scheduled_job_failed", job=job.__name__, error=str(e))

    wrapper.__name__ = job.__name__
    return wrapper


def init():
    settings = get_settings().org_directory
    logger.info("scheduled_tasks_initialized", crawl_at=settings.CRAWL_SCHEDULE_TIME)

    schedule.every().day.at(settings.CRAWL_SCHEDULE_TIME).do(safe_run(run_crawl))
    schedule.every(5).minutes.do(safe_run(scheduler_heartbeat))
    schedule.every(5).minutes.do(safe_run(integration_healthchecks))


def scheduler_heartbeat():
    logger.info("scheduler_heartbeat", at=time.ctime())


def integration_healthchecks():
    settings = get_settings().org_directory
    aws = get_aws_clients()
    healthchecks = {
        "dynamodb": lambda: aws.dynamodb.healthcheck(settings.DYNAMODB_TABLE),
        "sqs": lambda: aws.sqs.healthcheck(settings.SQS_URL),
    }
    for key, healthcheck in healthchecks.items():
        result = healthcheck()
        if result.is_success:
            logger.info("integration_healthy", integration=key)
        else:
            logger.error("integration_unhealthy", integration=key, error=result.message)


def run_crawl():
    crawl_handler({"id": f"scheduled-{uuid.uuid4()}"})


def consume_queue_once(
    sqs: SqsClient,
    queue_url: str,
    writer: CacheWriter,
    max_messages: int = 1,
    wait_time_seconds: int = 10,
    visibility_timeout: int = 120,
    write_timeout_seconds: float = 90,
) -> WriteSummary:
    """Receive one batch, process it and delete the messages that succeeded."""
    result = sqs.receive_messages(
        queue_url,
        max_number_of_messages=max_messages,
        wait_time_seconds=wait_time_seconds,
        visibility_timeout=visibility_timeout,
    )
    if not result.is_success:
        logger.error("queue_receive_failed", error=result.message)
        return WriteSummary()

    records = [
        QueueRecord(
            message_id=message["MessageId"],
            body=message.get("Body", ""),
            receipt_handle=message.get("ReceiptHandle"),
        )
        for message in result.data
    ]
    if not records:
        return WriteSummary()

    summary = process_records(
        writer,
        records,
        deadline_factory=lambda: Deadline(write_timeout_seconds),
    )

    failed = set(summary.failed_message_ids)
    for record in records:
        if record.message_id in failed or not record.receipt_handle:
            continue
        deleted = sqs.delete_message(queue_url, record.receipt_handle)
        if not deleted.is_success:
            # The unit will be redelivered and re-upserted with the same result.
            logger.warning(
                "queue_delete_failed",
                message_id=record.message_id,
                error=deleted.message,
            )
    return summary


def run_consumer(idle_interval=5):
    """Start the queue consumer thread.

    @return stop_consumer: threading.Event which stops the consumer after
    the poll in progress completes.
    """
    stop_consumer = threading.Event()
    settings = get_settings().org_directory
    sqs = get_aws_clients().sqs
    writer = get_cache_writer()

    class ConsumerThread(threading.Thread):
        @classmethod
        def run(cls):
            while not stop_consumer.is_set():
                try:
                    consume_queue_once(
                        sqs,
                        settings.SQS_URL,
                        writer,
                        max_messages=settings.QUEUE_MAX_MESSAGES,
                        wait_time_seconds=settings.QUEUE_WAIT_TIME_SECONDS,
                        visibility_timeout=settings.QUEUE_VISIBILITY_TIMEOUT,
                        write_timeout_seconds=settings.WRITE_TIMEOUT_SECONDS,
                    )
                except Exception as e:  # pylint: disable=broad-except
                    logger.error("queue_consumer_error", error=str(e))
                    stop_consumer.wait(idle_interval)

    consumer_thread = ConsumerThread(daemon=True, name="work-queue-consumer")
    consumer_thread.start()
    return stop_consumer


def run_continuously(interval=1):
    """Continuously run, while executing pending jobs at each
    elapsed time interval.
    @return cease_continuous_run: threading.Event which can
    be set to cease continuous run. Missed jobs are not run
    retroactively: a daily crawl missed while the process was
    down waits for the next day.
    """
    cease_continuous_run = threading.Event()

    class ScheduleThread(threading.Thread):
        @classmethod
        def run(cls):
            while not cease_continuous_run.is_set():
                schedule.run_pending()
                time.sleep(interval)

    continuous_thread = ScheduleThread(daemon=True, name="scheduler")
    continuous_thread.start()
    return cease_continuous_run


def main():
    """Run the scheduler and the queue consumer until interrupted."""
    configure_logging()
    settings = get_settings()
    if not settings.org_directory.is_configured:
        raise SystemExit("org directory settings are incomplete")

    init()
    stop_scheduler = run_continuously()
    stop_consumer = run_consumer()
    logger.info("scheduled_runner_started")
    try:
        while True:
            time.sleep(60)
    except KeyboardInterrupt:
        logger.info("scheduled_runner_stopping")
    finally:
        stop_scheduler.set()
        stop_consumer.set()


if __name__ == "__main__":
    main()
