"""Organization directory synchronization feature settings."""

import re

from pydantic import Field, field_validator

from infrastructure.configuration.base import FeatureSettings

ROLE_ARN_PATTERN = re.compile(r"^arn:aws:iam::[0-9]{12}:role/.+$")
EXTERNAL_ID_PATTERN = re.compile(r"^id-[0-9a-fA-F]{12,}$")


class OrgDirectorySettings(FeatureSettings):
    """Configuration for the crawl, dispatch, cache write and query stages.

    Environment Variables:
        ORG_CROSS_ACCOUNT_ROLE_ARN: Role in the management account to assume
        EXTERNAL_ID: External id required by the role's trust policy
        ROLE_SESSION_NAME: Session name used for AssumeRole
        SQS_URL: Work queue URL
        DYNAMODB_TABLE: Cache table name
        DISPATCH_BATCH_SIZE: Work units per SendMessageBatch call (max 10)
        MAX_OU_DEPTH: Maximum ancestor hops before a walk is abandoned
        SOURCE_MAX_ATTEMPTS: Attempts per Organizations call before failing
        SOURCE_BACKOFF_FACTOR: Base delay (seconds) for exponential backoff
        CRAWL_TIMEOUT_SECONDS: Wall-clock budget of one crawl cycle
        WRITE_TIMEOUT_SECONDS: Wall-clock budget of one work unit
        CRAWL_SCHEDULE_TIME: Daily crawl time (HH:MM) for the job runner
        QUEUE_WAIT_TIME_SECONDS: Long-poll wait for the queue consumer
        QUEUE_VISIBILITY_TIMEOUT: Seconds a received unit stays invisible
        QUEUE_MAX_MESSAGES: Units received per poll (write-phase batch size)
        RUN_WORKERS: Run the scheduler and queue consumer inside the API process
    """

    ORG_CROSS_ACCOUNT_ROLE_ARN: str = Field(
        default="", alias="ORG_CROSS_ACCOUNT_ROLE_ARN"
    )
    EXTERNAL_ID: str = Field(default="", alias="EXTERNAL_ID")
    ROLE_SESSION_NAME: str = Field(
        default="AWSOrgMetadataRole", alias="ROLE_SESSION_NAME"
    )
    SQS_URL: str = Field(default="", alias="SQS_URL")
    DYNAMODB_TABLE: str = Field(default="", alias="DYNAMODB_TABLE")

    DISPATCH_BATCH_SIZE: int = Field(
        default=10, alias="DISPATCH_BATCH_SIZE", ge=1, le=10
    )
    MAX_OU_DEPTH: int = Field(default=5, alias="MAX_OU_DEPTH", ge=1, le=5)
    SOURCE_MAX_ATTEMPTS: int = Field(default=5, alias="SOURCE_MAX_ATTEMPTS", ge=1)
    SOURCE_BACKOFF_FACTOR: float = Field(
        default=0.5, alias="SOURCE_BACKOFF_FACTOR", ge=0
    )

    CRAWL_TIMEOUT_SECONDS: int = Field(default=600, alias="CRAWL_TIMEOUT_SECONDS")
    WRITE_TIMEOUT_SECONDS: int = Field(default=90, alias="WRITE_TIMEOUT_SECONDS")
    CRAWL_SCHEDULE_TIME: str = Field(default="11:00", alias="CRAWL_SCHEDULE_TIME")

    QUEUE_WAIT_TIME_SECONDS: int = Field(
        default=10, alias="QUEUE_WAIT_TIME_SECONDS", ge=0, le=20
    )
    QUEUE_VISIBILITY_TIMEOUT: int = Field(
        default=120, alias="QUEUE_VISIBILITY_TIMEOUT"
    )
    QUEUE_MAX_MESSAGES: int = Field(
        default=1, alias="QUEUE_MAX_MESSAGES", ge=1, le=10
    )
    RUN_WORKERS: bool = Field(default=False, alias="RUN_WORKERS")

    @field_validator("ORG_CROSS_ACCOUNT_ROLE_ARN")
    @classmethod
    def _validate_role_arn(cls, value: str) -> str:
        if value and not ROLE_ARN_PATTERN.match(value):
            raise ValueError(
                "must be an IAM role ARN: arn:aws:iam::{account}:role/{name}"
            )
        return value

    @field_validator("EXTERNAL_ID")
    @classmethod
    def _validate_external_id(cls, value: str) -> str:
        if value and not EXTERNAL_ID_PATTERN.match(value):
            raise ValueError("must look like id-02bd6988d8d3")
        return value

    @property
    def is_configured(self) -> bool:
        return all(
            [
                self.ORG_CROSS_ACCOUNT_ROLE_ARN,
                self.EXTERNAL_ID,
                self.SQS_URL,
                self.DYNAMODB_TABLE,
            ]
        )
