"""AWS Clients facade.

Composes the per-service clients the org directory pipeline needs around one
SessionProvider. Organizations clients are created per credential set because
every invocation assumes its own role session.
"""

from typing import Optional

import structlog

from infrastructure.clients.aws.credentials import Credentials
from infrastructure.clients.aws.dynamodb import DynamoDBClient
from infrastructure.clients.aws.organizations import OrganizationsClient
from infrastructure.clients.aws.session_provider import SessionProvider
from infrastructure.clients.aws.sqs import SqsClient
from infrastructure.clients.aws.sts import StsClient
from infrastructure.configuration.integrations.aws import AwsSettings

logger = structlog.get_logger()


class AWSClients:
    """Facade for the AWS service clients.

    Usage:
        aws = AWSClients(settings.aws)
        creds = aws.sts.assume_role(role_arn, "session", external_id).data
        org = aws.organizations_for(creds)
        result = org.list_parents("111111111111")
    """

    def __init__(self, aws_settings: AwsSettings) -> None:
        self._session_provider = SessionProvider(
            region=aws_settings.AWS_REGION,
            endpoint_url=aws_settings.ENDPOINT_URL,
            botocore_config=aws_settings.botocore_config,
        )
        self.sts: StsClient = StsClient(self._session_provider)
        self.dynamodb: DynamoDBClient = DynamoDBClient(self._session_provider)
        self.sqs: SqsClient = SqsClient(self._session_provider)
        self._logger = logger.bind(component="aws_clients")

    @property
    def session_provider(self) -> SessionProvider:
        return self._session_provider

    def organizations_for(
        self,
        credentials: Optional[Credentials],
        max_attempts: int = 5,
        backoff_factor: float = 0.5,
    ) -> OrganizationsClient:
        """Create an Organizations client bound to `credentials`.

        Args:
            credentials: Credentials from the invocation's AssumeRole
            max_attempts: Total attempts per call, first attempt included.
                botocore retries are switched off for these clients.
            backoff_factor: Base delay (seconds) between retries
        """
        return OrganizationsClient(
            self._session_provider.without_sdk_retries(),
            credentials=credentials,
            max_retries=max(max_attempts - 1, 0),
            backoff_factor=backoff_factor,
        )
