"""AWS integration settings."""

from typing import Optional

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class AwsSettings(IntegrationSettings):
    """AWS SDK configuration settings.

    Environment Variables:
        AWS_REGION: AWS region for services (default: us-east-1)
        AWS_ENDPOINT_URL: Custom endpoint (LocalStack) for every client
        AWS_RETRY_MODE: botocore retry mode, 'standard' or 'adaptive'
        AWS_MAX_ATTEMPTS: botocore max attempts per call (default: 5)
        AWS_CONNECT_TIMEOUT: Connect timeout in seconds (default: 10)
        AWS_READ_TIMEOUT: Read timeout in seconds (default: 30)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        region = settings.aws.AWS_REGION
        ```
    """

    AWS_REGION: str = Field(default="us-east-1", alias="AWS_REGION")
    ENDPOINT_URL: Optional[str] = Field(default=None, alias="AWS_ENDPOINT_URL")
    RETRY_MODE: str = Field(default="standard", alias="AWS_RETRY_MODE")
    MAX_ATTEMPTS: int = Field(default=5, alias="AWS_MAX_ATTEMPTS", ge=1)
    CONNECT_TIMEOUT: int = Field(default=10, alias="AWS_CONNECT_TIMEOUT", ge=1)
    READ_TIMEOUT: int = Field(default=30, alias="AWS_READ_TIMEOUT", ge=1)

    @property
    def botocore_config(self) -> dict:
        """Keyword arguments for `botocore.config.Config`."""
        return {
            "retries": {"max_attempts": self.MAX_ATTEMPTS, "mode": self.RETRY_MODE},
            "connect_timeout": self.CONNECT_TIMEOUT,
            "read_timeout": self.READ_TIMEOUT,
        }
