"""Session provider for AWS client operations.

Centralizes boto3 session and client configuration (region, endpoint,
botocore retry/timeout config) so per-service clients don't duplicate it.
Credentials are never stored here: callers pass the credential set that
belongs to their own invocation.
"""

from typing import Any, Dict, Optional

import structlog
from botocore.config import Config  # type: ignore

from infrastructure.clients.aws import executor
from infrastructure.clients.aws.credentials import Credentials

logger = structlog.get_logger()


class SessionProvider:
    """Provider for AWS session configuration.

    Args:
        region: AWS region for all clients (e.g., 'us-east-1')
        endpoint_url: Custom endpoint URL (for testing/LocalStack)
        botocore_config: kwargs for `botocore.config.Config`
    """

    def __init__(
        self,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        botocore_config: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.region = region
        self.endpoint_url = endpoint_url
        self.botocore_config = botocore_config

    def without_sdk_retries(self) -> "SessionProvider":
        """Copy of this provider whose clients make a single attempt per call.

        Used where the executor owns the retry budget.
        """
        config = dict(self.botocore_config or {})
        mode = (config.get("retries") or {}).get("mode", "standard")
        config["retries"] = {"total_max_attempts": 1, "mode": mode}
        return SessionProvider(
            region=self.region,
            endpoint_url=self.endpoint_url,
            botocore_config=config,
        )

    def build_client_kwargs(
        self, credentials: Optional[Credentials] = None
    ) -> Dict[str, Any]:
        """Build session and client configuration kwargs for boto3.

        Returns:
            Dict with session_config, client_config and credentials for
            passing to execute_aws_api_call
        """
        session_config: Dict[str, Any] = {}
        client_config: Dict[str, Any] = {}

        if self.region:
            session_config["region_name"] = self.region
            client_config["region_name"] = self.region

        if self.endpoint_url:
            client_config["endpoint_url"] = self.endpoint_url

        if self.botocore_config:
            client_config["config"] = Config(**self.botocore_config)

        logger.debug(
            "built_client_kwargs",
            region=self.region,
            endpoint_url=self.endpoint_url,
            assumed_role=credentials is not None,
        )
        return {
            "session_config": session_config or None,
            "client_config": client_config or None,
            "credentials": credentials,
        }

    def get_boto3_client(
        self, service_name: str, credentials: Optional[Credentials] = None
    ) -> Any:
        """Get a fully-configured boto3 client for the given service."""
        kw = self.build_client_kwargs(credentials)
        return executor.get_boto3_client(
            service_name,
            session_config=kw["session_config"],
            client_config=kw["client_config"],
            credentials=kw["credentials"],
        )
