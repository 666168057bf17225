"""STS client for cross-account role assumption."""

from typing import Optional

import structlog

from infrastructure.clients.aws.credentials import Credentials
from infrastructure.clients.aws.executor import execute_aws_api_call
from infrastructure.clients.aws.session_provider import SessionProvider
from infrastructure.operations.result import OperationResult

logger = structlog.get_logger()


class StsClient:
    """Client for AWS STS operations.

    Args:
        session_provider: SessionProvider instance for configuration
    """

    def __init__(self, session_provider: SessionProvider) -> None:
        self._service_name = "sts"
        self._session_provider = session_provider
        self._logger = logger.bind(component="sts_client")

    def assume_role(
        self,
        role_arn: str,
        session_name: str,
        external_id: Optional[str] = None,
        duration_seconds: Optional[int] = None,
    ) -> OperationResult:
        """Assume `role_arn` and return its temporary credentials.

        Args:
            role_arn: Role to assume
            session_name: RoleSessionName recorded in CloudTrail
            external_id: ExternalId required by the role's trust policy
            duration_seconds: Optional credential lifetime

        Returns:
            OperationResult whose data is a Credentials instance on success
        """
        params = {"RoleArn": role_arn, "RoleSessionName": session_name}
        if external_id:
            params["ExternalId"] = external_id
        if duration_seconds:
            params["DurationSeconds"] = duration_seconds

        self._logger.info("assuming_role", role_arn=role_arn, session_name=session_name)
        result = execute_aws_api_call(
            self._service_name,
            "assume_role",
            max_retries=2,
            **self._session_provider.build_client_kwargs(),
            **params,
        )
        if not result.is_success:
            return result
        return OperationResult.success(
            data=Credentials.from_sts_response(result.data),
            message=f"assumed {role_arn}",
        )
