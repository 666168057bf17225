"""Cross-account credential exchange.

The management account trusts this service's account only when the caller
presents the pre-shared external id. Every invocation exchanges the trust
relationship for a fresh credential set; nothing is cached or refreshed.
"""

from infrastructure.clients.aws.credentials import Credentials
from infrastructure.clients.aws.sts import StsClient
from infrastructure.logging import get_module_logger
from infrastructure.operations.status import OperationStatus
from modules.org_directory.errors import AuthorizationError, SourceApiError

logger = get_module_logger()


class CredentialBroker:
    """Obtain short-lived credentials for the directory's management account.

    Args:
        sts: StsClient used for AssumeRole
        role_arn: Role to assume in the management account
        external_id: External id required by the role's trust policy
        session_name: RoleSessionName recorded in CloudTrail
    """

    def __init__(
        self,
        sts: StsClient,
        role_arn: str,
        external_id: str,
        session_name: str = "AWSOrgMetadataRole",
    ) -> None:
        self._sts = sts
        self._role_arn = role_arn
        self._external_id = external_id
        self._session_name = session_name

    def obtain(self) -> Credentials:
        """Assume the role once and return its credentials.

        Raises:
            AuthorizationError: the external id or trust policy rejected us
            SourceApiError: STS failed for any other reason
        """
        log = logger.bind(role_arn=self._role_arn)
        result = self._sts.assume_role(
            self._role_arn, self._session_name, external_id=self._external_id
        )

        if result.is_success:
            log.info("credentials_obtained", expiration=str(result.data.expiration))
            return result.data

        if result.status == OperationStatus.UNAUTHORIZED:
            log.error("credential_exchange_rejected", error=result.message)
            raise AuthorizationError(
                f"assuming {self._role_arn} was rejected: {result.message}"
            )

        log.error(
            "credential_exchange_failed",
            status=result.status.value,
            error=result.message,
        )
        raise SourceApiError(f"assuming {self._role_arn} failed", response=result)
