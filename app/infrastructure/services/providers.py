"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for the service's components.
"""

from functools import lru_cache

from infrastructure.clients.aws import AWSClients
from infrastructure.configuration import Settings
from modules.org_directory.credentials import CredentialBroker
from modules.org_directory.dispatcher import WorkQueueDispatcher
from modules.org_directory.queries import QueryService
from modules.org_directory.store import DirectoryStore
from modules.org_directory.writer import CacheWriter, OrganizationsFactory


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    This is the single source of truth for settings across the entire application.
    The @lru_cache decorator ensures only ONE instance is created per process.

    Infrastructure packages should use this directly:
        from infrastructure.services.providers import get_settings
        settings = get_settings()

    Application code should use the DI type alias for testability:
        from infrastructure.services import SettingsDep
        @router.get("/version")
        def version(settings: SettingsDep):
            return {"version": settings.GIT_SHA}

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_aws_clients() -> AWSClients:
    """Provider for the AWS clients facade.

    The facade holds no credentials: Organizations clients are created per
    invocation from freshly assumed credentials, so caching it is safe.
    """
    settings = get_settings()
    return AWSClients(aws_settings=settings.aws)


def _require_setting(value: str, name: str) -> str:
    if not value:
        raise ValueError(f"{name} is not configured in settings.org_directory")
    return value


@lru_cache
def get_directory_store() -> DirectoryStore:
    """Cache store bound to the configured table."""
    settings = get_settings()
    table = _require_setting(settings.org_directory.DYNAMODB_TABLE, "DYNAMODB_TABLE")
    return DirectoryStore(get_aws_clients().dynamodb, table)


@lru_cache
def get_query_service() -> QueryService:
    """
    Get application-scoped query service singleton.

    Usage:
        @router.get("/status/{status}")
        def by_status(status: str, queries: QueryServiceDep):
            return queries.by_status(status)
    """
    settings = get_settings()
    return QueryService(
        get_directory_store(), max_depth=settings.org_directory.MAX_OU_DEPTH
    )


@lru_cache
def get_credential_broker() -> CredentialBroker:
    """Broker for the management account role; it never caches credentials."""
    settings = get_settings().org_directory
    return CredentialBroker(
        get_aws_clients().sts,
        role_arn=_require_setting(
            settings.ORG_CROSS_ACCOUNT_ROLE_ARN, "ORG_CROSS_ACCOUNT_ROLE_ARN"
        ),
        external_id=_require_setting(settings.EXTERNAL_ID, "EXTERNAL_ID"),
        session_name=settings.ROLE_SESSION_NAME,
    )


def get_organizations_factory() -> OrganizationsFactory:
    """Builds Organizations clients with the configured retry budget."""
    settings = get_settings().org_directory
    aws = get_aws_clients()

    def factory(credentials):
        return aws.organizations_for(
            credentials,
            max_attempts=settings.SOURCE_MAX_ATTEMPTS,
            backoff_factor=settings.SOURCE_BACKOFF_FACTOR,
        )

    return factory


@lru_cache
def get_dispatcher() -> WorkQueueDispatcher:
    settings = get_settings().org_directory
    return WorkQueueDispatcher(
        get_aws_clients().sqs,
        _require_setting(settings.SQS_URL, "SQS_URL"),
        batch_size=settings.DISPATCH_BATCH_SIZE,
    )


@lru_cache
def get_cache_writer() -> CacheWriter:
    settings = get_settings().org_directory
    return CacheWriter(
        get_credential_broker(),
        get_organizations_factory(),
        get_directory_store(),
        max_depth=settings.MAX_OU_DEPTH,
    )
