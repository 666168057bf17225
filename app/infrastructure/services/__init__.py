"""
Dependency injection services.

Provides type aliases and provider functions for FastAPI dependency injection.
"""

from infrastructure.services.dependencies import (
    SettingsDep,
    QueryServiceDep,
)
from infrastructure.services.providers import (
    get_settings,
    get_aws_clients,
    get_directory_store,
    get_query_service,
    get_credential_broker,
    get_organizations_factory,
    get_dispatcher,
    get_cache_writer,
)

__all__ = [
    "SettingsDep",
    "QueryServiceDep",
    "get_settings",
    "get_aws_clients",
    "get_directory_store",
    "get_query_service",
    "get_credential_broker",
    "get_organizations_factory",
    "get_dispatcher",
    "get_cache_writer",
]
