"""
Type aliases for FastAPI dependency injection.

Provides annotated type hints for common infrastructure dependencies.
"""

from typing import Annotated

from fastapi import Depends

from infrastructure.configuration import Settings
from infrastructure.services.providers import (
    get_query_service,
    get_settings,
)
from modules.org_directory.queries import QueryService

# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Read-only query service over the cache table
QueryServiceDep = Annotated[QueryService, Depends(get_query_service)]

__all__ = [
    "SettingsDep",
    "QueryServiceDep",
]
