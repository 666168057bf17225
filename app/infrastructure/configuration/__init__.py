"""Infrastructure configuration module - public API.

Pydantic BaseSettings organized per concern. Obtain the process-wide instance
through `infrastructure.services.get_settings()`; construct `Settings(...)`
directly only in tests.
"""

from infrastructure.configuration.features import OrgDirectorySettings
from infrastructure.configuration.integrations import AwsSettings
from infrastructure.configuration.settings import Settings

__all__ = ["Settings", "AwsSettings", "OrgDirectorySettings"]
