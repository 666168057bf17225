"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.org_directory import OrgDirectorySettings

__all__ = ["OrgDirectorySettings"]
