"""Org metadata service configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from infrastructure.configuration.features import OrgDirectorySettings
from infrastructure.configuration.integrations import AwsSettings


class Settings(BaseSettings):
    """Main configuration object.

    - **Integrations**: AWS SDK behaviour (region, endpoint, botocore retries)
    - **Features**: the org directory pipeline (role, queue, table, budgets)

    Environment Variables:
        PREFIX: Environment prefix; empty means production
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        GIT_SHA: Git commit SHA for deployment tracking

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        table = settings.org_directory.DYNAMODB_TABLE
        region = settings.aws.AWS_REGION
        ```
    """

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    aws: AwsSettings
    org_directory: OrgDirectorySettings

    @property
    def is_production(self) -> bool:
        """True if PREFIX is empty."""
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        settings_map = {
            "aws": AwsSettings,
            "org_directory": OrgDirectorySettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
