"""Unit tests for infrastructure.configuration.

Tests cover:
- OrgDirectorySettings defaults, environment overrides and validation
- AwsSettings botocore configuration
- Settings aggregation and production detection
"""

import pytest
from pydantic import ValidationError

from infrastructure.configuration import AwsSettings, OrgDirectorySettings, Settings

ROLE_ARN = "arn:aws:iam::999999999999:role/OrgMetadataReader"


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in (
        "ORG_CROSS_ACCOUNT_ROLE_ARN",
        "EXTERNAL_ID",
        "SQS_URL",
        "DYNAMODB_TABLE",
        "PREFIX",
        "AWS_MAX_ATTEMPTS",
        "AWS_RETRY_MODE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.mark.unit
class TestOrgDirectorySettings:
    def test_defaults(self):
        settings = OrgDirectorySettings()

        assert settings.ROLE_SESSION_NAME == "AWSOrgMetadataRole"
        assert settings.DISPATCH_BATCH_SIZE == 10
        assert settings.MAX_OU_DEPTH == 5
        assert settings.SOURCE_MAX_ATTEMPTS == 5
        assert settings.CRAWL_TIMEOUT_SECONDS == 600
        assert settings.WRITE_TIMEOUT_SECONDS == 90
        assert settings.CRAWL_SCHEDULE_TIME == "11:00"
        assert settings.QUEUE_VISIBILITY_TIMEOUT == 120
        assert settings.QUEUE_MAX_MESSAGES == 1
        assert settings.RUN_WORKERS is False
        assert settings.is_configured is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("ORG_CROSS_ACCOUNT_ROLE_ARN", ROLE_ARN)
        monkeypatch.setenv("EXTERNAL_ID", "id-02bd6988d8d3")
        monkeypatch.setenv("SQS_URL", "https://sqs.example/queue")
        monkeypatch.setenv("DYNAMODB_TABLE", "aws-org-metadata")
        monkeypatch.setenv("DISPATCH_BATCH_SIZE", "5")

        settings = OrgDirectorySettings()

        assert settings.ORG_CROSS_ACCOUNT_ROLE_ARN == ROLE_ARN
        assert settings.DISPATCH_BATCH_SIZE == 5
        assert settings.is_configured is True

    @pytest.mark.parametrize("external_id", ["02bd6988d8d3", "id-xyz", "id-123"])
    def test_rejects_malformed_external_id(self, external_id):
        with pytest.raises(ValidationError):
            OrgDirectorySettings(EXTERNAL_ID=external_id)

    def test_rejects_malformed_role_arn(self):
        with pytest.raises(ValidationError):
            OrgDirectorySettings(ORG_CROSS_ACCOUNT_ROLE_ARN="arn:aws:iam::123:user/bob")

    def test_batch_size_is_capped_at_queue_limit(self):
        with pytest.raises(ValidationError):
            OrgDirectorySettings(DISPATCH_BATCH_SIZE=11)


@pytest.mark.unit
class TestAwsSettings:
    def test_botocore_config(self, monkeypatch):
        monkeypatch.setenv("AWS_MAX_ATTEMPTS", "7")
        monkeypatch.setenv("AWS_RETRY_MODE", "adaptive")

        config = AwsSettings().botocore_config

        assert config["retries"] == {"max_attempts": 7, "mode": "adaptive"}
        assert config["connect_timeout"] == 10


@pytest.mark.unit
class TestSettings:
    def test_sub_settings_are_instantiated(self):
        settings = Settings()

        assert isinstance(settings.aws, AwsSettings)
        assert isinstance(settings.org_directory, OrgDirectorySettings)

    def test_is_production_when_prefix_empty(self):
        assert Settings(PREFIX="").is_production is True
        assert Settings(PREFIX="dev-").is_production is False

    def test_explicit_sub_settings_are_kept(self):
        org = OrgDirectorySettings(DYNAMODB_TABLE="custom")

        settings = Settings(org_directory=org)

        assert settings.org_directory.DYNAMODB_TABLE == "custom"
