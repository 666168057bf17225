"""
Unit tests for dependency injection providers.

Tests cover:
- get_settings() caching behavior
- Component wiring from settings
- Missing configuration errors
- QueryServiceDep override pattern
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from infrastructure.configuration import Settings
from infrastructure.services import providers
from infrastructure.services.dependencies import QueryServiceDep, SettingsDep
from modules.org_directory.queries import QueryService

ROLE_ARN = "arn:aws:iam::999999999999:role/OrgMetadataReader"


def _clear_caches():
    for provider in (
        providers.get_settings,
        providers.get_aws_clients,
        providers.get_directory_store,
        providers.get_query_service,
        providers.get_credential_broker,
        providers.get_dispatcher,
        providers.get_cache_writer,
    ):
        provider.cache_clear()


@pytest.fixture
def configured_env(monkeypatch):
    monkeypatch.setenv("ORG_CROSS_ACCOUNT_ROLE_ARN", ROLE_ARN)
    monkeypatch.setenv("EXTERNAL_ID", "id-02bd6988d8d3")
    monkeypatch.setenv("SQS_URL", "https://sqs.example/queue")
    monkeypatch.setenv("DYNAMODB_TABLE", "aws-org-metadata")
    monkeypatch.setenv("DISPATCH_BATCH_SIZE", "4")
    _clear_caches()
    yield
    _clear_caches()


@pytest.fixture
def unconfigured_env(monkeypatch):
    for name in ("ORG_CROSS_ACCOUNT_ROLE_ARN", "EXTERNAL_ID", "SQS_URL", "DYNAMODB_TABLE"):
        monkeypatch.delenv(name, raising=False)
    _clear_caches()
    yield
    _clear_caches()


@pytest.mark.unit
class TestGetSettings:
    def test_returns_cached_instance(self, configured_env):
        first = providers.get_settings()

        assert isinstance(first, Settings)
        assert providers.get_settings() is first

    def test_cache_can_be_cleared(self, configured_env):
        first = providers.get_settings()
        providers.get_settings.cache_clear()

        assert providers.get_settings() is not first


@pytest.mark.unit
class TestComponentProviders:
    def test_store_uses_configured_table(self, configured_env):
        store = providers.get_directory_store()

        assert store._table_name == "aws-org-metadata"

    def test_query_service_is_singleton(self, configured_env):
        assert providers.get_query_service() is providers.get_query_service()

    def test_broker_uses_role_and_external_id(self, configured_env):
        broker = providers.get_credential_broker()

        assert broker._role_arn == ROLE_ARN
        assert broker._external_id == "id-02bd6988d8d3"
        assert broker._session_name == "AWSOrgMetadataRole"

    def test_dispatcher_uses_batch_size(self, configured_env):
        dispatcher = providers.get_dispatcher()

        assert dispatcher._batch_size == 4
        assert dispatcher._queue_url == "https://sqs.example/queue"

    def test_organizations_factory_applies_retry_budget(self, configured_env):
        factory = providers.get_organizations_factory()

        client = factory(None)

        assert client._max_retries == 4

    def test_missing_table_raises(self, unconfigured_env):
        with pytest.raises(ValueError, match="DYNAMODB_TABLE"):
            providers.get_directory_store()

    def test_missing_role_raises(self, unconfigured_env):
        with pytest.raises(ValueError, match="ORG_CROSS_ACCOUNT_ROLE_ARN"):
            providers.get_credential_broker()


@pytest.mark.unit
class TestDependencyOverrides:
    def test_query_service_dep_can_be_overridden(self, configured_env, populated_store):
        app = FastAPI()

        @app.get("/count")
        def count(queries: QueryServiceDep, settings: SettingsDep):
            return {
                "found": len(queries.by_status("ACTIVE").data),
                "table": settings.org_directory.DYNAMODB_TABLE,
            }

        app.dependency_overrides[providers.get_query_service] = lambda: QueryService(
            populated_store
        )

        response = TestClient(app).get("/count")

        assert response.json() == {"found": 3, "table": "aws-org-metadata"}
