import pytest
from fastapi.testclient import TestClient

from api.dependencies.rate_limits import get_limiter
from infrastructure.configuration import Settings
from infrastructure.services.providers import get_query_service, get_settings
from main import create_app


@pytest.fixture
def settings():
    return Settings(GIT_SHA="abc1234")


@pytest.fixture
def app(settings, query_service):
    get_limiter().reset()
    application = create_app(settings)
    application.dependency_overrides[get_settings] = lambda: settings
    application.dependency_overrides[get_query_service] = lambda: query_service
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)
