"""Fixtures for AWS client tests.

Provides the factory-as-fixture pattern for fake boto3 clients and a helper
that routes `executor.get_boto3_client` to them.
"""

from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from infrastructure.clients.aws import executor
from infrastructure.clients.aws.session_provider import SessionProvider
from infrastructure.configuration.integrations.aws import AwsSettings
from tests.fixtures.aws_clients import FakeClient


@pytest.fixture
def make_fake_client():
    """Factory fixture for creating configurable fake boto3 clients.

    Usage:
        def test_something(make_fake_client):
            client = make_fake_client(api_responses={"list_parents": {...}})
    """

    def _factory(
        paginated_pages: Optional[List[Dict[str, Any]]] = None,
        api_responses: Optional[Dict[str, Any]] = None,
    ) -> FakeClient:
        return FakeClient(paginated_pages=paginated_pages, api_responses=api_responses)

    return _factory


@pytest.fixture
def boto3_calls(monkeypatch):
    """Route boto3 client creation to a fake and record each creation.

    Returns a helper: ``use(client)`` installs `client` and returns the list
    of recorded creation kwargs.
    """
    created: List[Dict[str, Any]] = []

    def use(client):
        def fake_get_boto3_client(
            service_name, session_config=None, client_config=None, credentials=None
        ):
            created.append(
                {
                    "service_name": service_name,
                    "session_config": session_config,
                    "client_config": client_config,
                    "credentials": credentials,
                }
            )
            return client

        monkeypatch.setattr(executor, "get_boto3_client", fake_get_boto3_client)
        return created

    monkeypatch.setattr(executor.time, "sleep", lambda _s: None)
    return use


@pytest.fixture
def session_provider():
    return SessionProvider(region="ca-central-1")


@pytest.fixture
def mock_aws_settings():
    """MagicMock AwsSettings with standard values.

    Tests can further customize this mock as needed:
        def test_something(mock_aws_settings):
            mock_aws_settings.AWS_REGION = "us-west-2"
    """
    settings = MagicMock(spec=AwsSettings)
    settings.AWS_REGION = "ca-central-1"
    settings.ENDPOINT_URL = None
    settings.botocore_config = {"retries": {"max_attempts": 5, "mode": "standard"}}
    return settings
