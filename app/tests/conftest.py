"""Shared fixtures: a small organization and in-memory AWS fakes.

Sample tree:

    r-root
    ├── 111111111111 (alpha)
    ├── ou-a
    │   ├── 222222222222 (beta)
    │   └── ou-b
    │       └── 333333333333 (gamma, suspended)
    └── ou-c
        └── 444444444444 (delta, untagged)
"""

import pytest

from modules.org_directory.credentials import CredentialBroker
from modules.org_directory.queries import QueryService
from modules.org_directory.store import DirectoryStore
from modules.org_directory.writer import CacheWriter
from tests.fixtures.org_directory import (
    EXTERNAL_ID,
    ROLE_ARN,
    ROOT_ID,
    TABLE_NAME,
    FakeDynamoDB,
    FakeOrganizations,
    FakeSqs,
    FakeSts,
)


@pytest.fixture
def sample_accounts():
    return [
        {"Id": "111111111111", "Name": "alpha", "Email": "alpha@example.com", "Status": "ACTIVE"},
        {"Id": "222222222222", "Name": "beta", "Email": "beta@example.com", "Status": "ACTIVE"},
        {"Id": "333333333333", "Name": "gamma", "Email": "gamma@example.com", "Status": "SUSPENDED"},
        {"Id": "444444444444", "Name": "delta", "Email": "delta@example.com", "Status": "ACTIVE"},
    ]


@pytest.fixture
def sample_parents():
    return {
        "111111111111": (ROOT_ID, "ROOT"),
        "ou-a": (ROOT_ID, "ROOT"),
        "222222222222": ("ou-a", "ORGANIZATIONAL_UNIT"),
        "ou-b": ("ou-a", "ORGANIZATIONAL_UNIT"),
        "333333333333": ("ou-b", "ORGANIZATIONAL_UNIT"),
        "ou-c": (ROOT_ID, "ROOT"),
        "444444444444": ("ou-c", "ORGANIZATIONAL_UNIT"),
    }


@pytest.fixture
def sample_tags():
    return {
        "111111111111": {"env": "prod", "team": "core"},
        "222222222222": {"env": "production"},
        "333333333333": {"env": "prod", "team": "data"},
    }


@pytest.fixture
def fake_organizations(sample_accounts, sample_parents, sample_tags):
    return FakeOrganizations(
        accounts=sample_accounts, parents=sample_parents, tags=sample_tags
    )


@pytest.fixture
def fake_sts():
    return FakeSts()


@pytest.fixture
def fake_sqs():
    return FakeSqs()


@pytest.fixture
def fake_dynamodb():
    return FakeDynamoDB()


@pytest.fixture
def broker(fake_sts):
    return CredentialBroker(fake_sts, ROLE_ARN, EXTERNAL_ID)


@pytest.fixture
def store(fake_dynamodb):
    return DirectoryStore(fake_dynamodb, TABLE_NAME)


@pytest.fixture
def writer(broker, fake_organizations, store):
    return CacheWriter(broker, lambda credentials: fake_organizations, store)


@pytest.fixture
def populated_store(writer, store, sample_accounts):
    """Store holding every sample account, written through the cache writer."""
    from modules.org_directory.models import WorkUnit

    for account in sample_accounts:
        writer.process(WorkUnit(entry_id=account["Id"]))
    return store


@pytest.fixture
def query_service(populated_store):
    return QueryService(populated_store)
