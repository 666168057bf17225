"""Tests for OrganizationsClient."""

import pytest

from infrastructure.clients.aws.organizations import OrganizationsClient
from infrastructure.operations.status import OperationStatus
from tests.fixtures.aws_clients import client_error
from tests.fixtures.org_directory import make_credentials


@pytest.mark.unit
class TestOrganizationsClient:
    def test_list_accounts_page_first_page(self, boto3_calls, make_fake_client, session_provider):
        client = make_fake_client(
            api_responses={"list_accounts": {"Accounts": [{"Id": "111"}], "NextToken": "n1"}}
        )
        boto3_calls(client)

        result = OrganizationsClient(session_provider).list_accounts_page()

        assert result.is_success
        assert result.data["NextToken"] == "n1"
        assert client.calls == [("list_accounts", {})]

    def test_list_accounts_page_follows_token(self, boto3_calls, make_fake_client, session_provider):
        client = make_fake_client(api_responses={"list_accounts": {"Accounts": []}})
        boto3_calls(client)

        OrganizationsClient(session_provider).list_accounts_page("n1")

        assert client.calls == [("list_accounts", {"NextToken": "n1"})]

    def test_calls_use_bound_credentials(self, boto3_calls, make_fake_client, session_provider):
        credentials = make_credentials()
        created = boto3_calls(make_fake_client(api_responses={"list_parents": {"Parents": []}}))

        OrganizationsClient(session_provider, credentials=credentials).list_parents("111")

        assert created[0]["service_name"] == "organizations"
        assert created[0]["credentials"] is credentials

    def test_list_tags_collects_all_pages(self, boto3_calls, make_fake_client, session_provider):
        client = make_fake_client(
            paginated_pages=[
                {"Tags": [{"Key": "env", "Value": "prod"}]},
                {"Tags": [{"Key": "team", "Value": "core"}]},
            ]
        )
        boto3_calls(client)

        result = OrganizationsClient(session_provider).list_tags_for_resource("111")

        assert result.data == [
            {"Key": "env", "Value": "prod"},
            {"Key": "team", "Value": "core"},
        ]

    def test_throttling_retried_up_to_budget(self, boto3_calls, make_fake_client, session_provider):
        client = make_fake_client(api_responses={"list_parents": client_error("TooManyRequestsException")})
        boto3_calls(client)

        result = OrganizationsClient(session_provider, max_retries=4).list_parents("111")

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert len(client.calls) == 5
