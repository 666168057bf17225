import pytest

from infrastructure.clients.aws.dynamodb import DynamoDBClient
from infrastructure.operations.status import OperationStatus
from tests.fixtures.aws_clients import client_error


@pytest.mark.unit
class TestDynamoDBClient:
    def test_put_item(self, boto3_calls, make_fake_client, session_provider):
        client = make_fake_client(api_responses={"put_item": {}})
        boto3_calls(client)

        result = DynamoDBClient(session_provider).put_item("table", {"id": {"S": "1"}})

        assert result.is_success
        assert client.calls == [("put_item", {"TableName": "table", "Item": {"id": {"S": "1"}}})]

    def test_batch_get_item_builds_request_items(self, boto3_calls, make_fake_client, session_provider):
        client = make_fake_client(api_responses={"batch_get_item": {"Responses": {}}})
        boto3_calls(client)

        DynamoDBClient(session_provider).batch_get_item("table", [{"id": {"S": "1"}}])

        assert client.calls == [
            ("batch_get_item", {"RequestItems": {"table": {"Keys": [{"id": {"S": "1"}}]}}})
        ]

    def test_query_paginates_by_default(self, boto3_calls, make_fake_client, session_provider):
        client = make_fake_client(
            paginated_pages=[{"Items": [{"id": {"S": "1"}}]}, {"Items": [{"id": {"S": "2"}}]}]
        )
        boto3_calls(client)

        result = DynamoDBClient(session_provider).query(
            "table", "#k = :v", IndexName="StatusIndex"
        )

        assert result.data == [{"id": {"S": "1"}}, {"id": {"S": "2"}}]
        assert client.paginator.calls[0]["IndexName"] == "StatusIndex"

    def test_query_single_page(self, boto3_calls, make_fake_client, session_provider):
        client = make_fake_client(api_responses={"query": {"Items": [], "Count": 0}})
        boto3_calls(client)

        result = DynamoDBClient(session_provider).query(
            "table", "#k = :v", paginate=False, Limit=1
        )

        assert result.data == {"Items": [], "Count": 0}
        assert client.calls[0][1]["Limit"] == 1

    def test_scan_collects_items(self, boto3_calls, make_fake_client, session_provider):
        client = make_fake_client(paginated_pages=[{"Items": [{"id": {"S": "1"}}]}])
        boto3_calls(client)

        result = DynamoDBClient(session_provider).scan("table", FilterExpression="x")

        assert result.data == [{"id": {"S": "1"}}]

    def test_healthcheck_does_not_retry(self, boto3_calls, make_fake_client, session_provider):
        client = make_fake_client(api_responses={"describe_table": client_error("ResourceNotFoundException")})
        boto3_calls(client)

        result = DynamoDBClient(session_provider).healthcheck("missing")

        assert result.status == OperationStatus.NOT_FOUND
        assert len(client.calls) == 1
