"""Cache store: the DynamoDB table holding synchronized entries.

Items are kept as plain Python dicts by this layer and converted to and from
the low-level attribute-value format with boto3's type (de)serializers.
"""

import time
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer

from infrastructure.clients.aws.dynamodb import DynamoDBClient
from infrastructure.logging import get_module_logger
from infrastructure.operations.result import OperationResult
from modules.org_directory.errors import CacheStoreError
from modules.org_directory.models import ID_ATTRIBUTE

logger = get_module_logger()

BATCH_GET_LIMIT = 100
MAX_UNPROCESSED_ROUNDS = 5
UNPROCESSED_BACKOFF_SECONDS = 0.05

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def serialize_item(item: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: _serializer.serialize(v) for k, v in item.items()}


def deserialize_item(item: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: _deserializer.deserialize(v) for k, v in item.items()}


class DirectoryStore:
    """Keyed and indexed store of directory entries.

    Args:
        dynamodb: DynamoDBClient
        table_name: Cache table name
    """

    def __init__(self, dynamodb: DynamoDBClient, table_name: str) -> None:
        self._dynamodb = dynamodb
        self._table_name = table_name

    def _unwrap(self, result: OperationResult, operation: str) -> Any:
        if not result.is_success:
            logger.error(
                "cache_store_call_failed",
                operation=operation,
                table=self._table_name,
                status=result.status.value,
                error=result.message,
            )
            raise CacheStoreError(f"{operation} failed: {result.message}", response=result)
        return result.data

    def put(self, item: Mapping[str, Any]) -> None:
        """Create or wholesale replace the item with the same id."""
        self._unwrap(
            self._dynamodb.put_item(self._table_name, serialize_item(item)), "put_item"
        )

    def batch_get(self, ids: Sequence[str]) -> List[Dict[str, Any]]:
        """Fetch the items that exist among `ids`; missing ids are omitted."""
        unique_ids = list(dict.fromkeys(ids))
        items: List[Dict[str, Any]] = []

        for start in range(0, len(unique_ids), BATCH_GET_LIMIT):
            keys = [
                {ID_ATTRIBUTE: {"S": entry_id}}
                for entry_id in unique_ids[start : start + BATCH_GET_LIMIT]
            ]
            rounds = 0
            while keys:
                rounds += 1
                if rounds > MAX_UNPROCESSED_ROUNDS:
                    raise CacheStoreError(
                        f"batch_get_item left {len(keys)} keys unprocessed"
                    )
                if rounds > 1:
                    delay = UNPROCESSED_BACKOFF_SECONDS * (2 ** (rounds - 2))
                    logger.info(
                        "batch_get_unprocessed_retry", keys=len(keys), delay=delay
                    )
                    time.sleep(delay)
                data = self._unwrap(
                    self._dynamodb.batch_get_item(self._table_name, keys),
                    "batch_get_item",
                )
                items.extend(
                    deserialize_item(i)
                    for i in data.get("Responses", {}).get(self._table_name, [])
                )
                keys = (
                    data.get("UnprocessedKeys", {})
                    .get(self._table_name, {})
                    .get("Keys", [])
                )
        return items

    def query_index(
        self,
        index_name: str,
        attribute: str,
        value: str,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Exact-match query on a secondary index.

        Args:
            index_name: Global secondary index
            attribute: Hash key attribute of the index
            value: Value to match
            limit: Stop after one page of at most `limit` items
        """
        params: Dict[str, Any] = {
            "IndexName": index_name,
            "ExpressionAttributeNames": {"#k": attribute},
            "ExpressionAttributeValues": {":v": {"S": value}},
        }
        if limit is not None:
            params["Limit"] = limit
            data = self._unwrap(
                self._dynamodb.query(
                    self._table_name, "#k = :v", paginate=False, **params
                ),
                "query",
            )
            raw_items = data.get("Items", [])
        else:
            raw_items = self._unwrap(
                self._dynamodb.query(self._table_name, "#k = :v", **params), "query"
            )
        return [deserialize_item(i) for i in raw_items]

    def scan_contains(
        self, attribute: str, needles: Iterable[str]
    ) -> List[Dict[str, Any]]:
        """Scan for items whose `attribute` contains every needle."""
        values = {f":n{i}": {"S": needle} for i, needle in enumerate(needles)}
        if not values:
            raise ValueError("scan_contains needs at least one needle")

        expression = " AND ".join(f"contains(#a, {name})" for name in values)
        raw_items = self._unwrap(
            self._dynamodb.scan(
                self._table_name,
                FilterExpression=expression,
                ExpressionAttributeNames={"#a": attribute},
                ExpressionAttributeValues=values,
            ),
            "scan",
        )
        return [deserialize_item(i) for i in raw_items]
