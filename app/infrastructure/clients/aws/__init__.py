"""Infrastructure AWS clients public API.

DI-friendly AWS clients with per-service class decomposition. Every method
returns an OperationResult:

    from infrastructure.services import get_aws_clients

    aws = get_aws_clients()
    result = aws.dynamodb.batch_get_item(
        "org-metadata", Keys=[{"id": {"S": "123456789012"}}]
    )
    if result.is_success:
        return result.data["Responses"]["org-metadata"]
"""

from infrastructure.clients.aws.credentials import Credentials
from infrastructure.clients.aws.dynamodb import DynamoDBClient
from infrastructure.clients.aws.facade import AWSClients
from infrastructure.clients.aws.organizations import OrganizationsClient
from infrastructure.clients.aws.session_provider import SessionProvider
from infrastructure.clients.aws.sqs import SqsClient
from infrastructure.clients.aws.sts import StsClient

__all__ = [
    "AWSClients",
    "Credentials",
    "SessionProvider",
    "DynamoDBClient",
    "OrganizationsClient",
    "SqsClient",
    "StsClient",
]
