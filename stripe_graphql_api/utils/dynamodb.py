"""
DynamoDB store client.

One ``StoreClient`` is built per Lambda process and handed to every
repository. The underlying boto3 client is safe for concurrent calls.
"""

from typing import TYPE_CHECKING, Any, Optional

import boto3

from .config import Settings

if TYPE_CHECKING:
    from mypy_boto3_dynamodb import DynamoDBClient


def create_dynamodb_client(settings: Settings) -> "DynamoDBClient":
    """Create the low-level DynamoDB client with optional local endpoint override."""
    kwargs: dict[str, Any] = {}
    if settings.dynamodb_endpoint:
        kwargs["endpoint_url"] = settings.dynamodb_endpoint
    if settings.region:
        kwargs["region_name"] = settings.region
    return boto3.client("dynamodb", **kwargs)


class StoreClient:
    """Shared handle to the document store plus table-name resolution."""

    def __init__(self, settings: Settings, client: Optional["DynamoDBClient"] = None) -> None:
        self.settings = settings
        self.client = client if client is not None else create_dynamodb_client(settings)

    def table_name(self, entity: str) -> str:
        """Physical table name for ``users``, ``subscriptions``, ``orders``, ``products`` or ``payments``."""
        return self.settings.table_name(entity)
