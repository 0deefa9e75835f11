"""Tests for the DynamoDB store client."""

from unittest.mock import MagicMock, patch

from stripe_graphql_api.utils.config import Settings
from stripe_graphql_api.utils.dynamodb import StoreClient, create_dynamodb_client
from stripe_graphql_api.utils.table_schemas import stage_table_names


class TestCreateDynamodbClient:
    @patch("stripe_graphql_api.utils.dynamodb.boto3.client")
    def test_local_endpoint(self, mock_client: MagicMock) -> None:
        """Test that offline settings build a client for the local endpoint."""
        create_dynamodb_client(Settings(dynamodb_endpoint="http://localhost:8000", region="localhost"))

        mock_client.assert_called_once_with("dynamodb", endpoint_url="http://localhost:8000", region_name="localhost")

    @patch("stripe_graphql_api.utils.dynamodb.boto3.client")
    def test_default_endpoint(self, mock_client: MagicMock) -> None:
        """Test that online settings use no endpoint override."""
        create_dynamodb_client(Settings())

        mock_client.assert_called_once_with("dynamodb")


class TestStoreClient:
    def test_uses_given_client(self) -> None:
        """Test that an injected client is used as-is."""
        client = MagicMock()

        store = StoreClient(Settings(), client=client)

        assert store.client is client

    def test_table_name(self) -> None:
        """Test table name lookup through the store client."""
        store = StoreClient(Settings(stage="test", table_names=stage_table_names("test")), client=MagicMock())

        assert store.table_name("payments") == "stripe-graphql-api-payments-test"
