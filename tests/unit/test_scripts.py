"""Tests for the local table maintenance scripts."""

from typing import Any, Generator

import boto3
import pytest
from moto import mock_aws

from stripe_graphql_api.repositories import UserRepository
from stripe_graphql_api.utils.codec import encode
from stripe_graphql_api.utils.dynamodb import StoreClient
from stripe_graphql_api.utils.table_schemas import stage_table_names

from scripts.create_local_tables import create_tables
from scripts.delete_local_tables import delete_tables
from scripts.migrate_add_type_field import TYPED_TABLES, migrate_table
from scripts.seed_users import SAMPLE_USERS, seed_users

TABLE_NAMES = stage_table_names("test")


@pytest.fixture
def empty_client(aws_credentials: None) -> Generator[Any, None, None]:
    """Mock DynamoDB with no tables."""
    with mock_aws():
        yield boto3.client("dynamodb", region_name="us-east-1")


class TestCreateTables:
    def test_creates_every_table(self, empty_client: Any) -> None:
        """Test that every table is created."""
        created = create_tables(empty_client, TABLE_NAMES)

        assert sorted(created) == sorted(TABLE_NAMES.values())
        assert sorted(empty_client.list_tables()["TableNames"]) == sorted(TABLE_NAMES.values())

    def test_existing_tables_skipped(self, empty_client: Any) -> None:
        """Test that existing tables are left alone."""
        create_tables(empty_client, TABLE_NAMES)

        assert create_tables(empty_client, TABLE_NAMES) == []


class TestDeleteTables:
    def test_deletes_and_skips_missing(self, empty_client: Any) -> None:
        """Test that present tables are deleted and missing ones skipped."""
        create_tables(empty_client, TABLE_NAMES)

        deleted = delete_tables(empty_client, [TABLE_NAMES["users"], "no-such-table"])

        assert deleted == [TABLE_NAMES["users"]]
        assert TABLE_NAMES["users"] not in empty_client.list_tables()["TableNames"]


class TestMigrateAddTypeField:
    def _put_legacy_orders(self, client: Any) -> None:
        for order_id in ("o1", "o2"):
            client.put_item(
                TableName=TABLE_NAMES["orders"],
                Item=encode({"PK": f"ORDER#{order_id}", "SK": "METADATA", "orderId": order_id}),
            )

    def test_dry_run_changes_nothing(self, store: StoreClient) -> None:
        """Test that a dry run writes nothing."""
        self._put_legacy_orders(store.client)
        entity_type, keys = TYPED_TABLES["orders"]

        result = migrate_table(store.client, TABLE_NAMES["orders"], entity_type, keys, apply=False)

        assert result == (2, 2, 0)
        assert all("type" not in item for item in store.client.scan(TableName=TABLE_NAMES["orders"])["Items"])

    def test_apply_makes_records_listable(self, store: StoreClient, orders: Any) -> None:
        """Test that backfilled records show up in list queries."""
        self._put_legacy_orders(store.client)
        orders.create(
            {"customerId": "c1", "items": [{"productId": "p", "productName": "P", "quantity": 1, "unitPrice": 1}]}
        )
        entity_type, keys = TYPED_TABLES["orders"]

        result = migrate_table(store.client, TABLE_NAMES["orders"], entity_type, keys, apply=True)

        assert result == (3, 2, 2)
        assert len(orders.list()) == 3


class TestSeedUsers:
    def test_seeds_sample_users(self, users: UserRepository) -> None:
        """Test seeding the sample users."""
        created = seed_users(users)

        assert len(created) == len(SAMPLE_USERS)
        assert sorted(u["username"] for u in users.list()) == sorted(u["username"] for u in SAMPLE_USERS)
