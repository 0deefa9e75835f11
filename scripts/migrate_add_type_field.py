#!/usr/bin/env python3
"""
One-time migration: backfill the ``type`` discriminator.

Records written before the TypeIndex existed have no ``type`` attribute and
are invisible to the list queries. This script scans the users,
subscriptions, orders and products tables and sets the missing value.

Usage:
    python -m scripts.migrate_add_type_field --stage dev            # dry run
    python -m scripts.migrate_add_type_field --stage dev --apply
"""

import argparse
from typing import Any, Dict, List, Optional, Tuple

from botocore.exceptions import ClientError

from stripe_graphql_api.models import EntityType
from stripe_graphql_api.utils.codec import decode, encode
from stripe_graphql_api.utils.config import LOCAL_DYNAMODB_ENDPOINT
from stripe_graphql_api.utils.table_schemas import stage_table_names

from scripts.create_local_tables import local_client

# entity -> (type value, key attributes)
TYPED_TABLES: Dict[str, Tuple[str, List[str]]] = {
    "users": (EntityType.USER, ["id"]),
    "subscriptions": (EntityType.SUBSCRIPTION, ["id"]),
    "orders": (EntityType.ORDER, ["PK", "SK"]),
    "products": (EntityType.PRODUCT, ["PK", "SK"]),
}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Add the missing type field to existing records")
    parser.add_argument("--stage", default="dev", help="Stage suffix for table names (default: dev)")
    parser.add_argument("--endpoint", default=LOCAL_DYNAMODB_ENDPOINT, help="DynamoDB endpoint")
    parser.add_argument("--region", default="us-east-1", help="Region name (default: us-east-1)")
    parser.add_argument(
        "--apply",
        action="store_true",
        help="Actually apply the changes (default is dry-run)",
    )
    return parser.parse_args(argv)


def migrate_table(
    client: Any, table_name: str, entity_type: str, key_attributes: List[str], apply: bool
) -> Tuple[int, int, int]:
    """
    Scan one table and set ``type`` where it is missing.

    Returns:
        (total scanned, needing migration, migrated)
    """
    print(f"\n📋 Scanning table: {table_name}")

    paginator = client.get_paginator("scan")
    total = needs = migrated = 0

    for page in paginator.paginate(TableName=table_name):
        for raw in page.get("Items", []):
            total += 1
            item = decode(raw)
            if item.get("type"):
                continue

            needs += 1
            key = {name: item[name] for name in key_attributes}
            if not apply:
                print(f"  Would set type={entity_type} on {key}")
                continue

            client.update_item(
                TableName=table_name,
                Key=encode(key),
                UpdateExpression="SET #type = :type",
                ExpressionAttributeNames={"#type": "type"},
                ExpressionAttributeValues=encode({":type": entity_type}),
            )
            migrated += 1

    print(f"  Scanned: {total}, missing type: {needs}, updated: {migrated}")
    return total, needs, migrated


def main(argv: Optional[List[str]] = None) -> None:
    """Main migration logic."""
    args = parse_args(argv)
    client = local_client(args.endpoint, args.region)
    table_names = stage_table_names(args.stage)

    print("\nType Field Migration Script")
    print(f"Stage: {args.stage}")
    print(f"Mode: {'APPLY CHANGES' if args.apply else 'DRY RUN (no changes)'}")

    pending = 0
    for entity, (entity_type, key_attributes) in TYPED_TABLES.items():
        table_name = table_names[entity]
        try:
            _, needs, _ = migrate_table(client, table_name, entity_type, key_attributes, args.apply)
        except ClientError as e:
            if e.response["Error"]["Code"] == "ResourceNotFoundException":
                print(f"\n⚠️  Table {table_name} not found - skipping")
                continue
            raise
        pending += needs

    if not args.apply and pending:
        print("\n⚠️  This was a DRY RUN. To apply changes, run with --apply flag")
    elif args.apply:
        print("\n✓ Migration complete!")
    else:
        print("\n✓ No records need migration")


if __name__ == "__main__":
    main()
