#!/usr/bin/env python3
"""
Delete the stage's DynamoDB tables from a local DynamoDB.

Usage:
    python -m scripts.delete_local_tables --stage dev
    python -m scripts.delete_local_tables --all
"""

import argparse
from typing import Any, Iterable, List, Optional

from botocore.exceptions import ClientError

from stripe_graphql_api.utils.config import LOCAL_DYNAMODB_ENDPOINT
from stripe_graphql_api.utils.table_schemas import stage_table_names

from scripts.create_local_tables import local_client


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Delete local DynamoDB tables")
    parser.add_argument("--stage", default="dev", help="Stage suffix for table names (default: dev)")
    parser.add_argument("--endpoint", default=LOCAL_DYNAMODB_ENDPOINT, help="DynamoDB endpoint")
    parser.add_argument("--region", default="us-east-1", help="Region name (default: us-east-1)")
    parser.add_argument(
        "--all",
        action="store_true",
        help="Delete every table on the endpoint, not only this stage's",
    )
    return parser.parse_args(argv)


def delete_tables(client: Any, table_names: Iterable[str]) -> List[str]:
    """Delete the named tables; tables that do not exist are skipped."""
    deleted = []
    for name in table_names:
        try:
            client.delete_table(TableName=name)
        except ClientError as e:
            if e.response["Error"]["Code"] == "ResourceNotFoundException":
                print(f"- Table {name} not found, skipping")
                continue
            raise
        print(f"✓ Table {name} deleted")
        deleted.append(name)
    return deleted


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    client = local_client(args.endpoint, args.region)

    if args.all:
        names = client.list_tables().get("TableNames", [])
    else:
        names = list(stage_table_names(args.stage).values())

    if not names:
        print("No tables to delete.")
        return

    deleted = delete_tables(client, names)
    print(f"\n✅ Done: {len(deleted)} table(s) deleted")


if __name__ == "__main__":
    main()
