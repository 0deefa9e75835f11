#!/usr/bin/env python3
"""
Create the five DynamoDB tables (and their GSIs) on a local DynamoDB.

Usage:
    python -m scripts.create_local_tables
    python -m scripts.create_local_tables --stage test --endpoint http://localhost:8000
"""

import argparse
from typing import Any, Dict, List, Optional

import boto3

from stripe_graphql_api.utils.config import LOCAL_DYNAMODB_ENDPOINT
from stripe_graphql_api.utils.table_schemas import all_table_schemas, stage_table_names


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Create local DynamoDB tables")
    parser.add_argument("--stage", default="dev", help="Stage suffix for table names (default: dev)")
    parser.add_argument(
        "--endpoint",
        default=LOCAL_DYNAMODB_ENDPOINT,
        help=f"DynamoDB endpoint (default: {LOCAL_DYNAMODB_ENDPOINT})",
    )
    parser.add_argument("--region", default="us-east-1", help="Region name (default: us-east-1)")
    return parser.parse_args(argv)


def local_client(endpoint: str, region: str) -> Any:
    """DynamoDB client for DynamoDB Local, which accepts any credentials."""
    return boto3.client(
        "dynamodb",
        endpoint_url=endpoint,
        region_name=region,
        aws_access_key_id="local",
        aws_secret_access_key="local",
    )


def create_tables(client: Any, table_names: Dict[str, str]) -> List[str]:
    """
    Create every missing table.

    Returns:
        Names of the tables that were created (existing ones are skipped)
    """
    existing = set(client.list_tables().get("TableNames", []))
    created = []
    for schema in all_table_schemas(table_names):
        name = schema["TableName"]
        if name in existing:
            print(f"- Table {name} already exists, skipping")
            continue
        client.create_table(**schema)
        print(f"✓ Table {name} created")
        created.append(name)
    return created


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    client = local_client(args.endpoint, args.region)

    print(f"Creating tables for stage '{args.stage}' on {args.endpoint}")
    created = create_tables(client, stage_table_names(args.stage))
    print(f"\n✅ Done: {len(created)} table(s) created")


if __name__ == "__main__":
    main()
