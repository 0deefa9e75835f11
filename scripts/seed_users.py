#!/usr/bin/env python3
"""
Insert sample users into a local users table.

Usage:
    python -m scripts.seed_users --stage dev
"""

import argparse
from typing import Any, Dict, List, Optional

from stripe_graphql_api.repositories import UserRepository
from stripe_graphql_api.utils.config import LOCAL_DYNAMODB_ENDPOINT, Settings
from stripe_graphql_api.utils.dynamodb import StoreClient
from stripe_graphql_api.utils.table_schemas import stage_table_names

from scripts.create_local_tables import local_client

SAMPLE_USERS: List[Dict[str, Any]] = [
    {"name": "John Doe", "username": "johndoe", "email": "john@example.com"},
    {"name": "Jane Smith", "username": "janesmith", "email": "jane@example.com"},
    {
        "name": "Bob Johnson",
        "username": "bobjohnson",
        "email": "bob@example.com",
        "address": {"street": "123 Main St", "city": "New York", "zipcode": "10001"},
    },
]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Seed sample users")
    parser.add_argument("--stage", default="dev", help="Stage suffix for table names (default: dev)")
    parser.add_argument("--endpoint", default=LOCAL_DYNAMODB_ENDPOINT, help="DynamoDB endpoint")
    parser.add_argument("--region", default="us-east-1", help="Region name (default: us-east-1)")
    return parser.parse_args(argv)


def seed_users(users: UserRepository, samples: List[Dict[str, Any]] = SAMPLE_USERS) -> List[Dict[str, Any]]:
    """Create each sample user and return the stored records."""
    existing = users.list()
    print(f"Found {len(existing)} existing users in the database")

    created = []
    for sample in samples:
        user = users.create(sample)
        print(f"✓ Created user: {user['name']} ({user['id']})")
        created.append(dict(user))
    return created


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    settings = Settings(stage=args.stage, table_names=stage_table_names(args.stage))
    store = StoreClient(settings, client=local_client(args.endpoint, args.region))

    created = seed_users(UserRepository(store))
    print(f"\n✅ Seeded {len(created)} users")


if __name__ == "__main__":
    main()
