"""
Test fixtures for the resolver Lambda tests.

Provides moto-backed DynamoDB tables, a deterministic clock, repositories
wired to the mock store and a base AppSync event.
"""

import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Generator

import boto3
import pytest
from moto import mock_aws

from stripe_graphql_api.handlers import graphql
from stripe_graphql_api.repositories import (
    OrderRepository,
    PaymentRepository,
    ProductRepository,
    SubscriptionRepository,
    UserRepository,
)
from stripe_graphql_api.utils.config import Settings
from stripe_graphql_api.utils.dynamodb import StoreClient
from stripe_graphql_api.utils.table_schemas import all_table_schemas, stage_table_names


class TickingClock:
    """Returns a strictly increasing ISO timestamp on every call."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, tzinfo=timezone.utc)) -> None:
        self.current = start
        self.calls = 0

    def __call__(self) -> str:
        value = self.current.isoformat()
        self.current += timedelta(seconds=1)
        self.calls += 1
        return value


@pytest.fixture
def aws_credentials() -> None:
    """Set fake AWS credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture
def settings() -> Settings:
    """Settings for the ``test`` stage."""
    return Settings(
        stage="test",
        table_names=stage_table_names("test"),
        region="us-east-1",
        stripe_secret_key="sk_test_123",
    )


@pytest.fixture
def store(aws_credentials: None, settings: Settings) -> Generator[StoreClient, None, None]:
    """StoreClient over mock DynamoDB with all five tables created."""
    with mock_aws():
        client = boto3.client("dynamodb", region_name="us-east-1")
        for schema in all_table_schemas(settings.table_names):
            client.create_table(**schema)
        yield StoreClient(settings, client=client)


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def users(store: StoreClient, clock: TickingClock) -> UserRepository:
    return UserRepository(store, clock=clock)


@pytest.fixture
def subscriptions(store: StoreClient, clock: TickingClock) -> SubscriptionRepository:
    return SubscriptionRepository(store, clock=clock)


@pytest.fixture
def orders(store: StoreClient, clock: TickingClock) -> OrderRepository:
    return OrderRepository(store, clock=clock)


@pytest.fixture
def products(store: StoreClient, clock: TickingClock) -> ProductRepository:
    return ProductRepository(store, clock=clock)


@pytest.fixture
def payments(store: StoreClient, clock: TickingClock) -> PaymentRepository:
    return PaymentRepository(store, clock=clock)


@pytest.fixture
def lambda_context() -> Any:
    """Mock Lambda context."""

    class Context:
        function_name = "test-function"
        memory_limit_in_mb = 128
        invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:test-function"
        aws_request_id = "test-request-id"

    return Context()


@pytest.fixture
def appsync_event() -> Dict[str, Any]:
    """Base AppSync event structure."""
    return {
        "arguments": {},
        "identity": {
            "sub": "7f1c2a9e-0000-4000-8000-000000000001",
            "username": "testuser",
            "sourceIp": ["203.0.113.10"],
            "claims": {},
        },
        "request": {
            "headers": {"x-amzn-requestid": "test-correlation-id"},
        },
        "info": {
            "fieldName": "users",
            "parentTypeName": "Query",
        },
        "source": None,
    }


@pytest.fixture(autouse=True)
def reset_graphql_services() -> Generator[None, None, None]:
    """Never leak process-scoped services between tests."""
    graphql.reset_services()
    yield
    graphql.reset_services()
