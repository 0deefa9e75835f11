"""
Environment-based configuration for the resolver Lambda.

All settings are read once per process via ``Settings.from_env()``.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Optional

SERVICE_NAME = "stripe-graphql-api"

# Local DynamoDB endpoint used when IS_OFFLINE is set
LOCAL_DYNAMODB_ENDPOINT = "http://localhost:8000"

# Logical entity name -> environment variable holding the physical table name
TABLE_ENV_VARS: Dict[str, str] = {
    "users": "USERS_TABLE",
    "subscriptions": "SUBSCRIPTIONS_TABLE",
    "orders": "ORDERS_TABLE",
    "products": "PRODUCTS_TABLE",
    "payments": "PAYMENTS_TABLE",
}

DEFAULT_PLAN_PRICES: Dict[str, str] = {
    "STARTER": "price_1Kvv6bKfsnO6FKLvWmtNLe6j",
    "PRO": "price_1KvbGMKfsnO6FKLva9EtEJn7",
    "PARTNER": "price_1KvbEIKfsnO6FKLvdzHnPXpj",
}

STRIPE_API_VERSION = "2020-08-27"


def get_required_env(name: str, default: Optional[str] = None) -> str:
    """Get a required environment variable.

    Args:
        name: Environment variable name
        default: Optional default for local and test environments

    Returns:
        The environment variable value

    Raises:
        ValueError: If the env var is not set and no default is provided
    """
    value = os.getenv(name, default)
    if value is None:
        raise ValueError(f"Required environment variable '{name}' is not set")
    return value


def _is_truthy(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes"}


def default_table_name(entity: str, stage: str, service: str = SERVICE_NAME) -> str:
    """Build the conventional table name, e.g. ``stripe-graphql-api-users-dev``."""
    return f"{service}-{entity}-{stage}"


@dataclass(frozen=True)
class Settings:
    """Process-wide settings resolved from the environment."""

    stage: str = "dev"
    service: str = SERVICE_NAME
    table_names: Dict[str, str] = field(default_factory=dict)
    is_offline: bool = False
    dynamodb_endpoint: Optional[str] = None
    region: Optional[str] = None
    stripe_secret_key: Optional[str] = None
    # Secrets Manager secret holding the Stripe key when none is set directly
    stripe_secret_name: Optional[str] = None
    plan_prices: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_PLAN_PRICES))
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        stage = get_required_env("STAGE", "dev")
        service = get_required_env("SERVICE_NAME", SERVICE_NAME)
        is_offline = _is_truthy(os.getenv("IS_OFFLINE"))

        table_names = {
            entity: os.getenv(env_var) or default_table_name(entity, stage, service)
            for entity, env_var in TABLE_ENV_VARS.items()
        }

        endpoint = os.getenv("DYNAMODB_ENDPOINT")
        if endpoint is None and is_offline:
            endpoint = LOCAL_DYNAMODB_ENDPOINT

        region = os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION")
        if region is None and is_offline:
            region = "localhost"

        plan_prices = {
            plan: os.getenv(f"STRIPE_PRICE_{plan}", price) for plan, price in DEFAULT_PLAN_PRICES.items()
        }

        return cls(
            stage=stage,
            service=service,
            table_names=table_names,
            is_offline=is_offline,
            dynamodb_endpoint=endpoint,
            region=region,
            stripe_secret_key=os.getenv("STRIPE_SECRET_KEY"),
            stripe_secret_name=os.getenv("STRIPE_SECRET_NAME"),
            plan_prices=plan_prices,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def table_name(self, entity: str) -> str:
        """Physical table name for a logical entity (users, orders, ...)."""
        if entity not in TABLE_ENV_VARS:
            raise ValueError(f"Unknown table '{entity}'")
        return self.table_names.get(entity) or default_table_name(entity, self.stage, self.service)
