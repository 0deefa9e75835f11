"""
DynamoDB table definitions.

Single source for the physical layout of the five tables. Used by the
local provisioning scripts and by the moto-backed unit tests; the CDK
stack declares the same keys and indexes.
"""

from typing import Any, Callable, Dict, List

from .config import default_table_name

# Index names queried by the repositories
TYPE_INDEX = "TypeIndex"
USER_ID_INDEX = "UserIdIndex"
CUSTOMER_ID_INDEX = "CustomerIdIndex"
CATEGORY_INDEX = "CategoryIndex"
LOW_STOCK_INDEX = "LowStockIndex"
ORDER_ID_INDEX = "OrderIdIndex"
STATUS_INDEX = "StatusIndex"


def _gsi(index_name: str, attribute: str) -> Dict[str, Any]:
    return {
        "IndexName": index_name,
        "KeySchema": [{"AttributeName": attribute, "KeyType": "HASH"}],
        "Projection": {"ProjectionType": "ALL"},
    }


def _simple_key_table(table_name: str, indexes: List[Dict[str, Any]], attributes: List[str]) -> Dict[str, Any]:
    return {
        "TableName": table_name,
        "KeySchema": [{"AttributeName": "id", "KeyType": "HASH"}],
        "AttributeDefinitions": [{"AttributeName": name, "AttributeType": "S"} for name in ["id", *attributes]],
        "GlobalSecondaryIndexes": indexes,
        "BillingMode": "PAY_PER_REQUEST",
    }


def _composite_key_table(table_name: str, indexes: List[Dict[str, Any]], attributes: List[str]) -> Dict[str, Any]:
    return {
        "TableName": table_name,
        "KeySchema": [
            {"AttributeName": "PK", "KeyType": "HASH"},
            {"AttributeName": "SK", "KeyType": "RANGE"},
        ],
        "AttributeDefinitions": [
            {"AttributeName": name, "AttributeType": "S"} for name in ["PK", "SK", *attributes]
        ],
        "GlobalSecondaryIndexes": indexes,
        "BillingMode": "PAY_PER_REQUEST",
    }


def users_table_schema(table_name: str) -> Dict[str, Any]:
    """Key: id. GSI: TypeIndex (type)."""
    return _simple_key_table(table_name, [_gsi(TYPE_INDEX, "type")], ["type"])


def subscriptions_table_schema(table_name: str) -> Dict[str, Any]:
    """Key: id. GSIs: UserIdIndex (userId), TypeIndex (type)."""
    return _simple_key_table(
        table_name,
        [_gsi(USER_ID_INDEX, "userId"), _gsi(TYPE_INDEX, "type")],
        ["userId", "type"],
    )


def orders_table_schema(table_name: str) -> Dict[str, Any]:
    """Key: PK=ORDER#id, SK=METADATA. GSIs: CustomerIdIndex, TypeIndex."""
    return _composite_key_table(
        table_name,
        [_gsi(CUSTOMER_ID_INDEX, "customerId"), _gsi(TYPE_INDEX, "type")],
        ["customerId", "type"],
    )


def products_table_schema(table_name: str) -> Dict[str, Any]:
    """
    Key: PK=PRODUCT#id, SK=METADATA.

    GSIs: CategoryIndex, TypeIndex and the sparse LowStockIndex, which only
    holds items that carry a ``lowStock`` attribute.
    """
    return _composite_key_table(
        table_name,
        [_gsi(CATEGORY_INDEX, "category"), _gsi(TYPE_INDEX, "type"), _gsi(LOW_STOCK_INDEX, "lowStock")],
        ["category", "type", "lowStock"],
    )


def payments_table_schema(table_name: str) -> Dict[str, Any]:
    """Key: PK=PAYMENT#id, SK=METADATA. GSIs: OrderIdIndex, StatusIndex."""
    return _composite_key_table(
        table_name,
        [_gsi(ORDER_ID_INDEX, "orderId"), _gsi(STATUS_INDEX, "status")],
        ["orderId", "status"],
    )


SCHEMA_BUILDERS: Dict[str, Callable[[str], Dict[str, Any]]] = {
    "users": users_table_schema,
    "subscriptions": subscriptions_table_schema,
    "orders": orders_table_schema,
    "products": products_table_schema,
    "payments": payments_table_schema,
}


def all_table_schemas(table_names: Dict[str, str]) -> List[Dict[str, Any]]:
    """Build create_table kwargs for every entity table."""
    return [builder(table_names[entity]) for entity, builder in SCHEMA_BUILDERS.items()]


def stage_table_names(stage: str) -> Dict[str, str]:
    """Default table names for a stage, e.g. ``stripe-graphql-api-orders-dev``."""
    return {entity: default_table_name(entity, stage) for entity in SCHEMA_BUILDERS}
