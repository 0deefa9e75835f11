from typing import Callable, Dict

from aws_cdk import RemovalPolicy
from aws_cdk import aws_dynamodb as ddb
from constructs import Construct

from stripe_graphql_api.utils.config import SERVICE_NAME
from stripe_graphql_api.utils.table_schemas import (
    CATEGORY_INDEX,
    CUSTOMER_ID_INDEX,
    LOW_STOCK_INDEX,
    ORDER_ID_INDEX,
    STATUS_INDEX,
    TYPE_INDEX,
    USER_ID_INDEX,
)

# table key -> (construct id, partition key, sort key, [(index name, index key)])
TABLE_LAYOUT = {
    "users": ("UsersTable", "id", None, [(TYPE_INDEX, "type")]),
    "subscriptions": ("SubscriptionsTable", "id", None, [(USER_ID_INDEX, "userId"), (TYPE_INDEX, "type")]),
    "orders": ("OrdersTable", "PK", "SK", [(CUSTOMER_ID_INDEX, "customerId"), (TYPE_INDEX, "type")]),
    "products": (
        "ProductsTable",
        "PK",
        "SK",
        [(CATEGORY_INDEX, "category"), (TYPE_INDEX, "type"), (LOW_STOCK_INDEX, "lowStock")],
    ),
    "payments": ("PaymentsTable", "PK", "SK", [(ORDER_ID_INDEX, "orderId"), (STATUS_INDEX, "status")]),
}


def _string_attribute(name: str) -> ddb.Attribute:
    return ddb.Attribute(name=name, type=ddb.AttributeType.STRING)


def create_dynamodb_tables(stack: Construct, rn: Callable[[str], str]) -> Dict[str, ddb.Table]:
    """Create the five entity tables and return them keyed by entity.

    Args:
        stack: CDK Construct (usually the Stack instance)
        rn: helper function to create resource names (rn(name: str) -> str)

    Returns:
        Mapping of entity name (users, subscriptions, ...) to Table construct
    """
    tables: Dict[str, ddb.Table] = {}

    for entity, (construct_id, partition_key, sort_key, indexes) in TABLE_LAYOUT.items():
        table = ddb.Table(
            stack,
            construct_id,
            table_name=rn(f"{SERVICE_NAME}-{entity}"),
            partition_key=_string_attribute(partition_key),
            sort_key=_string_attribute(sort_key) if sort_key else None,
            billing_mode=ddb.BillingMode.PAY_PER_REQUEST,
            point_in_time_recovery_specification=ddb.PointInTimeRecoverySpecification(
                point_in_time_recovery_enabled=True
            ),
            removal_policy=RemovalPolicy.RETAIN,
        )
        for index_name, index_key in indexes:
            table.add_global_secondary_index(
                index_name=index_name,
                partition_key=_string_attribute(index_key),
                projection_type=ddb.ProjectionType.ALL,
            )
        tables[entity] = table

    return tables
