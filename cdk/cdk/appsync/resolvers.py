"""Direct Lambda resolvers, one per routed GraphQL field."""

from aws_cdk import aws_appsync as appsync

from stripe_graphql_api.handlers.router import Operation


def resolver_id(operation: Operation) -> str:
    """Construct id for an operation's resolver, e.g. ``MutationcreateOrderResolver``."""
    return f"{operation.parent_type}{operation.field_name}Resolver"


def create_resolvers(lambda_datasource: appsync.LambdaDataSource) -> dict[str, appsync.Resolver]:
    """
    Attach a resolver for every ``Operation`` to the Lambda data source.

    Args:
        lambda_datasource: Data source for the resolver Lambda

    Returns:
        Resolvers keyed by ``<Type>.<field>``
    """
    resolvers: dict[str, appsync.Resolver] = {}
    for operation in Operation:
        resolvers[f"{operation.parent_type}.{operation.field_name}"] = lambda_datasource.create_resolver(
            resolver_id(operation),
            type_name=operation.parent_type,
            field_name=operation.field_name,
        )
    return resolvers
