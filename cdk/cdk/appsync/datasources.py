"""AppSync data source creation."""

from typing import TYPE_CHECKING

from aws_cdk import aws_appsync as appsync

if TYPE_CHECKING:
    from aws_cdk import aws_lambda as lambda_


def create_lambda_datasource(
    api: appsync.GraphqlApi,
    resolver_fn: "lambda_.IFunction",
) -> appsync.LambdaDataSource:
    """
    Create the Lambda data source backing every resolver.

    Args:
        api: The AppSync GraphQL API
        resolver_fn: The GraphQL resolver Lambda

    Returns:
        The Lambda data source
    """
    return api.add_lambda_data_source("GraphqlResolverDS", lambda_function=resolver_fn)
