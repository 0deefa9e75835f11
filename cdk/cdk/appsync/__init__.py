"""
AppSync GraphQL API module for the Stripe GraphQL API.

- api.py: API creation with Cognito user pool authorization
- datasources.py: Lambda data source for the resolver function
- resolvers.py: one direct Lambda resolver per routed GraphQL field
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from aws_cdk import aws_appsync as appsync
from constructs import Construct

from .api import create_appsync_api
from .datasources import create_lambda_datasource
from .resolvers import create_resolvers

if TYPE_CHECKING:
    from aws_cdk import aws_cognito as cognito
    from aws_cdk import aws_lambda as lambda_


@dataclass
class AppSyncResources:
    """Container for all AppSync resources created by setup_appsync."""

    api: appsync.GraphqlApi
    lambda_datasource: appsync.LambdaDataSource
    resolvers: dict[str, appsync.Resolver]


def setup_appsync(
    scope: Construct,
    env_name: str,
    resource_name: Any,  # Callable[[str], str]
    user_pool: "cognito.IUserPool",
    resolver_fn: "lambda_.IFunction",
) -> AppSyncResources:
    """
    Create the API, its Lambda data source and every field resolver.

    Args:
        scope: CDK construct scope
        env_name: Environment name (dev, prod, etc.)
        resource_name: Function to generate resource names
        user_pool: Cognito User Pool for authentication
        resolver_fn: The GraphQL resolver Lambda

    Returns:
        AppSyncResources with the created constructs
    """
    api = create_appsync_api(scope, env_name, resource_name, user_pool)
    lambda_datasource = create_lambda_datasource(api, resolver_fn)
    resolvers = create_resolvers(lambda_datasource)
    return AppSyncResources(api=api, lambda_datasource=lambda_datasource, resolvers=resolvers)
