"""AppSync API creation."""

import os
from typing import TYPE_CHECKING, Any

from aws_cdk import CfnOutput
from aws_cdk import aws_appsync as appsync
from constructs import Construct

from stripe_graphql_api.utils.config import SERVICE_NAME

if TYPE_CHECKING:
    from aws_cdk import aws_cognito as cognito

SCHEMA_PATH = os.path.join(os.path.dirname(__file__), "..", "..", "..", "schema", "schema.graphql")


def create_appsync_api(
    scope: Construct,
    env_name: str,
    resource_name: Any,  # Callable[[str], str]
    user_pool: "cognito.IUserPool",
) -> appsync.GraphqlApi:
    """
    Create the AppSync GraphQL API with Cognito user pool authorization.

    Args:
        scope: CDK construct scope
        env_name: Environment name (dev, prod, etc.)
        resource_name: Function to generate resource names
        user_pool: Cognito User Pool for authentication

    Returns:
        The created GraphQL API
    """
    enable_appsync_logging = os.getenv("ENABLE_APPSYNC_LOGGING", "false").lower() == "true"

    api = appsync.GraphqlApi(
        scope,
        "Api",
        name=resource_name(f"{SERVICE_NAME}-api"),
        definition=appsync.Definition.from_file(SCHEMA_PATH),
        authorization_config=appsync.AuthorizationConfig(
            default_authorization=appsync.AuthorizationMode(
                authorization_type=appsync.AuthorizationType.USER_POOL,
                user_pool_config=appsync.UserPoolConfig(user_pool=user_pool),
            ),
        ),
        xray_enabled=True,
        log_config=(
            appsync.LogConfig(
                field_log_level=appsync.FieldLogLevel.ALL,
                exclude_verbose_content=False,
            )
            if enable_appsync_logging
            else None
        ),
    )

    CfnOutput(scope, "GraphqlUrl", value=api.graphql_url, description=f"GraphQL endpoint ({env_name})")

    return api
