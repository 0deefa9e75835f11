"""Cognito User Pool authentication for the Stripe GraphQL API stack.

The web frontend signs users in against this pool; AppSync authorizes every
request with the pool's tokens and passes the caller's ``username`` to the
resolver Lambda, which uses it as the Stripe customer name.
"""

from typing import Any

from aws_cdk import CfnOutput, RemovalPolicy
from aws_cdk import aws_cognito as cognito
from constructs import Construct

from stripe_graphql_api.utils.config import SERVICE_NAME


def _create_password_policy() -> cognito.PasswordPolicy:
    """Create password policy for user pool."""
    return cognito.PasswordPolicy(
        min_length=8, require_lowercase=True, require_uppercase=True, require_digits=True, require_symbols=True
    )


def create_cognito_auth(scope: Construct, rn: Any) -> dict[str, Any]:
    """Create the user pool and the SPA client.

    Args:
        scope: CDK construct scope
        rn: Resource naming function

    Returns:
        Dict with ``user_pool`` and ``user_pool_client``
    """
    user_pool = cognito.UserPool(
        scope,
        "UserPool",
        user_pool_name=rn(f"{SERVICE_NAME}-users"),
        sign_in_aliases=cognito.SignInAliases(email=True, username=True),
        self_sign_up_enabled=True,
        auto_verify=cognito.AutoVerifiedAttrs(email=True),
        standard_attributes=cognito.StandardAttributes(
            email=cognito.StandardAttribute(required=True, mutable=True),
        ),
        password_policy=_create_password_policy(),
        account_recovery=cognito.AccountRecovery.EMAIL_ONLY,
        removal_policy=RemovalPolicy.RETAIN,
    )

    user_pool_client = user_pool.add_client(
        "AppClient",
        user_pool_client_name=f"{SERVICE_NAME}-web",
        auth_flows=cognito.AuthFlow(user_srp=True, user_password=True),
        prevent_user_existence_errors=True,
    )

    CfnOutput(scope, "UserPoolId", value=user_pool.user_pool_id)
    CfnOutput(scope, "UserPoolClientId", value=user_pool_client.user_pool_client_id)

    return {"user_pool": user_pool, "user_pool_client": user_pool_client}
