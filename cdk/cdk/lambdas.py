"""Lambda function definitions for the Stripe GraphQL API stack.

A single Python function resolves every GraphQL field; it routes on the
AppSync ``info.parentTypeName`` / ``info.fieldName`` pair.

Third-party dependencies are installed into the layer at synth time from
``cdk/lambda-layer/requirements.txt`` using the runtime's bundling image.
The Stripe key never enters the function environment; the function gets
the name of a Secrets Manager secret and read access to it.
"""

import os
from typing import TYPE_CHECKING, Any

from aws_cdk import BundlingOptions, Duration
from aws_cdk import aws_lambda as lambda_
from aws_cdk import aws_secretsmanager as secretsmanager
from constructs import Construct

from stripe_graphql_api.utils.config import SERVICE_NAME, TABLE_ENV_VARS

if TYPE_CHECKING:
    from aws_cdk import aws_dynamodb as dynamodb

REPO_ROOT = os.path.join(os.path.dirname(__file__), "..", "..")
LAYER_PATH = os.path.join(os.path.dirname(__file__), "..", "lambda-layer")

# Everything in the repository except the runtime package
ASSET_EXCLUDES = [
    "cdk",
    "tests",
    "scripts",
    "schema",
    "*.md",
    "*.toml",
    "*.txt",
    ".git",
    "__pycache__",
    "*.pyc",
    ".pytest_cache",
]


def stripe_secret_name(env_name: str) -> str:
    """Secret holding the Stripe key, overridable through STRIPE_SECRET_NAME."""
    return os.getenv("STRIPE_SECRET_NAME") or f"{SERVICE_NAME}/{env_name}/stripe-secret-key"


def create_lambda_functions(
    scope: Construct,
    rn: Any,  # Resource naming function
    tables: dict[str, "dynamodb.Table"],
    env_name: str,
) -> dict[str, Any]:
    """Create the resolver Lambda, its dependency layer and its Stripe secret grant.

    Args:
        scope: CDK construct scope
        rn: Resource naming function (name -> formatted name)
        tables: Entity tables keyed by entity name
        env_name: Environment name (dev, prod, etc.)

    Returns:
        Dictionary with ``resolver_fn``, ``shared_layer`` and ``stripe_secret``
    """
    secret_name = stripe_secret_name(env_name)
    lambda_env = {
        "STAGE": env_name,
        "SERVICE_NAME": SERVICE_NAME,
        "LOG_LEVEL": "INFO",
        "STRIPE_SECRET_NAME": secret_name,
        **{env_var: tables[entity].table_name for entity, env_var in TABLE_ENV_VARS.items()},
    }

    shared_layer = lambda_.LayerVersion(
        scope,
        "SharedDependenciesLayer",
        layer_version_name=rn(f"{SERVICE_NAME}-deps"),
        code=lambda_.Code.from_asset(
            LAYER_PATH,
            bundling=BundlingOptions(
                image=lambda_.Runtime.PYTHON_3_13.bundling_image,
                command=["bash", "-c", "pip install -r requirements.txt -t /asset-output/python"],
            ),
        ),
        compatible_runtimes=[lambda_.Runtime.PYTHON_3_13],
        description="Shared Python dependencies for the resolver Lambda",
    )

    resolver_fn = lambda_.Function(
        scope,
        "GraphqlResolverFn",
        function_name=rn(f"{SERVICE_NAME}-resolver"),
        runtime=lambda_.Runtime.PYTHON_3_13,
        handler="stripe_graphql_api.handlers.graphql.handler",
        code=lambda_.Code.from_asset(REPO_ROOT, exclude=ASSET_EXCLUDES),
        layers=[shared_layer],
        timeout=Duration.seconds(30),
        memory_size=256,
        environment=lambda_env,
    )

    for table in tables.values():
        table.grant_read_write_data(resolver_fn)

    stripe_secret = secretsmanager.Secret.from_secret_name_v2(scope, "StripeSecretKey", secret_name)
    stripe_secret.grant_read(resolver_fn)

    return {
        "resolver_fn": resolver_fn,
        "shared_layer": shared_layer,
        "stripe_secret": stripe_secret,
    }
