from aws_cdk import Stack
from constructs import Construct

from .appsync import setup_appsync
from .auth import create_cognito_auth
from .dynamodb_tables import create_dynamodb_tables
from .helpers import ResourceNamer
from .lambdas import create_lambda_functions


class CdkStack(Stack):
    """
    Stripe GraphQL API - Infrastructure Stack

    Creates:
    - DynamoDB tables for users, subscriptions, orders, products, payments
    - Cognito User Pool for authentication
    - The Python resolver Lambda
    - AppSync GraphQL API with one Lambda resolver per field
    """

    def __init__(self, scope: Construct, construct_id: str, env_name: str = "dev", **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.env_name = env_name
        rn = ResourceNamer.for_region(env_name)
        self.region_abbrev = rn.region_abbrev

        self.tables = create_dynamodb_tables(self, rn)

        auth = create_cognito_auth(self, rn)
        self.user_pool = auth["user_pool"]
        self.user_pool_client = auth["user_pool_client"]

        lambdas = create_lambda_functions(self, rn, self.tables, env_name)
        self.resolver_fn = lambdas["resolver_fn"]

        self.appsync = setup_appsync(self, env_name, rn, self.user_pool, self.resolver_fn)
        self.api = self.appsync.api
