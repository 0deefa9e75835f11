#!/usr/bin/env python3
import os

import aws_cdk as cdk

from cdk.cdk_stack import CdkStack
from cdk.helpers import ResourceNamer, get_region

app = cdk.App()

# Get environment from context or environment variable (dev/prod)
env_name = app.node.try_get_context("environment") or os.getenv("ENVIRONMENT", "dev")

region = get_region()
rn = ResourceNamer.for_region(env_name, region)
account = os.getenv("AWS_ACCOUNT_ID") or os.getenv("CDK_DEFAULT_ACCOUNT")

CdkStack(
    app,
    rn("StripeGraphqlApiStack"),
    env_name=env_name,
    env=cdk.Environment(account=account, region=region),
    description=f"Stripe GraphQL API ({rn.region_abbrev}-{env_name})",
)

app.synth()
