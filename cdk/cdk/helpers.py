"""
Resource naming for the CDK stack.

Physical names follow ``{name}-{region_abbrev}-{env}``, for example
``stripe-graphql-api-orders-ue1-prod``. Regions are shortened so Cognito
and Lambda layer names stay inside their length limits.
"""

import os
from dataclasses import dataclass
from typing import Optional

# Regions missing here fall back to their first three characters
REGION_ABBREVIATIONS: dict[str, str] = {
    "us-east-1": "ue1",
    "us-east-2": "ue2",
    "us-west-1": "uw1",
    "us-west-2": "uw2",
    "eu-west-1": "ew1",
    "eu-west-2": "ew2",
    "eu-central-1": "ec1",
    "ap-southeast-1": "ase1",  # Singapore
    "ap-southeast-2": "ase2",  # Sydney
    "ap-northeast-1": "ane1",  # Tokyo
}


def get_region() -> str:
    """Deployment region: AWS_REGION, then CDK_DEFAULT_REGION, then us-east-1."""
    return os.getenv("AWS_REGION") or os.getenv("CDK_DEFAULT_REGION") or "us-east-1"


def get_region_abbrev(region: Optional[str] = None) -> str:
    if region is None:
        region = get_region()
    return REGION_ABBREVIATIONS.get(region, region[:3])


@dataclass(frozen=True)
class ResourceNamer:
    """
    Callable passed around the stack as ``rn``.

    Example:
        rn = ResourceNamer("ue1", "dev")
        rn("stripe-graphql-api-users")  # "stripe-graphql-api-users-ue1-dev"
    """

    region_abbrev: str
    env_name: str

    @classmethod
    def for_region(cls, env_name: str, region: Optional[str] = None) -> "ResourceNamer":
        return cls(get_region_abbrev(region), env_name)

    def __call__(self, name: str) -> str:
        return f"{name}-{self.region_abbrev}-{self.env_name}"
