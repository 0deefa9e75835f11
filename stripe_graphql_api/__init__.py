"""AppSync resolver functions backed by DynamoDB and Stripe billing."""

__version__ = "0.1.0"
