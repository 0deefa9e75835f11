"""
Billing gateway over the Stripe API.

Creates a Stripe customer for the caller and an incomplete subscription on
the selected plan's price, returning the client secret the frontend needs
to confirm the first payment.

Calls are single-shot: repeating one creates another customer and
subscription.

The Stripe key comes from STRIPE_SECRET_KEY for local runs, or from the
Secrets Manager secret named by STRIPE_SECRET_NAME when deployed.
"""

from typing import Any, Dict, Mapping, Optional

import boto3
import stripe
from botocore.exceptions import BotoCoreError, ClientError

from .models import PlanSubscription
from .utils.appsync_types import AppSyncIdentity
from .utils.config import STRIPE_API_VERSION, Settings
from .utils.errors import AppError, ErrorCode
from .utils.logging import get_logger

logger = get_logger(__name__)


def load_stripe_secret_key(settings: Settings, client: Any = None) -> str:
    """
    Resolve the Stripe secret key for this process.

    Args:
        settings: Process settings
        client: Optional Secrets Manager client (created from settings if omitted)

    Raises:
        ValueError: If neither STRIPE_SECRET_KEY nor STRIPE_SECRET_NAME is set
        AppError: BILLING_ERROR if the secret cannot be read
    """
    if settings.stripe_secret_key:
        return settings.stripe_secret_key
    if not settings.stripe_secret_name:
        raise ValueError("Required environment variable 'STRIPE_SECRET_KEY' or 'STRIPE_SECRET_NAME' is not set")

    client = client or boto3.client("secretsmanager", region_name=settings.region)
    try:
        response = client.get_secret_value(SecretId=settings.stripe_secret_name)
    except (ClientError, BotoCoreError) as e:
        logger.error("Failed to read Stripe secret", secretName=settings.stripe_secret_name, error=str(e))
        raise AppError(ErrorCode.BILLING_ERROR, "Failed to load Stripe secret key") from e

    secret_key = response.get("SecretString")
    if not secret_key:
        raise AppError(ErrorCode.BILLING_ERROR, "Failed to load Stripe secret key")
    logger.info("Stripe secret key loaded", secretName=settings.stripe_secret_name)
    return str(secret_key)


def _field(obj: Any, name: str) -> Any:
    """Read a field from a Stripe object or a plain mapping."""
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


class BillingGateway:
    """Stripe customer and subscription creation for a plan selection."""

    def __init__(
        self,
        api_key: str,
        prices: Mapping[str, str],
        api_version: str = STRIPE_API_VERSION,
    ) -> None:
        self.api_key = api_key
        self.prices = dict(prices)
        self.api_version = api_version

    @classmethod
    def from_settings(cls, settings: Settings) -> "BillingGateway":
        """
        Build the gateway from process settings.

        Raises:
            ValueError: If no Stripe key or secret name is configured
            AppError: BILLING_ERROR if the secret cannot be read
        """
        return cls(load_stripe_secret_key(settings), settings.plan_prices)

    def price_for(self, plan: Any) -> str:
        """
        Map a plan to its Stripe price id.

        Raises:
            AppError: INVALID_PLAN for anything outside STARTER, PRO, PARTNER
        """
        key = getattr(plan, "value", plan)
        price = self.prices.get(key) if isinstance(key, str) else None
        if price is None:
            raise AppError(ErrorCode.INVALID_PLAN, f"Invalid plan: {key}", {"plan": key})
        return price

    def _request_options(self) -> Dict[str, Any]:
        return {"api_key": self.api_key, "stripe_version": self.api_version}

    def create_subscription_for_caller(self, identity: AppSyncIdentity, plan: Any) -> PlanSubscription:
        """
        Create a Stripe customer and an incomplete subscription for the caller.

        The plan is checked before any Stripe call, so an invalid plan never
        leaves an orphaned customer behind.

        Args:
            identity: AppSync caller identity; ``username`` becomes the customer name
            plan: STARTER, PRO or PARTNER

        Returns:
            ``{"id": <subscription id>, "clientSecret": <secret>}``; clientSecret
            is omitted when Stripe returns no payment intent

        Raises:
            AppError: INVALID_PLAN or BILLING_ERROR
        """
        price = self.price_for(plan)
        username = identity.get("username") or identity.get("sub")

        try:
            customer = stripe.Customer.create(name=username, **self._request_options())
            subscription = stripe.Subscription.create(
                customer=_field(customer, "id"),
                items=[{"price": price}],
                payment_behavior="default_incomplete",
                expand=["latest_invoice.payment_intent"],
                **self._request_options(),
            )
        except stripe.StripeError as e:
            message = getattr(e, "user_message", None) or str(e) or "Failed to create subscription"
            logger.error("Stripe subscription creation failed", plan=getattr(plan, "value", plan), error=message)
            raise AppError(ErrorCode.BILLING_ERROR, message) from e

        subscription_id = _field(subscription, "id")
        payment_intent = _field(_field(subscription, "latest_invoice"), "payment_intent")
        client_secret: Optional[str] = _field(payment_intent, "client_secret")

        logger.info(
            "Stripe subscription created",
            subscriptionId=subscription_id,
            customerId=_field(customer, "id"),
            hasClientSecret=client_secret is not None,
        )

        result: PlanSubscription = {"id": subscription_id}
        if client_secret:
            result["clientSecret"] = client_secret
        return result
