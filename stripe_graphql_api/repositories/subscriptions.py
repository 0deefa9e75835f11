"""
Subscription records.

Simple ``id`` key. Listed through the TypeIndex and looked up per user
through the UserIdIndex.
"""

from typing import Any, Dict, List, Optional, cast

from ..models import EntityType, Plan, Subscription, SubscriptionStatus
from ..utils.codec import compact
from ..utils.table_schemas import TYPE_INDEX, USER_ID_INDEX
from ..utils.validation import require_fields, validate_enum, validate_optional_enum
from .base import BaseRepository, store_operation


class SubscriptionRepository(BaseRepository):
    entity = "subscriptions"
    label = "Subscription"

    @store_operation("Failed to create subscription")
    def create(self, data: Dict[str, Any]) -> Subscription:
        require_fields(data, ["userId", "plan", "status", "startDate"], self.label)
        now = self._now()
        subscription = compact(
            {
                "id": self._new_id(),
                "userId": data["userId"],
                "plan": validate_enum(Plan, data["plan"], "plan"),
                "status": validate_enum(SubscriptionStatus, data["status"], "status"),
                "stripeSubscriptionId": data.get("stripeSubscriptionId"),
                "stripeCustomerId": data.get("stripeCustomerId"),
                "startDate": data["startDate"],
                "endDate": data.get("endDate"),
                "createdAt": now,
                "updatedAt": now,
                "type": EntityType.SUBSCRIPTION,
            }
        )
        self._put(subscription)
        self.logger.info("Subscription created", subscriptionId=subscription["id"], userId=subscription["userId"])
        return cast(Subscription, subscription)

    @store_operation("Failed to get subscription")
    def get(self, subscription_id: str) -> Optional[Subscription]:
        return cast(Optional[Subscription], self._get({"id": subscription_id}))

    @store_operation("Failed to list subscriptions")
    def list(self) -> List[Subscription]:
        return cast(List[Subscription], self._query_index(TYPE_INDEX, "type", EntityType.SUBSCRIPTION))

    @store_operation("Failed to get subscriptions by user")
    def list_by_user(self, user_id: str) -> List[Subscription]:
        return cast(List[Subscription], self._query_index(USER_ID_INDEX, "userId", user_id))

    @store_operation("Failed to update subscription")
    def update(self, data: Dict[str, Any]) -> Subscription:
        """
        Partially update a subscription.

        Only plan, status, stripeSubscriptionId and endDate can change;
        fields missing from ``data`` keep their stored values.
        """
        require_fields(data, ["id"], self.label)
        changes = {
            "plan": validate_optional_enum(Plan, data.get("plan"), "plan"),
            "status": validate_optional_enum(SubscriptionStatus, data.get("status"), "status"),
            "stripeSubscriptionId": data.get("stripeSubscriptionId"),
            "endDate": data.get("endDate"),
        }
        updated = self._update({"id": data["id"]}, changes)
        self.logger.info("Subscription updated", subscriptionId=data["id"])
        return cast(Subscription, updated)

    @store_operation("Failed to delete subscription")
    def delete(self, subscription_id: str) -> Subscription:
        """Delete a subscription and return it as it was before deletion."""
        deleted = self._delete_existing({"id": subscription_id}, subscriptionId=subscription_id)
        self.logger.info("Subscription deleted", subscriptionId=subscription_id)
        return cast(Subscription, deleted)
