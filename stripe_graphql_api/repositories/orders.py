"""
Order records.

Key: ``PK=ORDER#<orderId>``, ``SK=METADATA``. Orders are listed through
the TypeIndex and per customer through the CustomerIdIndex.
"""

from typing import Any, Dict, List, Optional, cast

from ..models import EntityType, Order, OrderStatus
from ..utils.ids import order_key
from ..utils.table_schemas import CUSTOMER_ID_INDEX, TYPE_INDEX
from ..utils.validation import normalize_line_items, require_fields, sum_line_items, validate_enum
from .base import BaseRepository, store_operation


class OrderRepository(BaseRepository):
    entity = "orders"
    label = "Order"
    key_attribute = "PK"

    @store_operation("Failed to create order")
    def create(self, data: Dict[str, Any]) -> Order:
        """
        Create a pending order.

        Line item totals are computed when missing; ``totalAmount`` defaults
        to the sum of line totals.
        """
        require_fields(data, ["customerId", "items"], self.label)
        items = normalize_line_items(data["items"])
        total_amount = data.get("totalAmount")
        if total_amount is None:
            total_amount = sum_line_items(items)

        order_id = self._new_id()
        now = self._now()
        order: Dict[str, Any] = {
            **order_key(order_id),
            "orderId": order_id,
            "customerId": data["customerId"],
            "items": items,
            "totalAmount": total_amount,
            "status": OrderStatus.PENDING.value,
            "createdAt": now,
            "updatedAt": now,
            "type": EntityType.ORDER,
        }
        self._put(order)
        self.logger.info("Order created", orderId=order_id, customerId=order["customerId"], itemCount=len(items))
        return cast(Order, order)

    @store_operation("Failed to get order")
    def get(self, order_id: str) -> Optional[Order]:
        return cast(Optional[Order], self._get(order_key(order_id)))

    @store_operation("Failed to list orders")
    def list(self) -> List[Order]:
        return cast(List[Order], self._query_index(TYPE_INDEX, "type", EntityType.ORDER))

    @store_operation("Failed to get orders by customer")
    def list_by_customer(self, customer_id: str) -> List[Order]:
        return cast(List[Order], self._query_index(CUSTOMER_ID_INDEX, "customerId", customer_id))

    @store_operation("Failed to update order status")
    def update_status(self, order_id: str, status: str) -> Order:
        """Set ``status`` (and ``updatedAt``); nothing else on the order changes."""
        new_status = validate_enum(OrderStatus, status, "status")
        updated = self._update(order_key(order_id), {"status": new_status})
        self.logger.info("Order status updated", orderId=order_id, status=new_status)
        return cast(Order, updated)
