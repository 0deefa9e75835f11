"""
Payment records.

Key: ``PK=PAYMENT#<paymentId>``, ``SK=METADATA``. Payments carry no
``type`` discriminator; they are only reached by id, by order
(OrderIdIndex) or by status (StatusIndex).
"""

import json
from typing import Any, Dict, List, Optional, cast

from ..models import Payment, PaymentStatus
from ..utils.codec import compact
from ..utils.errors import invalid_input
from ..utils.ids import payment_key
from ..utils.table_schemas import ORDER_ID_INDEX, STATUS_INDEX
from ..utils.validation import require_fields, validate_enum
from .base import BaseRepository, store_operation


def _metadata(value: Any) -> Dict[str, Any]:
    # AWSJSON arguments may arrive serialized
    if isinstance(value, str):
        try:
            value = json.loads(value) if value.strip() else None
        except ValueError:
            raise invalid_input("Payment metadata must be a JSON object") from None
    if value is not None and not isinstance(value, dict):
        raise invalid_input("Payment metadata must be a JSON object")
    return dict(value or {})


class PaymentRepository(BaseRepository):
    entity = "payments"
    label = "Payment"
    key_attribute = "PK"

    @store_operation("Failed to create payment")
    def create(self, data: Dict[str, Any]) -> Payment:
        require_fields(data, ["orderId", "stripeChargeId", "amount", "currency", "status"], self.label)
        payment_id = self._new_id()
        now = self._now()
        payment = compact(
            {
                **payment_key(payment_id),
                "paymentId": payment_id,
                "orderId": data["orderId"],
                "stripeChargeId": data["stripeChargeId"],
                "amount": data["amount"],
                "currency": data["currency"],
                "status": validate_enum(PaymentStatus, data["status"], "status"),
                "failureReason": data.get("failureReason"),
                "retryCount": 0,
                "metadata": _metadata(data.get("metadata")),
                "createdAt": now,
                "updatedAt": now,
            }
        )
        self._put(payment)
        self.logger.info("Payment created", paymentId=payment_id, orderId=payment["orderId"], status=payment["status"])
        return cast(Payment, payment)

    @store_operation("Failed to get payment")
    def get(self, payment_id: str) -> Optional[Payment]:
        return cast(Optional[Payment], self._get(payment_key(payment_id)))

    @store_operation("Failed to get payments by order")
    def list_by_order(self, order_id: str) -> List[Payment]:
        return cast(List[Payment], self._query_index(ORDER_ID_INDEX, "orderId", order_id))

    @store_operation("Failed to get failed payments")
    def list_failed(self) -> List[Payment]:
        return cast(List[Payment], self._query_index(STATUS_INDEX, "status", PaymentStatus.FAILED.value))
