"""
Input validation utilities.

Validates enumerated values and order line items before they reach the store.
"""

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Type, TypeVar

from .errors import invalid_input

E = TypeVar("E", bound=Enum)

CENTS = Decimal("0.01")


def validate_enum(enum_cls: Type[E], value: Any, field: str) -> str:
    """
    Validate that ``value`` is one of the enum's values.

    Args:
        enum_cls: Enum class (Plan, OrderStatus, ...)
        value: Raw value from the GraphQL arguments
        field: Field name for the error message

    Returns:
        The validated string value

    Raises:
        AppError: INVALID_INPUT if the value is not allowed
    """
    allowed = [member.value for member in enum_cls]
    raw = value.value if isinstance(value, Enum) else value
    if raw not in allowed:
        raise invalid_input(f"Invalid {field}: {raw}", {"allowed": allowed})
    return str(raw)


def validate_optional_enum(enum_cls: Type[E], value: Any, field: str) -> Optional[str]:
    """Like validate_enum, but None passes through (field not being updated)."""
    if value is None:
        return None
    return validate_enum(enum_cls, value, field)


def require_fields(data: Dict[str, Any], fields: List[str], entity: str) -> None:
    """Raise INVALID_INPUT listing any required fields that are missing."""
    missing = [name for name in fields if data.get(name) is None]
    if missing:
        raise invalid_input(
            f"{entity} is missing required fields: {', '.join(missing)}", {"missingFields": missing}
        )


def to_cents(value: Any) -> float:
    """Round a money amount to two decimals."""
    return float(Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP))


def normalize_line_items(items: Any) -> List[Dict[str, Any]]:
    """
    Validate order line items and compute each item's totalPrice.

    Requirements:
    - productId, productName, quantity and unitPrice are required
    - quantity must be a positive integer
    - unitPrice must not be negative
    - totalPrice is quantity * unitPrice when not supplied

    Raises:
        AppError: If any line item is invalid
    """
    if not isinstance(items, list) or not items:
        raise invalid_input("Order must contain at least one item")

    normalized = []
    for index, item in enumerate(items):
        require_fields(item, ["productId", "productName", "quantity", "unitPrice"], f"Order item {index}")

        quantity = item["quantity"]
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise invalid_input(
                "Quantity must be a positive integer", {"productId": item["productId"], "quantity": quantity}
            )
        if item["unitPrice"] < 0:
            raise invalid_input(
                "Unit price must not be negative",
                {"productId": item["productId"], "unitPrice": item["unitPrice"]},
            )

        total_price = item.get("totalPrice")
        if total_price is None:
            total_price = to_cents(Decimal(str(item["unitPrice"])) * quantity)

        normalized.append(
            {
                "productId": item["productId"],
                "productName": item["productName"],
                "quantity": quantity,
                "unitPrice": item["unitPrice"],
                "totalPrice": total_price,
            }
        )

    return normalized


def sum_line_items(items: List[Dict[str, Any]]) -> float:
    """Order total as the sum of line totals, rounded to cents."""
    return to_cents(sum((Decimal(str(item["totalPrice"])) for item in items), Decimal("0")))
