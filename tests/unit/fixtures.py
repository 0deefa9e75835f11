"""
Test data builders for resolver tests.

Factory functions returning valid mutation inputs with sensible defaults;
pass keyword overrides to customise a field.
"""

from typing import Any, Dict, List, Optional


def make_user_input(**overrides: Any) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "name": "John Doe",
        "username": "johndoe",
        "email": "john@example.com",
    }
    data.update(overrides)
    return data


def make_subscription_input(user_id: str = "user-1", **overrides: Any) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "userId": user_id,
        "plan": "STARTER",
        "status": "ACTIVE",
        "startDate": "2024-01-01T00:00:00Z",
    }
    data.update(overrides)
    return data


def make_order_item(
    product_id: str = "prod-1",
    product_name: str = "Widget",
    quantity: int = 1,
    unit_price: float = 24.99,
    total_price: Optional[float] = None,
) -> Dict[str, Any]:
    item: Dict[str, Any] = {
        "productId": product_id,
        "productName": product_name,
        "quantity": quantity,
        "unitPrice": unit_price,
    }
    if total_price is not None:
        item["totalPrice"] = total_price
    return item


def make_order_input(
    customer_id: str = "customer-1",
    items: Optional[List[Dict[str, Any]]] = None,
    **overrides: Any,
) -> Dict[str, Any]:
    """Two line items totaling 49.98 unless overridden."""
    data: Dict[str, Any] = {
        "customerId": customer_id,
        "items": items
        if items is not None
        else [
            make_order_item("prod-1", "Widget", 1, 24.99),
            make_order_item("prod-2", "Gadget", 1, 24.99),
        ],
    }
    data.update(overrides)
    return data


def make_product_input(**overrides: Any) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "name": "Widget",
        "description": "A useful widget",
        "price": 9.99,
        "stockCount": 10,
        "lowStockThreshold": 5,
        "category": "tools",
    }
    data.update(overrides)
    return data


def make_payment_input(order_id: str = "order-1", **overrides: Any) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "orderId": order_id,
        "stripeChargeId": "ch_123",
        "amount": 49.98,
        "currency": "usd",
        "status": "succeeded",
    }
    data.update(overrides)
    return data


def make_event(
    parent_type: str,
    field_name: str,
    arguments: Optional[Dict[str, Any]] = None,
    username: str = "testuser",
) -> Dict[str, Any]:
    """AppSync direct Lambda resolver event for one field."""
    return {
        "arguments": arguments or {},
        "identity": {"username": username, "sub": f"sub-{username}", "sourceIp": [], "claims": {}},
        "info": {"parentTypeName": parent_type, "fieldName": field_name},
        "request": {"headers": {}},
        "source": None,
    }
