"""Tests for input validation utilities."""

import pytest

from stripe_graphql_api.models import OrderStatus, Plan
from stripe_graphql_api.utils.errors import AppError, ErrorCode
from stripe_graphql_api.utils.validation import (
    normalize_line_items,
    require_fields,
    sum_line_items,
    to_cents,
    validate_enum,
    validate_optional_enum,
)


class TestValidateEnum:
    def test_valid_value(self) -> None:
        """Test that a valid value is accepted."""
        assert validate_enum(OrderStatus, "paid", "status") == "paid"

    def test_enum_member(self) -> None:
        """Test that an enum member is accepted."""
        assert validate_enum(Plan, Plan.PRO, "plan") == "PRO"

    def test_invalid_value(self) -> None:
        """Test that an invalid value is INVALID_INPUT."""
        with pytest.raises(AppError) as exc_info:
            validate_enum(OrderStatus, "shipped", "status")

        assert exc_info.value.error_code == ErrorCode.INVALID_INPUT
        assert exc_info.value.message == "Invalid status: shipped"
        assert "paid" in exc_info.value.details["allowed"]

    def test_optional_none_passes(self) -> None:
        """Test that None passes when the field is optional."""
        assert validate_optional_enum(Plan, None, "plan") is None


class TestRequireFields:
    def test_lists_missing(self) -> None:
        """Test that every missing field is named."""
        with pytest.raises(AppError) as exc_info:
            require_fields({"name": "x", "email": None}, ["name", "username", "email"], "User")

        assert exc_info.value.details == {"missingFields": ["username", "email"]}


class TestLineItems:
    def test_computes_total_price(self) -> None:
        """Test that totalPrice is computed."""
        items = normalize_line_items(
            [{"productId": "p1", "productName": "Widget", "quantity": 3, "unitPrice": 0.1}]
        )

        assert items[0]["totalPrice"] == 0.3

    def test_keeps_supplied_total_price(self) -> None:
        """Test that a supplied totalPrice is kept."""
        items = normalize_line_items(
            [{"productId": "p1", "productName": "Widget", "quantity": 2, "unitPrice": 5, "totalPrice": 9}]
        )

        assert items[0]["totalPrice"] == 9

    def test_empty_list_rejected(self) -> None:
        """Test that an order needs at least one item."""
        with pytest.raises(AppError):
            normalize_line_items([])

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, True])
    def test_quantity_must_be_positive_int(self, quantity: object) -> None:
        """Test that quantity must be a positive integer."""
        with pytest.raises(AppError, match="Quantity"):
            normalize_line_items([{"productId": "p1", "productName": "W", "quantity": quantity, "unitPrice": 1}])

    def test_negative_unit_price_rejected(self) -> None:
        """Test that a negative unit price is rejected."""
        with pytest.raises(AppError, match="Unit price"):
            normalize_line_items([{"productId": "p1", "productName": "W", "quantity": 1, "unitPrice": -1}])

    def test_sum_line_items(self) -> None:
        """Test summing line totals."""
        assert sum_line_items([{"totalPrice": 24.99}, {"totalPrice": 24.99}]) == 49.98

    def test_to_cents_rounds_half_up(self) -> None:
        """Test rounding half up to cents."""
        assert to_cents(1.005) == 1.01
