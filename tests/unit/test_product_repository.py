"""Tests for ProductRepository and the sparse low-stock marker."""

from typing import Any, Dict
from unittest.mock import MagicMock

import pytest

from stripe_graphql_api.repositories import ProductRepository
from stripe_graphql_api.utils.config import Settings
from stripe_graphql_api.utils.dynamodb import StoreClient
from stripe_graphql_api.utils.errors import AppError, ErrorCode
from stripe_graphql_api.utils.table_schemas import stage_table_names

from tests.unit.fixtures import make_product_input


def _low_stock_ids(products: ProductRepository) -> list:
    return sorted(p["productId"] for p in products.list_low_stock())


class TestCreateProduct:
    def test_create_active_product(self, products: ProductRepository) -> None:
        """Test that a new product is active."""
        product = products.create(make_product_input())

        assert product["isActive"] is True
        assert product["type"] == "product"
        assert product["PK"] == f"PRODUCT#{product['productId']}"
        assert product["createdAt"] == product["updatedAt"]
        assert "lowStock" not in product

    def test_stock_equal_to_threshold_is_not_low(self, products: ProductRepository) -> None:
        """Test that stock at the threshold is not low."""
        product = products.create(make_product_input(stockCount=5, lowStockThreshold=5))

        assert "lowStock" not in product
        assert products.list_low_stock() == []

    def test_stock_below_threshold_is_low(self, products: ProductRepository) -> None:
        """Test that stock below the threshold is low."""
        product = products.create(make_product_input(stockCount=4, lowStockThreshold=5))

        assert product["lowStock"] == "true"
        assert _low_stock_ids(products) == [product["productId"]]

    def test_missing_description_not_stored(self, products: ProductRepository) -> None:
        """Test that an absent description is not stored."""
        product = products.create(make_product_input(description=None))

        assert "description" not in products.get(product["productId"])

    def test_missing_price_rejected(self, products: ProductRepository) -> None:
        """Test that price is required."""
        with pytest.raises(AppError) as exc_info:
            products.create(make_product_input(price=None))

        assert exc_info.value.error_code == ErrorCode.INVALID_INPUT


class TestQueryProducts:
    def test_list_by_category(self, products: ProductRepository) -> None:
        """Test listing products in one category."""
        tool = products.create(make_product_input(category="tools"))
        products.create(make_product_input(category="toys"))

        assert [p["productId"] for p in products.list_by_category("tools")] == [tool["productId"]]

    def test_list(self, products: ProductRepository) -> None:
        """Test listing every product."""
        products.create(make_product_input())
        products.create(make_product_input(name="Gadget"))

        assert len(products.list()) == 2


class TestUpdateProduct:
    def test_stock_drop_then_threshold_change(self, products: ProductRepository) -> None:
        """Test the low-stock marker across a stock drop and a threshold change."""
        product = products.create(make_product_input(stockCount=10, lowStockThreshold=5))
        product_id = product["productId"]

        low = products.update({"productId": product_id, "stockCount": 3})

        assert low["stockCount"] == 3
        assert low["lowStock"] == "true"
        assert _low_stock_ids(products) == [product_id]

        healthy = products.update({"productId": product_id, "lowStockThreshold": 2})

        assert healthy["stockCount"] == 3
        assert "lowStock" not in healthy
        assert products.list_low_stock() == []

    def test_update_to_threshold_clears_marker(self, products: ProductRepository) -> None:
        """Test that restocking to the threshold clears the marker."""
        product = products.create(make_product_input(stockCount=1, lowStockThreshold=5))

        updated = products.update({"productId": product["productId"], "stockCount": 5})

        assert "lowStock" not in updated

    def test_update_one_below_threshold_sets_marker(self, products: ProductRepository) -> None:
        """Test that stock one below the threshold sets the marker."""
        product = products.create(make_product_input(stockCount=10, lowStockThreshold=5))

        updated = products.update({"productId": product["productId"], "stockCount": 4})

        assert updated["lowStock"] == "true"

    def test_omitted_fields_unchanged(self, products: ProductRepository) -> None:
        """Test that omitted fields keep their values."""
        product = products.create(make_product_input())

        updated = products.update({"productId": product["productId"], "price": 12.5, "isActive": False})

        assert updated["price"] == 12.5
        assert updated["isActive"] is False
        for field in ("name", "description", "stockCount", "lowStockThreshold", "category", "createdAt"):
            assert updated[field] == product[field]
        assert updated["updatedAt"] > product["updatedAt"]

    def test_update_missing_product(self, products: ProductRepository) -> None:
        """Test that updating a missing product is NOT_FOUND."""
        with pytest.raises(AppError) as exc_info:
            products.update({"productId": "missing", "stockCount": 1})

        assert exc_info.value.error_code == ErrorCode.NOT_FOUND
        assert products.get("missing") is None

    def test_stale_read_leaves_marker_from_stale_view(
        self, products: ProductRepository, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A write between the pre-read and the update is overwritten; last writer wins."""
        product = products.create(make_product_input(stockCount=10, lowStockThreshold=5))
        product_id = product["productId"]
        stale_view: Dict[str, Any] = dict(product)

        # Another writer drops the threshold after our read
        products.update({"productId": product_id, "lowStockThreshold": 1})
        monkeypatch.setattr(products, "get", lambda _product_id: stale_view)

        updated = products.update({"productId": product_id, "stockCount": 3})

        # Computed against the stale threshold (5), not the stored one (1)
        assert updated["lowStockThreshold"] == 1
        assert updated["stockCount"] == 3
        assert updated["lowStock"] == "true"


class TestDeleteProduct:
    def test_delete_then_get(self, products: ProductRepository) -> None:
        """Test that a deleted product reads as None."""
        product = products.create(make_product_input(stockCount=1))

        deleted = products.delete(product["productId"])

        assert deleted["productId"] == product["productId"]
        assert products.get(product["productId"]) is None
        assert products.list_low_stock() == []

    def test_delete_missing(self) -> None:
        """Test that deleting a missing product is NOT_FOUND."""
        client = MagicMock()
        client.get_item.return_value = {}
        store = StoreClient(Settings(stage="test", table_names=stage_table_names("test")), client=client)

        with pytest.raises(AppError) as exc_info:
            ProductRepository(store).delete("missing")

        assert exc_info.value.error_code == ErrorCode.NOT_FOUND
        assert exc_info.value.details == {"productId": "missing"}
        client.delete_item.assert_not_called()
