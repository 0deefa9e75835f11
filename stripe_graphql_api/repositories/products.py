"""
Product records and the low-stock marker.

Key: ``PK=PRODUCT#<productId>``, ``SK=METADATA``.

The LowStockIndex is sparse, so a product carries ``lowStock = "true"``
while ``stockCount < lowStockThreshold`` and no ``lowStock`` attribute at
all otherwise. Never store ``false``.

``update`` reads the current record before writing the marker. The two
calls are not atomic: a concurrent update landing between them is
overwritten by whichever write arrives last, and the marker then reflects
the stock/threshold pair that writer saw.
"""

from typing import Any, Dict, List, Optional, cast

from ..models import LOW_STOCK_MARKER, EntityType, Product, is_low_stock
from ..utils.codec import compact
from ..utils.errors import not_found
from ..utils.ids import product_key
from ..utils.table_schemas import CATEGORY_INDEX, LOW_STOCK_INDEX, TYPE_INDEX
from ..utils.validation import require_fields
from .base import BaseRepository, store_operation

UPDATABLE_FIELDS = ["name", "description", "price", "stockCount", "lowStockThreshold", "category", "isActive"]


class ProductRepository(BaseRepository):
    entity = "products"
    label = "Product"
    key_attribute = "PK"

    @store_operation("Failed to create product")
    def create(self, data: Dict[str, Any]) -> Product:
        require_fields(data, ["name", "price", "stockCount", "lowStockThreshold", "category"], self.label)
        product_id = self._new_id()
        now = self._now()
        product: Dict[str, Any] = compact(
            {
                **product_key(product_id),
                "productId": product_id,
                "name": data["name"],
                "description": data.get("description"),
                "price": data["price"],
                "stockCount": data["stockCount"],
                "lowStockThreshold": data["lowStockThreshold"],
                "category": data["category"],
                "isActive": True,
                "createdAt": now,
                "updatedAt": now,
                "type": EntityType.PRODUCT,
            }
        )
        if is_low_stock(product["stockCount"], product["lowStockThreshold"]):
            product["lowStock"] = LOW_STOCK_MARKER

        self._put(product)
        self.logger.info("Product created", productId=product_id, lowStock="lowStock" in product)
        return cast(Product, product)

    @store_operation("Failed to get product")
    def get(self, product_id: str) -> Optional[Product]:
        return cast(Optional[Product], self._get(product_key(product_id)))

    @store_operation("Failed to list products")
    def list(self) -> List[Product]:
        return cast(List[Product], self._query_index(TYPE_INDEX, "type", EntityType.PRODUCT))

    @store_operation("Failed to get products by category")
    def list_by_category(self, category: str) -> List[Product]:
        return cast(List[Product], self._query_index(CATEGORY_INDEX, "category", category))

    @store_operation("Failed to get low stock products")
    def list_low_stock(self) -> List[Product]:
        return cast(List[Product], self._query_index(LOW_STOCK_INDEX, "lowStock", LOW_STOCK_MARKER))

    @store_operation("Failed to update product")
    def update(self, data: Dict[str, Any]) -> Product:
        """
        Partially update a product and recompute its low-stock marker.

        The effective stock and threshold take the value from ``data`` when
        present and the stored value otherwise.

        Raises:
            AppError: NOT_FOUND if the product does not exist
        """
        require_fields(data, ["productId"], self.label)
        product_id = data["productId"]

        current = self.get(product_id)
        if current is None:
            raise not_found(self.label, productId=product_id)

        changes = {field: data.get(field) for field in UPDATABLE_FIELDS}
        stock_count = data["stockCount"] if data.get("stockCount") is not None else current.get("stockCount")
        threshold = (
            data["lowStockThreshold"]
            if data.get("lowStockThreshold") is not None
            else current.get("lowStockThreshold")
        )

        remove = []
        low_stock = is_low_stock(stock_count, threshold)
        if low_stock:
            changes["lowStock"] = LOW_STOCK_MARKER
        else:
            remove.append("lowStock")

        updated = self._update(product_key(product_id), changes, remove)
        self.logger.info("Product updated", productId=product_id, stockCount=stock_count, lowStock=low_stock)
        return cast(Product, updated)

    @store_operation("Failed to delete product")
    def delete(self, product_id: str) -> Product:
        """Delete a product and return it as it was before deletion."""
        deleted = self._delete_existing(product_key(product_id), productId=product_id)
        self.logger.info("Product deleted", productId=product_id)
        return cast(Product, deleted)
