"""
Identifier helpers for DynamoDB records.

Orders, products and payments share the composite key layout
``PK=<ENTITY>#<id>``, ``SK=METADATA``.
"""

import uuid
from typing import Dict, Optional

METADATA_SK = "METADATA"


def new_id() -> str:
    """Generate a new random record identifier."""
    return str(uuid.uuid4())


def strip_prefix(id_value: Optional[str], prefix: str) -> str:
    """
    Remove a ``<prefix>#`` from an ID to get the raw identifier.

    Only the given prefix is removed; anything else, including other
    entity prefixes and embedded ``#`` characters, is kept as part of the ID.

    Examples:
        >>> strip_prefix('PRODUCT#abc-123', 'PRODUCT')
        'abc-123'
        >>> strip_prefix('ORDER#abc-123', 'PRODUCT')
        'ORDER#abc-123'
        >>> strip_prefix('abc#123', 'PRODUCT')
        'abc#123'
    """
    if not id_value:
        return ""
    marker = f"{prefix}#"
    return id_value[len(marker) :] if id_value.startswith(marker) else id_value


def composite_key(prefix: str, id_value: str) -> Dict[str, str]:
    """Primary key for a composite-key record, e.g. ``{"PK": "ORDER#1", "SK": "METADATA"}``."""
    return {"PK": f"{prefix}#{strip_prefix(id_value, prefix)}", "SK": METADATA_SK}


def order_key(order_id: str) -> Dict[str, str]:
    return composite_key("ORDER", order_id)


def product_key(product_id: str) -> Dict[str, str]:
    return composite_key("PRODUCT", product_id)


def payment_key(payment_id: str) -> Dict[str, str]:
    return composite_key("PAYMENT", payment_id)
