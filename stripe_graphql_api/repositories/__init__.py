"""Entity repositories over the DynamoDB tables."""

from .base import BaseRepository, store_operation, utc_now_iso
from .orders import OrderRepository
from .payments import PaymentRepository
from .products import ProductRepository
from .subscriptions import SubscriptionRepository
from .users import UserRepository

__all__ = [
    "BaseRepository",
    "OrderRepository",
    "PaymentRepository",
    "ProductRepository",
    "SubscriptionRepository",
    "UserRepository",
    "store_operation",
    "utc_now_iso",
]
