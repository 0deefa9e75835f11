"""
Entity records and enumerations exposed through the GraphQL schema.

Records are plain dictionaries typed with TypedDict; they are exactly what
is stored in DynamoDB and returned to AppSync.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, TypedDict


class Plan(str, Enum):
    STARTER = "STARTER"
    PRO = "PRO"
    PARTNER = "PARTNER"


class SubscriptionStatus(str, Enum):
    ACTIVE = "ACTIVE"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"
    TRIAL = "TRIAL"


class OrderStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FULFILLED = "fulfilled"
    FAILED = "failed"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    REFUNDED = "refunded"


class EntityType:
    """Values of the ``type`` discriminator used by every TypeIndex."""

    USER = "user"
    SUBSCRIPTION = "subscription"
    ORDER = "order"
    PRODUCT = "product"


# The LowStockIndex is sparse: only items carrying this exact value are indexed.
LOW_STOCK_MARKER = "true"


class Address(TypedDict, total=False):
    street: str
    suite: str
    city: str
    zipcode: str


class User(TypedDict, total=False):
    id: str
    name: str
    username: str
    email: str
    address: Address
    createdAt: str
    updatedAt: str
    type: str


class Subscription(TypedDict, total=False):
    id: str
    userId: str
    plan: str
    status: str
    stripeSubscriptionId: Optional[str]
    stripeCustomerId: Optional[str]
    startDate: str
    endDate: Optional[str]
    createdAt: str
    updatedAt: str
    type: str


class OrderItem(TypedDict, total=False):
    productId: str
    productName: str
    quantity: int
    unitPrice: float
    totalPrice: float


class Order(TypedDict, total=False):
    PK: str  # "ORDER#<orderId>"
    SK: str  # "METADATA"
    orderId: str
    customerId: str
    items: List[OrderItem]
    totalAmount: float
    status: str
    createdAt: str
    updatedAt: str
    type: str


class Product(TypedDict, total=False):
    PK: str  # "PRODUCT#<productId>"
    SK: str  # "METADATA"
    productId: str
    name: str
    description: str
    price: float
    stockCount: int
    lowStockThreshold: int
    category: str
    isActive: bool
    createdAt: str
    updatedAt: str
    type: str
    lowStock: str  # only ever LOW_STOCK_MARKER; absent when stock is healthy


class Payment(TypedDict, total=False):
    PK: str  # "PAYMENT#<paymentId>"
    SK: str  # "METADATA"
    paymentId: str
    orderId: str
    stripeChargeId: str
    amount: float
    currency: str
    status: str
    failureReason: Optional[str]
    retryCount: int
    metadata: Dict[str, Any]
    createdAt: str
    updatedAt: str


class PlanSubscription(TypedDict, total=False):
    id: str
    clientSecret: str


def is_low_stock(stock_count: Any, low_stock_threshold: Any) -> bool:
    """Low stock means strictly below the threshold."""
    return stock_count < low_stock_threshold
