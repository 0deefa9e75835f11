"""
Resolver routing for the AppSync Lambda data source.

Every GraphQL field served by the Lambda is an ``Operation`` member keyed
by its ``(parentTypeName, fieldName)`` pair. ``Router`` refuses to build
unless each operation has a handler, so an unserved field fails at startup
rather than on the first request for it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from ..billing import BillingGateway
from ..repositories import (
    OrderRepository,
    PaymentRepository,
    ProductRepository,
    SubscriptionRepository,
    UserRepository,
)
from ..utils.appsync_types import AppSyncEvent, get_argument_required, get_field, get_identity, get_input
from ..utils.config import Settings
from ..utils.dynamodb import StoreClient
from ..utils.errors import AppError, ErrorCode
from ..utils.logging import get_logger

logger = get_logger(__name__)


class Operation(Enum):
    """GraphQL fields resolved by the Lambda."""

    # Query
    LIST_USERS = ("Query", "users")
    GET_USER = ("Query", "getUser")
    GET_SUBSCRIPTION = ("Query", "getSubscription")
    LIST_SUBSCRIPTIONS = ("Query", "listSubscriptions")
    GET_SUBSCRIPTIONS_BY_USER = ("Query", "getSubscriptionsByUser")
    GET_ORDER = ("Query", "getOrder")
    LIST_ORDERS = ("Query", "listOrders")
    GET_ORDERS_BY_CUSTOMER = ("Query", "getOrdersByCustomer")
    GET_PRODUCT = ("Query", "getProduct")
    LIST_PRODUCTS = ("Query", "listProducts")
    GET_PRODUCTS_BY_CATEGORY = ("Query", "getProductsByCategory")
    GET_LOW_STOCK_PRODUCTS = ("Query", "getLowStockProducts")
    GET_PAYMENT = ("Query", "getPayment")
    GET_PAYMENTS_BY_ORDER = ("Query", "getPaymentsByOrder")
    GET_FAILED_PAYMENTS = ("Query", "getFailedPayments")

    # Mutation
    PLAN_SUBSCRIPTION_CREATE = ("Mutation", "planSubscriptionCreate")
    CREATE_USER = ("Mutation", "createUser")
    CREATE_SUBSCRIPTION = ("Mutation", "createSubscription")
    UPDATE_SUBSCRIPTION = ("Mutation", "updateSubscription")
    DELETE_SUBSCRIPTION = ("Mutation", "deleteSubscription")
    CREATE_ORDER = ("Mutation", "createOrder")
    UPDATE_ORDER_STATUS = ("Mutation", "updateOrderStatus")
    CREATE_PRODUCT = ("Mutation", "createProduct")
    UPDATE_PRODUCT = ("Mutation", "updateProduct")
    DELETE_PRODUCT = ("Mutation", "deleteProduct")
    CREATE_PAYMENT = ("Mutation", "createPayment")

    @property
    def parent_type(self) -> str:
        return self.value[0]

    @property
    def field_name(self) -> str:
        return self.value[1]

    @classmethod
    def resolve(cls, parent_type: str, field_name: str) -> "Operation":
        """
        Find the operation for a type/field pair.

        Raises:
            AppError: RESOLVER_NOT_FOUND naming the unmatched pair
        """
        try:
            return cls((parent_type, field_name))
        except ValueError:
            raise AppError(
                ErrorCode.RESOLVER_NOT_FOUND,
                f"Resolver not found for {parent_type}.{field_name}",
                {"parentTypeName": parent_type, "fieldName": field_name},
            ) from None


@dataclass
class Services:
    """Repositories and billing gateway shared by every request in a process."""

    users: UserRepository
    subscriptions: SubscriptionRepository
    orders: OrderRepository
    products: ProductRepository
    payments: PaymentRepository
    gateway_factory: Callable[[], BillingGateway]
    _gateway: Optional[BillingGateway] = field(default=None, repr=False)

    @property
    def gateway(self) -> BillingGateway:
        """Built on first use so Query-only processes never need a Stripe key."""
        if self._gateway is None:
            self._gateway = self.gateway_factory()
        return self._gateway

    @classmethod
    def from_settings(cls, settings: Settings, store: Optional[StoreClient] = None) -> "Services":
        store = store or StoreClient(settings)
        return cls(
            users=UserRepository(store),
            subscriptions=SubscriptionRepository(store),
            orders=OrderRepository(store),
            products=ProductRepository(store),
            payments=PaymentRepository(store),
            gateway_factory=lambda: BillingGateway.from_settings(settings),
        )


Handler = Callable[[Services, AppSyncEvent], Any]


HANDLERS: Dict[Operation, Handler] = {
    Operation.LIST_USERS: lambda s, e: s.users.list(),
    Operation.GET_USER: lambda s, e: s.users.get(get_argument_required(e, "id")),
    Operation.GET_SUBSCRIPTION: lambda s, e: s.subscriptions.get(get_argument_required(e, "id")),
    Operation.LIST_SUBSCRIPTIONS: lambda s, e: s.subscriptions.list(),
    Operation.GET_SUBSCRIPTIONS_BY_USER: lambda s, e: s.subscriptions.list_by_user(get_argument_required(e, "userId")),
    Operation.GET_ORDER: lambda s, e: s.orders.get(get_argument_required(e, "orderId")),
    Operation.LIST_ORDERS: lambda s, e: s.orders.list(),
    Operation.GET_ORDERS_BY_CUSTOMER: lambda s, e: s.orders.list_by_customer(get_argument_required(e, "customerId")),
    Operation.GET_PRODUCT: lambda s, e: s.products.get(get_argument_required(e, "productId")),
    Operation.LIST_PRODUCTS: lambda s, e: s.products.list(),
    Operation.GET_PRODUCTS_BY_CATEGORY: lambda s, e: s.products.list_by_category(get_argument_required(e, "category")),
    Operation.GET_LOW_STOCK_PRODUCTS: lambda s, e: s.products.list_low_stock(),
    Operation.GET_PAYMENT: lambda s, e: s.payments.get(get_argument_required(e, "paymentId")),
    Operation.GET_PAYMENTS_BY_ORDER: lambda s, e: s.payments.list_by_order(get_argument_required(e, "orderId")),
    Operation.GET_FAILED_PAYMENTS: lambda s, e: s.payments.list_failed(),
    Operation.PLAN_SUBSCRIPTION_CREATE: lambda s, e: s.gateway.create_subscription_for_caller(
        get_identity(e), get_argument_required(e, "plan")
    ),
    Operation.CREATE_USER: lambda s, e: s.users.create(get_input(e)),
    Operation.CREATE_SUBSCRIPTION: lambda s, e: s.subscriptions.create(get_input(e)),
    Operation.UPDATE_SUBSCRIPTION: lambda s, e: s.subscriptions.update(get_input(e)),
    Operation.DELETE_SUBSCRIPTION: lambda s, e: s.subscriptions.delete(get_argument_required(e, "id")),
    Operation.CREATE_ORDER: lambda s, e: s.orders.create(get_input(e)),
    Operation.UPDATE_ORDER_STATUS: lambda s, e: s.orders.update_status(
        get_argument_required(e, "orderId"), get_argument_required(e, "status")
    ),
    Operation.CREATE_PRODUCT: lambda s, e: s.products.create(get_input(e)),
    Operation.UPDATE_PRODUCT: lambda s, e: s.products.update(get_input(e)),
    Operation.DELETE_PRODUCT: lambda s, e: s.products.delete(get_argument_required(e, "productId")),
    Operation.CREATE_PAYMENT: lambda s, e: s.payments.create(get_input(e)),
}


class Router:
    """Dispatches an AppSync event to the handler for its field."""

    def __init__(self, services: Services, handlers: Mapping[Operation, Handler] = HANDLERS) -> None:
        missing = [op for op in Operation if op not in handlers]
        if missing:
            names = ", ".join(f"{op.parent_type}.{op.field_name}" for op in missing)
            raise ValueError(f"No handler registered for: {names}")
        self.services = services
        self.handlers = dict(handlers)

    def route(self, event: AppSyncEvent) -> Tuple[Operation, Handler]:
        """Select the handler for an event without invoking it."""
        parent_type, field_name = get_field(event)
        operation = Operation.resolve(parent_type, field_name)
        return operation, self.handlers[operation]

    def dispatch(self, event: AppSyncEvent) -> Any:
        """
        Invoke the handler for the event's field.

        Errors raised by the handler propagate unchanged.
        """
        operation, handler = self.route(event)
        logger.debug("Dispatching", parentTypeName=operation.parent_type, fieldName=operation.field_name)
        return handler(self.services, event)
