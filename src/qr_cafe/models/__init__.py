from .cafe import Cafe
from .menu_item import MenuItem
from .order import Order, OrderStatusEnum, PaymentStatusEnum, PaymentMethodEnum
from .order_item import OrderItem

__all__ = [
    "Cafe",
    "MenuItem",
    "Order",
    "OrderStatusEnum",
    "PaymentStatusEnum",
    "PaymentMethodEnum",
    "OrderItem",
]
