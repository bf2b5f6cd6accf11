import logging
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel

from ..exceptions import NotFoundError, ValidationError
from ..models.order import OrderStatusEnum, PaymentMethodEnum, PaymentStatusEnum
from ..schemas.order import OrderRead
from ..store.base import OrderStore
from ..utils import CENT, MAX_AMOUNT, check_amount, to_money, utcnow

logger = logging.getLogger(__name__)

# pending -> confirmed -> preparing -> ready -> completed
STATUS_FLOW = list(OrderStatusEnum)

NEXT_STATUS = {current: following for current, following in zip(STATUS_FLOW, STATUS_FLOW[1:])}

VALID_STATUSES = {s.value for s in OrderStatusEnum}
VALID_PAYMENT_STATUSES = {s.value for s in PaymentStatusEnum}

# order_items.quantity — Integer
MAX_QUANTITY = 2**31 - 1


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _as_dict(raw: Any) -> Dict:
    if isinstance(raw, BaseModel):
        return raw.model_dump()
    if isinstance(raw, Mapping):
        return dict(raw)
    raise ValidationError(f"Invalid order line: {raw!r}")


def build_line(raw: Any, index: int = 0) -> Dict:
    """
    Проверяет строку заказа и возвращает снимок {menu_item_id, name, price, quantity}.
    Существование позиции в меню здесь не проверяется.
    """
    data = _as_dict(raw)

    menu_item_id = data.get("menu_item_id")
    if _blank(menu_item_id):
        raise ValidationError(f"Line {index}: menu item id is required")

    name = data.get("name")
    if _blank(name) or not isinstance(name, str):
        raise ValidationError(f"Line {index}: name is required")

    price = data.get("price")
    if price is None:
        raise ValidationError(f"Line {index}: price is required")
    try:
        price = to_money(price)
    except ValueError:
        raise ValidationError(f"Line {index}: invalid price {price!r}")
    if price < 0:
        raise ValidationError(f"Line {index}: price must not be negative")

    quantity = data.get("quantity")
    if isinstance(quantity, bool) or not isinstance(quantity, int) or not 1 <= quantity <= MAX_QUANTITY:
        raise ValidationError(f"Line {index}: quantity must be a positive integer")

    return {
        "menu_item_id": str(menu_item_id),
        "name": name.strip(),
        "price": price,
        "quantity": quantity,
    }


def compute_total(lines: Iterable[Dict]) -> Decimal:
    total = sum((line["price"] * line["quantity"] for line in lines), Decimal("0"))
    try:
        return check_amount(total.quantize(CENT))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Order total exceeds {MAX_AMOUNT}")


def parse_status(value: Any) -> OrderStatusEnum:
    try:
        return OrderStatusEnum(value)
    except ValueError:
        raise ValidationError(f"Invalid status: {value}")


def parse_payment_status(value: Any) -> PaymentStatusEnum:
    try:
        return PaymentStatusEnum(value)
    except ValueError:
        raise ValidationError(f"Invalid payment status: {value}")


class OrderLifecycleManager:
    """
    Создание заказа и смена статусов.

    Статус заказа: pending -> confirmed -> preparing -> ready -> completed.
    По умолчанию разрешён любой статус из перечисления (как в исходной системе);
    при strict_transitions=True — только следующий по порядку, completed финальный.
    Статус оплаты меняется независимо от статуса заказа.
    """

    def __init__(self, store: OrderStore, strict_transitions: bool = False):
        self.store = store
        self.strict_transitions = strict_transitions

    async def create_order(
        self,
        cafe_id: Optional[str],
        lines: Optional[Iterable[Any]],
        customer_name: Optional[str],
        table_number: Optional[str],
        payment_method: Optional[str] = None,
    ) -> OrderRead:
        if _blank(cafe_id):
            raise ValidationError("Cafe id is required")
        if _blank(customer_name):
            raise ValidationError("Customer name is required")
        if _blank(table_number):
            raise ValidationError("Table number is required")

        lines = list(lines or [])
        if not lines:
            raise ValidationError("Order must contain at least one item")
        items = [build_line(raw, index) for index, raw in enumerate(lines)]

        order = await self.store.create_order(
            {
                "cafe_id": cafe_id.strip(),
                "items": items,
                "total_amount": compute_total(items),
                "customer_name": customer_name.strip(),
                "table_number": str(table_number).strip(),
                "payment_method": self._payment_method(payment_method),
                "status": OrderStatusEnum.pending,
                "payment_status": PaymentStatusEnum.pending,
            }
        )
        logger.info(
            "Order %s created for cafe %s: %d item(s), total %s",
            order.id, order.cafe_id, order.count_items, order.total_amount,
        )
        return order

    @staticmethod
    def _payment_method(value: Optional[str]) -> PaymentMethodEnum:
        if _blank(value):
            return PaymentMethodEnum.cash
        try:
            return PaymentMethodEnum(value)
        except ValueError:
            logger.warning("Unknown payment method %r, recording as cash", value)
            return PaymentMethodEnum.cash

    def _check_transition(self, current: OrderStatusEnum, requested: OrderStatusEnum) -> None:
        if not self.strict_transitions or current == requested:
            return
        if current == OrderStatusEnum.completed:
            raise ValidationError("Order is already completed")
        expected = NEXT_STATUS[current]
        if requested != expected:
            raise ValidationError(
                f"Cannot move order from {current.value} to {requested.value}, next status is {expected.value}"
            )

    async def advance_status(self, order_id: str, requested_status: Any) -> OrderRead:
        status = parse_status(requested_status)

        def mutate(order: OrderRead) -> Dict:
            self._check_transition(order.status, status)
            if order.status == status:
                return {}
            changes = {"status": status}
            if status == OrderStatusEnum.completed:
                changes["closed_at"] = utcnow()
            elif order.closed_at is not None:
                changes["closed_at"] = None
            return changes

        order = await self.store.update_order(order_id, mutate)
        if not order:
            raise NotFoundError(f"Order with id={order_id} not found")
        logger.info("Order %s status is now %s", order_id, order.status.value)
        return order

    async def set_payment_status(self, order_id: str, status: Any) -> OrderRead:
        payment_status = parse_payment_status(status)

        def mutate(order: OrderRead) -> Dict:
            if order.payment_status == payment_status:
                return {}
            return {"payment_status": payment_status}

        order = await self.store.update_order(order_id, mutate)
        if not order:
            raise NotFoundError(f"Order with id={order_id} not found")
        logger.info("Order %s payment status is now %s", order_id, order.payment_status.value)
        return order

    async def get_order(self, order_id: str) -> OrderRead:
        order = await self.store.get_order(order_id)
        if not order:
            raise NotFoundError(f"Order with id={order_id} not found")
        return order

    async def get_orders_for_cafe(self, cafe_id: str) -> List[OrderRead]:
        return await self.store.list_orders(cafe_id)
