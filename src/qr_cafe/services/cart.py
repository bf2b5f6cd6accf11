import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..exceptions import ValidationError
from ..schemas.order import OrderRead
from ..utils import CENT, to_money
from .lifecycle import OrderLifecycleManager
from .local_store import LocalStore

logger = logging.getLogger(__name__)

ORDERS_KEY = "orders"


class CartLine(BaseModel):
    menu_item_id: str
    name: str
    price: Decimal
    quantity: int = Field(ge=1)


def cart_key(cafe_id: str) -> str:
    return f"cart_{cafe_id}"


class Cart:
    """
    Корзина покупателя для одного кафе.
    Снимок корзины хранится в LocalStore под ключом cart_<cafe_id>:
    создаётся при первом добавлении, удаляется после оформления заказа.
    """

    def __init__(self, cafe_id: str, storage: Optional[LocalStore] = None):
        self.cafe_id = cafe_id
        self.storage = storage if storage is not None else LocalStore()
        self._lines: List[CartLine] = [
            CartLine.model_validate(raw) for raw in self.storage.get(cart_key(cafe_id), [])
        ]

    @property
    def lines(self) -> List[CartLine]:
        return [line.model_copy() for line in self._lines]

    def is_empty(self) -> bool:
        return not self._lines

    def _find(self, menu_item_id: str) -> Optional[CartLine]:
        return next((line for line in self._lines if line.menu_item_id == menu_item_id), None)

    def _persist(self) -> None:
        if self._lines:
            self.storage.set(cart_key(self.cafe_id), [line.model_dump(mode="json") for line in self._lines])
        else:
            self.storage.delete(cart_key(self.cafe_id))

    def add_item(self, item: Any) -> CartLine:
        """
        +1 к существующей строке или новая строка с quantity=1.
        item — позиция меню (MenuItemRead или словарь с id/name/price).
        """
        if isinstance(item, BaseModel):
            data = item.model_dump()
        elif isinstance(item, Mapping):
            data = dict(item)
        else:
            raise ValidationError(f"Invalid menu item: {item!r}")
        if data.get("available") is False:
            raise ValidationError(f"{data.get('name')} is not available")

        menu_item_id = data.get("id") or data.get("menu_item_id")
        if not menu_item_id:
            raise ValidationError("Menu item id is required")

        line = self._find(str(menu_item_id))
        if line:
            line.quantity += 1
        else:
            if not data.get("name") or data.get("price") is None:
                raise ValidationError("Menu item name and price are required")
            try:
                price = to_money(data["price"])
            except ValueError:
                raise ValidationError(f"Invalid price: {data['price']!r}")
            line = CartLine(menu_item_id=str(menu_item_id), name=data["name"], price=price, quantity=1)
            self._lines.append(line)
        self._persist()
        return line.model_copy()

    def change_quantity(self, menu_item_id: str, delta: int) -> Optional[CartLine]:
        """Новое количество <= 0 удаляет строку. Нет строки — ничего не делаем."""
        line = self._find(menu_item_id)
        if not line:
            return None
        quantity = line.quantity + delta
        if quantity <= 0:
            self._lines.remove(line)
            self._persist()
            return None
        line.quantity = quantity
        self._persist()
        return line.model_copy()

    def remove_item(self, menu_item_id: str) -> None:
        line = self._find(menu_item_id)
        if line:
            self._lines.remove(line)
            self._persist()

    def quantity_of(self, menu_item_id: str) -> int:
        line = self._find(menu_item_id)
        return line.quantity if line else 0

    def total(self) -> Decimal:
        total = sum((line.price * line.quantity for line in self._lines), Decimal("0"))
        return total.quantize(CENT)

    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines)

    def clear(self) -> None:
        self._lines = []
        self._persist()

    def to_order_lines(self) -> List[Dict]:
        return [line.model_dump() for line in self._lines]

    async def checkout(
        self,
        manager: OrderLifecycleManager,
        customer_name: str,
        table_number: str,
        payment_method: Optional[str] = None,
    ) -> OrderRead:
        """
        Оформляет заказ из корзины. При ошибке корзина остаётся как была.
        """
        order = await manager.create_order(
            self.cafe_id,
            self.to_order_lines(),
            customer_name,
            table_number,
            payment_method,
        )
        history = list(self.storage.get(ORDERS_KEY, []))
        history.append(order.id)
        self.storage.set(ORDERS_KEY, history)
        self.clear()
        logger.info("Cart for cafe %s checked out as order %s", self.cafe_id, order.id)
        return order
