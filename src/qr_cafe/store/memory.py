import itertools
from typing import Dict, List, Optional

from ..schemas.cafe import CafeRead, MenuItemRead
from ..schemas.order import OrderItemRead, OrderRead
from ..utils import new_id, utcnow
from .base import CafeStore, OrderMutation, OrderStore


class MemoryCafeStore(CafeStore):
    backend = "memory"

    def __init__(self):
        self._cafes: Dict[str, CafeRead] = {}

    async def create_cafe(self, data: Dict) -> CafeRead:
        now = utcnow()
        cafe = CafeRead(
            id=new_id(),
            name=data["name"],
            owner_email=data["owner_email"],
            address=data.get("address") or "",
            phone=data.get("phone") or "",
            is_active=True,
            menu=[],
            created_at=now,
            updated_at=now,
        )
        self._cafes[cafe.id] = cafe
        return cafe.model_copy(deep=True)

    async def get_cafe(self, cafe_id: str) -> Optional[CafeRead]:
        cafe = self._cafes.get(cafe_id)
        return cafe.model_copy(deep=True) if cafe else None

    async def list_cafes(self, active_only: bool = True) -> List[CafeRead]:
        return [
            cafe.model_copy(deep=True)
            for cafe in self._cafes.values()
            if cafe.is_active or not active_only
        ]

    async def update_cafe(self, cafe_id: str, changes: Dict) -> Optional[CafeRead]:
        cafe = self._cafes.get(cafe_id)
        if not cafe:
            return None
        cafe = cafe.model_copy(update={**changes, "updated_at": utcnow()})
        self._cafes[cafe_id] = cafe
        return cafe.model_copy(deep=True)

    async def add_menu_item(self, cafe_id: str, data: Dict) -> Optional[MenuItemRead]:
        cafe = self._cafes.get(cafe_id)
        if not cafe:
            return None
        item = MenuItemRead(id=new_id(), **data)
        cafe.menu.append(item)
        cafe.updated_at = utcnow()
        return item.model_copy()

    async def update_menu_item(self, cafe_id: str, item_id: str, changes: Dict) -> Optional[MenuItemRead]:
        cafe = self._cafes.get(cafe_id)
        if not cafe:
            return None
        for index, item in enumerate(cafe.menu):
            if item.id == item_id:
                cafe.menu[index] = item.model_copy(update=changes)
                cafe.updated_at = utcnow()
                return cafe.menu[index].model_copy()
        return None

    async def delete_menu_item(self, cafe_id: str, item_id: str) -> bool:
        cafe = self._cafes.get(cafe_id)
        if not cafe:
            return False
        remaining = [item for item in cafe.menu if item.id != item_id]
        if len(remaining) == len(cafe.menu):
            return False
        cafe.menu = remaining
        cafe.updated_at = utcnow()
        return True


class MemoryOrderStore(OrderStore):
    backend = "memory"

    def __init__(self):
        self._orders: Dict[str, OrderRead] = {}
        # порядок вставки — на случай одинакового created_at
        self._sequence: Dict[str, int] = {}
        self._counter = itertools.count()

    async def create_order(self, data: Dict) -> OrderRead:
        now = utcnow()
        order = OrderRead(
            id=new_id(),
            cafe_id=data["cafe_id"],
            items=[OrderItemRead(**line) for line in data["items"]],
            total_amount=data["total_amount"],
            customer_name=data["customer_name"],
            table_number=data["table_number"],
            payment_method=data["payment_method"],
            status=data["status"],
            payment_status=data["payment_status"],
            created_at=now,
            updated_at=now,
        )
        self._orders[order.id] = order
        self._sequence[order.id] = next(self._counter)
        return order.model_copy(deep=True)

    async def get_order(self, order_id: str) -> Optional[OrderRead]:
        order = self._orders.get(order_id)
        return order.model_copy(deep=True) if order else None

    async def list_orders(self, cafe_id: str) -> List[OrderRead]:
        orders = [order for order in self._orders.values() if order.cafe_id == cafe_id]
        orders.sort(key=lambda o: (o.created_at, self._sequence[o.id]), reverse=True)
        return [order.model_copy(deep=True) for order in orders]

    async def update_order(self, order_id: str, mutate: OrderMutation) -> Optional[OrderRead]:
        order = self._orders.get(order_id)
        if not order:
            return None
        # без await между чтением и записью — операция атомарна для event loop
        changes = mutate(order.model_copy(deep=True))
        if changes:
            order = order.model_copy(update={**changes, "updated_at": utcnow()})
            self._orders[order_id] = order
        return order.model_copy(deep=True)
