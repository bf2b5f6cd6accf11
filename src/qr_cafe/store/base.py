from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional

from ..schemas.cafe import CafeRead, MenuItemRead
from ..schemas.order import OrderRead

# Получает текущее состояние заказа, возвращает словарь изменений.
# Может бросить ValidationError — тогда запись не меняется.
OrderMutation = Callable[[OrderRead], Dict]


class CafeStore(ABC):
    """Хранилище кафе и их меню."""

    backend: str = ""

    @abstractmethod
    async def create_cafe(self, data: Dict) -> CafeRead: ...

    @abstractmethod
    async def get_cafe(self, cafe_id: str) -> Optional[CafeRead]: ...

    @abstractmethod
    async def list_cafes(self, active_only: bool = True) -> List[CafeRead]: ...

    @abstractmethod
    async def update_cafe(self, cafe_id: str, changes: Dict) -> Optional[CafeRead]: ...

    @abstractmethod
    async def add_menu_item(self, cafe_id: str, data: Dict) -> Optional[MenuItemRead]: ...

    @abstractmethod
    async def update_menu_item(self, cafe_id: str, item_id: str, changes: Dict) -> Optional[MenuItemRead]: ...

    @abstractmethod
    async def delete_menu_item(self, cafe_id: str, item_id: str) -> bool: ...


class OrderStore(ABC):
    """
    Хранилище заказов. Заказы не удаляются.
    update_order — одна атомарная операция чтение-изменение-запись.
    """

    backend: str = ""

    @abstractmethod
    async def create_order(self, data: Dict) -> OrderRead: ...

    @abstractmethod
    async def get_order(self, order_id: str) -> Optional[OrderRead]: ...

    @abstractmethod
    async def list_orders(self, cafe_id: str) -> List[OrderRead]: ...

    @abstractmethod
    async def update_order(self, order_id: str, mutate: OrderMutation) -> Optional[OrderRead]: ...
