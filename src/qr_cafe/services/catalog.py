import logging
from typing import Any, Dict, List, Optional

from ..exceptions import NotFoundError, ValidationError
from ..schemas.cafe import CafeRead, CafeSummary, MenuItemRead
from ..store.base import CafeStore
from ..utils import to_money

logger = logging.getLogger(__name__)

CAFE_FIELDS = {"name", "owner_email", "address", "phone", "is_active"}
MENU_ITEM_FIELDS = {"name", "price", "description", "category", "available"}


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _price(value: Any):
    try:
        price = to_money(value)
    except ValueError:
        raise ValidationError(f"Invalid price: {value!r}")
    if price < 0:
        raise ValidationError("Price must not be negative")
    return price


class MenuCatalog:
    """
    Кафе и их меню.
    Для корзины и заказа — источник актуальных названия и цены позиции.
    """

    def __init__(self, store: CafeStore):
        self.store = store

    # --- кафе ---

    async def create_cafe(self, data: Dict) -> CafeRead:
        if _blank(data.get("name")) or _blank(data.get("owner_email")):
            raise ValidationError("Name and owner email are required")
        cafe = await self.store.create_cafe(
            {
                "name": data["name"].strip(),
                "owner_email": data["owner_email"].strip(),
                "address": data.get("address") or "",
                "phone": data.get("phone") or "",
            }
        )
        logger.info("Cafe %s created (%s)", cafe.id, cafe.name)
        return cafe

    async def get_cafe(self, cafe_id: str) -> CafeRead:
        cafe = await self.store.get_cafe(cafe_id)
        if not cafe:
            raise NotFoundError("Cafe not found")
        return cafe

    async def list_cafes(self) -> List[CafeRead]:
        return await self.store.list_cafes(active_only=True)

    async def update_cafe(self, cafe_id: str, changes: Dict) -> CafeRead:
        """
        Частичное обновление кафе.
        Поддерживаемые поля: name, owner_email, address, phone, is_active.
        """
        unknown = set(changes) - CAFE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown cafe fields: {', '.join(sorted(unknown))}")
        for key in ("name", "owner_email"):
            if key in changes and _blank(changes[key]):
                raise ValidationError(f"{key} must not be empty")
        if "is_active" in changes and changes["is_active"] is None:
            raise ValidationError("is_active must be a boolean")

        changes = {key: ("" if value is None else value) for key, value in changes.items()}
        cafe = await self.store.update_cafe(cafe_id, changes)
        if not cafe:
            raise NotFoundError("Cafe not found")
        return cafe

    async def deactivate_cafe(self, cafe_id: str) -> CafeRead:
        """Мягкое удаление: is_active=False, запись остаётся."""
        cafe = await self.store.update_cafe(cafe_id, {"is_active": False})
        if not cafe:
            raise NotFoundError("Cafe not found")
        logger.info("Cafe %s deactivated", cafe_id)
        return cafe

    async def cafe_summary(self, cafe_id: str) -> Optional[CafeSummary]:
        cafe = await self.store.get_cafe(cafe_id)
        return CafeSummary.model_validate(cafe.model_dump()) if cafe else None

    # --- меню ---

    async def get_menu(self, cafe_id: str, available_only: bool = False) -> List[MenuItemRead]:
        cafe = await self.get_cafe(cafe_id)
        if available_only:
            return [item for item in cafe.menu if item.available]
        return cafe.menu

    async def list_active_items(self, cafe_id: str) -> List[MenuItemRead]:
        return await self.get_menu(cafe_id, available_only=True)

    async def get_item(self, cafe_id: str, item_id: str) -> MenuItemRead:
        for item in await self.get_menu(cafe_id):
            if item.id == item_id:
                return item
        raise NotFoundError("Menu item not found")

    async def add_menu_item(self, cafe_id: str, data: Dict) -> MenuItemRead:
        if _blank(data.get("name")) or data.get("price") is None:
            raise ValidationError("Name and price are required")
        item = await self.store.add_menu_item(
            cafe_id,
            {
                "name": data["name"].strip(),
                "price": _price(data["price"]),
                "description": data.get("description") or "",
                "category": data.get("category") or "Food",
                "available": True,
            },
        )
        if not item:
            raise NotFoundError("Cafe not found")
        return item

    async def update_menu_item(self, cafe_id: str, item_id: str, changes: Dict) -> MenuItemRead:
        unknown = set(changes) - MENU_ITEM_FIELDS
        if unknown:
            raise ValidationError(f"Unknown menu item fields: {', '.join(sorted(unknown))}")
        changes = dict(changes)
        if "name" in changes and _blank(changes["name"]):
            raise ValidationError("name must not be empty")
        if "price" in changes:
            if changes["price"] is None:
                raise ValidationError("price must not be empty")
            changes["price"] = _price(changes["price"])
        if "available" in changes and changes["available"] is None:
            raise ValidationError("available must be a boolean")
        for key in ("description", "category"):
            if key in changes and changes[key] is None:
                changes[key] = "" if key == "description" else "Food"

        await self.get_cafe(cafe_id)
        item = await self.store.update_menu_item(cafe_id, item_id, changes)
        if not item:
            raise NotFoundError("Menu item not found")
        return item

    async def delete_menu_item(self, cafe_id: str, item_id: str) -> None:
        await self.get_cafe(cafe_id)
        if not await self.store.delete_menu_item(cafe_id, item_id):
            raise NotFoundError("Menu item not found")

    async def order_line(self, cafe_id: str, item_id: str, quantity: int = 1) -> Dict:
        """
        Снимок строки заказа по актуальному меню.
        Недоступную позицию заказать нельзя.
        """
        item = await self.get_item(cafe_id, item_id)
        if not item.available:
            raise ValidationError(f"{item.name} is not available")
        return {"menu_item_id": item.id, "name": item.name, "price": item.price, "quantity": quantity}
