import logging
from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from ..exceptions import StoreFailure
from ..models import Cafe, MenuItem, Order, OrderItem
from ..schemas.cafe import CafeRead, MenuItemRead
from ..schemas.order import OrderRead
from .base import CafeStore, OrderMutation, OrderStore

logger = logging.getLogger(__name__)


class _SqlStore:
    backend = "sql"

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    def _failure(self, action: str, exc: SQLAlchemyError) -> StoreFailure:
        logger.error("Store failure while trying to %s: %s", action, exc)
        return StoreFailure(f"Failed to {action}")


class SqlCafeStore(_SqlStore, CafeStore):
    """Кафе и меню в SQL. Меню подгружаем сразу, чтобы не было lazy load."""

    @staticmethod
    def _cafe_stmt(cafe_id: str):
        return select(Cafe).where(Cafe.id == cafe_id).options(selectinload(Cafe.menu))

    async def create_cafe(self, data: Dict) -> CafeRead:
        try:
            async with self._session_factory() as db:
                cafe = Cafe(
                    name=data["name"],
                    owner_email=data["owner_email"],
                    address=data.get("address") or "",
                    phone=data.get("phone") or "",
                )
                db.add(cafe)
                await db.commit()

                result = await db.execute(self._cafe_stmt(cafe.id))
                return CafeRead.model_validate(result.scalars().unique().one())
        except SQLAlchemyError as exc:
            raise self._failure("create cafe", exc) from exc

    async def get_cafe(self, cafe_id: str) -> Optional[CafeRead]:
        try:
            async with self._session_factory() as db:
                result = await db.execute(self._cafe_stmt(cafe_id))
                cafe = result.scalars().unique().first()
                return CafeRead.model_validate(cafe) if cafe else None
        except SQLAlchemyError as exc:
            raise self._failure("fetch cafe", exc) from exc

    async def list_cafes(self, active_only: bool = True) -> List[CafeRead]:
        stmt = select(Cafe).options(selectinload(Cafe.menu)).order_by(Cafe.created_at)
        if active_only:
            stmt = stmt.where(Cafe.is_active.is_(True))
        try:
            async with self._session_factory() as db:
                result = await db.execute(stmt)
                return [CafeRead.model_validate(c) for c in result.scalars().unique().all()]
        except SQLAlchemyError as exc:
            raise self._failure("fetch cafes", exc) from exc

    async def update_cafe(self, cafe_id: str, changes: Dict) -> Optional[CafeRead]:
        try:
            async with self._session_factory() as db:
                cafe = await db.get(Cafe, cafe_id)
                if not cafe:
                    return None
                for key, value in changes.items():
                    setattr(cafe, key, value)
                await db.commit()

                result = await db.execute(
                    self._cafe_stmt(cafe_id).execution_options(populate_existing=True)
                )
                return CafeRead.model_validate(result.scalars().unique().one())
        except SQLAlchemyError as exc:
            raise self._failure("update cafe", exc) from exc

    async def add_menu_item(self, cafe_id: str, data: Dict) -> Optional[MenuItemRead]:
        try:
            async with self._session_factory() as db:
                cafe = await db.get(Cafe, cafe_id)
                if not cafe:
                    return None
                position = await db.scalar(
                    select(func.coalesce(func.max(MenuItem.position) + 1, 0)).where(MenuItem.cafe_id == cafe_id)
                )
                item = MenuItem(cafe_id=cafe_id, position=position, **data)
                db.add(item)
                await db.commit()
                await db.refresh(item)
                return MenuItemRead.model_validate(item)
        except SQLAlchemyError as exc:
            raise self._failure("add menu item", exc) from exc

    async def _get_item(self, db: AsyncSession, cafe_id: str, item_id: str) -> Optional[MenuItem]:
        result = await db.execute(
            select(MenuItem).where(MenuItem.id == item_id, MenuItem.cafe_id == cafe_id)
        )
        return result.scalars().first()

    async def update_menu_item(self, cafe_id: str, item_id: str, changes: Dict) -> Optional[MenuItemRead]:
        try:
            async with self._session_factory() as db:
                item = await self._get_item(db, cafe_id, item_id)
                if not item:
                    return None
                for key, value in changes.items():
                    setattr(item, key, value)
                await db.commit()
                await db.refresh(item)
                return MenuItemRead.model_validate(item)
        except SQLAlchemyError as exc:
            raise self._failure("update menu item", exc) from exc

    async def delete_menu_item(self, cafe_id: str, item_id: str) -> bool:
        try:
            async with self._session_factory() as db:
                item = await self._get_item(db, cafe_id, item_id)
                if not item:
                    return False
                await db.delete(item)
                await db.commit()
                return True
        except SQLAlchemyError as exc:
            raise self._failure("delete menu item", exc) from exc


class SqlOrderStore(_SqlStore, OrderStore):

    @staticmethod
    def _order_stmt(order_id: str):
        return select(Order).where(Order.id == order_id).options(selectinload(Order.items))

    async def create_order(self, data: Dict) -> OrderRead:
        """
        Создаём заказ и позиции одной транзакцией.
        """
        try:
            async with self._session_factory() as db:
                seq = await db.scalar(select(func.coalesce(func.max(Order.seq) + 1, 0)))
                order = Order(
                    seq=seq,
                    cafe_id=data["cafe_id"],
                    total_amount=data["total_amount"],
                    customer_name=data["customer_name"],
                    table_number=data["table_number"],
                    payment_method=data["payment_method"],
                    status=data["status"],
                    payment_status=data["payment_status"],
                    items=[
                        OrderItem(
                            position=position,
                            menu_item_id=line["menu_item_id"],
                            name=line["name"],
                            price=line["price"],
                            quantity=line["quantity"],
                        )
                        for position, line in enumerate(data["items"])
                    ],
                )
                db.add(order)
                await db.commit()

                # загружаем заказ обратно с items
                result = await db.execute(self._order_stmt(order.id))
                return OrderRead.model_validate(result.scalars().unique().one())
        except SQLAlchemyError as exc:
            raise self._failure("create order", exc) from exc

    async def get_order(self, order_id: str) -> Optional[OrderRead]:
        try:
            async with self._session_factory() as db:
                result = await db.execute(self._order_stmt(order_id))
                order = result.scalars().unique().first()
                return OrderRead.model_validate(order) if order else None
        except SQLAlchemyError as exc:
            raise self._failure("fetch order", exc) from exc

    async def list_orders(self, cafe_id: str) -> List[OrderRead]:
        """
        Заказы кафе, новые первыми.
        """
        stmt = (
            select(Order)
            .where(Order.cafe_id == cafe_id)
            .options(selectinload(Order.items))
            .order_by(Order.created_at.desc(), Order.seq.desc())
        )
        try:
            async with self._session_factory() as db:
                result = await db.execute(stmt)
                return [OrderRead.model_validate(o) for o in result.scalars().unique().all()]
        except SQLAlchemyError as exc:
            raise self._failure("fetch orders", exc) from exc

    async def update_order(self, order_id: str, mutate: OrderMutation) -> Optional[OrderRead]:
        """
        Чтение, проверка и запись в одной транзакции (SELECT ... FOR UPDATE там, где поддерживается).
        """
        try:
            async with self._session_factory() as db:
                async with db.begin():
                    result = await db.execute(self._order_stmt(order_id).with_for_update())
                    order = result.scalars().unique().first()
                    if not order:
                        return None
                    changes = mutate(OrderRead.model_validate(order))
                    for key, value in changes.items():
                        setattr(order, key, value)

                result = await db.execute(self._order_stmt(order_id).execution_options(populate_existing=True))
                return OrderRead.model_validate(result.scalars().unique().one())
        except SQLAlchemyError as exc:
            raise self._failure("update order", exc) from exc
