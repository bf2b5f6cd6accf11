from typing import List

from fastapi import APIRouter, Depends, Path

from ...schemas.order import OrderCreate, OrderDetail, OrderRead, OrderStatusUpdate, PaymentStatusUpdate
from ...services.catalog import MenuCatalog
from ...services.lifecycle import OrderLifecycleManager
from ..deps import get_catalog, get_order_manager


router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("/cafe/{cafe_id}", response_model=List[OrderRead])
async def list_cafe_orders(
    cafe_id: str = Path(..., description="ID кафе"),
    manager: OrderLifecycleManager = Depends(get_order_manager),
):
    """
    Возвращает заказы кафе.
    Сортируем по created_at (новые первыми).
    """
    return await manager.get_orders_for_cafe(cafe_id)


@router.get("/{order_id}", response_model=OrderDetail)
async def get_order(
    order_id: str = Path(..., description="ID заказа"),
    manager: OrderLifecycleManager = Depends(get_order_manager),
    catalog: MenuCatalog = Depends(get_catalog),
):
    """
    Возвращает детализацию заказа по id вместе с краткой информацией о кафе.
    """
    order = await manager.get_order(order_id)
    cafe = await catalog.cafe_summary(order.cafe_id)
    return OrderDetail(**order.model_dump(), cafe=cafe)


@router.post("", response_model=OrderRead, status_code=201)
async def create_order_endpoint(order_in: OrderCreate, manager: OrderLifecycleManager = Depends(get_order_manager)):
    """
    Возвращает созданный заказ. totalAmount считается на сервере.
    """
    return await manager.create_order(
        order_in.cafe_id,
        order_in.items,
        order_in.customer_name,
        order_in.table_number,
        order_in.payment_method,
    )


@router.put("/{order_id}/status", response_model=OrderRead)
async def update_order_status(
    order_id: str,
    body: OrderStatusUpdate,
    manager: OrderLifecycleManager = Depends(get_order_manager),
):
    """
    Смена статуса заказа: pending, confirmed, preparing, ready, completed.
    """
    return await manager.advance_status(order_id, body.status)


@router.put("/{order_id}/payment", response_model=OrderRead)
async def update_payment_status(
    order_id: str,
    body: PaymentStatusUpdate,
    manager: OrderLifecycleManager = Depends(get_order_manager),
):
    """
    Смена статуса оплаты: pending, completed, failed.
    """
    return await manager.set_payment_status(order_id, body.payment_status)
