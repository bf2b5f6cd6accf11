from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Union

from pydantic import ConfigDict, field_validator

from .base import CamelModel
from .cafe import CafeSummary
from ..models.order import OrderStatusEnum, PaymentStatusEnum, PaymentMethodEnum


class OrderItemRead(CamelModel):
    menu_item_id: str
    name: str
    price: Decimal
    quantity: int


class OrderRead(CamelModel):
    id: str
    cafe_id: str
    items: List[OrderItemRead] = []
    total_amount: Decimal
    customer_name: str
    table_number: str
    payment_method: PaymentMethodEnum
    status: OrderStatusEnum
    payment_status: PaymentStatusEnum
    created_at: datetime
    updated_at: datetime
    closed_at: Optional[datetime] = None

    @property
    def count_items(self) -> int:
        return sum(item.quantity for item in self.items)


class OrderDetail(OrderRead):
    """Заказ вместе с краткой информацией о кафе."""

    cafe: Optional[CafeSummary] = None


class OrderItemCreate(CamelModel):
    # строгие проверки строки заказа делает OrderLifecycleManager
    menu_item_id: Optional[str] = None
    name: Optional[str] = None
    price: Optional[Union[Decimal, str]] = None
    quantity: Optional[int] = None

    @field_validator("menu_item_id", mode="before")
    @classmethod
    def _id_as_str(cls, value):
        return str(value) if isinstance(value, int) else value


class OrderCreate(CamelModel):
    cafe_id: Optional[str] = None
    items: Optional[List[OrderItemCreate]] = None
    customer_name: Optional[str] = None
    table_number: Optional[str] = None
    payment_method: Optional[str] = None

    @field_validator("table_number", mode="before")
    @classmethod
    def _table_as_str(cls, value):
        # номер стола часто приходит числом
        return str(value) if isinstance(value, int) and not isinstance(value, bool) else value


class OrderStatusUpdate(CamelModel):
    status: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class PaymentStatusUpdate(CamelModel):
    payment_status: Optional[str] = None

    model_config = ConfigDict(extra="forbid")
