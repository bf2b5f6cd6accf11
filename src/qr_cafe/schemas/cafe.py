from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import ConfigDict

from .base import CamelModel


class MenuItemRead(CamelModel):
    id: str
    name: str
    price: Decimal
    description: str = ""
    category: str = "Food"
    available: bool = True


class MenuItemCreate(CamelModel):
    # обязательность name/price проверяет каталог, чтобы отвечать 400 единообразно
    name: Optional[str] = None
    price: Optional[Decimal] = None
    description: Optional[str] = None
    category: Optional[str] = None


class MenuItemUpdate(CamelModel):
    name: Optional[str] = None
    price: Optional[Decimal] = None
    description: Optional[str] = None
    category: Optional[str] = None
    available: Optional[bool] = None

    model_config = ConfigDict(extra="forbid")


class CafeRead(CamelModel):
    id: str
    name: str
    owner_email: str
    address: str = ""
    phone: str = ""
    is_active: bool = True
    menu: List[MenuItemRead] = []
    created_at: datetime
    updated_at: datetime


class CafeListItem(CamelModel):
    """Кафе без меню — для списка."""

    id: str
    name: str
    owner_email: str
    address: str = ""
    phone: str = ""
    is_active: bool = True


class CafeSummary(CamelModel):
    id: str
    name: str
    address: str = ""
    phone: str = ""


class CafeCreate(CamelModel):
    name: Optional[str] = None
    owner_email: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None


class CafeUpdate(CamelModel):
    name: Optional[str] = None
    owner_email: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    is_active: Optional[bool] = None

    model_config = ConfigDict(extra="forbid")
