from typing import List

from fastapi import APIRouter, Depends, Query, Response

from ...schemas.cafe import MenuItemCreate, MenuItemRead, MenuItemUpdate
from ...services.catalog import MenuCatalog
from ..deps import get_catalog

router = APIRouter(prefix="/menu", tags=["menu"])


@router.get("/{cafe_id}", response_model=List[MenuItemRead])
async def get_menu(
    cafe_id: str,
    available: bool = Query(False, description="Только доступные позиции"),
    catalog: MenuCatalog = Depends(get_catalog),
):
    """
    Меню кафе в порядке добавления.
    """
    return await catalog.get_menu(cafe_id, available_only=available)


@router.post("/{cafe_id}", response_model=MenuItemRead, status_code=201)
async def add_menu_item(cafe_id: str, item_in: MenuItemCreate, catalog: MenuCatalog = Depends(get_catalog)):
    """
    Добавляет позицию. Обязательны name и price, новая позиция сразу доступна.
    """
    return await catalog.add_menu_item(cafe_id, item_in.model_dump())


@router.put("/{cafe_id}/{item_id}", response_model=MenuItemRead)
async def update_menu_item(
    cafe_id: str,
    item_id: str,
    item_in: MenuItemUpdate,
    catalog: MenuCatalog = Depends(get_catalog),
):
    return await catalog.update_menu_item(cafe_id, item_id, item_in.model_dump(exclude_unset=True))


@router.delete("/{cafe_id}/{item_id}", status_code=204)
async def delete_menu_item(cafe_id: str, item_id: str, catalog: MenuCatalog = Depends(get_catalog)):
    await catalog.delete_menu_item(cafe_id, item_id)
    return Response(status_code=204)
