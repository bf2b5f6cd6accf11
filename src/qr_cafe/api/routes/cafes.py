from typing import List

from fastapi import APIRouter, Depends, Path, Response

from ...schemas.cafe import CafeCreate, CafeListItem, CafeRead, CafeUpdate
from ...services.catalog import MenuCatalog
from ..deps import get_catalog

router = APIRouter(prefix="/cafes", tags=["cafes"])


@router.get("", response_model=List[CafeListItem])
async def list_cafes(catalog: MenuCatalog = Depends(get_catalog)):
    """
    Активные кафе, без меню.
    """
    return await catalog.list_cafes()


@router.post("", response_model=CafeRead, status_code=201)
async def create_cafe(cafe_in: CafeCreate, catalog: MenuCatalog = Depends(get_catalog)):
    """
    Создаёт кафе. Обязательны name и ownerEmail.
    """
    return await catalog.create_cafe(cafe_in.model_dump())


@router.get("/{cafe_id}", response_model=CafeRead)
async def get_cafe(
    cafe_id: str = Path(..., description="ID кафе"),
    catalog: MenuCatalog = Depends(get_catalog),
):
    return await catalog.get_cafe(cafe_id)


@router.put("/{cafe_id}", response_model=CafeRead)
async def update_cafe(cafe_id: str, cafe_in: CafeUpdate, catalog: MenuCatalog = Depends(get_catalog)):
    """
    Частичное обновление кафе.
    Поддерживаемые поля: name, ownerEmail, address, phone, isActive.
    """
    return await catalog.update_cafe(cafe_id, cafe_in.model_dump(exclude_unset=True))


@router.delete("/{cafe_id}", status_code=204)
async def delete_cafe(cafe_id: str, catalog: MenuCatalog = Depends(get_catalog)):
    """
    Мягкое удаление: кафе помечается неактивным.
    """
    await catalog.deactivate_cafe(cafe_id)
    return Response(status_code=204)
