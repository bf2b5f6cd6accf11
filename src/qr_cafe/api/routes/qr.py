from fastapi import APIRouter, Depends

from ...config import Settings
from ...schemas.qr import QrGenerateRequest, QrGenerateResponse
from ...services import qr
from ..deps import get_settings

router = APIRouter(prefix="/qr", tags=["qr"])


@router.post("/generate", response_model=QrGenerateResponse)
async def generate_qr(body: QrGenerateRequest, settings: Settings = Depends(get_settings)):
    """
    QR-код со ссылкой на меню кафе. Состояния нет.
    """
    url = qr.menu_url(body.cafe_id or "", body.base_url or settings.MENU_BASE_URL)
    image = qr.render_data_url(url, box_size=settings.QR_BOX_SIZE, border=settings.QR_BORDER)
    return QrGenerateResponse(url=url, qr_image_data=image)
