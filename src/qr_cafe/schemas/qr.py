from typing import Optional

from .base import CamelModel


class QrGenerateRequest(CamelModel):
    cafe_id: Optional[str] = None
    base_url: Optional[str] = None


class QrGenerateResponse(CamelModel):
    url: str
    qr_image_data: str
