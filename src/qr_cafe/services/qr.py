import base64
import io

import qrcode

from ..exceptions import ValidationError


def menu_url(cafe_id: str, base_url: str) -> str:
    if not cafe_id or not cafe_id.strip():
        raise ValidationError("Cafe ID is required")
    return f"{base_url.rstrip('/')}/menu/{cafe_id.strip()}"


def render_png(data: str, box_size: int = 10, border: int = 2) -> bytes:
    qr = qrcode.QRCode(box_size=box_size, border=border)
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def render_data_url(data: str, box_size: int = 10, border: int = 2) -> str:
    """PNG в виде data URL — можно сразу отдать в <img src>."""
    png = render_png(data, box_size=box_size, border=border)
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")
