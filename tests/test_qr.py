"""Tests for menu QR codes."""

import base64

import pytest

from qr_cafe.exceptions import ValidationError
from qr_cafe.services import qr

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def test_menu_url():
    assert qr.menu_url("abc", "http://localhost:5173") == "http://localhost:5173/menu/abc"
    assert qr.menu_url("abc", "https://cafe.example/") == "https://cafe.example/menu/abc"


@pytest.mark.parametrize("cafe_id", ["", "   "])
def test_menu_url_requires_cafe(cafe_id):
    with pytest.raises(ValidationError):
        qr.menu_url(cafe_id, "http://localhost:5173")


def test_render_png():
    assert qr.render_png("http://localhost:5173/menu/abc").startswith(PNG_SIGNATURE)


def test_data_url_is_deterministic():
    first = qr.render_data_url("http://localhost:5173/menu/abc")
    second = qr.render_data_url("http://localhost:5173/menu/abc")
    assert first == second
    payload = first.split(",", 1)[1]
    assert base64.b64decode(payload).startswith(PNG_SIGNATURE)
