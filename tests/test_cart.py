"""Tests for the customer cart."""

from decimal import Decimal

import pytest

from qr_cafe.exceptions import ValidationError
from qr_cafe.schemas.cafe import MenuItemRead
from qr_cafe.services.cart import Cart, cart_key
from qr_cafe.services.local_store import LocalStore


def _item(item_id="tea", name="Tea", price="50", available=True):
    return MenuItemRead(id=item_id, name=name, price=Decimal(price), available=available)


class TestAddItem:
    def test_add_same_item_twice(self):
        cart = Cart("cafe-1")
        cart.add_item(_item())
        cart.add_item(_item())
        assert len(cart.lines) == 1
        assert cart.lines[0].quantity == 2

    def test_add_different_items(self):
        cart = Cart("cafe-1")
        cart.add_item(_item("tea"))
        cart.add_item(_item("coffee", "Coffee", "120"))
        assert [line.menu_item_id for line in cart.lines] == ["tea", "coffee"]

    def test_add_from_mapping(self):
        cart = Cart("cafe-1")
        cart.add_item({"id": "tea", "name": "Tea", "price": 50})
        assert cart.total() == Decimal("50.00")

    def test_unavailable_item_rejected(self):
        cart = Cart("cafe-1")
        with pytest.raises(ValidationError):
            cart.add_item(_item(available=False))
        assert cart.is_empty()

    def test_price_is_snapshotted(self):
        cart = Cart("cafe-1")
        item = _item()
        cart.add_item(item)
        cart.add_item(_item(price="70"))
        assert cart.lines[0].price == Decimal("50.00")


class TestChangeQuantity:
    def test_decrement_below_one_removes_line(self):
        cart = Cart("cafe-1")
        cart.add_item(_item())
        cart.change_quantity("tea", -2)
        assert cart.lines == []

    def test_increment(self):
        cart = Cart("cafe-1")
        cart.add_item(_item())
        line = cart.change_quantity("tea", 3)
        assert line.quantity == 4
        assert cart.item_count() == 4

    def test_unknown_line_is_noop(self):
        cart = Cart("cafe-1")
        cart.add_item(_item())
        assert cart.change_quantity("coffee", -1) is None
        assert cart.item_count() == 1

    def test_add_then_decrement_restores_state(self):
        cart = Cart("cafe-1")
        cart.add_item(_item("coffee", "Coffee", "120"))
        before = cart.lines
        for _ in range(4):
            cart.add_item(_item())
        for _ in range(4):
            cart.change_quantity("tea", -1)
        assert cart.lines == before

    def test_remove_item(self):
        cart = Cart("cafe-1")
        cart.add_item(_item())
        cart.add_item(_item())
        cart.remove_item("tea")
        assert cart.quantity_of("tea") == 0


class TestTotals:
    def test_empty_cart(self):
        cart = Cart("cafe-1")
        assert cart.total() == Decimal("0")
        assert cart.item_count() == 0

    def test_no_float_drift(self):
        cart = Cart("cafe-1")
        for _ in range(10):
            cart.add_item(_item("a", "A", "0.1"))
        cart.add_item(_item("b", "B", "0.2"))
        assert cart.total() == Decimal("1.20")
        assert cart.item_count() == 11


class TestPersistence:
    def test_snapshot_created_on_first_add_and_shared(self):
        storage = LocalStore()
        assert cart_key("cafe-1") not in storage
        Cart("cafe-1", storage).add_item(_item())

        restored = Cart("cafe-1", storage)
        assert restored.quantity_of("tea") == 1
        assert restored.total() == Decimal("50.00")

    def test_carts_scoped_by_cafe(self):
        storage = LocalStore()
        Cart("cafe-1", storage).add_item(_item())
        assert Cart("cafe-2", storage).is_empty()

    def test_empty_cart_drops_snapshot(self):
        storage = LocalStore()
        cart = Cart("cafe-1", storage)
        cart.add_item(_item())
        cart.change_quantity("tea", -1)
        assert cart_key("cafe-1") not in storage

    def test_file_backed(self, tmp_path):
        path = tmp_path / "local.json"
        Cart("cafe-1", LocalStore(path)).add_item(_item())
        assert Cart("cafe-1", LocalStore(path)).quantity_of("tea") == 1


class TestCheckout:
    async def test_checkout_creates_order_and_clears_cart(self, manager):
        storage = LocalStore()
        cart = Cart("cafe-1", storage)
        cart.add_item(_item())
        cart.add_item(_item())
        cart.add_item(_item("coffee", "Coffee", "120"))

        order = await cart.checkout(manager, "X", "5", "upi")

        assert order.total_amount == Decimal("220.00")
        assert cart.is_empty()
        assert cart_key("cafe-1") not in storage
        assert storage.get("orders") == [order.id]

    async def test_failed_checkout_keeps_cart(self, manager):
        cart = Cart("cafe-1")
        cart.add_item(_item())
        with pytest.raises(ValidationError):
            await cart.checkout(manager, "", "5")
        assert cart.quantity_of("tea") == 1

    async def test_empty_cart_cannot_checkout(self, manager):
        with pytest.raises(ValidationError):
            await Cart("cafe-1").checkout(manager, "X", "5")
