"""Tests for the store backends and backend selection."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy import update

from qr_cafe.exceptions import StoreFailure, ValidationError
from qr_cafe.models import Order
from qr_cafe.models.order import OrderStatusEnum, PaymentMethodEnum, PaymentStatusEnum
from qr_cafe.store import build_stores, seed_sample_data

from .conftest import make_settings


def _order_data(cafe_id="cafe-1"):
    return {
        "cafe_id": cafe_id,
        "items": [{"menu_item_id": "tea", "name": "Tea", "price": Decimal("50.00"), "quantity": 2}],
        "total_amount": Decimal("100.00"),
        "customer_name": "X",
        "table_number": "5",
        "payment_method": PaymentMethodEnum.cash,
        "status": OrderStatusEnum.pending,
        "payment_status": PaymentStatusEnum.pending,
    }


class TestOrderStore:
    async def test_roundtrip(self, order_store):
        created = await order_store.create_order(_order_data())
        fetched = await order_store.get_order(created.id)
        assert fetched.id == created.id
        assert fetched.total_amount == Decimal("100.00")
        assert fetched.items[0].quantity == 2

    async def test_missing(self, order_store):
        assert await order_store.get_order("missing") is None
        assert await order_store.update_order("missing", lambda order: {"status": OrderStatusEnum.ready}) is None

    async def test_returned_records_are_copies(self, order_store):
        created = await order_store.create_order(_order_data())
        created.items[0].quantity = 99
        assert (await order_store.get_order(created.id)).items[0].quantity == 2

    async def test_update_applies_changes(self, order_store):
        created = await order_store.create_order(_order_data())
        updated = await order_store.update_order(created.id, lambda order: {"status": OrderStatusEnum.ready})
        assert updated.status == OrderStatusEnum.ready
        assert (await order_store.get_order(created.id)).status == OrderStatusEnum.ready

    async def test_failed_mutation_leaves_record(self, order_store):
        created = await order_store.create_order(_order_data())

        def reject(order):
            raise ValidationError("nope")

        with pytest.raises(ValidationError):
            await order_store.update_order(created.id, reject)
        assert (await order_store.get_order(created.id)).status == OrderStatusEnum.pending


    async def test_list_breaks_created_at_ties_by_insertion(self, backend, order_store, session_factory, monkeypatch):
        same_instant = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
        if backend == "memory":
            monkeypatch.setattr("qr_cafe.store.memory.utcnow", lambda: same_instant)

        created = [(await order_store.create_order(_order_data())).id for _ in range(4)]

        if backend == "sql":
            async with session_factory() as db:
                await db.execute(update(Order).values(created_at=same_instant))
                await db.commit()

        listed = [order.id for order in await order_store.list_orders("cafe-1")]
        assert listed == list(reversed(created))

class TestCafeStore:
    async def test_list_skips_inactive(self, cafe_store):
        active = await cafe_store.create_cafe({"name": "A", "owner_email": "a@b.com"})
        hidden = await cafe_store.create_cafe({"name": "B", "owner_email": "b@b.com"})
        await cafe_store.update_cafe(hidden.id, {"is_active": False})

        assert [c.id for c in await cafe_store.list_cafes()] == [active.id]
        assert len(await cafe_store.list_cafes(active_only=False)) == 2

    async def test_menu_item_scoped_to_cafe(self, cafe_store):
        first = await cafe_store.create_cafe({"name": "A", "owner_email": "a@b.com"})
        second = await cafe_store.create_cafe({"name": "B", "owner_email": "b@b.com"})
        item = await cafe_store.add_menu_item(
            first.id, {"name": "Tea", "price": Decimal("5.00"), "description": "", "category": "Food", "available": True}
        )
        assert await cafe_store.update_menu_item(second.id, item.id, {"name": "x"}) is None
        assert await cafe_store.delete_menu_item(second.id, item.id) is False

    async def test_seed_only_into_empty_store(self, cafe_store):
        assert await seed_sample_data(cafe_store) is True
        assert await seed_sample_data(cafe_store) is False
        cafes = await cafe_store.list_cafes()
        assert len(cafes) == 1
        assert [i.name for i in cafes[0].menu] == ["Cappuccino", "Margherita Pizza", "Chocolate Cake"]


class TestBuildStores:
    async def test_memory_backend(self):
        stores = await build_stores(make_settings(STORE_BACKEND="memory"))
        assert stores.backend == "memory"
        assert stores.fallback is False

    async def test_sql_backend(self):
        stores = await build_stores(make_settings(STORE_BACKEND="sql"))
        try:
            assert stores.backend == "sql"
            cafe = await stores.cafes.create_cafe({"name": "A", "owner_email": "a@b.com"})
            assert (await stores.cafes.get_cafe(cafe.id)).name == "A"
        finally:
            await stores.close()

    async def test_unreachable_database_falls_back_to_memory(self, tmp_path):
        url = f"sqlite+aiosqlite:///{tmp_path}/missing/dir/qr_cafe.db"
        stores = await build_stores(make_settings(STORE_BACKEND="sql", DATABASE_URL=url))
        assert stores.backend == "memory"
        assert stores.fallback is True
        cafes = await stores.cafes.list_cafes()
        assert cafes[0].name == "Sample Café"

    async def test_unreachable_database_without_fallback(self, tmp_path):
        url = f"sqlite+aiosqlite:///{tmp_path}/missing/dir/qr_cafe.db"
        with pytest.raises(StoreFailure):
            await build_stores(
                make_settings(STORE_BACKEND="sql", DATABASE_URL=url, STORE_FALLBACK_TO_MEMORY=False)
            )

    async def test_seed_sample_data(self):
        stores = await build_stores(make_settings(SEED_SAMPLE_DATA=True))
        assert len(await stores.cafes.list_cafes()) == 1
