"""Tests for order status polling."""

import asyncio

from qr_cafe.services.tracking import OrderStatusPoller


async def test_poll_reports_new_and_changed_orders(manager, tea_line):
    first = await manager.create_order("cafe-1", [tea_line], "A", "1")
    poller = OrderStatusPoller(lambda: manager.get_orders_for_cafe("cafe-1"))

    assert [o.id for o in await poller.poll_once()] == [first.id]
    assert await poller.poll_once() == []

    await manager.advance_status(first.id, "preparing")
    second = await manager.create_order("cafe-1", [tea_line], "B", "2")
    changed = await poller.poll_once()
    assert {o.id for o in changed} == {first.id, second.id}

    await manager.set_payment_status(second.id, "completed")
    assert [o.id for o in await poller.poll_once()] == [second.id]


async def test_run_until_stopped(manager, tea_line):
    await manager.create_order("cafe-1", [tea_line], "A", "1")
    stop = asyncio.Event()
    seen = []

    async def on_change(orders):
        seen.extend(orders)
        stop.set()

    poller = OrderStatusPoller(lambda: manager.get_orders_for_cafe("cafe-1"), interval=0.01, on_change=on_change)
    await asyncio.wait_for(poller.run(stop), timeout=2)
    assert len(seen) == 1


async def test_fetch_failure_does_not_stop_polling():
    calls = []
    stop = asyncio.Event()

    async def flaky():
        calls.append(1)
        if len(calls) == 1:
            raise ConnectionError("backend down")
        stop.set()
        return []

    await asyncio.wait_for(OrderStatusPoller(flaky, interval=0.01).run(stop), timeout=2)
    assert len(calls) == 2


async def test_failing_handler_does_not_stop_polling(manager, tea_line):
    first = await manager.create_order("cafe-1", [tea_line], "A", "1")
    stop = asyncio.Event()
    batches = []

    async def on_change(orders):
        batches.append([o.id for o in orders])
        if len(batches) == 1:
            await manager.advance_status(first.id, "ready")
            raise RuntimeError("display is offline")
        stop.set()

    poller = OrderStatusPoller(lambda: manager.get_orders_for_cafe("cafe-1"), interval=0.01, on_change=on_change)
    await asyncio.wait_for(poller.run(stop), timeout=2)
    assert batches == [[first.id], [first.id]]
