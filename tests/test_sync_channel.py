# -*- coding: utf-8 -*-

from __future__ import annotations

import asyncio
import unittest

from watchplate.sync.channel import SyncChannel
from watchplate.sync.models import NutritionPatch
from watchplate.sync.store import NutritionStore


class TestSyncChannel(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.store = NutritionStore()
        self.channel = SyncChannel(self.store, maxsize=4)
        self.channel.start()

    async def asyncTearDown(self) -> None:
        await self.channel.stop()

    async def test_submit_returns_merged_state(self) -> None:
        state = await self.channel.submit({"goalCal": 2000.0, "userCal": 500.0})
        self.assertEqual(state.goal_calories, 2000.0)
        self.assertEqual(state.consumed_calories, 500.0)
        self.assertEqual(self.store.snapshot(), state)

    async def test_preserves_delivery_order(self) -> None:
        seen = []
        self.store.subscribe(lambda s: seen.append(s.consumed_calories))
        updates = [NutritionPatch(consumed_calories=float(i)) for i in range(20)]
        await asyncio.gather(*(self.channel.submit(u) for u in updates))
        self.assertEqual(seen, [float(i) for i in range(20)])
        self.assertEqual(self.store.snapshot().consumed_calories, 19.0)

    async def test_empty_update_still_notifies(self) -> None:
        seen = []
        self.store.subscribe(seen.append)
        await self.channel.submit({})
        self.assertEqual(len(seen), 1)

    async def test_start_is_idempotent(self) -> None:
        self.channel.start()
        self.assertTrue(self.channel.running)
        state = await self.channel.submit({"goalWater": 64.0})
        self.assertEqual(state.goal_water, 64.0)

    async def test_stop_then_submit_fails(self) -> None:
        await self.channel.stop()
        self.assertFalse(self.channel.running)
        with self.assertRaises(RuntimeError):
            await self.channel.submit({"goalCal": 1.0})

    async def test_restart_after_stop(self) -> None:
        await self.channel.submit({"goalCal": 1800.0})
        await self.channel.stop()
        self.channel.start()
        self.assertTrue(self.channel.running)
        state = await self.channel.submit({"userCal": 300.0})
        self.assertEqual(state.goal_calories, 1800.0)
        self.assertEqual(state.consumed_calories, 300.0)

    async def test_listener_error_does_not_fail_submit(self) -> None:
        def _boom(state) -> None:
            raise ValueError("bad listener")

        self.store.subscribe(_boom)
        with self.assertLogs("watchplate.sync.store", level="ERROR"):
            state = await self.channel.submit({"totalFat": 70.0})
        self.assertEqual(state.total_fat, 70.0)


if __name__ == "__main__":
    unittest.main()
