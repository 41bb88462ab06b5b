# -*- coding: utf-8 -*-

from __future__ import annotations

import threading
import unittest

from pydantic import ValidationError

from watchplate.sync.models import WIRE_KEYS, NutritionPatch, NutritionState
from watchplate.sync.store import NutritionStore


class TestNutritionPatch(unittest.TestCase):
    def test_wire_keys_cover_all_fields(self) -> None:
        self.assertEqual(
            sorted(WIRE_KEYS.values()),
            sorted([
                "goalCal", "userCal", "userProt", "totalProt", "userCarb", "totalCarb",
                "userFat", "totalFat", "userWeight", "goalWeight", "currWater", "goalWater",
            ]),
        )

    def test_from_message_maps_wire_keys(self) -> None:
        patch = NutritionPatch.from_message({"goalCal": 2000.0, "currWater": 24, "text": "hello"})
        self.assertEqual(patch.goal_calories, 2000.0)
        self.assertEqual(patch.current_water, 24.0)
        self.assertIsInstance(patch.current_water, float)
        self.assertEqual(patch.present_keys(), ["goalCal", "currWater"])
        self.assertIsNone(patch.consumed_calories)

    def test_wrong_types_are_skipped(self) -> None:
        patch = NutritionPatch.from_message({
            "userCal": "500",
            "userProt": None,
            "totalProt": True,
            "userFat": [1, 2],
            "totalFat": 70.0,
        })
        self.assertEqual(patch.present_fields(), ["total_fat"])

    def test_negative_values_are_kept(self) -> None:
        with self.assertLogs("watchplate.sync.models", level="WARNING"):
            patch = NutritionPatch.from_message({"userCal": -120.0})
        self.assertEqual(patch.consumed_calories, -120.0)

    def test_non_finite_values_are_skipped(self) -> None:
        patch = NutritionPatch.from_message({
            "goalCal": float("inf"),
            "userCal": float("nan"),
            "totalFat": float("-inf"),
            "userProt": 5,
        })
        self.assertEqual(patch.present_fields(), ["consumed_protein"])

    def test_non_finite_rejected_by_models(self) -> None:
        with self.assertRaises(ValidationError):
            NutritionPatch(goal_calories=float("inf"))
        with self.assertRaises(ValidationError):
            NutritionState(goalCal=float("nan"))

    def test_field_names_are_accepted(self) -> None:
        patch = NutritionPatch.from_message({"goal_water": 64.0})
        self.assertEqual(patch.goal_water, 64.0)

    def test_empty_message(self) -> None:
        self.assertTrue(NutritionPatch.from_message({}).is_empty)
        self.assertTrue(NutritionPatch.from_message({"unknown": 1.0}).is_empty)


class TestNutritionStore(unittest.TestCase):
    def test_initial_state_is_zero(self) -> None:
        state = NutritionStore().snapshot()
        for name in WIRE_KEYS:
            self.assertEqual(getattr(state, name), 0.0)

    def test_merge_sets_present_fields_only(self) -> None:
        store = NutritionStore()
        state = store.merge({"goalCal": 2000.0, "userCal": 500.0})
        self.assertEqual(state.goal_calories, 2000.0)
        self.assertEqual(state.consumed_calories, 500.0)
        for name in WIRE_KEYS:
            if name not in {"goal_calories", "consumed_calories"}:
                self.assertEqual(getattr(state, name), 0.0)

    def test_partial_merge_never_resets(self) -> None:
        store = NutritionStore()
        store.merge({"goalCal": 2000.0, "totalProt": 150.0, "userWeight": 182.5})
        state = store.merge({"userProt": 40.0})
        self.assertEqual(state.goal_calories, 2000.0)
        self.assertEqual(state.total_protein, 150.0)
        self.assertEqual(state.user_weight, 182.5)
        self.assertEqual(state.consumed_protein, 40.0)

    def test_empty_merge_is_identity(self) -> None:
        store = NutritionStore()
        before = store.merge({"goalCal": 1800.0, "goalWater": 64.0})
        after = store.merge({})
        self.assertEqual(before, after)

    def test_merge_is_idempotent(self) -> None:
        update = {"userCarb": 120.0, "totalCarb": 250.0, "currWater": 16.0}
        once = NutritionStore().merge(update)
        store = NutritionStore()
        store.merge(update)
        twice = store.merge(update)
        self.assertEqual(once, twice)

    def test_bad_value_keeps_prior_value(self) -> None:
        store = NutritionStore()
        store.merge({"userFat": 30.0})
        state = store.merge({"userFat": "lots", "totalFat": 70.0})
        self.assertEqual(state.consumed_fat, 30.0)
        self.assertEqual(state.total_fat, 70.0)

    def test_accepts_patch_objects(self) -> None:
        store = NutritionStore()
        state = store.merge(NutritionPatch(goal_weight=170.0))
        self.assertEqual(state.goal_weight, 170.0)

    def test_listeners_notified_once_per_merge(self) -> None:
        store = NutritionStore()
        seen = []
        store.subscribe(seen.append)
        store.merge({"goalCal": 2000.0})
        store.merge({})
        store.merge({"ignored": 3})
        self.assertEqual(len(seen), 3)
        self.assertEqual(seen[0].goal_calories, 2000.0)
        self.assertEqual(store.merge_count, 3)

    def test_unsubscribe(self) -> None:
        store = NutritionStore()
        seen = []
        unsubscribe = store.subscribe(seen.append)
        store.merge({"goalCal": 1.0})
        unsubscribe()
        store.merge({"goalCal": 2.0})
        self.assertEqual(len(seen), 1)

    def test_failing_listener_does_not_block_others(self) -> None:
        store = NutritionStore()
        seen = []

        def _boom(state: NutritionState) -> None:
            raise RuntimeError("listener failed")

        store.subscribe(_boom)
        store.subscribe(seen.append)
        with self.assertLogs("watchplate.sync.store", level="ERROR"):
            state = store.merge({"goalWater": 80.0})
        self.assertEqual(state.goal_water, 80.0)
        self.assertEqual(len(seen), 1)

    def test_non_finite_value_keeps_prior_value(self) -> None:
        store = NutritionStore()
        store.merge({"goalCal": 2000.0})
        state = store.merge({"goalCal": float("inf"), "userCal": 500.0})
        self.assertEqual(state.goal_calories, 2000.0)
        self.assertEqual(state.consumed_calories, 500.0)

    def test_concurrent_merges_are_serialized(self) -> None:
        store = NutritionStore()
        notified = []
        store.subscribe(notified.append)
        fields = list(WIRE_KEYS.items())
        barrier = threading.Barrier(len(fields))

        def _worker(index: int, key: str) -> None:
            barrier.wait()
            for _ in range(50):
                store.merge({key: float(index + 1)})

        threads = [
            threading.Thread(target=_worker, args=(i, key)) for i, (_, key) in enumerate(fields)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        state = store.snapshot()
        for i, (name, _) in enumerate(fields):
            self.assertEqual(getattr(state, name), float(i + 1))
        self.assertEqual(store.merge_count, len(fields) * 50)
        self.assertEqual(len(notified), len(fields) * 50)

    def test_snapshot_is_a_copy(self) -> None:
        store = NutritionStore()
        snap = store.snapshot()
        store.merge({"goalCal": 2000.0})
        self.assertEqual(snap.goal_calories, 0.0)

    def test_initial_state_argument(self) -> None:
        store = NutritionStore(NutritionState(goal_calories=2200.0))
        self.assertEqual(store.snapshot().goal_calories, 2200.0)


if __name__ == "__main__":
    unittest.main()
