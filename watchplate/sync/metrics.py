# -*- coding: utf-8 -*-
"""
Derived progress metrics

Percentages, gauge arc fractions and remaining amounts computed from the
synced state for presentation.
"""

from __future__ import annotations

import math

from .models import MacroProgress, NutritionState, NutritionSummary, WeightProgress

# Gauge arcs stop at 80% of a full circle.
ARC_CEILING = 0.8


def _ratio(consumed: float, total: float) -> float:
    if total <= 0:
        return 0.0
    ratio = consumed / total
    if math.isnan(ratio):
        return 0.0
    return max(ratio, 0.0)


def derived_percentage(consumed: float, total: float) -> float:
    """Progress in percent, clamped to [0, 100]; 0 when there is no total."""
    return min(_ratio(consumed, total) * 100, 100.0)


def derived_arc_fraction(consumed: float, total: float) -> float:
    """Gauge fill in [0, ARC_CEILING]; 0 when there is no total."""
    return min(_ratio(consumed, total), 1.0) * ARC_CEILING


def remaining(goal: float, consumed: float) -> float:
    """Amount left before the goal. Negative once the goal is exceeded."""
    return goal - consumed


def _macro(consumed: float, total: float) -> MacroProgress:
    percentage = derived_percentage(consumed, total)
    return MacroProgress(
        consumed=consumed,
        total=total,
        remaining=remaining(total, consumed),
        percentage=percentage,
        percentage_label=int(percentage),
        arc_fraction=derived_arc_fraction(consumed, total),
    )


def _label_int(value: float) -> int:
    return int(value) if math.isfinite(value) else 0


def build_summary(state: NutritionState) -> NutritionSummary:
    """Assemble everything the summary, weight and water screens display."""
    return NutritionSummary(
        calorie_label=f"{_label_int(state.consumed_calories)} / {_label_int(state.goal_calories)} cals",
        calories=_macro(state.consumed_calories, state.goal_calories),
        protein=_macro(state.consumed_protein, state.total_protein),
        carbs=_macro(state.consumed_carbs, state.total_carbs),
        fat=_macro(state.consumed_fat, state.total_fat),
        water=_macro(state.current_water, state.goal_water),
        weight=WeightProgress(
            current=state.user_weight,
            goal=state.goal_weight,
            remaining=remaining(state.goal_weight, state.user_weight),
        ),
    )
