# -*- coding: utf-8 -*-
"""Recipe assistant: Pydantic models."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from ..sync.metrics import remaining
from ..sync.models import NutritionState


class RemainingGoals(BaseModel):
    calories_kcal: float = 0.0
    protein_g: float = 0.0
    fat_g: float = 0.0
    carbs_g: float = 0.0

    @classmethod
    def from_state(cls, state: NutritionState) -> "RemainingGoals":
        return cls(
            calories_kcal=remaining(state.goal_calories, state.consumed_calories),
            protein_g=remaining(state.total_protein, state.consumed_protein),
            fat_g=remaining(state.total_fat, state.consumed_fat),
            carbs_g=remaining(state.total_carbs, state.consumed_carbs),
        )


class NutritionBreakdown(BaseModel):
    calories_kcal: Optional[float] = None
    protein_g: Optional[float] = None
    fat_g: Optional[float] = None
    carbs_g: Optional[float] = None


class AssistantRequest(BaseModel):
    text: str = Field(..., max_length=4000, description="Dictated user request")


class AssistantRequestResponse(BaseModel):
    endpoint: str = Field(..., description="generateContent URL, without the API key")
    body: Dict[str, Any]
    remaining: RemainingGoals


class BreakdownRequest(BaseModel):
    text: Optional[str] = Field(None, description="Assistant reply text")
    reply: Optional[Dict[str, Any]] = Field(None, description="Raw generateContent response")


class BreakdownResponse(BaseModel):
    found: bool
    breakdown: Optional[NutritionBreakdown] = None
    exceeds_remaining: bool = False
    remaining: RemainingGoals
