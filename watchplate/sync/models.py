# -*- coding: utf-8 -*-
"""Paired-device sync: Pydantic models."""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class NutritionState(BaseModel):
    """Canonical nutrition/weight/hydration record held on the watch side.

    Field aliases are the keys the phone application sends.
    """

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    goal_calories: float = Field(0.0, alias="goalCal", description="kcal")
    consumed_calories: float = Field(0.0, alias="userCal", description="kcal")
    consumed_protein: float = Field(0.0, alias="userProt", description="g")
    total_protein: float = Field(0.0, alias="totalProt", description="g")
    consumed_carbs: float = Field(0.0, alias="userCarb", description="g")
    total_carbs: float = Field(0.0, alias="totalCarb", description="g")
    consumed_fat: float = Field(0.0, alias="userFat", description="g")
    total_fat: float = Field(0.0, alias="totalFat", description="g")
    user_weight: float = Field(0.0, alias="userWeight", description="lb")
    goal_weight: float = Field(0.0, alias="goalWeight", description="lb")
    current_water: float = Field(0.0, alias="currWater", description="oz")
    goal_water: float = Field(0.0, alias="goalWater", description="oz")


# field name -> wire key, in declaration order
WIRE_KEYS: Dict[str, str] = {
    name: str(info.alias) for name, info in NutritionState.model_fields.items()
}
_FIELD_BY_KEY: Dict[str, str] = {key: name for name, key in WIRE_KEYS.items()}
_FIELD_BY_KEY.update({name: name for name in WIRE_KEYS})


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None
    return None


class NutritionPatch(BaseModel):
    """Sparse update: ``None`` means the field was not sent."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, allow_inf_nan=False)

    goal_calories: Optional[float] = Field(None, alias="goalCal")
    consumed_calories: Optional[float] = Field(None, alias="userCal")
    consumed_protein: Optional[float] = Field(None, alias="userProt")
    total_protein: Optional[float] = Field(None, alias="totalProt")
    consumed_carbs: Optional[float] = Field(None, alias="userCarb")
    total_carbs: Optional[float] = Field(None, alias="totalCarb")
    consumed_fat: Optional[float] = Field(None, alias="userFat")
    total_fat: Optional[float] = Field(None, alias="totalFat")
    user_weight: Optional[float] = Field(None, alias="userWeight")
    goal_weight: Optional[float] = Field(None, alias="goalWeight")
    current_water: Optional[float] = Field(None, alias="currWater")
    goal_water: Optional[float] = Field(None, alias="goalWater")

    @classmethod
    def from_message(cls, message: Mapping[str, Any]) -> "NutritionPatch":
        """Build a patch from a raw transport mapping.

        Unrecognized keys are ignored. A recognized key carrying anything other
        than a finite real number is skipped so the rest of the message still
        applies. Values are taken verbatim, negatives included.
        """
        values: Dict[str, float] = {}
        for key, raw in message.items():
            name = _FIELD_BY_KEY.get(key) if isinstance(key, str) else None
            if name is None:
                logger.debug("Ignoring unrecognized sync key: %r", key)
                continue
            value = _as_number(raw)
            if value is None:
                logger.debug("Skipping %s: unexpected value %r", key, raw)
                continue
            if value < 0:
                logger.warning("Accepting negative value for %s: %s", key, value)
            values[name] = value
        return cls(**values)

    def present_fields(self) -> List[str]:
        return [name for name in WIRE_KEYS if getattr(self, name) is not None]

    def present_keys(self) -> List[str]:
        return [WIRE_KEYS[name] for name in self.present_fields()]

    def changes(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in self.present_fields()}

    @property
    def is_empty(self) -> bool:
        return not self.present_fields()


class SyncAck(BaseModel):
    """Reply returned to the phone for a one-shot message."""

    status: str = Field("ok", description="ok")
    response: str
    applied: List[str] = Field(default_factory=list, description="Wire keys applied by this merge")
    state: Dict[str, float]


class MacroProgress(BaseModel):
    consumed: float
    total: float
    remaining: float
    percentage: float = Field(..., ge=0, le=100)
    percentage_label: int = Field(..., ge=0, le=100)
    arc_fraction: float = Field(..., ge=0, le=0.8)


class WeightProgress(BaseModel):
    current: float
    goal: float
    remaining: float


class NutritionSummary(BaseModel):
    calorie_label: str
    calories: MacroProgress
    protein: MacroProgress
    carbs: MacroProgress
    fat: MacroProgress
    water: MacroProgress
    weight: WeightProgress
