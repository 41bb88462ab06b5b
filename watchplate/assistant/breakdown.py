# -*- coding: utf-8 -*-
"""Parse the "Nutritional Breakdown" block out of a recipe bot reply."""

from __future__ import annotations

import re
from typing import Dict, Optional

from .models import NutritionBreakdown

_HEADER_RE = re.compile(r"nutritional\s+breakdown\s*:?", re.IGNORECASE)
_LINE_RE = re.compile(
    r"^\s*[-*]?\s*\**\s*(?P<label>[A-Za-z]+)\s*\**\s*:\s*\**\s*(?P<value>\d[\d,]*(?:\.\d+)?)",
    re.MULTILINE,
)

_KEY_MAP = {
    "calories": "calories_kcal",
    "calorie": "calories_kcal",
    "kcal": "calories_kcal",
    "energy": "calories_kcal",
    "protein": "protein_g",
    "fats": "fat_g",
    "fat": "fat_g",
    "carbs": "carbs_g",
    "carb": "carbs_g",
    "carbohydrates": "carbs_g",
}


def _to_float(value: str) -> Optional[float]:
    try:
        return float(value.replace(",", ""))
    except ValueError:
        return None


def parse_breakdown(text: Optional[str]) -> Optional[NutritionBreakdown]:
    """Return the macros listed after the last breakdown header, or None."""
    if not text:
        return None
    headers = list(_HEADER_RE.finditer(text))
    if not headers:
        return None
    block = text[headers[-1].end():]

    values: Dict[str, float] = {}
    for match in _LINE_RE.finditer(block):
        key = _KEY_MAP.get(match.group("label").lower())
        if key is None or key in values:
            continue
        number = _to_float(match.group("value"))
        if number is not None:
            values[key] = number
    if not values:
        return None
    return NutritionBreakdown(**values)
