# -*- coding: utf-8 -*-
"""Recipe assistant: prompt and request building, reply breakdown parsing."""

from .breakdown import parse_breakdown
from .models import NutritionBreakdown, RemainingGoals
from .prompt import build_generate_content_body, build_recipe_prompt, extract_reply_text

__all__ = [
    'NutritionBreakdown',
    'RemainingGoals',
    'build_generate_content_body',
    'build_recipe_prompt',
    'extract_reply_text',
    'parse_breakdown',
]
