# -*- coding: utf-8 -*-
"""
Recipe bot prompt building

The assistant itself runs on the generative-language API; this module only
assembles the instruction text and request body the watch sends, and decodes
the text part of the reply.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from .models import RemainingGoals


def meal_for_time(now: datetime) -> str:
    if now.hour < 11:
        return "breakfast"
    if now.hour < 16:
        return "lunch"
    return "dinner"


def build_recipe_prompt(remaining: RemainingGoals, now: Optional[datetime] = None) -> str:
    """Instruction text for the recipe bot, with today's remaining macros filled in."""
    now = now or datetime.now()
    meal = meal_for_time(now)
    return (
        "You are a helpful AI recipe bot for a fitness app called MyFitPlate. "
        "Provide healthy, easy-to-make recipes based on the user's request. "
        'Always use the word "recipe" when you provide one. '
        "List ingredients and instructions and keep the tone friendly and encouraging. "
        "If the user asks for something unhealthy, suggest a healthier alternative.\n"
        "\n"
        "The user has the following remaining nutritional goals for the day:\n"
        f"- Calories: {int(remaining.calories_kcal)} kcal\n"
        f"- Protein: {int(remaining.protein_g)} g\n"
        f"- Fats: {int(remaining.fat_g)} g\n"
        f"- Carbs: {int(remaining.carbs_g)} g\n"
        "\n"
        "If the user gives a calorie target, meet it as closely as possible. "
        'Recognize targets such as "1k calorie recipe" (1000 calories), "500 calorie meal" '
        'or "a recipe for 1200 calories". '
        "Reach the target by adjusting serving sizes, increasing ingredient quantities "
        "or adding calorie-dense ingredients such as nuts, oils, peanut butter or avocado.\n"
        "\n"
        "If the target is well above the base recipe, compute the base recipe's total calories, "
        "derive a scaling factor (target calories / base calories) and multiply every ingredient "
        "quantity by it. For example a 1500 calorie base and a 2400 calorie target give a factor "
        "of 2400 / 1500 = 1.6.\n"
        "\n"
        "If the target exceeds the remaining calories, add a note saying the recipe goes over "
        "today's remaining goals, and still provide it. Without a target, suggest a recipe that "
        "fits the remaining goals as closely as possible.\n"
        "\n"
        "Include a note explaining how you interpreted the calorie target "
        "(e.g. \"Interpreted calorie target: 1000 calories from '1k calorie recipe'\").\n"
        "\n"
        f"If the user does not name a meal, suggest one suitable for {meal} "
        f"(local time {now.strftime('%H:%M')}). "
        "End the recipe with a nutritional breakdown in exactly this format, one value per line:\n"
        "Nutritional Breakdown:\n"
        "Calories: X kcal\n"
        "Protein: Y g\n"
        "Fats: Z g\n"
        "Carbs: W g\n"
        "Replace X, Y, Z and W with numbers. Add nothing after the units."
    )


def build_generate_content_body(
    prompt: str,
    user_text: str,
    temperature: Optional[float] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "contents": [
            {
                "parts": [
                    {"text": prompt},
                    {"text": user_text},
                ]
            }
        ]
    }
    if temperature is not None:
        body["generationConfig"] = {"temperature": temperature}
    return body


def extract_reply_text(payload: Any) -> Optional[str]:
    """First text part of the first candidate in a generateContent response."""
    if not isinstance(payload, dict):
        return None
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None
    first = candidates[0]
    content = first.get("content") if isinstance(first, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts:
        return None
    text = parts[0].get("text") if isinstance(parts[0], dict) else None
    return text if isinstance(text, str) else None
