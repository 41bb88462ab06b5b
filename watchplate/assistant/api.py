# -*- coding: utf-8 -*-
"""Recipe assistant: API endpoints"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..config import settings
from ..sync.api import get_store
from ..sync.store import NutritionStore
from .breakdown import parse_breakdown
from .models import (
    AssistantRequest,
    AssistantRequestResponse,
    BreakdownRequest,
    BreakdownResponse,
    RemainingGoals,
)
from .prompt import build_generate_content_body, build_recipe_prompt, extract_reply_text

router = APIRouter(prefix="/api/assistant", tags=["Assistant"])


@router.post("/request", response_model=AssistantRequestResponse, summary="Build the recipe bot request body")
async def build_request(request: AssistantRequest, store: NutritionStore = Depends(get_store)):
    text = request.text.strip()
    if not text:
        raise HTTPException(status_code=400, detail="Empty request text")
    goals = RemainingGoals.from_state(store.snapshot())
    prompt = build_recipe_prompt(goals)
    return AssistantRequestResponse(
        endpoint=settings.gemini_endpoint_url,
        body=build_generate_content_body(prompt, text, temperature=settings.gemini_temperature),
        remaining=goals,
    )


@router.post("/breakdown", response_model=BreakdownResponse, summary="Parse the nutritional breakdown of a reply")
async def breakdown(request: BreakdownRequest, store: NutritionStore = Depends(get_store)):
    text = request.text
    if text is None and request.reply is not None:
        text = extract_reply_text(request.reply)
    if text is None:
        raise HTTPException(status_code=400, detail="No reply text")
    goals = RemainingGoals.from_state(store.snapshot())
    parsed = parse_breakdown(text)
    exceeds = bool(
        parsed is not None
        and parsed.calories_kcal is not None
        and parsed.calories_kcal > goals.calories_kcal
    )
    return BreakdownResponse(
        found=parsed is not None,
        breakdown=parsed,
        exceeds_remaining=exceeds,
        remaining=goals,
    )
