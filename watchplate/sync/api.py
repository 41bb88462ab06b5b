# -*- coding: utf-8 -*-
"""Paired-device sync: API endpoints"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request

from .channel import SyncChannel
from .metrics import build_summary, derived_arc_fraction, derived_percentage, remaining
from .models import NutritionPatch, NutritionState, NutritionSummary, SyncAck
from .storage import save_context
from .store import NutritionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sync", tags=["Sync"])


def get_store(request: Request) -> NutritionStore:
    return request.app.state.store


def get_channel(request: Request) -> SyncChannel:
    return request.app.state.channel


async def apply_update(channel: SyncChannel, patch: NutritionPatch) -> NutritionState:
    """Merge through the channel, or straight into the store when it is not running."""
    if channel.running:
        return await channel.submit(patch)
    return channel.store.merge(patch)


def _state_dict(state: NutritionState) -> Dict[str, float]:
    return state.model_dump(by_alias=True)


def _ack_text(state: NutritionState) -> str:
    return (
        f"Received on watch userProt {state.consumed_protein}, "
        f"userCarb {state.consumed_carbs}, "
        f"userFat {state.consumed_fat}, "
        f"totalProt {state.total_protein}, "
        f"totalCarb {state.total_carbs}, "
        f"totalFat {state.total_fat}"
    )


@router.post("/message", response_model=SyncAck, summary="Apply a one-shot message from the phone")
async def receive_message(
    message: Dict[str, Any] = Body(...),
    channel: SyncChannel = Depends(get_channel),
):
    patch = NutritionPatch.from_message(message)
    state = await apply_update(channel, patch)
    return SyncAck(
        status="ok",
        response=_ack_text(state),
        applied=patch.present_keys(),
        state=_state_dict(state),
    )


@router.put("/context", response_model=SyncAck, summary="Apply and persist an application context snapshot")
async def receive_context(
    request: Request,
    context: Dict[str, Any] = Body(...),
    channel: SyncChannel = Depends(get_channel),
):
    patch = NutritionPatch.from_message(context)
    state = await apply_update(channel, patch)
    try:
        save_context(context, data_root=request.app.state.data_root)
    except (OSError, TypeError, ValueError) as exc:
        logger.error("Failed to persist context snapshot: %s", exc)
        raise HTTPException(status_code=500, detail=f"Failed to save context: {exc}") from exc
    return SyncAck(
        status="ok",
        response="Context applied",
        applied=patch.present_keys(),
        state=_state_dict(state),
    )


@router.get("/state", summary="Current synced state")
async def get_state(store: NutritionStore = Depends(get_store)):
    return _state_dict(store.snapshot())


@router.get("/summary", response_model=NutritionSummary, summary="Derived progress for display")
async def get_summary(store: NutritionStore = Depends(get_store)):
    return build_summary(store.snapshot())


@router.get("/metrics/percentage", summary="Clamped progress percentage")
async def percentage(
    consumed: float = Query(..., allow_inf_nan=False),
    total: float = Query(..., allow_inf_nan=False),
):
    return {"consumed": consumed, "total": total, "percentage": derived_percentage(consumed, total)}


@router.get("/metrics/arc", summary="Gauge arc fraction")
async def arc_fraction(
    consumed: float = Query(..., allow_inf_nan=False),
    total: float = Query(..., allow_inf_nan=False),
):
    return {"consumed": consumed, "total": total, "arc_fraction": derived_arc_fraction(consumed, total)}


@router.get("/metrics/remaining", summary="Remaining amount before the goal")
async def remaining_amount(
    goal: float = Query(..., allow_inf_nan=False),
    consumed: float = Query(..., allow_inf_nan=False),
):
    return {"goal": goal, "consumed": consumed, "remaining": remaining(goal, consumed)}
